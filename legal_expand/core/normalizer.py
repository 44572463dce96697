"""
Text normalization and context detection for acronym matching.

Pure helpers used by the dictionary index and the matcher:
- Case/punctuation/space folding for flexible comparisons
- Regex escaping for dictionary strings
- Word-character classification (ASCII + Spanish accented letters)
- Heuristic detection of URLs, emails and Markdown code spans

None of these functions keep state; the context checks only look at a
bounded window around the candidate, never at the whole document structure.
"""

from __future__ import annotations

import re
from typing import Optional


# Characters that belong to a "word" for boundary purposes. Dots and spaces
# inside acronyms ("A.E.A.T.", "II. EE.") are deliberately excluded.
WORD_CHARS = frozenset(
    'abcdefghijklmnopqrstuvwxyz'
    'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
    '0123456789'
    'áéíóúñü'
    'ÁÉÍÓÚÑÜ'
)

# Same alphabet as a regex character class, for lookbehind/lookahead guards.
WORD_CHAR_CLASS = '[a-zA-Z0-9áéíóúñüÁÉÍÓÚÑÜ]'

URL_WINDOW = 100
EMAIL_WINDOW = 50

_WHITESPACE_RE = re.compile(r'\s+')
_URL_SCHEME_RE = re.compile(r'https?://\S*$', re.IGNORECASE)
_URL_WWW_RE = re.compile(r'www\.\S*$', re.IGNORECASE)
_URL_DOMAIN_BEFORE_RE = re.compile(r'\S+\.\S+$')
_URL_DOMAIN_AFTER_RE = re.compile(r'^\S+')
_TOKEN_TAIL_RE = re.compile(r'\S*$')
_TOKEN_HEAD_RE = re.compile(r'^\S*')
_EMAIL_RE = re.compile(r'[^\s@]+@[^\s@]+\.[^\s@.]+')
_FENCE = '```'


def normalize(text: str) -> str:
    """
    Fold an acronym for case/punctuation-insensitive comparison.

    Lowercases, removes every ``.`` and every whitespace character.

    Examples:
        "A.E.A.T." -> "aeat"
        "art."     -> "art"
        "II. EE."  -> "iiee"
    """
    if not isinstance(text, str):
        return ""
    return _WHITESPACE_RE.sub('', text.lower().replace('.', ''))


def strip_dots_and_spaces(text: str) -> str:
    """Remove dots and whitespace but keep the original case."""
    return _WHITESPACE_RE.sub('', text.replace('.', ''))


def escape_for_regex(text: str) -> str:
    """Escape every regex metacharacter so ``text`` matches literally."""
    return re.escape(text)


def is_word_char(char: str) -> bool:
    """True for ASCII letters, digits and á é í ó ú ñ ü in either case."""
    return len(char) == 1 and char in WORD_CHARS


def is_word_boundary(text: str, position: int, side: str) -> bool:
    """
    Check for a word boundary next to ``position``.

    Args:
        text: Full text
        position: Offset to check
        side: 'before' inspects ``text[position - 1]``,
              'after' inspects ``text[position]``
    """
    if side == 'before':
        if position <= 0:
            return True
        return not is_word_char(text[position - 1])
    if side == 'after':
        if position >= len(text):
            return True
        return not is_word_char(text[position])
    raise ValueError(f"side must be 'before' or 'after', got {side!r}")


def is_inside_url(text: str, start: int, end: int) -> bool:
    """
    Heuristically decide whether ``text[start:end]`` is part of a URL.

    Looks at up to 100 characters on each side for a scheme, a ``www.``
    prefix, or a ``domain.tld`` run glued to the candidate.
    """
    before = text[max(0, start - URL_WINDOW):start]
    after = text[end:end + URL_WINDOW]

    if _URL_SCHEME_RE.search(before):
        return True
    if _URL_WWW_RE.search(before):
        return True
    # domain.es/SIGLA/path
    if _URL_DOMAIN_BEFORE_RE.search(before) and _URL_DOMAIN_AFTER_RE.match(after):
        return True
    return False


def is_inside_email(text: str, start: int, end: int) -> bool:
    """
    Decide whether the candidate belongs to an email address.

    The whitespace-delimited token around the span (within a 50 character
    window) must contain ``local@domain.tld``.
    """
    before = text[max(0, start - EMAIL_WINDOW):start]
    after = text[end:end + EMAIL_WINDOW]

    head = _TOKEN_TAIL_RE.search(before).group(0)
    tail = _TOKEN_HEAD_RE.match(after).group(0)
    token = head + text[start:end] + tail

    if '@' not in token:
        return False
    return bool(_EMAIL_RE.search(token))


def is_inside_fenced_code_block(text: str, position: int) -> bool:
    """Odd number of ``` fences before ``position`` means inside a block."""
    return text[:position].count(_FENCE) % 2 == 1


def is_inside_inline_code(text: str, position: int) -> bool:
    """
    Odd number of single backticks before ``position`` means inside code.

    Triple-backtick fences are removed first so they are not counted as
    three inline markers.
    """
    before = text[:position].replace(_FENCE, '')
    return before.count('`') % 2 == 1


def special_context(text: str, start: int, end: int) -> Optional[str]:
    """
    Return the protected context containing the span, or None.

    Checked in order: 'url', 'email', 'code-block', 'inline-code'.
    """
    if is_inside_url(text, start, end):
        return 'url'
    if is_inside_email(text, start, end):
        return 'email'
    if is_inside_fenced_code_block(text, start):
        return 'code-block'
    if is_inside_inline_code(text, start):
        return 'inline-code'
    return None


def is_part_of_larger_token(text: str, start: int, end: int) -> bool:
    """True if the span is glued to a word character on either side."""
    before = text[start - 1] if start > 0 else ''
    after = text[end] if end < len(text) else ''
    return is_word_char(before) or is_word_char(after)

"""
CLI interface for legal-expand.

Usage:
    python -m legal_expand expand "<text>" [options]
    python -m legal_expand lookup <SIGLA>
    python -m legal_expand list
    python -m legal_expand stats
    python -m legal_expand build-data --csv siglas.csv --output dictionary.json
    python -m legal_expand validate [--dictionary dictionary.json]
    python -m legal_expand export --format txt|csv|xlsx|pdf --output <path>

Exit codes:
    0  success
    1  acronym not found / invalid dictionary
    2  usage error
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .compiler import compile_csv
from .core.dictionary_loader import DictionaryError, load_dictionary, save_dictionary
from .core.engine import (
    dictionary_stats,
    expand_acronyms,
    expand_acronyms_detailed,
    find_acronym,
    list_acronyms,
)
from .core.index import DictionaryIndex
from .core.matcher import AcronymMatcher
from .formatters import FormatterFactory, StructuredOutput, UnknownFormatError
from .reports import export_csv, export_excel, export_listing, export_pdf
from .validators.validators import validate_dictionary

logger = logging.getLogger(__name__)

EXPORTERS = {
    'txt': export_listing,
    'csv': export_csv,
    'xlsx': export_excel,
    'pdf': export_pdf,
}


def parse_resolutions(values: Optional[List[str]]) -> Dict[str, str]:
    """Turn ``["CE=Constitución Española"]`` into ``{"CE": "Constitución Española"}``."""
    resolutions: Dict[str, str] = {}
    for value in values or []:
        acronym, sep, meaning = value.partition('=')
        if not sep or not acronym.strip() or not meaning.strip():
            raise ValueError(f"Invalid --resolve value {value!r}, expected SIGLA=MEANING")
        resolutions[acronym.strip()] = meaning.strip()
    return resolutions


def _read_text(value: str) -> str:
    if value == '-':
        return sys.stdin.read()
    return value


def _load(path: Optional[str]):
    if path is None:
        return load_dictionary()
    path = Path(path)
    if path.suffix.lower() == '.csv':
        return load_dictionary(csv_path=path)
    return load_dictionary(json_path=path)


def _matcher(path: Optional[str]) -> Optional[AcronymMatcher]:
    if path is None:
        return None
    return AcronymMatcher(index=DictionaryIndex(_load(path)))


def format_diagnostics(output) -> str:
    """Format a DiagnosticOutput for display."""
    stats = output.stats
    lines = [
        "=" * 60,
        "Expansion Diagnostics",
        "=" * 60,
        output.expanded_text,
        "",
        f"Found: {stats.total_acronyms_found}  "
        f"Expanded: {stats.total_expanded}  "
        f"Ambiguous: {stats.ambiguous_not_expanded}",
        "",
        "Expanded:",
        "-" * 40,
    ]
    for acronym in output.acronyms:
        lines.append(f"  [{acronym.start}:{acronym.end}] {acronym.acronym} -> {acronym.expansion}")

    if output.omitted_acronyms:
        lines.extend(["", "Omitted:", "-" * 40])
        for omitted in output.omitted_acronyms:
            line = f"  [{omitted.start}:{omitted.end}] {omitted.acronym}: {omitted.reason}"
            if omitted.details:
                line += f" ({omitted.details})"
            lines.append(line)

    return '\n'.join(lines)


def cmd_expand(args: argparse.Namespace) -> int:
    options = {
        'format': args.format,
        'force_expansion': True if args.force else None,
        'preserve_case': False if args.ignore_case else None,
        'auto_resolve_duplicates': True if args.auto_resolve else None,
        'duplicate_resolution': parse_resolutions(args.resolve) or None,
        'expand_only_first': True if args.only_first else None,
        'exclude': args.exclude,
        'include': args.include,
    }
    text = _read_text(args.text)
    matcher = _matcher(args.dictionary)

    if args.diagnostics:
        output = expand_acronyms_detailed(text, options, matcher=matcher)
        if args.format == 'structured':
            print(output.to_json())
        else:
            print(format_diagnostics(output))
        return 0

    result = expand_acronyms(text, options, matcher=matcher)
    if isinstance(result, StructuredOutput):
        print(result.to_json())
    else:
        print(result)
    return 0


def cmd_lookup(args: argparse.Namespace) -> int:
    result = find_acronym(args.acronym, matcher=_matcher(args.dictionary))
    if result is None:
        print(f"Acronym not found: {args.acronym}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({
            'acronym': result.acronym,
            'meanings': result.meanings,
            'has_duplicates': result.has_duplicates,
        }, indent=2, ensure_ascii=False))
    else:
        print(result.acronym)
        for meaning in result.meanings:
            print(f"  - {meaning}")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    for acronym in list_acronyms(matcher=_matcher(args.dictionary)):
        print(acronym)
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    stats = dictionary_stats(matcher=_matcher(args.dictionary))
    print(f"Total acronyms: {stats.total_acronyms}")
    print(f"With multiple meanings: {stats.acronyms_with_duplicates}")
    print(f"With punctuation: {stats.acronyms_with_punctuation}")
    return 0


def cmd_build_data(args: argparse.Namespace) -> int:
    dictionary = compile_csv(Path(args.csv))
    result = validate_dictionary(dictionary)
    if not result.valid:
        for error in result.errors:
            print(f"ERROR: {error}", file=sys.stderr)
        return 1
    save_dictionary(dictionary, Path(args.output))
    print(f"Wrote {len(dictionary)} entries ({len(dictionary.conflicts)} conflicts) to {args.output}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    dictionary = _load(args.dictionary)
    result = validate_dictionary(dictionary)

    print("=" * 60)
    print("Dictionary Validation")
    print("=" * 60)
    for key, value in result.meta.items():
        print(f"{key}: {value}")

    if result.warnings:
        print("\nWarnings:")
        print("-" * 40)
        for warning in result.warnings:
            print(f"  {warning}")
    if result.errors:
        print("\nErrors:")
        print("-" * 40)
        for error in result.errors:
            print(f"  {error}")

    print(f"\nValid: {result.valid}")
    return 0 if result.valid else 1


def cmd_export(args: argparse.Namespace) -> int:
    dictionary = _load(args.dictionary)
    path = EXPORTERS[args.format](dictionary, Path(args.output))
    print(f"Exported {len(dictionary)} entries to {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='legal_expand',
        description='Expand Spanish legal acronyms in text'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    dictionary_arg = argparse.ArgumentParser(add_help=False)
    dictionary_arg.add_argument(
        '--dictionary',
        default=None,
        help='Compiled JSON or source CSV dictionary (defaults to the bundled one)'
    )

    expand = subparsers.add_parser('expand', parents=[dictionary_arg], help='Expand acronyms in text')
    expand.add_argument('text', help="Text to expand, or '-' to read stdin")
    expand.add_argument(
        '--format',
        default=None,
        help=f"Output format ({', '.join(FormatterFactory.list_formatters())})"
    )
    expand.add_argument('--diagnostics', action='store_true', help='Show omitted acronyms and reasons')
    expand.add_argument('--exclude', nargs='+', default=None, metavar='SIGLA', help='Never expand these')
    expand.add_argument('--include', nargs='+', default=None, metavar='SIGLA', help='Only expand these')
    expand.add_argument('--only-first', action='store_true', help='Expand only the first occurrence')
    expand.add_argument('--auto-resolve', action='store_true', help='Use the default meaning of ambiguous acronyms')
    expand.add_argument(
        '--resolve',
        action='append',
        metavar='SIGLA=MEANING',
        help='Meaning to use for an ambiguous acronym (repeatable)'
    )
    expand.add_argument('--ignore-case', action='store_true', help='Match acronyms case-insensitively')
    expand.add_argument('--force', action='store_true', help='Expand even if disabled globally')
    expand.set_defaults(func=cmd_expand)

    lookup = subparsers.add_parser('lookup', parents=[dictionary_arg], help='Show the meanings of an acronym')
    lookup.add_argument('acronym', help='Acronym to look up')
    lookup.add_argument('--json', action='store_true', help='Output as JSON')
    lookup.set_defaults(func=cmd_lookup)

    list_cmd = subparsers.add_parser('list', parents=[dictionary_arg], help='List every acronym')
    list_cmd.set_defaults(func=cmd_list)

    stats = subparsers.add_parser('stats', parents=[dictionary_arg], help='Dictionary statistics')
    stats.set_defaults(func=cmd_stats)

    build = subparsers.add_parser('build-data', help='Compile a source CSV into JSON')
    build.add_argument('--csv', required=True, help='Source CSV (SIGLAS,SIGNIFICADO)')
    build.add_argument('--output', required=True, help='Output JSON path')
    build.set_defaults(func=cmd_build_data)

    validate = subparsers.add_parser('validate', parents=[dictionary_arg], help='Check dictionary integrity')
    validate.set_defaults(func=cmd_validate)

    export = subparsers.add_parser('export', parents=[dictionary_arg], help='Export the dictionary')
    export.add_argument('--format', choices=sorted(EXPORTERS), default='txt', help='Export format')
    export.add_argument('--output', required=True, help='Output file path')
    export.set_defaults(func=cmd_export)

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        return args.func(args)
    except DictionaryError as e:
        print(f"Invalid dictionary: {e}", file=sys.stderr)
        return 1
    except (UnknownFormatError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())

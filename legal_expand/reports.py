"""
Dictionary export utilities (TXT/CSV/Excel/PDF).
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import inch
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from .core.dictionary_loader import CompiledDictionary
from .core.normalizer import normalize

logger = logging.getLogger(__name__)


ENTRY_COLUMNS = ["id", "acronym", "meaning", "priority", "variants", "has_duplicates"]
CONFLICT_COLUMNS = ["acronym", "entry_id", "meaning", "priority", "is_default"]

REPORT_TITLE = "Siglas legales españolas"


def _conflict_keys(dictionary: CompiledDictionary) -> set:
    return {normalize(c.acronym_key) for c in dictionary.conflicts}


def dictionary_to_dataframe(dictionary: CompiledDictionary) -> pd.DataFrame:
    """One row per entry, sorted by acronym."""
    conflicted = _conflict_keys(dictionary)
    rows = [
        {
            "id": e.id,
            "acronym": e.original,
            "meaning": e.meaning,
            "priority": e.priority,
            "variants": ", ".join(e.variants),
            "has_duplicates": normalize(e.original) in conflicted,
        }
        for e in dictionary.entries
    ]
    df = pd.DataFrame(rows, columns=ENTRY_COLUMNS)
    if df.empty:
        return df
    return df.sort_values(by=["acronym", "priority"], ascending=[True, False],
                          key=_sort_key).reset_index(drop=True)


def _sort_key(column: pd.Series) -> pd.Series:
    if column.name == "acronym":
        return column.str.lower()
    return column


def conflicts_to_dataframe(dictionary: CompiledDictionary) -> pd.DataFrame:
    """One row per conflict candidate, in priority order."""
    rows = [
        {
            "acronym": group.acronym_key,
            "entry_id": cand.entry_id,
            "meaning": cand.meaning,
            "priority": cand.priority,
            "is_default": cand.entry_id == group.default_entry_id,
        }
        for group in dictionary.conflicts
        for cand in group.candidates
    ]
    return pd.DataFrame(rows, columns=CONFLICT_COLUMNS)


def export_listing(dictionary: CompiledDictionary, path: Path) -> Path:
    """
    Write a human-readable listing grouped by initial letter.

    Acronyms with several meanings are marked with ``*``.
    """
    path = Path(path)
    df = dictionary_to_dataframe(dictionary)
    duplicated = int(df["has_duplicates"].sum()) if not df.empty else 0

    lines: List[str] = [
        REPORT_TITLE.upper(),
        "=" * 80,
        "",
        f"Total de siglas: {len(df)}",
        f"Siglas con múltiples significados: {duplicated}",
        f"Versión del diccionario: {dictionary.version}",
        f"Fecha de build: {dictionary.build_date}",
        f"Fecha de exportación: {datetime.now().strftime('%d/%m/%Y')}",
        "",
        "(*) = Sigla con múltiples significados",
        "",
        "=" * 80,
    ]

    current_letter: Optional[str] = None
    for row in df.itertuples(index=False):
        letter = row.acronym[:1].upper()
        if letter != current_letter:
            current_letter = letter
            lines.extend(["", f"[{letter}]", "-" * 40])
        marker = " *" if row.has_duplicates else ""
        lines.append(f"  {row.acronym}{marker} → {row.meaning}")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info("Wrote listing of %d acronyms to %s", len(df), path)
    return path


def export_csv(dictionary: CompiledDictionary, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    dictionary_to_dataframe(dictionary).to_csv(path, index=False)
    return path


def export_excel(dictionary: CompiledDictionary, path: Path) -> Path:
    """Workbook with an Entries sheet and a Conflicts sheet."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        dictionary_to_dataframe(dictionary).to_excel(writer, sheet_name="Entries", index=False)
        conflicts_to_dataframe(dictionary).to_excel(writer, sheet_name="Conflicts", index=False)
    return path


ENTRY_PDF_COLUMNS = {"acronym": 0.18, "meaning": 0.72, "priority": 0.10}
CONFLICT_PDF_COLUMNS = {"acronym": 0.14, "entry_id": 0.12, "meaning": 0.56, "priority": 0.09, "is_default": 0.09}

FONT = "Helvetica"
FONT_SIZE = 8.5
ROW_HEIGHT = 0.22 * inch
MARGIN = 0.5 * inch
PAGE_WIDTH, PAGE_HEIGHT = landscape(A4)


def _fit(text: str, width: float) -> str:
    """Cut ``text`` with an ellipsis so it fits in ``width`` points."""
    if stringWidth(text, FONT, FONT_SIZE) <= width:
        return text
    while text and stringWidth(text + "…", FONT, FONT_SIZE) > width:
        text = text[:-1]
    return text + "…"


def _draw_footer(c: canvas.Canvas, footer: str) -> None:
    c.setFont("Helvetica-Oblique", 8)
    c.drawString(MARGIN, 0.35 * inch, footer)
    c.drawRightString(PAGE_WIDTH - MARGIN, 0.35 * inch, f"Página {c.getPageNumber()}")


def _new_page(c: canvas.Canvas, footer: str) -> float:
    _draw_footer(c, footer)
    c.showPage()
    return PAGE_HEIGHT - MARGIN


def _draw_table(c: canvas.Canvas, df: pd.DataFrame, columns: Dict[str, float], y: float, footer: str) -> float:
    """Draw ``df`` row by row, repeating the header on every new page."""
    width = PAGE_WIDTH - 2 * MARGIN
    widths = [width * columns[name] for name in columns]

    def draw_row(values, y_pos, font):
        c.setFont(font, FONT_SIZE)
        x_pos = MARGIN
        for value, col_width in zip(values, widths):
            c.drawString(x_pos, y_pos, _fit("" if value is None else str(value), col_width - 4))
            x_pos += col_width

    def draw_header(y_pos):
        draw_row(list(columns), y_pos, "Helvetica-Bold")
        c.line(MARGIN, y_pos - 0.05 * inch, MARGIN + width, y_pos - 0.05 * inch)
        return y_pos - ROW_HEIGHT

    y = draw_header(y)
    if df.empty:
        draw_row(["Sin datos."], y, "Helvetica-Oblique")
        return y - ROW_HEIGHT

    for row in df[list(columns)].itertuples(index=False):
        if y < MARGIN + ROW_HEIGHT:
            y = draw_header(_new_page(c, footer))
        draw_row(list(row), y, FONT)
        y -= ROW_HEIGHT
    return y


def export_pdf(dictionary: CompiledDictionary, path: Path, report_title: str = REPORT_TITLE) -> Path:
    """Landscape A4 table of acronyms and meanings, conflicts on a second page."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    c = canvas.Canvas(str(path), pagesize=(PAGE_WIDTH, PAGE_HEIGHT))
    top = PAGE_HEIGHT - MARGIN
    footer = f"{report_title} | Generado: {datetime.now().strftime('%Y-%m-%d %H:%M')}"

    entries = dictionary_to_dataframe(dictionary)
    c.setFont("Helvetica-Bold", 16)
    c.drawString(MARGIN, top, report_title)
    c.setFont(FONT, 9.5)
    c.drawString(MARGIN, top - 0.3 * inch, f"Versión {dictionary.version} | {len(entries)} siglas")
    _draw_table(c, entries, ENTRY_PDF_COLUMNS, top - 0.65 * inch, footer)
    top = _new_page(c, footer)

    c.setFont("Helvetica-Bold", 12)
    c.drawString(MARGIN, top, "Siglas con múltiples significados")
    _draw_table(c, conflicts_to_dataframe(dictionary), CONFLICT_PDF_COLUMNS, top - 0.35 * inch, footer)
    _draw_footer(c, footer)
    c.save()
    logger.info("Exported %d entries to %s", len(entries), path)
    return path

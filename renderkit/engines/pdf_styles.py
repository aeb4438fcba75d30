"""Custom PDF styles for the PDF engine.

This module derives a ReportLab stylesheet from the page layout options:
base font and size drive the body text, headings scale from them, and the
list, code and table styles used by the HTML converter are added.
"""

import logging
from typing import Any

from reportlab.lib import colors
from reportlab.lib.styles import ParagraphStyle, StyleSheet1, getSampleStyleSheet
from reportlab.lib.units import inch

from renderkit.models.pdf_layout_config import PDFLayoutConfig

logger = logging.getLogger(__name__)

BOLD_FONTS = {
    "Helvetica": "Helvetica-Bold",
    "Times-Roman": "Times-Bold",
    "Courier": "Courier-Bold",
}


def bold_font(font_name: str) -> str:
    """Return the bold variant of a standard PDF font."""
    return BOLD_FONTS.get(font_name, font_name)


def get_document_styles(layout_config: PDFLayoutConfig | None = None) -> StyleSheet1:
    """Get PDF styles for a page layout.

    Args:
        layout_config: Optional PDF layout configuration

    Returns:
        Customized ReportLab stylesheet
    """
    layout_config = layout_config or PDFLayoutConfig()
    styles = getSampleStyleSheet()

    font = layout_config.font_name
    heading_font = bold_font(font)
    size = layout_config.font_size
    primary_color = colors.Color(0.1, 0.1, 0.1)
    secondary_color = colors.Color(0.0, 0.4, 0.8)

    # Title style (h1)
    styles["Title"].fontSize = size * 2.2
    styles["Title"].fontName = heading_font
    styles["Title"].textColor = primary_color
    styles["Title"].leading = size * 2.7
    styles["Title"].spaceAfter = 0.3 * inch
    styles["Title"].alignment = 0  # Left align

    # Heading1 style (h2)
    styles["Heading1"].fontSize = size * 1.6
    styles["Heading1"].fontName = heading_font
    styles["Heading1"].textColor = primary_color
    styles["Heading1"].leading = size * 2.0
    styles["Heading1"].spaceBefore = 0.25 * inch
    styles["Heading1"].spaceAfter = 0.15 * inch

    # Heading2 style (h3)
    styles["Heading2"].fontSize = size * 1.3
    styles["Heading2"].fontName = heading_font
    styles["Heading2"].textColor = secondary_color
    styles["Heading2"].leading = size * 1.6
    styles["Heading2"].spaceBefore = 0.2 * inch
    styles["Heading2"].spaceAfter = 0.12 * inch

    # Heading3 style (h4 to h6)
    styles["Heading3"].fontSize = size * 1.1
    styles["Heading3"].fontName = heading_font
    styles["Heading3"].leading = size * 1.4

    # Normal (paragraph) style
    styles["Normal"].fontSize = size
    styles["Normal"].fontName = font
    styles["Normal"].textColor = colors.black
    styles["Normal"].leading = size * 1.36
    styles["Normal"].spaceAfter = 0.1 * inch

    if "ListItem" not in styles.byName:
        styles.add(ParagraphStyle(
            name="ListItem",
            parent=styles["Normal"],
            spaceAfter=0.05 * inch,
            leftIndent=0.25 * inch,
            bulletIndent=0.1 * inch,
        ))

    styles["Code"].fontSize = size * 0.9
    styles["Code"].leading = size * 1.2

    if "TableHeader" not in styles.byName:
        styles.add(ParagraphStyle(
            name="TableHeader",
            parent=styles["Normal"],
            fontName=heading_font,
            textColor=colors.white,
            spaceAfter=0,
        ))

    if "TableCell" not in styles.byName:
        styles.add(ParagraphStyle(
            name="TableCell",
            parent=styles["Normal"],
            fontSize=size * 0.9,
            leading=size * 1.1,
            spaceAfter=0,
        ))

    return styles


def get_table_style(header: bool = True) -> list[tuple[Any, ...]]:
    """Get the table style commands for ReportLab tables.

    Args:
        header: Whether the first row is a header row

    Returns:
        List of TableStyle tuples
    """
    header_bg = colors.Color(0.2, 0.3, 0.5)
    row_bg_even = colors.Color(0.95, 0.95, 0.97)
    border_color = colors.Color(0.7, 0.7, 0.7)

    first_body_row = 1 if header else 0
    commands: list[tuple[Any, ...]] = []
    if header:
        commands += [
            ("BACKGROUND", (0, 0), (-1, 0), header_bg),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ]

    return commands + [
        # Alternating row colors
        ("ROWBACKGROUNDS", (0, first_body_row), (-1, -1), [colors.white, row_bg_even]),

        # Alignment
        ("ALIGN", (0, 0), (-1, -1), "LEFT"),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),

        # Grid and borders
        ("GRID", (0, 0), (-1, -1), 0.5, border_color),

        # Padding
        ("LEFTPADDING", (0, 0), (-1, -1), 6),
        ("RIGHTPADDING", (0, 0), (-1, -1), 6),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]

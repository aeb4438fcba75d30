"""PDF document builder for the PDF engine.

This module parses rendered HTML with BeautifulSoup, walks the tree into
ReportLab flowables and builds the PDF document in memory. The converter
understands the subset of HTML that document templates use: headings,
paragraphs, lists, tables, preformatted blocks, horizontal rules and inline
emphasis, links and code.

Elements carrying an ``id`` become PDF destinations, so in-page links such as
``<a href="#intro">`` and Markdown footnote references jump to their target.
Links to fragments that never appear in the document are kept as plain text.
"""

import io
import logging
import re
from dataclasses import dataclass
from html import escape, unescape
from typing import Any
from urllib.parse import urlsplit

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag
from reportlab.lib.pagesizes import A4, landscape, legal, letter
from reportlab.lib.styles import ParagraphStyle, StyleSheet1
from reportlab.lib.units import inch
from reportlab.platypus import (
    HRFlowable,
    Paragraph,
    Preformatted,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)
from reportlab.platypus.flowables import AnchorFlowable

from renderkit.engines.pdf_styles import get_document_styles, get_table_style
from renderkit.models.pdf_layout_config import PDFLayoutConfig

logger = logging.getLogger(__name__)

PAGE_SIZES = {
    "A4": A4,
    "Letter": letter,
    "Legal": legal,
}

BLOCK_STYLES = {
    "h1": "Title",
    "h2": "Heading1",
    "h3": "Heading2",
    "h4": "Heading3",
    "h5": "Heading3",
    "h6": "Heading3",
    "p": "Normal",
    "div": "Normal",
    "blockquote": "Normal",
    "section": "Normal",
    "article": "Normal",
}

INLINE_TAGS = {
    "b": "b",
    "strong": "b",
    "i": "i",
    "em": "i",
    "u": "u",
    "s": "strike",
    "strike": "strike",
    "del": "strike",
    "sub": "sub",
    "sup": "sup",
}

LIST_TAGS = ["ul", "ol"]

# Tags laid out as flowables of their own instead of paragraph text
BLOCK_TAGS = list(BLOCK_STYLES) + LIST_TAGS + [
    "li", "pre", "table", "hr", "html", "body", "main", "header", "footer", "nav", "aside",
]

SKIPPED_TAGS = ["script", "style", "template", "noscript"]

WHITESPACE = re.compile(r"\s+")
INTERNAL_LINK = re.compile(r'<a href="#([^"]*)">(.*?)</a>', re.DOTALL)

LIST_INDENT = 0.25 * inch


@dataclass
class _Text:
    """Paragraph markup whose internal links are resolved once the walk ends."""

    markup: str
    style: ParagraphStyle
    bullet: str | None = None


@dataclass
class _Rows:
    """Table cell markup, built into a Table once the walk ends."""

    rows: list[list[str]]
    header: bool


class HtmlStoryBuilder:
    """Turns an HTML document into a list of ReportLab flowables.

    Attributes:
        story: Flowables produced by the last build
        title: Text of the document's <title> element, if any
    """

    def __init__(self, styles: StyleSheet1, available_width: float) -> None:
        self.styles = styles
        self.available_width = available_width
        self.story: list[Any] = []
        self.title = ""

        self._pending: list[Any] = []
        self._anchors: set[str] = set()
        self._list_styles: dict[int, ParagraphStyle] = {}

    def build(self, html: str) -> list[Any]:
        """Parse HTML and convert it into flowables.

        Args:
            html: HTML document or fragment

        Returns:
            List of flowables, also kept on ``story``
        """
        soup = BeautifulSoup(html, "html.parser")

        title_tag = soup.find("title")
        self.title = title_tag.get_text(strip=True) if title_tag else ""

        for tag in soup(SKIPPED_TAGS + ["head", "title"]):
            tag.extract()

        self._pending = []
        self._anchors = set()
        self._blocks(soup)

        self.story = [self._finish(item) for item in self._pending]
        return self.story

    def _blocks(self, parent: Tag, style: str = "Normal") -> None:
        parts: list[str] = []
        for node in parent.children:
            if isinstance(node, Tag) and _is_block(node):
                self._paragraph("".join(parts), self.styles[style])
                parts = []
                self._block(node)
            else:
                parts.append(self._inline(node))
        self._paragraph("".join(parts), self.styles[style])

    def _block(self, tag: Tag) -> None:
        self._add_anchor(tag)
        style = BLOCK_STYLES.get(tag.name, "Normal")

        if tag.name == "hr":
            self._pending.append(HRFlowable(width="100%", thickness=0.5, spaceBefore=4, spaceAfter=8))
        elif tag.name in LIST_TAGS:
            self._list(tag, depth=0)
            self._pending.append(Spacer(1, 0.1 * inch))
        elif tag.name == "li":
            self._list_item(tag, "•", depth=0)
        elif tag.name == "pre":
            text = tag.get_text().strip("\n")
            self._pending.append(Preformatted(text, self.styles["Code"]))
        elif tag.name == "table":
            self._table(tag)
        elif tag.find(BLOCK_TAGS) is not None:
            self._blocks(tag, style)
        else:
            self._paragraph(self._children(tag), self.styles[style])

    def _list(self, tag: Tag, depth: int) -> None:
        ordered = tag.name == "ol"
        try:
            number = int(tag.get("start", 1))
        except ValueError:
            number = 1

        for item in tag.find_all("li", recursive=False):
            bullet = f"{number}." if ordered else "•"
            number += 1
            self._add_anchor(item)
            self._list_item(item, bullet, depth)

    def _list_item(self, item: Tag, bullet: str | None, depth: int) -> None:
        style = self._list_style(depth)
        parts: list[str] = []
        for node in item.children:
            if not (isinstance(node, Tag) and _is_block(node)):
                parts.append(self._inline(node))
                continue

            if self._paragraph("".join(parts), style, bullet):
                bullet = None
            parts = []

            if node.name in LIST_TAGS:
                self._add_anchor(node)
                self._list(node, depth + 1)
            elif node.name in ("p", "div") and node.find(BLOCK_TAGS) is None:
                # loose lists wrap the item text in a paragraph
                self._add_anchor(node)
                if self._paragraph(self._children(node), style, bullet):
                    bullet = None
            else:
                self._block(node)

        self._paragraph("".join(parts), style, bullet)

    def _list_style(self, depth: int) -> ParagraphStyle:
        base = self.styles["ListItem"]
        if depth == 0:
            return base
        if depth not in self._list_styles:
            self._list_styles[depth] = ParagraphStyle(
                name=f"ListItem{depth}",
                parent=base,
                leftIndent=base.leftIndent + depth * LIST_INDENT,
                bulletIndent=base.bulletIndent + depth * LIST_INDENT,
            )
        return self._list_styles[depth]

    def _table(self, tag: Tag) -> None:
        rows = []
        header = False
        for row in tag.find_all("tr"):
            if row.find_parent("table") is not tag:
                continue
            cells = row.find_all(["td", "th"], recursive=False)
            if not cells:
                continue
            if not rows:
                header = any(cell.name == "th" for cell in cells)
            rows.append([self._inline(cell).strip() for cell in cells])

        if not rows:
            logger.warning("Dropping empty table")
            return

        self._pending.append(_Rows(rows, header))
        self._pending.append(Spacer(1, 0.15 * inch))

    def _inline(self, node: Any) -> str:
        if isinstance(node, PreformattedString):
            # comments, doctypes and processing instructions
            return ""
        if isinstance(node, NavigableString):
            return escape(WHITESPACE.sub(" ", str(node)), quote=False)
        if not isinstance(node, Tag):
            return ""
        if node.name == "br":
            return "<br/>"

        anchor = ""
        if node.get("id"):
            anchor = f'<a name="{escape(node["id"])}"/>'
            self._anchors.add(node["id"])

        text = self._children(node)
        if node.name in INLINE_TAGS:
            tag = INLINE_TAGS[node.name]
            text = f"<{tag}>{text}</{tag}>"
        elif node.name == "code":
            text = f'<font face="Courier">{text}</font>'
        elif node.name == "a":
            text = _link(node.get("href"), text)
        return anchor + text

    def _children(self, tag: Tag) -> str:
        return "".join(self._inline(child) for child in tag.children)

    def _add_anchor(self, tag: Tag) -> None:
        name = tag.get("id")
        if name:
            self._pending.append(AnchorFlowable(name))
            self._anchors.add(name)

    def _paragraph(self, markup: str, style: ParagraphStyle, bullet: str | None = None) -> bool:
        markup = markup.strip()
        if not markup:
            return False
        self._pending.append(_Text(markup, style, bullet))
        return True

    def _resolve_links(self, markup: str) -> str:
        def replace(match: re.Match) -> str:
            if unescape(match.group(1)) in self._anchors:
                return match.group(0)
            return match.group(2)

        return INTERNAL_LINK.sub(replace, markup)

    def _finish(self, item: Any) -> Any:
        if isinstance(item, _Text):
            text = self._resolve_links(item.markup)
            if item.bullet:
                return Paragraph(text, item.style, bulletText=item.bullet)
            return Paragraph(text, item.style)
        if isinstance(item, _Rows):
            return self._make_table(item)
        return item

    def _make_table(self, item: _Rows) -> Table:
        columns = max(len(row) for row in item.rows)
        data = []
        for index, row in enumerate(item.rows):
            style_name = "TableHeader" if index == 0 and item.header else "TableCell"
            cells = row + [""] * (columns - len(row))
            data.append([
                Paragraph(self._resolve_links(cell), self.styles[style_name])
                for cell in cells
            ])

        table = Table(data, colWidths=[self.available_width / columns] * columns)
        table.setStyle(TableStyle(get_table_style(header=item.header)))
        return table


def _is_block(tag: Tag) -> bool:
    return tag.name in BLOCK_TAGS or tag.find(BLOCK_TAGS) is not None


def _link(href: str | None, text: str) -> str:
    """Wrap text in a ReportLab link when the target can be resolved."""
    if not href:
        return text
    if href.startswith("#"):
        if len(href) == 1:
            return text
        return f'<a href="#{escape(href[1:])}">{text}</a>'
    if urlsplit(href).scheme:
        return f'<a href="{escape(href)}">{text}</a>'
    # relative URLs have no meaning inside a standalone PDF
    return text


def _draw_page_number(canvas: Any, doc: Any) -> None:
    """Draw the page number centered in the bottom margin."""
    page_text = f"Page {canvas.getPageNumber()}"
    page_width = doc.pagesize[0]
    canvas.saveState()
    canvas.setFont("Helvetica", 8)
    text_width = canvas.stringWidth(page_text, "Helvetica", 8)
    canvas.drawString((page_width - text_width) / 2, 0.5 * inch, page_text)
    canvas.restoreState()


def _no_decoration(canvas: Any, doc: Any) -> None:
    pass


def build_pdf(
    html: str,
    layout_config: PDFLayoutConfig | None = None,
    title: str | None = None,
) -> bytes:
    """Build a PDF document from HTML.

    Args:
        html: HTML document or fragment
        layout_config: Optional page layout; defaults to A4 portrait
        title: Document title metadata; defaults to the HTML <title>

    Returns:
        PDF document bytes
    """
    layout_config = layout_config or PDFLayoutConfig()
    pagesize = PAGE_SIZES[layout_config.page_size]
    if layout_config.orientation == "landscape":
        pagesize = landscape(pagesize)
    margins = layout_config.margins
    available_width = pagesize[0] - margins["left"] - margins["right"]

    builder = HtmlStoryBuilder(get_document_styles(layout_config), available_width)
    story = builder.build(html) or [Spacer(1, 0)]

    decorate = _draw_page_number if layout_config.page_numbers else _no_decoration

    with io.BytesIO() as buffer:
        doc = SimpleDocTemplate(
            buffer,
            pagesize=pagesize,
            rightMargin=margins["right"],
            leftMargin=margins["left"],
            topMargin=margins["top"],
            bottomMargin=margins["bottom"],
            title=title or builder.title,
            author=layout_config.author or "",
        )
        doc.build(story, onFirstPage=decorate, onLaterPages=decorate)
        logger.debug(f"PDF built with {len(story)} flowables")
        return buffer.getvalue()

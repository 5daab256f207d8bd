"""fpdf2 engine driven by the adapters.

``HtmlPdfEngine`` is an ``FPDF`` subclass that keeps the few pieces of
state the adapters configure between calls: the default body font, the
running HTML footers, the page format used for new pages and the pages
taken from existing PDF files. Imported pages are reserved as real pages
when they are queued, so footers number them, and their content is laid
under those pages with PyMuPDF at output time.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Optional

import pymupdf
from bs4 import BeautifulSoup, Tag
from fpdf import FPDF, FontFace
from fpdf.enums import TextEmphasis
from fpdf.errors import FPDFException
from fpdf.html import DEFAULT_TAG_STYLES

from pdf_adapter.constants import (
    CORE_FONT_NAMES,
    FALLBACK_CORE_FONT,
    PAGE_DIMENSIONS_MM,
    PAGE_NUMBER_ALIAS,
    PAGE_TOTAL_ALIAS,
)
from pdf_adapter.enums import PageSize
from pdf_adapter.errors import PageImportError, PdfRenderError

logger = logging.getLogger(__name__)

_PT_TO_MM = 25.4 / 72
_PX_TO_PT = 0.75
_FOOTER_LINE_SPACING = 1.5

_CSS_COMMENT_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)
_CSS_RULE_PATTERN = re.compile(r"([^{}]+)\{([^}]*)\}")
_CSS_SIZE_PATTERN = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*(pt|px)?\s*$", re.IGNORECASE)
_LEADING_NUMBER_PATTERN = re.compile(r"^\s*([0-9]*\.?[0-9]+)")

_ALIGN_CODES = {"left": "L", "center": "C", "right": "R"}
_BOLD_WEIGHTS = ("bold", "bolder", "600", "700", "800", "900")

# Core fonts only cover Latin-1
_TEXT_REPLACEMENTS = {
    "\u2013": "-",  # en-dash
    "\u2014": "--",  # em-dash
    "\u2018": "'",  # left single quote
    "\u2019": "'",  # right single quote
    "\u201c": '"',  # left double quote
    "\u201d": '"',  # right double quote
    "\u2026": "...",  # ellipsis
    "\u2022": "\xb7",  # bullet
}


@dataclass(frozen=True)
class PageMargins:
    """The six page margins, in millimetres."""

    left: float = 11
    top: float = 11
    right: float = 15
    bottom: float = 14
    header: float = 5
    footer: float = 9


@dataclass(frozen=True)
class FooterCell:
    """One column of a running footer."""

    text: str
    width: float = 1.0
    align: str = "L"
    emphasis: str = ""


@dataclass(frozen=True)
class ImportedPages:
    """Pages of an existing PDF, reserved from engine page ``first_page`` on."""

    path: Path
    page_count: int
    first_page: int


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def parse_declarations(text: str) -> dict[str, str]:
    """Parse ``"a: b; c: d"`` into ``{"a": "b", "c": "d"}`` (keys lowercased)."""
    declarations: dict[str, str] = {}
    for item in (text or "").split(";"):
        name, sep, value = item.partition(":")
        if sep and name.strip():
            declarations[name.strip().lower()] = value.strip()
    return declarations


def parse_stylesheet(css: str) -> list[tuple[list[str], dict[str, str]]]:
    """Split a stylesheet into ``(selectors, declarations)`` rules."""
    css = _CSS_COMMENT_PATTERN.sub("", css)
    rules = []
    for match in _CSS_RULE_PATTERN.finditer(css):
        selectors = [s.strip().lower() for s in match.group(1).split(",") if s.strip()]
        rules.append((selectors, parse_declarations(match.group(2))))
    return rules


def css_font_size_pt(value: str) -> Optional[float]:
    """Convert ``12pt`` / ``16px`` / ``11`` to points; None for other units."""
    match = _CSS_SIZE_PATTERN.match(value or "")
    if not match:
        return None
    size = float(match.group(1))
    if (match.group(2) or "").lower() == "px":
        size *= _PX_TO_PT
    return size


def resolve_core_font(stack: Optional[str], registered: Iterable[str] = ()) -> str:
    """Pick the font the engine can draw for a CSS ``font-family`` stack.

    Registered (embedded) fonts win, then the first name of the stack with
    a core-font counterpart.
    """
    registered = {name.lower() for name in registered}
    for name in (stack or "").split(","):
        name = name.strip().strip("'\"").strip().lower()
        if not name:
            continue
        if name in registered:
            return name
        if name in CORE_FONT_NAMES:
            return CORE_FONT_NAMES[name]
    logger.warning("No core font for %r, using %s", stack, FALLBACK_CORE_FONT)
    return FALLBACK_CORE_FONT


def normalize_text(text: str) -> str:
    """Replace characters not supported by the core PDF fonts (Latin-1)."""
    if not text:
        return ""
    for char, repl in _TEXT_REPLACEMENTS.items():
        text = text.replace(char, repl)
    return text.encode("latin-1", "replace").decode("latin-1")


def _emphasis(style: Optional[str]) -> str:
    declarations = parse_declarations(style or "")
    emphasis = ""
    if declarations.get("font-weight", "") in _BOLD_WEIGHTS:
        emphasis += "B"
    if declarations.get("font-style", "") in ("italic", "oblique"):
        emphasis += "I"
    return emphasis


def _cell_emphasis(cell: Tag) -> str:
    """``B`` / ``I`` / ``BI`` from the CSS of a cell and its spans."""
    found = _emphasis(cell.get("style"))
    for span in cell.find_all("span"):
        found += _emphasis(span.get("style"))
    return ("B" if "B" in found else "") + ("I" if "I" in found else "")


def _cell_text(node: Tag) -> str:
    for br in node.find_all("br"):
        br.replace_with(" ")
    return node.get_text().strip()


def flatten_table_cells(html: str) -> str:
    """Rewrite ``<td>`` / ``<th>`` contents into the single text run fpdf2 accepts.

    ``<br>`` becomes a newline inside the cell, ``<span>`` wrappers are
    dropped and bold / italic CSS on the cell or its spans becomes
    ``<b>`` / ``<i>``. Markup without table cells is returned as is.
    """
    soup = BeautifulSoup(html, "html.parser")
    cells = soup.find_all(["td", "th"])
    if not cells:
        return html

    for cell in cells:
        emphasis = _cell_emphasis(cell)
        for br in cell.find_all("br"):
            br.replace_with("\n")
        for span in cell.find_all("span"):
            span.unwrap()
        inner = cell.decode_contents().strip()
        cell.clear()
        if not inner:
            continue
        if "B" in emphasis:
            inner = f"<b>{inner}</b>"
        if "I" in emphasis:
            inner = f"<i>{inner}</i>"
        cell.append(BeautifulSoup(inner, "html.parser"))
    return str(soup)


def footer_table_style(html: str) -> dict[str, str]:
    """CSS declarations of the footer's ``<table>`` element."""
    table = BeautifulSoup(html, "html.parser").find("table")
    if table is None:
        return {}
    return parse_declarations(table.get("style", ""))


def footer_cells(html: str) -> list[FooterCell]:
    """Read the cells of a footer table; markup without cells gives one centered cell."""
    soup = BeautifulSoup(html, "html.parser")
    tds = soup.find_all("td")
    if not tds:
        text = _cell_text(soup)
        return [FooterCell(text=text, align="C")] if text else []

    cells = []
    for td in tds:
        width = _LEADING_NUMBER_PATTERN.match(td.get("width", ""))
        align = td.get("align", "").strip().lower()
        cells.append(
            FooterCell(
                text=_cell_text(td),
                width=float(width.group(1)) if width else 0,
                align=_ALIGN_CODES.get(align, "L"),
                emphasis=_cell_emphasis(td),
            )
        )
    if not all(cell.width > 0 for cell in cells):
        cells = [replace(cell, width=1.0) for cell in cells]
    return cells


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class HtmlPdfEngine(FPDF):
    """FPDF with default body CSS, HTML running footers and page import."""

    def __init__(
        self,
        page_size: str = PageSize.LETTER.value,
        orientation: str = "P",
        font_size: float = 12,
        font_family: str = "Times",
        margins: Optional[PageMargins] = None,
    ) -> None:
        self._page_size = page_size if page_size in PAGE_DIMENSIONS_MM else PageSize.LETTER.value
        self._orientation = "L" if (orientation or "P")[0].upper() == "L" else "P"
        super().__init__(
            orientation=self._orientation,
            unit="mm",
            format=PAGE_DIMENSIONS_MM[self._page_size],
        )
        self.mirror_margins = False
        self.margin_header: float = 0
        self.margin_footer: float = 0
        self.default_font_family = resolve_core_font(font_family)
        self.default_font_size = font_size
        self._footers: dict[str, str] = {}
        self._tag_styles: dict[str, FontFace] = {}
        self._imports: list[ImportedPages] = []
        self._break_before_next_write = False

        self.alias_nb_pages(PAGE_TOTAL_ALIAS)
        self.set_page_margins(margins or PageMargins())
        logger.info(
            "Created %s engine (%s, %s, %s %spt)",
            type(self).__name__,
            self._page_size,
            self._orientation,
            self.default_font_family,
            self.default_font_size,
        )

    # ------------------------------------------------------------------
    # Page setup
    # ------------------------------------------------------------------

    @property
    def page_format(self) -> str:
        """Format used for new pages, e.g. ``Letter`` or ``A4-L``."""
        if self._orientation == "L":
            return f"{self._page_size}-L"
        return self._page_size

    def set_page_format(self, page_size: str, orientation: str) -> None:
        """Use *page_size* / *orientation* for pages added from now on."""
        if page_size in PAGE_DIMENSIONS_MM:
            self._page_size = page_size
        self._orientation = "L" if (orientation or "P")[0].upper() == "L" else "P"

    def add_page(self, orientation="", format="", same=False, **kwargs) -> None:
        if not same and not orientation and not format:
            orientation = self._orientation
            format = PAGE_DIMENSIONS_MM[self._page_size]
        super().add_page(orientation=orientation, format=format, same=same, **kwargs)

    def set_page_margins(self, margins: PageMargins) -> None:
        """Apply all six margins; the bottom one also drives page breaks."""
        self.set_left_margin(margins.left)
        self.set_top_margin(margins.top)
        self.set_right_margin(margins.right)
        self.set_auto_page_break(True, margin=margins.bottom)
        self.margin_header = margins.header
        self.margin_footer = margins.footer

    # ------------------------------------------------------------------
    # Default body CSS
    # ------------------------------------------------------------------

    def set_default_body_css(self, prop: str, value: str) -> None:
        prop = prop.strip().lower()
        if prop == "font-family":
            self.default_font_family = resolve_core_font(value, self.fonts.keys())
        elif prop == "font-size":
            size = css_font_size_pt(str(value))
            if size is None:
                logger.warning("Ignoring body font-size %r", value)
            else:
                self.default_font_size = size
        else:
            logger.warning("Ignoring unsupported body CSS property %r", prop)

    def set_default_font_size(self, size: float) -> None:
        self.default_font_size = size

    def write_css(self, css: str) -> None:
        """Apply a stylesheet: ``body`` rules set the defaults, tag rules set tag styles."""
        for selectors, declarations in parse_stylesheet(css):
            for selector in selectors:
                if selector in ("html", "body"):
                    for prop in ("font-family", "font-size"):
                        if prop in declarations:
                            self.set_default_body_css(prop, declarations[prop])
                elif selector in DEFAULT_TAG_STYLES:
                    self._tag_styles[selector] = self._font_face(declarations)
                else:
                    logger.warning("Ignoring CSS rule for unsupported selector %r", selector)

    def _font_face(self, declarations: dict[str, str]) -> FontFace:
        family = None
        if "font-family" in declarations:
            family = resolve_core_font(declarations["font-family"], self.fonts.keys())
        size = css_font_size_pt(declarations.get("font-size", ""))
        emphasis = TextEmphasis.NONE
        if declarations.get("font-weight") in _BOLD_WEIGHTS:
            emphasis |= TextEmphasis.B
        if declarations.get("font-style") in ("italic", "oblique"):
            emphasis |= TextEmphasis.I
        if declarations.get("text-decoration") == "underline":
            emphasis |= TextEmphasis.U
        color = declarations.get("color")
        return FontFace(
            family=family,
            emphasis=emphasis or None,
            size_pt=size,
            color=color if color and color.startswith("#") else None,
        )

    # ------------------------------------------------------------------
    # HTML output
    # ------------------------------------------------------------------

    def write_html(self, text: str, *args, **kwargs) -> None:
        """Write an HTML fragment into the document body.

        Embedded ``<style>`` blocks are applied as stylesheets.
        """
        soup = BeautifulSoup(text, "html.parser")
        blocks = soup.find_all("style")
        if blocks:
            for block in blocks:
                self.write_css(block.get_text())
                block.decompose()
            text = str(soup)
        if not text.strip():
            return
        if self.page == 0 or self._break_before_next_write:
            self.add_page()
            self._break_before_next_write = False
        self._write_fragment(text, *args, **kwargs)

    def _write_fragment(self, text: str, *args, **kwargs) -> None:
        self.set_font(self.default_font_family, size=self.default_font_size)
        if self._tag_styles:
            kwargs.setdefault("tag_styles", dict(self._tag_styles))
        super().write_html(flatten_table_cells(normalize_text(text)), *args, **kwargs)

    def set_html_footer(self, html: str, side: str = "O") -> None:
        """Install *html* as the running footer for odd (``O``) or even (``E``) pages."""
        side = side[:1].upper()
        if side not in ("O", "E"):
            raise ValueError(f"Footer side must be 'O' or 'E', got {side!r}")
        self._footers[side] = html

    def footer(self) -> None:
        side = "E" if self.mirror_margins and self.page_no() % 2 == 0 else "O"
        html = self._footers.get(side)
        if not html:
            return
        html = html.replace(PAGE_NUMBER_ALIAS, str(self.page_no()))
        cells = footer_cells(html)
        if not cells:
            return

        table_style = footer_table_style(html)
        family = self.default_font_family
        if "font-family" in table_style:
            family = resolve_core_font(table_style["font-family"], self.fonts.keys())
        size = css_font_size_pt(table_style.get("font-size", "")) or self.default_font_size
        line_height = size * _PT_TO_MM * _FOOTER_LINE_SPACING

        auto_break, bottom = self.auto_page_break, self.b_margin
        self.set_auto_page_break(False, margin=bottom)
        self.set_y(-(self.margin_footer + line_height))
        total = sum(cell.width for cell in cells)
        for cell in cells:
            self.set_font(family, cell.emphasis, size)
            self.cell(self.epw * cell.width / total, line_height, normalize_text(cell.text), align=cell.align)
        self.set_auto_page_break(auto_break, margin=bottom)

    # ------------------------------------------------------------------
    # Imported pages
    # ------------------------------------------------------------------

    @property
    def imported_pages(self) -> tuple[ImportedPages, ...]:
        return tuple(self._imports)

    def import_pages(self, path: Path) -> int:
        """Reserve one engine page per page of the PDF at *path*.

        The reserved pages take the size of the source pages and count
        towards page numbers and totals like any other page. Content
        written afterwards starts on a new page. Returns the number of
        pages reserved.
        """
        path = Path(path)
        try:
            with pymupdf.open(path) as source:
                if not source.is_pdf:
                    raise PageImportError(f"Not a PDF document: {path}")
                sizes = [(page.rect.width, page.rect.height) for page in source]
        except RuntimeError as exc:
            raise PageImportError(f"Cannot read pages from {path}: {exc}") from exc

        first_page = self.page + 1
        for width_pt, height_pt in sizes:
            self.add_page(orientation="P", format=(width_pt * _PT_TO_MM, height_pt * _PT_TO_MM))
        self._imports.append(ImportedPages(path=path, page_count=len(sizes), first_page=first_page))
        self._break_before_next_write = True
        logger.info("Reserved %d page(s) from %s at page %d", len(sizes), path, first_page)
        return len(sizes)

    def _place_imports(self, raw: bytes) -> bytes:
        document = pymupdf.open(stream=raw, filetype="pdf")
        try:
            for imported in self._imports:
                with pymupdf.open(imported.path) as source:
                    for index in range(imported.page_count):
                        # Blank source page: the reserved page already matches it
                        if not source[index].get_contents():
                            continue
                        page = document[imported.first_page - 1 + index]
                        page.show_pdf_page(page.rect, source, index, overlay=False)
            return document.tobytes(garbage=3, deflate=True)
        except (RuntimeError, ValueError) as exc:
            raise PdfRenderError(f"Failed to place imported pages: {exc}") from exc
        finally:
            document.close()

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def output_document(self) -> bytes:
        """Close the document and return the finished PDF bytes."""
        try:
            raw = bytes(self.output())
        except FPDFException as exc:
            raise PdfRenderError(f"PDF engine failed: {exc}") from exc
        if not self._imports:
            return raw
        return self._place_imports(raw)

"""Abstract base adapter holding the document configuration.

Setters update the adapter state and, when the engine has a matching
call, forward the value to it straight away. Margins and page format are
state only until the engine is created or ``register_page_margins`` runs.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Mapping, Optional

from pdf_adapter.adapters.engine import HtmlPdfEngine
from pdf_adapter.config import PdfConfig, get_config
from pdf_adapter.constants import (
    DEFAULT_FONT_ALIAS,
    FONT_FAMILIES,
    FOOTER_PAGE_REPLACEMENT,
    FOOTER_PAGE_TOKENS,
    HEADER_DATE_TOKEN,
    ORIENTATION_TYPES,
    OUTPUT_TYPES,
    PAGE_TYPES,
)
from pdf_adapter.enums import FooterSide, Orientation, PageSize
from pdf_adapter.errors import EngineNotInitializedError, PdfConfigurationError
from pdf_adapter.interface import PdfInterface
from pdf_adapter.properties import PropertyMixin

logger = logging.getLogger(__name__)

_MARGIN_KEYS = (
    ("margin_top", "marginTop"),
    ("margin_right", "marginRight"),
    ("margin_bottom", "marginBottom"),
    ("margin_left", "marginLeft"),
    ("margin_header", "marginHeader"),
    ("margin_footer", "marginFooter"),
)


def format_header_date(moment: datetime) -> str:
    """Format as e.g. ``3/07/2017 4:05 PM``."""
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{moment.month}/{moment.day:02d}/{moment.year} {hour}:{moment.minute:02d} {meridiem}"


def _format_name(page_size: str, orientation: str) -> str:
    if str(orientation)[:1].upper() == Orientation.LANDSCAPE.code:
        return f"{page_size}-{Orientation.LANDSCAPE.code}"
    return page_size


class AbstractPdfAdapter(PropertyMixin, PdfInterface):
    """Configuration state and fluent setters shared by all PDF adapters."""

    VERSION = "1.13.0"

    page_types: tuple[str, ...] = PAGE_TYPES
    output_types: tuple[str, ...] = OUTPUT_TYPES
    orientation_types: tuple[str, ...] = ORIENTATION_TYPES
    font_family: Mapping[str, str] = FONT_FAMILIES

    def __init__(self, config: Optional[PdfConfig] = None) -> None:
        cfg = config or get_config()
        self._config = cfg

        self.engine: Optional[HtmlPdfEngine] = None
        self.page_header: Optional[str] = None
        self.page_footer: dict[str, str] = {}
        self.character_encoding = cfg.charset
        self.font_size = cfg.font.size
        self.font_type = cfg.font.type
        self.filename = cfg.output.filename
        self.output_destination = cfg.output.destination
        self.page_css: Optional[str] = None
        self.page_content: Optional[str] = None
        self.page_size = cfg.page.size
        self.page_orientation = cfg.page.orientation
        self.page_format = _format_name(cfg.page.size, cfg.page.orientation)
        self.margin_top = cfg.margins.top
        self.margin_right = cfg.margins.right
        self.margin_bottom = cfg.margins.bottom
        self.margin_left = cfg.margins.left
        self.margin_header = cfg.margins.header
        self.margin_footer = cfg.margins.footer
        self.meta_title: Optional[str] = cfg.meta.title
        self.meta_author: Optional[str] = cfg.meta.author
        self.meta_subject: Optional[str] = cfg.meta.subject
        self.meta_creator: Optional[str] = cfg.meta.creator
        self.meta_keywords: list[str] = list(cfg.meta.keywords)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(page_format={self.page_format!r}, "
            f"filename={self.filename!r}, destination={self.output_destination!r})"
        )

    # ------------------------------------------------------------------
    # Engine access
    # ------------------------------------------------------------------

    def _require_engine(self) -> HtmlPdfEngine:
        if self.engine is None:
            raise EngineNotInitializedError(
                "No PDF engine yet: call initialize_page_setup() first."
            )
        return self.engine

    # ------------------------------------------------------------------
    # Header / footer
    # ------------------------------------------------------------------

    def set_header(self, data: Mapping[str, str]) -> "AbstractPdfAdapter":
        right = str(data.get("right", "")).replace(
            HEADER_DATE_TOKEN, format_header_date(datetime.now())
        )
        left = str(data.get("left", "")).replace("|", "<br>")

        html = (
            "<table border='0' cellspacing='0' cellpadding='0' width='100%'><tr>"
            f"<td style='font-family:arial;font-size:14px;font-weight:bold;'>{left}</td>"
            "<td style='font-size:13px;font-family:arial;text-align:right;font-style:italic;'"
            f" align='right'>{right}</td>"
            "</tr></table><br>"
        )

        self.set_property("page_header", html)
        return self.append_page_content(self.page_header)

    def set_footer(
        self, data: Mapping[str, str], side: str = FooterSide.BOTH.value
    ) -> "AbstractPdfAdapter":
        try:
            side = FooterSide(str(side).lower()).value
        except ValueError as exc:
            raise PdfConfigurationError(
                f"Footer side must be one of {', '.join(s.value for s in FooterSide)}"
            ) from exc

        engine = self._require_engine()
        data = {str(key).lower(): value for key, value in data.items()}
        footer = (
            '<table width="100%" style="vertical-align: bottom; font-family: arial; '
            'font-size: 9pt; color: #000000; font-weight: bold; font-style: italic;"><tr>'
            + self.set_footer_content("left", str(data.get("left") or ""))
            + self.set_footer_content("center", str(data.get("center") or ""))
            + self.set_footer_content("right", str(data.get("right") or ""))
            + "</tr></table>"
        )

        self.set_property("page_footer", footer, side)
        engine.mirror_margins = False
        # Without mirrored margins every page uses the odd-page footer
        engine.set_html_footer(self.get_property("page_footer", side), "O")
        if side in (FooterSide.BOTH.value, FooterSide.EVEN.value):
            engine.set_html_footer(self.get_property("page_footer", side), "E")
        return self

    def set_footer_content(self, alignment: str, text: str) -> str:
        for token in FOOTER_PAGE_TOKENS:
            text = text.replace(token, FOOTER_PAGE_REPLACEMENT)
        return (
            f'<td width="33%" align="{alignment}">'
            '<span style="font-weight: bold; font-style: italic;">'
            f"{text}"
            "</span></td>"
        )

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------

    def set_font_type(self, fontname: Optional[str] = None) -> "AbstractPdfAdapter":
        engine = self._require_engine()
        self.set_property("font_type", self.get_font_family(fontname))
        engine.set_default_body_css("font-family", self.get_property("font_type"))
        return self

    def get_font_family(self, fontname: Optional[str] = None) -> str:
        """Return the CSS font stack for an alias, falling back to ``default``."""
        return self.font_family.get((fontname or "").lower(), self.font_family[DEFAULT_FONT_ALIAS])

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def append_page_content(self, html: str) -> "AbstractPdfAdapter":
        engine = self._require_engine()
        self.set_property("page_content", html)
        engine.write_html(self.page_content)
        return self

    def append_page_css(self, css: str) -> "AbstractPdfAdapter":
        engine = self._require_engine()
        self.set_property("page_css", css)
        engine.write_css(self.page_css)
        return self

    # ------------------------------------------------------------------
    # Margins
    # ------------------------------------------------------------------

    def set_margin_top(self, margin_top: int) -> "AbstractPdfAdapter":
        return self.set_property("margin_top", margin_top)

    def set_margin_right(self, margin_right: int) -> "AbstractPdfAdapter":
        return self.set_property("margin_right", margin_right)

    def set_margin_bottom(self, margin_bottom: int) -> "AbstractPdfAdapter":
        return self.set_property("margin_bottom", margin_bottom)

    def set_margin_left(self, margin_left: int) -> "AbstractPdfAdapter":
        return self.set_property("margin_left", margin_left)

    def set_margin_header(self, margin_header: int) -> "AbstractPdfAdapter":
        return self.set_property("margin_header", margin_header)

    def set_margin_footer(self, margin_footer: int) -> "AbstractPdfAdapter":
        return self.set_property("margin_footer", margin_footer)

    def set_margins(self, setting: Mapping[str, int]) -> "AbstractPdfAdapter":
        """Set all six margins; keys may be snake_case or camelCase."""
        for name, camel in _MARGIN_KEYS:
            if name in setting:
                value = setting[name]
            elif camel in setting:
                value = setting[camel]
            else:
                raise PdfConfigurationError(f"Missing margin setting: {name}")
            self.set_property(name, int(value))
        return self

    # ------------------------------------------------------------------
    # Page format
    # ------------------------------------------------------------------

    def set_page_size(self, page_size: str) -> "AbstractPdfAdapter":
        self.set_property("page_size", page_size)
        return self.register_page_format()

    def register_page_format(
        self, page_size: Optional[str] = None, orientation: Optional[str] = None
    ) -> "AbstractPdfAdapter":
        page_size = page_size if page_size is not None else self.page_size
        if page_size in self.page_types:
            self.set_property("page_size", page_size)
        else:
            logger.warning(
                "Unknown page size %r, using %s", page_size, self.DEFAULT_PAGE_SIZE
            )
            self.set_property("page_size", self.DEFAULT_PAGE_SIZE)

        return self.set_page_orientation(
            orientation if orientation is not None else self.page_orientation
        )

    def orientation_code(self, orientation: Optional[str]) -> str:
        """``P`` or ``L`` for an orientation name or code (default portrait)."""
        code = str(orientation or self.DEFAULT_PAGE_ORIENTATION)[:1].upper()
        if code not in {o.code for o in Orientation}:
            raise PdfConfigurationError(
                f"Orientation must be one of {', '.join(self.orientation_types)}, got {orientation!r}"
            )
        return code

    def set_page_orientation(self, orientation: str) -> "AbstractPdfAdapter":
        self.set_property("page_orientation", self.orientation_code(orientation))
        self.set_property("page_format", _format_name(self.page_size, self.page_orientation))

        if self.engine is not None:
            self.engine.set_page_format(self.page_size, self.page_orientation)
        return self

    def set_page_size_letter(self) -> "AbstractPdfAdapter":
        return self.set_page_size(PageSize.LETTER.value)

    def set_page_size_legal(self) -> "AbstractPdfAdapter":
        return self.set_page_size(PageSize.LEGAL.value)

    def set_page_as_landscape(self) -> "AbstractPdfAdapter":
        self.set_property("page_orientation", Orientation.LANDSCAPE.value)
        return self.register_page_format()

    def set_page_as_portrait(self) -> "AbstractPdfAdapter":
        self.set_property("page_orientation", Orientation.PORTRAIT.value)
        return self.register_page_format()

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def set_meta_title(self, text: str) -> "AbstractPdfAdapter":
        self.set_property("meta_title", text)
        self._require_engine().set_title(self.meta_title)
        return self

    def set_meta_author(self, text: str) -> "AbstractPdfAdapter":
        self.set_property("meta_author", text)
        self._require_engine().set_author(self.meta_author)
        return self

    def set_meta_creator(self, text: str) -> "AbstractPdfAdapter":
        self.set_property("meta_creator", text)
        self._require_engine().set_creator(self.meta_creator)
        return self

    def set_meta_subject(self, text: str) -> "AbstractPdfAdapter":
        self.set_property("meta_subject", text)
        self._require_engine().set_subject(self.meta_subject)
        return self

    def set_meta_keywords(self, words: Iterable[str]) -> "AbstractPdfAdapter":
        self.set_property("meta_keywords", [*self.meta_keywords, *words])
        self._require_engine().set_keywords(", ".join(self.meta_keywords))
        return self

"""Concrete PDF adapter backed by fpdf2."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from pdf_adapter.adapters.base import AbstractPdfAdapter
from pdf_adapter.adapters.engine import HtmlPdfEngine, PageMargins
from pdf_adapter.constants import BROWSER_DESTINATION
from pdf_adapter.enums import Orientation, OutputDestination
from pdf_adapter.errors import PdfConfigurationError

logger = logging.getLogger(__name__)


class Pdf(AbstractPdfAdapter):
    """Build a PDF from HTML fragments through a fluent setter API.

    Typical use::

        data = (
            Pdf()
            .initialize_page_setup("Letter", "Portrait")
            .set_meta_title("Quarterly report")
            .set_footer({"right": '{{ page("# of #") }}'})
            .append_page_content("<h1>Report</h1><p>...</p>")
            .set_output_destination("S")
            .render()
        )
    """

    VERSION = "1.13.0"

    # ------------------------------------------------------------------
    # Engine setup
    # ------------------------------------------------------------------

    def initialize_page_setup(
        self, page_size: Optional[str] = None, orientation: Optional[str] = None
    ) -> "Pdf":
        """Create the engine for *page_size* and *orientation*.

        Omitted arguments use the configured page size and orientation.
        Unknown page sizes give a Letter / portrait engine. The current
        font and margin settings are used either way.
        """
        page_size = page_size if page_size is not None else self.page_size
        code = self.orientation_code(orientation if orientation is not None else self.page_orientation)
        if page_size not in self.page_types:
            logger.warning(
                "Unknown page size %r, using %s-%s",
                page_size,
                self.DEFAULT_PAGE_SIZE,
                Orientation.PORTRAIT.code,
            )
            page_size, code = self.DEFAULT_PAGE_SIZE, Orientation.PORTRAIT.code

        engine = HtmlPdfEngine(
            page_size=page_size,
            orientation=code,
            font_size=self.font_size,
            font_family=self.font_type,
            margins=self._page_margins(),
        )
        self.set_property("engine", engine)
        self.register_page_format(page_size, code)

        for setter, value in (
            (engine.set_title, self.meta_title),
            (engine.set_author, self.meta_author),
            (engine.set_subject, self.meta_subject),
            (engine.set_creator, self.meta_creator),
        ):
            if value:
                setter(value)
        if self.meta_keywords:
            engine.set_keywords(", ".join(self.meta_keywords))
        return self

    def _page_margins(self) -> PageMargins:
        return PageMargins(
            left=self.margin_left,
            top=self.margin_top,
            right=self.margin_right,
            bottom=self.margin_bottom,
            header=self.margin_header,
            footer=self.margin_footer,
        )

    def register_page_margins(self) -> "Pdf":
        """Push the stored margins into the engine."""
        engine = self._require_engine()
        engine.set_page_margins(self._page_margins())
        logger.debug("Page margins now %s (printable width %.1fmm)", self._page_margins(), engine.epw)
        return self

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def set_font_size(self, size: int) -> "Pdf":
        self.set_property("font_size", int(size))
        self._require_engine().set_default_font_size(self.font_size)
        return self

    def set_filename(self, filename: str) -> "Pdf":
        return self.set_property("filename", filename)

    def set_output_destination(self, destination: str) -> "Pdf":
        code = str(destination)[:1].upper()
        if code == BROWSER_DESTINATION:
            code = OutputDestination.INLINE.value
        if code not in self.output_types:
            raise PdfConfigurationError(
                f"Output destination must be one of {', '.join(self.output_types)}"
                f" or {BROWSER_DESTINATION}, got {destination!r}"
            )
        return self.set_property("output_destination", code)

    # ------------------------------------------------------------------
    # Pages from other documents
    # ------------------------------------------------------------------

    def import_pages(self, file_path: Union[str, Path]) -> "Pdf":
        """Append every page of an existing PDF after the pages written so far."""
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f'The file "{file_path}" does not exist.')

        self._require_engine().import_pages(path)
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> bytes:
        """Finish the document and return its bytes.

        With the ``F`` destination the bytes are also written to ``filename``.
        """
        data = self._require_engine().output_document()
        if self.output_destination == OutputDestination.FILE.value:
            Path(self.filename).write_bytes(data)
            logger.info("Wrote %d bytes to %s", len(data), self.filename)
        return data

    def content_disposition(self) -> Optional[str]:
        """HTTP ``Content-Disposition`` value for inline / download destinations."""
        name = Path(self.filename).name
        if self.output_destination == OutputDestination.INLINE.value:
            return f'inline; filename="{name}"'
        if self.output_destination == OutputDestination.DOWNLOAD.value:
            return f'attachment; filename="{name}"'
        return None

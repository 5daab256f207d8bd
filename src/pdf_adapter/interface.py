"""Contract implemented by every PDF adapter.

Setters return the adapter itself so calls can be chained::

    pdf = (
        Pdf()
        .initialize_page_setup("A4", "Landscape")
        .set_font_type("georgia")
        .append_page_content("<p>Hello</p>")
    )
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping, Optional


class PdfInterface(ABC):
    """Fluent configuration API in front of a PDF engine."""

    DEFAULT_CHARSET = "UTF-8"
    DEFAULT_PAGE_SIZE = "Letter"
    DEFAULT_FILENAME = "document.pdf"
    DEFAULT_PAGE_ORIENTATION = "Portrait"
    DEFAULT_OUTPUT_DESTINATION = "B"

    @abstractmethod
    def initialize_page_setup(
        self, page_size: Optional[str] = None, orientation: Optional[str] = None
    ) -> "PdfInterface":
        """Create the engine for the given page size and orientation."""
        ...

    @abstractmethod
    def set_header(self, data: Mapping[str, str]) -> "PdfInterface":
        """Write a two-column header block (``left`` / ``right``)."""
        ...

    @abstractmethod
    def set_footer(self, data: Mapping[str, str], side: str = "both") -> "PdfInterface":
        """Install a three-column running footer (``left`` / ``center`` / ``right``)."""
        ...

    @abstractmethod
    def set_output_destination(self, destination: str) -> "PdfInterface": ...

    @abstractmethod
    def set_filename(self, filename: str) -> "PdfInterface": ...

    @abstractmethod
    def set_font_type(self, fontname: Optional[str] = None) -> "PdfInterface": ...

    @abstractmethod
    def append_page_content(self, html: str) -> "PdfInterface": ...

    @abstractmethod
    def render(self) -> bytes:
        """Produce the finished document."""
        ...

    @abstractmethod
    def set_font_size(self, size: int) -> "PdfInterface": ...

    @abstractmethod
    def set_margin_top(self, margin_top: int) -> "PdfInterface": ...

    @abstractmethod
    def set_margin_right(self, margin_right: int) -> "PdfInterface": ...

    @abstractmethod
    def set_margin_bottom(self, margin_bottom: int) -> "PdfInterface": ...

    @abstractmethod
    def set_margin_left(self, margin_left: int) -> "PdfInterface": ...

    @abstractmethod
    def set_margin_header(self, margin_header: int) -> "PdfInterface": ...

    @abstractmethod
    def set_margin_footer(self, margin_footer: int) -> "PdfInterface": ...

    @abstractmethod
    def set_margins(self, setting: Mapping[str, int]) -> "PdfInterface": ...

    @abstractmethod
    def set_page_size(self, page_size: str) -> "PdfInterface": ...

    @abstractmethod
    def append_page_css(self, css: str) -> "PdfInterface": ...

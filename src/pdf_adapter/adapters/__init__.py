"""PDF adapters and the engine they drive."""

from pdf_adapter.adapters.base import AbstractPdfAdapter
from pdf_adapter.adapters.engine import HtmlPdfEngine, PageMargins
from pdf_adapter.adapters.pdf import Pdf

__all__ = ["AbstractPdfAdapter", "HtmlPdfEngine", "PageMargins", "Pdf"]

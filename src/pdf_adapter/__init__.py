"""Fluent page, font, header/footer and metadata setup for fpdf2 documents."""

from pdf_adapter.adapters import AbstractPdfAdapter, Pdf
from pdf_adapter.errors import (
    EngineNotInitializedError,
    PageImportError,
    PdfAdapterError,
    PdfConfigurationError,
    PdfRenderError,
)
from pdf_adapter.interface import PdfInterface

__version__ = Pdf.VERSION

__all__ = [
    "AbstractPdfAdapter",
    "EngineNotInitializedError",
    "PageImportError",
    "Pdf",
    "PdfAdapterError",
    "PdfConfigurationError",
    "PdfInterface",
    "PdfRenderError",
    "__version__",
]

"""Custom exceptions for the PDF adapter.

Adapters raise these; the CLI catches them and reports them to the user.
Errors coming from the PDF engines themselves are wrapped at the point
where the adapter hands work to them.
"""


class PdfAdapterError(Exception):
    """Base exception for all PDF adapter errors."""


class PdfConfigurationError(PdfAdapterError):
    """Raised when a setting is outside the values the adapter accepts."""


class EngineNotInitializedError(PdfAdapterError):
    """Raised when an engine call is made before ``initialize_page_setup``."""


class PageImportError(PdfAdapterError):
    """Raised when pages of an existing PDF cannot be read for import."""


class PdfRenderError(PdfAdapterError):
    """Raised when the engine fails to produce the PDF byte stream."""

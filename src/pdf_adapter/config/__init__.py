"""Adapter defaults configuration package."""

from pdf_adapter.config.loader import get_config, load_config, merge_settings
from pdf_adapter.config.models import PdfConfig

__all__ = ["PdfConfig", "get_config", "load_config", "merge_settings"]

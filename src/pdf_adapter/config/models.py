"""Pydantic models for the adapter defaults.

These models validate and type the JSON configuration file holding the
initial state of every adapter: page geometry, margins, font and output
settings.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from pdf_adapter.constants import ORIENTATION_TYPES, OUTPUT_TYPES, PAGE_TYPES


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------


class PageSettings(BaseModel):
    """Page size and orientation."""

    size: str = "Letter"
    orientation: str = "Portrait"

    @field_validator("size")
    @classmethod
    def _known_size(cls, value: str) -> str:
        if value not in PAGE_TYPES:
            raise ValueError(f"page size must be one of {', '.join(PAGE_TYPES)}")
        return value

    @field_validator("orientation")
    @classmethod
    def _known_orientation(cls, value: str) -> str:
        value = value.capitalize()
        if value not in ORIENTATION_TYPES:
            raise ValueError(f"orientation must be one of {', '.join(ORIENTATION_TYPES)}")
        return value


class MarginSettings(BaseModel):
    """Page margins in millimetres."""

    top: int = Field(11, ge=0)
    right: int = Field(15, ge=0)
    bottom: int = Field(14, ge=0)
    left: int = Field(11, ge=0)
    header: int = Field(5, ge=0, description="Distance from the page top to the header")
    footer: int = Field(9, ge=0, description="Distance from the page bottom to the footer")


# ---------------------------------------------------------------------------
# Fonts & output
# ---------------------------------------------------------------------------


class FontSettings(BaseModel):
    """Default body font."""

    type: str = "Times"
    size: int = Field(12, gt=0, description="Font size in points")


class OutputSettings(BaseModel):
    """Rendered file name and destination."""

    filename: str = "document.pdf"
    destination: str = "I"

    @field_validator("destination")
    @classmethod
    def _known_destination(cls, value: str) -> str:
        value = value[:1].upper()
        if value not in OUTPUT_TYPES:
            raise ValueError(f"destination must be one of {', '.join(OUTPUT_TYPES)}")
        return value


class MetaSettings(BaseModel):
    """Document information written when the engine is created."""

    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    creator: Optional[str] = None
    keywords: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class PdfConfig(BaseModel):
    """Root configuration model."""

    charset: str = "UTF-8"
    page: PageSettings = Field(default_factory=PageSettings)
    margins: MarginSettings = Field(default_factory=MarginSettings)
    font: FontSettings = Field(default_factory=FontSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    meta: MetaSettings = Field(default_factory=MetaSettings)

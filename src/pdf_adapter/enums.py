"""Enumerations for page setup and output handling."""

from enum import Enum


class PageSize(str, Enum):
    """Page sizes the adapter accepts."""

    LETTER = "Letter"
    LEGAL = "Legal"
    A4 = "A4"
    TABLOID = "Tabloid"


class Orientation(str, Enum):
    """Page orientations."""

    PORTRAIT = "Portrait"
    LANDSCAPE = "Landscape"

    @property
    def code(self) -> str:
        """Single-letter form used in page formats ("P" / "L")."""
        return self.value[0]


class OutputDestination(str, Enum):
    """Where a rendered document is meant to go."""

    INLINE = "I"  # Shown in the browser
    DOWNLOAD = "D"  # Sent as an attachment
    FILE = "F"  # Saved to a local file
    STRING = "S"  # Returned to the caller only


class FooterSide(str, Enum):
    """Pages a running footer applies to."""

    BOTH = "both"
    ODD = "odd"
    EVEN = "even"

"""Fixed tables shared by the adapters and the engine.

Font aliases map a short name to the CSS ``font-family`` stack written
into the document body. The engine only ships the PDF core fonts, so
``CORE_FONT_NAMES`` maps the names found in those stacks to the core
font that stands in for them.
"""

from __future__ import annotations

from pdf_adapter.enums import Orientation, OutputDestination, PageSize

# ---------------------------------------------------------------------------
# Accepted values
# ---------------------------------------------------------------------------

PAGE_TYPES: tuple[str, ...] = tuple(member.value for member in PageSize)
OUTPUT_TYPES: tuple[str, ...] = tuple(member.value for member in OutputDestination)
ORIENTATION_TYPES: tuple[str, ...] = tuple(member.value for member in Orientation)

# Browser output is served inline
BROWSER_DESTINATION = "B"

# Width x height in millimetres, portrait
PAGE_DIMENSIONS_MM: dict[str, tuple[float, float]] = {
    PageSize.LETTER.value: (215.9, 279.4),
    PageSize.LEGAL.value: (215.9, 355.6),
    PageSize.A4.value: (210.0, 297.0),
    PageSize.TABLOID.value: (279.4, 431.8),
}

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------

FONT_FAMILIES: dict[str, str] = {
    "arial": "Arial, 'Helvetica Neue', Helvetica, sans-serif",
    "times": "TimesNewRoman, 'Times New Roman', Times, Baskerville, Georgia, serif",
    "tahoma": "Tahoma, Verdana, Segoe, Geneva, sans-serif",
    "georgia": "Georgia, Times, 'Times New Roman', serif",
    "trebuchet": (
        "'Trebuchet MS', 'Lucida Grande', 'Lucida Sans Unicode', 'Lucida Sans', "
        "Helvetica, Tahoma, sans-serif"
    ),
    "courier": (
        "'Courier New', Courier, 'Lucida Sans Typewriter', 'Lucida Typewriter', monospace"
    ),
    "lucida": (
        "'Lucida Sans Typewriter', 'Lucida Console', monaco, 'Bitstream Vera Sans Mono', "
        "monospace"
    ),
    "lucida-bright": "'Lucida Bright', Georgia, serif",
    "palatino": (
        "'Palatino Linotype', 'Palatino LT STD', 'Book Antiqua', Palatino, Georgia, serif"
    ),
    "garamond": (
        "Garamond, Baskerville, 'Baskerville Old Face', 'Hoefler Text', "
        "'Times New Roman', serif"
    ),
    "verdana": "Verdana, Geneva, sans-serif",
    "console": (
        "'Lucida Console', 'Lucida Sans Typewriter', Monaco, 'Bitstream Vera Sans Mono', "
        "monospace"
    ),
    "monaco": (
        "'Lucida Console', 'Lucida Sans Typewriter', Monaco, 'Bitstream Vera Sans Mono', "
        "monospace"
    ),
    "helvetica": (
        "'HelveticaNeue-Light', 'Helvetica Neue Light', 'Helvetica Neue', Helvetica, Arial, "
        "'Lucida Grande', sans-serif"
    ),
    "calibri": "Calibri, Candara, Segoe, 'Segoe UI', Optima, Arial, sans-serif",
    "avant-garde": (
        "'Avant Garde', Avantgarde, 'Century Gothic', CenturyGothic, AppleGothic, sans-serif"
    ),
    "cambria": "Cambria, Georgia, serif",
    "default": "Arial, 'Helvetica Neue', Helvetica, sans-serif",
}

DEFAULT_FONT_ALIAS = "default"

_SANS = "helvetica"
_SERIF = "times"
_MONO = "courier"

CORE_FONT_NAMES: dict[str, str] = {
    # sans-serif
    "arial": _SANS,
    "helvetica": _SANS,
    "helvetica neue": _SANS,
    "helveticaneue-light": _SANS,
    "helvetica neue light": _SANS,
    "tahoma": _SANS,
    "verdana": _SANS,
    "segoe": _SANS,
    "segoe ui": _SANS,
    "geneva": _SANS,
    "trebuchet ms": _SANS,
    "lucida grande": _SANS,
    "lucida sans unicode": _SANS,
    "lucida sans": _SANS,
    "calibri": _SANS,
    "candara": _SANS,
    "optima": _SANS,
    "avant garde": _SANS,
    "avantgarde": _SANS,
    "century gothic": _SANS,
    "centurygothic": _SANS,
    "applegothic": _SANS,
    "sans-serif": _SANS,
    # serif
    "times": _SERIF,
    "timesnewroman": _SERIF,
    "times new roman": _SERIF,
    "baskerville": _SERIF,
    "baskerville old face": _SERIF,
    "hoefler text": _SERIF,
    "georgia": _SERIF,
    "garamond": _SERIF,
    "palatino": _SERIF,
    "palatino linotype": _SERIF,
    "palatino lt std": _SERIF,
    "book antiqua": _SERIF,
    "lucida bright": _SERIF,
    "cambria": _SERIF,
    "serif": _SERIF,
    # monospace
    "courier": _MONO,
    "courier new": _MONO,
    "lucida sans typewriter": _MONO,
    "lucida typewriter": _MONO,
    "lucida console": _MONO,
    "monaco": _MONO,
    "bitstream vera sans mono": _MONO,
    "monospace": _MONO,
}

FALLBACK_CORE_FONT = _SANS

# ---------------------------------------------------------------------------
# Header / footer tokens
# ---------------------------------------------------------------------------

HEADER_DATE_TOKEN = '{{date("n/d/Y g:i A")}}'
FOOTER_PAGE_TOKENS: tuple[str, ...] = ('{{ page("# of #") }}', '{{page("# of #")}}')
FOOTER_PAGE_REPLACEMENT = "{PAGENO} of {nb}"

# Substituted by the engine when a running footer is drawn
PAGE_NUMBER_ALIAS = "{PAGENO}"
PAGE_TOTAL_ALIAS = "{nb}"

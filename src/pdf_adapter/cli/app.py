"""Typer commands for rendering HTML to PDF and checking settings files.

Command-line options become overrides on top of the settings file, so the
adapter is built from one validated ``PdfConfig``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from pdf_adapter.cli.formatters import (
    fonts_table,
    render_summary,
    report_error,
    settings_table,
    validation_table,
)

app = typer.Typer(
    name="pdf-adapter",
    help="📄 Render HTML fragments to PDF with page, font, header/footer and metadata setup",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

config_app = typer.Typer(
    name="config",
    help="⚙️  Inspect and check settings files",
    rich_markup_mode="rich",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

_MARGIN_ORDER = ("top", "right", "bottom", "left", "header", "footer")

ConfigOption = Annotated[
    Optional[str],
    typer.Option("--config", "-c", help="JSON settings file (default: packaged defaults)"),
]


def _parse_margins(text: str) -> dict[str, int]:
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != len(_MARGIN_ORDER):
        raise typer.BadParameter(
            "expected six comma-separated values: top,right,bottom,left,header,footer"
        )
    try:
        return dict(zip(_MARGIN_ORDER, (int(p) for p in parts)))
    except ValueError:
        raise typer.BadParameter("margins must be whole millimetres")


def _load(config: Optional[str], overrides: Optional[dict[str, Any]] = None):
    """Load settings, reporting bad files and values before exiting with 1."""
    from pydantic import ValidationError

    from pdf_adapter import PdfConfigurationError
    from pdf_adapter.config import load_config

    try:
        return load_config(config, overrides)
    except ValidationError as e:
        validation_table(e.errors())
    except (FileNotFoundError, PdfConfigurationError) as e:
        report_error(e)
    raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# pdf-adapter render
# ---------------------------------------------------------------------------


@app.command()
def render(
    source: Annotated[str, typer.Argument(help="HTML file to render")],
    output: Annotated[
        Optional[str], typer.Option("--output", "-o", help="Output PDF file")
    ] = None,
    page_size: Annotated[
        Optional[str], typer.Option("--page-size", "-s", help="Letter, Legal, A4 or Tabloid")
    ] = None,
    orientation: Annotated[
        Optional[str], typer.Option("--orientation", help="Portrait or Landscape")
    ] = None,
    font: Annotated[
        Optional[str], typer.Option("--font", "-f", help="Font alias (see `fonts`)")
    ] = None,
    font_size: Annotated[
        Optional[int], typer.Option("--font-size", help="Body font size in points")
    ] = None,
    margins: Annotated[
        Optional[str],
        typer.Option("--margins", help="top,right,bottom,left,header,footer in mm"),
    ] = None,
    title: Annotated[Optional[str], typer.Option("--title", "-t", help="Document title")] = None,
    author: Annotated[Optional[str], typer.Option("--author", "-a", help="Author")] = None,
    subject: Annotated[Optional[str], typer.Option("--subject", help="Subject")] = None,
    creator: Annotated[Optional[str], typer.Option("--creator", help="Creator")] = None,
    keyword: Annotated[
        Optional[list[str]], typer.Option("--keyword", "-k", help="Keyword (repeatable)")
    ] = None,
    css: Annotated[Optional[str], typer.Option("--css", help="Stylesheet file")] = None,
    header_left: Annotated[
        Optional[str], typer.Option("--header-left", help="Header left text ('|' breaks lines)")
    ] = None,
    header_right: Annotated[
        Optional[str], typer.Option("--header-right", help="Header right text")
    ] = None,
    footer_left: Annotated[
        Optional[str], typer.Option("--footer-left", help="Footer left text")
    ] = None,
    footer_center: Annotated[
        Optional[str], typer.Option("--footer-center", help="Footer center text")
    ] = None,
    footer_right: Annotated[
        Optional[str], typer.Option("--footer-right", help="Footer right text")
    ] = None,
    append: Annotated[
        Optional[list[str]],
        typer.Option("--append", help="PDF whose pages follow the HTML (repeatable)"),
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Render an HTML file to PDF."""
    from pdf_adapter import Pdf, PdfAdapterError
    from pdf_adapter.constants import DEFAULT_FONT_ALIAS, FONT_FAMILIES

    source_path = Path(source)
    if not source_path.is_file():
        report_error(f"File not found: {source}")
        raise typer.Exit(code=1)
    out_path = Path(output) if output else source_path.with_suffix(".pdf")

    font_stack = None
    if font:
        font_stack = FONT_FAMILIES.get(font.lower(), FONT_FAMILIES[DEFAULT_FONT_ALIAS])
    cfg = _load(
        config,
        {
            "page": {"size": page_size, "orientation": orientation},
            "margins": _parse_margins(margins) if margins else None,
            "font": {"type": font_stack, "size": font_size},
            "output": {"filename": str(out_path), "destination": "F"},
            "meta": {
                "title": title,
                "author": author,
                "subject": subject,
                "creator": creator,
                "keywords": keyword or None,
            },
        },
    )

    try:
        pdf = Pdf(config=cfg).initialize_page_setup()
        if css:
            pdf.append_page_css(Path(css).read_text(encoding="utf-8"))
        if footer_left or footer_center or footer_right:
            pdf.set_footer({"left": footer_left, "center": footer_center, "right": footer_right})
        if header_left or header_right:
            pdf.set_header({"left": header_left or "", "right": header_right or ""})

        pdf.append_page_content(source_path.read_text(encoding="utf-8"))
        for extra in append or []:
            pdf.import_pages(extra)
        data = pdf.render()
    except (PdfAdapterError, OSError) as e:
        report_error(e)
        raise typer.Exit(code=1)

    render_summary(source_path, out_path, pdf.page_format, pdf.engine.page_no(), len(data))


# ---------------------------------------------------------------------------
# pdf-adapter fonts
# ---------------------------------------------------------------------------


@app.command()
def fonts() -> None:
    """List the font aliases accepted by --font."""
    from pdf_adapter.adapters.engine import resolve_core_font
    from pdf_adapter.constants import FONT_FAMILIES

    core = {alias: resolve_core_font(stack) for alias, stack in FONT_FAMILIES.items()}
    fonts_table(FONT_FAMILIES, core)


# ---------------------------------------------------------------------------
# pdf-adapter config show / validate
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(config: ConfigOption = None) -> None:
    """Show the settings an adapter starts from."""
    settings_table(_load(config).model_dump())


@config_app.command("validate")
def config_validate(
    config_file: Annotated[str, typer.Argument(help="JSON settings file to check")],
) -> None:
    """Check a settings file and show the values it resolves to."""
    cfg = _load(config_file)
    settings_table(cfg.model_dump(), title=f"✅ {Path(config_file).name} is valid")

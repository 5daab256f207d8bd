"""Adapter defaults: the packaged JSON file, custom files and per-run overrides.

A settings file only has to name the values it changes; missing sections and
fields keep the model defaults. Overrides (e.g. command-line options) are
overlaid section by section on top of a file before validation, so a bad
value is reported the same way wherever it came from.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from pdf_adapter.config.models import PdfConfig
from pdf_adapter.errors import PdfConfigurationError

logger = logging.getLogger(__name__)

DEFAULTS_FILE = Path(__file__).with_name("pdf_defaults.json")

# Validated files, keyed by resolved path
_file_cache: dict[Path, PdfConfig] = {}


def _read_settings(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise PdfConfigurationError(f"Not valid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise PdfConfigurationError(f"{path} must hold a JSON object")
    return data


def merge_settings(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay *overrides* on *base*, recursing into nested sections.

    ``None`` values in *overrides* mean "not given" and leave *base* alone.
    """
    merged = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(
    path: Optional[Union[str, Path]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> PdfConfig:
    """Validated settings from *path* (default: the packaged file) plus *overrides*.

    Raises
    ------
    FileNotFoundError
        If *path* is not a file.
    PdfConfigurationError
        If the file is not a JSON object.
    pydantic.ValidationError
        If the merged settings are out of range.
    """
    config_path = Path(path).resolve() if path else DEFAULTS_FILE
    config = _file_cache.get(config_path)
    if config is None:
        config = PdfConfig.model_validate(_read_settings(config_path))
        _file_cache[config_path] = config
        logger.debug("Loaded PDF settings from %s", config_path)

    if not overrides:
        return config
    return PdfConfig.model_validate(merge_settings(config.model_dump(), overrides))


def get_config() -> PdfConfig:
    """The packaged defaults."""
    return load_config()


def clear_cache() -> None:
    _file_cache.clear()

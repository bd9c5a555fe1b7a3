#!/usr/bin/env python3
"""Configuration loading and path resolution for datepick."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from models import DATE_FMT, OptionDefinition, ValidationError, normalize_option_payload
from paths import config_dir, data_dir

DEFAULT_HISTORY_FILENAME = "history.parquet"
CONFIG_FILENAME = "config.json"


def _default_history_path() -> Path:
    return data_dir() / DEFAULT_HISTORY_FILENAME


@dataclass
class Config:
    date_format: str = DATE_FMT
    show_range_label_on_input: bool = True
    show_default_options: bool = True
    rematch_on_change: bool = False
    options: Tuple[OptionDefinition, ...] = ()
    history_path: Path = field(default_factory=_default_history_path)


def default_config_path() -> Path:
    return config_dir() / CONFIG_FILENAME


def load_config(path: Optional[Path] = None) -> Config:
    """Load config from the XDG path, falling back to defaults.

    Invalid JSON falls back to defaults. Option entries and flags that are
    present but malformed raise ``ValidationError`` so a broken setting is
    never silently replaced.
    """

    config_path = path or default_config_path()
    raw: Dict[str, Any] = {}

    if config_path.exists():
        raw_text = config_path.read_text()
        try:
            raw = json.loads(raw_text)
        except json.JSONDecodeError:
            try:
                raw = json.loads(_strip_trailing_commas(raw_text))
            except json.JSONDecodeError:
                raw = {}

    if not isinstance(raw, dict):
        raw = {}

    raw_options = raw.get("options") or []
    if not isinstance(raw_options, list):
        raise ValidationError("'options' must be a list of option objects")
    options = tuple(normalize_option_payload(entry) for entry in raw_options)

    history_raw = raw.get("history_path")
    history_path = Path(history_raw).expanduser() if history_raw else _default_history_path()

    return Config(
        date_format=str(raw.get("date_format") or DATE_FMT),
        show_range_label_on_input=_coerce_flag(raw, "show_range_label_on_input", True),
        show_default_options=_coerce_flag(raw, "show_default_options", True),
        rematch_on_change=_coerce_flag(raw, "rematch_on_change", False),
        options=options,
        history_path=history_path,
    )


def _coerce_flag(raw: Dict[str, Any], name: str, default: bool) -> bool:
    value = raw.get(name)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValidationError(f"'{name}' must be true or false")
    return value


def _strip_trailing_commas(text: str) -> str:
    """Remove trailing commas before closing braces/brackets."""
    return re.sub(r",(\s*[}\]])", r"\1", text)


__all__ = ["Config", "load_config", "default_config_path", "CONFIG_FILENAME"]

#!/usr/bin/env python3
"""XDG path helpers for datepick."""

from __future__ import annotations

import os
from pathlib import Path

APP_DIRNAME = "datepick"


def _xdg_dir(env_var: str, fallback: str) -> Path:
    raw = os.environ.get(env_var) or fallback
    return Path(raw).expanduser()


def config_dir() -> Path:
    return _xdg_dir("XDG_CONFIG_HOME", "~/.config") / APP_DIRNAME


def data_dir() -> Path:
    return _xdg_dir("XDG_DATA_HOME", "~/.local/share") / APP_DIRNAME


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


__all__ = ["config_dir", "data_dir", "ensure_dir", "APP_DIRNAME"]

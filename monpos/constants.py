"""Shared constants for monpos."""

import os
from pathlib import Path

from .models import Alignment

__all__ = [
    "CONFIG_FILE",
    "DEFAULT_ALIGN",
    "DEFAULT_SCALE",
    "MONITORS_SECTION",
]

# Config file path - use XDG_CONFIG_HOME with fallback to ~/.config
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "monpos" / "config.toml"

# Every monitor is a sub-table of this section
MONITORS_SECTION = "monitors"

DEFAULT_SCALE = 1.0
DEFAULT_ALIGN = Alignment.CENTER  # when a position is given without alignment

"""Configuration file loading utilities.

This module handles loading and parsing TOML/JSON configuration files,
applying defaults and turning them into a `Config`.
"""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .constants import CONFIG_FILE, DEFAULT_ALIGN, MONITORS_SECTION
from .models import AlignmentError, Config, ConfigError, MalformedDirectiveError, Monitor
from .rules import check_monitor
from .utils import merge
from .validation import CONFIG_SCHEMA, MONITOR_SCHEMA, ConfigValidator

if TYPE_CHECKING:
    import logging

__all__ = ["ConfigLoader", "apply_defaults"]


def apply_defaults(record: dict[str, Any]) -> Monitor:
    """Build a Monitor from a validated record, filling the defaults.

    The scale defaults to 1.0 and the alignment to "center" when a position is set.
    """
    values = {**MONITOR_SCHEMA.defaults(), **record}
    position = str(values["position"]).strip()
    align = str(values["align"])
    if position and not align:
        align = DEFAULT_ALIGN.value
    return Monitor(
        width=int(values["width"]),
        height=int(values["height"]),
        scale=float(values["scale"]),
        position=position,
        align=align,
    )


class ConfigLoader:
    """Handles loading configuration files.

    Supports:
    - TOML configuration files (preferred)
    - JSON configuration files
    - Directory-based config (every .toml file merged, in name order)
    """

    def __init__(self, log: logging.Logger) -> None:
        """Initialize the config loader.

        Args:
            log: Logger instance for status and error messages
        """
        self.log = log
        self.warnings: list[str] = []

    def load(self, config_filename: str | Path | None = None) -> Config:
        """Load, validate and parse the configuration.

        Args:
            config_filename: Optional path to config file or directory.
                           If empty, uses default CONFIG_FILE location.

        Returns:
            The monitors, in declaration order

        Raises:
            ConfigError: If the file is missing, unreadable or invalid
            MalformedDirectiveError: If a position has an unknown direction
            AlignmentError: If an alignment doesn't fit its position
        """
        return self.parse(self.open_config(config_filename))

    def open_config(self, config_filename: str | Path | None = None) -> dict[str, Any]:
        """Load config file(s) into a dictionary.

        Args:
            config_filename: Optional configuration file or directory path

        Returns:
            The loaded configuration dictionary
        """
        if not config_filename:
            return self._load_config_file(CONFIG_FILE)

        fname = Path(os.path.expandvars(str(config_filename))).expanduser()
        if fname.is_dir():
            return self._load_config_directory(fname)
        return self._load_config_file(fname)

    def _load_config_directory(self, directory: Path) -> dict[str, Any]:
        """Load and merge all .toml files from a directory.

        Args:
            directory: Path to directory containing .toml files

        Returns:
            Merged configuration from all files
        """
        config: dict[str, Any] = {}
        for toml_file in sorted(f.name for f in directory.iterdir()):
            if not toml_file.endswith(".toml"):
                continue
            merge(config, self._load_config_file(directory / toml_file))
        return config

    def _load_config_file(self, fname: Path) -> dict[str, Any]:
        """Load a single configuration file.

        Args:
            fname: Path to the configuration file

        Returns:
            Configuration dictionary

        Raises:
            ConfigError: If the file is missing, unreadable, not UTF-8 or has syntax errors
        """
        if not fname.exists():
            self.log.critical("Config file not found! Please create %s", fname)
            msg = f"config file not found: {fname}"
            raise ConfigError(msg)

        self.log.info("Loading %s", fname)
        try:
            if fname.suffix.lower() == ".json":
                with fname.open(encoding="utf-8") as f:
                    return dict(json.load(f))
            with fname.open("rb") as f:
                return tomllib.load(f)
        except (OSError, TypeError, ValueError) as e:  # decoding errors are ValueErrors
            self.log.critical("Problem reading %s: %s", fname, e)
            msg = f"problem reading {fname}: {e}"
            raise ConfigError(msg) from e

    def parse(self, raw: dict[str, Any]) -> Config:
        """Validate a raw configuration and build the monitors.

        Args:
            raw: The configuration, as read from a file

        Returns:
            The monitors, in declaration order
        """
        validator = ConfigValidator(raw, "monpos", self.log)
        errors = validator.validate(CONFIG_SCHEMA)
        self.warnings = validator.warnings
        if errors:
            for error in errors:
                self.log.error(error)
            msg = "invalid configuration"
            raise ConfigError(msg, errors)

        config: Config = {name: apply_defaults(record) for name, record in raw[MONITORS_SECTION].items()}
        for name, monitor in config.items():
            try:
                check_monitor(name, monitor)
            except (AlignmentError, MalformedDirectiveError) as e:
                self.log.error("%s", e)
                raise
            self.log.debug("%s: %s", name, monitor)
        return config

"""Schema of the configuration file.

The raw TOML/JSON data is checked here, before being turned into Monitor
objects, so that every problem of a file is reported in a single run.
Unknown keys only produce warnings, with a suggestion when they look like a typo.
"""

import difflib
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .constants import DEFAULT_SCALE, MONITORS_SECTION
from .models import Alignment

__all__ = [
    "CONFIG_SCHEMA",
    "MONITOR_SCHEMA",
    "ConfigField",
    "ConfigItems",
    "ConfigValidator",
    "format_config_error",
]


@dataclass
class ConfigField:
    """One expected key.

    Attributes:
        name: The key
        field_type: One of int, float, str or dict
        required: Whether the key must be present
        default: Value used when the key is absent
        choices: Accepted values, when restricted
        validator: Returns error messages for an invalid value
        children: Schema of every value of a dict field
    """

    name: str
    field_type: type = str
    required: bool = False
    default: Any = None
    choices: list | None = None
    validator: Callable[[Any], list[str]] | None = None
    children: "ConfigItems | None" = None


class ConfigItems(list):
    """The fields of a section."""

    def __init__(self, *fields: ConfigField) -> None:
        super().__init__(fields)

    def defaults(self) -> dict[str, Any]:
        """Return the default value of every field having one."""
        return {f.name: f.default for f in self if f.default is not None}


def _find_similar_key(unknown_key: str, known_keys: list[str]) -> str | None:
    """Return the known key closest to `unknown_key`, if any is close enough."""
    matches = difflib.get_close_matches(unknown_key, known_keys, n=1)
    return matches[0] if matches else None


def format_config_error(section: str, field: str, message: str, suggestion: str = "") -> str:
    """Format a configuration error message.

    Args:
        section: Section holding the field (e.g. "monitors.DP-1")
        field: Field name that has the error
        message: Error description
        suggestion: Optional suggestion for fixing the error

    Returns:
        Formatted error message
    """
    msg = f"[{section}] Config error for '{field}': {message}"
    if suggestion:
        msg += f" -> {suggestion}"
    return msg


def _positive(value: Any) -> list[str]:
    """Validator for strictly positive, finite numbers."""
    number = float(value)
    if not math.isfinite(number) or number <= 0:
        return [f"Must be a finite number greater than 0, got {value}"]
    return []


def _two_words(value: str) -> list[str]:
    """Validator for positions: `<direction> <monitor>`."""
    if value and len(value.split()) != 2:  # noqa: PLR2004
        return [f"Expected '<direction> <monitor>', got '{value}'"]
    return []


def _valid_name(name: str) -> list[str]:
    """Validator for monitor names, which must be usable inside a position."""
    if not name or len(name.split()) != 1 or name != name.strip():
        return [f"Invalid monitor name {name!r}: must be a single word"]
    return []


def _valid_names(monitors: dict) -> list[str]:
    return [error for name in monitors for error in _valid_name(name)]


MONITOR_SCHEMA = ConfigItems(
    ConfigField("width", int, required=True, validator=_positive),
    ConfigField("height", int, required=True, validator=_positive),
    ConfigField("scale", float, default=DEFAULT_SCALE, validator=_positive),
    ConfigField("position", str, default="", validator=_two_words),
    ConfigField("align", str, default="", choices=["", *(a.value for a in Alignment)]),
)

CONFIG_SCHEMA = ConfigItems(
    ConfigField(MONITORS_SECTION, dict, required=True, validator=_valid_names, children=MONITOR_SCHEMA),
)

# Example value suggested for a missing or mistyped field
_EXAMPLES = {int: "1920", float: "1.5", str: '"value"'}


def _has_type(expected: type, value: Any) -> bool:
    """Check a TOML value against a field type.

    Booleans are never numbers, integral floats are accepted as int and ints as float.
    """
    if isinstance(value, bool):
        return False
    if expected is int:
        return isinstance(value, int) or (isinstance(value, float) and value.is_integer())
    if expected is float:
        return isinstance(value, (int, float))
    return isinstance(value, expected)


class ConfigValidator:
    """Validates one section of the configuration against a schema.

    Errors are returned by `validate`, warnings about unknown keys are
    logged and collected in `warnings`, including those of nested sections.
    """

    def __init__(self, config: dict, section: str, logger: logging.Logger) -> None:
        self.config = config
        self.section = section
        self.log = logger
        self.warnings: list[str] = []

    def validate(self, schema: ConfigItems) -> list[str]:
        """Return every error found in the section, an empty list if it's valid."""
        errors = []
        for field_def in schema:
            errors.extend(self._field_errors(field_def, self.config.get(field_def.name)))
        self.warn_unknown_keys(schema)
        return errors

    def _field_errors(self, field_def: ConfigField, value: Any) -> list[str]:
        name = field_def.name
        if value is None:
            if not field_def.required:
                return []
            if field_def.field_type is dict:
                suggestion = f"Add a [{name}] section"
            else:
                suggestion = f"Add {name} = {_EXAMPLES[field_def.field_type]} to [{self.section}]"
            return [format_config_error(self.section, name, "Missing required field", suggestion)]

        if not _has_type(field_def.field_type, value):
            suggestion = ""
            if field_def.field_type in _EXAMPLES:
                suggestion = f"Use {name} = {_EXAMPLES[field_def.field_type]}"
            return [format_config_error(self.section, name, f"Expected {field_def.field_type.__name__}, got {type(value).__name__}", suggestion)]

        errors = []
        if field_def.choices is not None and value not in field_def.choices:
            valid = ", ".join(repr(c) for c in field_def.choices if c)
            errors.append(format_config_error(self.section, name, f"Invalid value {value!r}", f"Valid options: {valid}"))
        if field_def.validator:
            errors.extend(format_config_error(self.section, name, message) for message in field_def.validator(value))
        if field_def.children is not None:
            errors.extend(self._children_errors(field_def, value))
        return errors

    def _children_errors(self, field_def: ConfigField, value: dict) -> list[str]:
        """Validate every sub-section of a dict field, e.g. each [monitors.NAME]."""
        errors: list[str] = []
        for key, child in value.items():
            if not isinstance(child, dict):
                errors.append(format_config_error(field_def.name, key, f"Expected dict, got {type(child).__name__}"))
                continue
            child_validator = ConfigValidator(child, f"{field_def.name}.{key}", self.log)
            errors.extend(child_validator.validate(field_def.children))
            self.warnings.extend(child_validator.warnings)
        return errors

    def warn_unknown_keys(self, schema: ConfigItems) -> list[str]:
        """Log and return a warning for every key the schema doesn't know."""
        known_keys = [f.name for f in schema]
        warnings = []
        for key in self.config:
            if key in known_keys:
                continue
            similar = _find_similar_key(key, known_keys)
            if similar:
                msg = f"[{self.section}] Unknown option '{key}' (did you mean '{similar}'?)"
            else:
                msg = f"[{self.section}] Unknown option '{key}' - will be ignored"
            self.log.warning(msg)
            warnings.append(msg)
        self.warnings.extend(warnings)
        return warnings

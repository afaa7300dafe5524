"""Output settings for termprobe.

Settings only change how the report is written (indentation, key order,
rule tracing). They are read from TERMPROBE_* environment variables and
overridden by command-line flags. They never take part in classification.
"""

import os
import sys
from collections.abc import Mapping
from typing import Callable, List, Optional, Tuple, Union

from termprobe.errors import SettingsError

# Default settings values
DEFAULT_SETTINGS = {
    "indent": None,  # None = compact single-line JSON
    "sort_keys": False,
    "explain": False,
}

# Environment overrides: variable -> settings key
ENV_OVERRIDES = {
    "TERMPROBE_INDENT": "indent",
    "TERMPROBE_SORT_KEYS": "sort_keys",
    "TERMPROBE_EXPLAIN": "explain",
}

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}

# Settings schema for validation
# Format: key -> (expected_types, validator_func or None)
# validator_func takes value and returns (is_valid, error_message)
ValidatorFunc = Callable[[Union[int, bool, None]], Tuple[bool, str]]

SETTINGS_SCHEMA: dict[str, tuple[tuple, Optional[ValidatorFunc]]] = {
    "indent": (
        (int, type(None)),
        lambda v: (True, "")
        if v is None or (not isinstance(v, bool) and 0 <= v <= 16)
        else (False, "must be an integer between 0 and 16 or null"),
    ),
    "sort_keys": ((bool,), None),
    "explain": ((bool,), None),
}


def validate_settings(settings: dict) -> List[str]:
    """Validate settings against schema.

    Args:
        settings: Settings dictionary to validate.

    Returns:
        List of validation error messages. Empty list if valid.
    """
    errors = []

    for key in settings:
        if key not in SETTINGS_SCHEMA:
            errors.append(f"Unknown setting: '{key}'")

    for key, (expected_types, validator) in SETTINGS_SCHEMA.items():
        if key not in settings:
            continue

        value = settings[key]

        if not isinstance(value, expected_types):
            type_names = " or ".join(t.__name__ for t in expected_types)
            errors.append(
                f"'{key}' has invalid type: expected {type_names}, got {type(value).__name__}"
            )
            continue

        if validator:
            is_valid, error_msg = validator(value)
            if not is_valid:
                errors.append(f"'{key}' {error_msg}")

    return errors


def parse_bool(raw: str) -> bool:
    """Parse a boolean environment value.

    Raises:
        ValueError: If the value is not a recognized boolean spelling.
    """
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def _parse_override(key: str, raw: str) -> Union[int, bool]:
    if key == "indent":
        return int(raw)
    return parse_bool(raw)


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    silent: bool = False,
) -> dict:
    """Load settings from defaults and environment overrides.

    Invalid overrides are skipped with a warning on stderr.

    Args:
        environ: Environment to read. Defaults to os.environ.
        silent: If True, suppress warning output. Default False.

    Returns:
        Settings dictionary merged with defaults.
    """
    if environ is None:
        environ = os.environ

    settings = DEFAULT_SETTINGS.copy()
    for var, key in ENV_OVERRIDES.items():
        raw = environ.get(var)
        if raw is None or raw.strip() == "":
            continue
        try:
            candidate = {key: _parse_override(key, raw)}
        except ValueError:
            if not silent:
                print(f"Warning: ignoring invalid {var}={raw!r}", file=sys.stderr)
            continue
        errors = validate_settings(candidate)
        if errors:
            if not silent:
                print(f"Warning: ignoring {var}:", file=sys.stderr)
                for error in errors:
                    print(f"  - {error}", file=sys.stderr)
            continue
        settings.update(candidate)

    return settings


def apply_overrides(settings: dict, **overrides) -> dict:
    """Merge explicit overrides (e.g. from CLI flags) into settings.

    Overrides whose value is None are ignored.

    Raises:
        SettingsError: If the merged settings are invalid.
    """
    merged = {**settings, **{k: v for k, v in overrides.items() if v is not None}}
    errors = validate_settings(merged)
    if errors:
        raise SettingsError("Invalid settings", details="; ".join(errors))
    return merged


__all__ = [
    "DEFAULT_SETTINGS",
    "ENV_OVERRIDES",
    "SETTINGS_SCHEMA",
    "validate_settings",
    "parse_bool",
    "load_settings",
    "apply_overrides",
]

"""Environment snapshot reader.

Captures the raw values of the environment variables the color classifier
looks at. Values are stored verbatim; absent and empty are different things.
"""

import os
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Optional

from termprobe.errors import EnvironmentReadError

NO_COLOR = "NO_COLOR"
FORCE_COLOR = "FORCE_COLOR"
WT_SESSION = "WT_SESSION"
DOMTERM = "DOMTERM"
KITTY_WINDOW_ID = "KITTY_WINDOW_ID"
COLORTERM = "COLORTERM"
TERM_PROGRAM = "TERM_PROGRAM"
TERM_PROGRAM_VERSION = "TERM_PROGRAM_VERSION"
TERM = "TERM"

TRACKED_VARIABLES = (
    NO_COLOR,
    FORCE_COLOR,
    WT_SESSION,
    DOMTERM,
    KITTY_WINDOW_ID,
    COLORTERM,
    TERM_PROGRAM,
    TERM_PROGRAM_VERSION,
    TERM,
)


class EnvironmentSnapshot(Mapping):
    """Read-only view of the tracked variables.

    Every tracked name maps to its raw string value, or None when unset.
    Asking for a name outside TRACKED_VARIABLES raises KeyError.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Optional[Mapping[str, Optional[str]]] = None):
        values = values or {}
        self._values = MappingProxyType(
            {name: values.get(name) for name in TRACKED_VARIABLES}
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "EnvironmentSnapshot":
        """Build a snapshot from any name -> value mapping, ignoring untracked keys."""
        return cls({name: mapping[name] for name in TRACKED_VARIABLES if name in mapping})

    def __getitem__(self, name: str) -> Optional[str]:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EnvironmentSnapshot):
            return dict(self._values) == dict(other._values)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._values.items()))

    def __repr__(self) -> str:
        present = {k: v for k, v in self._values.items() if v is not None}
        return f"EnvironmentSnapshot({present!r})"

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the raw value of a tracked variable."""
        value = self._values[name]
        return default if value is None else value

    def is_set(self, name: str) -> bool:
        """Check whether a tracked variable is present, even if empty."""
        return self._values[name] is not None

    def as_dict(self) -> dict:
        """Return a plain dict copy with None for unset variables."""
        return dict(self._values)


def read_snapshot(environ: Optional[Mapping[str, str]] = None) -> EnvironmentSnapshot:
    """Read the tracked variables from the environment.

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        EnvironmentSnapshot with the raw value of every tracked variable.

    Raises:
        EnvironmentReadError: If the environment mapping itself fails.
    """
    if environ is None:
        environ = os.environ
    try:
        return EnvironmentSnapshot.from_mapping(environ)
    except (OSError, UnicodeError) as e:
        raise EnvironmentReadError(
            "Could not read the process environment", details=str(e)
        ) from e


__all__ = [
    "NO_COLOR",
    "FORCE_COLOR",
    "WT_SESSION",
    "DOMTERM",
    "KITTY_WINDOW_ID",
    "COLORTERM",
    "TERM_PROGRAM",
    "TERM_PROGRAM_VERSION",
    "TERM",
    "TRACKED_VARIABLES",
    "EnvironmentSnapshot",
    "read_snapshot",
]

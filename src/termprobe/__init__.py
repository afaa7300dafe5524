"""termprobe - report what the surrounding terminal can do with color.

This package inspects stdout and a fixed set of environment variables and
reports whether stdout is a TTY, whether NO_COLOR / FORCE_COLOR are set, and
the richest color mode the terminal likely supports.
"""

from termprobe._version import __version__
from termprobe.classifier import (
    CapabilityReport,
    ColorMode,
    classify,
    should_colorize,
    suggest_color_mode,
)
from termprobe.probe import detect, get_report, set_report
from termprobe.snapshot import EnvironmentSnapshot, read_snapshot

__all__ = [
    "__version__",
    "CapabilityReport",
    "ColorMode",
    "EnvironmentSnapshot",
    "classify",
    "detect",
    "get_report",
    "read_snapshot",
    "set_report",
    "should_colorize",
    "suggest_color_mode",
]

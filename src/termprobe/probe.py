"""Process-wide terminal capability detection.

Usage:
    from termprobe.probe import get_report

    report = get_report()
    report.suggested_color_mode   # ColorMode.RGB, ColorMode.LOOKUP, ...
    report.no_color               # True if NO_COLOR is set

The first call to get_report() detects and caches the report. Programs that
already know their terminal (or tests) can install one with set_report().
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional, TextIO

from termprobe.classifier import CapabilityReport, ColorMode, classify
from termprobe.snapshot import read_snapshot
from termprobe.terminal import stdout_is_tty

_report: Optional[CapabilityReport] = None


def detect(
    environ: Optional[Mapping[str, str]] = None,
    stream: Optional[TextIO] = None,
) -> CapabilityReport:
    """Detect terminal capabilities and cache the result.

    Args:
        environ: Environment to read. Defaults to os.environ.
        stream: Stream to check for a TTY. Defaults to sys.stdout.

    Returns:
        The freshly detected CapabilityReport.
    """
    global _report

    snapshot = read_snapshot(environ)
    report = classify(snapshot, stdout_is_tty(stream))
    _report = report
    return report


def get_report() -> CapabilityReport:
    """Return the cached report, detecting it on first use."""
    if _report is None:
        return detect()
    return _report


def set_report(report: CapabilityReport) -> None:
    """Install an explicit report as the process-wide one."""
    global _report
    _report = report


def testing_report() -> CapabilityReport:
    """Install and return a report under which colors are always printed."""
    report = CapabilityReport(
        stdout_is_tty=True,
        no_color=False,
        force_color=True,
        suggested_color_mode=ColorMode.RGB,
    )
    set_report(report)
    return report


def invalidate_cache() -> None:
    """Clear the cached report. Useful for testing or after env changes."""
    global _report
    _report = None


__all__ = [
    "detect",
    "get_report",
    "set_report",
    "testing_report",
    "invalidate_cache",
]

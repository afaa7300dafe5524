"""Command-line interface for termprobe.

Prints one JSON record describing the terminal around the process:

    {"stdout_tty": false, "no_color": false, "force_color": null,
     "suggested_color_mode": "none"}
"""

import argparse
import json
import os
import platform
import sys
from typing import List, Optional

from termprobe._version import __version__
from termprobe.classifier import CapabilityReport, classify, match_color_rule
from termprobe.errors import (
    OutputWriteError,
    format_error_for_user,
    get_exit_code,
)
from termprobe.settings import apply_overrides, load_settings
from termprobe.snapshot import EnvironmentSnapshot, read_snapshot
from termprobe.terminal import stdout_is_tty


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="termprobe",
        description="Report terminal color capabilities as JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  termprobe                 Print the capability record on one line
  termprobe --indent 2      Pretty-print the record
  termprobe --explain       Also show which rule picked the color mode
  python -m termprobe       Same as termprobe

Environment:
  NO_COLOR, FORCE_COLOR, WT_SESSION, DOMTERM, KITTY_WINDOW_ID, COLORTERM,
  TERM_PROGRAM, TERM_PROGRAM_VERSION and TERM are inspected.
  TERMPROBE_INDENT, TERMPROBE_SORT_KEYS and TERMPROBE_EXPLAIN set output defaults.
""",
    )

    parser.add_argument(
        "--indent",
        type=int,
        metavar="N",
        help="Pretty-print JSON with N spaces (default: compact).",
    )
    parser.add_argument(
        "--sort-keys",
        action="store_true",
        default=None,
        help="Sort JSON keys.",
    )
    parser.add_argument(
        "--explain",
        action="store_true",
        default=None,
        help="Write the rule that picked the color mode to stderr.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show error details and suggestions.",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="Show version and system information",
    )

    return parser


def print_version() -> None:
    """Print version and system information."""
    print(
        f"termprobe {__version__} "
        f"(Python {sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}, "
        f"{platform.system()} {platform.machine()})"
    )


def format_report(
    report: CapabilityReport,
    indent: Optional[int] = None,
    sort_keys: bool = False,
) -> str:
    """Serialize a report to JSON text without a trailing newline."""
    return json.dumps(report.to_dict(), indent=indent, sort_keys=sort_keys)


def write_report(
    report: CapabilityReport,
    indent: Optional[int] = None,
    sort_keys: bool = False,
) -> None:
    """Write the report and a newline to stdout.

    Raises:
        OutputWriteError: If stdout cannot be written.
    """
    text = format_report(report, indent=indent, sort_keys=sort_keys)
    # termprobe 1>&- leaves the interpreter without a stdout
    if sys.stdout is None:
        raise OutputWriteError("stdout is not available")
    try:
        sys.stdout.write(text + "\n")
        sys.stdout.flush()
    except (OSError, ValueError) as e:
        _discard_stdout()
        raise OutputWriteError("Could not write report to stdout", details=str(e)) from e


def _discard_stdout() -> None:
    """Point stdout's file descriptor at devnull.

    The unwritten report stays in the stdout buffer and interpreter shutdown
    flushes it again, so a reader that went away would otherwise turn the
    exit status into 120.
    """
    try:
        fd = sys.stdout.fileno()
    except (OSError, ValueError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, fd)
    finally:
        os.close(devnull)


def explain(snapshot: EnvironmentSnapshot) -> str:
    """Describe which cascade rule decides the color mode."""
    rule = match_color_rule(snapshot)
    if rule is None:
        return "termprobe: no rule matched -> none"
    return f"termprobe: {rule.name} -> {rule.mode.value}"


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the termprobe CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.version:
        print_version()
        return

    try:
        settings = apply_overrides(
            load_settings(),
            indent=args.indent,
            sort_keys=args.sort_keys,
            explain=args.explain,
        )
        snapshot = read_snapshot()
        report = classify(snapshot, stdout_is_tty())

        if settings["explain"]:
            print(explain(snapshot), file=sys.stderr)

        write_report(report, indent=settings["indent"], sort_keys=settings["sort_keys"])
    except Exception as e:
        print(format_error_for_user(e, verbose=args.verbose), file=sys.stderr)
        sys.exit(get_exit_code(e))


__all__ = [
    "create_parser",
    "print_version",
    "format_report",
    "write_report",
    "explain",
    "main",
]

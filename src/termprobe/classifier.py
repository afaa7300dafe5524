"""Color mode classification.

Turns an EnvironmentSnapshot into a CapabilityReport. The three signals
(no_color, force_color, suggested_color_mode) are computed independently;
how to combine them is up to the caller.

The color mode is picked by COLOR_RULES, an ordered list where the first
matching rule wins. Terminals often set several of these variables at once,
so the order is the precedence.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Callable, Optional

from termprobe.snapshot import (
    COLORTERM,
    DOMTERM,
    FORCE_COLOR,
    KITTY_WINDOW_ID,
    NO_COLOR,
    TERM,
    TERM_PROGRAM,
    TERM_PROGRAM_VERSION,
    WT_SESSION,
    EnvironmentSnapshot,
)

FORCE_COLOR_OFF_VALUES = frozenset({"0", "false", "none"})

COLORTERM_RGB_TOKENS = ("truecolor", "direct", "24bit", "24bits")
TERM_RGB_SUFFIXES = ("-24bit", "-24bits", "-direct", "-truecolor")
TERM_PROGRAM_RGB = frozenset({"hyper", "wezterm", "vscode"})
TERM_NAMES_TOKENS = (
    "xterm",
    "vt100",
    "vt220",
    "screen",
    "color",
    "linux",
    "ansi",
    "rxvt",
    "konsole",
)

# iTerm2 supports 24-bit color from version 3 on
ITERM_RGB_MIN_VERSION = 3


@total_ordering
class ColorMode(Enum):
    """Color capability levels, from poorest to richest."""

    NONE = "none"
    NAMES = "names"
    LOOKUP = "lookup"
    RGB = "rgb"

    @property
    def rank(self) -> int:
        return list(ColorMode).index(self)

    def __lt__(self, other):
        if isinstance(other, ColorMode):
            return self.rank < other.rank
        return NotImplemented

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ColorRule:
    """One step of the color mode cascade."""

    name: str
    predicate: Callable[[EnvironmentSnapshot], bool]
    mode: ColorMode

    def matches(self, snapshot: EnvironmentSnapshot) -> bool:
        return self.predicate(snapshot)


@dataclass(frozen=True)
class CapabilityReport:
    """What the terminal around this process can do.

    Attributes:
        stdout_is_tty: Whether stdout is an interactive terminal.
        no_color: Whether NO_COLOR is set.
        force_color: None if FORCE_COLOR is unset, else its truthiness.
        suggested_color_mode: Richest color mode the terminal likely supports.
    """

    stdout_is_tty: bool
    no_color: bool
    force_color: Optional[bool]
    suggested_color_mode: ColorMode

    def to_dict(self) -> dict:
        """Return the report with the field names consumers expect."""
        return {
            "stdout_tty": self.stdout_is_tty,
            "no_color": self.no_color,
            "force_color": self.force_color,
            "suggested_color_mode": self.suggested_color_mode.value,
        }


def _lower(snapshot: EnvironmentSnapshot, name: str) -> Optional[str]:
    value = snapshot.get(name)
    return None if value is None else value.lower()


def _is_set(name: str) -> Callable[[EnvironmentSnapshot], bool]:
    return lambda snapshot: snapshot.is_set(name)


def _colorterm_is_rgb(snapshot: EnvironmentSnapshot) -> bool:
    colorterm = _lower(snapshot, COLORTERM)
    return colorterm is not None and any(t in colorterm for t in COLORTERM_RGB_TOKENS)


def _term_program_is(*names: str) -> Callable[[EnvironmentSnapshot], bool]:
    def predicate(snapshot: EnvironmentSnapshot) -> bool:
        return _lower(snapshot, TERM_PROGRAM) in names

    return predicate


def parse_major_version(version: Optional[str]) -> Optional[int]:
    """Parse the leading component of a dotted version string.

    Args:
        version: Version such as "3.4.19", or None.

    Returns:
        The major version as int, or None if absent or not a number.
    """
    if version is None:
        return None
    major = version.split(".", 1)[0]
    if not major.isdigit():
        return None
    # isdigit() also accepts digits like "²" that int() rejects
    try:
        return int(major)
    except ValueError:
        return None


def _iterm_supports_rgb(snapshot: EnvironmentSnapshot) -> bool:
    if not _term_program_is("iterm.app")(snapshot):
        return False
    major = parse_major_version(snapshot.get(TERM_PROGRAM_VERSION))
    return major is not None and major >= ITERM_RGB_MIN_VERSION


def _term_matches(test: Callable[[str], bool]) -> Callable[[EnvironmentSnapshot], bool]:
    def predicate(snapshot: EnvironmentSnapshot) -> bool:
        term = _lower(snapshot, TERM)
        return term is not None and test(term)

    return predicate


COLOR_RULES: tuple[ColorRule, ...] = (
    ColorRule("WT_SESSION is set", _is_set(WT_SESSION), ColorMode.RGB),
    ColorRule("DOMTERM is set", _is_set(DOMTERM), ColorMode.RGB),
    ColorRule("KITTY_WINDOW_ID is set", _is_set(KITTY_WINDOW_ID), ColorMode.RGB),
    ColorRule("COLORTERM announces 24-bit color", _colorterm_is_rgb, ColorMode.RGB),
    ColorRule("iTerm.app version 3 or later", _iterm_supports_rgb, ColorMode.RGB),
    ColorRule("iTerm.app before version 3", _term_program_is("iterm.app"), ColorMode.LOOKUP),
    ColorRule("TERM_PROGRAM is Apple_Terminal", _term_program_is("apple_terminal"), ColorMode.LOOKUP),
    ColorRule(
        "TERM_PROGRAM is a 24-bit terminal",
        _term_program_is(*TERM_PROGRAM_RGB),
        ColorMode.RGB,
    ),
    ColorRule(
        "TERM has a 24-bit suffix",
        _term_matches(lambda term: term.endswith(TERM_RGB_SUFFIXES)),
        ColorMode.RGB,
    ),
    ColorRule("TERM is alacritty", _term_matches(lambda term: term == "alacritty"), ColorMode.RGB),
    ColorRule("TERM is cygwin", _term_matches(lambda term: term == "cygwin"), ColorMode.LOOKUP),
    ColorRule("TERM mentions 256 colors", _term_matches(lambda term: "256" in term), ColorMode.LOOKUP),
    ColorRule(
        "TERM is a basic color terminal",
        _term_matches(lambda term: any(t in term for t in TERM_NAMES_TOKENS)),
        ColorMode.NAMES,
    ),
)


def detect_no_color(snapshot: EnvironmentSnapshot) -> bool:
    """NO_COLOR disables color whenever it is set, whatever its value."""
    return snapshot.is_set(NO_COLOR)


def detect_force_color(snapshot: EnvironmentSnapshot) -> Optional[bool]:
    """Interpret FORCE_COLOR.

    Only "0", "false" and "none" (any case, surrounding whitespace ignored)
    turn it off. Any other value, the empty string included, forces color on.

    Returns:
        None if FORCE_COLOR is unset, else whether color is forced on.
    """
    value = snapshot.get(FORCE_COLOR)
    if value is None:
        return None
    return value.strip().lower() not in FORCE_COLOR_OFF_VALUES


def match_color_rule(
    snapshot: EnvironmentSnapshot,
    rules: tuple[ColorRule, ...] = COLOR_RULES,
) -> Optional[ColorRule]:
    """Find the first rule in the cascade that matches.

    Returns:
        The winning ColorRule, or None if nothing matched.
    """
    for rule in rules:
        if rule.matches(snapshot):
            return rule
    return None


def suggest_color_mode(snapshot: EnvironmentSnapshot) -> ColorMode:
    """Infer the richest color mode from terminal identification variables."""
    rule = match_color_rule(snapshot)
    if rule is None:
        return ColorMode.NONE
    return rule.mode


def classify(snapshot: EnvironmentSnapshot, stdout_is_tty: bool) -> CapabilityReport:
    """Build the capability report for a snapshot.

    TTY-ness is passed through untouched; it plays no part in the color mode.
    """
    return CapabilityReport(
        stdout_is_tty=stdout_is_tty,
        no_color=detect_no_color(snapshot),
        force_color=detect_force_color(snapshot),
        suggested_color_mode=suggest_color_mode(snapshot),
    )


def should_colorize(report: CapabilityReport) -> bool:
    """Decide whether a caller should emit color at all.

    NO_COLOR wins, then an explicit FORCE_COLOR, then whether stdout is a TTY.
    """
    if report.no_color:
        return False
    if report.force_color is not None:
        return report.force_color
    return report.stdout_is_tty


__all__ = [
    "ColorMode",
    "ColorRule",
    "CapabilityReport",
    "COLOR_RULES",
    "FORCE_COLOR_OFF_VALUES",
    "parse_major_version",
    "detect_no_color",
    "detect_force_color",
    "match_color_rule",
    "suggest_color_mode",
    "classify",
    "should_colorize",
]

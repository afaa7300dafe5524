"""Categorized error handling with actionable messages.

The color classifier itself cannot fail. Everything here describes failures
of the thin glue around it: reading the environment, asking whether stdout is
a terminal, and writing the JSON record.
"""

from __future__ import annotations

from enum import IntEnum
from typing import ClassVar

# Same shape as argparse usage errors: "termprobe: error: ..."
ERROR_PREFIX = "termprobe: error: "


class ExitCode(IntEnum):
    """Exit codes for scripting integration.

    Standard categories:
    - 0: Success
    - 1-9: Usage/config errors (user can fix)
    - 40-49: System errors
    """

    SUCCESS = 0

    # Usage/config errors (1-9)
    USAGE_ERROR = 1
    CONFIG_ERROR = 2
    INVALID_ARGUMENT = 4

    # System errors (40-49)
    ENVIRONMENT_ERROR = 40
    TERMINAL_ERROR = 41
    OUTPUT_ERROR = 42
    SYSTEM_ERROR = 49


class TermProbeError(Exception):
    """Base exception for termprobe with structured error info.

    Attributes:
        message: Human-readable error message.
        code: Exit code for scripting.
        suggestion: Actionable recovery suggestion.
        details: Optional additional context.
    """

    code: ClassVar[ExitCode] = ExitCode.USAGE_ERROR
    suggestion: ClassVar[str] = ""

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: str | None = None,
    ):
        self.message = message
        self._suggestion = suggestion
        self.details = details
        super().__init__(message)

    def get_suggestion(self) -> str:
        """Get the recovery suggestion."""
        return self._suggestion or self.suggestion

    def format_full(self) -> str:
        """Format the complete error message with suggestion."""
        parts = [f"{ERROR_PREFIX}{self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        suggestion = self.get_suggestion()
        if suggestion:
            parts.append(f"Suggestion: {suggestion}")
        return "\n".join(parts)


class EnvironmentReadError(TermProbeError):
    """The process environment could not be read."""

    code = ExitCode.ENVIRONMENT_ERROR
    suggestion = "Check that the process environment is readable and try again."


class TerminalQueryError(TermProbeError):
    """Asking whether stdout is a terminal failed."""

    code = ExitCode.TERMINAL_ERROR
    suggestion = (
        "Standard output may be closed or detached. "
        "Run termprobe with a valid stdout (a terminal, pipe or file)."
    )


class OutputWriteError(TermProbeError):
    """The report could not be written to stdout."""

    code = ExitCode.OUTPUT_ERROR
    suggestion = "Check that the consumer reading termprobe's output is still running."


class SettingsError(TermProbeError):
    """Output settings are invalid."""

    code = ExitCode.CONFIG_ERROR
    suggestion = "Unset the TERMPROBE_* variables or fix their values."


def format_error_for_user(error: Exception, verbose: bool = False) -> str:
    """Format any exception for user display.

    Args:
        error: Exception to format.
        verbose: If True, include details and suggestions.

    Returns:
        Formatted error message string.
    """
    if isinstance(error, TermProbeError):
        if verbose:
            return error.format_full()
        return f"{ERROR_PREFIX}{error.message}"
    else:
        return f"{ERROR_PREFIX}{error}"


def get_exit_code(error: Exception) -> int:
    """Get the exit code for an exception.

    Args:
        error: Exception to get code for.

    Returns:
        Integer exit code.
    """
    if isinstance(error, TermProbeError):
        return error.code
    elif isinstance(error, ValueError):
        return ExitCode.INVALID_ARGUMENT
    else:
        return ExitCode.SYSTEM_ERROR


__all__ = [
    # Exit codes
    "ExitCode",
    "ERROR_PREFIX",
    # Base error
    "TermProbeError",
    # Collaborator errors
    "EnvironmentReadError",
    "TerminalQueryError",
    "OutputWriteError",
    "SettingsError",
    # Utilities
    "format_error_for_user",
    "get_exit_code",
]

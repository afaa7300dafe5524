"""Terminal detection for standard output."""

import sys
from typing import Optional, TextIO

from termprobe.errors import TerminalQueryError


def stdout_is_tty(stream: Optional[TextIO] = None) -> bool:
    """Check whether a stream is connected to an interactive terminal.

    Args:
        stream: Stream to check. Defaults to sys.stdout.

    Returns:
        True if the stream is a terminal, False for pipes, files or no stream.

    Raises:
        TerminalQueryError: If the stream cannot be queried (e.g. it is closed).
    """
    if stream is None:
        stream = sys.stdout
    # pythonw and some embedded interpreters run without a stdout
    if stream is None or not hasattr(stream, "isatty"):
        return False
    try:
        return bool(stream.isatty())
    except (OSError, ValueError) as e:
        raise TerminalQueryError(
            "Could not determine whether stdout is a terminal", details=str(e)
        ) from e


__all__ = ["stdout_is_tty"]

#!/usr/bin/env python3
# patternshell/interface/handler.py
from __future__ import annotations

"""
Command dispatch with a retry policy and one-line error messages.

An input line is matched against the command set, bound to the matched
pattern and executed. Failures go to an exception handler that decides
whether the whole line is retried:

    handler(output, exception, times_retried) -> bool   # True = retry
"""

import difflib
import logging
from typing import Callable, Optional, TextIO

from patternshell.commands import CommandSet
from patternshell.errors import NoMatchingCommandError, PatternShellError

logger = logging.getLogger(__name__)

# Short hint shown at startup and used in invalid command errors
HELP_TEXT = "Type 'help <command>' for more information on a specific command."

ExceptionHandler = Callable[[TextIO, BaseException, int], bool]


# ---------------------------------------------------------------------------
# Error formatting
# ---------------------------------------------------------------------------

def _suggest_similar_names(word: str, commands: CommandSet) -> str:
    """Return a short suggestion string for a misspelled first word."""
    universe = sorted({cmd.pattern.split(" ", 1)[0] for cmd in commands})
    matches = difflib.get_close_matches(word, universe, n=3, cutoff=0.6)
    return f" Did you mean: {', '.join(matches)}?" if matches else ""


def format_error(exc: BaseException, commands: Optional[CommandSet] = None) -> str:
    """Render `exc` as a single "[error] ..." line."""
    if isinstance(exc, NoMatchingCommandError):
        first_word = exc.input.split(" ", 1)[0]
        hint = _suggest_similar_names(first_word, commands) if commands is not None and first_word else ""
        return f"[error] {exc}.{hint} {HELP_TEXT}"
    if isinstance(exc, PatternShellError):
        return f"[error] {exc}"
    return f"[error] {type(exc).__name__}: {exc}"


def default_exception_handler(commands: Optional[CommandSet] = None) -> ExceptionHandler:
    """Print the error once; never retry."""

    def _handle(output: TextIO, exc: BaseException, times_retried: int) -> bool:
        output.write(format_error(exc, commands) + "\n")
        return False

    return _handle


def retrying_exception_handler(retries: int, commands: Optional[CommandSet] = None) -> ExceptionHandler:
    """
    Retry failing command bodies up to `retries` times, then print the error.

    Matching and binding errors are never retried: the same input fails the same way.
    """

    def _handle(output: TextIO, exc: BaseException, times_retried: int) -> bool:
        if not isinstance(exc, PatternShellError) and times_retried < retries:
            logger.info("Retrying after %s (%d/%d)", type(exc).__name__, times_retried + 1, retries)
            return True
        output.write(format_error(exc, commands) + "\n")
        return False

    return _handle


# ---------------------------------------------------------------------------
# Core execution
# ---------------------------------------------------------------------------

def _run_single_command(line: str, commands: CommandSet, output: TextIO) -> None:
    match = commands.find_match(line)
    arguments = match.arguments
    logger.debug("Executing %r with %r", match.command.pattern, arguments)
    match.command.execute(arguments, output)


def execute_line(
    line: str,
    commands: CommandSet,
    output: TextIO,
    *,
    exception_handler: Optional[ExceptionHandler] = None,
) -> bool:
    """
    Match, bind and execute one input line.

    Returns True when a command ran to completion; False for blank input or
    when the exception handler gave up. SystemExit and KeyboardInterrupt
    propagate.
    """
    line = line.strip()
    if not line:
        return False

    handler = exception_handler or default_exception_handler(commands)
    times_retried = 0
    while True:
        try:
            _run_single_command(line, commands, output)
            return True
        except (SystemExit, KeyboardInterrupt):
            raise
        except Exception as exc:
            logger.debug("Command %r failed (attempt %d): %s", line, times_retried + 1, exc)
            if not handler(output, exc, times_retried):
                return False
            times_retried += 1

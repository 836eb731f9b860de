#!/usr/bin/env python3
# patternshell/errors.py
"""Exception types raised by the pattern shell."""

from __future__ import annotations


class PatternShellError(Exception):
    """Base exception for patternshell."""


class NoMatchingCommandError(PatternShellError, LookupError):
    """Raised when no registered pattern accepts the input."""

    def __init__(self, input_line: str) -> None:
        super().__init__(f"Invalid command: {input_line}")
        self.input = input_line


class MissingRequiredArgumentError(PatternShellError, LookupError):
    """Raised when a mandatory pattern token has no input, or an absent argument is read."""

    def __init__(self, name: str, pattern: str | None = None) -> None:
        message = f"Missing required argument: {name}"
        if pattern:
            message += f". Expected format: {pattern}"
        super().__init__(message)
        self.name = name
        self.pattern = pattern


class ArgumentFormatError(PatternShellError, ValueError):
    """Raised when the input does not follow the matched command's pattern."""

    def __init__(self, pattern: str) -> None:
        super().__init__(f"Expected format: {pattern}")
        self.pattern = pattern


class MalformedPatternError(PatternShellError, ValueError):
    """Raised at registration time for a pattern whose delimiters do not balance."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Malformed pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class ConfigurationError(PatternShellError, ValueError):
    """Raised when configuration values fail validation."""

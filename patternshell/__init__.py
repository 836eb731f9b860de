#!/usr/bin/env python3
# patternshell/__init__.py
from __future__ import annotations
"""
patternshell: command-pattern parsing, dispatch and completion for
interactive shells.

Keep this bootstrap light; the frontends (patternshell.interface.cli) pull in
prompt_toolkit and are imported on demand.
"""

__version__ = "0.1.0"

from patternshell.commands import Arguments, Command, CommandSet, HelpCommand, command  # noqa: E402
from patternshell.errors import (  # noqa: E402
    ArgumentFormatError,
    MalformedPatternError,
    MissingRequiredArgumentError,
    NoMatchingCommandError,
    PatternShellError,
)
from patternshell.interface.completion import CompleterSet, StringsCompleter  # noqa: E402

__all__ = [
    "Arguments",
    "Command",
    "CommandSet",
    "HelpCommand",
    "command",
    "ArgumentFormatError",
    "MalformedPatternError",
    "MissingRequiredArgumentError",
    "NoMatchingCommandError",
    "PatternShellError",
    "CompleterSet",
    "StringsCompleter",
]

#!/usr/bin/env python3
# patternshell/commands/__init__.py
from __future__ import annotations

"""
Command model, registry and binding.
"""

from .command_types import Arguments, Command, CommandCallback, FunctionCommand
from .match import CommandMatch, accepts, bind
from .commands import CommandSet, command
from .help import HelpCommand, format_help_table

__all__ = [
    "Arguments",
    "Command",
    "CommandCallback",
    "FunctionCommand",
    "CommandMatch",
    "accepts",
    "bind",
    "CommandSet",
    "command",
    "HelpCommand",
    "format_help_table",
]

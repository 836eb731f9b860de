#!/usr/bin/env python3
# patternshell/commands/help.py
from __future__ import annotations

"""
Built-in help command.

"help" lists every command as "<pattern>: <description>"; "help <prefix>" lists
the commands whose pattern starts with the prefix.
"""

from typing import Callable, Iterable, TextIO

from patternshell.ui import format_table
from .command_types import Arguments, Command
from .commands import CommandSet

COMMAND_KEY = "command"


def format_help_table(commands: Iterable[Command]) -> str:
    """Render commands as a table grouped (and sorted) by their first pattern word."""
    rows = []
    previous_group = ""
    for cmd in sorted(commands, key=lambda c: c.pattern):
        group = cmd.pattern.split(" ", 1)[0]
        rows.append([group if group != previous_group else "", cmd.pattern, cmd.description or "-"])
        previous_group = group
    return format_table(rows, headers=["Command", "Pattern", "Description"])


class HelpCommand:
    """Prints usage information and description of commands."""

    def __init__(
        self,
        commands: Callable[[], CommandSet],
        header: str | None = None,
        *,
        table: bool = False,
    ) -> None:
        self._commands = commands
        self._header = header
        self._table = table

    @property
    def pattern(self) -> str:
        return f"help [<{COMMAND_KEY}>]"

    @property
    def description(self) -> str:
        return "Prints usage information and description of commands"

    def _all_commands(self) -> list[Command]:
        return [self, *(cmd for cmd in self._commands() if cmd is not self)]

    def _write_commands(self, commands: list[Command], output: TextIO) -> None:
        if self._table:
            output.write(format_help_table(commands) + "\n")
            return
        output.write("Available commands:\n")
        for cmd in commands:
            output.write(f"{cmd.pattern}: {cmd.description}\n")

    def execute(self, arguments: Arguments, output: TextIO) -> None:
        if arguments.has_argument(COMMAND_KEY):
            prefix = arguments.get(COMMAND_KEY)
            matching = [self] if self.pattern.startswith(prefix) else []
            matching += [cmd for cmd in self._commands().find_match_commands(prefix) if cmd is not self]
            if matching:
                self._write_commands(matching, output)
            else:
                output.write(f"No appropriate commands for pattern: {prefix}\n")
        else:
            if self._header:
                output.write(f"{self._header}\n\n")
            self._write_commands(self._all_commands(), output)
        output.write("\n")

#!/usr/bin/env python3
# patternshell/commands/commands.py
from __future__ import annotations

"""
Command registry and decorator utilities.

This module provides:
- CommandSet: an immutable, composable registry of commands (plus nested sets)
  that finds the command matching an input line.
- command: decorator turning a function into a FunctionCommand.
"""

import logging
from typing import Any, Callable, Iterable, Iterator

from patternshell.errors import NoMatchingCommandError
from patternshell.interface.pattern import Pattern, compile_pattern
from .command_types import Command, FunctionCommand
from .match import CommandMatch, accepts

logger = logging.getLogger(__name__)


class CommandSet:
    """
    Ordered commands plus nested command sets.

    Iteration yields the direct commands first, then each nested set's commands,
    depth-first. Instances are never modified: the with_* methods return a new set,
    so a holder can swap its reference atomically.
    """

    __slots__ = ("_commands", "_command_sets", "_patterns")

    def __init__(self, commands: Iterable[Command] = (), command_sets: Iterable[CommandSet] = ()) -> None:
        self._commands: tuple[Command, ...] = tuple(commands)
        self._command_sets: tuple[CommandSet, ...] = tuple(command_sets)
        # Malformed patterns raise here.
        self._patterns: dict[int, Pattern] = {
            id(cmd): compile_pattern(cmd.pattern) for cmd in self._commands
        }

    # ---------------- Iteration ----------------

    def __iter__(self) -> Iterator[Command]:
        yield from self._commands
        for command_set in self._command_sets:
            yield from command_set

    def __len__(self) -> int:
        return len(self._commands) + sum(len(s) for s in self._command_sets)

    def __repr__(self) -> str:
        return f"CommandSet(commands={len(self._commands)}, command_sets={len(self._command_sets)})"

    @property
    def commands(self) -> tuple[Command, ...]:
        """All commands, flattened in iteration order."""
        return tuple(self)

    @property
    def command_sets(self) -> tuple[CommandSet, ...]:
        return self._command_sets

    # ---------------- Derivation ----------------

    def with_commands(self, *commands: Command) -> CommandSet:
        """Return a new set with `commands` appended to the direct commands."""
        return CommandSet((*self._commands, *commands), self._command_sets)

    def with_command_sets(self, *command_sets: CommandSet) -> CommandSet:
        """Return a new set with `command_sets` appended to the nested sets."""
        return CommandSet(self._commands, (*self._command_sets, *command_sets))

    # ---------------- Lookup ----------------

    def _iter_with_patterns(self) -> Iterator[tuple[Command, Pattern]]:
        for cmd in self._commands:
            yield cmd, self._patterns[id(cmd)]
        for command_set in self._command_sets:
            yield from command_set._iter_with_patterns()

    def find_match(self, input_line: str, *, strict: bool = False) -> CommandMatch:
        """
        Return the first command (in iteration order) whose pattern accepts `input_line`.

        Registration order breaks ties, not specificity: a looser pattern registered
        first shadows a more specific one registered later.

        Raises:
            NoMatchingCommandError: no pattern accepts the input.
        """
        for cmd, pattern in self._iter_with_patterns():
            if accepts(pattern, input_line, strict=strict):
                logger.debug("Input %r matched pattern %r", input_line, pattern.source)
                return CommandMatch(cmd, input_line)
        raise NoMatchingCommandError(input_line.strip())

    def find_match_commands(self, prefix: str) -> list[Command]:
        """Every command whose pattern starts with `prefix`."""
        return [cmd for cmd in self if cmd.pattern.startswith(prefix)]


def command(
    pattern: str,
    *,
    description: str | None = None,
) -> Callable[[Callable[..., Any]], FunctionCommand]:
    """
    Decorator turning `func(arguments, output)` into a FunctionCommand.

    - `description` falls back to the function docstring.
    - The pattern is validated when the command joins a CommandSet.
    """

    def wrapper(func: Callable[..., Any]) -> FunctionCommand:
        return FunctionCommand(
            pattern=pattern,
            description=(description or (func.__doc__ or "")).strip(),
            callback=func,
            module=func.__module__,
        )

    return wrapper

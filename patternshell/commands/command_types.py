#!/usr/bin/env python3
# patternshell/commands/command_types.py
from __future__ import annotations

"""
Command data structures and protocols.

This module defines:
- Command: the capability every registered command provides (pattern, description, execute).
- CommandCallback: the callable protocol behind FunctionCommand.
- FunctionCommand: a command built from a plain function (see the @command decorator).
- Arguments: the immutable name -> value result of binding input to a pattern.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Protocol, TextIO, runtime_checkable

from patternshell.errors import MissingRequiredArgumentError

_INT_RANGE = (-(2 ** 31), 2 ** 31 - 1)
_LONG_RANGE = (-(2 ** 63), 2 ** 63 - 1)
_MISSING: Any = object()


def _parse_ranged(key: str, value: str, bounds: tuple[int, int]) -> int:
    number = int(value.strip())
    low, high = bounds
    if not low <= number <= high:
        raise ValueError(f"Argument {key!r} out of range: {value}")
    return number


class Arguments(Mapping[str, str]):
    """
    Argument values bound from user input, plus the raw input itself.

    For the pattern "create dataset <dataset-name>" and the input
    "create dataset test", arguments["dataset-name"] == "test" and
    raw_input == "create dataset test".

    Numeric accessors parse on read; nothing but strings is stored.
    """

    __slots__ = ("_arguments", "_raw_input")

    def __init__(self, arguments: Mapping[str, str] | None = None, raw_input: str = "") -> None:
        self._arguments: Mapping[str, str] = MappingProxyType(dict(arguments or {}))
        self._raw_input = raw_input

    # ---------------- Mapping protocol ----------------

    def __getitem__(self, key: str) -> str:
        return self._arguments[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._arguments)

    def __len__(self) -> int:
        return len(self._arguments)

    def __repr__(self) -> str:
        return f"Arguments({dict(self._arguments)!r}, raw_input={self._raw_input!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Arguments):
            return dict(self._arguments) == dict(other._arguments) and self._raw_input == other._raw_input
        return NotImplemented

    # ---------------- Accessors ----------------

    @property
    def raw_input(self) -> str:
        """The full input line the arguments were bound from."""
        return self._raw_input

    def size(self) -> int:
        return len(self._arguments)

    def has_argument(self, key: str) -> bool:
        return key in self._arguments

    def get(self, key: str, default: Any = _MISSING) -> Any:  # type: ignore[override]
        """
        Return the value bound to `key`.

        Without a default a missing key raises MissingRequiredArgumentError;
        with one, behaves like get_optional.
        """
        if default is not _MISSING:
            return self.get_optional(key, default)
        self._check_required(key)
        return self._arguments[key]

    def get_optional(self, key: str, default: str | None = None) -> str | None:
        return self._arguments.get(key, default)

    def get_int(self, key: str) -> int:
        self._check_required(key)
        return _parse_ranged(key, self._arguments[key], _INT_RANGE)

    def get_int_optional(self, key: str, default: int | None = None) -> int | None:
        value = self._arguments.get(key)
        if value is None:
            return default
        return _parse_ranged(key, value, _INT_RANGE)

    def get_long(self, key: str) -> int:
        self._check_required(key)
        return _parse_ranged(key, self._arguments[key], _LONG_RANGE)

    def get_long_optional(self, key: str, default: int | None = None) -> int | None:
        value = self._arguments.get(key)
        if value is None:
            return default
        return _parse_ranged(key, value, _LONG_RANGE)

    def _check_required(self, key: str) -> None:
        if key not in self._arguments:
            raise MissingRequiredArgumentError(key)


@runtime_checkable
class Command(Protocol):
    """
    An executable command matched by its pattern.

    pattern: literal words, <name> mandatory arguments and [ ... ] optional
             segments, e.g. "create blog <blog-name> [owner <owner-name>]".
    description: short text for help output.
    """

    @property
    def pattern(self) -> str: ...  # pragma: no cover - signature only

    @property
    def description(self) -> str: ...  # pragma: no cover - signature only

    def execute(self, arguments: Arguments, output: TextIO) -> None: ...  # pragma: no cover


class CommandCallback(Protocol):
    """Protocol for functions wrapped by FunctionCommand."""

    def __call__(self, arguments: Arguments, output: TextIO) -> Any:  # pragma: no cover - signature only
        ...


@dataclass(frozen=True, slots=True)
class FunctionCommand:
    """
    A command backed by a callback.

    Important fields:
        pattern: Input pattern that activates the command.
        description: Short, user-facing description.
        callback: Function implementing the command.
        module: Python module path where the callback is defined.
    """

    pattern: str
    description: str
    callback: CommandCallback
    module: str = ""

    def execute(self, arguments: Arguments, output: TextIO) -> None:
        """Run the callback; a non-None return value is written to `output` as a line."""
        result = self.callback(arguments, output)
        if result is not None:
            output.write(f"{result}\n")

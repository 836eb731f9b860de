from __future__ import annotations

import io
from typing import Any, Callable

import pytest

from patternshell.commands import Arguments, FunctionCommand


class RecordingCommand:
    """Command that remembers the arguments of every call."""

    def __init__(self, pattern: str, description: str = "", body: Callable[[Arguments, Any], Any] | None = None) -> None:
        self._pattern = pattern
        self._description = description
        self._body = body
        self.calls: list[Arguments] = []

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def description(self) -> str:
        return self._description

    def execute(self, arguments: Arguments, output: Any) -> None:
        self.calls.append(arguments)
        if self._body is not None:
            self._body(arguments, output)


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def make_command() -> Callable[..., RecordingCommand]:
    return RecordingCommand


@pytest.fixture
def printing_command() -> Callable[[str, str], FunctionCommand]:
    def factory(pattern: str, text: str) -> FunctionCommand:
        return FunctionCommand(pattern=pattern, description="", callback=lambda arguments, output: text)

    return factory

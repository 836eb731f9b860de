#!/usr/bin/env python3
# patternshell/commands/match.py
from __future__ import annotations

"""
Binding user input to a command pattern.

Responsibilities:
- Walk the parsed pattern and the tokenized input in lock-step (bind).
- Decide whether a pattern accepts an input line (accepts), either by the
  literal-prefix rule used for dispatch or by a full dry-run of bind.
- Carry a matched command and its input until the arguments are needed (CommandMatch).
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from patternshell.errors import ArgumentFormatError, MissingRequiredArgumentError
from patternshell.interface.parser import InputScan, scan_input, unquote
from patternshell.interface.pattern import (
    Argument,
    Literal,
    OptionalSegment,
    Pattern,
    Token,
    compile_pattern,
)
from .command_types import Arguments, Command

logger = logging.getLogger(__name__)


class _Binder:
    """Two-pointer walk over pattern tokens and input tokens for one bind call."""

    def __init__(self, pattern: Pattern, text: str) -> None:
        self.pattern = pattern
        self.text = text
        self.scan: InputScan = scan_input(text)
        self.words = self.scan.tokens

    def bind(self) -> dict[str, str]:
        position, bindings = self._walk(self.pattern.tokens, 0, top_level=True)
        if position < len(self.words):
            logger.debug("Unconsumed input %r for pattern %r", self.words[position:], self.pattern.source)
            raise ArgumentFormatError(self.pattern.source)
        return bindings

    def _walk(self, tokens: Sequence[Token], position: int, *, top_level: bool) -> tuple[int, dict[str, str]]:
        bindings: dict[str, str] = {}
        index = 0
        while index < len(tokens):
            token = tokens[index]

            if isinstance(token, OptionalSegment):
                end = index
                while end < len(tokens) and isinstance(tokens[end], OptionalSegment):
                    end += 1
                position = self._walk_optionals(tokens[index:end], position, bindings)  # type: ignore[arg-type]
                index = end
                continue

            if position >= len(self.words):
                name = token.name if isinstance(token, Argument) else token.text
                raise MissingRequiredArgumentError(name, self.pattern.source)

            word = self.words[position]
            if isinstance(token, Argument):
                if top_level and index == len(tokens) - 1:
                    bindings[token.name] = self._remainder(position)
                    position = len(self.words)
                else:
                    bindings[token.name] = unquote(word)
                    position += 1
            elif isinstance(token, Literal):
                if unquote(word) != unquote(token.text):
                    raise ArgumentFormatError(self.pattern.source)
                position += 1
            index += 1

        return position, bindings

    def _walk_optionals(self, segments: Sequence[OptionalSegment], position: int,
                        bindings: dict[str, str]) -> int:
        """
        Try a run of optional segments against the unconsumed input.

        Each segment either matches completely (binding its arguments) or is
        skipped. Passes repeat until none matches, so the input may give the
        segments in any order; each segment binds at most once.
        """
        remaining = list(segments)
        progressed = True
        while remaining and progressed and position < len(self.words):
            progressed = False
            for segment in list(remaining):
                if position >= len(self.words):
                    break
                try:
                    new_position, segment_bindings = self._walk(segment.tokens, position, top_level=False)
                except (MissingRequiredArgumentError, ArgumentFormatError):
                    continue
                bindings.update(segment_bindings)
                position = new_position
                remaining.remove(segment)
                progressed = True
        return position

    def _remainder(self, position: int) -> str:
        """Everything from the token at `position` to the end of the input."""
        if position == len(self.words) - 1:
            return unquote(self.words[position])
        return self.text[self.scan.offsets[position]:].rstrip()


def bind(command: Command, input_line: str) -> Arguments:
    """
    Bind `input_line` to the arguments of `command`'s pattern.

    Raises:
        MissingRequiredArgumentError: a mandatory token has no input left.
        ArgumentFormatError: a literal does not match, or input is left over.
    """
    text = input_line.strip()
    pattern = compile_pattern(command.pattern)
    return Arguments(_Binder(pattern, text).bind(), text)


def accepts(pattern: Pattern, input_line: str, *, strict: bool = False) -> bool:
    """
    Return True if `pattern` accepts `input_line`.

    Default rule: the pattern's leading literal words must equal the first input
    words (token by token), and a pattern made only of literals must equal the
    whole input. Input that satisfies the prefix but not the rest of the pattern
    is accepted here and rejected later by bind.

    strict=True: the whole pattern must bind.
    """
    text = input_line.strip()
    if strict:
        try:
            _Binder(pattern, text).bind()
        except (MissingRequiredArgumentError, ArgumentFormatError):
            return False
        return True

    words = [unquote(word) for word in scan_input(text).tokens]
    if pattern.is_literal_only:
        return words == [unquote(token.text) for token in pattern.tokens]  # type: ignore[union-attr]
    prefix = [unquote(word) for word in pattern.literal_prefix()]
    return words[:len(prefix)] == prefix


@dataclass(frozen=True, slots=True)
class CommandMatch:
    """A command matched to an input line; arguments are bound on access."""

    command: Command
    input: str

    @property
    def arguments(self) -> Arguments:
        return bind(self.command, self.input)

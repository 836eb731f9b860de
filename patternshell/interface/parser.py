#!/usr/bin/env python3
# patternshell/interface/parser.py
from __future__ import annotations

"""
Tokenizers for command patterns and user input.

Responsibilities:
- Split a pattern into literal words, <mandatory-arg> spans and [optional] spans.
- Split an input line into words while keeping '...' / "..." spans whole.
- Strip quotes from argument values (binding only, never while tokenizing).
- Split a completion buffer into finished tokens and the word being typed.
"""

from dataclasses import dataclass
from enum import Enum

MANDATORY_ARG_BEGINNING = "<"
MANDATORY_ARG_ENDING = ">"
OPTIONAL_PART_BEGINNING = "["
OPTIONAL_PART_ENDING = "]"

SEPARATOR = " "
DOUBLE_QUOTE = '"'
SINGLE_QUOTE = "'"


class State(Enum):
    EMPTY = "empty"
    IN_SINGLE_QUOTE = "in-single-quote"
    IN_DOUBLE_QUOTE = "in-double-quote"
    IN_MANDATORY_ARG = "in-mandatory-arg"
    IN_OPTIONAL_SEGMENT = "in-optional-segment"


# opener -> state it enters
_INPUT_OPENERS: dict[str, State] = {
    SINGLE_QUOTE: State.IN_SINGLE_QUOTE,
    DOUBLE_QUOTE: State.IN_DOUBLE_QUOTE,
}
_PATTERN_OPENERS: dict[str, State] = {
    **_INPUT_OPENERS,
    MANDATORY_ARG_BEGINNING: State.IN_MANDATORY_ARG,
    OPTIONAL_PART_BEGINNING: State.IN_OPTIONAL_SEGMENT,
}
_CLOSERS: dict[State, str] = {
    State.IN_SINGLE_QUOTE: SINGLE_QUOTE,
    State.IN_DOUBLE_QUOTE: DOUBLE_QUOTE,
    State.IN_MANDATORY_ARG: MANDATORY_ARG_ENDING,
    State.IN_OPTIONAL_SEGMENT: OPTIONAL_PART_ENDING,
}


@dataclass(frozen=True, slots=True)
class InputScan:
    """
    Result of scanning an input line.

    Attributes:
        tokens: Raw tokens, quotes preserved.
        offsets: Start offset of each token in the scanned text.
        final_state: Scanner state at end of text (non-EMPTY means an open quote).
    """
    tokens: tuple[str, ...]
    offsets: tuple[int, ...]
    final_state: State = State.EMPTY

    @property
    def unterminated(self) -> bool:
        return self.final_state is not State.EMPTY


def _scan(text: str, openers: dict[str, State], *, split_spans: bool) -> InputScan:
    """
    Single left-to-right pass over `text`.

    When `split_spans` is set, an opener met right after a closed <...> or [...]
    span starts a new token ("<size>[ with <x>]" -> "<size>", "[ with <x>]").
    """
    tokens: list[str] = []
    offsets: list[int] = []
    buffer: list[str] = []
    start = 0
    state = State.EMPTY

    def flush() -> None:
        if buffer:
            tokens.append("".join(buffer))
            offsets.append(start)
            buffer.clear()

    for index, ch in enumerate(text):
        if state is State.EMPTY:
            if ch == SEPARATOR:
                flush()
                continue
            if ch in openers:
                if (split_spans and buffer and ch in (MANDATORY_ARG_BEGINNING, OPTIONAL_PART_BEGINNING)
                        and buffer[-1] in (MANDATORY_ARG_ENDING, OPTIONAL_PART_ENDING)):
                    flush()
                state = openers[ch]
            if not buffer:
                start = index
            buffer.append(ch)
        else:
            if ch == _CLOSERS[state]:
                state = State.EMPTY
            buffer.append(ch)

    flush()
    return InputScan(tuple(tokens), tuple(offsets), state)


def parse_pattern(pattern: str) -> list[str]:
    """Split a command pattern into raw token strings."""
    return list(scan_pattern(pattern).tokens)


def scan_pattern(pattern: str) -> InputScan:
    """Tokenize a pattern and report the scanner state at end of text."""
    return _scan(pattern, _PATTERN_OPENERS, split_spans=True)


def parse_input(text: str) -> list[str]:
    """Split an input line into raw tokens; quoted spans keep their quotes."""
    return list(_scan(text, _INPUT_OPENERS, split_spans=False).tokens)


def scan_input(text: str) -> InputScan:
    """Tokenize input and keep token offsets (for remainder capture and completion)."""
    return _scan(text, _INPUT_OPENERS, split_spans=False)


def unquote(token: str) -> str:
    """
    Strip one pair of enclosing quotes and unescape \\' and \\".

    Examples:
        "'a b'"        -> "a b"
        '"say \\"hi\\""' -> 'say "hi"'
    """
    if len(token) >= 2 and token[0] == token[-1] and token[0] in (SINGLE_QUOTE, DOUBLE_QUOTE):
        token = token[1:-1]
    return token.replace("\\'", "'").replace('\\"', '"')


def split_buffer(buffer: str) -> tuple[list[str], str]:
    """
    Return (completed_tokens, current_word) for a completion buffer.

    A trailing separator outside of quotes means a new, empty word has begun.
    """
    scan = scan_input(buffer)
    tokens = list(scan.tokens)
    if not tokens:
        return [], ""
    ends_with_separator = buffer.endswith(SEPARATOR) and not scan.unterminated
    if ends_with_separator:
        return tokens, ""
    return tokens[:-1], tokens[-1]

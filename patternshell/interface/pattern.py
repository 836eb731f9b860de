#!/usr/bin/env python3
# patternshell/interface/pattern.py
from __future__ import annotations

"""
In-memory model of a command pattern.

A pattern such as

    create cluster <name> with template <template> [using settings <settings>]

is parsed into a tuple of tokens:

    Literal("create"), Literal("cluster"), Argument("name"), ...,
    OptionalSegment((Literal("using"), Literal("settings"), Argument("settings")))

Optional segments are parsed recursively (their inner text is re-tokenized), which
is what makes "[a [b <c>]]" work even though the tokenizer only tracks one level of
delimiters.
"""

import functools
from dataclasses import dataclass
from typing import Iterator, Sequence, Union

from patternshell.errors import MalformedPatternError
from .parser import (
    DOUBLE_QUOTE,
    MANDATORY_ARG_BEGINNING,
    MANDATORY_ARG_ENDING,
    OPTIONAL_PART_BEGINNING,
    OPTIONAL_PART_ENDING,
    SINGLE_QUOTE,
    State,
    parse_pattern,
    scan_pattern,
)

_DELIMITERS = (MANDATORY_ARG_BEGINNING, MANDATORY_ARG_ENDING,
               OPTIONAL_PART_BEGINNING, OPTIONAL_PART_ENDING)


@dataclass(frozen=True, slots=True)
class Literal:
    """A word that must appear verbatim in the input."""
    text: str

    def render(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Argument:
    """A <name> placeholder bound from the input."""
    name: str

    def render(self) -> str:
        return f"{MANDATORY_ARG_BEGINNING}{self.name}{MANDATORY_ARG_ENDING}"


@dataclass(frozen=True, slots=True)
class OptionalSegment:
    """A [ ... ] sub-pattern that is either fully present or skipped."""
    tokens: tuple["Token", ...]

    def render(self) -> str:
        inner = " ".join(token.render() for token in self.tokens)
        return f"{OPTIONAL_PART_BEGINNING}{inner}{OPTIONAL_PART_ENDING}"


Token = Union[Literal, Argument, OptionalSegment]


@dataclass(frozen=True, slots=True)
class Pattern:
    """A parsed command pattern."""
    source: str
    tokens: tuple[Token, ...]

    def __str__(self) -> str:
        return self.source

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def render(self) -> str:
        """Canonical form: tokens joined by single spaces."""
        return " ".join(token.render() for token in self.tokens)

    def argument_names(self) -> list[str]:
        """All argument names in pattern order, optional ones included."""
        return list(_argument_names(self.tokens))

    def literal_prefix(self) -> tuple[str, ...]:
        """Leading literal words, up to the first argument or optional segment."""
        prefix: list[str] = []
        for token in self.tokens:
            if not isinstance(token, Literal):
                break
            prefix.append(token.text)
        return tuple(prefix)

    @property
    def is_literal_only(self) -> bool:
        return all(isinstance(token, Literal) for token in self.tokens)


def _argument_names(tokens: Sequence[Token]) -> Iterator[str]:
    for token in tokens:
        if isinstance(token, Argument):
            yield token.name
        elif isinstance(token, OptionalSegment):
            yield from _argument_names(token.tokens)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _bracket_depth(text: str) -> int:
    """Open '[' minus closed ']' outside of quotes."""
    depth = 0
    quote: str | None = None
    for ch in text:
        if quote:
            if ch == quote:
                quote = None
        elif ch in (SINGLE_QUOTE, DOUBLE_QUOTE):
            quote = ch
        elif ch == OPTIONAL_PART_BEGINNING:
            depth += 1
        elif ch == OPTIONAL_PART_ENDING:
            depth -= 1
    return depth


def _classify(raw: str, source: str) -> Token:
    if raw.startswith(MANDATORY_ARG_BEGINNING):
        if not raw.endswith(MANDATORY_ARG_ENDING) or len(raw) < 2:
            raise MalformedPatternError(source, f"unterminated '{MANDATORY_ARG_BEGINNING}' in {raw!r}")
        name = raw[1:-1]
        if not name.strip():
            raise MalformedPatternError(source, "empty argument name")
        if MANDATORY_ARG_BEGINNING in name or MANDATORY_ARG_ENDING in name:
            raise MalformedPatternError(source, f"nested argument in {raw!r}")
        return Argument(name)

    # a quote opened anywhere in the word must close inside it
    if scan_pattern(raw).final_state in (State.IN_SINGLE_QUOTE, State.IN_DOUBLE_QUOTE):
        raise MalformedPatternError(source, f"unterminated quote in {raw!r}")
    if raw[0] in (SINGLE_QUOTE, DOUBLE_QUOTE):
        return Literal(raw)

    if any(delimiter in raw for delimiter in _DELIMITERS):
        raise MalformedPatternError(source, f"unexpected delimiter in {raw!r}")
    return Literal(raw)


def parse(raw_tokens: Sequence[str], *, source: str | None = None) -> tuple[Token, ...]:
    """
    Build the token tree from raw token strings (as produced by parse_pattern).

    Optional spans are stripped of their brackets, re-tokenized and parsed
    recursively. A span whose brackets are not balanced by the tokenizer
    (nested '[' inside '[') is re-joined with the following raw tokens first.
    """
    source = source if source is not None else " ".join(raw_tokens)
    tokens: list[Token] = []
    index = 0
    while index < len(raw_tokens):
        raw = raw_tokens[index]
        index += 1

        if not raw.startswith(OPTIONAL_PART_BEGINNING):
            tokens.append(_classify(raw, source))
            continue

        span = raw
        while _bracket_depth(span) > 0 and index < len(raw_tokens):
            span = f"{span} {raw_tokens[index]}"
            index += 1
        depth = _bracket_depth(span)
        if depth > 0 or not span.endswith(OPTIONAL_PART_ENDING):
            raise MalformedPatternError(source, f"unterminated '{OPTIONAL_PART_BEGINNING}' in {span!r}")
        if depth < 0:
            raise MalformedPatternError(source, f"unbalanced '{OPTIONAL_PART_ENDING}' in {span!r}")

        inner = parse(parse_pattern(span[1:-1]), source=source)
        if not inner:
            raise MalformedPatternError(source, "empty optional segment")
        tokens.append(OptionalSegment(inner))

    return tuple(tokens)


@functools.lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> Pattern:
    """
    Validate and parse a pattern string.

    Raises:
        MalformedPatternError: empty pattern, or unbalanced '<', '[' or quotes.
    """
    raw_tokens = parse_pattern(pattern)
    if not raw_tokens:
        raise MalformedPatternError(pattern, "empty pattern")
    return Pattern(pattern, parse(raw_tokens, source=pattern))

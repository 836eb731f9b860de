#!/usr/bin/env python3
# patternshell/interface/completion.py
from __future__ import annotations

"""
Command line completion built from the registered command patterns.

All patterns are merged into one prefix tree keyed by token text:

    get cluster <id>            (root)
    get cluster-config <id>       └── get
                                      ├── cluster ── <id>
                                      └── cluster-config ── <id>

Each tree node then becomes a completion provider that only answers when the
words already typed follow the node's path: literal children are offered as
words, an argument child is answered by the provider registered for that
argument name (a CompleterSet entry), if any.
"""

import logging
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Callable,
    Generic,
    Iterable,
    Iterator,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    TypeVar,
    Union,
    runtime_checkable,
)

from .parser import parse_pattern, split_buffer, unquote
from .pattern import Argument, Literal, OptionalSegment, Token, compile_pattern, parse

if TYPE_CHECKING:  # pragma: no cover
    from patternshell.commands import Command

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------

@runtime_checkable
class Completer(Protocol):
    """Completion provider: candidates for the word being typed at the end of `buffer`."""

    def complete(self, buffer: str) -> list[str]: ...  # pragma: no cover - signature only


CompleterLike = Union[Completer, Callable[[str], Iterable[str]]]


class FunctionCompleter:
    """Adapts a plain `fn(word) -> iterable of candidates` callable."""

    def __init__(self, fn: Callable[[str], Iterable[str]]) -> None:
        self._fn = fn

    def complete(self, buffer: str) -> list[str]:
        return list(self._fn(buffer))


def as_completer(provider: CompleterLike) -> Completer:
    if isinstance(provider, Completer):
        return provider
    if callable(provider):
        return FunctionCompleter(provider)
    raise TypeError(f"Not a completion provider: {provider!r}")


class StringsCompleter:
    """
    Offers the strings that start with the current word.

    `strings` may be a fixed iterable or a zero-argument supplier evaluated on
    every call (for sets that change at runtime, e.g. ids of stored objects).
    """

    def __init__(self, strings: Union[Iterable[str], Callable[[], Iterable[str]]]) -> None:
        if callable(strings):
            self._supplier: Callable[[], Iterable[str]] = strings
        else:
            fixed = tuple(strings)
            self._supplier = lambda: fixed

    @property
    def strings(self) -> list[str]:
        return list(self._supplier())

    def complete(self, buffer: str) -> list[str]:
        _, word = split_buffer(buffer)
        return [candidate for candidate in self._supplier() if candidate.startswith(word)]


class PrefixCompleter:
    """
    Delegates to `child` only when the completed words of the buffer follow `prefix`.

    `prefix` uses pattern syntax: "<name>" tokens accept any single input word,
    quoted spans included. The child receives the current word only.
    """

    def __init__(self, prefix: str, child: CompleterLike) -> None:
        self.prefix = prefix
        self._prefix_tokens: tuple[Token, ...] = parse(parse_pattern(prefix), source=prefix) if prefix else ()
        self.child = as_completer(child)

    def _follows_prefix(self, words: Sequence[str]) -> bool:
        if len(words) != len(self._prefix_tokens):
            return False
        for token, word in zip(self._prefix_tokens, words):
            if isinstance(token, Literal) and unquote(token.text) != unquote(word):
                return False
        return True

    def complete(self, buffer: str) -> list[str]:
        words, current = split_buffer(buffer)
        if not self._follows_prefix(words):
            return []
        return self.child.complete(current)


class AggregateCompleter:
    """Tries every provider and unions the candidates (first-seen order, no duplicates)."""

    def __init__(self, completers: Iterable[CompleterLike]) -> None:
        self.completers: tuple[Completer, ...] = tuple(as_completer(c) for c in completers)

    def complete(self, buffer: str) -> list[str]:
        seen: dict[str, None] = {}
        for completer in self.completers:
            for candidate in completer.complete(buffer):
                seen.setdefault(candidate, None)
        return list(seen)


class CompleterSet(Mapping[str, Completer]):
    """
    Argument name -> completion provider.

    When completion reaches a "<name>" token of some pattern, the provider
    registered under "name" supplies the candidates.
    """

    __slots__ = ("_completers",)

    def __init__(self, completers: Optional[Mapping[str, CompleterLike]] = None) -> None:
        self._completers = MappingProxyType(
            {name: as_completer(provider) for name, provider in (completers or {}).items()}
        )

    def __getitem__(self, name: str) -> Completer:
        return self._completers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._completers)

    def __len__(self) -> int:
        return len(self._completers)

    def get_completer(self, name: str) -> Optional[Completer]:
        return self._completers.get(name)

    def merged(self, other: Mapping[str, CompleterLike]) -> CompleterSet:
        """Return a new set; entries of `other` win."""
        return CompleterSet({**self._completers, **other})


# ---------------------------------------------------------------------------
# Prefix tree
# ---------------------------------------------------------------------------

class TreeNode(Generic[T]):
    """A node in a tree; children keep insertion order."""

    __slots__ = ("data", "parent", "children")

    def __init__(self, data: Optional[T] = None, parent: Optional[TreeNode[T]] = None) -> None:
        self.data = data
        self.parent = parent
        self.children: list[TreeNode[T]] = []

    def __repr__(self) -> str:
        return f"TreeNode({self.data!r})"

    def find_child(self, data: T) -> Optional[TreeNode[T]]:
        for candidate in self.children:
            if candidate.data == data:
                return candidate
        return None

    def find_or_create_child(self, data: T) -> TreeNode[T]:
        return self.find_child(data) or self.add_child(data)

    def add_child(self, data: T) -> TreeNode[T]:
        child = TreeNode(data, self)
        self.children.append(child)
        return child

    def path(self) -> list[T]:
        """Data from the root's child down to this node (the root holds no data)."""
        node: Optional[TreeNode[T]] = self
        items: list[T] = []
        while node is not None and node.parent is not None:
            items.append(node.data)  # type: ignore[arg-type]
            node = node.parent
        return items[::-1]

    def walk_post_order(self) -> Iterator[TreeNode[T]]:
        for child in self.children:
            yield from child.walk_post_order()
        yield self


def _insert(node: TreeNode[str], tokens: Sequence[Token]) -> None:
    """
    Insert a token sequence below `node`.

    An optional segment does not get a node of its own: the path continues both
    through its inner tokens and past it.
    """
    if not tokens:
        return
    head, rest = tokens[0], tokens[1:]
    if isinstance(head, OptionalSegment):
        _insert(node, (*head.tokens, *rest))
        _insert(node, rest)
        return
    _insert(node.find_or_create_child(head.render()), rest)


def build_tree(commands: Iterable["Command"]) -> TreeNode[str]:
    """Merge every command pattern into a single prefix tree keyed by token text."""
    root: TreeNode[str] = TreeNode()
    for cmd in commands:
        _insert(root, compile_pattern(cmd.pattern).tokens)
    return root


def _argument_name(token_text: str) -> Optional[str]:
    tokens = parse(parse_pattern(token_text), source=token_text)
    if len(tokens) == 1 and isinstance(tokens[0], Argument):
        return tokens[0].name
    return None


def build_completers(
    commands: Iterable["Command"],
    completers: Optional[Mapping[str, CompleterLike]] = None,
) -> list[Completer]:
    """
    Convert the command prefix tree into completion providers (post-order).

    - literal children of a node -> PrefixCompleter(node path, StringsCompleter(literals))
    - "<name>" child of a node   -> PrefixCompleter(node path, completers["name"]), when registered
    """
    completer_set = completers if isinstance(completers, CompleterSet) else CompleterSet(completers)
    providers: list[Completer] = []

    for node in build_tree(commands).walk_post_order():
        if not node.children:
            continue
        prefix = " ".join(node.path())
        literals: list[str] = []
        for child in node.children:
            argument_name = _argument_name(child.data)  # type: ignore[arg-type]
            if argument_name is None:
                literals.append(child.data)  # type: ignore[arg-type]
                continue
            argument_completer = completer_set.get_completer(argument_name)
            if argument_completer is None:
                logger.debug("No completer registered for argument %r", argument_name)
                continue
            providers.append(PrefixCompleter(prefix, argument_completer))
        if literals:
            providers.append(PrefixCompleter(prefix, StringsCompleter(literals)))

    return providers


def build_completer(
    commands: Iterable["Command"],
    completers: Optional[Mapping[str, CompleterLike]] = None,
) -> AggregateCompleter:
    """All providers from build_completers combined into one."""
    return AggregateCompleter(build_completers(commands, completers))

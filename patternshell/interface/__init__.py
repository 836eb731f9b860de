#!/usr/bin/env python3
# patternshell/interface/__init__.py
from __future__ import annotations

"""
Package for pattern parsing, completion and the interactive console.

Provides:
- Tokenizers for patterns and input (parser).
- The parsed pattern model (pattern).
- The completion tree builder and completion providers (completion).

Dispatch (handler), frontends and the Shell (cli) and the plugin loader
(loader) depend on patternshell.commands; import them by module path.
"""

# Parser utilities
from .parser import parse_input, parse_pattern, scan_input, scan_pattern, split_buffer, unquote

# Pattern model
from .pattern import Argument, Literal, OptionalSegment, Pattern, compile_pattern

# Completion
from .completion import (
    AggregateCompleter,
    Completer,
    CompleterSet,
    FunctionCompleter,
    PrefixCompleter,
    StringsCompleter,
    TreeNode,
    build_completer,
    build_completers,
    build_tree,
)

__all__ = [
    # parser
    "parse_input",
    "parse_pattern",
    "scan_input",
    "scan_pattern",
    "split_buffer",
    "unquote",
    # pattern
    "Argument",
    "Literal",
    "OptionalSegment",
    "Pattern",
    "compile_pattern",
    # completion
    "AggregateCompleter",
    "Completer",
    "CompleterSet",
    "FunctionCompleter",
    "PrefixCompleter",
    "StringsCompleter",
    "TreeNode",
    "build_completer",
    "build_completers",
    "build_tree",
]

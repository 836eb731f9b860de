from __future__ import annotations

import pytest

from patternshell.commands import Arguments
from patternshell.errors import MissingRequiredArgumentError


def test_get_string() -> None:
    arguments = Arguments({"a": "b"}, "")
    assert arguments.get("a") == "b"
    assert arguments.get_optional("123", "z") == "z"
    assert arguments.get_optional("123") is None
    assert arguments.get("123", "z") == "z"


def test_missing_required_argument() -> None:
    arguments = Arguments({"a": "b"}, "")
    with pytest.raises(MissingRequiredArgumentError, match="Missing required argument: 123"):
        arguments.get("123")
    with pytest.raises(MissingRequiredArgumentError):
        arguments.get_int("123")


def test_get_long() -> None:
    arguments = Arguments({"a": str(2 ** 63 - 1)}, "")
    assert arguments.get_long("a") == 2 ** 63 - 1
    assert arguments.get_long_optional("123", 24) == 24
    assert arguments.get_long_optional("123") is None


def test_get_int() -> None:
    arguments = Arguments({"a": str(2 ** 31 - 1)}, "")
    assert arguments.get_int("a") == 2 ** 31 - 1
    assert arguments.get_int_optional("123", 24) == 24
    assert arguments.get_int_optional("123") is None


def test_numeric_range_and_format() -> None:
    arguments = Arguments({"big": str(2 ** 31), "word": "five"}, "")
    with pytest.raises(ValueError):
        arguments.get_int("big")
    assert arguments.get_long("big") == 2 ** 31
    with pytest.raises(ValueError):
        arguments.get_int("word")


def test_mapping_protocol_and_raw_input() -> None:
    arguments = Arguments({"user": "bob", "times": "5"}, "greet bob times 5")
    assert len(arguments) == arguments.size() == 2
    assert "user" in arguments
    assert arguments.has_argument("times")
    assert not arguments.has_argument("suffix")
    assert dict(arguments) == {"user": "bob", "times": "5"}
    assert arguments.raw_input == "greet bob times 5"
    assert arguments == Arguments({"times": "5", "user": "bob"}, "greet bob times 5")


def test_arguments_are_read_only() -> None:
    source = {"a": "b"}
    arguments = Arguments(source, "")
    source["a"] = "changed"
    assert arguments["a"] == "b"
    with pytest.raises(TypeError):
        arguments["a"] = "c"  # type: ignore[index]

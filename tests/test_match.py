from __future__ import annotations

import pytest

from patternshell.commands import CommandMatch, accepts, bind
from patternshell.errors import ArgumentFormatError, MissingRequiredArgumentError
from patternshell.interface.pattern import compile_pattern

CLUSTER_PATTERN = (
    "create cluster <name> with template <template> of size <size>"
    "[ using settings <settings>][ with <optional arg>]"
)


@pytest.fixture
def create_cluster(make_command):
    return make_command(CLUSTER_PATTERN, "Creates the cluster")


def test_all_optional_arguments(create_cluster) -> None:
    line = (
        "create cluster \"test cluster\" with template \"hadoop\" of size 5"
        " using settings '{some settings}' with \"arg 1\""
    )
    args = CommandMatch(create_cluster, line).arguments
    assert args.size() == 5
    assert args.get("name") == "test cluster"
    assert args.get("template") == "hadoop"
    assert args.get_int("size") == 5
    assert args.get("settings") == "{some settings}"
    assert args.get("optional arg") == "arg 1"


def test_some_optional_arguments(create_cluster) -> None:
    line = "create cluster \"test cluster\" with template \"hadoop\" of size 5 with \"arg 1\""
    args = CommandMatch(create_cluster, line).arguments
    assert args.size() == 4
    assert args.get("optional arg") == "arg 1"
    assert not args.has_argument("settings")


def test_no_optional_arguments(create_cluster) -> None:
    args = CommandMatch(create_cluster, "create cluster c1 with template hadoop of size 5").arguments
    assert dict(args) == {"name": "c1", "template": "hadoop", "size": "5"}


def test_wrong_mandatory_input(create_cluster) -> None:
    line = "create cluster \"test cluster\" with template  of size 5"
    with pytest.raises(ArgumentFormatError):
        CommandMatch(create_cluster, line).arguments


def test_wrong_optional_input(create_cluster) -> None:
    line = "create cluster \"test cluster\" with template \"hadoop\" of size 5 using settings  with \"arg 1\""
    with pytest.raises(ArgumentFormatError):
        CommandMatch(create_cluster, line).arguments


def test_missing_mandatory_argument_names_it(make_command) -> None:
    with pytest.raises(MissingRequiredArgumentError) as excinfo:
        bind(make_command("greet <user> times <times>"), "greet bob times")
    assert excinfo.value.name == "times"
    assert str(excinfo.value) == "Missing required argument: times. Expected format: greet <user> times <times>"


def test_final_argument_captures_the_rest_of_the_line(make_command) -> None:
    note = make_command("create <new-note-id> <content>")
    args = bind(note, "create n1   some   free  text  ")
    assert args.get("new-note-id") == "n1"
    assert args.get("content") == "some   free  text"
    assert args.raw_input == "create n1   some   free  text"


def test_final_argument_with_single_quoted_token_is_unquoted(make_command) -> None:
    args = bind(make_command("echo <some-input>"), "echo 'hello world'")
    assert args.get("some-input") == "hello world"


def test_final_argument_before_optionals_binds_one_token(make_command) -> None:
    cmd = make_command("greet <user> [times <n>]")
    with pytest.raises(ArgumentFormatError):
        bind(cmd, "greet bob smith")
    assert dict(bind(cmd, "greet bob times 2")) == {"user": "bob", "n": "2"}


def test_escaped_quotes_in_values(make_command) -> None:
    args = bind(make_command("say <what> now"), "say \"it\\'s\" now")
    assert args.get("what") == "it's"


def test_literal_may_be_quoted_in_input(make_command) -> None:
    assert dict(bind(make_command("get cluster <id>"), "get \"cluster\" x")) == {"id": "x"}


def test_optional_segment_binds_at_most_once(make_command) -> None:
    cmd = make_command("greet <user> times <n> [suffix <s>]")
    with pytest.raises(ArgumentFormatError):
        bind(cmd, "greet bob times 1 suffix a suffix b")


def test_optional_segment_is_all_or_nothing(make_command) -> None:
    cmd = make_command("list <what> [since <start> until <end>]")
    with pytest.raises(ArgumentFormatError):
        bind(cmd, "list x since 1")
    assert dict(bind(cmd, "list x since 1 until 2")) == {"what": "x", "start": "1", "end": "2"}


def test_nested_optional_segments(make_command) -> None:
    cmd = make_command("run <job> [on <host> [port <port>]]")
    assert dict(bind(cmd, "run j1")) == {"job": "j1"}
    assert dict(bind(cmd, "run j1 on h")) == {"job": "j1", "host": "h"}
    assert dict(bind(cmd, "run j1 on h port 80")) == {"job": "j1", "host": "h", "port": "80"}


def test_leftover_input_is_a_format_error(make_command) -> None:
    with pytest.raises(ArgumentFormatError, match="Expected format: list"):
        bind(make_command("list"), "list extra")


def test_accepts_prefix_and_strict() -> None:
    pattern = compile_pattern("greet <user> times <times>")
    assert accepts(pattern, "greet")
    assert not accepts(pattern, "hello")
    assert not accepts(pattern, "greet", strict=True)
    assert accepts(pattern, "greet bob times 3", strict=True)


def test_arguments_are_bound_on_each_access(make_command) -> None:
    match = CommandMatch(make_command("echo <x>"), "echo hi")
    assert match.arguments == match.arguments
    assert match.arguments.get("x") == "hi"

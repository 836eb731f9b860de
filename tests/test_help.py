from __future__ import annotations

import io

import pytest

from patternshell.commands import CommandSet, HelpCommand, format_help_table

HELP_HEADER = "Help header"


@pytest.fixture
def help_setup(make_command):
    commands = [
        make_command("get something <param>", "Test command 1 description"),
        make_command("get another thing", "Test command 2 description"),
        make_command("list of something <param> [<optional>]", "Test command 3 description"),
    ]
    command_set = CommandSet(commands)
    help_command = HelpCommand(lambda: command_set, HELP_HEADER)
    test_set = CommandSet([help_command], [command_set])
    return test_set, help_command, commands


def _expected(header, *commands) -> str:
    lines = []
    if header is not None:
        lines += [header, ""]
    lines.append("Available commands:")
    lines += [f"{cmd.pattern}: {cmd.description}" for cmd in commands]
    return "\n".join(lines) + "\n\n"


def _run(test_set: CommandSet, line: str) -> str:
    out = io.StringIO()
    match = test_set.find_match(line)
    match.command.execute(match.arguments, out)
    return out.getvalue()


def test_help_lists_everything(help_setup) -> None:
    test_set, help_command, commands = help_setup
    assert _run(test_set, "help") == _expected(HELP_HEADER, help_command, *commands)


def test_help_help(help_setup) -> None:
    test_set, help_command, _ = help_setup
    assert _run(test_set, "help help") == _expected(None, help_command)


def test_help_with_prefix(help_setup) -> None:
    test_set, _, commands = help_setup
    assert _run(test_set, "help get") == _expected(None, commands[0], commands[1])


def test_help_with_unknown_prefix(help_setup) -> None:
    test_set, _, _ = help_setup
    assert _run(test_set, "help set") == "No appropriate commands for pattern: set\n\n"


def test_help_without_header(make_command) -> None:
    cmd = make_command("ping", "Pings")
    help_command = HelpCommand(lambda: CommandSet([cmd]))
    test_set = CommandSet([help_command, cmd])
    assert _run(test_set, "help") == _expected(None, help_command, cmd)


def test_help_table_groups_by_first_word(make_command) -> None:
    table = format_help_table(
        [make_command("get b", "B"), make_command("get a", "A"), make_command("list", "")]
    )
    lines = table.splitlines()
    assert "Command" in lines[1] and "Pattern" in lines[1] and "Description" in lines[1]
    rows = [line for line in lines if "get a" in line or "get b" in line or "list" in line]
    assert rows[0].startswith("| get ") and "get a" in rows[0]
    assert rows[1].startswith("|     ") and "get b" in rows[1]
    assert "list" in rows[2] and "| - " in rows[2]

# plugins/hello.py
from __future__ import annotations

from typing import TextIO

from patternshell.commands import Arguments, command


@command("echo <some-input>", description="Prints the input back")
def echo(arguments: Arguments, output: TextIO) -> str:
    return arguments.get("some-input")


COMMAND = echo

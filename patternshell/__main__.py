#!/usr/bin/env python3
# patternshell/__main__.py
from __future__ import annotations
"""
Boot sequence and entry point.

    python -m patternshell                 # interactive shell
    python -m patternshell echo "hi there" # run one command and exit

Boot steps report their status on stderr in interactive mode only, so the
output of a one-shot command stays clean.
"""

import logging
import sys
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from patternshell.commands import CommandSet, HelpCommand
from patternshell.config import ShellConfig, load_config
from patternshell.errors import PatternShellError
from patternshell.interface.cli import Shell
from patternshell.interface.completion import CompleterSet
from patternshell.interface.handler import HELP_TEXT, retrying_exception_handler
from patternshell.interface.loader import load_commands, load_completers
from patternshell.ui import ansi_supported, colorize, init_logger, print_line


@dataclass(slots=True)
class BootState:
    config: ShellConfig
    logger: logging.Logger
    shell: Shell


def _step(label: str, fn: Callable[[], Any], *, verbose: bool) -> Any:
    """Run a boot step with status output."""
    use_color = ansi_supported(sys.stderr)

    def paint(text: str, color: str) -> str:
        return colorize(text, color) if use_color else text

    try:
        out = fn()
    except Exception as exc:
        print_line(paint(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red"), file=sys.stderr)
        raise
    if verbose:
        print_line(paint(f"[  OK  ] {label}", "green"), file=sys.stderr)
    return out


def boot_sequence(*, verbose: bool = True) -> BootState:
    # ---------- config ----------
    config: ShellConfig = _step("Load configuration", load_config, verbose=verbose)

    # ---------- logging ----------
    logger = _step(
        "Initialize logger",
        lambda: init_logger(
            "patternshell",
            level=config.log_level or logging.WARNING,
            logfile=config.log_file_path,
        ),
        verbose=verbose,
    )

    # ---------- commands ----------
    plugins: CommandSet = _step(
        f"Load commands from package '{config.plugin_package}'",
        lambda: load_commands(config.plugin_package),
        verbose=verbose,
    )
    completers: CompleterSet = _step(
        "Collect argument completers",
        lambda: load_completers(config.plugin_package),
        verbose=verbose,
    )

    # The help command reads the shell's current set, so it is built first
    # and the shell is filled in afterwards.
    holder: dict[str, Shell] = {}
    help_command = HelpCommand(lambda: holder["shell"].commands)
    commands = CommandSet([help_command], [plugins])

    def _build_shell() -> Shell:
        holder["shell"] = Shell(
            commands,
            completers,
            prompt=config.prompt,
            exception_handler=retrying_exception_handler(config.retries, commands) if config.retries else None,
            history_path=config.history_file_path,
            enable_completion=config.enable_completion,
        )
        return holder["shell"]

    shell: Shell = _step("Build shell", _build_shell, verbose=verbose)

    logger.debug("Boot complete: %d commands, %d completers", len(shell.commands), len(completers))
    return BootState(config=config, logger=logger, shell=shell)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    interactive = not args
    try:
        state = boot_sequence(verbose=interactive)
    except (PatternShellError, ImportError):
        return 2

    if not interactive:
        line = " ".join(args)
        return 0 if state.shell.execute(line, sys.stdout) else 1

    print_line(HELP_TEXT)
    state.shell.start_interactive_mode(sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())

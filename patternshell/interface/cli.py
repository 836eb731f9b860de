#!/usr/bin/env python3
# patternshell/interface/cli.py
from __future__ import annotations

"""
The Shell and its interactive input frontends.

Frontend selection order:
    1) prompt_toolkit (rich completion + history)
    2) readline (basic completion + history)
    3) plain input (last resort)

Every frontend asks the shell for its current completer on each keystroke /
TAB, so replacing the command set takes effect on the next completion.
"""

import logging
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, Optional, TextIO, Union

from patternshell.commands import CommandSet
from .completion import AggregateCompleter, Completer, CompleterLike, CompleterSet, build_completer
from .handler import ExceptionHandler, execute_line
from .parser import split_buffer

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "cli> "
EXIT_WORDS = frozenset({"exit", "quit"})

CompleterSupplier = Callable[[], Completer]


# ---------------------------------------------------------------------------
# Frontends
# ---------------------------------------------------------------------------

class BaseCLI:
    """
    Base interface for CLI frontends; on its own a plain input() reader.

    Subclasses may override:
        - setup()
        - get_line()
        - teardown()

    Context manager support guarantees teardown.
    """

    def __init__(self, prompt: str = DEFAULT_PROMPT) -> None:
        self.prompt = prompt

    def setup(self) -> None:
        pass

    def get_line(self) -> str:
        """Read one line; raises EOFError at end of input and KeyboardInterrupt on Ctrl-C."""
        return input(self.prompt)

    def teardown(self) -> None:
        pass

    # Context manager helpers
    def __enter__(self) -> BaseCLI:
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.teardown()
        except OSError as teardown_error:
            logger.warning("Frontend teardown failed: %s", teardown_error)


# ===== Preferred: prompt_toolkit =====
class PromptToolkitCLI(BaseCLI):
    """Rich line editor with history and live completion."""

    def __init__(
        self,
        completer: CompleterSupplier,
        prompt: str = DEFAULT_PROMPT,
        history_path: Optional[Path] = None,
    ) -> None:
        super().__init__(prompt)
        from prompt_toolkit import PromptSession
        from prompt_toolkit.completion import Completer as PTCompleter, Completion
        from prompt_toolkit.history import FileHistory, InMemoryHistory
        from prompt_toolkit.key_binding import KeyBindings

        self._history_path = history_path
        history = FileHistory(str(history_path)) if history_path else InMemoryHistory()

        class _Completer(PTCompleter):
            def get_completions(self, document, complete_event):
                text_before_cursor = document.text_before_cursor
                _, current_word = split_buffer(text_before_cursor)
                # replace exactly the word being typed
                for candidate in completer().complete(text_before_cursor):
                    yield Completion(candidate, start_position=-len(current_word))

        # Key bindings to refresh completion when deleting characters.
        kb = KeyBindings()

        @kb.add("backspace")
        def _(event):
            b = event.app.current_buffer
            if b.read_only():
                return
            if b.selection_state:
                b.delete_selection()
            else:
                b.delete_before_cursor(1)
            b.start_completion(select_first=False)

        self._session = PromptSession(
            history=history,
            completer=_Completer(),
            complete_while_typing=True,
            key_bindings=kb,
        )

    def setup(self) -> None:
        if self._history_path:
            self._history_path.parent.mkdir(parents=True, exist_ok=True)
            self._history_path.touch(exist_ok=True)

    def get_line(self) -> str:
        return self._session.prompt(self.prompt)


# ===== Fallback: readline =====
class ReadlineCLI(BaseCLI):
    """Fallback editor with basic completion and history."""

    def __init__(
        self,
        completer: CompleterSupplier,
        prompt: str = DEFAULT_PROMPT,
        history_path: Optional[Path] = None,
    ) -> None:
        super().__init__(prompt)
        import readline

        self.readline = readline
        self._completer = completer
        self._history_path = history_path

    def setup(self) -> None:
        if self._history_path and self._history_path.exists():
            self.readline.read_history_file(str(self._history_path))

        # Quoted spans are completed as one word; only the space separates words.
        self.readline.set_completer_delims(" ")

        def _complete(text_fragment: str, state_index: int) -> Optional[str]:
            buffer_text = self.readline.get_line_buffer()[: self.readline.get_endidx()]
            matches = self._completer().complete(buffer_text)
            return matches[state_index] if state_index < len(matches) else None

        self.readline.set_completer(_complete)
        self.readline.parse_and_bind("tab: complete")

    def teardown(self) -> None:
        if self._history_path:
            self.readline.write_history_file(str(self._history_path))


def make_cli(
    completer: Optional[CompleterSupplier] = None,
    *,
    prompt: str = DEFAULT_PROMPT,
    history_path: Optional[Path] = None,
) -> BaseCLI:
    """
    Select the best available frontend at runtime.

    Without a completer (completion disabled) the plain input frontend is used.
    """
    if completer is None:
        return BaseCLI(prompt)
    try:
        return PromptToolkitCLI(completer, prompt, history_path)
    except ImportError:
        logger.debug("prompt_toolkit unavailable, trying readline")
    try:
        return ReadlineCLI(completer, prompt, history_path)
    except ImportError:
        logger.debug("readline unavailable, using plain input")
    return BaseCLI(prompt)


# ---------------------------------------------------------------------------
# Shell
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class _ShellState:
    commands: CommandSet
    completers: CompleterSet
    completer: AggregateCompleter


def _build_state(commands: CommandSet, completers: CompleterSet) -> _ShellState:
    return _ShellState(commands, completers, build_completer(commands, completers))


class Shell:
    """
    A command set, its completion and a read-eval loop.

    The command set, the completer set and the completer built from both form
    one snapshot that set_commands / set_completers replace under a lock;
    every read takes the snapshot once, so a concurrent swap is never observed
    half done.
    """

    def __init__(
        self,
        commands: CommandSet,
        completers: Optional[Mapping[str, CompleterLike]] = None,
        *,
        prompt: str = DEFAULT_PROMPT,
        frontend: Optional[BaseCLI] = None,
        exception_handler: Optional[ExceptionHandler] = None,
        history_path: Optional[Path] = None,
        enable_completion: bool = True,
    ) -> None:
        self._lock = threading.Lock()
        self._state = _build_state(commands, _as_completer_set(completers))
        self.prompt = prompt
        self._frontend = frontend
        self._exception_handler = exception_handler
        self._history_path = history_path
        self._enable_completion = enable_completion
        self._interrupt_handlers: list[Callable[[], None]] = []

    # ---------------- Snapshot ----------------

    @property
    def commands(self) -> CommandSet:
        return self._state.commands

    @property
    def completers(self) -> CompleterSet:
        return self._state.completers

    @property
    def completer(self) -> AggregateCompleter:
        return self._state.completer

    def set_commands(self, commands: CommandSet) -> None:
        """Replace the command set; completion is rebuilt."""
        with self._lock:
            state = _build_state(commands, self._state.completers)
            self._state = state
        logger.debug("Command set replaced (%d commands)", len(state.commands))

    def set_completers(self, completers: Mapping[str, CompleterLike]) -> None:
        """Replace the argument completers; completion is rebuilt."""
        with self._lock:
            state = _build_state(self._state.commands, _as_completer_set(completers))
            self._state = state
        logger.debug("Completer set replaced (%d completers)", len(state.completers))

    def add_user_interrupt_handler(self, handler: Callable[[], None]) -> None:
        """Register a callback run when the user presses Ctrl-C at the prompt."""
        self._interrupt_handlers.append(handler)

    # ---------------- Execution ----------------

    def execute(self, input_line: str, output: Optional[TextIO] = None) -> bool:
        """Run one input line against the current command set."""
        return execute_line(
            input_line,
            self._state.commands,
            output or sys.stdout,
            exception_handler=self._exception_handler,
        )

    def _make_frontend(self) -> BaseCLI:
        if self._frontend is not None:
            return self._frontend
        supplier = (lambda: self._state.completer) if self._enable_completion else None
        return make_cli(supplier, prompt=self.prompt, history_path=self._history_path)

    def start_interactive_mode(self, output: Optional[TextIO] = None) -> None:
        """
        Read-eval loop until end of input or an exit word.

        Ctrl-C runs the registered interrupt handlers and continues reading.
        """
        output = output or sys.stdout
        with self._make_frontend() as frontend:
            while True:
                try:
                    line = frontend.get_line()
                except EOFError:
                    break
                except KeyboardInterrupt:
                    self._on_user_interrupt()
                    continue

                if line.strip().lower() in EXIT_WORDS:
                    break
                try:
                    self.execute(line, output)
                except KeyboardInterrupt:
                    self._on_user_interrupt()
                output.flush()

    def _on_user_interrupt(self) -> None:
        logger.debug("User interrupt")
        for handler in self._interrupt_handlers:
            handler()


def _as_completer_set(completers: Union[CompleterSet, Mapping[str, CompleterLike], None]) -> CompleterSet:
    if isinstance(completers, CompleterSet):
        return completers
    return CompleterSet(completers)

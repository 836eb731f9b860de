# plugins/notes/entrypoint.py
from __future__ import annotations

import threading
from typing import TextIO

from patternshell.commands import Arguments, command
from patternshell.interface.completion import StringsCompleter


class NoteStore:
    """Note id -> content, shared by the note commands."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._notes: dict[str, str] = {}

    def put(self, note_id: str, content: str) -> None:
        with self._lock:
            self._notes[note_id] = content

    def get(self, note_id: str) -> str | None:
        with self._lock:
            return self._notes.get(note_id)

    def remove(self, note_id: str) -> bool:
        with self._lock:
            return self._notes.pop(note_id, None) is not None

    def ids(self) -> list[str]:
        with self._lock:
            return sorted(self._notes)

    def clear(self) -> None:
        with self._lock:
            self._notes.clear()


NOTES = NoteStore()


# ---------- create ----------
@command("create <new-note-id> <content>", description="Creates a note")
def create_note(arguments: Arguments, output: TextIO) -> str:
    note_id = arguments.get("new-note-id")
    NOTES.put(note_id, arguments.get("content"))
    return f"Created note '{note_id}'"


# ---------- get ----------
@command("get <note-id>", description="Gets a note")
def get_note(arguments: Arguments, output: TextIO) -> str:
    note_id = arguments.get("note-id")
    content = NOTES.get(note_id)
    if content is None:
        return f"Note '{note_id}' doesn't exist"
    return f"Note '{note_id}': {content}"


# ---------- delete ----------
@command("delete <note-id>", description="Deletes a note")
def delete_note(arguments: Arguments, output: TextIO) -> str:
    note_id = arguments.get("note-id")
    if not NOTES.remove(note_id):
        return f"Note '{note_id}' doesn't exist"
    return f"Deleted note '{note_id}'"


# ---------- list ----------
@command("list", description="Lists all notes")
def list_notes(arguments: Arguments, output: TextIO) -> None:
    note_ids = NOTES.ids()
    if not note_ids:
        output.write("No notes\n")
        return
    output.write("Notes:\n")
    for note_id in note_ids:
        output.write(f"{note_id}\n")


COMMANDS = [create_note, get_note, delete_note, list_notes]

# The supplier form re-reads the store on every completion request.
COMPLETERS = {"note-id": StringsCompleter(NOTES.ids)}

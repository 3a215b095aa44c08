"""The command history file and the history builtin."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TextIO

from .textutils import find_number

DEFAULT_HISTORY_PATH = "/tmp/.42sh_history.txt"


class EventNotFound(LookupError):
    """Raised when a ``!N`` reference names no history entry."""

    def __init__(self, number: int) -> None:
        super().__init__(number)
        self.number = number

    def __str__(self) -> str:
        return f"{self.number}: Event not found."


class History:
    """Command lines stored one per line in a file."""

    def __init__(self, path: str | os.PathLike[str] = DEFAULT_HISTORY_PATH) -> None:
        self.path = Path(path)

    def _lines(self) -> list[str]:
        try:
            with open(self.path, encoding="utf-8", newline="\n") as handle:
                return list(handle)
        except FileNotFoundError:
            return []

    def add(self, line: str) -> None:
        """Append a command line, ending it with a newline if it has none."""
        if not line.endswith("\n"):
            line += "\n"
        fd = os.open(self.path, os.O_CREAT | os.O_WRONLY | os.O_APPEND, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(line)

    def clear(self) -> None:
        """Empty the history file, creating it if needed."""
        fd = os.open(self.path, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 0o600)
        os.close(fd)

    def entries(self) -> list[str]:
        """Return the stored lines without their newlines."""
        return [line.rstrip("\n") for line in self._lines()]

    def numbered(self) -> str:
        """Return the history as ``N line`` rows, counting from 1."""
        return "".join(f"{number} {line}" for number, line in enumerate(self._lines(), 1))

    def raw(self) -> str:
        """Return the history lines without numbers."""
        return "".join(self._lines())

    def expand(self, line: str) -> str:
        """Replace a ``!N`` line with history entry N; other lines pass through."""
        if not line.startswith("!"):
            return line
        number = find_number(line, 1)
        entries = self.entries()
        if 1 <= number <= len(entries):
            return entries[number - 1]
        raise EventNotFound(number)


def history_command(history: History, args: list[str], out: TextIO) -> int:
    """Run the history builtin: ``-c`` clears, ``-h`` omits numbers."""
    option = args[1] if len(args) > 1 else None
    if option == "-c":
        history.clear()
    elif option == "-h":
        out.write(history.raw())
    else:
        out.write(history.numbered())
    return 0
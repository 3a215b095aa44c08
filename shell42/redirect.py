"""Input and output redirections of a command line."""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import NamedTuple, TextIO


class Streams(NamedTuple):
    stdin: TextIO | None
    stdout: TextIO | None


def _split_at(line: str, marker: str) -> tuple[str, str]:
    """Cut the line at the first marker; return the head and the target after it."""
    start = line.index(marker)
    end = start
    while end < len(line) and line[end] in (marker, " "):
        end += 1
    return line[:start], line[end:].rstrip(" ")


@dataclass
class Redirections:
    """A command with the files its input and output are redirected to."""

    command: str
    output: str | None = None
    append: bool = False
    input: str | None = None

    @contextmanager
    def open_streams(self) -> Iterator[Streams]:
        """Open the redirection files; a file that cannot be opened is left out."""
        with ExitStack() as stack:
            stdin: TextIO | None = None
            stdout: TextIO | None = None
            if self.input is not None:
                try:
                    stdin = stack.enter_context(open(self.input, encoding="utf-8"))
                except OSError:
                    stdin = None
            if self.output is not None:
                flags = os.O_CREAT | os.O_WRONLY
                flags |= os.O_APPEND if self.append else os.O_TRUNC
                try:
                    fd = os.open(self.output, flags, 0o600)
                except OSError:
                    stdout = None
                else:
                    stdout = stack.enter_context(os.fdopen(fd, "w", encoding="utf-8"))
            yield Streams(stdin, stdout)


def parse_redirections(line: str) -> Redirections:
    """Split ``>``, ``>>``, ``<`` and ``<<`` targets off a command line."""
    result = Redirections(line)
    if ">" in result.command:
        result.append = ">>" in result.command
        result.command, result.output = _split_at(result.command, ">")
    if "<" in result.command:
        result.command, result.input = _split_at(result.command, "<")
    return result


def file_size(path: str | os.PathLike[str]) -> int:
    """Return the size of a file in bytes."""
    return os.stat(path).st_size
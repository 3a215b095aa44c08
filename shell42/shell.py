"""The interactive command loop."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Iterable, Mapping
from typing import TextIO

from .builtins import ShellExit
from .environment import Environment
from .executor import (
    INVALID_NULL_COMMAND,
    Stage,
    resolve_command,
    run_command,
    run_pipeline,
    search_path,
)
from .history import EventNotFound
from .redirect import parse_redirections
from .state import ShellState
from .textutils import count_pipes, is_viable, last_path_component, parse_args

COLOR_RED = "\x1b[1;31m"
COLOR_CYAN = "\x1b[1;36m"
COLOR_GREEN = "\x1b[1;32m"
COLOR_RESET = "\x1b[0m"

_DOUBLE_PIPE = re.compile(r"(?:\|\|)+")


def split_and(line: str) -> list[str]:
    """Split a line on runs of ``&``, dropping empty pieces."""
    return [piece for piece in line.split("&") if piece]


def split_or(line: str) -> list[str]:
    """Split a line on ``||``; a single ``|`` stays in its piece."""
    pieces = _DOUBLE_PIPE.split(line)
    if pieces and pieces[-1] == "":
        pieces.pop()
    return pieces


class Shell:
    """Reads command lines and runs them."""

    def __init__(
        self,
        env: Environment | Mapping[str, str] | Iterable[str] | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        if env is None:
            environment = Environment(os.environ)
        elif isinstance(env, Environment):
            environment = env
        else:
            environment = Environment(env)
        self.state = ShellState(env=environment)
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr

    def prompt(self) -> str:
        """Return the prompt: an arrow coloured by the last status and the directory."""
        try:
            cwd = os.getcwd()
        except OSError:
            cwd = ""
        name = last_path_component(cwd) or "/"
        home = self.state.env.get("HOME")
        if home and cwd and os.path.normpath(home) == cwd:
            name = "~"
        color = COLOR_GREEN if self.state.succeeded() else COLOR_RED
        return f"{color}-> {COLOR_CYAN}{name}:{COLOR_RESET} "

    def _stage(self, segment: str) -> Stage:
        redirs = parse_redirections(segment)
        args = parse_args(redirs.command)
        command = resolve_command(search_path(self.state.env), args[0])
        return Stage(args, command, redirs)

    def _run_piped(self, line: str) -> int:
        expected = count_pipes(line) + 1
        stages = [self._stage(seg) for seg in line.split("|") if seg and is_viable(seg)]
        if len(stages) != expected:
            self.stderr.write(INVALID_NULL_COMMAND)
            self.state.last_status = 1
            return 1
        return run_pipeline(self.state, stages, self.stdout, self.stderr)

    def run_simple(self, line: str) -> int:
        """Run a line free of ``;``, ``&&`` and ``||``, with or without pipes."""
        if count_pipes(line):
            return self._run_piped(line)
        try:
            line = self.state.history.expand(line)
        except EventNotFound as error:
            self.stdout.write(f"{error}\n")
            self.state.last_status = 1
            self.state.should_continue = False
            return 1
        if not self.state.should_continue:
            return self.state.last_status
        redirs = parse_redirections(line)
        args = parse_args(redirs.command)
        return run_command(self.state, args, redirs, self.stdout, self.stderr)

    def _run_or_chain(self, part: str) -> None:
        for index, chunk in enumerate(split_or(part)):
            if index and self.state.succeeded():
                continue
            self.run_simple(chunk)

    def run_line(self, line: str) -> int:
        """Expand aliases and run every ``;``-separated command of a line."""
        expanded = self.state.aliases.expand(line)
        if expanded != line:
            self.stdout.write(f"{expanded}\n")
        try:
            for segment in (piece for piece in expanded.split(";") if piece):
                for index, part in enumerate(split_and(segment)):
                    if index and not self.state.succeeded():
                        continue
                    self._run_or_chain(part)
        finally:
            self.state.should_continue = True
        return self.state.last_status

    def _interactive(self) -> bool:
        try:
            return self.stdin.isatty()
        except (AttributeError, ValueError):
            return False

    def loop(self) -> int:
        """Read and run lines until end of input or exit; return the exit status."""
        interactive = self._interactive()
        while True:
            if interactive:
                self.stdout.write(self.prompt())
                self.stdout.flush()
            raw = self.stdin.readline()
            if not raw:
                break
            self.state.history.add(raw)
            line = raw[:-1] if raw.endswith("\n") else raw
            try:
                self.run_line(line)
            except ShellExit as request:
                self.stdout.flush()
                return request.code
        if interactive:
            self.stdout.write("exit\n")
            self.stdout.flush()
            return 0
        return self.state.last_status


def main(argv: list[str] | None = None) -> int:
    """Start the shell; any argument is refused with status 84."""
    args = sys.argv[1:] if argv is None else list(argv)
    if args:
        return 84
    return Shell().loop()
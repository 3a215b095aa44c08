"""Builtin commands: exit, env, unsetenv, alias, setenv, cd, history, echo."""

from __future__ import annotations

import os
from typing import TextIO

from .aliases import alias_command
from .echo import echo_command
from .environment import Environment, setenv_command, unsetenv_command
from .history import history_command
from .state import ShellState
from .textutils import prefix_matches

EXPRESSION_SYNTAX = "exit: Expression Syntax.\n"
CD_TOO_MANY = "cd: Too many arguments.\n"
CD_NO_PREVIOUS_DIR = ": No such file or directory\n"
CD_NO_HOME = "cd: No home directory.\n"


class ShellExit(Exception):
    """Raised when the shell is asked to exit with a status."""

    def __init__(self, code: int) -> None:
        super().__init__(code)
        self.code = code


def is_exit_number(text: str) -> bool:
    """Return True when the text is a non-empty run of decimal digits."""
    return bool(text) and text.isascii() and text.isdigit()


def exit_command(args: list[str], out: TextIO) -> int:
    """Run the exit builtin; raises ShellExit, or returns 1 on a syntax error."""
    if len(args) == 3:
        out.write(EXPRESSION_SYNTAX)
        return 1
    if len(args) == 1:
        out.write("exit\n")
        raise ShellExit(0)
    if not is_exit_number(args[1]):
        out.write(EXPRESSION_SYNTAX)
        return 1
    out.write("exit\n")
    raise ShellExit(int(args[1]) % 256)


def _update_working_dir(env: Environment, target: str) -> None:
    if len(target) > 1 and target.endswith("/"):
        target = target[:-1]
    try:
        env.set("OLDPWD", os.getcwd())
    except OSError:
        pass
    try:
        os.chdir(target)
    except OSError:
        pass
    env.set("PWD", os.getcwd())


def _go_home(env: Environment, err: TextIO) -> int:
    home = env.get("HOME")
    if home is None:
        err.write(CD_NO_HOME)
        return 1
    _update_working_dir(env, home)
    return 0


def change_directory(state: ShellState, args: list[str], err: TextIO) -> int:
    """Run the cd builtin, keeping PWD and OLDPWD up to date."""
    env = state.env
    if len(args) == 1:
        return _go_home(env, err)
    if len(args) > 2:
        err.write(CD_TOO_MANY)
        return 1
    target = args[1]
    if prefix_matches(target, "~"):
        return _go_home(env, err)
    if prefix_matches(target, "-"):
        previous = env.get("OLDPWD")
        current = env.get("PWD") or ""
        if previous is None or prefix_matches(previous, current):
            err.write(CD_NO_PREVIOUS_DIR)
            return 1
        _update_working_dir(env, previous)
        return 0
    if prefix_matches(target, "--"):
        return _go_home(env, err)
    try:
        with os.scandir(target):
            pass
    except OSError as error:
        err.write(f"{target}: {error.strerror}.\n")
        return 1
    _update_working_dir(env, target)
    return 0


def run_builtin(state: ShellState, args: list[str], out: TextIO, err: TextIO) -> int | None:
    """Run ``args`` as a builtin and return its status, or None if it is not one.

    A command word selects the first builtin whose name it begins.
    """
    if not args or not args[0]:
        return None
    word = args[0]
    if prefix_matches(word, "exit"):
        exit_command(args, out)
        return 1
    if prefix_matches(word, "env"):
        out.write("".join(f"{line}\n" for line in state.env.lines()))
        return 0
    if prefix_matches(word, "unsetenv"):
        return unsetenv_command(state.env, args, out)
    if prefix_matches(word, "alias"):
        return alias_command(state.aliases, args, out)
    if prefix_matches(word, "setenv"):
        return setenv_command(state.env, args, out)
    if prefix_matches(word, "cd"):
        return change_directory(state, args, err)
    if prefix_matches(word, "history"):
        return history_command(state.history, args, out)
    if prefix_matches(word, "echo"):
        return echo_command(args, state.last_status, out)
    return None
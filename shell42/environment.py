"""The shell's environment and the setenv/unsetenv builtins."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TextIO

BEGIN_WITH_LETTER = "setenv: Variable name must begin with a letter.\n"
ALPHANUMERIC_ONLY = "setenv: Variable name must contain alphanumeric characters.\n"
TOO_MANY_ARGS = "setenv: Too many arguments.\n"
TOO_FEW_ARGS = "unsetenv: Too few arguments.\n"


class InvalidVariableName(ValueError):
    """Raised when a name cannot be used as an environment variable."""


def _is_ascii_letter(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def validate_name(name: str) -> str:
    """Check that a name suits setenv; return it or raise InvalidVariableName."""
    if not name or not (name[0] == "_" or _is_ascii_letter(name[0])):
        raise InvalidVariableName(BEGIN_WITH_LETTER)
    for ch in name:
        if not (ch == "_" or _is_ascii_letter(ch) or "0" <= ch <= "9"):
            raise InvalidVariableName(ALPHANUMERIC_ONLY)
    return name


class Environment:
    """An ordered set of NAME=value entries."""

    def __init__(self, entries: Iterable[str] | Mapping[str, str] = ()) -> None:
        self._vars: dict[str, str] = {}
        if isinstance(entries, Mapping):
            for name, value in entries.items():
                self._vars.setdefault(str(name), str(value))
            return
        for entry in entries:
            name, _, value = entry.partition("=")
            self._vars.setdefault(name, value)

    def get(self, name: str) -> str | None:
        """Return the value of a variable, or None when it is not set."""
        return self._vars.get(name)

    def set(self, name: str, value: str = "") -> None:
        """Set a variable, keeping its place if it already exists."""
        self._vars[name] = value

    def unset(self, name: str) -> bool:
        """Remove the first entry whose NAME=value line starts with ``name``."""
        for key, value in self._vars.items():
            if f"{key}={value}".startswith(name):
                del self._vars[key]
                return True
        return False

    def clear(self) -> None:
        """Remove every variable."""
        self._vars.clear()

    def lines(self) -> list[str]:
        """Return the entries as NAME=value strings, in order."""
        return [f"{key}={value}" for key, value in self._vars.items()]

    def copy(self) -> "Environment":
        return Environment(dict(self._vars))

    def as_dict(self) -> dict[str, str]:
        return dict(self._vars)

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __len__(self) -> int:
        return len(self._vars)


def setenv_command(env: Environment, args: list[str], out: TextIO) -> int:
    """Run the setenv builtin; ``args`` includes the command name."""
    if len(args) == 1:
        out.write("".join(f"{line}\n" for line in env.lines()))
        return 0
    if len(args) > 3:
        out.write(TOO_MANY_ARGS)
        return 1
    try:
        name = validate_name(args[1])
    except InvalidVariableName as error:
        out.write(str(error))
        return 1
    env.set(name, args[2] if len(args) == 3 else "")
    return 0


def unsetenv_command(env: Environment, args: list[str], out: TextIO) -> int:
    """Run the unsetenv builtin; ``*`` removes everything."""
    if len(args) < 2:
        out.write(TOO_FEW_ARGS)
        return 1
    if args[1].startswith("*"):
        env.clear()
        return 0
    for name in args[1:]:
        env.unset(name)
    return 0
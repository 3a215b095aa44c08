"""Command aliases and the alias builtin."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TextIO

from .textutils import prefix_matches


@dataclass
class Alias:
    name: str
    command: str

    def __str__(self) -> str:
        return f"{self.name} {self.command}"


def replace_all(line: str, alias: str, command: str) -> str:
    """Replace every occurrence of ``alias`` in ``line``, left to right."""
    if not alias:
        raise ValueError("alias name must not be empty")
    return line.replace(alias, command)


@dataclass
class AliasTable:
    """Aliases in the order they were defined."""

    aliases: list[Alias] = field(default_factory=list)

    def add(self, name: str, command: str) -> Alias:
        alias = Alias(name, command)
        self.aliases.append(alias)
        return alias

    def define(self, args: list[str]) -> Alias:
        """Define an alias from ``alias NAME WORD...``."""
        if len(args) < 3:
            raise ValueError("alias needs a name and a command")
        return self.add(args[1], " ".join(args[2:]))

    def search(self, name: str) -> Alias | None:
        """Return the first alias whose name starts with ``name``."""
        return next((a for a in self.aliases if prefix_matches(name, a.name)), None)

    def format_all(self) -> str:
        return "".join(f"{alias}\n" for alias in self.aliases)

    def expand(self, line: str) -> str:
        """Substitute the first alias found in the line; unchanged if none is."""
        for alias in self.aliases:
            if alias.name and alias.name in line:
                return replace_all(line, alias.name, alias.command)
        return line


def alias_command(table: AliasTable, args: list[str], out: TextIO) -> int:
    """Run the alias builtin: list, show one, or define."""
    if len(args) == 1:
        out.write(table.format_all())
    elif len(args) == 2:
        found = table.search(args[1])
        if found is not None:
            out.write(f"{found}\n")
    else:
        table.define(args)
    return 0
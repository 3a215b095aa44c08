"""Shell variables set with NAME=value lines."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Variable:
    name: str
    value: str


def is_assignment(text: str) -> bool:
    """Return True when the text holds an ``=``."""
    return "=" in text


def parse_assignment(text: str) -> Variable:
    """Parse ``NAME=value`` (up to the first newline) into a Variable."""
    line = text.split("\n", 1)[0]
    if "=" not in line:
        raise ValueError(f"not an assignment: {text!r}")
    name, _, value = line.partition("=")
    return Variable(name, value)


@dataclass
class VariableStore:
    """Variables kept in the order they were defined."""

    variables: list[Variable] = field(default_factory=list)

    def add(self, name: str, value: str) -> Variable:
        variable = Variable(name, value)
        self.variables.append(variable)
        return variable

    def record(self, line: str) -> bool:
        """Store the line if it is an assignment; report whether it was."""
        if not is_assignment(line):
            return False
        self.variables.append(parse_assignment(line))
        return True

    def lookup(self, reference: str) -> str | None:
        """Resolve ``$name``: the first variable whose name contains ``name``."""
        wanted = reference[1:]
        for variable in self.variables:
            if wanted in variable.name:
                return variable.value
        return None

    def format_reference(self, reference: str) -> str:
        """Return the line printed for a reference; an empty line when unknown."""
        value = self.lookup(reference)
        return f"{value if value is not None else ''}\n"
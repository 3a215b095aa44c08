"""The state a running shell carries from one command to the next."""

from __future__ import annotations

from dataclasses import dataclass, field

from .aliases import AliasTable
from .environment import Environment
from .history import DEFAULT_HISTORY_PATH, History
from .variables import VariableStore


@dataclass
class ShellState:
    """Environment, last exit status, aliases, history and shell variables."""

    env: Environment = field(default_factory=Environment)
    last_status: int = 0
    should_continue: bool = True
    aliases: AliasTable = field(default_factory=AliasTable)
    history: History = field(default_factory=lambda: History(DEFAULT_HISTORY_PATH))
    variables: VariableStore = field(default_factory=VariableStore)

    def succeeded(self) -> bool:
        """Return True when the last command exited with status 0."""
        return self.last_status == 0
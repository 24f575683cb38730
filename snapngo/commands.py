"""Commands that run one operation of a database strategy."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .strategies import DBStrategy


class Command(ABC):
    """An operation that can be executed."""

    @abstractmethod
    def execute(self) -> None:
        """Run the operation, raising on failure."""


@dataclass
class PingCommand(Command):
    """Check that the database answers."""

    strategy: DBStrategy

    def execute(self) -> None:
        self.strategy.ping()


@dataclass
class BackUpCommand(Command):
    """Take a snapshot of the database."""

    strategy: DBStrategy

    def execute(self) -> None:
        self.strategy.backup()


@dataclass
class RestoreCommand(Command):
    """Restore the newest snapshot of the database."""

    strategy: DBStrategy

    def execute(self) -> None:
        self.strategy.restore()
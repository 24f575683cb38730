"""Lookup tables from engine and command names to implementations."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

from .commands import BackUpCommand, Command, PingCommand, RestoreCommand
from .strategies import DBStrategy, MongoStrategy
from .types import ConnectionParams


class UnsupportedError(ValueError):
    """The engine or command name is not known."""


STRATEGY_FACTORY: dict[str, Callable[[ConnectionParams], DBStrategy]] = {
    "mongo": lambda params: MongoStrategy(replace(params)),
}

COMMAND_FACTORY: dict[str, Callable[[DBStrategy, ConnectionParams], Command]] = {
    "ping": lambda strategy, _params: PingCommand(strategy),
    "backup": lambda strategy, _params: BackUpCommand(strategy),
    "restore": lambda strategy, _params: RestoreCommand(strategy),
}


def create_strategy(params: ConnectionParams) -> DBStrategy:
    """Return the strategy for ``params.engine``."""
    try:
        factory = STRATEGY_FACTORY[params.engine]
    except KeyError:
        raise UnsupportedError(f"unsupported DB: {params.engine}") from None
    return factory(params)


def create_command(strategy: DBStrategy, params: ConnectionParams) -> Command:
    """Return the command named by ``params.command`` bound to ``strategy``."""
    try:
        factory = COMMAND_FACTORY[params.command]
    except KeyError:
        raise UnsupportedError(f"unsupported Command: {params.command}") from None
    return factory(strategy, params)
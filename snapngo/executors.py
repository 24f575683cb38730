"""Run one configured operation, or many from a file in parallel."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .commands import Command
from .factories import UnsupportedError, create_command, create_strategy
from .logger import Logger
from .types import ConnectionParams


class ExecutionError(Exception):
    """An operation could not be set up or did not succeed."""


def load_connection_params(file_path: str) -> list[ConnectionParams]:
    """Read a JSON list of connection objects, relative to the working directory."""
    path = Path.cwd() / file_path
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExecutionError(f"Error reading file: {exc}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ExecutionError(f"Error unmarshalling JSON: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, list):
        raise ExecutionError(
            "Error unmarshalling JSON: expected a list of connection objects"
        )
    try:
        return [ConnectionParams.from_dict(item) for item in data]
    except TypeError as exc:
        raise ExecutionError(f"Error unmarshalling JSON: {exc}") from exc


def _build(params: ConnectionParams, logger: Logger) -> Command:
    try:
        return create_command(create_strategy(params), params)
    except UnsupportedError as exc:
        logger.error(str(exc))
        raise ExecutionError(str(exc)) from exc


def _execute(command: Command, params: ConnectionParams, logger: Logger) -> None:
    try:
        command.execute()
    except Exception as exc:
        label = f"Error while executing {params.command} on DBMS: {params.engine}"
        logger.error(label, exc)
        raise ExecutionError(f"{label}: {exc}") from exc


def run_single(params: ConnectionParams, logger: Logger) -> None:
    """Run the operation described by ``params``."""
    logger.info("Starting single command execution")
    command = _build(params, logger)
    logger.info(f"Executing command: {params.command}")
    _execute(command, params, logger)
    logger.info("operation completed successfully.")


def _run_configured(command: Command, params: ConnectionParams, logger: Logger) -> None:
    _execute(command, params, logger)
    logger.info(f"operation completed successfully for command: {params.command}")


def run_concurrent(db_file: str, logger: Logger) -> None:
    """Run every operation listed in ``db_file`` at the same time."""
    logger.info("Starting Concurrent command execution")
    configs = load_connection_params(db_file)
    futures = []
    with ThreadPoolExecutor(max_workers=max(1, len(configs))) as pool:
        for index, params in enumerate(configs):
            command = _build(params, logger)
            logger.info(f"Executing Config: {index}")
            futures.append(pool.submit(_run_configured, command, params, logger))
    errors = [exc for exc in (f.exception() for f in futures) if exc is not None]
    if errors:
        raise ExecutionError(
            f"{len(errors)} of {len(futures)} operations failed"
        ) from errors[0]
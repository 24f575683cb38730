"""Database strategies: how ping, backup and restore are done per engine."""

from __future__ import annotations

import os
import re
import subprocess
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from urllib.parse import quote_plus

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from .types import ConnectionParams

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(Z|[+-]\d{2}:\d{2})\Z"
)


class StrategyError(Exception):
    """A database operation failed."""


def _parse_rfc3339(text: str) -> datetime:
    match = _RFC3339.match(text)
    if match is None:
        raise ValueError(f"cannot parse {text!r} as an RFC 3339 time")
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    fraction, zone = match.group(7), match.group(8)
    micro = int((fraction or "0")[:6].ljust(6, "0"))
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        tz = timezone(sign * timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6])))
    return datetime(year, month, day, hour, minute, second, micro, tzinfo=tz)


def _format_rfc3339(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = moment.replace(microsecond=0).isoformat()
    if moment.utcoffset() == timedelta(0):
        text = text[:-6] + "Z"
    return text


def build_uri(params: ConnectionParams) -> str:
    """Build the MongoDB connection URI for ``params``."""
    if params.username and params.password:
        user = quote_plus(params.username)
        secret = quote_plus(params.password)
        uri = f"mongodb://{user}:{secret}@{params.host}:{params.port}/"
    else:
        uri = f"mongodb://{params.host}:{params.port}/"
    if params.db_name:
        uri += "/" + params.db_name
    query = ["authSource=admin"]
    return uri + "?" + "&".join(query)


def latest_backup_dir(db_name: str, base_dir: str = ".") -> str:
    """Return the newest timestamped snapshot directory of ``db_name``.

    The first entry (in name order) must be a valid timestamp; later entries
    that are not are skipped.
    """
    dir_path = f"{base_dir}/snapshot-{db_name}/"
    try:
        names = sorted(os.listdir(dir_path))
    except OSError as exc:
        raise StrategyError(f"failed to read directory {dir_path}: {exc}") from exc
    if not names:
        raise StrategyError(f"no backup directories found in {dir_path}")
    try:
        latest = _parse_rfc3339(names[0])
    except ValueError as exc:
        raise StrategyError(f"Error parsing date '{names[0]}': {exc}") from exc
    for name in names[1:]:
        try:
            current = _parse_rfc3339(name)
        except ValueError:
            continue
        if current > latest:
            latest = current
    return dir_path + _format_rfc3339(latest)


def _run_tool(args: list[str]) -> None:
    tool = args[0]
    try:
        completed = subprocess.run(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise StrategyError(f"{tool} command failed: {exc}") from exc
    if completed.returncode != 0:
        raise StrategyError(
            f"{tool} command failed: exit status {completed.returncode}\n"
            f"Output: {completed.stdout}"
        )


class DBStrategy(ABC):
    """Operations every supported database engine provides."""

    @abstractmethod
    def ping(self) -> None:
        """Check the server is reachable."""

    @abstractmethod
    def backup(self) -> None:
        """Dump the database to a snapshot."""

    @abstractmethod
    def restore(self) -> None:
        """Load the newest snapshot back into the database."""


class MongoStrategy(DBStrategy):
    """MongoDB: ping through the driver, backup and restore via the tools."""

    timeout = 5.0

    def __init__(self, params: ConnectionParams) -> None:
        self.params = params

    def _connection_args(self) -> list[str]:
        p = self.params
        args = ["--host", p.host, "--port", p.port]
        if p.username:
            args += ["--username", p.username]
        if p.password:
            args += ["--password", p.password, "--authenticationDatabase", "admin"]
        return args

    def backup_args(self, now: datetime | None = None) -> list[str]:
        """Command line for ``mongodump``; ``now`` names the snapshot."""
        args = ["mongodump", *self._connection_args()]
        db_name = self.params.db_name
        if db_name:
            moment = now if now is not None else datetime.now().astimezone()
            backup_path = f"snapshot-{db_name}/{_format_rfc3339(moment)}"
            args += ["--db", db_name, "--out", backup_path]
        return args

    def restore_args(self, base_dir: str = ".") -> list[str]:
        """Command line for ``mongorestore`` from the newest snapshot."""
        args = ["mongorestore", *self._connection_args()]
        db_name = self.params.db_name
        if db_name:
            folder = latest_backup_dir(db_name, base_dir)
            args += ["--nsInclude", f"{db_name}.*", folder]
        return args

    def ping(self) -> None:
        timeout_ms = int(self.timeout * 1000)
        try:
            client: MongoClient = MongoClient(
                build_uri(self.params),
                serverSelectionTimeoutMS=timeout_ms,
                connectTimeoutMS=timeout_ms,
            )
        except (PyMongoError, ValueError, TypeError) as exc:
            raise StrategyError(f"unable to connect to MongoDB: {exc}") from exc
        try:
            client.admin.command("ping")
        except PyMongoError as exc:
            raise StrategyError(f"ping failed: {exc}") from exc
        finally:
            client.close()

    def backup(self) -> None:
        _run_tool(self.backup_args())

    def restore(self) -> None:
        _run_tool(self.restore_args())
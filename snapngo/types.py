"""Connection parameters shared by every part of the tool."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# Keys are matched without regard to case, the way the JSON config files
# have always been read.
_FIELD_KEYS = {
    "command": "command",
    "engine": "engine",
    "host": "host",
    "port": "port",
    "username": "username",
    "password": "password",
    "dbname": "db_name",
}


@dataclass
class ConnectionParams:
    """What to run (``command``) against which database server."""

    command: str = ""
    engine: str = ""
    host: str = ""
    port: str = ""
    username: str = ""
    password: str = field(default="", repr=False)
    db_name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConnectionParams":
        """Build parameters from one object of a connections file.

        Unknown keys are ignored and ``null`` values leave the field empty.
        """
        if not isinstance(data, Mapping):
            raise TypeError(
                f"connection entry must be an object, got {type(data).__name__}"
            )
        values: dict[str, str] = {}
        for key, value in data.items():
            attr = _FIELD_KEYS.get(str(key).lower())
            if attr is None or value is None:
                continue
            if not isinstance(value, str):
                raise TypeError(
                    f"field {key!r} must be a string, got {type(value).__name__}"
                )
            values[attr] = value
        return cls(**values)
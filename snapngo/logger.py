"""JSON-lines logger writing to standard output and, optionally, a file."""

from __future__ import annotations

import json
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import IO, Any


def _timestamp() -> str:
    text = datetime.now().astimezone().isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


class Logger:
    """Structured logger: one JSON object per line, each with level and time."""

    def __init__(self, log_file: str = "", component: str = "") -> None:
        self.component = component
        self._lock = threading.Lock()
        self._file: IO[str] | None = None
        if log_file:
            path = Path(log_file)
            try:
                path.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
            except OSError as exc:
                raise OSError(f"unable to create log file directory: {exc}") from exc
            try:
                self._file = path.open("a", encoding="utf-8")
            except OSError as exc:
                raise OSError(f"unable to open log file: {exc}") from exc

    def with_component(self, component: str) -> "Logger":
        """Set the component name and return this logger."""
        self.component = component
        return self

    def info(self, message: str) -> None:
        """Log a message at info level."""
        self._emit("info", {"message": message})

    def error(self, message: str, error: BaseException | None = None) -> None:
        """Log at error level.

        Without ``error`` the text is the message; with it, the text becomes
        the key under which the error is recorded.
        """
        if error is None:
            self._emit("error", {"message": message})
        else:
            self._emit("error", {message: str(error)})

    def close(self) -> None:
        """Close the log file, if one is open."""
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _emit(self, level: str, fields: dict[str, Any]) -> None:
        record = {"level": level, "time": _timestamp(), **fields}
        line = json.dumps(record, ensure_ascii=False) + "\n"
        with self._lock:
            sys.stdout.write(line)
            sys.stdout.flush()
            if self._file is not None:
                self._file.write(line)
                self._file.flush()
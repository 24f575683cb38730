import json
from datetime import datetime, timedelta, timezone

import pytest

from snapngo.logger import Logger


def _records(text):
    return [json.loads(line) for line in text.splitlines() if line.strip()]


def test_info_writes_json_line(capsys):
    logger = Logger("", "main")
    logger.info("... Starting SnapNGo ...")
    (record,) = _records(capsys.readouterr().out)
    assert record["level"] == "info"
    assert record["message"] == "... Starting SnapNGo ..."


def test_time_field_is_current_and_timezone_aware(capsys):
    before = datetime.now(timezone.utc).replace(microsecond=0) - timedelta(seconds=1)
    Logger().info("hello")
    after = datetime.now(timezone.utc) + timedelta(seconds=1)
    (record,) = _records(capsys.readouterr().out)
    moment = datetime.fromisoformat(record["time"].replace("Z", "+00:00"))
    assert before <= moment <= after


def test_error_without_exception_uses_message(capsys):
    Logger().error("unsupported DB: foo")
    (record,) = _records(capsys.readouterr().out)
    assert record["level"] == "error"
    assert record["message"] == "unsupported DB: foo"


def test_error_with_exception_keys_by_text(capsys):
    Logger().error("Error while executing ping on DBMS: mongo", ValueError("boom"))
    (record,) = _records(capsys.readouterr().out)
    assert record["Error while executing ping on DBMS: mongo"] == "boom"
    assert "message" not in record


def test_writes_to_file_and_creates_directory(tmp_path, capsys):
    log_path = tmp_path / "nested" / "dir" / "app.log"
    with Logger(str(log_path), "x") as logger:
        logger.info("first")
        logger.info("second")
    file_records = _records(log_path.read_text(encoding="utf-8"))
    out_records = _records(capsys.readouterr().out)
    assert [r["message"] for r in file_records] == ["first", "second"]
    assert file_records == out_records


def test_file_is_appended(tmp_path, capsys):
    log_path = tmp_path / "app.log"
    for text in ("one", "two"):
        logger = Logger(str(log_path))
        logger.info(text)
        logger.close()
    assert [r["message"] for r in _records(log_path.read_text())] == ["one", "two"]


def test_with_component_returns_same_logger():
    logger = Logger("", "main")
    result = logger.with_component("worker")
    assert result is logger
    assert logger.component == "worker"


def test_unusable_directory_raises(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(OSError):
        Logger(str(blocker / "sub" / "app.log"))
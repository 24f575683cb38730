import json

import pytest

from snapngo.executors import (
    ExecutionError,
    load_connection_params,
    run_concurrent,
    run_single,
)
from snapngo.logger import Logger
from snapngo.types import ConnectionParams


def _messages(text):
    return [json.loads(line) for line in text.splitlines() if line.strip()]


def _write(tmp_path, name, content):
    (tmp_path / name).write_text(content, encoding="utf-8")
    return name


def test_load_connection_params(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    name = _write(
        tmp_path,
        "dbs.json",
        json.dumps(
            [
                {"Command": "ping", "Engine": "mongo", "Host": "a", "Port": "1"},
                {"command": "backup", "engine": "mongo", "DbName": "shop"},
            ]
        ),
    )
    result = load_connection_params(name)
    assert result == [
        ConnectionParams(command="ping", engine="mongo", host="a", port="1"),
        ConnectionParams(command="backup", engine="mongo", db_name="shop"),
    ]


def test_load_connection_params_null_is_empty(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_connection_params(_write(tmp_path, "n.json", "null")) == []


def test_load_connection_params_missing_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ExecutionError, match="Error reading file"):
        load_connection_params("absent.json")


def test_load_connection_params_bad_json(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ExecutionError, match="Error unmarshalling JSON"):
        load_connection_params(_write(tmp_path, "bad.json", "{not json"))


def test_load_connection_params_not_a_list(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ExecutionError):
        load_connection_params(_write(tmp_path, "obj.json", '{"Engine": "mongo"}'))


def test_run_single_unsupported_engine(capsys):
    with pytest.raises(ExecutionError, match="unsupported DB: oracle"):
        run_single(ConnectionParams(command="ping", engine="oracle"), Logger())
    records = _messages(capsys.readouterr().out)
    assert records[0]["message"] == "Starting single command execution"
    assert records[-1]["level"] == "error"


def test_run_single_unsupported_command():
    with pytest.raises(ExecutionError, match="unsupported Command: vacuum"):
        run_single(ConnectionParams(command="vacuum", engine="mongo"), Logger())


def test_run_single_failure_is_logged(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    params = ConnectionParams(command="restore", engine="mongo", db_name="shop")
    with pytest.raises(ExecutionError):
        run_single(params, Logger())
    records = _messages(capsys.readouterr().out)
    assert "Error while executing restore on DBMS: mongo" in records[-1]
    assert {"level": "info"}.items() <= records[1].items()
    assert records[1]["message"] == "Executing command: restore"


def test_run_concurrent_empty_list(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    run_concurrent(_write(tmp_path, "empty.json", "[]"), Logger())
    records = _messages(capsys.readouterr().out)
    assert [r["message"] for r in records] == ["Starting Concurrent command execution"]


def test_run_concurrent_unsupported_engine(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    name = _write(tmp_path, "dbs.json", '[{"Command": "ping", "Engine": "oracle"}]')
    with pytest.raises(ExecutionError, match="unsupported DB"):
        run_concurrent(name, Logger())


def test_run_concurrent_failures_reported(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    name = _write(
        tmp_path,
        "dbs.json",
        json.dumps(
            [
                {"Command": "restore", "Engine": "mongo", "DbName": "a"},
                {"Command": "restore", "Engine": "mongo", "DbName": "b"},
            ]
        ),
    )
    with pytest.raises(ExecutionError, match="2 of 2"):
        run_concurrent(name, Logger())
    records = _messages(capsys.readouterr().out)
    config_lines = sorted(r["message"] for r in records if "Executing Config" in r.get("message", ""))
    assert config_lines == ["Executing Config: 0", "Executing Config: 1"]
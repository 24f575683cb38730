"""Command-line entry point."""

from __future__ import annotations

import argparse
from pathlib import Path

from .executors import ExecutionError, run_concurrent, run_single
from .logger import Logger
from .types import ConnectionParams

_EXCLUSIVE_WITH_FILE = ("command", "engine", "dbhost", "port", "username", "password")


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the tool."""
    parser = argparse.ArgumentParser(
        prog="SnapNGo",
        description="SnapNGo is a CLI utility that helps DBMS backup and restore operations",
    )
    parser.add_argument("-c", "--command", help="Command to execute (required)")
    parser.add_argument("-e", "--engine", help="DB mangment system (required)")
    parser.add_argument("-x", "--dbhost", help="DB host (required)")
    parser.add_argument("-p", "--port", help="DB port (required)")
    parser.add_argument("-u", "--username", help="DB username (required)")
    parser.add_argument("-w", "--password", help="DB password (required)")
    parser.add_argument("-n", "--dbName", dest="db_name", help="DB name (required)")
    parser.add_argument(
        "--multipleDBsFile",
        dest="multiple_dbs_file",
        help="path file to a list of DBs config and their commands",
    )
    return parser


def _announce_config_file() -> None:
    try:
        home = Path.home()
    except RuntimeError:
        return
    for extension in ("yaml", "yml"):
        candidate = home / f".cobra.{extension}"
        if candidate.is_file():
            print("Using config file:", candidate)
            return


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run the requested operation; return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.multiple_dbs_file is not None:
        clashing = [name for name in _EXCLUSIVE_WITH_FILE if getattr(args, name) is not None]
        if clashing:
            parser.error(
                "--multipleDBsFile cannot be used together with "
                + ", ".join(f"--{name}" for name in clashing)
            )

    logger = Logger("", "main")
    try:
        logger.info("... Starting SnapNGo ...")
        _announce_config_file()
        if args.multiple_dbs_file:
            print("Using multiple DBs file:", args.multiple_dbs_file)
            run_concurrent(args.multiple_dbs_file, logger)
        else:
            params = ConnectionParams(
                command=args.command or "",
                engine=args.engine or "",
                host=args.dbhost or "",
                port=args.port or "",
                username=args.username or "",
                password=args.password or "",
                db_name=args.db_name or "",
            )
            run_single(params, logger)
    except ExecutionError:
        return 1
    finally:
        logger.close()
    return 0
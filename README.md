# snapngo

`snapngo` is a command-line tool that backs up and restores MongoDB databases
and checks that a MongoDB server is reachable. Backups are taken with
`mongodump` and restored with `mongorestore`, so both tools must be on your
`PATH`. The reachability check uses the `pymongo` driver directly, with a
five-second timeout.

## Installation

```
pip install .
```

## Usage

Run one command against one database:

```
snapngo --command ping --engine mongo --dbhost localhost --port 27017
snapngo -c backup -e mongo -x localhost -p 27017 -u admin -w password -n inventory
snapngo -c restore -e mongo -x localhost -p 27017 -u admin -w password -n inventory
```

Options:

| Option | Meaning |
| --- | --- |
| `-c`, `--command` | `ping`, `backup` or `restore` |
| `-e`, `--engine` | database engine; `mongo` is the only one supported |
| `-x`, `--dbhost` | database host |
| `-p`, `--port` | database port |
| `-u`, `--username` | user name |
| `-w`, `--password` | password; when given, `admin` is used as the authentication database |
| `-n`, `--dbName` | database name |
| `--multipleDBsFile` | JSON file listing several databases |

An unknown engine or command is reported as `unsupported DB: …` or
`unsupported Command: …`.

### Snapshots

A backup with `--dbName` writes to `./snapshot-<dbName>/<timestamp>`, where the
timestamp is the current local time in RFC 3339 form (for example
`2024-05-01T12:30:00+02:00`).

A restore with `--dbName` looks in `./snapshot-<dbName>/` and picks the most
recent directory whose name is such a timestamp, then restores only the
collections of that database (`--nsInclude <dbName>.*`). The first entry in name
order must be a valid timestamp; later entries that are not are skipped. The
restore fails if the directory is missing or empty.

### Several databases at once

`--multipleDBsFile` takes a path, relative to the current directory, to a JSON
array of connection entries. Every entry is run concurrently. It cannot be
combined with `--command`, `--engine`, `--dbhost`, `--port`, `--username` or
`--password`.

Keys are matched without regard to case, unknown keys are ignored, and `null`
leaves a field empty. All values must be strings.

```json
[
  {"Command": "backup", "Engine": "mongo", "Host": "localhost", "Port": "27017",
   "Username": "admin", "Password": "password", "DbName": "inventory"},
  {"Command": "ping", "Engine": "mongo", "Host": "localhost", "Port": "27018"}
]
```

```
snapngo --multipleDBsFile databases.json
```

Every entry is checked for a supported engine and command before its operation
starts. All started operations run to completion. Any failures are logged.

### Output and exit status

Progress is logged as JSON lines on standard output. Each line has `level`,
`time` and either `message` or, for a failed operation, the error under a key
describing the command and engine.

The exit status is:

- `0` on success.
- `1` when an engine or command is unsupported, the connections file cannot be
  read, or an operation fails.
- `2` for invalid command-line options.

If `~/.cobra.yaml` or `~/.cobra.yml` exists, its path is printed. Its contents
are not read.

## Library use

```python
from snapngo.types import ConnectionParams
from snapngo.factories import create_strategy, create_command

params = ConnectionParams(command="ping", engine="mongo", host="localhost", port="27017")
command = create_command(create_strategy(params), params)
command.execute()
```

The library is organised as follows:

- `create_strategy` and `create_command` raise `snapngo.factories.UnsupportedError`
  for unknown names.
- Strategy failures raise `snapngo.strategies.StrategyError`.
- `snapngo.strategies.MongoStrategy` exposes `backup_args(now)` and
  `restore_args(base_dir)`, which return the tool command lines without running
  them.
- `snapngo.strategies.build_uri` returns the connection URI.
- `snapngo.executors` provides `run_single`, `run_concurrent` and
  `load_connection_params`. These raise `ExecutionError` on failure.
- `snapngo.logger.Logger` is the JSON-lines logger. It can also append to a
  file, and it is a context manager.

## Limitations

- MongoDB is the only engine.
- There are no incremental or differential backups.
- Old snapshots are never pruned.
- Settings come only from the command line or a connections file. The
  `~/.cobra.yaml` file and environment variables are not used as configuration.
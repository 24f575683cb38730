[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "snapngo"
version = "0.1.0"
description = "Command-line tool for MongoDB backup, restore and connectivity checks"
requires-python = ">=3.10"
keywords = ["backup", "restore", "mongodb", "mongodump", "mongorestore", "cli"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: System :: Archiving :: Backup",
]
dependencies = [
    "pymongo",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
snapngo = "snapngo.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["snapngo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

"""MongoDB backup, restore and ping from the command line."""

__version__ = "0.1.0"
"""getnew: move the Nth newest file from a source directory into the current one."""

__version__ = "0.1.0"

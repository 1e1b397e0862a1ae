"""Platform abstraction layer: processes and files."""

from .files import atomic_write_json, atomic_write_text, remove_tree
from .process import CommandRunner, ProcessError, SubprocessRunner, run, run_live

__all__ = [
    # files
    "atomic_write_json",
    "atomic_write_text",
    "remove_tree",
    # process
    "CommandRunner",
    "ProcessError",
    "SubprocessRunner",
    "run",
    "run_live",
]

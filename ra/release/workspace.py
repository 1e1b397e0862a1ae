"""Scratch directory owned by one release run.

The workspace holds the ``target`` and ``config`` checkouts. It is created
with a unique name so parallel runs never share it, and removed when the run
ends however it ends.
"""

from __future__ import annotations

import tempfile
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from ra.core.config import WorkspaceConfig
from ra.core.result import Err, Ok, Result
from ra.output.console import ConsoleProtocol
from ra.platform.files import remove_tree
from ra.release.errors import SetupError

TARGET_DIR = "target"
CONFIG_DIR = "config"


def acquire_workspace(settings: WorkspaceConfig) -> Result[Path, SetupError]:
    """Create a fresh, uniquely named directory.

    The name carries a timestamp for humans and a random tail for uniqueness.
    """
    prefix = f"{settings.prefix}{int(time.time())}-"
    try:
        if settings.temp_root is not None:
            settings.temp_root.mkdir(parents=True, exist_ok=True)
        root = tempfile.mkdtemp(
            prefix=prefix,
            dir=str(settings.temp_root) if settings.temp_root is not None else None,
        )
    except OSError as e:
        return Err(SetupError(reason=e.strerror or str(e)))
    return Ok(Path(root))


def release_workspace(path: Path, *, console: ConsoleProtocol | None = None) -> None:
    """Delete the workspace. Never raises; failures are reported as warnings."""
    error = remove_tree(path)
    if error is not None and console is not None:
        console.warning(f"could not remove workspace {path}: {error}")


@contextmanager
def workspace_scope(
    settings: WorkspaceConfig,
    *,
    console: ConsoleProtocol | None = None,
) -> Iterator[Result[Path, SetupError]]:
    """Acquire a workspace for the duration of the block.

    Yields the acquisition result; when it is Ok the directory is removed on
    exit, including when the block raises.
    """
    acquired = acquire_workspace(settings)
    try:
        yield acquired
    finally:
        if isinstance(acquired, Ok):
            release_workspace(acquired.value, console=console)

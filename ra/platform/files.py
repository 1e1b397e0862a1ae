"""Filesystem helpers."""

from __future__ import annotations

import json
import os
import shutil
import stat
import tempfile
from collections.abc import Callable
from pathlib import Path

__all__ = ["atomic_write_json", "atomic_write_text", "remove_tree"]


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write text to path via a sibling temp file and os.replace.

    Parent directories are created. Readers never observe a partial file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def atomic_write_json(path: Path, payload: object, *, indent: int = 4) -> None:
    """Serialize payload as indented JSON (insertion key order, trailing newline)."""
    atomic_write_text(path, json.dumps(payload, indent=indent) + "\n")


def _remove_readonly(_func: Callable[[str], object], path: str, exc: BaseException) -> None:
    # git marks pack files read-only; Windows refuses to delete those.
    if isinstance(exc, PermissionError):
        os.chmod(path, stat.S_IWRITE)
        os.unlink(path)
    else:
        raise exc


def remove_tree(path: Path) -> OSError | None:
    """Recursively delete path. Returns the error instead of raising it."""
    if not path.exists():
        return None
    try:
        shutil.rmtree(path, onexc=_remove_readonly)
    except OSError as e:
        return e
    return None

"""Subprocess execution behind a small capability interface.

Pipeline code never calls ``subprocess`` directly; it receives a
``CommandRunner`` and asks it to run commands. Production code uses
``SubprocessRunner``; tests pass a fake that records calls.

Usage:
    runner = SubprocessRunner()
    match runner.run(["git", "rev-parse", "HEAD"], cwd=repo_path):
        case Ok(stdout):
            sha = stdout.strip()
        case Err(error):
            print(error.stderr)
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ra.core.result import Err, Ok, Result

__all__ = ["CommandRunner", "ProcessError", "SubprocessRunner", "run", "run_live"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that could not start or exited non-zero.

    Attributes:
        command: The full argv that was executed.
        returncode: Exit status, or -1 when the process never ran or timed out.
        stdout: Captured standard output (empty for live runs).
        stderr: Captured standard error, or the OS error text.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"

    @property
    def detail(self) -> str | None:
        """Best available diagnostic text, or None if nothing was captured."""
        return self.stderr.strip() or self.stdout.strip() or None


class CommandRunner(Protocol):
    """Executes external commands on behalf of the pipeline."""

    def run(
        self,
        cmd: list[str],
        cwd: Path,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        """Run ``cmd`` in ``cwd`` and return its captured stdout."""
        ...

    def run_live(
        self,
        cmd: list[str],
        cwd: Path,
        *,
        timeout: float | None = None,
    ) -> Result[None, ProcessError]:
        """Run ``cmd`` in ``cwd`` with stdout/stderr inherited from this process."""
        ...


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command, capturing its output.

    Args:
        cmd: Command and arguments.
        cwd: Working directory.
        env: Environment (inherited when None).
        timeout: Seconds to wait; None waits forever.

    Returns:
        Ok(stdout) on exit 0, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_live(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[None, ProcessError]:
    """Execute a command with output streaming to the terminal.

    Nothing is captured, so a failure carries only the exit status.
    """
    try:
        proc = subprocess.run(cmd, cwd=str(cwd), env=env, timeout=timeout, check=False)
    except subprocess.TimeoutExpired:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(command=tuple(cmd), returncode=proc.returncode, stdout="", stderr="")
        )

    return Ok(None)


class SubprocessRunner:
    """CommandRunner backed by the real ``subprocess`` module."""

    def __init__(self, env: dict[str, str] | None = None) -> None:
        self._env = env

    def run(
        self,
        cmd: list[str],
        cwd: Path,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        return run(cmd, cwd, self._env, timeout=timeout)

    def run_live(
        self,
        cmd: list[str],
        cwd: Path,
        *,
        timeout: float | None = None,
    ) -> Result[None, ProcessError]:
        return run_live(cmd, cwd, self._env, timeout=timeout)

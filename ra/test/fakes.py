"""In-memory CommandRunner used across the test suite."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ra.core.result import Err, Ok, Result
from ra.platform.process import ProcessError

HEAD_SHA = "3f786850e387550fdab836ed7e6dc881de23001b"


@dataclass(frozen=True, slots=True)
class Call:
    cmd: list[str]
    cwd: Path
    captured: bool
    timeout: float | None

    @property
    def git_args(self) -> list[str]:
        """Arguments after the executable and any ``-C <path>``."""
        args = self.cmd[1:]
        if args[:1] == ["-C"]:
            args = args[2:]
        return args


class FakeRunner:
    """Pretends to be git.

    - ``clone`` creates the destination directory (then calls ``on_clone``)
    - ``rev-parse --verify`` succeeds only for names in ``remote_branches``
    - ``rev-parse <ref>`` prints ``head``
    - ``status --porcelain`` prints ``status``
    - any call whose git arguments start with a key of ``failures`` exits with
      the mapped return code
    - ``on_call`` sees every call before it is answered
    """

    def __init__(
        self,
        *,
        head: str = HEAD_SHA,
        status: str = "?? afs_1.0.0_production.json\n",
        remote_branches: tuple[str, ...] = (),
        failures: dict[tuple[str, ...], int] | None = None,
        on_clone: Callable[[str, Path], None] | None = None,
        on_call: Callable[[Call], None] | None = None,
    ) -> None:
        self.head = head
        self.status = status
        self.remote_branches = remote_branches
        self.failures = failures or {}
        self.on_clone = on_clone
        self.on_call = on_call
        self.calls: list[Call] = []

    def _failure(self, call: Call) -> ProcessError | None:
        args = call.git_args
        for prefix, returncode in self.failures.items():
            if tuple(args[: len(prefix)]) == prefix:
                return ProcessError(
                    command=tuple(call.cmd),
                    returncode=returncode,
                    stdout="",
                    stderr=f"fatal: simulated {args[0]} failure",
                )
        return None

    def run(
        self,
        cmd: list[str],
        cwd: Path,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        call = Call(cmd=list(cmd), cwd=cwd, captured=True, timeout=timeout)
        self.calls.append(call)
        if self.on_call is not None:
            self.on_call(call)

        failure = self._failure(call)
        if failure is not None:
            return Err(failure)

        args = call.git_args
        if args[:2] == ["rev-parse", "--verify"]:
            branch = args[-1].split("/", 3)[-1]
            if branch in self.remote_branches:
                return Ok(self.head + "\n")
            return Err(ProcessError(command=tuple(cmd), returncode=1, stdout="", stderr=""))
        if args[:1] == ["rev-parse"]:
            return Ok(self.head + "\n")
        if args[:1] == ["status"]:
            return Ok(self.status)
        return Ok("")

    def run_live(
        self,
        cmd: list[str],
        cwd: Path,
        *,
        timeout: float | None = None,
    ) -> Result[None, ProcessError]:
        call = Call(cmd=list(cmd), cwd=cwd, captured=False, timeout=timeout)
        self.calls.append(call)
        if self.on_call is not None:
            self.on_call(call)

        failure = self._failure(call)
        if failure is not None:
            return Err(failure)

        args = call.git_args
        if args[:1] == ["clone"]:
            url, dest = args[1], Path(args[2])
            dest.mkdir(parents=True)
            (dest / ".git").mkdir()
            if self.on_clone is not None:
                self.on_clone(url, dest)
        return Ok(None)

    # Test helpers

    @property
    def git_calls(self) -> list[list[str]]:
        return [c.git_args for c in self.calls]

    def count(self, *prefix: str) -> int:
        """Number of calls whose git arguments start with prefix."""
        return sum(1 for args in self.git_calls if tuple(args[: len(prefix)]) == prefix)

    def calls_in(self, path: Path) -> list[list[str]]:
        """Git arguments of calls that ran inside the checkout at path."""
        return [c.git_args for c in self.calls if c.cwd == path]

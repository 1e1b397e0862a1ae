"""Git repository bound to a command runner.

Usage:
    match Repository.clone(url, dest, runner=runner, settings=GitConfig()):
        case Ok(repo):
            sha = repo.execute(RevParse()).unwrap().strip()
        case Err(e):
            print(f"clone failed: {e}")
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from ra.core.config import GitConfig
from ra.core.result import Err, Ok, Result
from ra.git.ops import Clone, GitOp
from ra.output.console import ConsoleProtocol, Style
from ra.platform.process import CommandRunner, ProcessError

__all__ = ["OpFailure", "Repository", "command_line"]


@dataclass(frozen=True, slots=True)
class OpFailure:
    """The operation that failed within a sequence, and why."""

    op: GitOp
    error: ProcessError


def command_line(op: GitOp, *, executable: str = "git") -> str:
    """Human-readable form of an operation, as echoed to the console."""
    return " ".join([executable, *op.args()])


class Repository:
    """A local checkout on which git operations are executed.

    Attributes:
        path: Checkout root.
    """

    def __init__(
        self,
        path: Path,
        *,
        runner: CommandRunner,
        settings: GitConfig,
        console: ConsoleProtocol | None = None,
    ) -> None:
        self.path = path
        self._runner = runner
        self._settings = settings
        self._console = console

    @classmethod
    def clone(
        cls,
        url: str,
        dest: Path,
        *,
        runner: CommandRunner,
        settings: GitConfig,
        console: ConsoleProtocol | None = None,
    ) -> Result[Repository, ProcessError]:
        """Clone url into dest and return the resulting Repository."""
        op = Clone(url=url, dest=dest)
        if console is not None:
            console.print(command_line(op, executable=settings.executable), Style.DIM)

        result = runner.run_live(
            [settings.executable, *op.args()],
            cwd=dest.parent,
            timeout=settings.network_timeout,
        )
        if isinstance(result, Err):
            return result
        return Ok(cls(dest, runner=runner, settings=settings, console=console))

    @property
    def remote(self) -> str:
        return self._settings.remote

    def execute(self, op: GitOp) -> Result[str, ProcessError]:
        """Run a single operation inside this checkout.

        Captured operations return their stdout; live operations stream to
        the terminal and return an empty string.
        """
        if self._console is not None:
            self._console.print(command_line(op, executable=self._settings.executable), Style.DIM)

        cmd = [self._settings.executable, "-C", str(self.path), *op.args()]
        timeout = self._settings.network_timeout if op.network else self._settings.timeout

        if op.captured:
            return self._runner.run(cmd, cwd=self.path, timeout=timeout)

        live = self._runner.run_live(cmd, cwd=self.path, timeout=timeout)
        if isinstance(live, Err):
            return live
        return Ok("")

    def run_sequence(self, ops: Iterable[GitOp]) -> Result[None, OpFailure]:
        """Execute ops in order, stopping at the first failure."""
        for op in ops:
            result = self.execute(op)
            if isinstance(result, Err):
                return Err(OpFailure(op=op, error=result.error))
        return Ok(None)

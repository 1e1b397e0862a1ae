"""Typed git operations.

Each git step of a release is a small frozen dataclass that knows its
arguments and whether it talks to the remote. Sequences are plain tuples,
so the order of a multi-step operation is data that tests can inspect:

    ops = cut_branch_ops(source="develop", branch="develop-v1.0.0", remote="origin")
    assert [type(op) for op in ops] == [RemoteBranchExists, Checkout, CreateBranch, Push]
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "AddAll",
    "Checkout",
    "Clone",
    "Commit",
    "CreateBranch",
    "GitOp",
    "Push",
    "RemoteBranchExists",
    "RevParse",
    "StatusPorcelain",
    "cut_branch_ops",
    "publish_ops",
]


@dataclass(frozen=True, slots=True)
class Clone:
    url: str
    dest: Path

    network = True
    captured = False

    def args(self) -> list[str]:
        return ["clone", self.url, str(self.dest)]


@dataclass(frozen=True, slots=True)
class RemoteBranchExists:
    """Succeeds only if the remote-tracking ref exists."""

    remote: str
    branch: str

    network = False
    captured = True

    def args(self) -> list[str]:
        return ["rev-parse", "--verify", "--quiet", f"refs/remotes/{self.remote}/{self.branch}"]


@dataclass(frozen=True, slots=True)
class Checkout:
    ref: str

    network = False
    captured = False

    def args(self) -> list[str]:
        return ["checkout", self.ref, "--"]


@dataclass(frozen=True, slots=True)
class CreateBranch:
    name: str

    network = False
    captured = False

    def args(self) -> list[str]:
        return ["checkout", "-b", self.name]


@dataclass(frozen=True, slots=True)
class Push:
    remote: str
    ref: str

    network = True
    captured = False

    def args(self) -> list[str]:
        return ["push", self.remote, self.ref]


@dataclass(frozen=True, slots=True)
class RevParse:
    ref: str = "HEAD"

    network = False
    captured = True

    def args(self) -> list[str]:
        return ["rev-parse", self.ref]


@dataclass(frozen=True, slots=True)
class AddAll:
    network = False
    captured = False

    def args(self) -> list[str]:
        return ["add", "-A"]


@dataclass(frozen=True, slots=True)
class StatusPorcelain:
    network = False
    captured = True

    def args(self) -> list[str]:
        return ["status", "--porcelain"]


@dataclass(frozen=True, slots=True)
class Commit:
    message: str

    network = False
    captured = False

    def args(self) -> list[str]:
        return ["commit", "-m", self.message]


GitOp = (
    Clone
    | RemoteBranchExists
    | Checkout
    | CreateBranch
    | Push
    | RevParse
    | AddAll
    | StatusPorcelain
    | Commit
)


def cut_branch_ops(
    *, source: str, branch: str, remote: str
) -> tuple[RemoteBranchExists, Checkout, CreateBranch, Push]:
    return (
        RemoteBranchExists(remote=remote, branch=branch),
        Checkout(ref=source),
        CreateBranch(name=branch),
        Push(remote=remote, ref=branch),
    )


def publish_ops(*, message: str, remote: str) -> tuple[AddAll, StatusPorcelain, Commit, Push]:
    return (
        AddAll(),
        StatusPorcelain(),
        Commit(message=message),
        Push(remote=remote, ref="HEAD"),
    )

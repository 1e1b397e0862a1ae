"""Pipeline steps of a release run.

Each step runs a fixed sequence of git operations and translates the first
failure into the step's own error type.
"""

from __future__ import annotations

from pathlib import Path

from ra.core.config import GitConfig
from ra.core.result import Err, Ok, Result
from ra.git.ops import (
    AddAll,
    Checkout,
    Commit,
    CreateBranch,
    GitOp,
    Push,
    RevParse,
    StatusPorcelain,
    cut_branch_ops,
    publish_ops,
)
from ra.git.repository import Repository
from ra.output.console import ConsoleProtocol
from ra.platform.process import CommandRunner, ProcessError
from ra.release.errors import BranchError, CloneError, CommitError, PushError, ResolveError


def clone_repository(
    url: str,
    dest: Path,
    *,
    runner: CommandRunner,
    settings: GitConfig,
    console: ConsoleProtocol | None = None,
) -> Result[Repository, CloneError]:
    result = Repository.clone(url, dest, runner=runner, settings=settings, console=console)
    if isinstance(result, Err):
        e = result.error
        return Err(CloneError(url=url, returncode=e.returncode, detail=e.detail))
    return result


def _branch_failure(op: GitOp, error: ProcessError, *, source: str, branch: str) -> BranchError:
    match op:
        case Checkout():
            return BranchError(
                branch=source, reason="source branch cannot be checked out", detail=error.detail
            )
        case CreateBranch():
            return BranchError(branch=branch, reason="cannot create branch", detail=error.detail)
        case Push():
            return BranchError(branch=branch, reason="push rejected", detail=error.detail)
        case _:
            return BranchError(branch=branch, reason=str(error), detail=error.detail)


def cut_release_branch(repo: Repository, *, source: str, branch: str) -> Result[None, BranchError]:
    """Create branch from source and push it.

    An existing remote branch of the same name is an error; it is never
    overwritten.
    """
    check, *rest = cut_branch_ops(source=source, branch=branch, remote=repo.remote)

    exists = repo.execute(check)
    if isinstance(exists, Ok):
        return Err(BranchError(branch=branch, reason="already exists on remote"))
    # rev-parse --verify --quiet exits 1 for a missing ref and nothing else.
    if exists.error.returncode != 1:
        return Err(
            BranchError(
                branch=branch, reason="cannot query remote branches", detail=exists.error.detail
            )
        )

    sequence = repo.run_sequence(rest)
    if isinstance(sequence, Err):
        failure = sequence.error
        return Err(_branch_failure(failure.op, failure.error, source=source, branch=branch))
    return Ok(None)


def head_commit(repo: Repository) -> Result[str, ResolveError]:
    """Full identifier of the commit HEAD points to."""
    result = repo.execute(RevParse("HEAD"))
    if isinstance(result, Err):
        return Err(ResolveError(reason="rev-parse HEAD failed", detail=result.error.detail))

    sha = result.value.strip()
    if not sha:
        return Err(ResolveError(reason="rev-parse HEAD returned nothing"))
    return Ok(sha)


def _publish_failure(op: GitOp, error: ProcessError) -> CommitError | PushError:
    match op:
        case Push(ref=ref):
            return PushError(ref=ref, returncode=error.returncode, detail=error.detail)
        case AddAll():
            return CommitError(reason="git add failed", detail=error.detail)
        case StatusPorcelain():
            return CommitError(reason="git status failed", detail=error.detail)
        case Commit():
            return CommitError(
                reason="git commit failed",
                detail=error.detail or "Configure git user.name/user.email, then retry.",
            )
        case _:
            return CommitError(reason=str(error), detail=error.detail)


def commit_and_push(repo: Repository, *, message: str) -> Result[None, CommitError | PushError]:
    """Stage everything, commit and push the current branch.

    A clean tree after staging fails with CommitError("nothing to commit").
    """
    for op in publish_ops(message=message, remote=repo.remote):
        result = repo.execute(op)
        if isinstance(result, Err):
            return Err(_publish_failure(op, result.error))
        if isinstance(op, StatusPorcelain) and not result.value.strip():
            return Err(CommitError(reason="nothing to commit"))
    return Ok(None)

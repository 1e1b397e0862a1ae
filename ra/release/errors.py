"""Error taxonomy for release runs.

Each step of the pipeline fails with its own error type. The coordinator
wraps the step error in ``PhaseError`` so the message names the phase that
was running ("target repo handling failed: ...").
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

__all__ = [
    "BranchError",
    "CloneError",
    "CommitError",
    "DescriptorReadError",
    "DescriptorWriteError",
    "InvalidInput",
    "Phase",
    "PhaseError",
    "PushError",
    "ReleaseFailure",
    "ResolveError",
    "SetupError",
    "StepError",
    "describe",
    "detail_of",
    "hint_for",
]


@dataclass(frozen=True, slots=True)
class InvalidInput:
    field: str
    reason: str


@dataclass(frozen=True, slots=True)
class SetupError:
    reason: str


@dataclass(frozen=True, slots=True)
class CloneError:
    url: str
    returncode: int
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class BranchError:
    branch: str
    reason: str
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class ResolveError:
    reason: str
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class DescriptorWriteError:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class DescriptorReadError:
    """An existing descriptor that is missing, malformed or incomplete.

    Not a pipeline step failure: runs only ever write descriptors.
    """

    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class CommitError:
    reason: str
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class PushError:
    ref: str
    returncode: int
    detail: str | None = None


StepError = (
    SetupError
    | CloneError
    | BranchError
    | ResolveError
    | DescriptorWriteError
    | CommitError
    | PushError
)

Phase = Literal["setup", "target repo handling", "config repo handling"]


def describe(error: StepError | InvalidInput) -> str:
    """One-line description of a step error."""
    match error:
        case InvalidInput(field=name, reason=reason):
            return f"invalid {name}: {reason}"
        case SetupError(reason=reason):
            return f"could not create workspace: {reason}"
        case CloneError(url=url, returncode=rc):
            return f"failed to clone {url} (exit {rc})"
        case BranchError(branch=branch, reason=reason):
            return f"branch {branch}: {reason}"
        case ResolveError(reason=reason):
            return f"could not resolve HEAD: {reason}"
        case DescriptorWriteError(path=path, reason=reason):
            return f"failed to write {path}: {reason}"
        case CommitError(reason=reason):
            return f"commit failed: {reason}"
        case PushError(ref=ref, returncode=rc):
            return f"push of {ref} rejected (exit {rc})"


def detail_of(error: StepError | InvalidInput) -> str | None:
    """Captured tool output attached to an error, if any."""
    match error:
        case CloneError(detail=d) | BranchError(detail=d) | ResolveError(detail=d):
            return d
        case CommitError(detail=d) | PushError(detail=d):
            return d
        case _:
            return None


def hint_for(error: StepError | InvalidInput) -> str | None:
    match error:
        case InvalidInput():
            return "run `ra --help` for usage"
        case CloneError() | PushError():
            return "check the URL and that your SSH agent or git credential helper has access"
        case BranchError(reason="already exists on remote"):
            return "a release for this version was already cut; pick a new version"
        case CommitError(reason="nothing to commit"):
            return "the descriptor is identical to the one already committed"
        case _:
            return None


@dataclass(frozen=True, slots=True)
class PhaseError:
    """A step error together with the phase that was running."""

    phase: Phase
    cause: StepError

    @property
    def message(self) -> str:
        return f"{self.phase} failed: {describe(self.cause)}"

    @property
    def detail(self) -> str | None:
        return detail_of(self.cause)

    @property
    def hint(self) -> str | None:
        return hint_for(self.cause)


ReleaseFailure = InvalidInput | PhaseError

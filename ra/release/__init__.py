"""Release bounded context.

- model: requests, deployment entries and release records
- errors: one error type per pipeline step, wrapped with phase context
- workspace: the scratch directory of a run
- descriptor: JSON descriptor I/O
- steps: git step sequences
- coordinator: the end-to-end run
"""

from __future__ import annotations

from ra.release.coordinator import ReleaseCoordinator, RunReport, RunState
from ra.release.errors import PhaseError, ReleaseFailure
from ra.release.model import (
    DeploymentEntry,
    ReleaseRecord,
    ReleaseRequest,
    descriptor_filename,
    release_branch_name,
)

__all__ = [
    "DeploymentEntry",
    "PhaseError",
    "ReleaseCoordinator",
    "ReleaseFailure",
    "ReleaseRecord",
    "ReleaseRequest",
    "RunReport",
    "RunState",
    "descriptor_filename",
    "release_branch_name",
]

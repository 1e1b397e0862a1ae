"""Git operations module.

- ops: typed git operations and the sequences a release uses
- repository: a checkout bound to a CommandRunner

Usage:
    from ra.git import Repository, cut_branch_ops

    result = repo.run_sequence(cut_branch_ops(source="main", branch="main-v2", remote="origin"))
"""

from ra.git.ops import (
    AddAll,
    Checkout,
    Clone,
    Commit,
    CreateBranch,
    GitOp,
    Push,
    RemoteBranchExists,
    RevParse,
    StatusPorcelain,
    cut_branch_ops,
    publish_ops,
)
from ra.git.repository import OpFailure, Repository, command_line

__all__ = [
    # ops
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
    # repository
    "OpFailure",
    "Repository",
    "command_line",
]

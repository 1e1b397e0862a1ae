"""Release coordinator.

Runs one release as four phases:

1. setup: create a private workspace
2. target repo handling: clone, cut ``{source}-v{version}``, push it, read HEAD
3. config repo handling: clone, write the descriptor, commit, push
4. cleanup: remove the workspace, whatever happened before

The run stops at the first failing step. Nothing already pushed is undone.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path

from ra.core.config import Config
from ra.core.result import Err, Ok, Result
from ra.git.repository import Repository
from ra.output.console import ConsoleProtocol
from ra.platform.process import CommandRunner
from ra.release.descriptor import descriptor_path, write_release_descriptor
from ra.release.errors import CloneError, Phase, PhaseError, StepError
from ra.release.model import DeploymentEntry, ReleaseRecord, ReleaseRequest, commit_message
from ra.release.steps import clone_repository, commit_and_push, cut_release_branch, head_commit
from ra.release.workspace import CONFIG_DIR, TARGET_DIR, workspace_scope

__all__ = ["ReleaseCoordinator", "RunReport", "RunState"]


class RunState(Enum):
    INIT = auto()
    WORKSPACE_READY = auto()
    TARGET_CLONED = auto()
    BRANCH_CUT = auto()
    COMMIT_RESOLVED = auto()
    CONFIG_CLONED = auto()
    DESCRIPTOR_WRITTEN = auto()
    PUSHED = auto()
    DONE = auto()
    FAILED = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (RunState.DONE, RunState.FAILED)


def _in_phase(phase: Phase) -> Callable[[StepError], PhaseError]:
    def wrap(cause: StepError) -> PhaseError:
        return PhaseError(phase=phase, cause=cause)

    return wrap


def _initial_transitions() -> list[RunState]:
    return [RunState.INIT]


@dataclass
class RunReport:
    """What a run did, kept up to date while it executes."""

    request: ReleaseRequest
    transitions: list[RunState] = field(default_factory=_initial_transitions)
    workspace: Path | None = None
    commit: str | None = None
    descriptor: str | None = None

    @property
    def state(self) -> RunState:
        return self.transitions[-1]

    @property
    def branch(self) -> str:
        return self.request.branch

    def advance(self, state: RunState) -> None:
        if self.state.is_terminal:
            raise RuntimeError(f"run already finished in state {self.state.name}")
        self.transitions.append(state)

    def fail(self) -> None:
        self.advance(RunState.FAILED)


class ReleaseCoordinator:
    """Chains the release steps with fail-fast semantics.

    All process-wide collaborators (the command runner, configuration and
    console) are injected; the coordinator looks nothing up on its own.
    """

    def __init__(
        self,
        *,
        runner: CommandRunner,
        config: Config,
        console: ConsoleProtocol,
    ) -> None:
        self._runner = runner
        self._config = config
        self._console = console
        self.report: RunReport | None = None

    def run(self, request: ReleaseRequest) -> Result[RunReport, PhaseError]:
        report = RunReport(request=request)
        self.report = report

        with workspace_scope(self._config.workspace, console=self._console) as acquired:
            if isinstance(acquired, Err):
                report.fail()
                return acquired.map_err(_in_phase("setup"))

            workspace = acquired.value
            report.workspace = workspace
            report.advance(RunState.WORKSPACE_READY)

            self._console.header("Target repository")
            entry = self._handle_target_repo(request, workspace / TARGET_DIR, report)
            if isinstance(entry, Err):
                report.fail()
                return entry.map_err(_in_phase("target repo handling"))

            self._console.header("Configuration repository")
            published = self._handle_config_repo(request, workspace / CONFIG_DIR, entry.value, report)
            if isinstance(published, Err):
                report.fail()
                return published.map_err(_in_phase("config repo handling"))

            report.advance(RunState.DONE)

        return Ok(report)

    def _clone(self, url: str, dest: Path) -> Result[Repository, CloneError]:
        return clone_repository(
            url,
            dest,
            runner=self._runner,
            settings=self._config.git,
            console=self._console,
        )

    def _handle_target_repo(
        self, request: ReleaseRequest, dest: Path, report: RunReport
    ) -> Result[DeploymentEntry, StepError]:
        cloned = self._clone(request.target_repo, dest)
        if isinstance(cloned, Err):
            return cloned
        repo: Repository = cloned.value
        report.advance(RunState.TARGET_CLONED)

        cut = cut_release_branch(repo, source=request.source_branch, branch=request.branch)
        if isinstance(cut, Err):
            return cut
        report.advance(RunState.BRANCH_CUT)

        sha = head_commit(repo)
        if isinstance(sha, Err):
            return sha
        report.commit = sha.value
        report.advance(RunState.COMMIT_RESOLVED)

        return Ok(DeploymentEntry(name=request.deploy_name, branch=request.branch, commit=sha.value))

    def _handle_config_repo(
        self,
        request: ReleaseRequest,
        dest: Path,
        entry: DeploymentEntry,
        report: RunReport,
    ) -> Result[None, StepError]:
        cloned = self._clone(request.config_repo, dest)
        if isinstance(cloned, Err):
            return cloned
        repo: Repository = cloned.value
        report.advance(RunState.CONFIG_CLONED)

        record = ReleaseRecord(
            release=self._config.release.label,
            project=request.project,
            source=request.sources,
            deploy=(entry,),
            repositories=request.repositories,
        )
        located = descriptor_path(
            repo.path,
            request.descriptor_name,
            descriptor_dir=self._config.release.descriptor_dir,
        )
        if isinstance(located, Err):
            return located
        written = write_release_descriptor(located.value, record)
        if isinstance(written, Err):
            return written
        report.descriptor = written.value.relative_to(repo.path).as_posix()
        report.advance(RunState.DESCRIPTOR_WRITTEN)

        pushed = commit_and_push(repo, message=commit_message(request.project, request.version))
        if isinstance(pushed, Err):
            return pushed
        report.advance(RunState.PUSHED)

        return Ok(None)

from __future__ import annotations

from pathlib import Path

from ra.core.config import ConfigError
from ra.output.console import MockConsole, Style
from ra.output.errors import print_config_error, print_release_error
from ra.release.errors import (
    BranchError,
    CloneError,
    CommitError,
    DescriptorWriteError,
    InvalidInput,
    PhaseError,
    PushError,
    SetupError,
)


def test_invalid_input() -> None:
    console = MockConsole()

    print_release_error(InvalidInput(field="version", reason="must not be empty"), console)

    assert console.messages == [
        "Error: invalid version: must not be empty",
        "hint: run `ra --help` for usage",
    ]


def test_phase_error_with_detail_and_hint() -> None:
    console = MockConsole()
    error = PhaseError(
        phase="target repo handling",
        cause=CloneError(
            url="git@repo.com:target.git",
            returncode=128,
            detail="fatal: repository not found\nfatal: could not read from remote",
        ),
    )

    print_release_error(error, console)

    assert console.messages[0] == (
        "Error: target repo handling failed: failed to clone git@repo.com:target.git (exit 128)"
    )
    assert console.messages[1:3] == [
        "  fatal: repository not found",
        "  fatal: could not read from remote",
    ]
    assert console.messages[3].startswith("hint: check the URL")
    assert all(o.style == Style.DIM for o in console.outputs[1:])


def test_phase_error_without_extras() -> None:
    console = MockConsole()

    print_release_error(PhaseError(phase="setup", cause=SetupError("disk full")), console)

    assert console.messages == ["Error: setup failed: could not create workspace: disk full"]


def test_existing_branch_hint() -> None:
    console = MockConsole()
    error = PhaseError(
        phase="target repo handling",
        cause=BranchError(branch="develop-v1.0.0", reason="already exists on remote"),
    )

    print_release_error(error, console)

    assert console.messages[0] == (
        "Error: target repo handling failed: branch develop-v1.0.0: already exists on remote"
    )
    assert console.messages[-1].startswith("hint: a release for this version")


def test_config_phase_messages() -> None:
    console = MockConsole()

    print_release_error(
        PhaseError(
            phase="config repo handling",
            cause=DescriptorWriteError(path=Path("afs_1.0.0.json"), reason="Is a directory"),
        ),
        console,
    )
    print_release_error(
        PhaseError(phase="config repo handling", cause=CommitError(reason="nothing to commit")),
        console,
    )
    print_release_error(
        PhaseError(phase="config repo handling", cause=PushError(ref="HEAD", returncode=1)),
        console,
    )

    errors = [o.message for o in console.outputs if o.style == Style.ERROR]
    assert errors == [
        "Error: config repo handling failed: failed to write afs_1.0.0.json: Is a directory",
        "Error: config repo handling failed: commit failed: nothing to commit",
        "Error: config repo handling failed: push of HEAD rejected (exit 1)",
    ]


def test_config_error() -> None:
    console = MockConsole()

    print_config_error(ConfigError("Invalid TOML syntax: x", path=Path("ra.toml")), console)

    assert console.messages == ["Error: Invalid TOML syntax: x", "config: ra.toml"]

"""Tests for git/repository.py."""

from __future__ import annotations

from pathlib import Path

from ra.core.config import GitConfig
from ra.core.result import Err, Ok
from ra.git.ops import Checkout, Commit, CreateBranch, Push, RevParse
from ra.git.repository import OpFailure, Repository, command_line
from ra.output.console import MockConsole, Style
from ra.test.fakes import HEAD_SHA, FakeRunner


def test_command_line() -> None:
    assert command_line(Checkout("main")) == "git checkout main --"
    assert command_line(Push("origin", "HEAD"), executable="/usr/bin/git") == (
        "/usr/bin/git push origin HEAD"
    )


class TestExecute:
    def test_runs_inside_checkout(self, tmp_path: Path) -> None:
        runner = FakeRunner()
        repo = Repository(tmp_path, runner=runner, settings=GitConfig())

        repo.execute(Checkout("main"))

        call = runner.calls[0]
        assert call.cmd == ["git", "-C", str(tmp_path), "checkout", "main", "--"]
        assert call.cwd == tmp_path
        assert call.captured is False

    def test_captured_op_returns_stdout(self, tmp_path: Path) -> None:
        repo = Repository(tmp_path, runner=FakeRunner(), settings=GitConfig())

        assert repo.execute(RevParse()) == Ok(HEAD_SHA + "\n")

    def test_live_op_returns_empty_string(self, tmp_path: Path) -> None:
        repo = Repository(tmp_path, runner=FakeRunner(), settings=GitConfig())

        assert repo.execute(Commit("msg")) == Ok("")

    def test_timeouts_follow_network_flag(self, tmp_path: Path) -> None:
        runner = FakeRunner()
        settings = GitConfig(timeout=5.0, network_timeout=300.0)
        repo = Repository(tmp_path, runner=runner, settings=settings)

        repo.execute(Checkout("main"))
        repo.execute(Push("origin", "main"))

        assert [c.timeout for c in runner.calls] == [5.0, 300.0]

    def test_no_timeout_by_default(self, tmp_path: Path) -> None:
        runner = FakeRunner()
        repo = Repository(tmp_path, runner=runner, settings=GitConfig())

        repo.execute(Push("origin", "main"))

        assert runner.calls[0].timeout is None

    def test_custom_executable(self, tmp_path: Path) -> None:
        runner = FakeRunner()
        repo = Repository(tmp_path, runner=runner, settings=GitConfig(executable="/opt/git"))

        repo.execute(Checkout("main"))

        assert runner.calls[0].cmd[0] == "/opt/git"

    def test_echoes_command_to_console(self, tmp_path: Path) -> None:
        console = MockConsole()
        repo = Repository(tmp_path, runner=FakeRunner(), settings=GitConfig(), console=console)

        repo.execute(CreateBranch("main-v1"))

        assert console.outputs[0].message == "git checkout -b main-v1"
        assert console.outputs[0].style == Style.DIM


class TestRunSequence:
    def test_stops_at_first_failure(self, tmp_path: Path) -> None:
        runner = FakeRunner(failures={("checkout", "-b"): 128})
        repo = Repository(tmp_path, runner=runner, settings=GitConfig())
        ops = (Checkout("main"), CreateBranch("main-v1"), Push("origin", "main-v1"))

        result = repo.run_sequence(ops)

        assert isinstance(result, Err)
        assert isinstance(result.error, OpFailure)
        assert result.error.op == CreateBranch("main-v1")
        assert result.error.error.returncode == 128
        assert runner.count("push") == 0

    def test_all_succeed(self, tmp_path: Path) -> None:
        runner = FakeRunner()
        repo = Repository(tmp_path, runner=runner, settings=GitConfig())

        result = repo.run_sequence((Checkout("main"), Push("origin", "main")))

        assert result == Ok(None)
        assert runner.git_calls == [["checkout", "main", "--"], ["push", "origin", "main"]]


class TestClone:
    def test_clone_runs_in_parent_directory(self, tmp_path: Path) -> None:
        runner = FakeRunner()
        dest = tmp_path / "config"

        result = Repository.clone("git@repo.com:c.git", dest, runner=runner, settings=GitConfig())

        assert isinstance(result, Ok)
        assert result.value.path == dest
        assert runner.calls[0].cmd == ["git", "clone", "git@repo.com:c.git", str(dest)]
        assert runner.calls[0].cwd == tmp_path

    def test_clone_failure_returns_process_error(self, tmp_path: Path) -> None:
        runner = FakeRunner(failures={("clone",): 128})

        result = Repository.clone(
            "git@repo.com:c.git", tmp_path / "config", runner=runner, settings=GitConfig()
        )

        assert isinstance(result, Err)
        assert result.error.returncode == 128

from __future__ import annotations

from pathlib import Path

import typer

from ra import __version__
from ra.core.config import DEFAULT_CONFIG_FILENAME, load_config, load_config_or_default
from ra.core.errors import ErrorCode
from ra.core.result import Err
from ra.output.console import ConsoleProtocol, RichConsole, Style
from ra.output.errors import print_config_error, print_release_error
from ra.platform.process import SubprocessRunner
from ra.release.coordinator import ReleaseCoordinator
from ra.release.model import ReleaseRequest

USAGE = (
    "Usage: ra <target-repo> <config-repo> <source-branch> <version> <project-name> [file-suffix]"
)
EXAMPLE = (
    "Example: ra git@repo.com:target.git git@repo.com:config.git develop 1.0.0 afs production"
)


app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)


def _print_usage(console: ConsoleProtocol) -> None:
    console.print(USAGE)
    console.print(EXAMPLE, Style.DIM)


@app.command()
def release(
    target_repo: str | None = typer.Argument(None, help="Repository that receives the branch."),
    config_repo: str | None = typer.Argument(None, help="Repository holding release descriptors."),
    source_branch: str | None = typer.Argument(None, help="Branch the release is cut from."),
    release_version: str | None = typer.Argument(None, metavar="VERSION", help="e.g. 1.0.0"),
    project: str | None = typer.Argument(None, help="Project name used in the descriptor."),
    suffix: str | None = typer.Argument(None, help="Optional descriptor file suffix."),
    source: list[str] | None = typer.Option(
        None, "--source", help="Source URL recorded in the descriptor (repeatable)."
    ),
    repository: list[str] | None = typer.Option(
        None, "--repository", help="Repository URL recorded in the descriptor (repeatable)."
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help=f"TOML config file (default: ./{DEFAULT_CONFIG_FILENAME} if present).",
    ),
    show_version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Cut a release branch and record it in the configuration repository."""
    console = RichConsole()

    if show_version:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))

    if (
        target_repo is None
        or config_repo is None
        or source_branch is None
        or release_version is None
        or project is None
    ):
        _print_usage(console)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    request = ReleaseRequest.create(
        target_repo=target_repo,
        config_repo=config_repo,
        source_branch=source_branch,
        version=release_version,
        project=project,
        suffix=suffix,
        sources=tuple(source or ()),
        repositories=tuple(repository or ()),
    )
    if isinstance(request, Err):
        print_release_error(request.error, console)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    if config_path is not None:
        config = load_config(config_path.expanduser())
    else:
        config = load_config_or_default(Path.cwd() / DEFAULT_CONFIG_FILENAME)
    if isinstance(config, Err):
        print_config_error(config.error, console)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    coordinator = ReleaseCoordinator(
        runner=SubprocessRunner(),
        config=config.value,
        console=console,
    )
    result = coordinator.run(request.value)
    if isinstance(result, Err):
        print_release_error(result.error, console)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    report = result.value
    console.print(f"branch: {report.branch}", Style.DIM)
    console.print(f"commit: {report.commit}", Style.DIM)
    console.print(f"descriptor: {report.descriptor}", Style.DIM)
    console.success("Release automation completed successfully")


def main() -> None:
    app()

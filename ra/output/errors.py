"""Error presentation.

Every failure is shown the same way: one ``Error: <message>`` line, then the
captured git output and a hint, both dimmed, when available.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ra.core.config import ConfigError
from ra.output.console import Style
from ra.release.errors import InvalidInput, PhaseError, ReleaseFailure, describe, hint_for

if TYPE_CHECKING:
    from ra.output.console import ConsoleProtocol

__all__ = ["print_config_error", "print_release_error"]


def print_release_error(error: ReleaseFailure, console: ConsoleProtocol) -> None:
    match error:
        case InvalidInput():
            console.error(describe(error))
            hint = hint_for(error)
            detail = None
        case PhaseError():
            console.error(error.message)
            hint = error.hint
            detail = error.detail

    if detail:
        for line in detail.splitlines():
            console.print(f"  {line}", Style.DIM)
    if hint:
        console.print(f"hint: {hint}", Style.DIM)


def print_config_error(error: ConfigError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.path is not None:
        console.print(f"config: {error.path}", Style.DIM)

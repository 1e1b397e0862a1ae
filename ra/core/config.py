"""Typed configuration for release runs.

Configuration is optional. When present it is a TOML file:

    [git]
    executable = "git"
    remote = "origin"
    timeout = 30.0            # local commands; omitted means no limit
    network_timeout = 600.0   # clone and push; omitted means no limit

    [release]
    label = "automation-delivery"
    descriptor_dir = ""       # relative to the config repository root

    [workspace]
    temp_root = "/var/tmp"    # omitted means the system temp directory
    prefix = "release-"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "GitConfig",
    "ReleaseConfig",
    "WorkspaceConfig",
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_RELEASE_LABEL",
    "load_config",
    "load_config_or_default",
]

DEFAULT_CONFIG_FILENAME = "ra.toml"
DEFAULT_RELEASE_LABEL = "automation-delivery"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Config file could not be read or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class GitConfig:
    executable: str = "git"
    remote: str = "origin"
    timeout: float | None = None
    network_timeout: float | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    label: str = DEFAULT_RELEASE_LABEL
    descriptor_dir: str = ""


@dataclass(frozen=True, slots=True)
class WorkspaceConfig:
    temp_root: Path | None = None
    prefix: str = "release-"


@dataclass(frozen=True, slots=True)
class Config:
    git: GitConfig = field(default_factory=GitConfig)
    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    workspace: WorkspaceConfig = field(default_factory=WorkspaceConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Build a Config from parsed TOML, falling back to defaults per key."""
        git: StrDict = get_table(data, "git") or {}
        release: StrDict = get_table(data, "release") or {}
        workspace: StrDict = get_table(data, "workspace") or {}

        temp_root = get_str(workspace, "temp_root")
        descriptor_dir = release.get("descriptor_dir", "")
        if not isinstance(descriptor_dir, str):
            raise TypeError("release.descriptor_dir must be a string")
        descriptor_dir = descriptor_dir.strip().strip("/")
        relative = Path(descriptor_dir)
        if relative.is_absolute() or relative.drive or ".." in relative.parts:
            raise ValueError("release.descriptor_dir must stay inside the config repository")

        return cls(
            git=GitConfig(
                executable=get_str(git, "executable") or "git",
                remote=get_str(git, "remote") or "origin",
                timeout=get_float(git, "timeout"),
                network_timeout=get_float(git, "network_timeout"),
            ),
            release=ReleaseConfig(
                label=get_str(release, "label") or DEFAULT_RELEASE_LABEL,
                descriptor_dir=descriptor_dir,
            ),
            workspace=WorkspaceConfig(
                temp_root=Path(temp_root).expanduser() if temp_root else None,
                prefix=get_str(workspace, "prefix") or "release-",
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load configuration from a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Ok(Config) on success, Err(ConfigError) if the file is missing,
        unreadable, or structurally invalid.
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Like load_config, but a missing file yields the default Config."""
    if not path.exists():
        return Ok(Config())
    return load_config(path)

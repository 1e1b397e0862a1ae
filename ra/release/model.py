from __future__ import annotations

from dataclasses import dataclass, field

from ra.core.config import DEFAULT_RELEASE_LABEL
from ra.core.result import Err, Ok, Result
from ra.release.errors import InvalidInput


def release_branch_name(source_branch: str, version: str) -> str:
    """Branch cut for a release: ``{source}-v{version}``."""
    return f"{source_branch}-v{version}"


def descriptor_filename(project: str, version: str, suffix: str | None = None) -> str:
    """Descriptor file name: ``{project}_{version}[_{suffix}].json``."""
    base = f"{project}_{version}"
    if suffix:
        return f"{base}_{suffix}.json"
    return f"{base}.json"


def commit_message(project: str, version: str) -> str:
    return f"Add release config for {project} v{version}"


@dataclass(frozen=True, slots=True)
class DeploymentEntry:
    """Branch/commit pin of one deployable artifact."""

    name: str
    branch: str
    commit: str

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "branch": self.branch, "commit": self.commit}


@dataclass(frozen=True, slots=True)
class ReleaseRecord:
    """The descriptor committed to the configuration repository."""

    project: str
    deploy: tuple[DeploymentEntry, ...]
    release: str = DEFAULT_RELEASE_LABEL
    source: tuple[str, ...] = ()
    repositories: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        # Key order is part of the file format.
        return {
            "release": self.release,
            "project": self.project,
            "source": list(self.source),
            "deploy": [d.to_dict() for d in self.deploy],
            "repositories": list(self.repositories),
        }


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    """Validated inputs of one release run."""

    target_repo: str
    config_repo: str
    source_branch: str
    version: str
    project: str
    suffix: str | None = None
    sources: tuple[str, ...] = field(default=())
    repositories: tuple[str, ...] = field(default=())

    @classmethod
    def create(
        cls,
        *,
        target_repo: str,
        config_repo: str,
        source_branch: str,
        version: str,
        project: str,
        suffix: str | None = None,
        sources: tuple[str, ...] = (),
        repositories: tuple[str, ...] = (),
    ) -> Result[ReleaseRequest, InvalidInput]:
        """Strip and check inputs. Every field but suffix must be non-empty."""
        required = {
            "target repo": target_repo,
            "config repo": config_repo,
            "source branch": source_branch,
            "version": version,
            "project name": project,
        }
        for name, value in required.items():
            if not value.strip():
                return Err(InvalidInput(field=name, reason="must not be empty"))

        suffix = suffix.strip() if suffix else None
        # These three end up in the descriptor file name.
        for name, value in (("project name", project), ("version", version), ("file suffix", suffix)):
            if value and "/" in value:
                return Err(InvalidInput(field=name, reason="must not contain '/'"))

        return Ok(
            cls(
                target_repo=target_repo.strip(),
                config_repo=config_repo.strip(),
                source_branch=source_branch.strip(),
                version=version.strip(),
                project=project.strip(),
                suffix=suffix or None,
                sources=sources,
                repositories=repositories,
            )
        )

    @property
    def branch(self) -> str:
        return release_branch_name(self.source_branch, self.version)

    @property
    def descriptor_name(self) -> str:
        return descriptor_filename(self.project, self.version, self.suffix)

    @property
    def deploy_name(self) -> str:
        return self.suffix or self.project

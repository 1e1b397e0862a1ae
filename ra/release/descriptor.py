"""Release descriptor file I/O.

The descriptor is the JSON file written into the configuration repository:

    {
        "release": "automation-delivery",
        "project": "afs",
        "source": [],
        "deploy": [
            {
                "name": "production",
                "branch": "develop-v1.0.0",
                "commit": "<sha>"
            }
        ],
        "repositories": []
    }
"""

from __future__ import annotations

import json
from pathlib import Path

from ra.core.result import Err, Ok, Result
from ra.core.structured import as_str_dict, get_list, get_str, get_str_list
from ra.platform.files import atomic_write_json
from ra.release.errors import DescriptorReadError, DescriptorWriteError
from ra.release.model import DeploymentEntry, ReleaseRecord

DESCRIPTOR_INDENT = 4


def descriptor_path(
    repo_root: Path, filename: str, *, descriptor_dir: str = ""
) -> Result[Path, DescriptorWriteError]:
    """Location of the descriptor inside the checkout at repo_root."""
    path = repo_root / descriptor_dir / filename if descriptor_dir else repo_root / filename
    if not path.resolve().is_relative_to(repo_root.resolve()):
        return Err(DescriptorWriteError(path=path, reason="outside the config repository"))
    return Ok(path)


def write_release_descriptor(
    path: Path, record: ReleaseRecord
) -> Result[Path, DescriptorWriteError]:
    """Write record to path, replacing any existing file."""
    try:
        atomic_write_json(path, record.to_dict(), indent=DESCRIPTOR_INDENT)
    except OSError as e:
        return Err(DescriptorWriteError(path=path, reason=e.strerror or str(e)))
    return Ok(path)


def read_release_descriptor(path: Path) -> Result[ReleaseRecord, DescriptorReadError]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(DescriptorReadError(path=path, reason=f"cannot read: {e}"))

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(DescriptorReadError(path=path, reason=f"invalid JSON: {e}"))

    data = as_str_dict(obj)
    if data is None:
        return Err(DescriptorReadError(path=path, reason="root must be a JSON object"))

    release = get_str(data, "release")
    project = get_str(data, "project")
    if release is None or project is None:
        return Err(DescriptorReadError(path=path, reason="missing release or project"))

    source = get_str_list(data, "source")
    repositories = get_str_list(data, "repositories")
    if source is None or repositories is None:
        return Err(
            DescriptorReadError(path=path, reason="source and repositories must be string lists")
        )

    deploy_items = get_list(data, "deploy")
    if deploy_items is None:
        return Err(DescriptorReadError(path=path, reason="missing deploy[]"))

    deploy: list[DeploymentEntry] = []
    for item in deploy_items:
        d = as_str_dict(item)
        if d is None:
            return Err(DescriptorReadError(path=path, reason="deploy entries must be objects"))
        branch = get_str(d, "branch")
        commit = get_str(d, "commit")
        if branch is None or commit is None:
            return Err(DescriptorReadError(path=path, reason="deploy entry needs branch and commit"))
        deploy.append(DeploymentEntry(name=get_str(d, "name") or "", branch=branch, commit=commit))

    return Ok(
        ReleaseRecord(
            release=release,
            project=project,
            source=tuple(source),
            deploy=tuple(deploy),
            repositories=tuple(repositories),
        )
    )

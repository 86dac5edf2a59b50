"""Load the repository view of a build project.

The build tool exports the repositories it resolved from the project
descriptor as YAML or JSON::

    name: my-app
    repositories:
      - {id: central, url: "https://repo.maven.apache.org/maven2"}
    pluginRepositories: []
    distributionManagement:
      repository: {id: releases, url: "https://nexus/releases"}
      snapshotRepository: {id: snapshots, url: "https://nexus/snapshots"}
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from repoban.types import DistributionManagement, ProjectModel, RepositoryRecord

PROJECT_REASON_MISSING = "PROJECT_MISSING"
PROJECT_REASON_PARSE_ERROR = "PROJECT_PARSE_ERROR"
PROJECT_REASON_SCHEMA_INVALID = "PROJECT_SCHEMA_INVALID"


class ProjectModelError(ValueError):
    """Project repository view validation error."""

    reason_code: str

    def __init__(self, message: str, reason_code: str = PROJECT_REASON_SCHEMA_INVALID) -> None:
        super().__init__(message)
        self.reason_code = reason_code


def load_project(path: Path) -> ProjectModel:
    """Load a project repository view from YAML or JSON."""
    if not path.exists():
        raise ProjectModelError(f"Project file not found: {path}", PROJECT_REASON_MISSING)

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ProjectModelError(f"{path.name} parse error: {exc}", PROJECT_REASON_PARSE_ERROR) from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ProjectModelError(
            f"{path.name} parse error: expected mapping at top level",
            PROJECT_REASON_PARSE_ERROR,
        )
    return project_from_dict(raw)


def project_from_dict(data: dict[str, Any]) -> ProjectModel:
    """Build a ProjectModel from a parsed mapping."""
    name = data.get("name")
    if name is not None and not isinstance(name, str):
        raise ProjectModelError("name must be a string")

    repositories = _parse_repository_list(data.get("repositories"), "repositories")
    plugin_repositories = _parse_repository_list(data.get("pluginRepositories"), "pluginRepositories")

    distribution_management = None
    distribution_raw = data.get("distributionManagement")
    if distribution_raw is not None:
        if not isinstance(distribution_raw, dict):
            raise ProjectModelError("distributionManagement must be a mapping")
        distribution_management = DistributionManagement(
            repository=_parse_optional_repository(
                distribution_raw.get("repository"),
                "distributionManagement.repository",
            ),
            snapshot_repository=_parse_optional_repository(
                distribution_raw.get("snapshotRepository"),
                "distributionManagement.snapshotRepository",
            ),
        )

    return ProjectModel(
        repositories=tuple(repositories),
        plugin_repositories=tuple(plugin_repositories),
        distribution_management=distribution_management,
        name=name,
    )


def _parse_repository_list(value: Any, field_name: str) -> list[RepositoryRecord]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ProjectModelError(f"{field_name} must be a list of repositories")
    return [_parse_repository(entry, f"{field_name}[{index}]") for index, entry in enumerate(value)]


def _parse_optional_repository(value: Any, field_name: str) -> RepositoryRecord | None:
    if value is None:
        return None
    return _parse_repository(value, field_name)


def _parse_repository(value: Any, field_name: str) -> RepositoryRecord:
    if not isinstance(value, dict):
        raise ProjectModelError(f"{field_name} must be a mapping with `id` and `url`")

    url = value.get("url")
    if not isinstance(url, str):
        raise ProjectModelError(f"{field_name}.url must be a string")

    repo_id = value.get("id", "")
    if repo_id is None:
        repo_id = ""
    if not isinstance(repo_id, str):
        raise ProjectModelError(f"{field_name}.id must be a string")

    return RepositoryRecord(id=repo_id, url=url)

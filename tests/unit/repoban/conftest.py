"""Shared fixtures for repoban tests."""

from __future__ import annotations

import pytest

from repoban.types import DistributionManagement, ProjectModel, RepositoryRecord


@pytest.fixture
def project() -> ProjectModel:
    """Project with two repositories of each kind plus deployment targets."""
    return ProjectModel(
        name="org.example.test",
        repositories=(
            RepositoryRecord(id="repo1", url="http://repo1/"),
            RepositoryRecord(id="repo2", url="http://repo2/"),
        ),
        plugin_repositories=(
            RepositoryRecord(id="pluginrepo1", url="http://repo1-plugin/"),
            RepositoryRecord(id="pluginrepo2", url="http://repo2-plugin/"),
        ),
        distribution_management=DistributionManagement(
            repository=RepositoryRecord(id="depRepo1", url="http://repo1-deploy/"),
            snapshot_repository=RepositoryRecord(id="depRepo2", url="http://repo2-snapshot/"),
        ),
    )


PROJECT_YAML = """
name: org.example.test
repositories:
  - {id: repo1, url: "http://repo1/"}
  - {id: repo2, url: "http://repo2/"}
pluginRepositories:
  - {id: pluginrepo1, url: "http://repo1-plugin/"}
  - {id: pluginrepo2, url: "http://repo2-plugin/"}
distributionManagement:
  repository: {id: depRepo1, url: "http://repo1-deploy/"}
  snapshotRepository: {id: depRepo2, url: "http://repo2-snapshot/"}
""".lstrip()


@pytest.fixture
def project_yaml() -> str:
    return PROJECT_YAML

"""Repository policy checker.

Evaluates every declared repository of a project against its category policy
and collects all violations before failing, so one run reports the complete
picture:

1. Distribution deployment repository (if declared)
2. Distribution snapshot repository (if declared)
3. Plain repositories, in declaration order
4. Plugin repositories, in declaration order
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from repoban.canonical_json import sha256_canonical
from repoban.patterns import matches_any
from repoban.types import (
    CATEGORY_DISTRIBUTION,
    CATEGORY_DISTRIBUTION_SNAPSHOT,
    CATEGORY_PLUGIN_REPOSITORIES,
    CATEGORY_REPOSITORIES,
    CategoryPolicy,
    PolicyConfiguration,
    ProjectModel,
    RepositoryRecord,
    Violation,
    ViolationReport,
)

logger = logging.getLogger(__name__)


class BannedRepositoriesError(RuntimeError):
    """Raised when a project declares repositories its policy bans."""

    def __init__(self, report: ViolationReport):
        super().__init__(report.message)
        self.report = report


def is_url_banned(url: str, policy: CategoryPolicy) -> bool:
    """Decide whether a URL is banned under a category policy.

    A non-empty allow list bans everything it does not match, and the ban
    list is only consulted when the allow list is empty.
    """
    if policy.allowed:
        return not matches_any(url, policy.allowed)
    if policy.banned:
        return matches_any(url, policy.banned)
    return False


def is_banned(repo: RepositoryRecord | None, policy: CategoryPolicy) -> bool:
    """Check a single, possibly undeclared, repository."""
    if repo is None:
        return False
    return is_url_banned(repo.match_url, policy)


def check_banned_repositories(
    repositories: Iterable[RepositoryRecord],
    policy: CategoryPolicy,
) -> list[RepositoryRecord]:
    """Return banned repositories in declaration order."""
    banned: list[RepositoryRecord] = []
    if policy.is_empty:
        return banned

    for repo in repositories:
        if is_banned(repo, policy):
            logger.debug("banned repository %s (%s)", repo.id, repo.url)
            banned.append(repo)
        else:
            logger.debug("allowed repository %s (%s)", repo.id, repo.url)

    return banned


def evaluate(project: ProjectModel, policy: PolicyConfiguration) -> ViolationReport:
    """Evaluate every repository category and collect violations."""
    violations: list[Violation] = []

    distribution = project.distribution_management
    if distribution is not None:
        singles = (
            (CATEGORY_DISTRIBUTION, distribution.repository, policy.distribution),
            (CATEGORY_DISTRIBUTION_SNAPSHOT, distribution.snapshot_repository, policy.distribution_snapshot),
        )
        for category, repo, category_policy in singles:
            if repo is not None and is_banned(repo, category_policy):
                logger.debug("banned %s repository %s (%s)", category, repo.id, repo.url)
                violations.append(Violation(category=category, id=repo.id, url=repo.url))
    else:
        logger.debug("no distribution management declared; skipping deployment checks")

    lists = (
        (CATEGORY_REPOSITORIES, project.repositories, policy.repositories),
        (CATEGORY_PLUGIN_REPOSITORIES, project.plugin_repositories, policy.plugin_repositories),
    )
    for category, repositories, category_policy in lists:
        for repo in check_banned_repositories(repositories, category_policy):
            violations.append(Violation(category=category, id=repo.id, url=repo.url))

    report = ViolationReport(violations=tuple(violations))
    logger.info(
        "checked %d repositories of %s: %d banned",
        _count_repositories(project),
        project.name or "project",
        len(report),
    )
    return report


def check(project: ProjectModel, policy: PolicyConfiguration) -> None:
    """Fail when the project declares any banned repository.

    Raises:
        BannedRepositoriesError: Carrying every violation found
    """
    report = evaluate(project, policy)
    if report:
        raise BannedRepositoriesError(report)


def cache_id(policy: PolicyConfiguration) -> str:
    """Return a stable identity for a policy configuration.

    Equal configurations share an id; changing any pattern list changes it.
    """
    return sha256_canonical(policy.to_options())


def _count_repositories(project: ProjectModel) -> int:
    total = len(project.repositories) + len(project.plugin_repositories)
    distribution = project.distribution_management
    if distribution is not None:
        total += sum(1 for repo in (distribution.repository, distribution.snapshot_repository) if repo is not None)
    return total

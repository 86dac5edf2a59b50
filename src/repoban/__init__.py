"""repoban - banned artifact repository checks."""

from repoban.checker import (
    BannedRepositoriesError,
    cache_id,
    check,
    check_banned_repositories,
    evaluate,
    is_banned,
    is_url_banned,
)
from repoban.patterns import glob_to_regex, matches, matches_any
from repoban.types import (
    CategoryPolicy,
    DistributionManagement,
    PolicyConfiguration,
    ProjectModel,
    RepositoryRecord,
    Violation,
    ViolationReport,
)

__version__ = "0.1.0"

__all__ = [
    "BannedRepositoriesError",
    "CategoryPolicy",
    "DistributionManagement",
    "PolicyConfiguration",
    "ProjectModel",
    "RepositoryRecord",
    "Violation",
    "ViolationReport",
    "__version__",
    "cache_id",
    "check",
    "check_banned_repositories",
    "evaluate",
    "glob_to_regex",
    "is_banned",
    "is_url_banned",
    "matches",
    "matches_any",
]

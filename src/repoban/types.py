"""Domain types for repository policy checks."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

BANNED_MESSAGE_PREFIX = "Current maven session contains banned repositories: "

CATEGORY_DISTRIBUTION = "distribution"
CATEGORY_DISTRIBUTION_SNAPSHOT = "distribution_snapshot"
CATEGORY_REPOSITORIES = "repositories"
CATEGORY_PLUGIN_REPOSITORIES = "plugin_repositories"

# Evaluation order, which is also the report order.
CATEGORIES: tuple[str, ...] = (
    CATEGORY_DISTRIBUTION,
    CATEGORY_DISTRIBUTION_SNAPSHOT,
    CATEGORY_REPOSITORIES,
    CATEGORY_PLUGIN_REPOSITORIES,
)

# Recognized option name -> (category, list kind).
POLICY_OPTIONS: dict[str, tuple[str, str]] = {
    "bannedRepos": (CATEGORY_REPOSITORIES, "banned"),
    "bannedPluginRepos": (CATEGORY_PLUGIN_REPOSITORIES, "banned"),
    "allowedRepos": (CATEGORY_REPOSITORIES, "allowed"),
    "allowedPluginRepos": (CATEGORY_PLUGIN_REPOSITORIES, "allowed"),
    "bannedDistributionRepos": (CATEGORY_DISTRIBUTION, "banned"),
    "bannedDistributionSnapRepos": (CATEGORY_DISTRIBUTION_SNAPSHOT, "banned"),
    "allowedDistributionRepos": (CATEGORY_DISTRIBUTION, "allowed"),
    "allowedDistributionSnapRepos": (CATEGORY_DISTRIBUTION_SNAPSHOT, "allowed"),
}

SNAKE_CASE_OPTIONS: dict[str, str] = {
    "banned_repos": "bannedRepos",
    "banned_plugin_repos": "bannedPluginRepos",
    "allowed_repos": "allowedRepos",
    "allowed_plugin_repos": "allowedPluginRepos",
    "banned_distribution_repos": "bannedDistributionRepos",
    "banned_distribution_snap_repos": "bannedDistributionSnapRepos",
    "allowed_distribution_repos": "allowedDistributionRepos",
    "allowed_distribution_snap_repos": "allowedDistributionSnapRepos",
}


def _pattern_tuple(patterns: Iterable[str] | str | None) -> tuple[str, ...]:
    """Snapshot a pattern list; a lone string is one pattern."""
    if patterns is None:
        return ()
    if isinstance(patterns, str):
        return (patterns,)
    return tuple(patterns)


@dataclass(frozen=True)
class RepositoryRecord:
    """One declared repository (plain, plugin or deployment)."""

    id: str
    url: str

    @property
    def match_url(self) -> str:
        """URL used for pattern matching."""
        return self.url.strip()


@dataclass(frozen=True)
class DistributionManagement:
    """Deployment targets declared by the project."""

    repository: RepositoryRecord | None = None
    snapshot_repository: RepositoryRecord | None = None


@dataclass(frozen=True)
class ProjectModel:
    """Read-only view of the repositories a build project declares."""

    repositories: tuple[RepositoryRecord, ...] = ()
    plugin_repositories: tuple[RepositoryRecord, ...] = ()
    distribution_management: DistributionManagement | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "repositories", tuple(self.repositories))
        object.__setattr__(self, "plugin_repositories", tuple(self.plugin_repositories))


@dataclass(frozen=True)
class CategoryPolicy:
    """Allowed and banned URL patterns for one repository category.

    A non-empty ``allowed`` list puts the category in allow-list mode and
    ``banned`` is then ignored.
    """

    allowed: tuple[str, ...] = ()
    banned: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "allowed", _pattern_tuple(self.allowed))
        object.__setattr__(self, "banned", _pattern_tuple(self.banned))

    @property
    def is_empty(self) -> bool:
        return not self.allowed and not self.banned


@dataclass(frozen=True)
class PolicyConfiguration:
    """Immutable policy for every repository category."""

    repositories: CategoryPolicy = field(default_factory=CategoryPolicy)
    plugin_repositories: CategoryPolicy = field(default_factory=CategoryPolicy)
    distribution: CategoryPolicy = field(default_factory=CategoryPolicy)
    distribution_snapshot: CategoryPolicy = field(default_factory=CategoryPolicy)

    @classmethod
    def from_options(cls, **options: Iterable[str] | str) -> PolicyConfiguration:
        """Build a configuration from the recognized option names.

        Both ``bannedRepos`` and ``banned_repos`` spellings are accepted, and a
        single string is read as a one-pattern list.
        """
        lists: dict[str, dict[str, tuple[str, ...]]] = {
            category: {"allowed": (), "banned": ()} for category in CATEGORIES
        }
        for name, patterns in options.items():
            option = SNAKE_CASE_OPTIONS.get(name, name)
            if option not in POLICY_OPTIONS:
                raise TypeError(f"unknown policy option: {name}")
            category, kind = POLICY_OPTIONS[option]
            lists[category][kind] = _pattern_tuple(patterns)

        return cls(**{category: CategoryPolicy(**kinds) for category, kinds in lists.items()})

    def for_category(self, category: str) -> CategoryPolicy:
        if category not in CATEGORIES:
            raise KeyError(f"unknown repository category: {category}")
        return getattr(self, category)

    def to_options(self) -> dict[str, list[str]]:
        """Return the eight option lists keyed by option name."""
        return {
            option: list(getattr(self.for_category(category), kind))
            for option, (category, kind) in POLICY_OPTIONS.items()
        }


@dataclass(frozen=True)
class Violation:
    """A repository whose URL breaks its category policy."""

    category: str
    id: str
    url: str

    def render(self) -> str:
        return f"{self.id} - {self.url}\n"


@dataclass(frozen=True)
class ViolationReport:
    """Ordered violations across all categories."""

    violations: tuple[Violation, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "violations", tuple(self.violations))

    def __bool__(self) -> bool:
        return bool(self.violations)

    def __len__(self) -> int:
        return len(self.violations)

    def by_category(self, category: str) -> list[Violation]:
        return [v for v in self.violations if v.category == category]

    def render(self) -> str:
        return "".join(v.render() for v in self.violations)

    @property
    def message(self) -> str:
        return BANNED_MESSAGE_PREFIX + self.render()

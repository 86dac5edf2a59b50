"""Glob pattern matching for repository URLs.

Only ``*`` (any sequence, possibly empty) and ``?`` (exactly one character)
are wildcards. Nothing else is escaped, so regex metacharacters in a pattern
such as ``.`` or ``+`` keep their regex meaning.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import lru_cache


def glob_to_regex(pattern: str) -> str:
    """Translate a glob pattern into a regular expression string."""
    return pattern.replace("?", ".").replace("*", ".*?")


@lru_cache(maxsize=512)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(glob_to_regex(pattern))


def matches(url: str, pattern: str) -> bool:
    """Return True when the whole URL matches the glob pattern.

    Raises:
        re.error: If the translated pattern is not a valid regex
    """
    return _compile(pattern).fullmatch(url) is not None


def matches_any(url: str, patterns: Iterable[str]) -> bool:
    """Return True when the URL matches at least one pattern."""
    return any(matches(url, pattern) for pattern in patterns)

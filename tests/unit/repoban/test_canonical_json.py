"""Tests for canonical JSON helpers."""

from __future__ import annotations

from repoban.canonical_json import canonical_dumps, sha256_canonical
from repoban.checker import cache_id
from repoban.types import PolicyConfiguration


def test_canonical_dumps_is_key_order_independent() -> None:
    assert canonical_dumps({"b": [1], "a": "é"}) == '{"a":"é","b":[1]}'
    assert sha256_canonical({"b": 1, "a": 2}) == sha256_canonical({"a": 2, "b": 1})


def test_cache_id_hashes_canonical_option_lists() -> None:
    policy = PolicyConfiguration.from_options(bannedRepos=["*repo1*"])

    assert cache_id(policy) == sha256_canonical(policy.to_options())

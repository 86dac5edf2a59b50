"""Tests for banned repository report artifacts."""

from __future__ import annotations

import json
from pathlib import Path

from repoban.checker import cache_id, evaluate
from repoban.report import (
    REPORT_JSON_FILENAME,
    REPORT_MD_FILENAME,
    build_report,
    write_report,
)
from repoban.types import PolicyConfiguration, ProjectModel


def test_failed_report_artifacts(tmp_path: Path, project: ProjectModel) -> None:
    policy = PolicyConfiguration.from_options(bannedRepos=["*repo1*"], bannedPluginRepos=["http://repo2*"])
    report = build_report(evaluate(project, policy), policy, project)

    json_path, md_path = write_report(tmp_path / "out", report)

    assert json_path.name == REPORT_JSON_FILENAME
    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload["status"] == "failed"
    assert payload["generated_at"] == "1970-01-01T00:00:00Z"
    assert payload["project"] == "org.example.test"
    assert payload["cache_id"] == cache_id(policy)
    assert payload["violations"] == [
        {"category": "repositories", "id": "repo1", "url": "http://repo1/"},
        {"category": "plugin_repositories", "id": "pluginrepo2", "url": "http://repo2-plugin/"},
    ]
    assert payload["message"].startswith("Current maven session contains banned repositories: ")

    assert md_path.name == REPORT_MD_FILENAME
    markdown = md_path.read_text(encoding="utf-8")
    assert "FAILED" in markdown
    assert "## Repositories" in markdown
    assert "## Plugin Repositories" in markdown
    assert "## Distribution Repository" not in markdown
    assert "2 (policy violation" in markdown


def test_passed_report_is_deterministic(tmp_path: Path, project: ProjectModel) -> None:
    policy = PolicyConfiguration()
    report = build_report(evaluate(project, policy), policy, project)

    first, _ = write_report(tmp_path / "a", report)
    second, _ = write_report(tmp_path / "b", report)

    assert first.read_bytes() == second.read_bytes()
    payload = json.loads(first.read_text(encoding="utf-8"))
    assert payload["status"] == "passed"
    assert payload["message"] is None
    assert payload["violations"] == []


def test_wallclock_timestamp(project: ProjectModel) -> None:
    policy = PolicyConfiguration()
    report = build_report(evaluate(project, policy), policy, project, timestamp_mode="wallclock")

    assert report.timestamp_mode == "wallclock"
    assert report.generated_at != "1970-01-01T00:00:00Z"

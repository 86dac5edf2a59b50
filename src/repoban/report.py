"""Banned repository report artifacts.

Writes a canonical JSON report and a human-readable markdown summary for CI
pipelines. Exit code guidance: 0 when the check passed, 2 on a policy
violation.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Literal, TextIO

from repoban.canonical_json import canonical_dumps
from repoban.checker import cache_id
from repoban.types import (
    CATEGORIES,
    PolicyConfiguration,
    ProjectModel,
    ViolationReport,
)

REPORT_SCHEMA_VERSION = "1.0"
REPORT_JSON_FILENAME = "BANNED_REPOSITORIES.json"
REPORT_MD_FILENAME = "BANNED_REPOSITORIES.md"

CATEGORY_TITLES: dict[str, str] = {
    "distribution": "Distribution Repository",
    "distribution_snapshot": "Distribution Snapshot Repository",
    "repositories": "Repositories",
    "plugin_repositories": "Plugin Repositories",
}


@dataclass
class CheckReport:
    """Complete banned repository check report."""

    schema_version: str = REPORT_SCHEMA_VERSION
    generated_at: str = ""
    timestamp_mode: str = "deterministic"
    status: Literal["passed", "failed"] = "passed"
    project: str | None = None
    cache_id: str = ""
    message: str | None = None
    violations: list[dict[str, str]] = field(default_factory=list)


def _get_timestamp(timestamp_mode: str) -> str:
    if timestamp_mode == "deterministic":
        return "1970-01-01T00:00:00Z"
    return datetime.now(UTC).isoformat()


def build_report(
    report: ViolationReport,
    policy: PolicyConfiguration,
    project: ProjectModel,
    timestamp_mode: str = "deterministic",
) -> CheckReport:
    """Summarize a check outcome as a serializable report."""
    return CheckReport(
        generated_at=_get_timestamp(timestamp_mode),
        timestamp_mode=timestamp_mode,
        status="failed" if report else "passed",
        project=project.name,
        cache_id=cache_id(policy),
        message=report.message if report else None,
        violations=[asdict(violation) for violation in report.violations],
    )


def report_to_dict(check_report: CheckReport) -> dict[str, Any]:
    return asdict(check_report)


def write_report(out_dir: Path, check_report: CheckReport) -> tuple[Path, Path]:
    """Write JSON and markdown reports and return their paths."""
    out_dir.mkdir(parents=True, exist_ok=True)

    json_path = out_dir / REPORT_JSON_FILENAME
    json_path.write_text(canonical_dumps(report_to_dict(check_report)), encoding="utf-8")

    md_path = out_dir / REPORT_MD_FILENAME
    with open(md_path, "w", encoding="utf-8") as f:
        _write_markdown_report(f, check_report)

    return json_path, md_path


def _write_markdown_report(f: TextIO, check_report: CheckReport) -> None:
    """Write human-readable markdown report."""
    f.write("# Banned Repositories Report\n\n")

    status_emoji = "✅" if check_report.status == "passed" else "❌"
    f.write(f"**Status**: {status_emoji} {check_report.status.upper()}\n\n")
    if check_report.project:
        f.write(f"**Project**: {check_report.project}\n\n")
    f.write(f"**Generated**: {check_report.generated_at} ({check_report.timestamp_mode})\n\n")
    f.write(f"**Policy Cache Id**: `{check_report.cache_id}`\n\n")

    f.write("## Summary\n\n")
    f.write(f"- Banned repositories: {len(check_report.violations)}\n\n")

    for category in CATEGORIES:
        entries = [v for v in check_report.violations if v["category"] == category]
        if not entries:
            continue
        f.write(f"## {CATEGORY_TITLES[category]}\n\n")
        for entry in entries:
            f.write(f"- `{entry['id']}` - {entry['url']}\n")
        f.write("\n")

    f.write("## Exit Code\n\n")
    if check_report.status == "passed":
        f.write("0 (success - no banned repositories)\n")
    else:
        f.write("2 (policy violation - banned repositories declared)\n")

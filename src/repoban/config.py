"""Load and validate repository policy configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from repoban.types import POLICY_OPTIONS, SNAKE_CASE_OPTIONS, PolicyConfiguration

DEFAULT_POLICY_RELATIVE_PATH = Path(".repoban/policy.yaml")
POLICY_ENV_VAR = "REPOBAN_POLICY"

# Keep this literal in option order; empty lists never ban anything.
POLICY_TEMPLATE: dict[str, list[str]] = {option: [] for option in POLICY_OPTIONS}

POLICY_REASON_MISSING = "POLICY_MISSING"
POLICY_REASON_PARSE_ERROR = "POLICY_PARSE_ERROR"
POLICY_REASON_SCHEMA_INVALID = "POLICY_SCHEMA_INVALID"


class PolicyConfigError(ValueError):
    """Policy configuration validation error."""

    reason_code: str

    def __init__(self, message: str, reason_code: str = POLICY_REASON_SCHEMA_INVALID) -> None:
        super().__init__(message)
        self.reason_code = reason_code


def resolve_policy_path(policy: Path | None, root: Path | None = None) -> Path:
    """Resolve the policy file: explicit path, then REPOBAN_POLICY, then default."""
    if policy is not None:
        return policy
    env_value = os.getenv(POLICY_ENV_VAR, "").strip()
    if env_value:
        return Path(env_value)
    return (root or Path.cwd()) / DEFAULT_POLICY_RELATIVE_PATH


def ensure_default_policy(root: Path, *, force: bool = False) -> Path:
    """Write the empty policy template under ``root``."""
    output_path = root.resolve() / DEFAULT_POLICY_RELATIVE_PATH
    if output_path.exists() and not force:
        raise FileExistsError(f"Policy file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    rendered = yaml.safe_dump(POLICY_TEMPLATE, sort_keys=False, default_flow_style=False)
    output_path.write_text(rendered, encoding="utf-8")
    return output_path


def load_policy(path: Path) -> PolicyConfiguration:
    """Load a YAML or JSON policy file."""
    if not path.exists():
        raise PolicyConfigError(
            f"Missing policy file at {path}. Run `repoban init` to create one.",
            POLICY_REASON_MISSING,
        )

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise PolicyConfigError(f"{path.name} parse error: {exc}", POLICY_REASON_PARSE_ERROR) from exc

    # An empty file is an empty policy.
    if raw is None:
        return PolicyConfiguration()
    if not isinstance(raw, dict):
        raise PolicyConfigError(
            f"{path.name} parse error: expected mapping at top level",
            POLICY_REASON_PARSE_ERROR,
        )
    return policy_from_dict(raw)


def policy_from_dict(data: dict[str, Any]) -> PolicyConfiguration:
    """Validate a mapping of option name to pattern list."""
    options: dict[str, list[str]] = {}
    for key in data:
        option = SNAKE_CASE_OPTIONS.get(str(key), str(key))
        if option not in POLICY_OPTIONS:
            known = ", ".join(POLICY_OPTIONS)
            raise PolicyConfigError(f"unknown policy option `{key}` (expected one of: {known})")
        if option in options:
            raise PolicyConfigError(f"policy option `{option}` is given more than once")
        options[option] = normalize_patterns(data[key], option)

    return PolicyConfiguration.from_options(**options)


def normalize_patterns(value: Any, field_name: str) -> list[str]:
    """Normalize a pattern list while preserving declaration order."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise PolicyConfigError(f"{field_name} must be a list of strings")

    normalized: list[str] = []
    seen: set[str] = set()
    for item in value:
        if not isinstance(item, str):
            raise PolicyConfigError(f"{field_name} must be a list of strings")
        cleaned = item.strip()
        if not cleaned:
            raise PolicyConfigError(f"{field_name} contains a blank pattern")
        if cleaned not in seen:
            seen.add(cleaned)
            normalized.append(cleaned)

    return normalized

"""repoban CLI - banned repository checks for build pipelines."""

from __future__ import annotations

import json
import logging
import re
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from repoban import __version__
from repoban.checker import cache_id, evaluate
from repoban.config import (
    PolicyConfigError,
    ensure_default_policy,
    load_policy,
    resolve_policy_path,
)
from repoban.project import ProjectModelError, load_project
from repoban.report import build_report, report_to_dict, write_report

cli = typer.Typer(
    name="repoban",
    help="repoban - fail builds that declare banned artifact repositories",
    no_args_is_help=True,
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _version_option_callback(value: bool) -> None:
    """Handle eager --version option."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@cli.callback()
def _cli_callback(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_option_callback,
        is_eager=True,
    ),
) -> None:
    """Check declared repositories against allow and ban lists."""


@cli.command(name="check")
def check_cmd(
    project: Path = typer.Argument(..., help="Project repository view (YAML or JSON)"),
    policy: Path | None = typer.Option(
        None,
        "--policy",
        "-p",
        help="Policy file (default: $REPOBAN_POLICY or .repoban/policy.yaml)",
    ),
    out: Path | None = typer.Option(
        None,
        "--out",
        "-o",
        help="Directory to write BANNED_REPOSITORIES.json and .md",
    ),
    timestamp_mode: str = typer.Option(
        "deterministic",
        "--timestamp-mode",
        help="Timestamp mode for written reports: deterministic or wallclock",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every evaluated repository"),
) -> None:
    """Fail (exit 2) when the project declares banned repositories."""
    _configure_logging(verbose)

    if timestamp_mode not in ("deterministic", "wallclock"):
        console.print(
            f"[bold red]Refused:[/bold red] invalid --timestamp-mode {escape(repr(timestamp_mode))}. "
            "Expected 'deterministic' or 'wallclock'."
        )
        raise typer.Exit(1)

    try:
        policy_config = load_policy(resolve_policy_path(policy))
        project_model = load_project(project)
        violations = evaluate(project_model, policy_config)
    except (PolicyConfigError, ProjectModelError) as exc:
        console.print(f"[bold red]Error[/bold red] ({exc.reason_code}): {escape(str(exc))}")
        raise typer.Exit(1) from exc
    except re.error as exc:
        console.print(f"[bold red]Error:[/bold red] invalid repository pattern: {escape(str(exc))}")
        raise typer.Exit(1) from exc

    check_report = build_report(violations, policy_config, project_model, timestamp_mode)

    if out is not None:
        json_path, md_path = write_report(out, check_report)

    if as_json:
        typer.echo(json.dumps(report_to_dict(check_report), indent=2, sort_keys=True))
    elif violations:
        console.print("[bold red]❌ Banned repositories found[/bold red]")
        typer.echo(violations.message, nl=False)
    else:
        console.print("[bold green]✅ No banned repositories[/bold green]")

    if out is not None and not as_json:
        typer.echo("\nReports written to:")
        typer.echo(f"  {json_path}")
        typer.echo(f"  {md_path}")

    if violations:
        raise typer.Exit(2)


@cli.command(name="cache-id")
def cache_id_cmd(
    policy: Path | None = typer.Option(None, "--policy", "-p", help="Policy file"),
) -> None:
    """Print the policy cache id (changes whenever any pattern list changes)."""
    try:
        policy_config = load_policy(resolve_policy_path(policy))
    except PolicyConfigError as exc:
        console.print(f"[bold red]Error[/bold red] ({exc.reason_code}): {escape(str(exc))}")
        raise typer.Exit(1) from exc
    typer.echo(cache_id(policy_config))


@cli.command(name="init")
def init_cmd(
    root: Path = typer.Option(Path("."), "--root", help="Directory to create .repoban/policy.yaml in"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing policy file"),
) -> None:
    """Write an empty policy template."""
    try:
        path = ensure_default_policy(root, force=force)
    except FileExistsError as exc:
        console.print(f"[yellow]{escape(str(exc))}[/yellow] (use --force to overwrite)")
        raise typer.Exit(1) from exc
    console.print(f"[green]Created {escape(str(path))}[/green]")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

"""
chartcheck — CLI entrypoint.

Usage:
    python -m chartcheck.main --help
    python -m chartcheck.main config check
    python -m chartcheck.main chart check production -t templates/role.yaml --set roles.a.rules[0].verbs[0]=get
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from chartcheck import __version__
from chartcheck.core.observability.logging_config import level_from_flags, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="chartcheck")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to chartcheck.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """chartcheck — render the chart, lint it, assert on it."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level_from_flags(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get("CHARTCHECK_LOG_FILE"),
    )


@cli.group()
def config() -> None:
    """Harness configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate chartcheck.yml, the chart path and the required tools."""
    from chartcheck.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Chart: {result.chart_label}")
        click.echo(f"   Path: {result.config.chart_path}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


# ── Register sub-command groups from chartcheck/ui/cli/ ─────────

from chartcheck.ui.cli.chart import chart  # noqa: E402

cli.add_command(chart)


if __name__ == "__main__":
    cli()

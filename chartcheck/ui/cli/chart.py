"""
CLI commands for the chart under test.

Thin wrappers over ``chartcheck.core.services.helm_*`` and the
render_check use case.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable

import click

from chartcheck.core.models.harness import HarnessConfig
from chartcheck.core.models.render import RenderRequest


def _load_config(ctx: click.Context) -> HarnessConfig:
    """Load harness config from --config or auto-detect; exit on error."""
    from chartcheck.core.config.loader import ConfigError, load_config

    try:
        return load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def _render_options(f: Callable) -> Callable:
    """Options shared by ``render`` and ``check``."""
    options = [
        click.argument("release"),
        click.option("--template", "-t", "templates", multiple=True,
                     help="Template to render (templates/x.yaml). Repeatable."),
        click.option("--set", "set_pairs", multiple=True, help="key=value override. Repeatable."),
        click.option("--values", "-f", "values_files", multiple=True,
                     type=click.Path(exists=True, dir_okay=False), help="Values file. Repeatable."),
        click.option("--namespace", "-n", default=None, help="Namespace (default: random)."),
        click.option("--no-base-values", is_flag=True, help="Don't apply configured base values."),
        click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON."),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _build_request(
    config: HarnessConfig,
    release: str,
    templates: tuple[str, ...],
    set_pairs: tuple[str, ...],
    values_files: tuple[str, ...],
    namespace: str | None,
    no_base_values: bool,
) -> RenderRequest:
    from chartcheck.core.services.helm_values import merge_values, parse_set_pairs, unique_namespace

    try:
        overrides = parse_set_pairs(set_pairs)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--set") from e

    base = {} if no_base_values else config.base_values
    return RenderRequest(
        release=release,
        templates=list(templates),
        set_values=merge_values(base, overrides),
        values_files=list(values_files),
        namespace=namespace or unique_namespace(config.namespace_prefix),
    )


@click.group("chart")
def chart() -> None:
    """Chart under test — metadata, rendering, lint gate."""


# ── Info ────────────────────────────────────────────────────────


@chart.command("info")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def info(ctx: click.Context, as_json: bool) -> None:
    """Show Chart.yaml metadata and the chart's templates."""
    from chartcheck.core.services.helm_chart import ChartError, list_templates, load_chart_info

    config = _load_config(ctx)
    try:
        chart_info = load_chart_info(config.chart_path)
    except ChartError as e:
        if as_json:
            click.echo(json.dumps({"error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    templates = list_templates(config.chart_path)

    if as_json:
        click.echo(json.dumps({
            **chart_info.model_dump(),
            "label": chart_info.label,
            "path": str(config.chart_path),
            "templates": templates,
        }, indent=2))
        return

    click.secho(f"⎈ {chart_info.name} v{chart_info.version}", fg="cyan", bold=True)
    if chart_info.description:
        click.echo(f"   {chart_info.description}")
    if chart_info.app_version:
        click.echo(f"   App version: {chart_info.app_version}")
    click.echo(f"   Label: {chart_info.label}")
    click.echo(f"   📁 {config.chart_path}")
    if templates:
        click.secho(f"\n   📄 Templates ({len(templates)}):", fg="cyan")
        for t in templates:
            click.echo(f"      {t}")
    click.echo()


# ── Render ──────────────────────────────────────────────────────


@chart.command("render")
@_render_options
@click.pass_context
def render(
    ctx: click.Context,
    release: str,
    templates: tuple[str, ...],
    set_pairs: tuple[str, ...],
    values_files: tuple[str, ...],
    namespace: str | None,
    no_base_values: bool,
    as_json: bool,
) -> None:
    """Render templates with helm and print the YAML (no lint gate)."""
    from chartcheck.core.services.helm_render import helm_template

    config = _load_config(ctx)
    request = _build_request(
        config, release, templates, set_pairs, values_files, namespace, no_base_values,
    )
    result = helm_template(request, config)

    if as_json:
        click.echo(json.dumps(result.model_dump(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.failed:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    click.echo(result.output)


@chart.command("check")
@_render_options
@click.option("--expect-error", default=None, help="Regex the render error must match.")
@click.pass_context
def check(
    ctx: click.Context,
    release: str,
    templates: tuple[str, ...],
    set_pairs: tuple[str, ...],
    values_files: tuple[str, ...],
    namespace: str | None,
    no_base_values: bool,
    as_json: bool,
    expect_error: str | None,
) -> None:
    """Render templates and apply the yamllint / blank-line gate."""
    from chartcheck.core.use_cases.render_check import check_render

    config = _load_config(ctx)
    request = _build_request(
        config, release, templates, set_pairs, values_files, namespace, no_base_values,
    )
    result = check_render(request, config, expected_error=expect_error)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.ok:
        if expect_error:
            click.secho(f"✅ Render failed as expected: {result.render_error}", fg="green")
        else:
            click.secho(f"✅ {release} renders cleanly", fg="green", bold=True)
        return

    click.secho(f"❌ {release} failed the render gate:", fg="red", bold=True)
    for err in result.errors:
        click.echo(f"   • {err}")
    for problem in result.lint_problems:
        click.echo(f"     {problem}")
    sys.exit(1)

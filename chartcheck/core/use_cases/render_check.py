"""
Render check use case — render, lint, and reject blank lines.

``check_render`` reports; ``must_render_template`` is the test-facing
form that raises on anything but a clean render (or the expected error).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from chartcheck.core.models.harness import HarnessConfig
from chartcheck.core.models.render import LintProblem, RenderRequest
from chartcheck.core.services.helm_render import helm_template
from chartcheck.core.services.yaml_lint import find_blank_lines, lint_yaml

logger = logging.getLogger(__name__)


class RenderAssertionError(AssertionError):
    """A render did not meet the gate; surfaces as a test failure."""


@dataclass
class RenderCheckResult:
    """Outcome of one gated render."""

    release: str
    ok: bool = False
    output: str = ""
    errors: list[str] = field(default_factory=list)
    lint_problems: list[LintProblem] = field(default_factory=list)
    blank_lines: list[int] = field(default_factory=list)
    expected_error: str | None = None
    render_error: str | None = None

    def to_dict(self) -> dict:
        return {
            "release": self.release,
            "ok": self.ok,
            "errors": self.errors,
            "lint_problems": [p.model_dump() for p in self.lint_problems],
            "blank_lines": self.blank_lines,
            "expected_error": self.expected_error,
            "render_error": self.render_error,
            "output": self.output,
        }


def check_render(
    request: RenderRequest,
    config: HarnessConfig,
    expected_error: str | None = None,
) -> RenderCheckResult:
    """Render ``request`` and apply the gate.

    Args:
        request: What to render.
        config: Harness configuration (chart path, binaries, lint rules).
        expected_error: Regex the render error must match. When given,
            a successful render is a failure and the output is empty.
    """
    result = RenderCheckResult(release=request.release, expected_error=expected_error)
    rendered = helm_template(request, config)
    result.render_error = rendered.error

    if expected_error is not None:
        if rendered.ok:
            result.errors.append("Expected error but didn't happen")
        elif not re.search(expected_error, rendered.error or ""):
            result.errors.append(
                f"render error does not match {expected_error!r}: {rendered.error}"
            )
        result.ok = not result.errors
        return result

    if rendered.failed:
        result.errors.append(f"failed to render helm template: {rendered.error}")
        return result

    result.output = rendered.output

    report = lint_yaml(
        rendered.output,
        config.lint,
        binary=config.yamllint_binary,
        timeout=config.timeout,
    )
    result.lint_problems = report.problems
    if not report.ok:
        details = report.error or "; ".join(str(p) for p in report.problems)
        result.errors.append(f"rendered template had yamllint errors: {details}")

    if config.lint.forbid_blank_lines:
        result.blank_lines = find_blank_lines(rendered.output)
        if result.blank_lines:
            lines = ", ".join(str(n) for n in result.blank_lines)
            result.errors.append(f"found empty lines in output (lines {lines})")

    result.ok = not result.errors
    if not result.ok:
        logger.info("Render of %s rejected: %s", request.release, "; ".join(result.errors))
    return result


def must_render_template(
    release: str,
    templates: list[str],
    *,
    config: HarnessConfig,
    set_values: dict[str, str] | None = None,
    values_files: list[str] | None = None,
    namespace: str = "",
    expected_error: str | None = None,
    extra_args: list[str] | None = None,
) -> str:
    """Render templates and return the output, or raise.

    Returns:
        The rendered YAML, or "" when ``expected_error`` matched.

    Raises:
        RenderAssertionError: On render failure, unmatched or missing
            expected error, lint problems, or blank lines.
    """
    request = RenderRequest(
        release=release,
        templates=list(templates),
        set_values=dict(set_values or {}),
        values_files=list(values_files or []),
        namespace=namespace,
        extra_args=list(extra_args or []),
    )
    result = check_render(request, config, expected_error=expected_error)
    if not result.ok:
        raise RenderAssertionError("\n".join(result.errors))
    return result.output

"""Helm rendering — ``helm template`` with --show-only, --set and -f.

Follows the receipt contract: nothing here raises for a failed render.
Whether a failure is expected (and what it must say) is decided by the
render_check use case.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time

from chartcheck.core.models.harness import HarnessConfig
from chartcheck.core.models.render import RenderRequest, RenderResult
from chartcheck.core.services.helm_values import set_args

logger = logging.getLogger(__name__)


def _helm_available(binary: str = "helm") -> bool:
    """Check if the helm CLI is available."""
    return shutil.which(binary) is not None


def build_template_command(request: RenderRequest, config: HarnessConfig) -> list[str]:
    """Assemble the ``helm template`` argv for a request."""
    cmd = [config.helm_binary, "template", request.release, str(config.chart_path)]
    if request.namespace:
        cmd.extend(["--namespace", request.namespace])
    for template in request.templates:
        cmd.extend(["--show-only", template])
    for values_file in request.values_files:
        cmd.extend(["-f", values_file])
    cmd.extend(set_args(request.set_values))
    cmd.extend(request.extra_args)
    return cmd


def missing_templates(request: RenderRequest, config: HarnessConfig) -> list[str]:
    """Requested templates that do not exist under the chart directory."""
    return [t for t in request.templates if not (config.chart_path / t).is_file()]


def helm_template(request: RenderRequest, config: HarnessConfig) -> RenderResult:
    """Render chart templates locally.

    Returns:
        RenderResult with the rendered YAML (trailing newlines stripped)
        or the renderer's error text.
    """
    if not _helm_available(config.helm_binary):
        return RenderResult.failure(request.release, "helm CLI not found")

    missing = missing_templates(request, config)
    if missing:
        return RenderResult.failure(
            request.release,
            f"template file {missing[0]} does not exist in chart {config.chart_path}",
        )

    cmd = build_template_command(request, config)
    logger.debug("Running: %s", " ".join(cmd))

    start = time.monotonic()
    try:
        r = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=config.timeout,
        )
    except subprocess.TimeoutExpired:
        return RenderResult.failure(
            request.release,
            f"helm template timed out after {config.timeout}s",
            command=cmd,
        )
    except OSError as e:
        return RenderResult.failure(request.release, str(e), command=cmd)

    elapsed_ms = int((time.monotonic() - start) * 1000)

    if r.returncode != 0:
        error = r.stderr.strip() or f"helm template exited with code {r.returncode}"
        logger.info("Render of %s failed: %s", request.release, error)
        return RenderResult.failure(
            request.release,
            error,
            command=cmd,
            return_code=r.returncode,
            duration_ms=elapsed_ms,
        )

    logger.debug("Rendered %s in %dms", request.release, elapsed_ms)
    return RenderResult.success(
        request.release,
        r.stdout.rstrip("\n"),
        command=cmd,
        return_code=r.returncode,
        duration_ms=elapsed_ms,
    )

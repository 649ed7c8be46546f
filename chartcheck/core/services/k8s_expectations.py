"""Expected-value builders shared by the chart suite.

Probes are returned already pruned of zero fields so they compare
directly against ``prune_zero_values(container["livenessProbe"])``.
"""

from __future__ import annotations

from typing import Any

DEFAULT_PROBE_PORT = 5000


def http_probe(
    path: str = "/",
    *,
    port: int = DEFAULT_PROBE_PORT,
    scheme: str = "HTTP",
    headers: list[dict[str, str]] | None = None,
    initial_delay: int = 0,
    timeout: int = 0,
) -> dict[str, Any]:
    http_get: dict[str, Any] = {"path": path, "port": port}
    if scheme:
        http_get["scheme"] = scheme
    if headers:
        http_get["httpHeaders"] = headers
    probe: dict[str, Any] = {"httpGet": http_get}
    if initial_delay:
        probe["initialDelaySeconds"] = initial_delay
    if timeout:
        probe["timeoutSeconds"] = timeout
    return probe


def exec_probe(command: list[str]) -> dict[str, Any]:
    return {"exec": {"command": list(command)}}


def tcp_probe(port: int = DEFAULT_PROBE_PORT) -> dict[str, Any]:
    return {"tcpSocket": {"port": port}}


def default_liveness_probe() -> dict[str, Any]:
    """The chart's liveness probe when nothing is overridden."""
    return http_probe("/", initial_delay=15, timeout=15)


def default_readiness_probe() -> dict[str, Any]:
    """The chart's readiness probe when nothing is overridden."""
    return http_probe("/", initial_delay=5, timeout=3)


def worker_liveness_probe() -> dict[str, Any]:
    return http_probe("/worker")


def worker_readiness_probe() -> dict[str, Any]:
    return http_probe("/worker")


# ── Labels / annotations ────────────────────────────────────────


def gitlab_annotations(
    app: str = "auto-devops-examples/minimal-ruby-app",
    env: str = "prod",
) -> dict[str, str]:
    return {"app.gitlab.com/app": app, "app.gitlab.com/env": env}


def standard_labels(name: str, release: str, chart_label: str) -> dict[str, str]:
    """Labels every chart-managed object carries.

    ``name`` is the release name, or the releaseOverride when one is set.
    """
    return {
        "app": name,
        "chart": chart_label,
        "heritage": "Helm",
        "release": release,
        "app.kubernetes.io/name": name,
        "helm.sh/chart": chart_label,
        "app.kubernetes.io/managed-by": "Helm",
        "app.kubernetes.io/instance": release,
    }

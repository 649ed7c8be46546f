"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from chartcheck.core.models.harness import HarnessConfig


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def chart_dir(tmp_path: Path) -> Path:
    """A minimal chart skeleton (Chart.yaml + a few empty templates)."""
    chart = tmp_path / "auto-deploy-app"
    (chart / "templates").mkdir(parents=True)
    (chart / "Chart.yaml").write_text(textwrap.dedent("""\
        apiVersion: v1
        name: auto-deploy-app
        version: 2.3.0
        appVersion: "1.0"
        description: GitLab's Auto-deploy Helm Chart
    """))
    for name in ("cronjob.yaml", "role.yaml", "worker-deployment.yaml", "_helpers.tpl"):
        (chart / "templates" / name).write_text("")
    return chart


@pytest.fixture
def harness_config(chart_dir: Path) -> HarnessConfig:
    """HarnessConfig pointing at the skeleton chart."""
    return HarnessConfig(chart_path=chart_dir)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove CHARTCHECK_* overrides inherited from the shell."""
    for name in (
        "CHARTCHECK_CHART_PATH",
        "CHARTCHECK_HELM",
        "CHARTCHECK_YAMLLINT",
        "CHARTCHECK_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)

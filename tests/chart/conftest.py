"""
Chart suite fixtures — render the real chart through the gate.

Every test in this directory is auto-marked ``chart`` and skipped when
helm, yamllint or the chart itself is not available.

Run ONLY the chart suite:
    CHARTCHECK_CHART_PATH=/path/to/auto-deploy-app pytest -m chart

Run ONLY harness unit tests:
    pytest -m "not chart"
"""

import functools
import shutil
from pathlib import Path

import pytest

from chartcheck.core.config.loader import ConfigError, load_config
from chartcheck.core.models.harness import HarnessConfig
from chartcheck.core.services.helm_chart import is_chart_dir, load_chart_info
from chartcheck.core.services.helm_values import unique_namespace
from chartcheck.core.use_cases.render_check import must_render_template

_HERE = Path(__file__).parent


@functools.lru_cache(maxsize=1)
def _harness() -> tuple[HarnessConfig | None, str | None]:
    """(config, skip reason); loaded once per session."""
    try:
        config = load_config()
    except ConfigError as e:
        return None, str(e)
    if shutil.which(config.helm_binary) is None:
        return config, f"{config.helm_binary} not found on PATH"
    if config.lint.enabled and shutil.which(config.yamllint_binary) is None:
        return config, f"{config.yamllint_binary} not found on PATH"
    if not is_chart_dir(config.chart_path):
        return config, f"no Chart.yaml at {config.chart_path} (set CHARTCHECK_CHART_PATH)"
    return config, None


def pytest_collection_modifyitems(items):
    """Mark chart tests; skip them all when the chart can't be rendered."""
    chart_items = [i for i in items if _HERE in Path(str(i.fspath)).parents]
    if not chart_items:
        return
    _, reason = _harness()
    for item in chart_items:
        item.add_marker(pytest.mark.chart)
        if reason:
            item.add_marker(pytest.mark.skip(reason=reason))


@pytest.fixture(scope="session")
def chart_config() -> HarnessConfig:
    config, reason = _harness()
    if reason:
        pytest.skip(reason)
    return config


@pytest.fixture(scope="session")
def chart_label(chart_config: HarnessConfig) -> str:
    """e.g. auto-deploy-app-2.3.0, read from Chart.yaml."""
    return load_chart_info(chart_config.chart_path).label


@pytest.fixture(scope="session")
def gitlab_values(chart_config: HarnessConfig) -> dict[str, str]:
    """The gitlab.app / gitlab.env overrides most cases start from."""
    return dict(chart_config.base_values)


@pytest.fixture
def namespace(chart_config: HarnessConfig) -> str:
    return unique_namespace(chart_config.namespace_prefix)


@pytest.fixture
def render(chart_config: HarnessConfig):
    """must_render_template bound to the session's chart config."""
    return functools.partial(must_render_template, config=chart_config)


@pytest.fixture(scope="session")
def testdata_dir() -> Path:
    """Values files shared by the chart tests."""
    return _HERE / "testdata"

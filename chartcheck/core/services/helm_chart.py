"""Chart metadata — Chart.yaml and the templates directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel

logger = logging.getLogger(__name__)

CHART_FILE = "Chart.yaml"
_TEMPLATE_SUFFIXES = (".yaml", ".yml", ".tpl")


class ChartError(Exception):
    """Raised when a chart directory cannot be read."""


class ChartInfo(BaseModel):
    """The parts of Chart.yaml the tests care about."""

    name: str
    version: str
    app_version: str = ""
    description: str = ""

    @property
    def label(self) -> str:
        """Value of the ``chart`` / ``helm.sh/chart`` labels, e.g. auto-deploy-app-2.3.0."""
        return f"{self.name}-{self.version}"


def is_chart_dir(path: Path) -> bool:
    return (path / CHART_FILE).is_file()


def load_chart_info(chart_path: Path) -> ChartInfo:
    """Read Chart.yaml from a chart directory.

    Raises:
        ChartError: If Chart.yaml is missing, unparseable, or lacks name/version.
    """
    chart_file = chart_path / CHART_FILE
    if not chart_file.is_file():
        raise ChartError(f"No {CHART_FILE} in {chart_path}")

    try:
        data = yaml.safe_load(chart_file.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ChartError(f"Cannot parse {chart_file}: {e}") from e

    if not isinstance(data, dict):
        raise ChartError(f"Expected a YAML mapping in {chart_file}")

    name = data.get("name")
    version = data.get("version")
    if not name or version is None:
        raise ChartError(f"{chart_file} must declare both name and version")

    info = ChartInfo(
        name=str(name),
        version=str(version),
        app_version=str(data.get("appVersion") or ""),
        description=str(data.get("description") or ""),
    )
    logger.debug("Chart %s version %s", info.name, info.version)
    return info


def list_templates(chart_path: Path) -> list[str]:
    """Template files relative to the chart root, sorted."""
    tpl_dir = chart_path / "templates"
    if not tpl_dir.is_dir():
        return []
    return sorted(
        p.relative_to(chart_path).as_posix()
        for p in tpl_dir.rglob("*")
        if p.is_file() and p.suffix in _TEMPLATE_SUFFIXES
    )

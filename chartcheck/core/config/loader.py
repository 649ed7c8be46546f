"""
Configuration loader — reads chartcheck.yml into a HarnessConfig.

The file is optional. Values are layered as:
    defaults  <  chartcheck.yml  <  CHARTCHECK_* env vars
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from chartcheck.core.models.harness import HarnessConfig

logger = logging.getLogger(__name__)

# Default config filename
HARNESS_CONFIG_FILE = "chartcheck.yml"

# env var → HarnessConfig field
_ENV_OVERRIDES = {
    "CHARTCHECK_CHART_PATH": "chart_path",
    "CHARTCHECK_HELM": "helm_binary",
    "CHARTCHECK_YAMLLINT": "yamllint_binary",
    "CHARTCHECK_TIMEOUT": "timeout",
}


class ConfigError(Exception):
    """Raised when the harness configuration is invalid."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for chartcheck.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to chartcheck.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / HARNESS_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None, *, search: bool = True) -> HarnessConfig:
    """Load and validate the harness configuration.

    Args:
        path: Explicit path to chartcheck.yml.
        search: When no path is given, look upward from cwd for one.

    Returns:
        Validated HarnessConfig with chart_path made absolute.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None and search:
        path = find_config_file()

    data: dict = {}
    base_dir = Path.cwd()

    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        data = _read_yaml(path)
        base_dir = path.parent.resolve()
        logger.debug("Loaded harness config from %s", path)
    else:
        logger.debug("No %s found, using defaults", HARNESS_CONFIG_FILE)

    # A file's chart_path is relative to the file; the env var to cwd
    chart_path = Path(str(data.get("chart_path") or "."))
    if not chart_path.is_absolute():
        data["chart_path"] = str((base_dir / chart_path).resolve())

    for env_name, field_name in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            logger.debug("Override %s from %s", field_name, env_name)
            data[field_name] = value

    try:
        config = HarnessConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid harness configuration: {e}") from e

    if not config.chart_path.is_absolute():
        config.chart_path = (Path.cwd() / config.chart_path).resolve()

    logger.info("Chart path: %s", config.chart_path)
    return config


def _read_yaml(path: Path) -> dict:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The file may wrap everything under a "chartcheck" key or be flat
    if "chartcheck" in data:
        data = data["chartcheck"] or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Expected 'chartcheck' to be a mapping in {path}")
    return dict(data)

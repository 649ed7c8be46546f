"""
Config check use case — validate chartcheck.yml and the tools it names.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path

from chartcheck.core.config.loader import ConfigError, find_config_file, load_config
from chartcheck.core.models.harness import HarnessConfig
from chartcheck.core.services.helm_chart import ChartError, load_chart_info


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: HarnessConfig | None = None
    config_path: Path | None = None
    chart_label: str | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "chart_path": str(self.config.chart_path) if self.config else None,
            "chart": self.chart_label,
            "errors": self.errors,
            "warnings": self.warnings,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate harness configuration and report issues.

    A missing chartcheck.yml is fine (defaults apply); an unusable chart
    path is an error; missing binaries are warnings since ``chart info``
    still works without them.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            result.warnings.append("No chartcheck.yml found, using defaults.")
    result.config_path = config_path

    try:
        config = load_config(config_path, search=False)
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.config = config

    try:
        result.chart_label = load_chart_info(config.chart_path).label
    except ChartError as e:
        result.errors.append(str(e))

    for binary in (config.helm_binary, config.yamllint_binary):
        if shutil.which(binary) is None:
            result.warnings.append(f"{binary} not found on PATH")

    result.valid = not result.errors
    return result

"""
Harness configuration model — loaded from chartcheck.yml.

Everything has a default, so an empty (or absent) config file yields a
harness that renders the chart in the current directory with the
lint rules the chart has always been held to.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_BASE_VALUES: dict[str, str] = {
    "gitlab.app": "auto-devops-examples/minimal-ruby-app",
    "gitlab.env": "prod",
}


class LintSettings(BaseModel):
    """yamllint gate applied to every successful render."""

    enabled: bool = True
    strict: bool = True                 # warnings fail too (yamllint -s)
    max_line_length: int = Field(default=160, gt=0)
    indent_sequences: bool = False
    trailing_spaces: bool = False       # False disables the rule
    forbid_blank_lines: bool = True


class HarnessConfig(BaseModel):
    """Where the chart lives and how to render and lint it."""

    chart_path: Path = Path(".")
    helm_binary: str = "helm"
    yamllint_binary: str = "yamllint"
    timeout: int = Field(default=60, gt=0)   # seconds, per subprocess

    namespace_prefix: str = "minimal-ruby-app-"
    base_values: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_BASE_VALUES),
    )

    lint: LintSettings = Field(default_factory=LintSettings)

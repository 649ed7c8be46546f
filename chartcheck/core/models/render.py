"""
Render models — what we ask helm for and what comes back.

RenderResult follows the receipt contract: the renderer never raises,
failures are captured on the result and the caller decides whether
they are fatal.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class RenderRequest(BaseModel):
    """One ``helm template`` invocation."""

    release: str
    templates: list[str] = Field(default_factory=list)     # --show-only
    set_values: dict[str, str] = Field(default_factory=dict)
    values_files: list[str] = Field(default_factory=list)
    namespace: str = ""
    extra_args: list[str] = Field(default_factory=list)


class RenderResult(BaseModel):
    """Outcome of a render."""

    release: str
    status: Literal["ok", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None
    command: list[str] = Field(default_factory=list)
    return_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(cls, release: str, output: str = "", **kwargs: Any) -> RenderResult:
        """Create a success result."""
        return cls(release=release, status="ok", output=output, **kwargs)

    @classmethod
    def failure(cls, release: str, error: str, **kwargs: Any) -> RenderResult:
        """Create a failure result."""
        return cls(release=release, status="failed", error=error, **kwargs)


class LintProblem(BaseModel):
    """One line of ``yamllint -f parsable`` output."""

    line: int
    column: int
    level: str          # "error" | "warning"
    message: str
    rule: str = ""

    def __str__(self) -> str:
        rule = f" ({self.rule})" if self.rule else ""
        return f"{self.line}:{self.column}: [{self.level}] {self.message}{rule}"


class LintReport(BaseModel):
    """Result of linting one rendered document stream."""

    ok: bool = True
    problems: list[LintProblem] = Field(default_factory=list)
    output: str = ""
    error: str | None = None

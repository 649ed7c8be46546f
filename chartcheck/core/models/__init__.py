"""
Domain models — pydantic types for the harness.

    from chartcheck.core.models import HarnessConfig, RenderRequest, RenderedObject
"""

from chartcheck.core.models.harness import DEFAULT_BASE_VALUES, HarnessConfig, LintSettings
from chartcheck.core.models.manifest import ObjectMeta, RenderedObject
from chartcheck.core.models.render import (
    LintProblem,
    LintReport,
    RenderRequest,
    RenderResult,
)

__all__ = [
    "DEFAULT_BASE_VALUES",
    "HarnessConfig",
    "LintProblem",
    "LintReport",
    "LintSettings",
    "ObjectMeta",
    "RenderRequest",
    "RenderResult",
    "RenderedObject",
]

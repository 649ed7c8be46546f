"""
Manifest model — one rendered Kubernetes object.

Only the envelope (apiVersion, kind, metadata) is typed. The rest of
the object stays a plain dict under ``raw`` and is reached with
jmespath expressions or the pod-spec helpers in k8s_manifests.
"""

from __future__ import annotations

from typing import Any

import jmespath
from pydantic import BaseModel, ConfigDict, Field


class ObjectMeta(BaseModel):
    """metadata block of a rendered object."""

    model_config = ConfigDict(extra="allow")

    name: str = ""
    namespace: str | None = None
    labels: dict[str, Any] | None = None
    annotations: dict[str, Any] | None = None


class RenderedObject(BaseModel):
    """A single document from ``helm template`` output."""

    model_config = ConfigDict(populate_by_name=True)

    api_version: str = Field(default="", alias="apiVersion")
    kind: str = ""
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    raw: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_dict(cls, doc: dict[str, Any]) -> RenderedObject:
        return cls(
            apiVersion=doc.get("apiVersion") or "",
            kind=doc.get("kind") or "",
            metadata=ObjectMeta.model_validate(doc.get("metadata") or {}),
            raw=doc,
        )

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def labels(self) -> dict[str, Any] | None:
        return self.metadata.labels

    @property
    def annotations(self) -> dict[str, Any] | None:
        return self.metadata.annotations

    def search(self, expression: str) -> Any:
        """Evaluate a jmespath expression against the raw object.

        Keys containing dots or slashes need quoting, e.g.
        ``metadata.labels."app.kubernetes.io/name"``.
        """
        return jmespath.search(expression, self.raw)

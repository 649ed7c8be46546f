"""Manifest parsing — rendered YAML stream → RenderedObject list.

Templates that emit several objects of one kind (roles, role bindings,
cron jobs, worker deployments) wrap them in a ``kind: List``; those are
flattened so callers always see individual objects.
"""

from __future__ import annotations

import logging
from typing import Any

import yaml

from chartcheck.core.models.manifest import RenderedObject

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """Raised when rendered output cannot be read as Kubernetes objects."""


def parse_documents(text: str) -> list[dict]:
    """Every non-empty YAML document in ``text``.

    Raises:
        ManifestError: On invalid YAML or a document that is not a mapping.
    """
    docs: list[dict] = []
    try:
        for doc in yaml.safe_load_all(text):
            if doc is None:
                continue
            if not isinstance(doc, dict):
                raise ManifestError(f"Expected a mapping document, got {type(doc).__name__}")
            docs.append(doc)
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML in rendered output: {e}") from e
    return docs


def _is_list(doc: dict) -> bool:
    kind = doc.get("kind") or ""
    return kind.endswith("List") and isinstance(doc.get("items"), list)


def expand_lists(docs: list[dict]) -> list[dict]:
    """Replace each List document with its items, preserving order."""
    expanded: list[dict] = []
    for doc in docs:
        if _is_list(doc):
            expanded.extend(expand_lists([i for i in doc["items"] if isinstance(i, dict)]))
        else:
            expanded.append(doc)
    return expanded


def load_objects(text: str) -> list[RenderedObject]:
    objects = [RenderedObject.from_dict(d) for d in expand_lists(parse_documents(text))]
    logger.debug("Parsed %d object(s)", len(objects))
    return objects


def load_object(text: str) -> RenderedObject:
    """The single object in ``text``.

    Raises:
        ManifestError: If the output holds zero or several objects.
    """
    objects = load_objects(text)
    if len(objects) != 1:
        raise ManifestError(f"Expected exactly one object, found {len(objects)}")
    return objects[0]


def objects_of_kind(objects: list[RenderedObject], kind: str) -> list[RenderedObject]:
    return [o for o in objects if o.kind == kind]


# ── Pod template navigation ─────────────────────────────────────


def pod_template(obj: RenderedObject) -> dict[str, Any]:
    """The pod template of a workload (Deployment/Job/CronJob); Pod → itself."""
    res = obj.raw
    if obj.kind == "Pod":
        return res
    spec = res.get("spec") or {}
    if obj.kind == "CronJob":
        spec = (spec.get("jobTemplate") or {}).get("spec") or {}
    return spec.get("template") or {}


def pod_spec(obj: RenderedObject) -> dict[str, Any]:
    return pod_template(obj).get("spec") or {}


def pod_metadata(obj: RenderedObject) -> dict[str, Any]:
    return pod_template(obj).get("metadata") or {}


def containers(obj: RenderedObject) -> list[dict[str, Any]]:
    return pod_spec(obj).get("containers") or []

"""
Tests for manifest parsing — multi-doc YAML, List expansion, pod specs.
"""

import textwrap

import pytest

from chartcheck.core.services.k8s_manifests import (
    ManifestError,
    containers,
    expand_lists,
    load_object,
    load_objects,
    objects_of_kind,
    parse_documents,
    pod_metadata,
    pod_spec,
)

_ROLE_LIST = textwrap.dedent("""\
    ---
    # Source: auto-deploy-app/templates/role.yaml
    apiVersion: v1
    kind: List
    items:
    - apiVersion: rbac.authorization.k8s.io/v1
      kind: Role
      metadata:
        name: pod-reader
        labels:
          app: production
      rules:
      - apiGroups:
        - ""
        resources:
        - pods
        verbs:
        - get
    - apiVersion: rbac.authorization.k8s.io/v1
      kind: Role
      metadata:
        name: secret-reader
      rules: []
""")

_CRONJOB = textwrap.dedent("""\
    apiVersion: batch/v1
    kind: CronJob
    metadata:
      name: production-job1
    spec:
      schedule: "*/2 * * * *"
      jobTemplate:
        spec:
          template:
            metadata:
              labels:
                tier: cronjob
            spec:
              nodeSelector:
                disktype: ssd
              containers:
              - name: auto-deploy-app
                image: alpine:latest
""")

_DEPLOYMENT = textwrap.dedent("""\
    apiVersion: apps/v1
    kind: Deployment
    metadata:
      name: production-worker1
      annotations:
        app.gitlab.com/env: prod
    spec:
      template:
        metadata:
          labels:
            tier: worker
        spec:
          containers:
          - name: worker
            image: registry/app:stable
""")


class TestParseDocuments:
    """parse_documents uses safe_load_all and drops empty docs."""

    def test_multi_doc(self):
        docs = parse_documents(f"---\n{_CRONJOB}---\n{_DEPLOYMENT}")
        assert [d["kind"] for d in docs] == ["CronJob", "Deployment"]

    def test_empty_docs_dropped(self):
        assert parse_documents("---\n---\n# just a comment\n") == []

    def test_invalid_yaml(self):
        with pytest.raises(ManifestError, match="Invalid YAML"):
            parse_documents("a: [b\n")

    def test_non_mapping(self):
        with pytest.raises(ManifestError, match="mapping"):
            parse_documents("- a\n- b\n")


class TestExpandLists:
    """Lists are flattened in order; nested lists too."""

    def test_expand(self):
        docs = parse_documents(_ROLE_LIST)
        expanded = expand_lists(docs)
        assert [d["metadata"]["name"] for d in expanded] == ["pod-reader", "secret-reader"]

    def test_nested(self):
        inner = {"kind": "List", "items": [{"kind": "Role"}]}
        assert expand_lists([{"kind": "List", "items": [inner, {"kind": "Pod"}]}]) == [
            {"kind": "Role"},
            {"kind": "Pod"},
        ]

    def test_typed_list_kind(self):
        docs = [{"kind": "RoleList", "items": [{"kind": "Role"}]}]
        assert expand_lists(docs) == [{"kind": "Role"}]

    def test_plain_docs_untouched(self):
        docs = [{"kind": "Deployment"}]
        assert expand_lists(docs) == docs


class TestLoadObjects:
    """load_objects / load_object → RenderedObject."""

    def test_role_list(self):
        objects = load_objects(_ROLE_LIST)
        assert len(objects) == 2
        role = objects[0]
        assert role.kind == "Role"
        assert role.api_version == "rbac.authorization.k8s.io/v1"
        assert role.name == "pod-reader"
        assert role.labels == {"app": "production"}
        assert role.annotations is None
        assert role.raw["rules"][0]["verbs"] == ["get"]

    def test_search(self):
        role = load_objects(_ROLE_LIST)[0]
        assert role.search("rules[0].resources") == ["pods"]
        assert role.search("metadata.labels.app") == "production"
        assert role.search("metadata.missing") is None

    def test_search_quoted_key(self):
        dep = load_object(_DEPLOYMENT)
        assert dep.search('metadata.annotations."app.gitlab.com/env"') == "prod"

    def test_load_object_single(self):
        assert load_object(_CRONJOB).name == "production-job1"

    def test_load_object_requires_one(self):
        with pytest.raises(ManifestError, match="exactly one"):
            load_object(_ROLE_LIST)
        with pytest.raises(ManifestError, match="found 0"):
            load_object("")

    def test_objects_of_kind(self):
        objects = load_objects(f"{_CRONJOB}---\n{_DEPLOYMENT}")
        assert [o.name for o in objects_of_kind(objects, "Deployment")] == ["production-worker1"]


class TestPodNavigation:
    """pod_spec / pod_metadata / containers across workload kinds."""

    def test_cronjob(self):
        job = load_object(_CRONJOB)
        assert pod_spec(job)["nodeSelector"] == {"disktype": "ssd"}
        assert pod_metadata(job)["labels"] == {"tier": "cronjob"}
        assert containers(job)[0]["image"] == "alpine:latest"

    def test_deployment(self):
        dep = load_object(_DEPLOYMENT)
        assert pod_metadata(dep)["labels"] == {"tier": "worker"}
        assert containers(dep)[0]["name"] == "worker"

    def test_missing_parts(self):
        obj = load_object("kind: Deployment\nmetadata:\n  name: x\nspec: null\n")
        assert pod_spec(obj) == {}
        assert pod_metadata(obj) == {}
        assert containers(obj) == []

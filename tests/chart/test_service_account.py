"""
Chart tests for templates/service-account.yaml.
"""

import pytest

from chartcheck.core.services.helm_values import merge_values
from chartcheck.core.services.k8s_manifests import load_object

SERVICE_ACCOUNT = "templates/service-account.yaml"
_NOT_RENDERED = r"Error: could not find template templates/service-account.yaml in chart"


class TestServiceAccountTemplate:
    @pytest.mark.parametrize("values", [
        pytest.param({}, id="not created by default"),
        pytest.param({"serviceAccount.createNew": "false"}, id="not created if createNew is set to false"),
    ])
    def test_not_created(self, render, gitlab_values, namespace, values):
        output = render(
            "production", [SERVICE_ACCOUNT],
            set_values=merge_values(gitlab_values, values),
            namespace=namespace,
            expected_error=_NOT_RENDERED,
        )
        assert output == ""

    @pytest.mark.parametrize("values,annotations,labels", [
        pytest.param({}, None, {}, id="no annotations"),
        pytest.param(
            {"serviceAccount.annotations.key1": "value1", "serviceAccount.annotations.key2": "value2"},
            {"key1": "value1", "key2": "value2"},
            {},
            id="with annotations",
        ),
        pytest.param(
            {"extraLabels.firstLabel": "expected-label"},
            None,
            {"firstLabel": "expected-label"},
            id="with labels",
        ),
    ])
    def test_created(self, render, gitlab_values, namespace, values, annotations, labels):
        output = render(
            "production", [SERVICE_ACCOUNT],
            set_values=merge_values(
                gitlab_values,
                {"serviceAccount.createNew": "true", "serviceAccount.name": "anAccountName"},
                values,
            ),
            namespace=namespace,
        )
        account = load_object(output)
        assert account.kind == "ServiceAccount"
        assert account.name == "anAccountName"
        assert (account.annotations or None) == annotations
        for key, value in labels.items():
            assert (account.labels or {}).get(key) == value

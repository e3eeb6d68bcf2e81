"""Shared fixtures for fedconf tests."""

import copy
from collections.abc import Callable
from typing import Any

import pytest

from fedconf.apis.schema import FederatedTypeConfig, KubeFedConfig

VALID_FEDERATED_TYPE_CONFIG: dict[str, Any] = {
    "apiVersion": "core.kubefed.io/v1beta1",
    "kind": "FederatedTypeConfig",
    "metadata": {"name": "deployments.apps", "namespace": "kube-federation-system"},
    "spec": {
        "targetType": {
            "group": "apps",
            "version": "v1",
            "kind": "Deployment",
            "pluralName": "deployments",
            "scope": "Namespace",
        },
        "federatedType": {
            "group": "types.kubefed.io",
            "version": "v1beta1",
            "kind": "FederatedDeployment",
            "pluralName": "federateddeployments",
            "scope": "Namespace",
        },
        "propagation": "Enabled",
    },
}

VALID_KUBEFED_CONFIG: dict[str, Any] = {
    "apiVersion": "core.kubefed.io/v1beta1",
    "kind": "KubeFedConfig",
    "metadata": {"name": "kubefed", "namespace": "kube-federation-system"},
    "spec": {
        "scope": "Namespace",
        "controllerDuration": {"availableDelay": "20s", "unavailableDelay": "60s"},
        "leaderElect": {
            "leaseDuration": "15s",
            "renewDeadline": "10s",
            "retryPeriod": "5s",
            "resourceLock": "ConfigMaps",
        },
        "featureGates": [
            {"name": "PushReconciler", "configuration": "Enabled"},
            {"name": "SchedulerPreferences", "configuration": "Enabled"},
        ],
        "clusterHealthCheck": {
            "periodSeconds": 10,
            "failureThreshold": 3,
            "successThreshold": 1,
            "timeoutSeconds": 3,
        },
        "syncController": {"adoptResources": "Enabled"},
    },
}


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into a copy of base (None deletes a key)."""
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if value is None:
            merged.pop(key, None)
        elif isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@pytest.fixture
def ftc_data() -> dict[str, Any]:
    """Raw mapping of a valid FederatedTypeConfig."""
    return copy.deepcopy(VALID_FEDERATED_TYPE_CONFIG)


@pytest.fixture
def kubefed_config_data() -> dict[str, Any]:
    """Raw mapping of a valid KubeFedConfig."""
    return copy.deepcopy(VALID_KUBEFED_CONFIG)


@pytest.fixture
def make_ftc() -> Callable[..., FederatedTypeConfig]:
    """Build a FederatedTypeConfig from the valid baseline plus nested overrides."""

    def _make(**overrides: Any) -> FederatedTypeConfig:
        return FederatedTypeConfig.model_validate(_merge(VALID_FEDERATED_TYPE_CONFIG, overrides))

    return _make


@pytest.fixture
def make_kubefed_config() -> Callable[..., KubeFedConfig]:
    """Build a KubeFedConfig from the valid baseline plus nested overrides."""

    def _make(**overrides: Any) -> KubeFedConfig:
        return KubeFedConfig.model_validate(_merge(VALID_KUBEFED_CONFIG, overrides))

    return _make

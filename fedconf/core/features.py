"""
Feature gates known to the federation controllers.

The registry is a closed set: a KubeFedConfig naming any other feature is
rejected. It is exposed as an immutable module constant and passed into the
validators explicitly, so callers (and tests) can swap in a different set
without touching process-wide state.
"""

from dataclasses import dataclass
from enum import Enum


class Feature(str, Enum):
    """Known feature gate names."""

    PUSH_RECONCILER = "PushReconciler"
    SCHEDULER_PREFERENCES = "SchedulerPreferences"
    CROSS_CLUSTER_SERVICE_DISCOVERY = "CrossClusterServiceDiscovery"
    FEDERATED_INGRESS = "FederatedIngress"


class Maturity(str, Enum):
    ALPHA = "ALPHA"
    BETA = "BETA"
    GA = "GA"


@dataclass(frozen=True)
class FeatureSpec:
    """Default state and maturity of a feature gate."""

    default: bool
    maturity: Maturity


DEFAULT_FEATURE_GATES: dict[Feature, FeatureSpec] = {
    Feature.PUSH_RECONCILER: FeatureSpec(default=True, maturity=Maturity.BETA),
    Feature.SCHEDULER_PREFERENCES: FeatureSpec(default=True, maturity=Maturity.ALPHA),
    Feature.CROSS_CLUSTER_SERVICE_DISCOVERY: FeatureSpec(default=True, maturity=Maturity.ALPHA),
    Feature.FEDERATED_INGRESS: FeatureSpec(default=True, maturity=Maturity.ALPHA),
}

KNOWN_FEATURES: frozenset[str] = frozenset(feature.value for feature in Feature)


def known_feature_names(known: frozenset[str] | None = None) -> list[str]:
    """Return feature names in a stable order for error messages.

    Declared features keep their declaration order; extra names supplied by a
    caller follow in sorted order.
    """
    names = KNOWN_FEATURES if known is None else known
    declared = [feature.value for feature in Feature if feature.value in names]
    extra = sorted(name for name in names if name not in KNOWN_FEATURES)
    return declared + extra

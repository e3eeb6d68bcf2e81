"""Federation configuration schema using Pydantic v2.

This module defines the in-memory shape of the two configuration objects that
``fedconf`` validates:
- FederatedTypeConfig: how a target resource kind is federated (target type,
  federated wrapper type, optional status type, propagation toggles)
- KubeFedConfig: runtime behavior of the federation controllers (leader
  election timing, feature gates, cluster health checks, adoption policy)

Enumerated fields are declared as plain strings: an unknown value has
to survive deserialization so the validators can report it with the accepted
set. The ``str`` enums below are the accepted sets.

Models are frozen. YAML/JSON keys are camelCase (``pluralName``,
``leaderElect``); Python attributes are snake_case.

Example:
    from fedconf.apis.schema import FederatedTypeConfig

    ftc = FederatedTypeConfig.model_validate(
        {
            "metadata": {"name": "deployments.apps"},
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
    )
    print(ftc.spec.target_type.plural_name)
"""

from datetime import timedelta
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fedconf.utils.duration import parse_duration

FEDERATED_TYPE_CONFIG_KIND = "FederatedTypeConfig"
KUBEFED_CONFIG_KIND = "KubeFedConfig"
DEFAULT_API_VERSION = "core.kubefed.io/v1beta1"

Duration = Annotated[timedelta, BeforeValidator(parse_duration)]


# ============================================================================
# Enumerated domains
# ============================================================================


class ResourceScope(str, Enum):
    """Whether a resource type lives at cluster or namespace scope."""

    CLUSTER = "Cluster"
    NAMESPACE = "Namespace"


class PropagationMode(str, Enum):
    ENABLED = "Enabled"
    DISABLED = "Disabled"


class StatusCollectionMode(str, Enum):
    ENABLED = "Enabled"
    DISABLED = "Disabled"


class ControllerStatus(str, Enum):
    """Run state reported for the propagation and status controllers."""

    RUNNING = "Running"
    NOT_RUNNING = "NotRunning"


class ResourceLockType(str, Enum):
    """Object kind used as the leader-election lock."""

    CONFIG_MAPS = "ConfigMaps"
    ENDPOINTS = "Endpoints"


class ConfigurationMode(str, Enum):
    """On/off setting of a single feature gate."""

    ENABLED = "Enabled"
    DISABLED = "Disabled"


class AdoptResourcesMode(str, Enum):
    ENABLED = "Enabled"
    DISABLED = "Disabled"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Return the accepted string values of an enum, in declaration order."""
    return [member.value for member in enum_cls]


# ============================================================================
# Shared pieces
# ============================================================================


class SchemaModel(BaseModel):
    """Base class for configuration models (frozen, camelCase aliases)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )


class ObjectMeta(SchemaModel):
    """Subset of Kubernetes object metadata used by the validators.

    Attributes:
        name: Object name
        namespace: Optional namespace
        labels: Optional labels
        annotations: Optional annotations
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field("", description="Object name")
    namespace: str | None = Field(None, description="Object namespace")
    labels: dict[str, str] = Field(default_factory=dict, description="Labels")
    annotations: dict[str, str] = Field(default_factory=dict, description="Annotations")


class APIResource(SchemaModel):
    """Descriptor of an API resource type.

    Attributes:
        group: API group (empty for the core group)
        version: API version (e.g., "v1", "v1beta1")
        kind: Kind name (e.g., "Deployment")
        plural_name: Lower-case plural name (e.g., "deployments")
        scope: "Cluster" or "Namespace"
    """

    group: str = Field("", description="API group; empty for core types")
    version: str = Field("", description="API version")
    kind: str = Field("", description="Kind name")
    plural_name: str = Field("", description="Plural resource name")
    scope: str = Field("", description="Resource scope (Cluster, Namespace)")


# ============================================================================
# FederatedTypeConfig
# ============================================================================


class FederatedTypeConfigSpec(SchemaModel):
    """Desired federation behavior for one target type.

    Attributes:
        target_type: The resource type being federated
        federated_type: The wrapper type that carries the federated object
        status_type: Optional type collecting per-cluster status
        propagation: "Enabled" or "Disabled"
        status_collection: Optional "Enabled" or "Disabled"
    """

    target_type: APIResource = Field(default_factory=APIResource, description="Target type")
    federated_type: APIResource = Field(default_factory=APIResource, description="Federated type")
    status_type: APIResource | None = Field(None, description="Status type")
    propagation: str = Field("", description="Propagation mode (Enabled, Disabled)")
    status_collection: str | None = Field(
        None, description="Status collection mode (Enabled, Disabled)"
    )


class FederatedTypeConfigStatus(SchemaModel):
    """Observed state of a FederatedTypeConfig.

    Attributes:
        observed_generation: Generation last acted upon by the controller
        propagation_controller: "Running" or "NotRunning"
        status_controller: Optional "Running" or "NotRunning"
    """

    observed_generation: int = Field(0, description="Last observed generation")
    propagation_controller: str = Field("", description="Propagation controller state")
    status_controller: str | None = Field(None, description="Status controller state")


class FederatedTypeConfig(SchemaModel):
    """Complete FederatedTypeConfig object.

    The object's name must be derived from the target type: the plural name,
    suffixed with ``.<group>`` when the target is not in the core group.
    """

    api_version: str = Field(DEFAULT_API_VERSION, description="API version of the object")
    kind: Literal["FederatedTypeConfig"] = FEDERATED_TYPE_CONFIG_KIND
    metadata: ObjectMeta = Field(default_factory=ObjectMeta, description="Object metadata")
    spec: FederatedTypeConfigSpec = Field(
        default_factory=FederatedTypeConfigSpec, description="Desired state"
    )
    status: FederatedTypeConfigStatus | None = Field(None, description="Observed state")

    @property
    def name(self) -> str:
        return self.metadata.name

    def get_target_type(self) -> APIResource:
        return self.spec.target_type


# ============================================================================
# KubeFedConfig
# ============================================================================


class DurationConfig(SchemaModel):
    """Delays applied when cluster availability changes."""

    available_delay: Duration = Field(timedelta(0), description="Delay after cluster available")
    unavailable_delay: Duration = Field(
        timedelta(0), description="Delay after cluster unavailable"
    )


class LeaderElectConfig(SchemaModel):
    """Leader election timing.

    Attributes:
        lease_duration: How long non-leaders wait before trying to take over
        renew_deadline: How long the leader keeps retrying a renewal
        retry_period: Wait between acquisition or renewal attempts
        resource_lock: "ConfigMaps" or "Endpoints"
    """

    lease_duration: Duration = Field(timedelta(0), description="Lease duration")
    renew_deadline: Duration = Field(timedelta(0), description="Renew deadline")
    retry_period: Duration = Field(timedelta(0), description="Retry period")
    resource_lock: str = Field("", description="Lock object kind (ConfigMaps, Endpoints)")


class FeatureGatesConfig(SchemaModel):
    """One entry of the ordered feature-gate list."""

    name: str = Field("", description="Feature name")
    configuration: str = Field("", description="Enabled or Disabled")


class ClusterHealthCheckConfig(SchemaModel):
    """Thresholds for probing member clusters."""

    period_seconds: int = Field(0, description="Seconds between probes")
    failure_threshold: int = Field(0, description="Failures before marking unhealthy")
    success_threshold: int = Field(0, description="Successes before marking healthy")
    timeout_seconds: int = Field(0, description="Probe timeout in seconds")


class SyncControllerConfig(SchemaModel):
    adopt_resources: str = Field("", description="Adopt pre-existing resources (Enabled, Disabled)")


class KubeFedConfigSpec(SchemaModel):
    """Runtime configuration of the federation control plane."""

    scope: str = Field("", description="Control plane scope (Cluster, Namespace)")
    controller_duration: DurationConfig = Field(default_factory=DurationConfig)
    leader_elect: LeaderElectConfig = Field(default_factory=LeaderElectConfig)
    feature_gates: list[FeatureGatesConfig] = Field(default_factory=list)
    cluster_health_check: ClusterHealthCheckConfig = Field(
        default_factory=ClusterHealthCheckConfig
    )
    sync_controller: SyncControllerConfig = Field(default_factory=SyncControllerConfig)


class KubeFedConfig(SchemaModel):
    """Complete KubeFedConfig object."""

    api_version: str = Field(DEFAULT_API_VERSION, description="API version of the object")
    kind: Literal["KubeFedConfig"] = KUBEFED_CONFIG_KIND
    metadata: ObjectMeta = Field(default_factory=ObjectMeta, description="Object metadata")
    spec: KubeFedConfigSpec = Field(default_factory=KubeFedConfigSpec, description="Spec")

    @property
    def name(self) -> str:
        return self.metadata.name


ConfigDocument = FederatedTypeConfig | KubeFedConfig

DOCUMENT_TYPES: dict[str, type[SchemaModel]] = {
    FEDERATED_TYPE_CONFIG_KIND: FederatedTypeConfig,
    KUBEFED_CONFIG_KIND: KubeFedConfig,
}


def document_kind(data: dict[str, Any]) -> str | None:
    """Return the ``kind`` of a raw document mapping, if it names one."""
    kind = data.get("kind")
    return kind if isinstance(kind, str) else None

"""Validators for FederatedTypeConfig and KubeFedConfig objects.

Every validator is a pure function of its arguments: it reads a (frozen)
model, never mutates it, and returns an ordered list of
:class:`~fedconf.validation.field.FieldError`. Checks are independent, so a
single call reports every problem it can find.

Example:
    from fedconf.validation.validation import (
        validate_federated_type_config,
        validate_kubefed_config,
    )

    errs = validate_federated_type_config(ftc)
    errs += validate_kubefed_config(kubefed_config)
    for err in errs:
        print(err)
"""

import logging
from collections.abc import Collection, Iterable
from datetime import timedelta

from fedconf.apis.schema import (
    AdoptResourcesMode,
    APIResource,
    ConfigurationMode,
    ControllerStatus,
    FederatedTypeConfig,
    FederatedTypeConfigSpec,
    FederatedTypeConfigStatus,
    FeatureGatesConfig,
    KubeFedConfig,
    PropagationMode,
    ResourceLockType,
    ResourceScope,
    StatusCollectionMode,
    enum_values,
)
from fedconf.core.features import KNOWN_FEATURES, known_feature_names
from fedconf.core.leaderelection import DEFAULT_JITTER_FACTOR
from fedconf.core.typeconfig import NameFunc, group_qualified_name
from fedconf.validation.field import (
    ErrorList,
    FieldPath,
    duplicate,
    invalid,
    not_supported,
    required,
)
from fedconf.validation.strings import is_dns1035_label, is_dns1123_subdomain

logger = logging.getLogger(__name__)

FEDERATED_TYPE_CONFIG_NAME_ERROR_MSG = "name must be 'TARGET_PLURAL_NAME(.TARGET_GROUP_NAME)'"
DOMAIN_WITH_AT_LEAST_ONE_DOT = "should be a domain with at least one dot"
GREATER_THAN_ZERO_MSG = "should be greater than 0"
NON_NEGATIVE_MSG = "must be greater than or equal to 0"

_SCOPES = enum_values(ResourceScope)
_CONTROLLER_STATES = enum_values(ControllerStatus)


# ============================================================================
# FederatedTypeConfig
# ============================================================================


def validate_federated_type_config(
    obj: FederatedTypeConfig,
    status_subresource: bool = False,
    name_func: NameFunc = group_qualified_name,
) -> ErrorList:
    """Validate a FederatedTypeConfig.

    The main object and its status sub-resource are validated in separate
    passes; ``status_subresource`` selects which one.

    Args:
        obj: Object to validate
        status_subresource: Validate only ``status`` when True, else name and spec
        name_func: Derives the expected object name from the target type

    Returns:
        Ordered list of violations (empty if valid)
    """
    if status_subresource:
        status = obj.status if obj.status is not None else FederatedTypeConfigStatus()
        return validate_federated_type_config_status(status, FieldPath.root("status"))

    errs = validate_federated_type_config_name(obj, name_func=name_func)
    if errs:
        logger.debug("FederatedTypeConfig %r does not follow the naming convention", obj.name)
        return errs
    return validate_federated_type_config_spec(obj.spec, FieldPath.root("spec"))


def validate_federated_type_config_name(
    obj: FederatedTypeConfig, name_func: NameFunc = group_qualified_name
) -> ErrorList:
    expected_name = name_func(obj.get_target_type())
    if expected_name != obj.name:
        return [invalid(FieldPath.root("name"), obj.name, FEDERATED_TYPE_CONFIG_NAME_ERROR_MSG)]
    return []


def validate_federated_type_config_spec(
    spec: FederatedTypeConfigSpec, fld_path: FieldPath
) -> ErrorList:
    errs = validate_api_resource(spec.target_type, fld_path.child("targetType"))
    errs.extend(
        validate_enum_strings(
            fld_path.child("propagation"), spec.propagation, enum_values(PropagationMode)
        )
    )
    errs.extend(validate_federated_api_resource(spec.federated_type, fld_path.child("federatedType")))
    if spec.status_type is not None:
        errs.extend(validate_status_api_resource(spec.status_type, fld_path.child("statusType")))

    if spec.status_collection is not None:
        errs.extend(
            validate_enum_strings(
                fld_path.child("statusCollection"),
                spec.status_collection,
                enum_values(StatusCollectionMode),
            )
        )

    return errs


def validate_federated_api_resource(fed_type: APIResource, fld_path: FieldPath) -> ErrorList:
    """Validate a federated type descriptor.

    Stricter than :func:`validate_api_resource`: the group is mandatory and must
    have at least two labels, so a federated type can never collide with a
    core or single-label built-in group.
    """
    errs: ErrorList = []

    if not fed_type.group:
        errs.append(required(fld_path.child("group")))
    elif len(fed_type.group.split(".")) < 2:
        errs.append(invalid(fld_path.child("group"), fed_type.group, DOMAIN_WITH_AT_LEAST_ONE_DOT))

    errs.extend(validate_api_resource(fed_type, fld_path))
    return errs


def validate_status_api_resource(status_type: APIResource, fld_path: FieldPath) -> ErrorList:
    return validate_federated_api_resource(status_type, fld_path)


def validate_api_resource(obj: APIResource, fld_path: FieldPath) -> ErrorList:
    """Validate group, version, kind, plural name and scope of a type descriptor.

    An empty group is accepted (it denotes the core API group). Kind is
    checked case-insensitively, so ``Deployment`` and ``deployment`` are both
    valid.
    """
    errs: ErrorList = []

    if obj.group:
        problems = is_dns1123_subdomain(obj.group)
        if problems:
            errs.append(invalid(fld_path.child("group"), obj.group, ",".join(problems)))

    errs.extend(_validate_dns1035_field(fld_path.child("version"), obj.version))
    errs.extend(_validate_dns1035_field(fld_path.child("kind"), obj.kind, checked=obj.kind.lower()))
    errs.extend(_validate_dns1035_field(fld_path.child("pluralName"), obj.plural_name))

    errs.extend(validate_enum_strings(fld_path.child("scope"), obj.scope, _SCOPES))

    return errs


def validate_federated_type_config_status(
    status: FederatedTypeConfigStatus, fld_path: FieldPath
) -> ErrorList:
    errs: ErrorList = []

    errs.extend(
        validate_nonnegative_field(status.observed_generation, fld_path.child("observedGeneration"))
    )
    errs.extend(
        validate_enum_strings(
            fld_path.child("propagationController"),
            status.propagation_controller,
            _CONTROLLER_STATES,
        )
    )

    if status.status_controller is not None:
        errs.extend(
            validate_enum_strings(
                fld_path.child("statusController"), status.status_controller, _CONTROLLER_STATES
            )
        )
    return errs


# ============================================================================
# KubeFedConfig
# ============================================================================


def validate_kubefed_config(
    kubefed_config: KubeFedConfig,
    jitter_factor: float = DEFAULT_JITTER_FACTOR,
    known_features: Collection[str] = KNOWN_FEATURES,
) -> ErrorList:
    """Validate a KubeFedConfig.

    Args:
        kubefed_config: Object to validate
        jitter_factor: Multiplier applied to ``retryPeriod`` when checking that
            ``renewDeadline`` leaves room for a jittered retry
        known_features: Closed set of feature gate names to accept

    Returns:
        Ordered list of violations (empty if valid)
    """
    logger.debug("Validating KubeFedConfig %r", kubefed_config.name)

    errs: ErrorList = []

    spec = kubefed_config.spec
    spec_path = FieldPath.root("spec")
    errs.extend(validate_enum_strings(spec_path.child("scope"), spec.scope, _SCOPES))

    duration = spec.controller_duration
    duration_path = spec_path.child("controllerDuration")
    errs.extend(validate_greater_than_0(duration_path.child("availableDelay"), duration.available_delay))
    errs.extend(
        validate_greater_than_0(duration_path.child("unavailableDelay"), duration.unavailable_delay)
    )

    elect = spec.leader_elect
    elect_path = spec_path.child("leaderElect")
    errs.extend(validate_greater_than_0(elect_path.child("leaseDuration"), elect.lease_duration))
    errs.extend(validate_greater_than_0(elect_path.child("renewDeadline"), elect.renew_deadline))
    errs.extend(validate_greater_than_0(elect_path.child("retryPeriod"), elect.retry_period))
    if elect.lease_duration <= elect.renew_deadline:
        errs.append(
            invalid(
                elect_path.child("leaseDuration"),
                elect.lease_duration,
                "leaseDuration must be greater than renewDeadline",
            )
        )
    if elect.renew_deadline.total_seconds() <= elect.retry_period.total_seconds() * jitter_factor:
        errs.append(
            invalid(
                elect_path.child("renewDeadline"),
                elect.renew_deadline,
                "renewDeadline must be greater than retryPeriod*JitterFactor",
            )
        )
    errs.extend(
        validate_enum_strings(
            elect_path.child("resourceLock"), elect.resource_lock, enum_values(ResourceLockType)
        )
    )

    errs.extend(
        _validate_feature_gates(spec.feature_gates, spec_path.child("featureGates"), known_features)
    )

    health = spec.cluster_health_check
    health_path = spec_path.child("clusterHealthCheck")
    errs.extend(validate_greater_than_0(health_path.child("periodSeconds"), health.period_seconds))
    errs.extend(
        validate_greater_than_0(health_path.child("failureThreshold"), health.failure_threshold)
    )
    errs.extend(
        validate_greater_than_0(health_path.child("successThreshold"), health.success_threshold)
    )
    errs.extend(validate_greater_than_0(health_path.child("timeoutSeconds"), health.timeout_seconds))

    sync = spec.sync_controller
    sync_path = spec_path.child("syncController")
    errs.extend(
        validate_enum_strings(
            sync_path.child("adoptResources"), sync.adopt_resources, enum_values(AdoptResourcesMode)
        )
    )

    if errs:
        logger.debug("KubeFedConfig %r has %d violation(s)", kubefed_config.name, len(errs))
    return errs


def _validate_feature_gates(
    gates: Iterable[FeatureGatesConfig], gates_path: FieldPath, known_features: Collection[str]
) -> ErrorList:
    errs: ErrorList = []
    accepted_names = known_feature_names(frozenset(known_features))
    existing_names: set[str] = set()

    for i, gate in enumerate(gates):
        gate_path = gates_path.index(i)
        if gate.name in existing_names:
            errs.append(duplicate(gate_path.child("name"), gate.name))
            continue
        existing_names.add(gate.name)

        errs.extend(validate_enum_strings(gate_path.child("name"), gate.name, accepted_names))
        errs.extend(
            validate_enum_strings(
                gate_path.child("configuration"),
                gate.configuration,
                enum_values(ConfigurationMode),
            )
        )

    return errs


# ============================================================================
# Shared helpers
# ============================================================================


def validate_enum_strings(fld_path: FieldPath, value: str, accepted: Collection[str]) -> ErrorList:
    """Check that value is one of the accepted strings.

    An empty value is reported as Required; any other value outside the set is
    reported as NotSupported together with the full accepted list.
    """
    if value == "":
        return [required(fld_path)]
    if value in accepted:
        return []
    return [not_supported(fld_path, value, list(accepted))]


def validate_greater_than_0(fld_path: FieldPath, value: int | timedelta) -> ErrorList:
    zero = timedelta(0) if isinstance(value, timedelta) else 0
    if value <= zero:
        return [invalid(fld_path, value, GREATER_THAN_ZERO_MSG)]
    return []


def validate_nonnegative_field(value: int, fld_path: FieldPath) -> ErrorList:
    if value < 0:
        return [invalid(fld_path, value, NON_NEGATIVE_MSG)]
    return []


def _validate_dns1035_field(fld_path: FieldPath, value: str, checked: str | None = None) -> ErrorList:
    if not value:
        return [required(fld_path)]
    problems = is_dns1035_label(value if checked is None else checked)
    if problems:
        return [invalid(fld_path, value, ",".join(problems))]
    return []

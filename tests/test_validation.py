"""Tests for FederatedTypeConfig and KubeFedConfig validators."""

from collections.abc import Callable
from datetime import timedelta

import pytest

from fedconf.apis.schema import APIResource, FederatedTypeConfig, KubeFedConfig
from fedconf.core.features import known_feature_names
from fedconf.validation import (
    DOMAIN_WITH_AT_LEAST_ONE_DOT,
    FEDERATED_TYPE_CONFIG_NAME_ERROR_MSG,
    ErrorType,
    FieldPath,
    validate_api_resource,
    validate_enum_strings,
    validate_federated_api_resource,
    validate_federated_type_config,
    validate_kubefed_config,
)
from fedconf.validation.validation import (
    GREATER_THAN_ZERO_MSG,
    validate_greater_than_0,
    validate_nonnegative_field,
)

MakeFTC = Callable[..., FederatedTypeConfig]
MakeKubeFedConfig = Callable[..., KubeFedConfig]


def fields(errs: list) -> list[str]:
    return [err.field for err in errs]


class TestValidateEnumStrings:
    """Test the closed-set string check shared by every enumerated field."""

    def test_match(self) -> None:
        assert validate_enum_strings(FieldPath.root("f"), "b", ["a", "b"]) == []

    def test_match_is_order_insensitive(self) -> None:
        assert validate_enum_strings(FieldPath.root("f"), "b", {"b", "a"}) == []

    def test_empty_is_required(self) -> None:
        errs = validate_enum_strings(FieldPath.root("f"), "", ["a", "b"])
        assert len(errs) == 1
        assert errs[0].type is ErrorType.REQUIRED

    def test_unknown_is_not_supported(self) -> None:
        errs = validate_enum_strings(FieldPath.root("f"), "c", ["a", "b"])
        assert len(errs) == 1
        assert errs[0].type is ErrorType.NOT_SUPPORTED
        assert errs[0].bad_value == "c"
        assert errs[0].supported == ("a", "b")

    def test_match_is_case_sensitive(self) -> None:
        errs = validate_enum_strings(FieldPath.root("f"), "enabled", ["Enabled", "Disabled"])
        assert [err.type for err in errs] == [ErrorType.NOT_SUPPORTED]


class TestNumericChecks:
    def test_greater_than_0(self) -> None:
        path = FieldPath.root("n")
        assert validate_greater_than_0(path, 1) == []
        assert validate_greater_than_0(path, timedelta(milliseconds=1)) == []
        assert len(validate_greater_than_0(path, 0)) == 1
        assert len(validate_greater_than_0(path, -3)) == 1
        assert len(validate_greater_than_0(path, timedelta(0))) == 1

    def test_greater_than_0_message(self) -> None:
        errs = validate_greater_than_0(FieldPath.root("n"), timedelta(seconds=-5))
        assert str(errs[0]) == f'n: Invalid value: "-5s": {GREATER_THAN_ZERO_MSG}'

    def test_nonnegative(self) -> None:
        path = FieldPath.root("n")
        assert validate_nonnegative_field(0, path) == []
        assert validate_nonnegative_field(7, path) == []
        assert [err.type for err in validate_nonnegative_field(-1, path)] == [ErrorType.INVALID]


class TestValidateAPIResource:
    """Test the common type descriptor check."""

    def test_valid(self) -> None:
        resource = APIResource(
            group="apps", version="v1", kind="Deployment", plural_name="deployments", scope="Namespace"
        )
        assert validate_api_resource(resource, FieldPath.root("t")) == []

    def test_core_group_may_be_empty(self) -> None:
        resource = APIResource(
            group="", version="v1", kind="Pod", plural_name="pods", scope="Namespace"
        )
        assert validate_api_resource(resource, FieldPath.root("t")) == []

    def test_kind_is_checked_case_insensitively(self) -> None:
        resource = APIResource(
            version="v1", kind="ClusterRole", plural_name="clusterroles", scope="Cluster"
        )
        assert validate_api_resource(resource, FieldPath.root("t")) == []

    def test_invalid_kind_keeps_original_value(self) -> None:
        resource = APIResource(version="v1", kind="1Pod", plural_name="pods", scope="Namespace")
        errs = validate_api_resource(resource, FieldPath.root("t"))

        assert fields(errs) == ["t.kind"]
        assert errs[0].bad_value == "1Pod"

    def test_all_missing_fields_reported(self) -> None:
        errs = validate_api_resource(APIResource(), FieldPath.root("t"))

        assert fields(errs) == ["t.version", "t.kind", "t.pluralName", "t.scope"]
        assert all(err.type is ErrorType.REQUIRED for err in errs)

    def test_bad_group(self) -> None:
        resource = APIResource(
            group="Apps_", version="v1", kind="Pod", plural_name="pods", scope="Namespace"
        )
        errs = validate_api_resource(resource, FieldPath.root("t"))

        assert fields(errs) == ["t.group"]
        assert "RFC 1123 subdomain" in errs[0].detail

    def test_bad_plural_name_and_version(self) -> None:
        resource = APIResource(
            version="V1", kind="Pod", plural_name="Pods", scope="Namespace"
        )
        errs = validate_api_resource(resource, FieldPath.root("t"))

        assert fields(errs) == ["t.version", "t.pluralName"]
        assert all(err.type is ErrorType.INVALID for err in errs)

    def test_unknown_scope(self) -> None:
        resource = APIResource(version="v1", kind="Pod", plural_name="pods", scope="Namespaced")
        errs = validate_api_resource(resource, FieldPath.root("t"))

        assert fields(errs) == ["t.scope"]
        assert errs[0].type is ErrorType.NOT_SUPPORTED
        assert errs[0].supported == ("Cluster", "Namespace")


class TestValidateFederatedAPIResource:
    """Test the stricter check applied to federated and status types."""

    def _resource(self, group: str) -> APIResource:
        return APIResource(
            group=group,
            version="v1beta1",
            kind="FederatedDeployment",
            plural_name="federateddeployments",
            scope="Namespace",
        )

    def test_valid(self) -> None:
        errs = validate_federated_api_resource(self._resource("types.kubefed.io"), FieldPath.root("f"))
        assert errs == []

    def test_group_required(self) -> None:
        errs = validate_federated_api_resource(self._resource(""), FieldPath.root("f"))

        assert fields(errs) == ["f.group"]
        assert errs[0].type is ErrorType.REQUIRED

    def test_single_label_group(self) -> None:
        errs = validate_federated_api_resource(self._resource("example"), FieldPath.root("f"))

        assert fields(errs) == ["f.group"]
        assert errs[0].type is ErrorType.INVALID
        assert errs[0].detail == DOMAIN_WITH_AT_LEAST_ONE_DOT

    def test_dotted_but_malformed_group(self) -> None:
        errs = validate_federated_api_resource(self._resource("Types.Kubefed.io"), FieldPath.root("f"))

        assert fields(errs) == ["f.group"]
        assert "RFC 1123 subdomain" in errs[0].detail


class TestValidateFederatedTypeConfig:
    """Test whole-object FederatedTypeConfig validation."""

    def test_valid(self, make_ftc: MakeFTC) -> None:
        assert validate_federated_type_config(make_ftc()) == []

    def test_core_type_named_by_plural_name(self, make_ftc: MakeFTC) -> None:
        ftc = make_ftc(
            metadata={"name": "pods"},
            spec={
                "targetType": {
                    "group": "",
                    "version": "v1",
                    "kind": "Pod",
                    "pluralName": "pods",
                    "scope": "Namespace",
                }
            },
        )
        assert validate_federated_type_config(ftc) == []

    def test_name_mismatch(self, make_ftc: MakeFTC) -> None:
        errs = validate_federated_type_config(make_ftc(metadata={"name": "deployments"}))

        assert len(errs) == 1
        assert errs[0].field == "name"
        assert errs[0].type is ErrorType.INVALID
        assert errs[0].bad_value == "deployments"
        assert errs[0].detail == FEDERATED_TYPE_CONFIG_NAME_ERROR_MSG

    def test_name_mismatch_skips_spec_checks(self, make_ftc: MakeFTC) -> None:
        ftc = make_ftc(metadata={"name": "wrong"}, spec={"propagation": "", "federatedType": {"group": ""}})
        assert fields(validate_federated_type_config(ftc)) == ["name"]

    def test_custom_name_func(self, make_ftc: MakeFTC) -> None:
        ftc = make_ftc(metadata={"name": "deployments"})
        errs = validate_federated_type_config(ftc, name_func=lambda resource: resource.plural_name)
        assert errs == []

    def test_single_label_federated_group(self, make_ftc: MakeFTC) -> None:
        ftc = make_ftc(spec={"federatedType": {"group": "example"}})
        errs = validate_federated_type_config(ftc)

        assert len(errs) == 1
        assert errs[0].field == "spec.federatedType.group"
        assert errs[0].type is ErrorType.INVALID
        assert "at least one dot" in errs[0].detail

    def test_propagation(self, make_ftc: MakeFTC) -> None:
        errs = validate_federated_type_config(make_ftc(spec={"propagation": ""}))
        assert [(err.field, err.type) for err in errs] == [("spec.propagation", ErrorType.REQUIRED)]

        errs = validate_federated_type_config(make_ftc(spec={"propagation": "Sometimes"}))
        assert [(err.field, err.type) for err in errs] == [
            ("spec.propagation", ErrorType.NOT_SUPPORTED)
        ]

    def test_status_type_is_optional(self, make_ftc: MakeFTC) -> None:
        ftc = make_ftc(
            spec={
                "statusType": {
                    "group": "types.kubefed.io",
                    "version": "v1beta1",
                    "kind": "FederatedServiceStatus",
                    "pluralName": "federatedservicestatuses",
                    "scope": "Namespace",
                },
                "statusCollection": "Enabled",
            }
        )
        assert validate_federated_type_config(ftc) == []

    def test_status_type_group_required(self, make_ftc: MakeFTC) -> None:
        ftc = make_ftc(
            spec={
                "statusType": {
                    "version": "v1beta1",
                    "kind": "FederatedServiceStatus",
                    "pluralName": "federatedservicestatuses",
                    "scope": "Namespace",
                }
            }
        )
        errs = validate_federated_type_config(ftc)
        assert [(err.field, err.type) for err in errs] == [
            ("spec.statusType.group", ErrorType.REQUIRED)
        ]

    def test_status_type_single_label_group(self, make_ftc: MakeFTC) -> None:
        ftc = make_ftc(
            spec={
                "statusType": {
                    "group": "example",
                    "version": "v1beta1",
                    "kind": "FederatedServiceStatus",
                    "pluralName": "federatedservicestatuses",
                    "scope": "Namespace",
                }
            }
        )
        errs = validate_federated_type_config(ftc)

        assert [(err.field, err.type) for err in errs] == [
            ("spec.statusType.group", ErrorType.INVALID)
        ]
        assert errs[0].detail == DOMAIN_WITH_AT_LEAST_ONE_DOT

    def test_status_collection(self, make_ftc: MakeFTC) -> None:
        errs = validate_federated_type_config(make_ftc(spec={"statusCollection": "Maybe"}))
        assert [(err.field, err.type) for err in errs] == [
            ("spec.statusCollection", ErrorType.NOT_SUPPORTED)
        ]

    def test_errors_accumulate_in_order(self, make_ftc: MakeFTC) -> None:
        ftc = make_ftc(
            spec={
                "targetType": {"version": ""},
                "propagation": "",
                "federatedType": {"group": "example", "scope": ""},
                "statusCollection": "",
            }
        )
        errs = validate_federated_type_config(ftc)

        assert fields(errs) == [
            "spec.targetType.version",
            "spec.propagation",
            "spec.federatedType.group",
            "spec.federatedType.scope",
            "spec.statusCollection",
        ]

    def test_does_not_mutate_input(self, make_ftc: MakeFTC) -> None:
        ftc = make_ftc(spec={"propagation": "Sometimes"})
        before = ftc.model_dump()

        first = validate_federated_type_config(ftc)
        second = validate_federated_type_config(ftc)

        assert first == second
        assert ftc.model_dump() == before


class TestValidateFederatedTypeConfigStatus:
    """Test validation of the status sub-resource."""

    def test_valid_status(self, make_ftc: MakeFTC) -> None:
        ftc = make_ftc(
            status={
                "observedGeneration": 3,
                "propagationController": "Running",
                "statusController": "NotRunning",
            }
        )
        assert validate_federated_type_config(ftc, status_subresource=True) == []

    def test_status_mode_ignores_name_and_spec(self, make_ftc: MakeFTC) -> None:
        ftc = make_ftc(
            metadata={"name": "wrong"},
            spec={"propagation": ""},
            status={"propagationController": "Running"},
        )
        assert validate_federated_type_config(ftc, status_subresource=True) == []

    def test_missing_status_requires_propagation_controller(self, make_ftc: MakeFTC) -> None:
        errs = validate_federated_type_config(make_ftc(), status_subresource=True)
        assert [(err.field, err.type) for err in errs] == [
            ("status.propagationController", ErrorType.REQUIRED)
        ]

    def test_bad_status_values(self, make_ftc: MakeFTC) -> None:
        ftc = make_ftc(
            status={
                "observedGeneration": -1,
                "propagationController": "Stopped",
                "statusController": "Maybe",
            }
        )
        errs = validate_federated_type_config(ftc, status_subresource=True)

        assert [(err.field, err.type) for err in errs] == [
            ("status.observedGeneration", ErrorType.INVALID),
            ("status.propagationController", ErrorType.NOT_SUPPORTED),
            ("status.statusController", ErrorType.NOT_SUPPORTED),
        ]

    def test_main_mode_ignores_status(self, make_ftc: MakeFTC) -> None:
        ftc = make_ftc(status={"observedGeneration": -1, "propagationController": ""})
        assert validate_federated_type_config(ftc) == []


class TestValidateKubeFedConfig:
    """Test KubeFedConfig validation."""

    def test_valid(self, make_kubefed_config: MakeKubeFedConfig) -> None:
        assert validate_kubefed_config(make_kubefed_config()) == []

    def test_scope(self, make_kubefed_config: MakeKubeFedConfig) -> None:
        errs = validate_kubefed_config(make_kubefed_config(spec={"scope": ""}))
        assert [(err.field, err.type) for err in errs] == [("spec.scope", ErrorType.REQUIRED)]

        errs = validate_kubefed_config(make_kubefed_config(spec={"scope": "Global"}))
        assert [(err.field, err.type) for err in errs] == [("spec.scope", ErrorType.NOT_SUPPORTED)]

    @pytest.mark.parametrize("delay", ["0s", "-5s"])
    def test_controller_duration_must_be_positive(
        self, make_kubefed_config: MakeKubeFedConfig, delay: str
    ) -> None:
        cfg = make_kubefed_config(spec={"controllerDuration": {"unavailableDelay": delay}})
        errs = validate_kubefed_config(cfg)

        assert fields(errs) == ["spec.controllerDuration.unavailableDelay"]
        assert errs[0].detail == GREATER_THAN_ZERO_MSG

    def test_lease_not_longer_than_renew_deadline(
        self, make_kubefed_config: MakeKubeFedConfig
    ) -> None:
        cfg = make_kubefed_config(
            spec={
                "leaderElect": {"leaseDuration": "10s", "renewDeadline": "10s", "retryPeriod": "2s"}
            }
        )
        errs = validate_kubefed_config(cfg)

        assert len(errs) == 1
        assert errs[0].field == "spec.leaderElect.leaseDuration"
        assert errs[0].type is ErrorType.INVALID
        assert errs[0].detail == "leaseDuration must be greater than renewDeadline"

    def test_renew_deadline_within_jittered_retry(
        self, make_kubefed_config: MakeKubeFedConfig
    ) -> None:
        cfg = make_kubefed_config(
            spec={
                "leaderElect": {"leaseDuration": "15s", "renewDeadline": "10s", "retryPeriod": "9s"}
            }
        )
        errs = validate_kubefed_config(cfg)

        assert fields(errs) == ["spec.leaderElect.renewDeadline"]
        assert errs[0].detail == "renewDeadline must be greater than retryPeriod*JitterFactor"

    def test_jitter_factor_is_configurable(self, make_kubefed_config: MakeKubeFedConfig) -> None:
        cfg = make_kubefed_config(
            spec={
                "leaderElect": {"leaseDuration": "15s", "renewDeadline": "10s", "retryPeriod": "9s"}
            }
        )
        assert validate_kubefed_config(cfg, jitter_factor=1.0) == []

        # 10s <= 5s * 2.0
        assert fields(validate_kubefed_config(make_kubefed_config(), jitter_factor=2.0)) == [
            "spec.leaderElect.renewDeadline"
        ]

    def test_huge_retry_period_is_reported(self, make_kubefed_config: MakeKubeFedConfig) -> None:
        """A retry period near the timedelta limit is compared without overflowing."""
        cfg = make_kubefed_config(
            spec={"leaderElect": {"retryPeriod": timedelta(days=900_000_000)}}
        )
        errs = validate_kubefed_config(cfg)

        assert [(err.field, err.type) for err in errs] == [
            ("spec.leaderElect.renewDeadline", ErrorType.INVALID)
        ]

    def test_missing_leader_election(self, make_kubefed_config: MakeKubeFedConfig) -> None:
        errs = validate_kubefed_config(make_kubefed_config(spec={"leaderElect": None}))

        assert fields(errs) == [
            "spec.leaderElect.leaseDuration",
            "spec.leaderElect.renewDeadline",
            "spec.leaderElect.retryPeriod",
            "spec.leaderElect.leaseDuration",
            "spec.leaderElect.renewDeadline",
            "spec.leaderElect.resourceLock",
        ]

    def test_resource_lock(self, make_kubefed_config: MakeKubeFedConfig) -> None:
        cfg = make_kubefed_config(spec={"leaderElect": {"resourceLock": "Leases"}})
        errs = validate_kubefed_config(cfg)

        assert fields(errs) == ["spec.leaderElect.resourceLock"]
        assert errs[0].supported == ("ConfigMaps", "Endpoints")

    def test_empty_feature_gates(self, make_kubefed_config: MakeKubeFedConfig) -> None:
        assert validate_kubefed_config(make_kubefed_config(spec={"featureGates": []})) == []

    def test_unknown_feature(self, make_kubefed_config: MakeKubeFedConfig) -> None:
        cfg = make_kubefed_config(spec={"featureGates": [{"name": "X", "configuration": "Enabled"}]})
        errs = validate_kubefed_config(cfg)

        assert fields(errs) == ["spec.featureGates[0].name"]
        assert errs[0].type is ErrorType.NOT_SUPPORTED
        assert list(errs[0].supported) == known_feature_names()

    def test_duplicate_feature(self, make_kubefed_config: MakeKubeFedConfig) -> None:
        cfg = make_kubefed_config(
            spec={
                "featureGates": [
                    {"name": "X", "configuration": "Enabled"},
                    {"name": "X", "configuration": "Disabled"},
                ]
            }
        )
        errs = validate_kubefed_config(cfg)

        duplicates = [err for err in errs if err.type is ErrorType.DUPLICATE]
        assert len(duplicates) == 1
        assert duplicates[0].field == "spec.featureGates[1].name"
        assert duplicates[0].bad_value == "X"

    def test_every_repeat_is_a_duplicate(self, make_kubefed_config: MakeKubeFedConfig) -> None:
        cfg = make_kubefed_config(
            spec={
                "featureGates": [
                    {"name": "FederatedIngress", "configuration": "Enabled"},
                    {"name": "FederatedIngress", "configuration": "Disabled"},
                    {"name": "FederatedIngress", "configuration": "Enabled"},
                ]
            }
        )
        errs = validate_kubefed_config(cfg)

        assert [(err.field, err.type) for err in errs] == [
            ("spec.featureGates[1].name", ErrorType.DUPLICATE),
            ("spec.featureGates[2].name", ErrorType.DUPLICATE),
        ]

    def test_duplicate_entry_is_not_checked_further(
        self, make_kubefed_config: MakeKubeFedConfig
    ) -> None:
        cfg = make_kubefed_config(
            spec={
                "featureGates": [
                    {"name": "PushReconciler", "configuration": "Enabled"},
                    {"name": "PushReconciler", "configuration": "Sideways"},
                ]
            }
        )
        errs = validate_kubefed_config(cfg)
        assert [(err.field, err.type) for err in errs] == [
            ("spec.featureGates[1].name", ErrorType.DUPLICATE)
        ]

    def test_feature_configuration(self, make_kubefed_config: MakeKubeFedConfig) -> None:
        cfg = make_kubefed_config(
            spec={
                "featureGates": [
                    {"name": "PushReconciler", "configuration": ""},
                    {"name": "FederatedIngress", "configuration": "On"},
                ]
            }
        )
        errs = validate_kubefed_config(cfg)
        assert [(err.field, err.type) for err in errs] == [
            ("spec.featureGates[0].configuration", ErrorType.REQUIRED),
            ("spec.featureGates[1].configuration", ErrorType.NOT_SUPPORTED),
        ]

    def test_known_features_override(self, make_kubefed_config: MakeKubeFedConfig) -> None:
        errs = validate_kubefed_config(make_kubefed_config(), known_features={"PushReconciler"})

        assert fields(errs) == ["spec.featureGates[1].name"]
        assert errs[0].supported == ("PushReconciler",)

    def test_cluster_health_check(self, make_kubefed_config: MakeKubeFedConfig) -> None:
        cfg = make_kubefed_config(
            spec={"clusterHealthCheck": {"periodSeconds": 0, "timeoutSeconds": -1}}
        )
        errs = validate_kubefed_config(cfg)

        assert fields(errs) == [
            "spec.clusterHealthCheck.periodSeconds",
            "spec.clusterHealthCheck.timeoutSeconds",
        ]

    def test_adopt_resources(self, make_kubefed_config: MakeKubeFedConfig) -> None:
        errs = validate_kubefed_config(make_kubefed_config(spec={"syncController": None}))
        assert [(err.field, err.type) for err in errs] == [
            ("spec.syncController.adoptResources", ErrorType.REQUIRED)
        ]

    def test_empty_config_reports_everything(self) -> None:
        errs = validate_kubefed_config(KubeFedConfig())
        reported = set(fields(errs))

        assert "spec.scope" in reported
        assert "spec.controllerDuration.availableDelay" in reported
        assert "spec.leaderElect.resourceLock" in reported
        assert "spec.clusterHealthCheck.successThreshold" in reported
        assert "spec.syncController.adoptResources" in reported
        assert len(errs) == 14

    def test_idempotent(self, make_kubefed_config: MakeKubeFedConfig) -> None:
        cfg = make_kubefed_config(spec={"scope": "Global", "leaderElect": {"retryPeriod": "0s"}})
        before = cfg.model_dump()

        assert validate_kubefed_config(cfg) == validate_kubefed_config(cfg)
        assert cfg.model_dump() == before

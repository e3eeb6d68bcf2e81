"""Validation of federation configuration documents.

Example:
    from fedconf.validation import format_errors, validate_kubefed_config

    errs = validate_kubefed_config(kubefed_config)
    if errs:
        print(format_errors(errs))
"""

from fedconf.validation.documents import ensure_valid, validate_document
from fedconf.validation.field import (
    ErrorList,
    ErrorType,
    FieldError,
    FieldPath,
    format_errors,
    group_by_field,
)
from fedconf.validation.validation import (
    DOMAIN_WITH_AT_LEAST_ONE_DOT,
    FEDERATED_TYPE_CONFIG_NAME_ERROR_MSG,
    validate_api_resource,
    validate_enum_strings,
    validate_federated_api_resource,
    validate_federated_type_config,
    validate_federated_type_config_name,
    validate_federated_type_config_spec,
    validate_federated_type_config_status,
    validate_kubefed_config,
    validate_status_api_resource,
)

__all__ = [
    "DOMAIN_WITH_AT_LEAST_ONE_DOT",
    "FEDERATED_TYPE_CONFIG_NAME_ERROR_MSG",
    "ErrorList",
    "ErrorType",
    "FieldError",
    "FieldPath",
    "ensure_valid",
    "format_errors",
    "group_by_field",
    "validate_api_resource",
    "validate_document",
    "validate_enum_strings",
    "validate_federated_api_resource",
    "validate_federated_type_config",
    "validate_federated_type_config_name",
    "validate_federated_type_config_spec",
    "validate_federated_type_config_status",
    "validate_kubefed_config",
    "validate_status_api_resource",
]

"""
fedconf: validation for federation configuration.

Validates FederatedTypeConfig documents (how a resource type is federated) and
KubeFedConfig documents (runtime behavior of the federation controllers),
reporting every violation with the path of the offending field.

Public API modules (STABLE):
- fedconf.apis: Typed document models
- fedconf.validation: Validators and field errors
- fedconf.config: Document loading and validator settings
- fedconf.errors: Exception taxonomy
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("fedconf")
except PackageNotFoundError:
    # Development install or not installed via pip
    __version__ = "0.1.0"

from fedconf.validation import (
    FieldError,
    ensure_valid,
    validate_document,
    validate_federated_type_config,
    validate_kubefed_config,
)

__all__ = [
    "FieldError",
    "__version__",
    "ensure_valid",
    "validate_document",
    "validate_federated_type_config",
    "validate_kubefed_config",
]

"""Dispatch loaded documents to their validators."""

import logging

from fedconf.apis.schema import ConfigDocument, FederatedTypeConfig, KubeFedConfig
from fedconf.config.settings import ValidatorSettings, load_settings
from fedconf.errors import InvalidConfigError
from fedconf.validation.field import ErrorList, format_errors
from fedconf.validation.validation import (
    validate_federated_type_config,
    validate_kubefed_config,
)

logger = logging.getLogger(__name__)


def validate_document(
    document: ConfigDocument,
    settings: ValidatorSettings | None = None,
    status_subresource: bool = False,
) -> ErrorList:
    """Validate any supported configuration document.

    Args:
        document: A FederatedTypeConfig or KubeFedConfig
        settings: Validator settings (defaults resolved from the environment)
        status_subresource: For FederatedTypeConfig, validate only the status

    Returns:
        Ordered list of violations (empty if valid)

    Raises:
        TypeError: If the document is not a supported model
    """
    if isinstance(document, FederatedTypeConfig):
        return validate_federated_type_config(document, status_subresource=status_subresource)

    if isinstance(document, KubeFedConfig):
        resolved = settings or load_settings()
        return validate_kubefed_config(
            document,
            jitter_factor=resolved.jitter_factor,
            known_features=resolved.known_features,
        )

    msg = f"Unsupported document type: {type(document).__name__}"
    raise TypeError(msg)


def ensure_valid(
    document: ConfigDocument,
    settings: ValidatorSettings | None = None,
    status_subresource: bool = False,
) -> None:
    """Validate a document and raise if anything is wrong.

    Raises:
        InvalidConfigError: Carrying every violation found
    """
    errs = validate_document(document, settings=settings, status_subresource=status_subresource)
    if errs:
        logger.debug("%s %r rejected with %d violation(s)", document.kind, document.name, len(errs))
        msg = f"{document.kind} {document.name!r} is invalid:\n{format_errors(errs)}"
        raise InvalidConfigError(msg, errs)

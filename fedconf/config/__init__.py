"""Loading of configuration documents and validator settings.

Example:
    from fedconf.config import load_documents, load_settings

    settings = load_settings()
    documents = load_documents("federation.yaml")
"""

from fedconf.config.loader import (
    load_document_dict,
    load_documents,
    load_federated_type_config,
    load_kubefed_config,
)
from fedconf.config.settings import ValidatorSettings, load_settings

__all__ = [
    "ValidatorSettings",
    "load_document_dict",
    "load_documents",
    "load_federated_type_config",
    "load_kubefed_config",
    "load_settings",
]

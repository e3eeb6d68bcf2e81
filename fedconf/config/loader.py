"""Configuration document loader.

Reads FederatedTypeConfig and KubeFedConfig documents from YAML (or JSON)
files and parses them into the typed models of :mod:`fedconf.apis.schema`.
Parsing checks shape and types only; semantic rules are left to the
validators so every violation can be reported at once.

Example:
    from fedconf.config.loader import load_documents
    from fedconf.validation import validate_document

    for document in load_documents("deploy/federation.yaml"):
        for error in validate_document(document):
            print(error)
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from fedconf.apis.schema import (
    DOCUMENT_TYPES,
    ConfigDocument,
    FederatedTypeConfig,
    KubeFedConfig,
    document_kind,
)
from fedconf.errors import ConfigLoadError

logger = logging.getLogger(__name__)


def load_documents(path: str | Path) -> list[ConfigDocument]:
    """Load every configuration document from a YAML file.

    Multi-document files (``---`` separated) are supported; empty documents are
    skipped.

    Args:
        path: Path to YAML file

    Returns:
        Parsed documents in file order

    Raises:
        ConfigLoadError: If the file cannot be read, parsed or mapped to a model
    """
    file_path = Path(path)

    if not file_path.exists():
        msg = f"Config file not found: {file_path}"
        raise ConfigLoadError(msg, source=str(file_path))

    if not file_path.is_file():
        msg = f"Path is not a file: {file_path}"
        raise ConfigLoadError(msg, source=str(file_path))

    try:
        with open(file_path, encoding="utf-8") as f:
            raw_documents = [doc for doc in yaml.safe_load_all(f) if doc is not None]
    except yaml.YAMLError as e:
        msg = f"Failed to parse YAML file {file_path}: {e}"
        raise ConfigLoadError(msg, source=str(file_path)) from e
    except OSError as e:
        msg = f"Failed to read config file {file_path}: {e}"
        raise ConfigLoadError(msg, source=str(file_path)) from e

    if not raw_documents:
        msg = f"Config file is empty: {file_path}"
        raise ConfigLoadError(msg, source=str(file_path))

    logger.debug("Loaded %d YAML document(s) from %s", len(raw_documents), file_path)

    documents = []
    for position, data in enumerate(raw_documents):
        source = f"{file_path}[{position}]" if len(raw_documents) > 1 else str(file_path)
        documents.append(load_document_dict(data, source=source))

    logger.info("Successfully loaded %d document(s) from %s", len(documents), file_path)
    return documents


def load_document_dict(data: Any, source: str | None = None) -> ConfigDocument:
    """Parse one configuration document from a dictionary.

    The model is chosen by the document's ``kind``.

    Args:
        data: Dictionary containing the document
        source: Optional description of where the data came from (for messages)

    Returns:
        FederatedTypeConfig or KubeFedConfig

    Raises:
        ConfigLoadError: If the kind is unknown or the data does not fit the model
    """
    where = f" in {source}" if source else ""

    if not isinstance(data, dict):
        msg = f"Config document{where} must be a mapping, got {type(data).__name__}"
        raise ConfigLoadError(msg, source=source)

    kind = document_kind(data)
    model = DOCUMENT_TYPES.get(kind) if kind else None
    if model is None:
        supported = ", ".join(sorted(DOCUMENT_TYPES))
        msg = f"Unsupported document kind {kind!r}{where}; expected one of: {supported}"
        raise ConfigLoadError(msg, source=source)

    try:
        document = model.model_validate(data)
    except ValidationError as e:
        error_messages = []
        for error in e.errors():
            location = " -> ".join(str(loc) for loc in error["loc"])
            error_messages.append(f"  {location}: {error['msg']}")
        error_summary = "\n".join(error_messages)
        msg = f"{kind} schema validation failed{where}:\n{error_summary}"
        raise ConfigLoadError(msg, source=source) from e

    logger.debug("Parsed %s %r%s", kind, document.name, where)
    return document


def load_federated_type_config(path: str | Path) -> FederatedTypeConfig:
    """Load a file holding exactly one FederatedTypeConfig."""
    return _load_single(path, FederatedTypeConfig)


def load_kubefed_config(path: str | Path) -> KubeFedConfig:
    """Load a file holding exactly one KubeFedConfig."""
    return _load_single(path, KubeFedConfig)


def _load_single(path: str | Path, model: type) -> Any:
    documents = load_documents(path)
    if len(documents) != 1:
        msg = f"Expected exactly one document in {path}, found {len(documents)}"
        raise ConfigLoadError(msg, source=str(path))

    document = documents[0]
    if not isinstance(document, model):
        msg = f"Expected a {model.__name__} in {path}, found {type(document).__name__}"
        raise ConfigLoadError(msg, source=str(path))
    return document

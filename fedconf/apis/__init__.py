"""Typed models for FederatedTypeConfig and KubeFedConfig documents."""

from fedconf.apis.schema import (
    APIResource,
    ConfigDocument,
    FederatedTypeConfig,
    FederatedTypeConfigSpec,
    FederatedTypeConfigStatus,
    KubeFedConfig,
    KubeFedConfigSpec,
)

__all__ = [
    "APIResource",
    "ConfigDocument",
    "FederatedTypeConfig",
    "FederatedTypeConfigSpec",
    "FederatedTypeConfigStatus",
    "KubeFedConfig",
    "KubeFedConfigSpec",
]

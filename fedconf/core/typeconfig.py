"""Naming convention for FederatedTypeConfig objects.

A FederatedTypeConfig is named after the type it federates:
``<pluralName>`` for core types and ``<pluralName>.<group>`` otherwise, e.g.
``configmaps`` or ``deployments.apps``.
"""

from typing import Protocol

from fedconf.apis.schema import APIResource


class NameFunc(Protocol):
    """Derives the expected FederatedTypeConfig name from a target type."""

    def __call__(self, api_resource: APIResource) -> str: ...


def group_qualified_name(api_resource: APIResource) -> str:
    """Return the plural name, qualified by the group when there is one."""
    if not api_resource.group:
        return api_resource.plural_name
    return f"{api_resource.plural_name}.{api_resource.group}"

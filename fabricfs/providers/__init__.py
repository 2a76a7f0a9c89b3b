"""FabricFS remote item providers.

Usage:
    from fabricfs.providers import StaticItemProvider, populate_workspaces

    provider = StaticItemProvider(workspaces={"Sales": WS_ID})
    populate_workspaces(registry, provider)
"""

from fabricfs.providers.base import (
    RemoteItemProvider,
    StaticItemProvider,
    populate_items,
    populate_workspaces,
)

__all__ = [
    "RemoteItemProvider",
    "StaticItemProvider",
    "populate_items",
    "populate_workspaces",
]

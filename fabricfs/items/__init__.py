"""FabricFS cache items.

Node types for each addressable level and the factory that builds them.
"""

from fabricfs.items.factory import CacheItemFactory, browser_url
from fabricfs.items.nodes import (
    CacheItem,
    ItemNode,
    ItemTypeBucket,
    RootNode,
    WorkspaceNode,
    item_type_browser_link,
)

__all__ = [
    "CacheItem",
    "RootNode",
    "WorkspaceNode",
    "ItemTypeBucket",
    "ItemNode",
    "CacheItemFactory",
    "browser_url",
    "item_type_browser_link",
]

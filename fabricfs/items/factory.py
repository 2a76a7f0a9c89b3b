"""
FabricFS Cache Items: factory.

Builds the node for a validated address. The mapping from address level to
node shape is total; failures belong upstream in parsing and validation.
"""
from typing import Optional

from fabricfs.core.constants import DEFAULT_BROWSER_BASE_URL
from fabricfs.items.nodes import (
    CacheItem,
    ItemNode,
    ItemTypeBucket,
    RootNode,
    WorkspaceNode,
    item_type_browser_link,
)
from fabricfs.uri.address import Address, AddressLevel
from fabricfs.uri.resolver import UriResolver


class CacheItemFactory:
    """Constructs cache nodes, resolving ids through a UriResolver."""

    def __init__(self, resolver: UriResolver):
        self.resolver = resolver

    @property
    def registry(self):
        return self.resolver.registry

    def build(self, address: Address) -> CacheItem:
        """
        Build the node for an address.

        Part addresses are truncated to their item first, so every part of an
        item maps to the same node shape.

        Args:
            address: Address that already passed validation

        Returns:
            RootNode, WorkspaceNode, ItemTypeBucket or ItemNode
        """
        level = address.level

        if level == AddressLevel.ROOT:
            return RootNode(address)

        workspace_id = self.resolver.workspace_id(address)

        if level == AddressLevel.WORKSPACE:
            return WorkspaceNode(
                address,
                resolved_workspace_id=workspace_id,
                name=self.registry.workspace_name(workspace_id) or "",
            )

        if level == AddressLevel.ITEM_TYPE:
            return ItemTypeBucket(
                address,
                resolved_workspace_id=workspace_id,
                resolved_item_type=address.item_type,
            )

        item_address = address.truncate_to_item()
        item_id = self.resolver.item_id(item_address)
        return ItemNode(
            item_address,
            resolved_workspace_id=workspace_id,
            resolved_item_type=item_address.item_type,
            item_id=item_id,
            name=self.registry.item_name(workspace_id, item_address.item_type, item_id) or "",
        )


def browser_url(
    node: CacheItem,
    base_url: str = DEFAULT_BROWSER_BASE_URL,
    tenant_id: Optional[str] = None,
) -> str:
    """
    Build the human-facing web link for a node.

    Format: ``<base>/groups/<workspace id>/<type segment>/<item id>``, cut
    short at the node's level, with ``?ctid=<tenant>`` when a tenant is set.

    Args:
        node: Any cache node
        base_url: Browser base URL
        tenant_id: Optional tenant id appended as ``ctid``

    Returns:
        Absolute URL
    """
    segments = []

    if node.workspace_id:
        segments.extend(["groups", node.workspace_id])

    if node.item_type is not None:
        segments.append(item_type_browser_link(node.item_type))

    if isinstance(node, ItemNode):
        segments.append(node.item_id)

    url = "/".join([base_url.rstrip("/")] + segments)

    if tenant_id:
        url += f"?ctid={tenant_id}"

    return url


__all__ = [
    "CacheItemFactory",
    "browser_url",
    "item_type_browser_link",
]

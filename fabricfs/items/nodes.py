"""
FabricFS Cache Items: node types.

One node type per hierarchy level that can own a cache entry. Part-level
addresses never get their own node; they resolve to the ItemNode of the
item that contains them.

Nodes are plain descriptions. They hold no remote handles and can be
discarded and rebuilt from their address at any time.
"""
from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from fabricfs.core.constants import ITEM_TYPE_BROWSER_LINKS, ItemType
from fabricfs.uri.address import Address, AddressLevel


def item_type_browser_link(item_type: Union[ItemType, str]) -> str:
    """Map an item type to the path segment used in browser links.

    Types without an explicit entry fall back to the lower-cased plural of
    their name, e.g. Lakehouse -> "lakehouses".
    """
    if isinstance(item_type, str):
        resolved = ItemType.from_string(item_type)
        if resolved is None:
            return item_type.lower() + "s"
        item_type = resolved

    return ITEM_TYPE_BROWSER_LINKS.get(item_type, item_type.value.lower() + "s")


@dataclass(frozen=True)
class CacheItem:
    """Base node: what exists at an address."""

    address: Address

    kind: ClassVar[Optional[AddressLevel]] = None

    @property
    def level(self) -> AddressLevel:
        return self.address.level

    @property
    def uri_key(self) -> str:
        return self.address.uri_key

    @property
    def uri(self) -> str:
        return self.address.to_uri()

    @property
    def workspace_id(self) -> Optional[str]:
        return None

    @property
    def item_type(self) -> Optional[ItemType]:
        return None

    @property
    def display_name(self) -> str:
        """Last decoded segment of the address, "/" for the root."""
        segments = self.address.segments()
        return segments[-1] if segments else "/"


@dataclass(frozen=True)
class RootNode(CacheItem):
    """The list of all workspaces."""

    kind = AddressLevel.ROOT


@dataclass(frozen=True)
class WorkspaceNode(CacheItem):
    """A single workspace."""

    resolved_workspace_id: str = ""
    name: str = ""

    kind = AddressLevel.WORKSPACE

    @property
    def display_name(self) -> str:
        return self.name or super().display_name

    @property
    def workspace_id(self) -> str:
        return self.resolved_workspace_id

    @property
    def is_fabric_capacity(self) -> bool:
        # Capacity detection is disabled; keep reporting False.
        return False


@dataclass(frozen=True)
class ItemTypeBucket(CacheItem):
    """All items of one type inside a workspace."""

    resolved_workspace_id: str = ""
    resolved_item_type: Optional[ItemType] = None

    kind = AddressLevel.ITEM_TYPE

    @property
    def workspace_id(self) -> str:
        return self.resolved_workspace_id

    @property
    def item_type(self) -> Optional[ItemType]:
        return self.resolved_item_type

    @property
    def display_name(self) -> str:
        return self.resolved_item_type.value if self.resolved_item_type else ""

    @property
    def browser_link(self) -> str:
        return item_type_browser_link(self.resolved_item_type)


@dataclass(frozen=True)
class ItemNode(CacheItem):
    """A single item. Parts of the item are addressed inside this node."""

    resolved_workspace_id: str = ""
    resolved_item_type: Optional[ItemType] = None
    item_id: str = ""
    name: str = ""

    kind = AddressLevel.ITEM

    @property
    def display_name(self) -> str:
        return self.name or super().display_name

    @property
    def workspace_id(self) -> str:
        return self.resolved_workspace_id

    @property
    def item_type(self) -> Optional[ItemType]:
        return self.resolved_item_type

    @property
    def browser_link(self) -> str:
        return item_type_browser_link(self.resolved_item_type)

"""
FabricFS Providers: remote listing boundary.

The URI core never talks to the remote API itself. Higher layers hand it a
RemoteItemProvider whose listings are used to teach the NameIdRegistry which
names exist, after which those names validate.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple, Union

from fabricfs.core.constants import ItemType
from fabricfs.core.validators import ValidationError
from fabricfs.registry import NameIdRegistry

# (display name, id)
Listing = Iterable[Tuple[str, str]]


class RemoteItemProvider(ABC):
    """
    Abstract source of workspace and item listings.

    Implementations typically wrap an HTTP client. Both methods return
    (name, id) pairs; ordering is not significant.
    """

    @abstractmethod
    def list_workspaces(self) -> Listing:
        """List every workspace visible to the caller."""
        pass

    @abstractmethod
    def list_items(self, workspace_id: str, item_type: ItemType) -> Listing:
        """
        List items of one type inside a workspace.

        Args:
            workspace_id: Workspace identifier
            item_type: Item type to list
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class StaticItemProvider(RemoteItemProvider):
    """
    In-memory provider backed by dictionaries.

    Useful for tests and for preloading known mappings.

    Example:
        >>> provider = StaticItemProvider(
        ...     workspaces={"Sales": WS_ID},
        ...     items={(WS_ID, ItemType.NOTEBOOK): {"Load": NB_ID}},
        ... )
    """

    def __init__(
        self,
        workspaces: Optional[Dict[str, str]] = None,
        items: Optional[Dict[Tuple[str, ItemType], Dict[str, str]]] = None,
    ):
        self.workspaces = dict(workspaces or {})
        self.items = {key: dict(value) for key, value in (items or {}).items()}
        self.calls: List[Tuple[str, ...]] = []

    def list_workspaces(self) -> Listing:
        self.calls.append(("list_workspaces",))
        return list(self.workspaces.items())

    def list_items(self, workspace_id: str, item_type: ItemType) -> Listing:
        self.calls.append(("list_items", workspace_id, item_type.value))
        return list(self.items.get((workspace_id, item_type), {}).items())


def populate_workspaces(registry: NameIdRegistry, provider: RemoteItemProvider) -> int:
    """
    Register every workspace the provider lists.

    Returns:
        Number of workspaces registered
    """
    count = 0
    for name, workspace_id in provider.list_workspaces():
        registry.register_workspace(name, workspace_id)
        count += 1
    return count


def populate_items(
    registry: NameIdRegistry,
    provider: RemoteItemProvider,
    workspace_id: str,
    item_type: Union[ItemType, str],
) -> int:
    """
    Register every item of one type the provider lists for a workspace.

    Returns:
        Number of items registered

    Raises:
        ValidationError: If item_type is not a known type
    """
    if not isinstance(item_type, ItemType):
        resolved = ItemType.from_string(item_type)
        if resolved is None:
            raise ValidationError(f"Unknown item type: {item_type}")
        item_type = resolved

    count = 0
    for name, item_id in provider.list_items(workspace_id, item_type):
        registry.register_item(workspace_id, item_type, name, item_id)
        count += 1
    return count

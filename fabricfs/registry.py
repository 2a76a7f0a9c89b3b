"""Name/Id registry for workspaces and items.

Maps human-readable names to stable remote identifiers and back. Entries are
added by whoever learns a mapping (usually after listing a workspace) and
live for the lifetime of the registry. Nothing is removed automatically; a
stale id simply produces a not-found error on the next remote call.

Example:
    >>> registry = NameIdRegistry()
    >>> registry.register_workspace("Sales", "00000000-0000-0000-0000-000000000001")
    >>> registry.lookup_workspace_id("Sales")
    '00000000-0000-0000-0000-000000000001'
"""

import threading
from typing import Any, Dict, Optional, Tuple, Union

from fabricfs.core.constants import ConfigKey, ItemType
from fabricfs.core.validators import ValidationError, validate_config
from fabricfs.infrastructure.logger import Logger

ItemKey = Tuple[str, ItemType, str]


def _coerce_item_type(item_type: Union[ItemType, str]) -> ItemType:
    if isinstance(item_type, ItemType):
        return item_type

    resolved = ItemType.from_string(item_type)
    if resolved is None:
        raise ValidationError(f"Unknown item type: {item_type}")
    return resolved


class NameIdRegistry:
    """Thread-safe bidirectional name/id store.

    Two independent maps are kept:
    - workspace name -> workspace id
    - (workspace id, item type, item name) -> item id

    Each has a reverse index so display names can be recovered from ids.
    """

    def __init__(self, logger: Optional[Logger] = None):
        self._workspaces: Dict[str, str] = {}
        self._workspace_names: Dict[str, str] = {}
        self._items: Dict[ItemKey, str] = {}
        self._item_names: Dict[ItemKey, str] = {}
        self._lock = threading.RLock()
        self.logger = logger or Logger("fabricfs.registry")

    def register_workspace(self, name: str, workspace_id: str) -> None:
        """Register or update a workspace mapping.

        Args:
            name: Workspace display name
            workspace_id: Stable workspace identifier
        """
        with self._lock:
            previous = self._workspaces.get(name)
            if previous is not None and self._workspace_names.get(previous) == name:
                del self._workspace_names[previous]

            self._workspaces[name] = workspace_id
            self._workspace_names[workspace_id] = name

        self.logger.debug("Registered workspace", name=name, id=workspace_id)

    def register_item(
        self,
        workspace_id: str,
        item_type: Union[ItemType, str],
        name: str,
        item_id: str,
    ) -> None:
        """Register or update an item mapping within a workspace and type.

        Args:
            workspace_id: Owning workspace identifier
            item_type: Item type (enum member or external name)
            name: Item display name
            item_id: Stable item identifier

        Raises:
            ValidationError: If item_type is not a known type
        """
        item_type = _coerce_item_type(item_type)
        key = (workspace_id, item_type, name)

        with self._lock:
            previous = self._items.get(key)
            if previous is not None:
                reverse_key = (workspace_id, item_type, previous)
                if self._item_names.get(reverse_key) == name:
                    del self._item_names[reverse_key]

            self._items[key] = item_id
            self._item_names[(workspace_id, item_type, item_id)] = name

        self.logger.debug(
            "Registered item",
            workspace_id=workspace_id,
            item_type=item_type.value,
            name=name,
            id=item_id,
        )

    def lookup_workspace_id(self, name: str) -> Optional[str]:
        """Get the workspace id for a name, or None if never registered."""
        with self._lock:
            return self._workspaces.get(name)

    def lookup_item_id(
        self,
        workspace_id: Optional[str],
        item_type: Optional[Union[ItemType, str]],
        name: str,
    ) -> Optional[str]:
        """Get the item id for a (workspace id, type, name) triple.

        Returns:
            Item id or None if the triple was never registered
        """
        if not workspace_id or item_type is None:
            return None

        if not isinstance(item_type, ItemType):
            item_type = ItemType.from_string(item_type)
            if item_type is None:
                return None

        with self._lock:
            return self._items.get((workspace_id, item_type, name))

    def workspaces(self) -> Dict[str, str]:
        """Snapshot of the workspace name -> id map."""
        with self._lock:
            return dict(self._workspaces)

    def workspace_name(self, workspace_id: str) -> Optional[str]:
        """Get the most recently registered name for a workspace id."""
        with self._lock:
            return self._workspace_names.get(workspace_id)

    def item_name(
        self, workspace_id: str, item_type: ItemType, item_id: str
    ) -> Optional[str]:
        """Get the most recently registered name for an item id."""
        with self._lock:
            return self._item_names.get((workspace_id, item_type, item_id))

    def load_mapping(self, registry_config: Dict[str, Any]) -> int:
        """Bulk-register mappings from a configuration section.

        Args:
            registry_config: Dict with optional ``workspaces`` (name -> id)
                and ``items`` (list of records) keys

        Returns:
            Number of entries registered

        Raises:
            ValidationError: If the section is malformed
        """
        validate_config({ConfigKey.REGISTRY: registry_config})

        count = 0
        workspaces = registry_config.get(ConfigKey.REGISTRY_WORKSPACES) or {}
        for name, workspace_id in workspaces.items():
            self.register_workspace(name, workspace_id)
            count += 1

        for item in registry_config.get(ConfigKey.REGISTRY_ITEMS) or []:
            self.register_item(item["workspace_id"], item["item_type"], item["name"], item["id"])
            count += 1

        return count

    def stats(self) -> Dict[str, int]:
        """Get registry entry counts."""
        with self._lock:
            return {
                "workspaces": len(self._workspaces),
                "items": len(self._items),
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._workspaces) + len(self._items)

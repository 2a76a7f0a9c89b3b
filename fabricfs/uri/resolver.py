"""
FabricFS URI Model: validation and name resolution.

Identifier-shaped segments resolve to themselves; name segments resolve
through the NameIdRegistry. The host probes many incidental paths (marker
files in the root, for example), so anything that is neither an identifier
nor a known name is reported as not found instead of being sent to the
remote API.
"""
from typing import Optional

from fabricfs.core.validators import is_guid
from fabricfs.errors import NotFound, UnknownItemType, UnresolvedName
from fabricfs.infrastructure.logger import Logger
from fabricfs.registry import NameIdRegistry
from fabricfs.uri.address import Address, AddressLevel


class UriResolver:
    """Validates addresses and resolves their ids against a registry."""

    def __init__(self, registry: NameIdRegistry, logger: Optional[Logger] = None):
        """
        Initialize the resolver.

        Args:
            registry: Name/id registry consulted for name segments
            logger: Logger (created if None)
        """
        self.registry = registry
        self.logger = logger or Logger("fabricfs.uri")

    def workspace_id(self, address: Address) -> Optional[str]:
        """Resolve the workspace segment to an id.

        Returns:
            The id, or None when the segment is absent or an unknown name
        """
        if address.workspace is None:
            return None
        if is_guid(address.workspace):
            return address.workspace
        return self.registry.lookup_workspace_id(address.workspace)

    def item_id(self, address: Address) -> Optional[str]:
        """Resolve the item segment to an id.

        Item names are scoped by the resolved workspace id and item type, so
        an unresolved workspace also leaves the item unresolved.
        """
        if address.item is None:
            return None
        if is_guid(address.item):
            return address.item
        return self.registry.lookup_item_id(
            self.workspace_id(address), address.item_type, address.item
        )

    def check(self, address: Address) -> None:
        """Raise if the address cannot resolve.

        Raises:
            UnknownItemType: Item type segment outside the enumeration
            UnresolvedName: Workspace or item name not in the registry
        """
        uri = address.to_uri()

        if address.level >= AddressLevel.ITEM_TYPE and address.item_type is None:
            raise UnknownItemType(f"Unknown item type '{address.item_type_text}'", uri=uri)

        if address.workspace is not None and self.workspace_id(address) is None:
            raise UnresolvedName(f"Unknown workspace name '{address.workspace}'", uri=uri)

        if address.item is not None and self.item_id(address) is None:
            raise UnresolvedName(
                f"Unknown {address.item_type_name} name '{address.item}'", uri=uri
            )

    def validate(self, address: Address) -> bool:
        """Check whether an address resolves, without raising."""
        try:
            self.check(address)
        except NotFound as e:
            self.logger.debug("Address does not resolve", uri=e.uri, reason=e.message)
            return False
        return True

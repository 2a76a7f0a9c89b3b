"""
FabricFS facade: the operations the filesystem host calls.

Ties the pieces together:
- parse / validate URIs (URI model)
- resolve a URI to its cache node (validate, canonical key, get-or-create)
- register names learned from listings (NameIdRegistry)
- refresh listings through a RemoteItemProvider and invalidate the cache
- build browser links

Errors are raised, never swallowed: MalformedUri and InvalidAddress for
strings that are not fabric addresses, NotFound (UnknownItemType,
UnresolvedName) for addresses that do not resolve.
"""

from typing import Optional, Union

from fabricfs.core.constants import DEFAULT_BROWSER_BASE_URL, ConfigKey, ItemType
from fabricfs.errors import FabricUriError, NotFound, ProviderUnavailable
from fabricfs.infrastructure.cache_manager import CacheManager
from fabricfs.infrastructure.config_manager import ConfigManager
from fabricfs.infrastructure.logger import Logger
from fabricfs.items.factory import CacheItemFactory, browser_url
from fabricfs.items.nodes import CacheItem, item_type_browser_link
from fabricfs.providers.base import RemoteItemProvider, populate_items, populate_workspaces
from fabricfs.registry import NameIdRegistry
from fabricfs.uri.address import Address, parse_uri
from fabricfs.uri.resolver import UriResolver

AddressLike = Union[str, Address]


class FabricFS:
    """
    URI resolution and cache-item addressing for the fabric scheme.

    Thread Safety:
    - Registry and cache guard their read-modify-write steps with locks
    - Parsing and node construction are pure
    """

    def __init__(
        self,
        registry: Optional[NameIdRegistry] = None,
        cache: Optional[CacheManager] = None,
        provider: Optional[RemoteItemProvider] = None,
        config: Optional[ConfigManager] = None,
        logger: Optional[Logger] = None,
    ):
        """
        Initialize the facade.

        Args:
            registry: Name/id registry (created empty if None)
            cache: Node cache (created over the registry if None); when
                given, the registry behind its factory is used instead
            provider: Remote listing service used by the refresh operations
            config: Configuration manager (defaults only if None)
            logger: Logger (created if None)
        """
        self.logger = logger or Logger("fabricfs.fs")
        self.config = config if config is not None else ConfigManager(load_environment=False)

        if cache is not None:
            self.cache = cache
            self.factory = cache.factory
            self.resolver = cache.factory.resolver
            self.registry = self.resolver.registry
        else:
            self.registry = registry if registry is not None else NameIdRegistry()
            self.resolver = UriResolver(self.registry)
            self.factory = CacheItemFactory(self.resolver)
            self.cache = CacheManager(self.factory)

        self.provider = provider

        self.logger.debug("FabricFS initialized")

    @classmethod
    def from_config(
        cls,
        config: ConfigManager,
        provider: Optional[RemoteItemProvider] = None,
    ) -> "FabricFS":
        """Build a facade and preload the registry from configuration."""
        fs = cls(provider=provider, config=config)
        registry_config = config.get(f"{ConfigKey.ROOT}.{ConfigKey.REGISTRY}", {})
        count = fs.registry.load_mapping(registry_config)
        fs.logger.debug("Preloaded registry from configuration", entries=count)
        return fs

    # =========================================================================
    # URI model
    # =========================================================================

    def parse(self, raw: str) -> Address:
        """
        Parse a raw URI, logging strings that are not fabric addresses.

        Raises:
            MalformedUri: Missing scheme prefix
            InvalidAddress: Segments out of nesting order
        """
        try:
            return parse_uri(raw)
        except FabricUriError as e:
            self.logger.warning("Invalid Fabric URI", uri=raw, reason=e.message)
            raise

    def _address(self, uri: AddressLike) -> Address:
        if isinstance(uri, Address):
            return uri
        return self.parse(uri)

    def validate(self, uri: AddressLike) -> bool:
        """Check whether a URI resolves against the registry."""
        return self.resolver.validate(self._address(uri))

    def workspace_id(self, uri: AddressLike) -> Optional[str]:
        return self.resolver.workspace_id(self._address(uri))

    def item_id(self, uri: AddressLike) -> Optional[str]:
        return self.resolver.item_id(self._address(uri))

    # =========================================================================
    # Resolution
    # =========================================================================

    def resolve(self, uri: AddressLike) -> CacheItem:
        """
        Resolve a URI to its cache node.

        Part URIs resolve to the node of the item that contains them.

        Raises:
            MalformedUri, InvalidAddress: Not a fabric address
            NotFound: Unknown item type or unresolved name
        """
        address = self._address(uri)

        with self.logger.add_context(uri=address.to_uri()):
            try:
                return self.cache.get_or_create(address)
            except NotFound as e:
                self.logger.debug("Not found", reason=e.message)
                raise

    # =========================================================================
    # Registry
    # =========================================================================

    def register_workspace(self, name: str, workspace_id: str) -> None:
        self.registry.register_workspace(name, workspace_id)

    def register_item(
        self,
        workspace_id: str,
        item_type: Union[ItemType, str],
        name: str,
        item_id: str,
    ) -> None:
        self.registry.register_item(workspace_id, item_type, name, item_id)

    def refresh_workspaces(self) -> int:
        """
        Re-list workspaces through the provider and re-register them.

        The root entry is dropped, and so is the cached subtree of every
        name that now points at a different id.

        Returns:
            Number of workspaces registered

        Raises:
            ProviderUnavailable: If no provider is configured
        """
        provider = self._require_provider()
        previous = self.registry.workspaces()
        count = populate_workspaces(self.registry, provider)

        self.cache.invalidate(Address())
        repointed = [
            name for name, workspace_id in self.registry.workspaces().items()
            if name in previous and previous[name] != workspace_id
        ]
        for name in repointed:
            self.cache.invalidate_prefix(Address(workspace=name))

        self.logger.info("Refreshed workspaces", count=count, repointed=len(repointed))
        return count

    def refresh_items(self, workspace_id: str, item_type: Union[ItemType, str]) -> int:
        """
        Re-list one item type of a workspace and drop its cached nodes.

        Returns:
            Number of items registered
        """
        provider = self._require_provider()
        count = populate_items(self.registry, provider, workspace_id, item_type)
        if not isinstance(item_type, ItemType):
            item_type = ItemType.from_string(item_type)
        removed = self.cache.invalidate_workspace(workspace_id, item_type)
        self.logger.info(
            "Refreshed items",
            workspace_id=workspace_id,
            item_type=item_type.value,
            count=count,
            invalidated=removed,
        )
        return count

    def invalidate(self, uri: AddressLike) -> int:
        """Drop the cached subtree below a URI."""
        return self.cache.invalidate_prefix(self._address(uri))

    def _require_provider(self) -> RemoteItemProvider:
        if self.provider is None:
            raise ProviderUnavailable("No remote item provider configured")
        return self.provider

    # =========================================================================
    # Browser links
    # =========================================================================

    def browser_link(self, item_type: Union[ItemType, str]) -> str:
        return item_type_browser_link(item_type)

    def browser_url(self, uri: AddressLike) -> str:
        """Web link for the node a URI resolves to."""
        node = self.resolve(uri)
        browser = f"{ConfigKey.ROOT}.{ConfigKey.BROWSER}"
        return browser_url(
            node,
            base_url=self.config.get(f"{browser}.{ConfigKey.BROWSER_BASE_URL}", DEFAULT_BROWSER_BASE_URL),
            tenant_id=self.config.get(f"{browser}.{ConfigKey.BROWSER_TENANT_ID}"),
        )

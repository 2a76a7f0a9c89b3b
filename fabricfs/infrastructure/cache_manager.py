#!/usr/bin/env python3
"""Cache of materialized nodes for FabricFS.

Nodes are keyed by the canonical URI key of their address, so every part of
an item shares the item's entry. Nodes are cheap descriptions rather than
live remote handles, which keeps the policy simple:
- entries live until something invalidates them
- invalidation by exact key, by key prefix (subtree), or by workspace id
- get-or-create is atomic under a re-entrant lock
- hit/miss statistics

Example:
    >>> cache = CacheManager(factory)
    >>> node = cache.get_or_create(parse_uri("fabric://ws-id/Notebook/nb-id/file.py"))
    >>> cache.invalidate_prefix(parse_uri("fabric://ws-id"))
"""

import threading
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from fabricfs.infrastructure.logger import Logger

if TYPE_CHECKING:
    from fabricfs.items.factory import CacheItemFactory
    from fabricfs.items.nodes import CacheItem
    from fabricfs.uri.address import Address


@dataclass
class CacheEntry:
    """Single cache entry with metadata."""

    key: str
    value: Any
    timestamp: float = field(default_factory=time.time)
    access_count: int = 0
    last_access: float = field(default_factory=time.time)

    def age(self) -> float:
        """Seconds since the entry was created."""
        return time.time() - self.timestamp

    def touch(self) -> None:
        """Update access time and count."""
        self.last_access = time.time()
        self.access_count += 1


class CacheManager:
    """Keyed store of cache nodes built on demand."""

    def __init__(self, factory: "CacheItemFactory", logger: Optional[Logger] = None):
        """Initialize cache manager.

        Args:
            factory: Builds nodes on a cache miss
            logger: Logger (created if None)
        """
        self.factory = factory
        self.logger = logger or Logger("fabricfs.cache")
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()

        # Statistics
        self._hits = 0
        self._misses = 0
        self._invalidations = 0

    def get_or_create(self, address: "Address") -> "CacheItem":
        """Return the node for an address, building it on a miss.

        The address is checked against the registry before a node is built,
        so nothing unresolvable is ever stored.

        Args:
            address: Parsed address

        Returns:
            Cached or newly built node

        Raises:
            NotFound: If the address does not resolve
        """
        key = address.uri_key

        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                entry.touch()
                self._hits += 1
                self.logger.debug("Cache hit", key=key)
                return entry.value

            self._misses += 1
            self.factory.resolver.check(address)
            node = self.factory.build(address)
            self._entries[key] = CacheEntry(key=key, value=node)

        self.logger.debug("Cache miss", key=key, node=type(node).__name__)
        return node

    def get(self, key: str) -> Optional["CacheItem"]:
        """Get a node by canonical key without building it."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            entry.touch()
            return entry.value

    def contains(self, address: "Address") -> bool:
        with self._lock:
            return address.uri_key in self._entries

    def invalidate(self, address: "Address") -> bool:
        """Remove the entry for exactly this address.

        Returns:
            True if an entry was removed
        """
        with self._lock:
            if self._entries.pop(address.uri_key, None) is None:
                return False
            self._invalidations += 1
            return True

    def invalidate_prefix(self, address: "Address") -> int:
        """Remove the entry for an address and every entry below it.

        Invalidating the root clears the whole cache.

        Returns:
            Number of entries removed
        """
        key = address.uri_key
        if not address.segments():
            return self.clear()

        with self._lock:
            doomed = [k for k in self._entries if k == key or k.startswith(key + "/")]
            for k in doomed:
                del self._entries[k]
            self._invalidations += len(doomed)

        self.logger.debug("Invalidated subtree", key=key, count=len(doomed))
        return len(doomed)

    def invalidate_workspace(self, workspace_id: str, item_type: Optional[Any] = None) -> int:
        """Remove every node resolved to a workspace id.

        Catches entries keyed by workspace name as well as by id.

        Args:
            workspace_id: Resolved workspace id
            item_type: Restrict to nodes of this item type

        Returns:
            Number of entries removed
        """
        with self._lock:
            doomed = [
                k for k, entry in self._entries.items()
                if entry.value.workspace_id == workspace_id
                and (item_type is None or entry.value.item_type == item_type)
            ]
            for k in doomed:
                del self._entries[k]
            self._invalidations += len(doomed)

        self.logger.debug("Invalidated workspace", workspace_id=workspace_id, count=len(doomed))
        return len(doomed)

    def clear(self) -> int:
        """Remove all entries.

        Returns:
            Number of entries removed
        """
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._invalidations += count
        return count

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._entries.keys())

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics.

        Returns:
            Cache statistics
        """
        with self._lock:
            total_requests = self._hits + self._misses
            hit_rate = self._hits / total_requests if total_requests > 0 else 0

            return {
                "entries": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": hit_rate,
                "invalidations": self._invalidations,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

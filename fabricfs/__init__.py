"""FabricFS - addressable virtual filesystem over a remote workspace hierarchy.

URIs of the form ``fabric://<workspace>/<itemType>/<item>/<part...>`` are
parsed, classified, validated against a name/id registry and resolved to
cached nodes.

Usage:
    from fabricfs import FabricFS

    fs = FabricFS()
    fs.register_workspace("Sales", "00000000-0000-0000-0000-000000000001")
    node = fs.resolve("fabric://Sales")
"""

from fabricfs.core.constants import FABRICFS_VERSION, ItemType
from fabricfs.errors import (
    FabricUriError,
    InvalidAddress,
    MalformedUri,
    NotFound,
    ProviderUnavailable,
    UnknownItemType,
    UnresolvedName,
)
from fabricfs.filesystem import FabricFS
from fabricfs.registry import NameIdRegistry
from fabricfs.uri.address import Address, AddressLevel, parse_uri

__version__ = FABRICFS_VERSION

__all__ = [
    "FabricFS",
    "NameIdRegistry",
    "Address",
    "AddressLevel",
    "ItemType",
    "parse_uri",
    "FabricUriError",
    "MalformedUri",
    "InvalidAddress",
    "NotFound",
    "ProviderUnavailable",
    "UnknownItemType",
    "UnresolvedName",
]

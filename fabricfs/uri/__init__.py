"""FabricFS URI model.

Parsing and classification (``address``) plus registry-backed validation
and id resolution (``resolver``).
"""

from fabricfs.uri.address import Address, AddressLevel, classify, parse_uri
from fabricfs.uri.resolver import UriResolver

__all__ = [
    "Address",
    "AddressLevel",
    "UriResolver",
    "classify",
    "parse_uri",
]

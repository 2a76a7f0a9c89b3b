"""
FabricFS URI Model: Address parsing and classification.

A fabric URI addresses one level of the remote hierarchy:

    fabric://<workspace>/<itemType>/<item>/<part...>

Every trailing segment is optional, but only in nesting order. Parsing is a
pure function of the input string; it never consults the name registry.
Name resolution and validation live in ``fabricfs.uri.resolver``.
"""
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Optional
from urllib.parse import quote, unquote

from fabricfs.core.constants import FABRIC_SCHEME, FABRIC_SCHEME_PREFIX, ItemType, Limits
from fabricfs.errors import InvalidAddress, MalformedUri


class AddressLevel(IntEnum):
    """Hierarchy depth of an address."""

    ROOT = 1
    WORKSPACE = 2
    ITEM_TYPE = 3
    ITEM = 4
    PART = 5


def _quote_segment(segment: str) -> str:
    return quote(segment, safe="")


@dataclass(frozen=True)
class Address:
    """Parsed fabric URI.

    Attributes:
        workspace: Workspace id or name
        item_type_text: Item type segment exactly as written
        item: Item id or name
        part: Path inside the item, may contain "/"
    """

    workspace: Optional[str] = None
    item_type_text: Optional[str] = None
    item: Optional[str] = None
    part: Optional[str] = None

    def __post_init__(self):
        # Normalize empty strings to absent so nesting checks see one shape
        for name in ("workspace", "item_type_text", "item", "part"):
            if getattr(self, name) == "":
                object.__setattr__(self, name, None)

        chain = [
            ("workspace", self.workspace),
            ("itemType", self.item_type_text),
            ("item", self.item),
            ("part", self.part),
        ]
        for (parent, parent_value), (child, child_value) in zip(chain, chain[1:]):
            if child_value is not None and parent_value is None:
                raise InvalidAddress(f"Segment '{child}' present without '{parent}'")

    @property
    def item_type(self) -> Optional[ItemType]:
        """Item type mapped through the closed enumeration, None if unknown."""
        return ItemType.from_string(self.item_type_text)

    @property
    def level(self) -> AddressLevel:
        return classify(self)

    @property
    def item_type_name(self) -> Optional[str]:
        """Canonical type name, or the raw text when the type is unknown."""
        item_type = self.item_type
        if item_type is not None:
            return item_type.value
        return self.item_type_text

    def segments(self) -> List[str]:
        """Decoded segments in order, with the part split on "/"."""
        result = [s for s in (self.workspace, self.item_type_name, self.item) if s is not None]
        if self.part:
            result.extend(self.part.split("/"))
        return result

    def truncate_to_item(self) -> "Address":
        """Drop the part suffix, keeping workspace, item type and item."""
        if self.part is None:
            return self
        return replace(self, part=None)

    @property
    def uri_key(self) -> str:
        """Canonical cache key.

        Part addresses share the key of their owning item. The key uses a
        single slash after the scheme and the enumeration's type spelling.
        """
        if self.level == AddressLevel.PART:
            return self.truncate_to_item().uri_key
        return FABRIC_SCHEME_PREFIX + "/".join(_quote_segment(s) for s in self.segments())

    def to_uri(self) -> str:
        """Serialize back to ``fabric://...`` form."""
        return f"{FABRIC_SCHEME}://" + "/".join(_quote_segment(s) for s in self.segments())

    def __str__(self) -> str:
        return self.to_uri()


def classify(address: Address) -> AddressLevel:
    """Classify an address by its deepest populated segment."""
    if address.part is not None:
        return AddressLevel.PART
    if address.item is not None:
        return AddressLevel.ITEM
    if address.item_type_text is not None:
        return AddressLevel.ITEM_TYPE
    if address.workspace is not None:
        return AddressLevel.WORKSPACE
    return AddressLevel.ROOT


def parse_uri(raw: str) -> Address:
    """Parse a raw fabric URI string.

    The first three segments are positional: an empty one followed by a
    non-empty one is a nesting violation. Empty segments inside the part
    are collapsed. A query string is ignored.

    Args:
        raw: URI string, e.g. ``fabric://ws/Notebook/nb1/notebook-content.py``

    Returns:
        Parsed Address

    Raises:
        MalformedUri: If raw does not start with ``fabric:/``
        InvalidAddress: If segments are out of nesting order
    """
    if not isinstance(raw, str) or not raw.startswith(FABRIC_SCHEME_PREFIX):
        raise MalformedUri(
            f"Fabric URI {raw!r} does not start with '{FABRIC_SCHEME_PREFIX}'", uri=raw
        )

    if len(raw) > Limits.MAX_URI_LENGTH:
        raise MalformedUri(
            f"Fabric URI exceeds maximum length ({Limits.MAX_URI_LENGTH})", uri=raw
        )

    remainder = raw[len(FABRIC_SCHEME_PREFIX):].split("?", 1)[0].strip("/")
    if not remainder:
        return Address()

    segments = [unquote(s) for s in remainder.split("/")]
    head = segments[: Limits.ITEM_DEPTH]
    head += [""] * (Limits.ITEM_DEPTH - len(head))
    part = "/".join(s for s in segments[Limits.ITEM_DEPTH:] if s)

    try:
        return Address(workspace=head[0], item_type_text=head[1], item=head[2], part=part)
    except InvalidAddress as e:
        e.uri = raw
        raise

"""Tests for fabric URI parsing and classification."""

import pytest

from fabricfs.core.constants import ErrorCode, ItemType
from fabricfs.errors import InvalidAddress, MalformedUri
from fabricfs.uri.address import Address, AddressLevel, classify, parse_uri

WS_ID = "00000000-0000-0000-0000-000000000001"
NB_ID = "00000000-0000-0000-0000-000000000002"


class TestParse:
    """Tests for parse_uri."""

    def test_parse_full_part_uri(self):
        """Identifier workspace and item with a nested part."""
        address = parse_uri(f"fabric://{WS_ID}/Notebook/{NB_ID}/folder/file.txt")

        assert address.workspace == WS_ID
        assert address.item_type == ItemType.NOTEBOOK
        assert address.item == NB_ID
        assert address.part == "folder/file.txt"
        assert address.level == AddressLevel.PART

    def test_parse_root(self):
        """Bare scheme is the root."""
        assert parse_uri("fabric://") == Address()
        assert parse_uri("fabric:/").level == AddressLevel.ROOT

    def test_parse_workspace_name(self):
        """Parsing never consults the registry."""
        address = parse_uri("fabric://MyWorkspace")
        assert address.workspace == "MyWorkspace"
        assert address.level == AddressLevel.WORKSPACE

    def test_single_slash_after_scheme(self):
        """fabric:/ws is accepted like fabric://ws."""
        assert parse_uri("fabric:/ws/Notebook") == parse_uri("fabric://ws/Notebook")

    def test_trailing_and_leading_slashes_tolerated(self):
        """Extra slashes around the path are ignored."""
        assert parse_uri("fabric:///ws/Notebook/") == parse_uri("fabric://ws/Notebook")

    def test_empty_part_segments_collapsed(self):
        """Empty segments inside the part are dropped."""
        address = parse_uri("fabric://ws/Notebook/nb//folder///file.txt")
        assert address.part == "folder/file.txt"

    def test_empty_item_type_segment_is_invalid(self):
        """An item without an item type violates nesting."""
        with pytest.raises(InvalidAddress) as exc_info:
            parse_uri("fabric://ws//item")

        assert exc_info.value.uri == "fabric://ws//item"
        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT

    def test_empty_item_segment_with_part_is_invalid(self):
        """A part without an item violates nesting."""
        with pytest.raises(InvalidAddress):
            parse_uri("fabric://ws/Notebook//file.txt")

    def test_missing_scheme_is_malformed(self):
        """Strings without the scheme prefix are rejected."""
        with pytest.raises(MalformedUri) as exc_info:
            parse_uri("file:///tmp/x")

        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT

    @pytest.mark.parametrize("raw", ["", "fabric", "fabric:", "Fabric://ws", None])
    def test_malformed_inputs(self, raw):
        """Anything not starting with fabric:/ is malformed."""
        with pytest.raises(MalformedUri):
            parse_uri(raw)

    def test_overlong_uri_is_malformed(self):
        """URIs beyond the length limit are rejected."""
        with pytest.raises(MalformedUri):
            parse_uri("fabric://" + "a" * 5000)

    def test_unknown_item_type_parses(self):
        """Unknown types fail validation later, not parsing."""
        address = parse_uri("fabric://ws/NotAType/thing")

        assert address.item_type_text == "NotAType"
        assert address.item_type is None
        assert address.level == AddressLevel.ITEM

    def test_item_type_case_insensitive(self):
        """Type text is matched case-insensitively."""
        assert parse_uri("fabric://ws/notebook").item_type == ItemType.NOTEBOOK

    def test_percent_encoded_segments_decoded(self):
        """Names with spaces arrive percent-encoded."""
        address = parse_uri("fabric://My%20Workspace/Notebook/Load%20Sales")

        assert address.workspace == "My Workspace"
        assert address.item == "Load Sales"

    def test_query_string_ignored(self):
        """Query strings are not part of the address."""
        assert parse_uri("fabric://ws/Notebook?x=1") == parse_uri("fabric://ws/Notebook")


class TestClassify:
    """Tests for classify and AddressLevel."""

    @pytest.mark.parametrize(
        "raw, level",
        [
            ("fabric://", AddressLevel.ROOT),
            ("fabric://ws", AddressLevel.WORKSPACE),
            ("fabric://ws/Report", AddressLevel.ITEM_TYPE),
            ("fabric://ws/Report/r", AddressLevel.ITEM),
            ("fabric://ws/Report/r/a", AddressLevel.PART),
            ("fabric://ws/Report/r/a/b/c/d", AddressLevel.PART),
        ],
    )
    def test_level_follows_segment_count(self, raw, level):
        """0 -> root, 1 -> workspace, 2 -> type, 3 -> item, 4+ -> part."""
        assert classify(parse_uri(raw)) == level

    def test_levels_are_ordered(self):
        """Levels compare by depth."""
        assert AddressLevel.ROOT < AddressLevel.WORKSPACE < AddressLevel.ITEM_TYPE
        assert AddressLevel.ITEM_TYPE < AddressLevel.ITEM < AddressLevel.PART


class TestAddressInvariants:
    """Tests for nesting and immutability."""

    def test_direct_construction_checks_nesting(self):
        """Constructing an out-of-order address fails."""
        with pytest.raises(InvalidAddress):
            Address(workspace="ws", item="item")

        with pytest.raises(InvalidAddress):
            Address(item_type_text="Notebook")

    def test_empty_strings_normalized(self):
        """Empty segments count as absent."""
        assert Address(workspace="ws", item_type_text="") == Address(workspace="ws")

    def test_address_is_frozen(self):
        """Addresses cannot be modified after parsing."""
        address = parse_uri("fabric://ws")
        with pytest.raises(AttributeError):
            address.workspace = "other"


class TestTruncateAndKey:
    """Tests for truncate_to_item and uri_key."""

    def test_truncate_drops_part(self):
        """Only workspace, type and item remain."""
        address = parse_uri("fabric://ws/Notebook/nb/folder/file.py")
        truncated = address.truncate_to_item()

        assert truncated == parse_uri("fabric://ws/Notebook/nb")
        assert truncated.level == AddressLevel.ITEM

    def test_truncate_is_idempotent(self):
        """Applying truncation twice equals applying it once."""
        address = parse_uri("fabric://ws/Notebook/nb/a/b")
        assert address.truncate_to_item().truncate_to_item() == address.truncate_to_item()

    def test_truncate_above_item_level_is_identity(self):
        """Nothing to drop above the item level."""
        address = parse_uri("fabric://ws/Notebook")
        assert address.truncate_to_item() == address

    def test_part_shares_item_key(self):
        """All parts of an item share the item's key."""
        item = parse_uri("fabric://ws/Notebook/item1")
        part = parse_uri("fabric://ws/Notebook/item1/partA")

        assert item != part
        assert item.uri_key == part.uri_key

    @pytest.mark.parametrize("suffix", ["a", "a/b", "a/b/c.txt", "x%20y"])
    def test_part_key_matches_truncated_key(self, suffix):
        """Key of any part equals key of its truncated address."""
        part = parse_uri(f"fabric://ws/Notebook/item1/{suffix}")
        assert part.uri_key == part.truncate_to_item().uri_key

    def test_key_has_single_slash_after_scheme(self):
        """The double slash after the scheme is collapsed."""
        assert parse_uri("fabric://ws/Notebook/nb").uri_key == "fabric:/ws/Notebook/nb"
        assert parse_uri("fabric://").uri_key == "fabric:/"

    def test_key_uses_canonical_type_spelling(self):
        """Case variants of a type share a key."""
        assert parse_uri("fabric://ws/notebook").uri_key == parse_uri("fabric://ws/Notebook").uri_key


class TestSerialization:
    """Tests for to_uri."""

    def test_round_trip_identifier_address(self):
        """Re-serializing and re-parsing yields an equal address."""
        address = Address(
            workspace=WS_ID,
            item_type_text=ItemType.SEMANTIC_MODEL.value,
            item=NB_ID,
            part="definition/model.tmdl",
        )
        assert parse_uri(address.to_uri()) == address

    def test_names_are_percent_encoded(self):
        """Spaces survive serialization."""
        address = parse_uri("fabric://My%20Workspace")

        assert address.to_uri() == "fabric://My%20Workspace"
        assert str(address) == address.to_uri()

    def test_segments(self):
        """Segments list includes part sub-segments."""
        address = parse_uri("fabric://ws/Notebook/nb/a/b")
        assert address.segments() == ["ws", "Notebook", "nb", "a", "b"]

"""Tests for the name/id registry."""

import threading

import pytest

from fabricfs.core.constants import ItemType
from fabricfs.core.validators import ValidationError
from fabricfs.registry import NameIdRegistry

WS_ID = "00000000-0000-0000-0000-000000000001"
WS_ID_2 = "00000000-0000-0000-0000-000000000002"
NB_ID = "00000000-0000-0000-0000-000000000003"
NB_ID_2 = "00000000-0000-0000-0000-000000000004"


class TestWorkspaces:
    """Tests for workspace registration and lookup."""

    def test_lookup_unregistered(self, registry):
        assert registry.lookup_workspace_id("Sales") is None

    def test_register_and_lookup(self, registry):
        registry.register_workspace("Sales", WS_ID)
        assert registry.lookup_workspace_id("Sales") == WS_ID

    def test_reregistration_overwrites(self, registry):
        """Later registrations win for the same name."""
        registry.register_workspace("Sales", WS_ID)
        registry.register_workspace("Sales", WS_ID_2)

        assert registry.lookup_workspace_id("Sales") == WS_ID_2
        assert registry.workspace_name(WS_ID_2) == "Sales"
        assert registry.workspace_name(WS_ID) is None

    def test_register_is_idempotent(self, registry):
        registry.register_workspace("Sales", WS_ID)
        registry.register_workspace("Sales", WS_ID)

        assert registry.stats() == {"workspaces": 1, "items": 0}

    def test_reverse_lookup_after_rename(self, registry):
        """Renames keep the old name resolvable; the reverse shows the new one."""
        registry.register_workspace("Sales", WS_ID)
        registry.register_workspace("Sales EMEA", WS_ID)

        assert registry.lookup_workspace_id("Sales") == WS_ID
        assert registry.lookup_workspace_id("Sales EMEA") == WS_ID
        assert registry.workspace_name(WS_ID) == "Sales EMEA"

    def test_workspaces_snapshot(self, registry):
        """The snapshot does not follow later registrations."""
        registry.register_workspace("Sales", WS_ID)
        snapshot = registry.workspaces()
        registry.register_workspace("Sales", WS_ID_2)

        assert snapshot == {"Sales": WS_ID}
        assert registry.workspaces() == {"Sales": WS_ID_2}


class TestItems:
    """Tests for item registration and lookup."""

    def test_register_and_lookup(self, registry):
        registry.register_item(WS_ID, ItemType.NOTEBOOK, "Load", NB_ID)

        assert registry.lookup_item_id(WS_ID, ItemType.NOTEBOOK, "Load") == NB_ID
        assert registry.item_name(WS_ID, ItemType.NOTEBOOK, NB_ID) == "Load"

    def test_item_type_by_name(self, registry):
        """Item types may be given by external name."""
        registry.register_item(WS_ID, "Notebook", "Load", NB_ID)

        assert registry.lookup_item_id(WS_ID, ItemType.NOTEBOOK, "Load") == NB_ID
        assert registry.lookup_item_id(WS_ID, "Notebook", "Load") == NB_ID

    def test_scoped_by_workspace_and_type(self, registry):
        registry.register_item(WS_ID, ItemType.NOTEBOOK, "Load", NB_ID)

        assert registry.lookup_item_id(WS_ID_2, ItemType.NOTEBOOK, "Load") is None
        assert registry.lookup_item_id(WS_ID, ItemType.REPORT, "Load") is None

    def test_lookup_with_missing_scope(self, registry):
        registry.register_item(WS_ID, ItemType.NOTEBOOK, "Load", NB_ID)

        assert registry.lookup_item_id(None, ItemType.NOTEBOOK, "Load") is None
        assert registry.lookup_item_id(WS_ID, None, "Load") is None
        assert registry.lookup_item_id(WS_ID, "Bogus", "Load") is None

    def test_reregistration_overwrites(self, registry):
        registry.register_item(WS_ID, ItemType.NOTEBOOK, "Load", NB_ID)
        registry.register_item(WS_ID, ItemType.NOTEBOOK, "Load", NB_ID_2)

        assert registry.lookup_item_id(WS_ID, ItemType.NOTEBOOK, "Load") == NB_ID_2
        assert registry.item_name(WS_ID, ItemType.NOTEBOOK, NB_ID) is None

    def test_unknown_item_type_rejected(self, registry):
        with pytest.raises(ValidationError):
            registry.register_item(WS_ID, "Bogus", "Load", NB_ID)


class TestLoadMapping:
    """Tests for bulk registration from configuration."""

    def test_load_mapping(self, registry):
        count = registry.load_mapping({
            "workspaces": {"Sales": WS_ID},
            "items": [
                {"workspace_id": WS_ID, "item_type": "Report", "name": "Overview", "id": NB_ID},
            ],
        })

        assert count == 2
        assert registry.lookup_workspace_id("Sales") == WS_ID
        assert registry.lookup_item_id(WS_ID, ItemType.REPORT, "Overview") == NB_ID
        assert len(registry) == 2

    def test_load_empty_mapping(self, registry):
        assert registry.load_mapping({}) == 0

    def test_load_mapping_rejects_bad_ids(self, registry):
        with pytest.raises(ValidationError):
            registry.load_mapping({"workspaces": {"Sales": "not-a-guid"}})

        assert len(registry) == 0


class TestConcurrency:
    """Tests for concurrent registration."""

    def test_concurrent_registration(self, registry):
        """No updates are lost under concurrent writers."""

        def register(offset):
            for i in range(100):
                registry.register_workspace(f"ws-{offset}-{i}", f"{offset:08d}-0000-0000-0000-{i:012d}")

        threads = [threading.Thread(target=register, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert registry.stats()["workspaces"] == 400

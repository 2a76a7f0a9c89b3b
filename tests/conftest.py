"""Shared pytest fixtures for FabricFS tests."""
import logging
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from fabricfs.core.constants import ItemType
from fabricfs.filesystem import FabricFS
from fabricfs.infrastructure.cache_manager import CacheManager
from fabricfs.infrastructure.config_manager import ConfigManager
from fabricfs.items.factory import CacheItemFactory
from fabricfs.providers.base import StaticItemProvider
from fabricfs.registry import NameIdRegistry
from fabricfs.uri.resolver import UriResolver

WORKSPACE_ID = "00000000-0000-0000-0000-000000000001"
NOTEBOOK_ID = "00000000-0000-0000-0000-000000000002"
REPORT_ID = "00000000-0000-0000-0000-000000000003"
OTHER_WORKSPACE_ID = "00000000-0000-0000-0000-00000000000a"


@pytest.fixture
def registry() -> NameIdRegistry:
    """Empty name/id registry."""
    return NameIdRegistry()


@pytest.fixture
def known_registry(registry: NameIdRegistry) -> NameIdRegistry:
    """Registry with one workspace, one notebook and one report."""
    registry.register_workspace("MyWorkspace", WORKSPACE_ID)
    registry.register_item(WORKSPACE_ID, ItemType.NOTEBOOK, "Load Sales", NOTEBOOK_ID)
    registry.register_item(WORKSPACE_ID, ItemType.REPORT, "Sales Overview", REPORT_ID)
    return registry


@pytest.fixture
def resolver(known_registry: NameIdRegistry) -> UriResolver:
    return UriResolver(known_registry)


@pytest.fixture
def factory(resolver: UriResolver) -> CacheItemFactory:
    return CacheItemFactory(resolver)


@pytest.fixture
def cache(factory: CacheItemFactory) -> CacheManager:
    return CacheManager(factory)


@pytest.fixture
def provider() -> StaticItemProvider:
    """Provider listing one workspace with two notebooks."""
    return StaticItemProvider(
        workspaces={"MyWorkspace": WORKSPACE_ID, "Other": OTHER_WORKSPACE_ID},
        items={
            (WORKSPACE_ID, ItemType.NOTEBOOK): {
                "Load Sales": NOTEBOOK_ID,
                "Clean Sales": "00000000-0000-0000-0000-000000000004",
            },
        },
    )


@pytest.fixture
def config() -> ConfigManager:
    """Configuration with defaults only."""
    return ConfigManager(load_environment=False)


@pytest.fixture
def fs(config: ConfigManager, provider: StaticItemProvider) -> FabricFS:
    """Facade with an empty registry and a static provider."""
    return FabricFS(provider=provider, config=config)


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample FabricFS configuration."""
    return {
        "fabricfs": {
            "logging": {
                "level": "DEBUG",
                "file": None,
            },
            "browser": {
                "base_url": "https://app.fabric.microsoft.com",
                "tenant_id": "tenant-123",
            },
            "registry": {
                "workspaces": {"MyWorkspace": WORKSPACE_ID},
                "items": [
                    {
                        "workspace_id": WORKSPACE_ID,
                        "item_type": "Notebook",
                        "name": "Load Sales",
                        "id": NOTEBOOK_ID,
                    }
                ],
            },
        }
    }


@pytest.fixture
def config_file(tmp_path: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = tmp_path / "fabricfs.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture(autouse=True)
def reset_fabricfs_logging():
    """Leave the fabricfs logger hierarchy as it was found."""
    root = logging.getLogger("fabricfs")
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)

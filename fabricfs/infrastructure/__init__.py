"""FabricFS Infrastructure Layer.

Services used by the URI and cache layers:
- ConfigManager: Layered configuration (defaults, YAML file, environment)
- CacheManager: Keyed store of materialized cache nodes
- Logger: Structured logging system
"""

from .cache_manager import CacheEntry, CacheManager
from .config_manager import ConfigError
from .config_manager import ConfigManager as Config
from .config_manager import ConfigSource
from .logger import Logger, LogLevel

__all__ = [
    # Logger exports
    "Logger",
    "LogLevel",
    # CacheManager exports
    "CacheEntry",
    "CacheManager",
    # ConfigManager exports
    "ConfigSource",
    "ConfigError",
    "Config",
]

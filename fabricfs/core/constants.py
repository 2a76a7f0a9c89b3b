"""
FabricFS Foundation: Constants and Type Definitions

This module provides system-wide constants, error codes, the closed item
type enumeration and the default configuration.
"""
from enum import Enum, IntEnum
from typing import Optional

# Version information
FABRICFS_VERSION = "1.0.0"

# URI scheme served by the filesystem
FABRIC_SCHEME = "fabric"
FABRIC_SCHEME_PREFIX = FABRIC_SCHEME + ":/"


# Error codes (0-9 range)
class ErrorCode(IntEnum):
    """Standardized error codes for FabricFS operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Malformed URI, invalid configuration
    NOT_FOUND = 2  # Unknown item type or unresolved name
    PERMISSION_DENIED = 3  # Insufficient permissions
    CONFLICT = 4  # Resource conflict
    DEPENDENCY_ERROR = 5  # Missing remote provider
    INTERNAL_ERROR = 6  # Bug in FabricFS
    TIMEOUT = 7  # Operation timed out
    RATE_LIMITED = 8  # Too many operations
    DEGRADED = 9  # Running with reduced functionality


class Limits:
    """System limits and default values."""

    MAX_URI_LENGTH = 4096
    MAX_SEGMENT_LENGTH = 255

    # Number of positional segments before the part begins
    ITEM_DEPTH = 3


class ItemType(Enum):
    """Closed enumeration of remote item kinds.

    The value is the external name used in URIs and API payloads.
    """

    DASHBOARD = "Dashboard"
    DATA_PIPELINE = "DataPipeline"
    DATAMART = "Datamart"
    ENVIRONMENT = "Environment"
    EVENTHOUSE = "Eventhouse"
    EVENTSTREAM = "Eventstream"
    KQL_DASHBOARD = "KQLDashboard"
    KQL_DATABASE = "KQLDatabase"
    KQL_QUERYSET = "KQLQueryset"
    LAKEHOUSE = "Lakehouse"
    MIRRORED_DATABASE = "MirroredDatabase"
    MIRRORED_WAREHOUSE = "MirroredWarehouse"
    ML_EXPERIMENT = "MLExperiment"
    ML_MODEL = "MLModel"
    NOTEBOOK = "Notebook"
    PAGINATED_REPORT = "PaginatedReport"
    REPORT = "Report"
    SEMANTIC_MODEL = "SemanticModel"
    SPARK_JOB_DEFINITION = "SparkJobDefinition"
    SQL_ENDPOINT = "SQLEndpoint"
    WAREHOUSE = "Warehouse"

    @classmethod
    def from_string(cls, text: Optional[str]) -> Optional["ItemType"]:
        """Map external type text to an enum member.

        Exact matches win; otherwise the comparison is case-insensitive.
        Returns None for empty or unknown text.
        """
        if not text:
            return None

        try:
            return cls(text)
        except ValueError:
            pass

        lowered = text.lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        return None


# Browser path segments that differ from the default "<type>s" form
ITEM_TYPE_BROWSER_LINKS = {
    ItemType.NOTEBOOK: "synapsenotebooks",
    ItemType.SEMANTIC_MODEL: "datasets",
    ItemType.REPORT: "reports",
    ItemType.SPARK_JOB_DEFINITION: "sparkjobdefinitions",
}


class ConfigKey:
    """Configuration key constants."""

    # Top-level keys
    ROOT = "fabricfs"
    LOGGING = "logging"
    BROWSER = "browser"
    REGISTRY = "registry"

    # Logging configuration
    LOG_LEVEL = "level"
    LOG_FILE = "file"

    # Browser configuration
    BROWSER_BASE_URL = "base_url"
    BROWSER_TENANT_ID = "tenant_id"

    # Registry configuration
    REGISTRY_WORKSPACES = "workspaces"
    REGISTRY_ITEMS = "items"


DEFAULT_BROWSER_BASE_URL = "https://app.powerbi.com"

# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.ROOT: {
        ConfigKey.LOGGING: {
            ConfigKey.LOG_LEVEL: "INFO",
            ConfigKey.LOG_FILE: None,
        },
        ConfigKey.BROWSER: {
            ConfigKey.BROWSER_BASE_URL: DEFAULT_BROWSER_BASE_URL,
            ConfigKey.BROWSER_TENANT_ID: None,
        },
        ConfigKey.REGISTRY: {
            ConfigKey.REGISTRY_WORKSPACES: {},
            ConfigKey.REGISTRY_ITEMS: [],
        },
    }
}

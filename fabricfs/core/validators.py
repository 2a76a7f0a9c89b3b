"""
FabricFS Foundation: Input Validators.

This module provides validation functions for identifiers, URI segments
and configuration sections.
"""
import re
from typing import Any, Dict, Optional

from fabricfs.core.constants import ConfigKey, ErrorCode, ItemType, Limits

# 8-4-4-4-12 hexadecimal identifier, e.g. 00000000-0000-0000-0000-000000000001
GUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


def is_guid(value: Optional[str]) -> bool:
    """Check whether a segment is identifier-shaped.

    Args:
        value: Segment text (may be None)

    Returns:
        True if value looks like a GUID
    """
    if not value or not isinstance(value, str):
        return False
    return GUID_PATTERN.match(value) is not None


def validate_guid(value: str) -> bool:
    """Validate that a value is a GUID.

    Raises:
        ValidationError: If value is not identifier-shaped
    """
    if not is_guid(value):
        raise ValidationError(f"Not a valid identifier: {value!r}")
    return True


def validate_name(name: str) -> bool:
    """Validate a human-readable workspace or item name.

    Args:
        name: Name to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If name is invalid
    """
    if not name:
        raise ValidationError("Name cannot be empty")

    if not isinstance(name, str):
        raise ValidationError(f"Name must be string, got {type(name)}")

    if len(name) > Limits.MAX_SEGMENT_LENGTH:
        raise ValidationError(f"Name exceeds maximum length ({Limits.MAX_SEGMENT_LENGTH})")

    if "\0" in name:
        raise ValidationError("Name contains null bytes")

    if "/" in name:
        raise ValidationError(f"Name cannot contain '/': {name}")

    return True


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate the ``fabricfs`` configuration section.

    Args:
        config: Configuration dictionary (contents of the ``fabricfs`` key)

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    if ConfigKey.LOGGING in config:
        validate_logging_config(config[ConfigKey.LOGGING])

    if ConfigKey.BROWSER in config:
        validate_browser_config(config[ConfigKey.BROWSER])

    if ConfigKey.REGISTRY in config:
        validate_registry_config(config[ConfigKey.REGISTRY])

    return True


def validate_logging_config(logging_config: Dict[str, Any]) -> bool:
    """Validate logging configuration.

    Raises:
        ValidationError: If logging config is invalid
    """
    if not isinstance(logging_config, dict):
        raise ValidationError("Logging configuration must be a dictionary")

    level = logging_config.get(ConfigKey.LOG_LEVEL)
    if level is not None:
        if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
            raise ValidationError(
                f"Invalid log level: {level}. Must be one of {sorted(VALID_LOG_LEVELS)}"
            )

    log_file = logging_config.get(ConfigKey.LOG_FILE)
    if log_file is not None and not isinstance(log_file, str):
        raise ValidationError(f"Log file must be string: {log_file}")

    return True


def validate_browser_config(browser: Dict[str, Any]) -> bool:
    """Validate browser link configuration.

    Raises:
        ValidationError: If browser config is invalid
    """
    if not isinstance(browser, dict):
        raise ValidationError("Browser configuration must be a dictionary")

    base_url = browser.get(ConfigKey.BROWSER_BASE_URL)
    if base_url is not None:
        if not isinstance(base_url, str) or not re.match(r"^https?://", base_url):
            raise ValidationError(f"Browser base_url must be an http(s) URL: {base_url}")

    tenant_id = browser.get(ConfigKey.BROWSER_TENANT_ID)
    if tenant_id is not None and not isinstance(tenant_id, str):
        raise ValidationError(f"Browser tenant_id must be string: {tenant_id}")

    return True


def validate_registry_config(registry: Dict[str, Any]) -> bool:
    """Validate preloaded name/id mappings.

    Raises:
        ValidationError: If registry config is invalid
    """
    if not isinstance(registry, dict):
        raise ValidationError("Registry configuration must be a dictionary")

    workspaces = registry.get(ConfigKey.REGISTRY_WORKSPACES) or {}
    if not isinstance(workspaces, dict):
        raise ValidationError("Registry workspaces must be a mapping of name to id")

    for name, workspace_id in workspaces.items():
        validate_name(name)
        try:
            validate_guid(workspace_id)
        except ValidationError as e:
            raise ValidationError(f"Invalid id for workspace {name!r}: {e}")

    items = registry.get(ConfigKey.REGISTRY_ITEMS) or []
    if not isinstance(items, list):
        raise ValidationError("Registry items must be a list")

    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValidationError(f"Registry item at index {i} must be a dictionary")

        missing = {"workspace_id", "item_type", "name", "id"} - set(item.keys())
        if missing:
            raise ValidationError(
                f"Registry item at index {i} is missing fields: {', '.join(sorted(missing))}"
            )

        if ItemType.from_string(item["item_type"]) is None:
            raise ValidationError(f"Unknown item type at index {i}: {item['item_type']}")

        validate_name(item["name"])
        validate_guid(item["workspace_id"])
        validate_guid(item["id"])

    return True

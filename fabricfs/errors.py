"""Exception hierarchy for URI resolution.

Every error carries an ``error_code`` so callers can map a failure to a
filesystem response without inspecting the exception type.
"""
from typing import Optional

from fabricfs.core.constants import ErrorCode


class FabricUriError(Exception):
    """Base class for all URI resolution errors."""

    default_code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, uri: Optional[str] = None,
                 error_code: Optional[ErrorCode] = None):
        self.message = message
        self.uri = uri
        self.error_code = error_code if error_code is not None else self.default_code
        super().__init__(message)


class MalformedUri(FabricUriError):
    """Raw string does not start with the fabric scheme."""

    default_code = ErrorCode.INVALID_INPUT


class InvalidAddress(FabricUriError):
    """Segments are present out of nesting order."""

    default_code = ErrorCode.INVALID_INPUT


class NotFound(FabricUriError):
    """Address is well formed but does not resolve to anything known."""

    default_code = ErrorCode.NOT_FOUND


class UnknownItemType(NotFound):
    """The item type segment is not part of the closed enumeration."""


class UnresolvedName(NotFound):
    """A name segment has no registry entry.

    Recoverable by listing the parent again and retrying.
    """


class ProviderUnavailable(FabricUriError):
    """A refresh was requested but no remote item provider is configured."""

    default_code = ErrorCode.DEPENDENCY_ERROR

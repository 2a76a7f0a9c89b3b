"""FabricFS Core - constants and input validators.

Import specific names from submodules:
    from fabricfs.core.constants import ItemType, ErrorCode
    from fabricfs.core.validators import is_guid
"""

from fabricfs.core import constants, validators

__all__ = [
    "constants",
    "validators",
]

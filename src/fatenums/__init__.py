"""fatenums: helpers for integer-backed Python enums.

This library stores collections of enum members as integer bitmasks in ORM
columns, and provides ordering and context helpers keyed by enum members.
"""

from __future__ import annotations

from .casts import (
    AsEnumCollectionBitmask,
    AsEnumListBitmask,
    AsNullableEnumCollectionBitmask,
    BitmaskCodec,
    codec_for,
    parse_cast,
    resolve_enumerator_set,
)
from .exceptions import (
    FatEnumError,
    ForeignEnumeratorError,
    InvalidEnumeratorError,
    InvalidInputError,
    NullNotAllowedError,
)
from .orm import BitmaskType

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Casts
    "AsEnumCollectionBitmask",
    "AsEnumListBitmask",
    "AsNullableEnumCollectionBitmask",
    "BitmaskCodec",
    "BitmaskType",
    "codec_for",
    "parse_cast",
    "resolve_enumerator_set",
    # Exceptions
    "FatEnumError",
    "ForeignEnumeratorError",
    "InvalidEnumeratorError",
    "InvalidInputError",
    "NullNotAllowedError",
]

"""ORM attribute casts for integer-backed enums.

This package contains the bitmask casts: conversion between a collection of
enum members and the single integer stored in the database column.
"""

from .bitmask import (
    AsEnumCollectionBitmask,
    AsEnumListBitmask,
    AsNullableEnumCollectionBitmask,
    BitmaskCodec,
    codec_for,
    enum_identifier,
    parse_cast,
    resolve_enumerator_set,
)

__all__ = [
    # Codec
    "BitmaskCodec",
    "codec_for",
    # Enumerator set resolution
    "enum_identifier",
    "resolve_enumerator_set",
    # Casts
    "AsEnumCollectionBitmask",
    "AsEnumListBitmask",
    "AsNullableEnumCollectionBitmask",
    "parse_cast",
]

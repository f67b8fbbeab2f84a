"""Bitmask casts between integer-backed enums and integer columns.

This module implements the conversion of a collection of enum members into a
single integer bitmask and back. It provides:

Functions:
    - resolve_enumerator_set: Validate an enum class (or its string identifier)
    - enum_identifier: Build the string identifier for an enum class
    - codec_for: Cached lookup of a configured BitmaskCodec
    - parse_cast: Build a codec from a "<cast>:<enum identifier>" string

Classes:
    - BitmaskCodec: Immutable encoder/decoder bound to one enumerator set
    - AsEnumListBitmask: Non-nullable cast for list/tuple values
    - AsEnumCollectionBitmask: Non-nullable cast for any collection value
    - AsNullableEnumCollectionBitmask: Nullable cast for any collection value

The bitmask rules:
    encode: OR together the value of every member (empty collection -> 0)
    decode: every member, in declaration order, with (bitmask & value) == value

    Members are expected to occupy distinct bits (1, 2, 4, 8, ...). Overlapping
    values are accepted: with {A=1, B=3} the bitmask 3 decodes to [A, B].
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, ClassVar

from ..exceptions import ForeignEnumeratorError, InvalidEnumeratorError, InvalidInputError, NullNotAllowedError

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================


CAST_SEPARATOR = ":"  # Separates cast name from enum identifier, and module from qualname

# Sized and iterable, but never a collection of enum members
_SCALAR_TYPES: tuple[type, ...] = (str, bytes, bytearray, memoryview, Mapping, Enum)

# =============================================================================
# Enumerator Set Resolution
# =============================================================================


def enum_identifier(enum_type: type[Enum] | str) -> str:
    """Return the "module:QualName" identifier of an enum class.

    Strings are returned unchanged so callers can pass either form.
    """
    if isinstance(enum_type, str):
        return enum_type

    return f"{enum_type.__module__}{CAST_SEPARATOR}{enum_type.__qualname__}"


def _import_identifier(identifier: str) -> Any:
    """Import the object named by "package.module:QualName" or "package.module.Name".

    Raises:
        InvalidEnumeratorError: If the module or attribute cannot be found
    """
    module_name, separator, qualname = identifier.partition(CAST_SEPARATOR)
    if not separator:
        module_name, _, qualname = identifier.rpartition(".")

    if not module_name or not qualname:
        raise InvalidEnumeratorError(f"Class {identifier} must be an enum")

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise InvalidEnumeratorError(f"Class {identifier} must be an enum") from e

    for attribute in qualname.split("."):
        try:
            target = getattr(target, attribute)
        except AttributeError as e:
            raise InvalidEnumeratorError(f"Class {identifier} must be an enum") from e

    return target


def resolve_enumerator_set(descriptor: type[Enum] | str) -> type[Enum]:
    """Validate that a descriptor names a closed, integer-backed enum.

    This is the configuration-time check. It runs once per codec, never per
    value.

    Args:
        descriptor: Enum class, or its identifier ("module:QualName" or "module.Name")

    Returns:
        The resolved enum class

    Raises:
        InvalidEnumeratorError: If the descriptor is not an enum class, the enum
            has no members, or any member value is not a non-negative int
    """
    enum_type = _import_identifier(descriptor) if isinstance(descriptor, str) else descriptor
    name = descriptor if isinstance(descriptor, str) else getattr(descriptor, "__qualname__", repr(descriptor))

    if not (isinstance(enum_type, type) and issubclass(enum_type, Enum)):
        logger.debug("Rejected enumerator set %s: not an enum class", name)
        raise InvalidEnumeratorError(f"Class {name} must be an enum")

    members = list(enum_type)
    if not members:
        logger.debug("Rejected enumerator set %s: no members", name)
        raise InvalidEnumeratorError(f"Class {name} must be an integer-backed enum with at least one member")

    for member in members:
        value = member.value
        # bool is an int subclass but never a meaningful bit value
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            logger.debug("Rejected enumerator set %s: member %s has value %r", name, member.name, value)
            raise InvalidEnumeratorError(f"Class {name} must be an integer-backed enum")

    return enum_type


# =============================================================================
# Bitmask Codec
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class BitmaskCodec:
    """Stateless encoder/decoder between enum members and an integer bitmask.

    A codec is bound to one enumerator set at construction, where the set is
    validated. Instances are immutable and safe to share between threads; use
    codec_for() to obtain a cached instance per configuration.

    Attributes:
        enum_type: Enum class whose members are encoded
        nullable: If True, None maps to None in both directions
        cast_name: Name used when reporting errors
        container: Collection type accepted by encode()

    Examples:
        >>> codec = BitmaskCodec(enum_type=Permission)
        >>> codec.encode([Permission.READ, Permission.WRITE])
        3
        >>> codec.decode(3)
        [<Permission.READ: 1>, <Permission.WRITE: 2>]
    """

    enum_type: type[Enum]
    nullable: bool = False
    cast_name: str = "BitmaskCodec"
    container: type[Collection[Any]] = Collection

    _cases: tuple[Enum, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        enum_type = resolve_enumerator_set(self.enum_type)

        # frozen dataclass: populate derived fields through object.__setattr__
        object.__setattr__(self, "enum_type", enum_type)
        object.__setattr__(self, "_cases", tuple(enum_type))

        logger.debug(
            "%s bound to %s (nullable=%s, %d cases)",
            self.cast_name,
            enum_identifier(enum_type),
            self.nullable,
            len(self._cases),
        )

    @property
    def cases(self) -> tuple[Enum, ...]:
        """Members of the enumerator set in declaration order."""
        return self._cases

    @property
    def enum_name(self) -> str:
        return f"{self.enum_type.__module__}.{self.enum_type.__qualname__}"

    def encode(self, values: Collection[Enum] | None) -> int | None:
        """Encode a collection of enum members into a bitmask.

        Args:
            values: Members of the configured enum, in any order (may be empty)

        Returns:
            Bitwise OR of the member values, or None for None on a nullable codec

        Raises:
            NullNotAllowedError: If values is None and the codec is not nullable
            InvalidInputError: If values is not a collection of the accepted type
            ForeignEnumeratorError: If any element is not a member of the configured enum
        """
        if values is None:
            if self.nullable:
                return None

            raise NullNotAllowedError("Value cannot be null for non-nullable cast")

        # Enum classes and Flag members are iterable, but are not collections of cases
        if isinstance(values, (type, *_SCALAR_TYPES)) or not isinstance(values, self.container):
            raise InvalidInputError(
                f"Value must be a {self.container.__name__} of {self.enum_name} cases, got {type(values).__name__}"
            )

        bitmask = 0
        for case in values:
            if not isinstance(case, self.enum_type):
                raise ForeignEnumeratorError(f"All enum cases must be instances of {self.enum_name}")

            bitmask |= case.value

        return bitmask

    def decode(self, bitmask: int | None) -> list[Enum] | None:
        """Decode a bitmask into the members whose bits are all present.

        Args:
            bitmask: Stored integer, or None when the column is empty

        Returns:
            Matching members in declaration order. None for None on a nullable
            codec, an empty list for None otherwise.

        Raises:
            InvalidInputError: If bitmask is neither an int nor None
        """
        if bitmask is None:
            return None if self.nullable else []

        if isinstance(bitmask, bool) or not isinstance(bitmask, int):
            raise InvalidInputError(f"Bitmask must be an integer, got {type(bitmask).__name__}")

        return [case for case in self._cases if (bitmask & case.value) == case.value]

    # Host persistence layers call these around the stored scalar
    write_hook = encode
    read_hook = decode


@lru_cache(maxsize=128)
def _cached_codec(
    enum_type: type[Enum],
    nullable: bool,
    cast_name: str,
    container: type[Collection[Any]],
) -> BitmaskCodec:
    return BitmaskCodec(enum_type=enum_type, nullable=nullable, cast_name=cast_name, container=container)


def codec_for(
    descriptor: type[Enum] | str,
    *,
    nullable: bool = False,
    cast_name: str = "BitmaskCodec",
    container: type[Collection[Any]] = Collection,
) -> BitmaskCodec:
    """Return the shared codec for an enumerator set and configuration.

    Cached with LRU cache (max 128 entries): repeated calls with the same
    configuration return the same object.

    Args:
        descriptor: Enum class or its string identifier
        nullable: If True, None maps to None in both directions
        cast_name: Name used when reporting errors
        container: Collection type accepted by encode()

    Raises:
        InvalidEnumeratorError: If the descriptor is not an integer-backed enum
    """
    return _cached_codec(resolve_enumerator_set(descriptor), nullable, cast_name, container)


# =============================================================================
# Casts
# =============================================================================


class _BitmaskCast:
    """Base class for named bitmask casts.

    Calling a cast class returns a configured BitmaskCodec (factory via
    __new__), never an instance of the cast class itself.
    """

    nullable: ClassVar[bool] = False
    container: ClassVar[type[Collection[Any]]] = Collection

    def __new__(cls, descriptor: type[Enum] | str) -> BitmaskCodec:  # type: ignore[misc]
        return codec_for(descriptor, nullable=cls.nullable, cast_name=cls.__name__, container=cls.container)

    @classmethod
    def of(cls, descriptor: type[Enum] | str) -> str:
        """Return the cast string for an enum, e.g. "AsEnumListBitmask:app.roles:Role"."""
        return f"{cls.__name__}{CAST_SEPARATOR}{enum_identifier(descriptor)}"


class AsEnumListBitmask(_BitmaskCast):
    """Store a list (or tuple) of enum members as a non-nullable bitmask."""

    container = Sequence


class AsEnumCollectionBitmask(_BitmaskCast):
    """Store any collection of enum members as a non-nullable bitmask."""


class AsNullableEnumCollectionBitmask(_BitmaskCast):
    """Store any collection of enum members as a nullable bitmask."""

    nullable = True


_CastTable: dict[str, type[_BitmaskCast]] = {
    cast.__name__: cast
    for cast in (
        AsEnumListBitmask,
        AsEnumCollectionBitmask,
        AsNullableEnumCollectionBitmask,
    )
}


def parse_cast(spec: str) -> BitmaskCodec:
    """Build a codec from a cast string.

    Args:
        spec: "<cast name>:<enum identifier>", as produced by <cast>.of()

    Returns:
        The shared codec for that cast and enum

    Raises:
        InvalidEnumeratorError: If the cast name is unknown or the enum is invalid
    """
    cast_name, separator, identifier = spec.partition(CAST_SEPARATOR)

    cast = _CastTable.get(cast_name)
    if cast is None or not separator:
        raise InvalidEnumeratorError(f"Cast string {spec!r} does not name a known bitmask cast")

    return cast(identifier)

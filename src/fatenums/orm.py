"""SQLAlchemy column type storing a collection of enum members as a bitmask.

    class User(Base):
        __tablename__ = "users"

        permissions = Column(BitmaskType(Permission), nullable=False, default=list)

Python -> DB: [Permission.READ, Permission.WRITE] -> 3
DB -> Python: 3 -> [Permission.READ, Permission.WRITE]

Defaults pass through process_bind_param like any other value, so a column
default must be a collection of members (default=list), never a raw integer.
"""

from __future__ import annotations

from collections.abc import Collection
from enum import Enum
from typing import Any

from sqlalchemy.types import Integer, TypeDecorator

from .casts.bitmask import BitmaskCodec, codec_for


class BitmaskType(TypeDecorator):
    """TypeDecorator mapping a list of enum members to an INTEGER column.

    The enum is validated when the type is constructed, not on first use.
    """

    impl = Integer
    cache_ok = True

    enum_type: type[Enum]
    nullable: bool
    codec: BitmaskCodec

    def __init__(self, enum_type: type[Enum] | str, nullable: bool = False) -> None:
        super().__init__()

        self.codec = codec_for(enum_type, nullable=nullable, cast_name=type(self).__name__)

        # Attribute names match __init__ arguments for SQLAlchemy's statement cache key
        self.enum_type = self.codec.enum_type
        self.nullable = nullable

    @property
    def python_type(self) -> type:
        return list

    def process_bind_param(self, value: Collection[Enum] | None, dialect: Any) -> int | None:
        """Encode members to the stored integer for INSERT/UPDATE."""
        return self.codec.write_hook(value)

    def process_result_value(self, value: int | None, dialect: Any) -> list[Enum] | None:
        """Decode the stored integer to members for SELECT."""
        return self.codec.read_hook(value)

"""fatenums exception classes."""

from __future__ import annotations


class FatEnumError(Exception):
    """Base exception for all fatenums errors."""


class InvalidEnumeratorError(FatEnumError, TypeError):
    """Configured enumerator set is not a closed, integer-backed enum."""


class ForeignEnumeratorError(FatEnumError, TypeError):
    """Value is not a member of the configured enumerator set."""


class InvalidInputError(FatEnumError, TypeError):
    """Value has the wrong shape for encoding or decoding."""


class NullNotAllowedError(FatEnumError, ValueError):
    """None given to a non-nullable cast."""

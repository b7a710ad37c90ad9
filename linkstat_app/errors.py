"""
Error kinds raised by the shortener core.

Every error carries an ``ErrorKind`` so callers can branch on the kind
(retry on ``ALIAS_CONFLICT``, surface ``ALIAS_TAKEN`` to the client, ...)
and an HTTP status the API layer maps it to.
"""

from enum import Enum


class ErrorKind(Enum):
    """Enumerated failure kinds"""
    INVALID_INPUT = "invalid_input"
    ALIAS_TAKEN = "alias_taken"
    ALIAS_CONFLICT = "alias_conflict"
    ALIAS_SPACE_EXHAUSTED = "alias_space_exhausted"
    ALIAS_NOT_FOUND = "alias_not_found"
    NO_DATA = "no_data"
    INTERNAL = "internal"


class ShortenerError(Exception):
    """Base class for all core errors"""

    kind: ErrorKind = ErrorKind.INTERNAL
    status_code: int = 500

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind.value)
        self.message = message or self.kind.value


class InvalidInput(ShortenerError):
    kind = ErrorKind.INVALID_INPUT
    status_code = 400


class AliasTaken(ShortenerError):
    """A custom alias requested by the client is already in use."""
    kind = ErrorKind.ALIAS_TAKEN
    status_code = 409


class AliasConflict(ShortenerError):
    """
    Raised by a store when an insert would violate alias uniqueness.

    The service either regenerates (generated alias) or converts it to
    ``AliasTaken`` (custom alias). Never leaves the service.
    """
    kind = ErrorKind.ALIAS_CONFLICT
    status_code = 409

    def __init__(self, alias: str):
        super().__init__(f"Alias '{alias}' already exists")
        self.alias = alias


class AliasSpaceExhausted(ShortenerError):
    kind = ErrorKind.ALIAS_SPACE_EXHAUSTED
    status_code = 503


class AliasNotFound(ShortenerError):
    kind = ErrorKind.ALIAS_NOT_FOUND
    status_code = 404

    def __init__(self, alias: str):
        super().__init__(f"Short URL '{alias}' not found")
        self.alias = alias


class NoData(ShortenerError):
    kind = ErrorKind.NO_DATA
    status_code = 404


class InternalError(ShortenerError):
    kind = ErrorKind.INTERNAL
    status_code = 500


class StorageError(InternalError):
    """Unexpected failure inside a store backend"""

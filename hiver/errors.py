"""Typed errors reported by the engine, rankers and stores.

None of these are retried internally. Callers decide whether to surface,
retry or ignore them; the API maps each class to an HTTP status code.
"""


class HiverError(Exception):
    """Base class for every error raised by the core."""

    status_code: int = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class SelfReferenceError(HiverError):
    """The viewer tried to follow or connect with themselves."""

    status_code = 400


class Unauthenticated(HiverError):
    """No viewer identity was supplied."""

    status_code = 401


class Forbidden(HiverError):
    """The viewer is not allowed to perform this transition on the edge."""

    status_code = 403


class NotFound(HiverError):
    status_code = 404


class Conflict(HiverError):
    """A duplicate edge was attempted."""

    status_code = 409


class StoreUnavailable(HiverError):
    """The backing store could not be read or written."""

    status_code = 503

# content_service/domain/exceptions.py
from typing import Optional


class CmsError(Exception):
    """Base class for errors surfaced unchanged to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(CmsError):
    status_code = 404


class Conflict(CmsError):
    """A page path is already claimed by another page."""

    status_code = 409


class BadRequest(CmsError):
    status_code = 400


class IllegalTransition(BadRequest):
    """Raised by the lifecycle guard for a forbidden status change."""


class ValidationError(CmsError):
    status_code = 400


class VersionConflict(CmsError):
    """
    The page changed underneath the caller.

    Raised when the caller's expected version does not match the stored one,
    or when a concurrent writer bumped the version between read and write.
    """

    status_code = 409

    def __init__(
        self,
        message: str,
        *,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual

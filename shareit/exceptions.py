"""
Errors raised by the booking core.

Two families reach the caller: ``NotFoundError`` (missing user, item or
booking, and ownership violations, which are reported as "not found") and
``ValidationError`` (the caller supplied data that breaks a booking rule).
The HTTP layer maps them to 404 and 400 respectively.
"""


class ShareItError(Exception):
    """Base class for every error raised by the booking core."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ShareItError):
    pass


class ForbiddenError(NotFoundError):
    """The acting user is neither the item owner nor, where allowed, the booker."""


class SelfBookingError(NotFoundError):
    """An owner tried to book their own item."""


class ValidationError(ShareItError):
    pass


class InvalidIntervalError(ValidationError):
    pass


class InvalidFilterError(ValidationError):
    pass


class UnavailableError(ValidationError):
    pass


class AlreadyApprovedError(ValidationError):
    pass


class InvalidTransitionError(ValidationError):
    pass


class InvalidPageError(ValidationError):
    pass

# booking/errors.py
#
# Purpose:
# - Error kinds raised by the managers in booking/services/.
# - Views never inspect the kind beyond picking an HTTP status; the client
#   only ever sees {"ok": false, "error": "<message>"}.
#
from contextlib import contextmanager

from django.db import DatabaseError


class BookingError(Exception):
    """Base class for every error the API turns into an error envelope."""

    status_code = 400
    default_message = "Request failed"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingBusiness(BookingError):
    """No Business row exists yet (bootstrap has not been run)."""

    default_message = "No business found (run bootstrap)"


class ValidationError(BookingError):
    """A required field is absent or a value is malformed."""

    default_message = "Invalid request"


class NotFoundError(BookingError):
    status_code = 404
    default_message = "Not found"


class StorageError(BookingError):
    """
    The database refused the operation (constraint violation, lost
    connection, ...). The raw driver message is passed through.
    """

    status_code = 500
    default_message = "Storage failure"


class Forbidden(BookingError):
    status_code = 403
    default_message = "Not allowed"


@contextmanager
def storage_errors():
    """
    Re-raise database failures as StorageError with the driver's message.

    Put this OUTSIDE transaction.atomic() so the rollback has already
    happened when the error is translated.
    """
    try:
        yield
    except DatabaseError as exc:
        raise StorageError(str(exc) or exc.__class__.__name__) from exc

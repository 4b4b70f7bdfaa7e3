# booking/envelope.py
#
# Purpose:
# - Every JSON endpoint answers with {"ok": true, ...} or {"ok": false, "error": "..."}.
# - EnvelopeAPIView catches everything at the boundary and renders the
#   failure envelope; subclasses only pick the HTTP statuses.
#
# Status rules:
# - BookingError subclasses carry their own status (MissingBusiness and
#   ValidationError 400, Forbidden 403, NotFoundError 404, StorageError 500).
# - A view can override the NotFoundError status (not_found_status) and the
#   status for storage/unexpected failures (failure_status). The services
#   endpoints answer 400 for every failure; the staff endpoints use 404/500.
#
import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import APIView

from .errors import BookingError, MissingBusiness, NotFoundError, StorageError, ValidationError
from .serializers import error_message

logger = logging.getLogger(__name__)


def ok(http_status=status.HTTP_200_OK, **payload):
    return Response({"ok": True, **payload}, status=http_status)


def fail(message, http_status):
    return Response({"ok": False, "error": message}, status=http_status)


class EnvelopeAPIView(APIView):
    failure_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    not_found_status = status.HTTP_404_NOT_FOUND

    def request_body(self, request):
        """The parsed JSON body; anything but an object is rejected."""
        data = request.data
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    def validate(self, serializer):
        """Run a DRF serializer, raising our ValidationError with a flat message."""
        if not serializer.is_valid():
            raise ValidationError(error_message(serializer.errors))
        return serializer.validated_data

    def status_for(self, exc):
        if isinstance(exc, NotFoundError):
            return self.not_found_status
        if isinstance(exc, StorageError):
            return self.failure_status
        if isinstance(exc, (MissingBusiness, ValidationError)):
            return status.HTTP_400_BAD_REQUEST
        return exc.status_code

    def handle_exception(self, exc):
        if isinstance(exc, BookingError):
            http_status = self.status_for(exc)
            log = logger.error if http_status >= 500 else logger.warning
            log("%s %s failed (%s): %s", self.request.method, self.request.path, http_status, exc.message)
            return fail(exc.message, http_status)

        if isinstance(exc, APIException):
            # Malformed JSON, wrong method, ... keep DRF's status.
            logger.warning("%s %s rejected: %s", self.request.method, self.request.path, exc.detail)
            return fail(str(exc.detail), exc.status_code)

        logger.exception("Unhandled error in %s %s", self.request.method, self.request.path)
        return fail(str(exc) or "Unknown error", self.failure_status)

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ApplicationError(Exception):
    """
    Base class for business-rule failures raised by the service layer.
    The exception handler turns these into ``{"success": false, "message": ...}``.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "The request could not be processed."

    def __init__(self, message=None, status_code=None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class NotFound(ApplicationError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."


class Conflict(ApplicationError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict."


class InvalidInput(ApplicationError):
    default_message = "Invalid input."


class InsufficientFunds(ApplicationError):
    default_message = "Insufficient wallet balance"


class CapacityExceeded(ApplicationError):
    default_message = "Tournament is full"


class TransientStoreFailure(ApplicationError):
    """The store aborted the unit of work; nothing was applied and the caller may retry."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Temporary storage failure, please retry."


def custom_exception_handler(exc, context):
    if isinstance(exc, ApplicationError):
        data = {"success": False, "message": exc.message}
        if isinstance(exc, TransientStoreFailure):
            data["retryable"] = True
        return Response(data, status=exc.status_code)

    response = exception_handler(exc, context)

    if response is not None:
        if isinstance(response.data, dict):
            detail = response.data.get("detail", response.data)
        else:
            detail = response.data
        response.data = {
            "success": False,
            "message": str(detail) if not isinstance(detail, (dict, list)) else "Invalid input.",
            "errors": detail if isinstance(detail, (dict, list)) else None,
            "status_code": response.status_code,
        }
        return response

    view = context.get("view")
    logger.exception(
        "Unhandled error in %s", view.__class__.__name__ if view else "unknown view"
    )
    return Response(
        {"success": False, "message": "An unexpected error occurred."},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )

"""
Error taxonomy

Services raise these directly. They are DRF ``APIException`` subclasses,
so the API layer renders them as ``{"detail": ...}`` with the matching
status code and no translation step in between.
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class ConflictError(APIException):
    """Slot already taken, room closed, or an admin-only ledger action."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"


class NotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


class ForbiddenError(APIException):
    """Requester's privilege tier is too low for the target."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You do not have permission to perform this action."
    default_code = "forbidden"


class BadRequestError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request."
    default_code = "bad_request"

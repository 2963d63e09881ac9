from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger("portal")


# ---- Portal error taxonomy ---------------------------------------------


class AuthorizationError(APIException):
    """Actor lacks the role, ownership or department the action requires."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You do not have permission to perform this action."
    default_code = "authorization_error"


class LifecycleValidationError(APIException):
    """
    A field required by the requested transition is missing or malformed.

    ``detail`` may be a plain message or a ``{field: message}`` mapping.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input."
    default_code = "validation_error"


class RecordNotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Project not found."
    default_code = "not_found"


class UpstreamError(APIException):
    """The database or identity provider failed for infrastructure reasons."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "The service is temporarily unavailable. Please try again."
    default_code = "upstream_error"


def custom_exception_handler(exc, context):
    """
    Wrap DRF + Django exceptions into a consistent response format.

    Success responses (2xx) are not touched.
    Only errors come through here.
    """
    response = drf_exception_handler(exc, context)

    # If DRF handled it, wrap it
    if response is not None:
        if isinstance(exc, UpstreamError):
            logger.error("Upstream failure: %s", exc.detail)
        return Response(
            {
                "success": False,
                "status_code": response.status_code,
                "code": getattr(exc, "default_code", None),
                "errors": response.data,
            },
            status=response.status_code,
            headers=_passthrough_headers(response),
        )

    # Unhandled exceptions -> 500
    logger.exception("Unhandled API exception", exc_info=exc)

    return Response(
        {
            "success": False,
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "code": "server_error",
            "errors": {"detail": "Internal server error."},
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _passthrough_headers(response):
    # Keep Retry-After / WWW-Authenticate set by DRF on throttles and 401s
    return {
        name: response[name]
        for name in ("Retry-After", "WWW-Authenticate")
        if response.has_header(name)
    }

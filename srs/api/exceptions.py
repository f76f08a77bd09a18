import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from ..errors import InvalidInputError, NotFoundError, StorageError

logger = structlog.get_logger()

STATUS_BY_ERROR = {
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StorageError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def srs_exception_handler(exc, context):
    for error_cls, status_code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_cls):
            logger.warning(
                "srs_error_response",
                error=type(exc).__name__,
                detail=str(exc),
                status=status_code,
            )
            return Response({"error": str(exc)}, status=status_code)
    return exception_handler(exc, context)

"""
Mapping from domain errors to HTTP responses.

Handlers catch ``DomainError`` and raise the ``HTTPException`` built
here, so the status code for each error code is decided in one place.
"""

from fastapi import HTTPException, status

from lesson_booking_api.app.core.errors import DomainError, ErrorCode


STATUS_BY_CODE = {
    ErrorCode.INVALID_NAME: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PHONE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ITEMS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_FIELD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_TYPE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNKNOWN_LESSON: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INSUFFICIENT_SPACE: status.HTTP_409_CONFLICT,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.STORE_NOT_INITIALIZED: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def to_http_exception(error: DomainError) -> HTTPException:
    status_code = STATUS_BY_CODE.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return HTTPException(status_code=status_code, detail=error.to_dict())

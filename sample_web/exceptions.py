"""Custom API exceptions"""

from fastapi import HTTPException, status

from zoomclient.models import Err


class APIException(HTTPException):
    """Базовое исключение для API."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class ZoomUpstreamError(APIException):
    """Zoom API вернул ошибку."""

    def __init__(self, operation: str, error: Err):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Zoom {operation} failed: {error}",
        )
        self.error = error

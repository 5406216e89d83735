from zoomclient.models.result import Err, ErrorKind


class ZoomAPIError(Exception):
    """Базовая ошибка Zoom API."""

    pass


class ZoomAuthenticationError(ZoomAPIError):
    """Ошибка аутентификации."""

    pass


class ZoomRequestError(ZoomAPIError):
    """Ошибка выполнения запроса."""

    pass


class ZoomResponseError(ZoomAPIError):
    """Ошибка ответа API."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def error_to_exception(error: Err) -> ZoomAPIError:
    """Исключение для Err.unwrap()."""
    if error.kind is ErrorKind.AUTHENTICATION:
        return ZoomAuthenticationError(str(error))
    if error.kind in (ErrorKind.TRANSPORT, ErrorKind.INVALID_ARGUMENT):
        return ZoomRequestError(str(error))
    return ZoomResponseError(str(error), status_code=error.status_code)

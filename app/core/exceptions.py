"""Application error types rendered by the exception handlers in main."""

from typing import Any


class AppError(Exception):
    """Base error carrying an HTTP status and a client-safe message."""

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None, **extra: Any):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, **self.extra}


class ValidationFailed(AppError):
    """Bad shape or content; lists every violation."""

    status_code = 400
    default_message = "Validation Error"

    def __init__(self, details: list[str], message: str | None = None):
        super().__init__(message, details=details)


class InvalidInput(AppError):
    """Single user-correctable field problem."""

    status_code = 400
    default_message = "Invalid input"

    def __init__(self, message: str | None = None, field: str | None = None):
        if field:
            super().__init__(message, field=field)
        else:
            super().__init__(message)


class Conflict(AppError):
    status_code = 400
    default_message = "Resource already exists"

    def __init__(self, message: str | None = None, field: str | None = None):
        if field:
            super().__init__(message, field=field)
        else:
            super().__init__(message)


class Unauthorized(AppError):
    status_code = 401
    default_message = "Not authenticated"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class CameraNotFound(NotFound):
    default_message = "Camera not found"


class UpstreamFailure(AppError):
    """Worker or gateway unreachable or erroring."""

    status_code = 500
    default_message = "Upstream service failed"

    def __init__(self, upstream_message: str, message: str | None = None):
        super().__init__(
            f"{message or self.default_message}: {upstream_message}",
            upstream=upstream_message,
        )
        self.upstream_message = upstream_message


class StreamStartFailed(UpstreamFailure):
    default_message = "Failed to start stream"


class StreamStopFailed(UpstreamFailure):
    default_message = "Failed to stop stream"


class StreamStatusFailed(UpstreamFailure):
    default_message = "Failed to get stream status"


class ViewerNegotiationFailed(UpstreamFailure):
    default_message = "Failed to negotiate viewer session"

# common/api_error/ApiError.py
class AppError(Exception):
    """Base error for all application-specific issues."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "INTERNAL_ERROR",
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(self.message)


class DatabaseError(AppError):
    """Record store read/write failed."""

    def __init__(self, message: str = "Record store unavailable"):
        super().__init__(message, status_code=503, code="DATABASE_ERROR")


class RecordNotFoundError(AppError):
    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(
            f"No record '{record_id}' in {collection}",
            status_code=404,
            code="NOT_FOUND",
        )


class InvalidTransitionError(AppError):
    """Status change that is not an edge of the appointment lifecycle."""

    def __init__(self, message: str):
        super().__init__(message, status_code=409, code="INVALID_TRANSITION")


class SlotUnavailableError(AppError):
    def __init__(self, message: str):
        super().__init__(message, status_code=409, code="SLOT_UNAVAILABLE")


class BookingInProgressError(AppError):
    def __init__(self, message: str = "A booking is already being submitted"):
        super().__init__(message, status_code=409, code="BOOKING_IN_PROGRESS")


class AuthenticationError(AppError):
    def __init__(self, message: str = "Sign-in required"):
        super().__init__(message, status_code=401, code="UNAUTHENTICATED")


class PermissionDeniedError(AppError):
    def __init__(self, message: str = "Admin access required"):
        super().__init__(message, status_code=403, code="FORBIDDEN")


class AssetUploadError(AppError):
    """Asset host rejected or never answered the upload."""

    def __init__(self, message: str):
        super().__init__(message, status_code=502, code="UPLOAD_FAILED")


__all__ = [
    "AppError",
    "DatabaseError",
    "RecordNotFoundError",
    "InvalidTransitionError",
    "SlotUnavailableError",
    "BookingInProgressError",
    "AuthenticationError",
    "PermissionDeniedError",
    "AssetUploadError",
]

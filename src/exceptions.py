"""Application error types.

Every error carries the HTTP status it is rendered with, so services can
raise them without knowing about FastAPI and the app turns them into a
``{"detail": message}`` JSON body.
"""


class AppError(Exception):
    """Base class for all application errors."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConflictError(AppError):
    """Raised when a username or email is already taken."""

    status_code = 400
    default_message = "User already exists"


class InvalidCredentialsError(AppError):
    """Raised when signin fails, whether the email or the password was wrong."""

    status_code = 400
    default_message = "Invalid credentials"


class UnauthenticatedError(AppError):
    """Raised when a bearer token is missing, malformed, expired or forged."""

    status_code = 401
    default_message = "Invalid authentication credentials"


class ForbiddenError(AppError):
    """Raised when the caller does not own the resource."""

    status_code = 403
    default_message = "Not authorized to perform this action"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class BadRequestError(AppError):
    status_code = 400
    default_message = "Bad request"


class UnsupportedMediaTypeError(AppError):
    status_code = 415
    default_message = "Only image files are allowed"


class PayloadTooLargeError(AppError):
    status_code = 413
    default_message = "File too large"


class InternalError(AppError):
    """Raised for persistence or other unexpected failures."""


class NotificationError(AppError):
    """Raised when an email could not be delivered.

    Never rendered as an HTTP response: the support flow logs it and
    carries on.
    """

    default_message = "Failed to send notification"

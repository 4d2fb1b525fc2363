"""Account error types, converted to JSON responses at the HTTP boundary."""


class AccountError(Exception):
    """Base class for errors reported to the caller as `{"success": false, "message": ...}`."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AccountError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "All fields are required"


class ConflictError(AccountError):
    """Email already registered."""

    status_code = 400
    default_message = "Email already exists"


class InvalidCredentials(AccountError):
    """Login failure. Same message whether the email or the password was wrong."""

    status_code = 400
    default_message = "Invalid email or password"


class NotFound(AccountError):
    status_code = 404
    default_message = "User not found"


class InvalidOrExpiredToken(AccountError):
    status_code = 400
    default_message = "Invalid or expired token"


class UpstreamFailure(AccountError):
    """Media host or mail server call failed."""

    status_code = 500
    default_message = "Upstream service failed"


class InternalError(AccountError):
    status_code = 500
    default_message = "Internal server error"

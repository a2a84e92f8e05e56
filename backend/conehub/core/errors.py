from enum import Enum


AUTH_FAILED_MESSAGE = "Invalid Team ID or Password"


class ConehubError(Exception):
    pass


class ValidationReason(str, Enum):
    MISSING_FIELD = "missing_field"
    PASSWORD_MISMATCH = "password_mismatch"
    PASSWORD_TOO_SHORT = "password_too_short"


_VALIDATION_MESSAGES = {
    ValidationReason.MISSING_FIELD: "Please fill in all required fields",
    ValidationReason.PASSWORD_MISMATCH: "Passwords do not match!",
    ValidationReason.PASSWORD_TOO_SHORT: "Password must be at least 4 characters",
}


class ValidationError(ConehubError):
    def __init__(self, reason: ValidationReason, message: str | None = None):
        self.reason = reason
        self.message = message or _VALIDATION_MESSAGES[reason]
        super().__init__(self.message)


class AuthenticationError(ConehubError):
    """Base for lookup/credential failures.

    Subclasses stay distinguishable for logging and tests, but str() is the
    same for both so nothing user-facing tells them apart.
    """

    def __init__(self, team_id: str | None = None):
        self.team_id = team_id
        super().__init__(AUTH_FAILED_MESSAGE)


class NotFoundError(AuthenticationError):
    pass


class InvalidCredentialError(AuthenticationError):
    pass


class StoreError(ConehubError):
    pass


class StoreConflictError(StoreError):
    pass

"""
Domain errors raised by the services.

Each error carries the HTTP status it maps to and a field tag that the API
renders as ``{"error": field, "message": message}``.
"""


class EventAppError(Exception):
    status_code = 500
    field = "general"
    default_message = "Server error"

    def __init__(self, message: str | None = None, *, field: str | None = None):
        self.message = message or self.default_message
        if field is not None:
            self.field = field
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.field, "message": self.message}


class ValidationError(EventAppError):
    status_code = 400
    default_message = "Invalid input"


class NotFoundError(EventAppError):
    status_code = 404
    default_message = "Not found"


# ---------- Conflicts (business-rule violations) ----------
class ConflictError(EventAppError):
    status_code = 400
    default_message = "Conflict"


class DuplicateRegistrationError(ConflictError):
    field = "registration"
    default_message = "You are already registered for this event"


class CapacityExceededError(ConflictError):
    field = "capacity"
    default_message = "Event is full"


class NotRegisteredError(ConflictError):
    field = "registration"
    default_message = "You are not registered for this event"


class DuplicateUserError(ConflictError):
    field = "username"
    default_message = "Username already exists"


# ---------- Credentials ----------
class CredentialError(EventAppError):
    status_code = 401
    default_message = "Invalid credentials"


class UnknownUserError(CredentialError):
    field = "username"
    default_message = "User does not exist"


class InvalidCredentialError(CredentialError):
    field = "password"
    default_message = "Incorrect password"


# ---------- Store failures ----------
class TransactionError(EventAppError):
    """A multi-step mutation failed and was rolled back."""

    status_code = 500
    default_message = "Server error"

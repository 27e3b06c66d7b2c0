"""Error taxonomy shared by the stores and the HTTP layer.

Stores raise these; ``cardflow.main`` renders them as ``{"message": ...}``
JSON with the status code each class carries.
"""


class CardflowError(Exception):
    status_code = 500
    message = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(CardflowError):
    status_code = 400
    message = "Validation failed"

    def __init__(self, errors: list[dict] | None = None, message: str | None = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])

    def to_dict(self) -> dict:
        return {"message": self.message, "errors": self.errors}


class Unauthorized(CardflowError):
    status_code = 401
    message = "Unauthorized: Invalid token"


class NotFound(CardflowError):
    status_code = 404
    message = "Not found"


class ProtectedResource(CardflowError):
    status_code = 400
    message = "Cannot delete main workspace"


class CapacityExceeded(CardflowError):
    status_code = 400
    message = "Maximum number of workspaces reached"


class DuplicateEmail(CardflowError):
    status_code = 400
    message = "User already exists"


class InvalidCredentials(CardflowError):
    status_code = 400
    message = "Invalid credentials"


class InvalidReference(CardflowError):
    status_code = 400
    message = "Invalid workspace ID"


class InternalError(CardflowError):
    status_code = 500
    message = "Server error"

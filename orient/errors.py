from __future__ import annotations


class ApiError(Exception):
    """Domain failure that maps onto one HTTP status.

    Raised by services and blueprints; rendered as JSON by the error handler
    installed in ``create_app``.
    """

    status = 500
    code = "INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, *, code: str | None = None, field: str | None = None):
        self.message = (message or self.default_message).strip() or self.default_message
        if code:
            self.code = code
        self.field = field
        super().__init__(self.message)

    def to_payload(self) -> dict:
        payload = {
            "ok": False,
            "error": self.code,
            "message": self.message,
            "status": int(self.status),
        }
        if self.field:
            payload["field"] = self.field
        return payload


class ValidationError(ApiError):
    status = 400
    code = "VALIDATION_ERROR"
    default_message = "Invalid request"

    @classmethod
    def for_field(cls, field: str, reason: str) -> "ValidationError":
        return cls(f"{field}: {reason}", field=field)


class UnauthorizedError(ApiError):
    status = 401
    code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class ForbiddenError(ApiError):
    status = 403
    code = "FORBIDDEN"
    default_message = "Forbidden"


class NotFoundError(ApiError):
    status = 404
    code = "NOT_FOUND"
    default_message = "Not found"


class UnexpectedError(ApiError):
    status = 500
    code = "INTERNAL_ERROR"
    default_message = "Internal server error"

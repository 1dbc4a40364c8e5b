from __future__ import annotations

from typing import Any, Optional


class RecordsError(Exception):
    """Base for errors that map onto a fixed HTTP status and error code."""

    status_code = 500
    code = "internal_error"

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(RecordsError):
    status_code = 400
    code = "validation_error"


class Unauthorized(RecordsError):
    status_code = 401
    code = "unauthorized"


class Forbidden(RecordsError):
    status_code = 403
    code = "forbidden"


class NotFound(RecordsError):
    status_code = 404
    code = "not_found"


class Conflict(RecordsError):
    status_code = 409
    code = "conflict"


def require_fields(fields: dict, names: tuple, message: str = "Required fields missing") -> None:
    missing = [n for n in names if _blank(fields.get(n))]
    if missing:
        raise ValidationError(message, details={"missing": missing})


def _blank(v: Any) -> bool:
    if v is None:
        return True
    if isinstance(v, str) and v.strip() == "":
        return True
    return False

from __future__ import annotations

from typing import Any, Optional
from pydantic import BaseModel


class MutationOut(BaseModel):
    success: bool = True
    id: Optional[str] = None


class ErrorOut(BaseModel):
    error: str
    message: str
    request_id: Optional[str] = None
    details: Any = None


ERROR_RESPONSES = {
    400: {"model": ErrorOut},
    401: {"model": ErrorOut},
    403: {"model": ErrorOut},
    404: {"model": ErrorOut},
    409: {"model": ErrorOut},
}

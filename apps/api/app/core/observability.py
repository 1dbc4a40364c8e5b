"""
Structured event logging.

Contract:
- one JSON object per line with keys: ts, level, message, request_id, event, module
- X-Request-Id in/out (missing -> generated; always echoed back; also on errors)
- Error envelope keys: error, message, request_id, details
"""
from __future__ import annotations

import json
import logging
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.core.config import get_log_level

_log = logging.getLogger("app")

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def configure_logging() -> None:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=get_log_level(), format="%(message)s")
    _log.setLevel(get_log_level())


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def emit(level: str, event: str, message: str, module: str, request_id: Optional[str] = None, **extra: Any) -> None:
    payload: Dict[str, Any] = {
        "ts": _now_iso(),
        "level": level.lower(),
        "message": message,
        "request_id": request_id if request_id is not None else request_id_var.get(),
        "event": event,
        "module": module,
    }
    payload.update(extra)
    _log.log(logging.getLevelName(level.upper()), json.dumps(payload, ensure_ascii=False, default=str))

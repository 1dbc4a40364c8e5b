from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_api_prefix, get_app_version
from app.core.db import db_health, open_engine
from app.core.errors import RecordsError
from app.core.observability import configure_logging, emit, request_id_var
from app.modules.characters.router import router as characters_router
from app.modules.records.router import router as records_router
from app.modules.users.router import router as access_router
from app.modules.vehicles.router import router as vehicles_router
from app.modules.warrants.router import router as warrants_router

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.engine = open_engine()
    emit("info", "app.startup", "engine opened", __name__, version=get_app_version())
    try:
        yield
    finally:
        app.state.engine.dispose()
        app.state.engine = None
        emit("info", "app.shutdown", "engine disposed", __name__)


app = FastAPI(title="DMV Records API", version=get_app_version(), lifespan=lifespan)

_prefix = get_api_prefix()
app.include_router(access_router, prefix=_prefix)
app.include_router(characters_router, prefix=_prefix)
app.include_router(vehicles_router, prefix=_prefix)
app.include_router(records_router, prefix=_prefix)
app.include_router(warrants_router, prefix=_prefix)


# === OBSERVABILITY ===
# - /health keys: status, version, db
# - X-Request-Id in/out (missing -> generated; always echoed back; also on errors)
# - Error envelope keys: error, message, request_id, details

def _err_envelope(error: str, message: str, request_id: Optional[str], details: Any, status_code: int):
    headers = {}
    if request_id:
        headers["X-Request-Id"] = request_id
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "request_id": request_id,
            "details": details,
        },
        headers=headers,
    )


@app.middleware("http")
async def _request_id_mw(request: Request, call_next):
    rid = request.headers.get("X-Request-Id") or uuid.uuid4().hex.upper()
    request.state.request_id = rid
    token = request_id_var.set(rid)
    emit("info", "http.request.start", f"{request.method} {request.url.path}", __name__, rid)
    try:
        resp = await call_next(request)
    except Exception as e:
        emit("error", "http.request.exception", str(e), __name__, rid)
        raise
    finally:
        request_id_var.reset(token)
    resp.headers["X-Request-Id"] = rid
    emit("info", "http.request.end", f"{request.method} {request.url.path} -> {getattr(resp, 'status_code', None)}", __name__, rid)
    return resp


@app.exception_handler(RecordsError)
async def _records_exc_handler(request: Request, exc: RecordsError):
    rid = getattr(request.state, "request_id", None)
    return _err_envelope(exc.code, exc.message, rid, exc.details, exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
    rid = getattr(request.state, "request_id", None)
    return _err_envelope("http_error", str(exc.detail), rid, {"status_code": exc.status_code}, exc.status_code)


@app.exception_handler(RequestValidationError)
async def _validation_exc_handler(request: Request, exc: RequestValidationError):
    # malformed bodies share the 400 of missing required fields
    rid = getattr(request.state, "request_id", None)
    return _err_envelope("validation_error", "request validation failed", rid, jsonable_encoder(exc.errors()), 400)


@app.exception_handler(Exception)
async def _unhandled_exc_handler(request: Request, exc: Exception):
    rid = getattr(request.state, "request_id", None)
    emit("error", "http.request.unhandled", type(exc).__name__, __name__, rid)
    return _err_envelope("internal_error", "internal server error", rid, {"type": type(exc).__name__}, 500)
# === END OBSERVABILITY ===


@app.get("/health")
def health():
    db = db_health(getattr(app.state, "engine", None))
    return {
        "status": "ok" if db.get("status") == "ok" else "degraded",
        "version": get_app_version(),
        "db": db,
    }

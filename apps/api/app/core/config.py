"""
Runtime configuration read from the environment.

Every value sits behind a getter so it is read at call time, which keeps
role ids and limits overridable without re-importing the app.
"""
from __future__ import annotations

import os

DEFAULT_DATABASE_URL = "sqlite:///./data/app.db"


def get_app_version() -> str:
    return os.getenv("APP_VERSION", "0.1.0")


def get_database_url() -> str:
    return os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)


def get_api_prefix() -> str:
    raw = os.getenv("API_PREFIX", "/api/dmv").strip()
    if not raw or raw == "/":
        return ""
    return "/" + raw.strip("/")


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_leo_role_id() -> str:
    return os.getenv("LEO_ROLE_ID", "").strip()


def get_judge_role_id() -> str:
    return os.getenv("JUDGE_ROLE_ID", "").strip()


def _int_env(name: str, default: int) -> int:
    try:
        v = int(os.getenv(name, str(default)))
    except ValueError:
        return default
    return v if v > 0 else default


def get_search_limit() -> int:
    return _int_env("SEARCH_LIMIT", 20)


def get_search_min_query() -> int:
    return _int_env("SEARCH_MIN_QUERY", 2)

"""
Environment-driven settings.

Values are read at call time so tests (and operators) can override them with
plain environment variables. Unparsable values fall back to the default.
"""

from __future__ import annotations

import os


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    return default


def stream_interval_s() -> float:
    return _env_float("NEWS_STREAM_INTERVAL_S", 3.0)


def stream_buffer_size() -> int:
    # A zero-sized asyncio.Queue is unbounded, so never go below 1.
    return max(1, _env_int("NEWS_STREAM_BUFFER_SIZE", 50))


def backpressure_interval_s() -> float:
    return _env_float("NEWS_BACKPRESSURE_INTERVAL_S", 0.1)


def backpressure_buffer_size() -> int:
    return max(1, _env_int("NEWS_BACKPRESSURE_BUFFER_SIZE", 10))


def slow_delay_s() -> float:
    return max(0.0, _env_float("NEWS_SLOW_DELAY_S", 1.0))


def generator_enabled() -> bool:
    return _env_bool("NEWS_GENERATOR_ENABLED", True)


def sse_ping_s() -> int:
    return _env_int("SSE_PING_S", 15)


def cors_allow_origins() -> list[str]:
    raw = _env_str("CORS_ALLOW_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def host() -> str:
    return _env_str("HOST", "0.0.0.0")


def port() -> int:
    return _env_int("PORT", 8000)

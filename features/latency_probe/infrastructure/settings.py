from __future__ import annotations

import os
from pathlib import Path
from typing import Final

from features.latency_probe.domain.probing import (
    DEFAULT_ATTEMPT_COUNT,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_PROXY_HOST,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TEST_URL,
    ProbeSettings,
)


ENV_FILE: Final[Path] = Path(".env")
DEFAULT_CONFIG_PATH: Final[str] = "config.json"


def _load_env_file() -> None:
    """Populate os.environ from .env if present without overriding existing values."""

    if not ENV_FILE.exists():
        return

    try:
        with ENV_FILE.open("r", encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                value = value.split("#", 1)[0].strip()
                if key and key not in os.environ:
                    os.environ[key] = value
    except OSError:
        # Unreadable .env: fall back to the process environment.
        return


def _positive_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


_load_env_file()


def latency_test_url() -> str:
    return os.getenv("LATENCY_TEST_URL", "").strip() or DEFAULT_TEST_URL


def latency_attempt_count() -> int:
    raw = os.getenv("LATENCY_ATTEMPTS")
    if raw is None:
        return DEFAULT_ATTEMPT_COUNT
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_ATTEMPT_COUNT
    return max(1, value)


def latency_request_timeout() -> float:
    return _positive_float("LATENCY_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)


def latency_connect_timeout() -> float:
    return _positive_float("LATENCY_CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT)


def latency_proxy_host() -> str:
    return os.getenv("LATENCY_PROXY_HOST", "").strip() or DEFAULT_PROXY_HOST


def router_config_path() -> Path:
    return Path(os.getenv("LATENCY_CONFIG_PATH", "").strip() or DEFAULT_CONFIG_PATH)


def probe_settings(attempt_count: int | None = None) -> ProbeSettings:
    return ProbeSettings(
        test_url=latency_test_url(),
        attempt_count=attempt_count if attempt_count is not None else latency_attempt_count(),
        request_timeout=latency_request_timeout(),
        connect_timeout=latency_connect_timeout(),
        proxy_host=latency_proxy_host(),
    )

"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_BASE_URL = "https://api.waqi.info"
DEFAULT_TOKEN = "demo"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    """Settings for the WAQI client, the resolver and the HTTP server."""

    waqi_base_url: str = DEFAULT_BASE_URL
    waqi_token: str = DEFAULT_TOKEN
    http_timeout: float = 10.0
    box_delta: float = 0.5
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> Settings:
        box_delta = _env_float("AEROGUARD_BOX_DELTA", cls.box_delta)
        if box_delta <= 0:
            raise ValueError("AEROGUARD_BOX_DELTA must be positive")
        timeout = _env_float("AEROGUARD_HTTP_TIMEOUT", cls.http_timeout)
        if timeout <= 0:
            raise ValueError("AEROGUARD_HTTP_TIMEOUT must be positive")

        return cls(
            waqi_base_url=os.getenv("WAQI_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            waqi_token=os.getenv("WAQI_TOKEN", DEFAULT_TOKEN),
            http_timeout=timeout,
            box_delta=box_delta,
            host=os.getenv("AEROGUARD_HOST", cls.host),
            port=_env_int("AEROGUARD_PORT", cls.port),
        )

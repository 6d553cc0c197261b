from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ..utils.logging import env_truthy

DEFAULT_API_BASE_URL = "https://jsonplaceholder.typicode.com/"

_ENV_BASE_URL = "ROSTER_API_BASE_URL"
_ENV_API_KEY = "ROSTER_API_KEY"
_ENV_TIMEOUT = "ROSTER_REQUEST_TIMEOUT_S"
_ENV_RETRIES = "ROSTER_RETRIES"
_ENV_WRITE_THROUGH = "ROSTER_WRITE_THROUGH"


@dataclass(frozen=True)
class ClientConfig:
    """Typed runtime settings for the users client."""

    api_base_url: str = DEFAULT_API_BASE_URL
    api_key: Optional[str] = None
    request_timeout_s: float = 30
    retries: int = 0
    write_through: bool = True

    def __post_init__(self) -> None:
        if not self.api_base_url or not self.api_base_url.strip():
            raise ValueError("api_base_url must be a non-empty string.")
        if self.request_timeout_s <= 0:
            raise ValueError("request_timeout_s must be positive.")
        if self.retries < 0:
            raise ValueError("retries must be zero or positive.")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        write_through_raw = env.get(_ENV_WRITE_THROUGH)
        return cls(
            api_base_url=(env.get(_ENV_BASE_URL) or "").strip() or defaults.api_base_url,
            api_key=(env.get(_ENV_API_KEY) or "").strip() or None,
            request_timeout_s=_coerce_float(_ENV_TIMEOUT, env.get(_ENV_TIMEOUT), defaults.request_timeout_s),
            retries=_coerce_int(_ENV_RETRIES, env.get(_ENV_RETRIES), defaults.retries),
            write_through=(
                defaults.write_through
                if write_through_raw is None or not write_through_raw.strip()
                else env_truthy(write_through_raw)
            ),
        )


def _coerce_int(name: str, value: Optional[str], fallback: int) -> int:
    if value is None or not value.strip():
        return fallback
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


def _coerce_float(name: str, value: Optional[str], fallback: float) -> float:
    if value is None or not value.strip():
        return fallback
    try:
        return float(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


__all__ = ["ClientConfig", "DEFAULT_API_BASE_URL"]

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .retry import LONG_RETRY, SHORT_RETRY, RetryProfile

ENV_PREFIX = "TABLE_PROVIDER_"


@dataclass(frozen=True)
class ProviderSettings:
    short_retry: RetryProfile = field(default=SHORT_RETRY)
    long_retry: RetryProfile = field(default=LONG_RETRY)
    region: str | None = None
    endpoint_url: str | None = None
    connect_timeout: float = 5.0
    read_timeout: float = 30.0
    max_attempts: int = 3

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> ProviderSettings:
        short_retry = RetryProfile(
            attempts=_int(environ, "SHORT_RETRY_ATTEMPTS", SHORT_RETRY.attempts),
            interval_seconds=_float(environ, "SHORT_RETRY_INTERVAL", SHORT_RETRY.interval_seconds),
        )
        long_retry = RetryProfile(
            attempts=_int(environ, "LONG_RETRY_ATTEMPTS", LONG_RETRY.attempts),
            interval_seconds=_float(environ, "LONG_RETRY_INTERVAL", LONG_RETRY.interval_seconds),
        )
        return cls(
            short_retry=short_retry,
            long_retry=long_retry,
            region=environ.get("AWS_REGION") or environ.get("AWS_DEFAULT_REGION") or None,
            endpoint_url=(
                environ.get("AWS_ENDPOINT_URL_DYNAMODB") or environ.get("DYNAMODB_ENDPOINT") or None
            ),
            connect_timeout=_float(environ, "CONNECT_TIMEOUT", cls.connect_timeout),
            read_timeout=_float(environ, "READ_TIMEOUT", cls.read_timeout),
            max_attempts=_int(environ, "MAX_ATTEMPTS", cls.max_attempts),
        )


def _int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = (environ.get(ENV_PREFIX + name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as err:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer (got {raw!r})") from err


def _float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = (environ.get(ENV_PREFIX + name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as err:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number (got {raw!r})") from err

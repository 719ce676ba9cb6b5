"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from kubescope.models.config import ClientConfig, KubeScopeConfig, LogConfig


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"KUBESCOPE_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> KubeScopeConfig:
    """Load configuration from KUBESCOPE_* environment variables."""
    qps = _env_int("QPS", 200, min_val=1, max_val=10000)
    return KubeScopeConfig(
        client=ClientConfig(
            kubeconfig=_env("KUBECONFIG", ""),
            context=_env("CONTEXT", ""),
            qps=qps,
            # A burst below the sustained rate would throttle below QPS.
            burst=_env_int("BURST", 400, min_val=qps, max_val=20000),
            request_timeout_seconds=_env_int("REQUEST_TIMEOUT", 30, min_val=1, max_val=600),
            suppress_warnings=_env_bool("SUPPRESS_WARNINGS", True),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
        ),
    )

"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from itemledger.models.config import APIConfig, ItemLedgerConfig, LogConfig, TLSConfig
from itemledger.observability.logging import LOG_FORMATS


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"ITEMLEDGER_{key}", default)


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


def _validate_log_format(value: str) -> str:
    if value.lower() not in LOG_FORMATS:
        raise ValueError(f"Invalid log format: {value}. Must be one of {set(LOG_FORMATS)}")
    return value.lower()


def _load_tls() -> TLSConfig:
    tls = TLSConfig(
        enabled=_env_bool("TLS_ENABLED", False),
        cert_file=_env("TLS_CERT_FILE", ""),
        key_file=_env("TLS_KEY_FILE", ""),
    )
    if tls.enabled and not (tls.cert_file and tls.key_file):
        raise ValueError("TLS is enabled but ITEMLEDGER_TLS_CERT_FILE or ITEMLEDGER_TLS_KEY_FILE is not set")
    return tls


def load_config() -> ItemLedgerConfig:
    """Load configuration from ITEMLEDGER_* environment variables."""
    return ItemLedgerConfig(
        ccid=_env("CCID", ""),
        api=APIConfig(
            host=_env("API_HOST", "0.0.0.0"),
            port=_env_int("API_PORT", 7052, min_val=1024, max_val=65535),
        ),
        tls=_load_tls(),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
            format=_validate_log_format(_env("LOG_FORMAT", "json")),
        ),
    )

"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class APIConfig:
    """REST API configuration."""

    host: str = "0.0.0.0"
    port: int = 7052


@dataclass
class TLSConfig:
    """TLS settings for the REST listener. Disabled by default."""

    enabled: bool = False
    cert_file: str = ""
    key_file: str = ""


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: str = "json"


@dataclass
class ItemLedgerConfig:
    """Top-level itemledger configuration."""

    ccid: str = ""
    api: APIConfig = field(default_factory=APIConfig)
    tls: TLSConfig = field(default_factory=TLSConfig)
    log: LogConfig = field(default_factory=LogConfig)

"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ClientConfig:
    """Kubernetes connection configuration.

    ``qps`` and ``burst`` bound the client-side request rate; they are applied
    once when the transport is built and never renegotiated.
    """

    kubeconfig: str = ""
    context: str = ""
    qps: int = 200
    burst: int = 400
    request_timeout_seconds: int = 30
    suppress_warnings: bool = True


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class KubeScopeConfig:
    """Top-level kubescope configuration."""

    client: ClientConfig = field(default_factory=ClientConfig)
    log: LogConfig = field(default_factory=LogConfig)

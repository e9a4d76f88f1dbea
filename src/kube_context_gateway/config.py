"""Gateway configuration with environment variable overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

_TRUTHY = {"1", "true", "yes", "on"}


def default_kubeconfig_path() -> str:
    """Return ``<home>/.kube/config``, or an empty string when no home directory is known.

    ``HOME`` is consulted first, then ``USERPROFILE`` for Windows hosts.
    """
    home = os.environ.get("HOME") or os.environ.get("USERPROFILE")
    if not home:
        return ""
    return str(Path(home) / ".kube" / "config")


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in _TRUTHY


@dataclass(frozen=True)
class GatewayConfig:
    """Immutable process-wide configuration shared by every request."""

    kubeconfig_path: str = field(default_factory=lambda: os.environ.get("KUBECONFIG_PATH") or default_kubeconfig_path())
    host: str = field(default_factory=lambda: os.environ.get("GATEWAY_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.environ.get("GATEWAY_PORT", "4500")))
    # When set, /logs failures become structured 502 responses instead of sentinel text.
    strict_log_errors: bool = field(default_factory=lambda: _env_flag("GATEWAY_STRICT_LOG_ERRORS"))
    log_chunk_size: int = field(default_factory=lambda: int(os.environ.get("GATEWAY_LOG_CHUNK_SIZE", "65536")))


def get_config() -> GatewayConfig:
    """Return gateway configuration with environment variable overrides applied."""
    return GatewayConfig()

"""Kubeconfig context discovery."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
import yaml

from kube_context_gateway.config import GatewayConfig
from kube_context_gateway.errors import ConfigError

log = structlog.get_logger()


def list_contexts(kubeconfig_path: str) -> set[str]:
    """Parse a kubeconfig file and return the names of every context it defines.

    Error messages name the problem but not the file path, since they are
    returned to HTTP callers.

    Args:
        kubeconfig_path: Path to the kubeconfig file.

    Returns:
        The set of context names. A kubeconfig without contexts yields an empty set.

    Raises:
        ConfigError: If the file is missing, unreadable, or malformed.
    """
    path = Path(kubeconfig_path)
    if not kubeconfig_path or not path.is_file():
        msg = "Kubeconfig file not found. Pass --kubeconfig or set KUBECONFIG_PATH."
        raise ConfigError(msg)

    try:
        raw = yaml.safe_load(path.read_text())
    except OSError as e:
        msg = f"Kubeconfig file could not be read: {e.strerror or type(e).__name__}"
        raise ConfigError(msg) from e
    except yaml.YAMLError as e:
        msg = "Kubeconfig file is not valid YAML."
        raise ConfigError(msg) from e

    if raw is None:
        return set()
    if not isinstance(raw, dict):
        msg = "Kubeconfig file must contain a mapping at the top level."
        raise ConfigError(msg)

    contexts_raw: Any = raw.get("contexts") or []
    if not isinstance(contexts_raw, list):
        msg = "Kubeconfig file has an invalid 'contexts' section."
        raise ConfigError(msg)

    names: set[str] = set()
    for index, entry in enumerate(contexts_raw):
        if not isinstance(entry, dict) or not entry.get("name"):
            msg = f"Context #{index} in the kubeconfig file has no name."
            raise ConfigError(msg)
        names.add(str(entry["name"]))
    return names


class ContextRegistry:
    """Lists the contexts available in the configured kubeconfig."""

    def __init__(self, config: GatewayConfig) -> None:
        self._config = config

    def list_contexts(self) -> set[str]:
        try:
            return list_contexts(self._config.kubeconfig_path)
        except ConfigError as e:
            log.error("failed_to_list_contexts", kubeconfig=self._config.kubeconfig_path, error=e.message)
            raise

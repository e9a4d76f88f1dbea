"""Client wrappers for the Kubernetes API."""

from __future__ import annotations

import structlog
from kubernetes import client as k8s_client
from kubernetes.config import ConfigException, new_client_from_config

from kube_context_gateway.contexts import list_contexts
from kube_context_gateway.errors import ClusterConnectionError, ConfigError

log = structlog.get_logger()


def load_k8s_api_client(kubeconfig_path: str, context: str = "") -> k8s_client.ApiClient:
    """Create an isolated Kubernetes API client for one kubeconfig context.

    Uses new_client_from_config so that no global SDK configuration is mutated;
    concurrent requests for different contexts never share auth or TLS settings.
    An empty ``context`` selects the kubeconfig's current context.

    The file is shape-checked first, so a malformed kubeconfig is reported the
    same way here as by ``list_contexts``.

    Raises:
        ConfigError: If the kubeconfig file is missing, malformed, or defines no contexts.
        ClusterConnectionError: If the context is unknown or its parameters are invalid.
    """
    try:
        names = list_contexts(kubeconfig_path)
    except ConfigError as e:
        log.error("failed_to_build_client", context=context, kubeconfig=kubeconfig_path, error=e.message)
        raise ConfigError(e.message, context=context) from e
    if not names:
        msg = "Kubeconfig file defines no contexts."
        raise ConfigError(msg, context=context)

    try:
        return new_client_from_config(
            config_file=kubeconfig_path,
            context=context or None,
            persist_config=False,
        )
    except (ConfigException, OSError, ValueError) as e:
        log.error("failed_to_build_client", context=context, kubeconfig=kubeconfig_path, error=str(e))
        msg = f"Cannot build a client for context {context or '<current>'!r}: {type(e).__name__}"
        raise ClusterConnectionError(msg, context=context) from e
    except (TypeError, AttributeError, KeyError) as e:
        log.error("failed_to_build_client", context=context, kubeconfig=kubeconfig_path, error=str(e))
        msg = f"Kubeconfig entry for context {context or '<current>'!r} is malformed."
        raise ConfigError(msg, context=context) from e

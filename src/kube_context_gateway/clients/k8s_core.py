"""Kubernetes Core API wrapper: pods, pod logs, namespaces."""

from __future__ import annotations

from types import TracebackType
from typing import Any

import structlog
from kubernetes import client as k8s_client
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError
from urllib3.response import HTTPResponse

from kube_context_gateway.clients import load_k8s_api_client
from kube_context_gateway.config import GatewayConfig
from kube_context_gateway.errors import QueryError, StreamError

log = structlog.get_logger()

# Network-level failures surfaced by the SDK's urllib3 transport.
_TRANSPORT_ERRORS = (HTTPError, OSError)


class K8sCoreClient:
    """Request-scoped wrapper around the Kubernetes Core V1 API for one context.

    Instances are built per request by ``build_client`` and closed when the
    request ends; use as a context manager to guarantee release.
    """

    def __init__(self, api_client: k8s_client.ApiClient, context: str = "") -> None:
        self.context = context
        self._api_client = api_client
        self._api = k8s_client.CoreV1Api(api_client)

    def __enter__(self) -> K8sCoreClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying connection pool."""
        self._api_client.close()

    def list_pods(self, namespace: str = "") -> list[Any]:
        """List raw pod objects in API order.

        An empty namespace lists pods across all namespaces.

        Raises:
            QueryError: If the list call fails.
        """
        try:
            if namespace:
                pod_list = self._api.list_namespaced_pod(namespace)
            else:
                pod_list = self._api.list_pod_for_all_namespaces()
        except ApiException as e:
            log.error("failed_to_list_pods", context=self.context, namespace=namespace, status=e.status)
            msg = f"Listing pods in namespace {namespace!r} failed: {e.reason}"
            raise QueryError(msg, context=self.context, upstream_status=e.status) from e
        except _TRANSPORT_ERRORS as e:
            log.error("failed_to_list_pods", context=self.context, namespace=namespace, error=str(e))
            msg = f"Listing pods in namespace {namespace!r} failed: {e}"
            raise QueryError(msg, context=self.context) from e
        return list(pod_list.items or [])

    def list_namespaces(self) -> list[str]:
        """List namespace names in API order.

        Raises:
            QueryError: If the list call fails.
        """
        try:
            namespace_list = self._api.list_namespace()
        except ApiException as e:
            log.error("failed_to_list_namespaces", context=self.context, status=e.status)
            msg = f"Listing namespaces failed: {e.reason}"
            raise QueryError(msg, context=self.context, upstream_status=e.status) from e
        except _TRANSPORT_ERRORS as e:
            log.error("failed_to_list_namespaces", context=self.context, error=str(e))
            msg = f"Listing namespaces failed: {e}"
            raise QueryError(msg, context=self.context) from e
        return [ns.metadata.name for ns in namespace_list.items or []]

    def open_log_stream(self, namespace: str, pod_name: str) -> HTTPResponse:
        """Open an unbuffered log stream for a pod.

        The caller owns the returned response and must close it.

        Raises:
            StreamError: If the stream cannot be opened.
        """
        try:
            return self._api.read_namespaced_pod_log(
                name=pod_name,
                namespace=namespace,
                _preload_content=False,
            )
        except ApiException as e:
            log.warning(
                "failed_to_open_log_stream", context=self.context, namespace=namespace, pod=pod_name, status=e.status
            )
            msg = f"Opening log stream for pod {pod_name!r} failed: {e.reason}"
            raise StreamError(msg, context=self.context, upstream_status=e.status) from e
        except (*_TRANSPORT_ERRORS, ValueError) as e:
            log.warning(
                "failed_to_open_log_stream", context=self.context, namespace=namespace, pod=pod_name, error=str(e)
            )
            msg = f"Opening log stream for pod {pod_name!r} failed: {e}"
            raise StreamError(msg, context=self.context) from e


def build_client(config: GatewayConfig, context: str) -> K8sCoreClient:
    """Build a fresh client bound only to ``context``. Never cached across requests."""
    api_client = load_k8s_api_client(config.kubeconfig_path, context)
    return K8sCoreClient(api_client, context)


def build_default_client(config: GatewayConfig) -> K8sCoreClient:
    """Build a client for the kubeconfig's current context, used only as a startup check."""
    return build_client(config, "")

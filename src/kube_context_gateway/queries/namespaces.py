"""list_namespaces — namespace names visible to the client."""

from __future__ import annotations

from kube_context_gateway.clients.k8s_core import K8sCoreClient


def list_namespaces_handler(client: K8sCoreClient) -> list[str]:
    return client.list_namespaces()

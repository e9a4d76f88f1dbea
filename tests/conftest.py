"""Shared test fixtures for all test modules."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from kube_context_gateway.clients.k8s_core import K8sCoreClient
from kube_context_gateway.config import GatewayConfig

KUBECONFIG_YAML = """\
apiVersion: v1
kind: Config
current-context: dev
clusters:
- name: dev-cluster
  cluster:
    server: https://dev.example.invalid:6443
    insecure-skip-tls-verify: true
- name: prod-cluster
  cluster:
    server: https://prod.example.invalid:6443
    insecure-skip-tls-verify: true
users:
- name: dev-user
  user:
    token: dev-token
- name: prod-user
  user:
    token: prod-token
contexts:
- name: dev
  context:
    cluster: dev-cluster
    user: dev-user
- name: prod
  context:
    cluster: prod-cluster
    user: prod-user
"""


@pytest.fixture
def kubeconfig_path(tmp_path: Path) -> str:
    """Write a two-context kubeconfig (dev, prod) and return its path."""
    path = tmp_path / "config"
    path.write_text(KUBECONFIG_YAML)
    return str(path)


@pytest.fixture
def gateway_config(kubeconfig_path: str) -> GatewayConfig:
    return GatewayConfig(
        kubeconfig_path=kubeconfig_path,
        host="127.0.0.1",
        port=4500,
        strict_log_errors=False,
        log_chunk_size=1024,
    )


@pytest.fixture
def mock_core_api() -> MagicMock:
    """Factory for a mock Kubernetes CoreV1Api."""
    return MagicMock()


@pytest.fixture
def core_client(mock_core_api: MagicMock) -> K8sCoreClient:
    """A K8sCoreClient for context 'dev' whose CoreV1Api and ApiClient are mocks."""
    client = K8sCoreClient(MagicMock(), "dev")
    client._api = mock_core_api
    return client

"""Tests for K8sCoreClient: pod listing, namespace listing, log streams, error handling."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from kubernetes.client.rest import ApiException
from urllib3.exceptions import MaxRetryError, ProtocolError

from kube_context_gateway.clients.k8s_core import K8sCoreClient
from kube_context_gateway.errors import QueryError, StreamError


def _make_mock_pod(name: str) -> MagicMock:
    pod = MagicMock()
    pod.metadata.name = name
    return pod


def _make_mock_namespace(name: str) -> MagicMock:
    namespace = MagicMock()
    namespace.metadata.name = name
    return namespace


class TestListPods:
    def test_namespaced_list(self, core_client: K8sCoreClient, mock_core_api: MagicMock) -> None:
        pods = [_make_mock_pod("a"), _make_mock_pod("b")]
        mock_core_api.list_namespaced_pod.return_value.items = pods

        result = core_client.list_pods("default")

        mock_core_api.list_namespaced_pod.assert_called_once_with("default")
        mock_core_api.list_pod_for_all_namespaces.assert_not_called()
        assert result == pods

    def test_empty_namespace_lists_all_namespaces(self, core_client: K8sCoreClient, mock_core_api: MagicMock) -> None:
        mock_core_api.list_pod_for_all_namespaces.return_value.items = [_make_mock_pod("a")]

        result = core_client.list_pods("")

        mock_core_api.list_pod_for_all_namespaces.assert_called_once_with()
        mock_core_api.list_namespaced_pod.assert_not_called()
        assert len(result) == 1

    def test_none_items_yield_empty_list(self, core_client: K8sCoreClient, mock_core_api: MagicMock) -> None:
        mock_core_api.list_namespaced_pod.return_value.items = None
        assert core_client.list_pods("default") == []

    def test_api_exception_becomes_query_error(
        self, core_client: K8sCoreClient, mock_core_api: MagicMock, api_forbidden: ApiException
    ) -> None:
        mock_core_api.list_namespaced_pod.side_effect = api_forbidden

        with pytest.raises(QueryError) as exc_info:
            core_client.list_pods("kube-system")

        assert exc_info.value.upstream_status == 403
        assert exc_info.value.context == "dev"
        assert "kube-system" in exc_info.value.message

    def test_transport_error_becomes_query_error(self, core_client: K8sCoreClient, mock_core_api: MagicMock) -> None:
        mock_core_api.list_namespaced_pod.side_effect = MaxRetryError(None, "/api/v1/namespaces/default/pods")

        with pytest.raises(QueryError) as exc_info:
            core_client.list_pods("default")

        assert exc_info.value.upstream_status is None


class TestListNamespaces:
    def test_returns_names_in_api_order(self, core_client: K8sCoreClient, mock_core_api: MagicMock) -> None:
        mock_core_api.list_namespace.return_value.items = [
            _make_mock_namespace("kube-system"),
            _make_mock_namespace("default"),
            _make_mock_namespace("batch"),
        ]
        assert core_client.list_namespaces() == ["kube-system", "default", "batch"]

    def test_api_exception_becomes_query_error(
        self, core_client: K8sCoreClient, mock_core_api: MagicMock, api_forbidden: ApiException
    ) -> None:
        mock_core_api.list_namespace.side_effect = api_forbidden
        with pytest.raises(QueryError) as exc_info:
            core_client.list_namespaces()
        assert exc_info.value.upstream_status == 403


class TestOpenLogStream:
    def test_requests_unbuffered_stream(self, core_client: K8sCoreClient, mock_core_api: MagicMock) -> None:
        stream = core_client.open_log_stream("default", "web-1")

        mock_core_api.read_namespaced_pod_log.assert_called_once_with(
            name="web-1",
            namespace="default",
            _preload_content=False,
        )
        assert stream is mock_core_api.read_namespaced_pod_log.return_value

    def test_missing_pod_raises_stream_error(
        self, core_client: K8sCoreClient, mock_core_api: MagicMock, api_not_found: ApiException
    ) -> None:
        mock_core_api.read_namespaced_pod_log.side_effect = api_not_found
        with pytest.raises(StreamError) as exc_info:
            core_client.open_log_stream("default", "ghost")
        assert exc_info.value.upstream_status == 404

    def test_connection_failure_raises_stream_error(self, core_client: K8sCoreClient, mock_core_api: MagicMock) -> None:
        mock_core_api.read_namespaced_pod_log.side_effect = ProtocolError("Connection aborted.")
        with pytest.raises(StreamError):
            core_client.open_log_stream("default", "web-1")

    def test_missing_parameter_raises_stream_error(self, core_client: K8sCoreClient, mock_core_api: MagicMock) -> None:
        mock_core_api.read_namespaced_pod_log.side_effect = ValueError("Missing the required parameter `name`")
        with pytest.raises(StreamError):
            core_client.open_log_stream("default", "")

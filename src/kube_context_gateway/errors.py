"""Typed errors raised by the query layer and mapped to HTTP responses by the gateway."""

from __future__ import annotations


class GatewayError(Exception):
    """Base class for every failure the gateway reports to a caller."""

    kind = "gateway"
    status_code = 500

    def __init__(self, message: str, *, context: str = "", upstream_status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context
        self.upstream_status = upstream_status


class ConfigError(GatewayError):
    """The kubeconfig file is missing, unreadable, or malformed."""

    kind = "config"
    status_code = 500


class ClusterConnectionError(GatewayError):
    """The requested context is unknown or its connection parameters are invalid."""

    kind = "connection"
    status_code = 502


class QueryError(GatewayError):
    """A list call against the cluster API failed."""

    kind = "query"
    status_code = 502


class StreamError(GatewayError):
    """A pod log stream could not be opened or drained."""

    kind = "stream"
    status_code = 502

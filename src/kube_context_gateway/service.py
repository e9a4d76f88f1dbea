"""Per-request query execution: build a client, run one query, release the client."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from typing import Any, TypeVar

import structlog

from kube_context_gateway.clients.k8s_core import K8sCoreClient, build_client
from kube_context_gateway.config import GatewayConfig
from kube_context_gateway.contexts import ContextRegistry
from kube_context_gateway.errors import GatewayError
from kube_context_gateway.models import PodSummary, scrub_sensitive_values
from kube_context_gateway.queries.latest_pod import latest_batch_pod_handler
from kube_context_gateway.queries.logs import stream_logs_handler
from kube_context_gateway.queries.namespaces import list_namespaces_handler
from kube_context_gateway.queries.pods import list_pods_handler

log = structlog.get_logger()

T = TypeVar("T")

ClientFactory = Callable[[GatewayConfig, str], K8sCoreClient]


class ResourceQueryService:
    """Runs the supported read queries against a context chosen per call.

    Every call builds its own client and closes it before returning, so no
    connection state is shared between requests. The blocking SDK calls run in
    worker threads to keep the event loop free.
    """

    def __init__(self, config: GatewayConfig, client_factory: ClientFactory = build_client) -> None:
        self._config = config
        self._client_factory = client_factory
        self._registry = ContextRegistry(config)

    @property
    def config(self) -> GatewayConfig:
        return self._config

    async def list_contexts(self) -> set[str]:
        start = time.monotonic()
        contexts = await asyncio.to_thread(self._registry.list_contexts)
        log.info("query_completed", query="list_contexts", count=len(contexts), latency_ms=_elapsed_ms(start))
        return contexts

    async def list_pods(self, context: str, namespace: str) -> list[PodSummary]:
        return await self._run("list_pods", context, list_pods_handler, namespace)

    async def list_namespaces(self, context: str) -> list[str]:
        return await self._run("list_namespaces", context, list_namespaces_handler)

    async def stream_logs(self, context: str, namespace: str, pod_name: str) -> bytes:
        return await self._run(
            "stream_logs",
            context,
            stream_logs_handler,
            namespace,
            pod_name,
            strict=self._config.strict_log_errors,
            chunk_size=self._config.log_chunk_size,
        )

    async def latest_batch_pod(self, context: str, namespace: str) -> PodSummary:
        return await self._run("latest_batch_pod", context, latest_batch_pod_handler, namespace)

    async def _run(self, query: str, context: str, handler: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        start = time.monotonic()
        try:
            result = await asyncio.to_thread(self._execute, context, handler, *args, **kwargs)
        except GatewayError as e:
            log.error(
                "query_failed",
                query=query,
                context=context,
                kind=e.kind,
                error=scrub_sensitive_values(e.message),
                latency_ms=_elapsed_ms(start),
            )
            raise
        log.info("query_completed", query=query, context=context, latency_ms=_elapsed_ms(start))
        return result

    def _execute(self, context: str, handler: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        with self._client_factory(self._config, context) as client:
            return handler(client, *args, **kwargs)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)

"""HTTP gateway: routes, CORS, request logging, and error mapping."""

from __future__ import annotations

import asyncio
import sys
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, Response

from kube_context_gateway.clients.k8s_core import build_default_client
from kube_context_gateway.config import GatewayConfig, get_config
from kube_context_gateway.errors import GatewayError
from kube_context_gateway.models import (
    ErrorResponse,
    dump_names,
    dump_pod_summaries,
    scrub_sensitive_values,
)
from kube_context_gateway.service import ResourceQueryService

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),
    ],
    logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
)

log = structlog.get_logger()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
}

JSON_MEDIA_TYPE = "application/json"


def _error_response(error: GatewayError) -> JSONResponse:
    body = ErrorResponse(
        error=scrub_sensitive_values(error.message),
        kind=error.kind,
        context=error.context,
        upstream_status=error.upstream_status,
    )
    return JSONResponse(status_code=error.status_code, content=body.model_dump())


def _check_default_context(config: GatewayConfig) -> None:
    """Build and discard a client for the current context to surface kubeconfig problems early."""
    try:
        client = build_default_client(config)
    except GatewayError as e:
        log.error(
            "startup_check_failed",
            kubeconfig=config.kubeconfig_path,
            kind=e.kind,
            error=scrub_sensitive_values(e.message),
        )
        return
    client.close()
    log.info("startup_check_passed", kubeconfig=config.kubeconfig_path)


def create_app(
    config: GatewayConfig | None = None,
    service: ResourceQueryService | None = None,
) -> FastAPI:
    """Build the gateway application.

    Args:
        config: Process configuration. Defaults to environment-derived values.
        service: Query service; built from ``config`` when omitted.
    """
    config = config or get_config()
    service = service or ResourceQueryService(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("gateway_starting", kubeconfig=config.kubeconfig_path, port=config.port)
        await asyncio.to_thread(_check_default_context, config)
        yield

    app = FastAPI(title="Kube Context Gateway", lifespan=lifespan)
    app.state.config = config
    app.state.service = service

    @app.middleware("http")
    async def cors_and_access_log(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        start = time.monotonic()
        try:
            if request.method == "OPTIONS":
                response = Response(status_code=204)
            else:
                response = await call_next(request)
        except Exception as e:
            log.exception("unhandled_error", method=request.method, path=request.url.path)
            body = ErrorResponse(error=scrub_sensitive_values(str(e)) or "internal error", kind="internal")
            response = JSONResponse(status_code=500, content=body.model_dump())
        response.headers.update(CORS_HEADERS)
        log.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            latency_ms=int((time.monotonic() - start) * 1000),
        )
        return response

    @app.exception_handler(GatewayError)
    async def handle_gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
        return _error_response(exc)

    @app.get("/pods")
    async def get_pods(
        context: str = Query(""),
        namespace: str = Query(""),
        filter: str = Query(""),
    ) -> Response:
        """List pods in a namespace as {name, created, status} records."""
        if filter:
            log.debug("pods_filter_ignored", filter=filter)
        pods = await service.list_pods(context, namespace)
        return Response(content=dump_pod_summaries(pods), media_type=JSON_MEDIA_TYPE)

    @app.get("/logs")
    async def get_logs(
        context: str = Query(""),
        namespace: str = Query(""),
        name: str = Query(""),
    ) -> Response:
        """Return the full log output of a pod as raw bytes."""
        content = await service.stream_logs(context, namespace, name)
        return Response(content=content, media_type="text/plain")

    @app.get("/latest")
    async def get_latest(
        context: str = Query(""),
        namespace: str = Query(""),
    ) -> Response:
        """Return the latest batch pod wrapped in a one-element array."""
        pod = await service.latest_batch_pod(context, namespace)
        return Response(content=dump_pod_summaries([pod]), media_type=JSON_MEDIA_TYPE)

    @app.get("/context")
    async def get_contexts() -> Response:
        """List the context names defined in the kubeconfig."""
        contexts = await service.list_contexts()
        return Response(content=dump_names(sorted(contexts)), media_type=JSON_MEDIA_TYPE)

    @app.get("/namespaces")
    async def get_namespaces(context: str = Query("")) -> Response:
        """List namespace names visible in a context."""
        namespaces = await service.list_namespaces(context)
        return Response(content=dump_names(namespaces), media_type=JSON_MEDIA_TYPE)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app

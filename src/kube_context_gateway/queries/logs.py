"""stream_logs — drain a pod's log stream into memory."""

from __future__ import annotations

import io

import structlog
from urllib3.exceptions import HTTPError

from kube_context_gateway.clients.k8s_core import K8sCoreClient
from kube_context_gateway.errors import StreamError

log = structlog.get_logger()

# Sentinel payloads returned as successful responses; existing callers match on these bytes.
OPEN_FAILED_TEXT = b"error in opening stream"
COPY_FAILED_TEXT = b"error in copy information from podLogs to buf"

DEFAULT_CHUNK_SIZE = 65536


def stream_logs_handler(
    client: K8sCoreClient,
    namespace: str,
    pod_name: str,
    *,
    strict: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bytes:
    """Return the complete log output of ``pod_name``.

    Failures are reported as the sentinel texts OPEN_FAILED_TEXT and
    COPY_FAILED_TEXT unless ``strict`` is set, in which case StreamError is raised.
    The stream is closed on every path once opened.
    """
    try:
        stream = client.open_log_stream(namespace, pod_name)
    except StreamError:
        if strict:
            raise
        return OPEN_FAILED_TEXT

    buf = io.BytesIO()
    try:
        for chunk in stream.stream(chunk_size, decode_content=True):
            buf.write(chunk)
    except (HTTPError, OSError) as e:
        log.warning(
            "failed_to_copy_log_stream", context=client.context, namespace=namespace, pod=pod_name, error=str(e)
        )
        if strict:
            msg = f"Reading log stream for pod {pod_name!r} failed: {e}"
            raise StreamError(msg, context=client.context) from e
        return COPY_FAILED_TEXT
    finally:
        stream.close()
        stream.release_conn()
    return buf.getvalue()

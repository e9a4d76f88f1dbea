"""list_pods — pod listing projected into PodSummary records."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import structlog

from kube_context_gateway.clients.k8s_core import K8sCoreClient
from kube_context_gateway.models import PodSummary

log = structlog.get_logger()

_KNOWN_PHASES = {"Pending", "Running", "Succeeded", "Failed", "Unknown"}


def creation_time(pod: Any) -> datetime | None:
    """Return the pod's creation timestamp as an aware UTC datetime, or None if unset."""
    metadata = pod.metadata
    ts = metadata.creation_timestamp if metadata is not None else None
    if ts is None:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC)


def format_created(ts: datetime | None) -> str:
    """Render a timestamp the way the Kubernetes API serializes it (RFC 3339, UTC)."""
    if ts is None:
        return ""
    return ts.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def to_pod_summary(pod: Any) -> PodSummary:
    """Project a raw V1Pod into a PodSummary."""
    name = (pod.metadata.name if pod.metadata is not None else None) or ""
    phase = pod.status.phase if pod.status is not None else None
    if phase not in _KNOWN_PHASES:
        if phase:
            log.warning("unknown_pod_phase", pod=name, phase=phase)
        phase = "Unknown" if phase else ""
    return PodSummary(
        name=name,
        created=format_created(creation_time(pod)),
        status=phase,
    )


def list_pods_handler(client: K8sCoreClient, namespace: str) -> list[PodSummary]:
    """List every pod in ``namespace`` in the order the API returned them."""
    return [to_pod_summary(pod) for pod in client.list_pods(namespace)]

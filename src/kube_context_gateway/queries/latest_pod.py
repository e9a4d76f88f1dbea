"""latest_batch_pod — most recently created pod whose name contains "batch"."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Any

from kube_context_gateway.clients.k8s_core import K8sCoreClient
from kube_context_gateway.models import EMPTY_POD_SUMMARY, PodSummary
from kube_context_gateway.queries.pods import creation_time, to_pod_summary

BATCH_MARKER = "batch"

# 1980-01-12T00:00:00 CET. January has no DST, so CET is a fixed UTC+01:00 here.
SENTINEL_CREATED = datetime(1980, 1, 12, tzinfo=timezone(timedelta(hours=1), "CET"))


def select_latest_batch_pod(pods: Iterable[Any]) -> Any | None:
    """Pick the batch pod with the greatest creation timestamp.

    Only pods created strictly after SENTINEL_CREATED qualify. Equal timestamps
    resolve to the pod seen last in iteration order.
    """
    latest: Any | None = None
    latest_ts: datetime | None = None
    for pod in pods:
        name = pod.metadata.name if pod.metadata is not None else None
        if not name or BATCH_MARKER not in name:
            continue
        ts = creation_time(pod)
        if ts is None or ts <= SENTINEL_CREATED:
            continue
        if latest_ts is not None and ts < latest_ts:
            continue
        latest, latest_ts = pod, ts
    return latest


def latest_batch_pod_handler(client: K8sCoreClient, namespace: str) -> PodSummary:
    """Return the latest batch pod in ``namespace``, or an empty summary if none matched."""
    pod = select_latest_batch_pod(client.list_pods(namespace))
    if pod is None:
        return EMPTY_POD_SUMMARY
    return to_pod_summary(pod)

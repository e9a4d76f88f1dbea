"""Pydantic v2 models for gateway responses and errors."""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, TypeAdapter

# Kubernetes pod phases, plus "" for the synthetic result when no pod matched.
PodPhase = Literal["Pending", "Running", "Succeeded", "Failed", "Unknown", ""]


class PodSummary(BaseModel):
    """Projection of a cluster pod returned by /pods and /latest."""

    name: str = ""
    created: str = ""
    status: PodPhase = ""


EMPTY_POD_SUMMARY = PodSummary()


# --- Shared error model ---


class ErrorResponse(BaseModel):
    """Structured error body returned for every failed request."""

    error: str
    kind: str
    context: str = ""
    upstream_status: int | None = None


# --- JSON encoding ---

_POD_LIST_ADAPTER: TypeAdapter[list[PodSummary]] = TypeAdapter(list[PodSummary])
_NAME_LIST_ADAPTER: TypeAdapter[list[str]] = TypeAdapter(list[str])


def dump_pod_summaries(pods: list[PodSummary]) -> bytes:
    """Encode pod summaries as an indented JSON array."""
    return _POD_LIST_ADAPTER.dump_json(pods, indent=4)


def dump_names(names: list[str]) -> bytes:
    """Encode context or namespace names as an indented JSON array."""
    return _NAME_LIST_ADAPTER.dump_json(names, indent=4)


# --- Output scrubbing ---

_IP_PATTERN = re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b")
_BEARER_PATTERN = re.compile(r"\bBearer\s+[\w\-.~+/=]+", re.IGNORECASE)
_URL_USERINFO_PATTERN = re.compile(r"(?<=://)[^/@\s:]+:[^/@\s]+@")
_TOKEN_PARAM_PATTERN = re.compile(
    r"\b(token|password|client-key-data|client-certificate-data)([\"']?\s*[:=]\s*[\"']?)[^\s,\"'}]+",
    re.IGNORECASE,
)


def scrub_sensitive_values(text: str) -> str:
    """Remove IP addresses, bearer tokens, and inline credentials from text.

    Context names, namespaces, and pod names are preserved.
    """
    if not text:
        return text
    result = _URL_USERINFO_PATTERN.sub("[REDACTED]@", text)
    result = _BEARER_PATTERN.sub("Bearer [REDACTED]", result)
    result = _TOKEN_PARAM_PATTERN.sub(r"\1\2[REDACTED]", result)
    result = _IP_PATTERN.sub("[REDACTED_IP]", result)
    return result

"""Client-specific test fixtures — SDK error responses."""

from __future__ import annotations

import pytest
from kubernetes.client.rest import ApiException


@pytest.fixture
def api_forbidden() -> ApiException:
    """An ApiException as raised when RBAC denies a list call."""
    return ApiException(status=403, reason="Forbidden")


@pytest.fixture
def api_not_found() -> ApiException:
    """An ApiException as raised for a missing pod or namespace."""
    return ApiException(status=404, reason="Not Found")

from __future__ import annotations

from typing import Any

import httpx

from app.core.config import settings

DEFAULT_TIMEOUT = httpx.Timeout(settings.http_timeout_seconds)


def send_request(
    method: str,
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: httpx.Timeout | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Response:
    """Issue one outbound request and return the response, whatever its status."""
    with httpx.Client(
        timeout=timeout or DEFAULT_TIMEOUT,
        trust_env=settings.http_trust_env,
        transport=transport,
    ) as client:
        return client.request(method, url, params=params, headers=headers)

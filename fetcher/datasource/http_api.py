from __future__ import annotations

import asyncio
from typing import Mapping

import httpx

from .base import HttpResponse, SourceNetworkError, SourceTimeout


class HttpTransport:
    """Issue GET requests with a hard per-call deadline.

    httpx applies ``timeout`` per connect/read phase, so a server that keeps
    trickling bytes would never trip it; the whole exchange also runs under
    ``asyncio.wait_for``. Each call opens its own ``AsyncClient``, and leaving
    the ``async with`` block closes the connection on timeout or cancellation.
    """

    async def __call__(
        self,
        url: str,
        params: Mapping[str, str],
        headers: Mapping[str, str],
        timeout_millis: int,
    ) -> HttpResponse:
        timeout_seconds = timeout_millis / 1000
        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds)) as client:
                resp = await asyncio.wait_for(
                    client.get(url, params=dict(params), headers=dict(headers)),
                    timeout=timeout_seconds,
                )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise SourceTimeout("Request timeout") from exc
        except httpx.HTTPError as exc:
            raise SourceNetworkError(str(exc) or type(exc).__name__) from exc
        return HttpResponse(
            status_code=resp.status_code, text=resp.text, reason=resp.reason_phrase or ""
        )

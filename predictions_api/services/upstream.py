# predictions_api/services/upstream.py

from __future__ import annotations

import logging
from typing import Any, AsyncIterator

import httpx
from fastapi import Depends

from predictions_api.core.config import Settings, get_settings
from predictions_api.core.errors import UpstreamError
from predictions_api.services.sports import UpstreamRequestSpec

logger = logging.getLogger("predictions.upstream")

HEADERS = {"User-Agent": "predictions-api/1.0", "Accept": "application/json"}
UNREADABLE_BODY = "Unable to read upstream response body"


async def get_http_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[httpx.AsyncClient]:
    """
    FastAPI dependency: one AsyncClient per request, closed afterwards.
    Tests override this to plug in an httpx.MockTransport.
    """
    async with httpx.AsyncClient(timeout=settings.upstream_timeout_s, headers=HEADERS) as client:
        yield client


async def fetch_upstream(
    client: httpx.AsyncClient,
    spec: UpstreamRequestSpec,
    provider_label: str,
) -> Any:
    """
    Single GET, no retries.

    Non-2xx -> UpstreamError carrying the status and (best-effort) body.
    Transport errors and bad JSON propagate to the caller.
    """
    async with client.stream("GET", spec.url, headers=spec.headers) as r:
        logger.info("upstream GET %s -> %s", _redact(spec.url), r.status_code)

        if not r.is_success:
            try:
                body = (await r.aread()).decode(r.encoding or "utf-8", errors="replace")
            except Exception as e:
                logger.warning("upstream body read failed: %r", e)
                body = UNREADABLE_BODY
            raise UpstreamError(provider_label, r.status_code, r.reason_phrase, body)

        await r.aread()
        return r.json(parse_constant=_reject_constant)


def _reject_constant(token: str) -> Any:
    # NaN / Infinity parse in Python but cannot be rendered back as JSON
    raise ValueError(f"non-JSON constant in upstream payload: {token}")


def _redact(url: str) -> str:
    # keys travel in headers; drop any query string anyway
    return url.split("?", 1)[0]

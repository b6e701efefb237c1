# predictions_api/core/errors.py
from __future__ import annotations

from typing import Any, Dict, Optional


class ConfigError(RuntimeError):
    """Bad environment configuration; raised at startup, never per request."""


class PredictionsError(Exception):
    """
    Base for errors that end a request with a fixed JSON body.

    The exception handler in main renders `payload` with `status_code`.
    """

    status_code = 500

    def __init__(self, error: str, **extra: Any):
        super().__init__(error)
        self.payload: Dict[str, Any] = {"error": error, **extra}


class ClientInputError(PredictionsError):
    """Missing or invalid query parameters."""

    status_code = 400


class ServerConfigError(PredictionsError):
    """Upstream credentials are not configured."""

    status_code = 500


class UpstreamError(PredictionsError):
    """The provider answered with a non-2xx status."""

    status_code = 502

    def __init__(
        self,
        provider_label: str,
        status: int,
        status_text: str,
        upstream_body: Optional[str],
    ):
        super().__init__(
            f"Upstream fetch to {provider_label} failed",
            status=status,
            statusText=status_text,
            upstreamBody=upstream_body,
        )
        self.status = status

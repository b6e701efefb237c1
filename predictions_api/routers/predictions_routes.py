# predictions_api/routers/predictions_routes.py
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, List, Optional

import httpx
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from predictions_api.core.config import Settings, get_settings
from predictions_api.core.errors import PredictionsError, ServerConfigError
from predictions_api.models.types import LegacyPrediction, NormalizedPrediction
from predictions_api.services.conclusion import generate_expert_conclusion
from predictions_api.services.sports import (
    PROVIDER_LABELS,
    build_upstream_request,
    no_games_message,
    no_mapping_message,
    normalize_sport,
    parse_date_param,
    result_items,
)
from predictions_api.services.upstream import fetch_upstream, get_http_client

router = APIRouter(tags=["predictions"])
logger = logging.getLogger("predictions.routes")

CACHE_CONTROL = "public, max-age=30"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def normalize_predictions_response(sport: str, upstream: Any) -> NormalizedPrediction:
    return {"sport": sport, "fetchedAt": _now_iso(), "data": upstream}


@router.get("/predictions-by-sport")
async def predictions_by_sport(
    sport: Optional[str] = Query(None, description="football|rugby|tennis|basketball|icehockey|snooker"),
    date_param: Optional[str] = Query(None, alias="date", description="YYYY-MM-DD; default = today (UTC)"),
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Upstream fixtures for one sport plus a synthesized expert conclusion.
    """
    # 400s
    sport_id = normalize_sport(sport)
    requested = parse_date_param(date_param)

    if not settings.api_key:
        raise ServerConfigError(f"{settings.api_key_env} is not configured on the server")

    label = PROVIDER_LABELS[settings.provider]
    spec = build_upstream_request(
        settings.provider,
        sport_id,
        requested or _utc_today(),
        settings.api_key,
        live=requested is None,
        base_url=settings.sportradar_base_url,
    )

    if spec is None:
        logger.info("no %s mapping for sport=%s", settings.provider, sport_id)
        out = normalize_predictions_response(sport_id, {})
        out["expertConclusion"] = no_mapping_message(settings.provider, sport_id)
        return out

    try:
        payload = await fetch_upstream(client, spec, label)
    except PredictionsError:
        raise
    except Exception as e:
        logger.exception("predictions-by-sport failed sport=%s provider=%s: %s", sport_id, settings.provider, e)
        return JSONResponse(
            status_code=500,
            content={"error": f"Failed to fetch predictions from {label}"},
        )

    out = normalize_predictions_response(sport_id, payload)

    if not result_items(settings.provider, payload):
        logger.info("predictions-by-sport sport=%s -> 0 results", sport_id)
        out["expertConclusion"] = no_games_message(sport_id, requested)
        return out

    out["expertConclusion"] = generate_expert_conclusion(sport_id, payload)
    return JSONResponse(content=out, headers={"Cache-Control": CACHE_CONTROL})


# ---------------- Legacy stub ----------------
LEGACY_PREDICTIONS: List[LegacyPrediction] = [
    {
        "id": 1,
        "sport": "football",
        "match": "Arsenal vs Chelsea",
        "prediction": "Arsenal to win",
        "confidence": 0.72,
    },
    {
        "id": 2,
        "sport": "basketball",
        "match": "Lakers vs Celtics",
        "prediction": "Over 215.5 points",
        "confidence": 0.64,
    },
]


@router.get("/predictions")
async def legacy_predictions():
    """Hardcoded sample predictions kept for older front-end builds."""
    return {"predictions": LEGACY_PREDICTIONS}

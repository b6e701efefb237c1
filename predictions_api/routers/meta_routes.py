# predictions_api/routers/meta_routes.py
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from predictions_api.core.config import Settings, get_settings
from predictions_api.models.types import Plan
from predictions_api.services.sports import PROVIDER_LABELS, SUPPORTED_SPORTS

router = APIRouter(tags=["meta"])

PLANS: List[Plan] = [
    {
        "name": "Free",
        "duration": "7 days",
        "price": "0",
        "features": [
            "Basic predictions",
            "Limited refresh frequency",
            "No priority updates",
        ],
    },
    {
        "name": "Pro",
        "duration": "30 days",
        "price": "9.99",
        "features": [
            "All sports",
            "AI expert conclusions",
            "Priority updates",
            "Faster refresh",
        ],
    },
    {
        "name": "Premium",
        "duration": "90 days",
        "price": "24.99",
        "features": [
            "All sports",
            "AI expert conclusions",
            "Priority updates",
            "Early features access",
        ],
    },
]


@router.get("/", response_class=PlainTextResponse)
async def root():
    return (
        "Backend is live. Try /health, /api/supported-sports, "
        "or /api/predictions-by-sport?sport=football"
    )


@router.get("/health")
async def health(request: Request):
    return {
        "status": "ok",
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "timestamp": int(time.time() * 1000),
    }


@router.get("/status")
async def status(settings: Settings = Depends(get_settings)):
    return {
        "ok": True,
        "provider": PROVIDER_LABELS[settings.provider],
        "has_api_key": bool(settings.api_key),
        "timeout_s": settings.upstream_timeout_s,
    }


@router.get("/api/supported-sports")
async def supported_sports():
    return {"sports": list(SUPPORTED_SPORTS)}


@router.get("/api/subscriptions")
async def subscriptions():
    return {
        "plans": PLANS,
        "updatedAt": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }

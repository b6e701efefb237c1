# predictions_api/services/sports.py

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, List, Optional

from predictions_api.core.errors import ClientInputError
from predictions_api.models.types import UpstreamHeaders

# Order is the order clients see in /api/supported-sports
SUPPORTED_SPORTS: tuple = (
    "football",
    "rugby",
    "tennis",
    "basketball",
    "icehockey",
    "snooker",
)

PROVIDER_LABELS = {
    "apisports": "API-Sports",
    "sportradar": "Sportradar",
    "rapidapi": "RapidAPI",
}

# -----------------------------------------------------------
# Provider URL tables (None = provider cannot serve the sport)
# -----------------------------------------------------------
API_SPORTS_BASE = {
    "football": "https://v3.football.api-sports.io",
    "rugby": "https://v1.rugby.api-sports.io",
    "basketball": "https://v1.basketball.api-sports.io",
    "icehockey": "https://v1.hockey.api-sports.io",
    # Tennis needs a season/tournament id, not just a date.
    "tennis": None,
    "snooker": "https://v1.snooker.api-sports.io",
}

SPORTRADAR_PATHS = {
    "football": "/soccer/trial/v4/en",
    "rugby": "/rugby-union/trial/v3/en",
    "tennis": "/tennis/trial/v3/en",
    "basketball": "/basketball/trial/v2/en",
    "icehockey": "/icehockey/trial/v2/en",
    "snooker": None,
}

# (host, path) on RapidAPI's API-Sports mirrors
RAPIDAPI_HOSTS = {
    "football": ("api-football-v1.p.rapidapi.com", "/v3/fixtures"),
    "rugby": ("api-rugby.p.rapidapi.com", "/games"),
    "basketball": ("api-basketball.p.rapidapi.com", "/games"),
    "icehockey": ("api-hockey.p.rapidapi.com", "/games"),
    "tennis": None,
    "snooker": None,
}

# Payload keys holding the list of matches, per provider
RESULT_KEYS = {
    "apisports": ("response",),
    "sportradar": ("summaries", "schedules", "sport_events"),
    "rapidapi": ("response",),
}


@dataclass(frozen=True)
class UpstreamRequestSpec:
    url: str
    headers: UpstreamHeaders = field(default_factory=dict)


# -----------------------------------------------------------
# Input normalization
# -----------------------------------------------------------
def normalize_sport(raw: Optional[str]) -> str:
    """
    Trim + lowercase the `sport` query param and check it against the
    allow-list. Raises ClientInputError (400) when missing or unknown.
    """
    sport = (raw or "").strip().lower()
    if not sport:
        raise ClientInputError(
            "Missing required query parameter: sport",
            hint="Use ?sport=" + "|".join(SUPPORTED_SPORTS),
            supported=list(SUPPORTED_SPORTS),
        )
    if sport not in SUPPORTED_SPORTS:
        raise ClientInputError(
            f"Unsupported sport: '{sport}'",
            sport=raw,
            supported=list(SUPPORTED_SPORTS),
        )
    return sport


def parse_date_param(raw: Optional[str]) -> Optional[date]:
    """
    Accepts:
      - None / blank   -> None (caller uses today, UTC)
      - 'YYYY-MM-DD'
      - 'YYYYMMDD'
    Anything else is a 400.
    """
    if raw is None or not raw.strip():
        return None
    s = raw.strip()
    if re.fullmatch(r"\d{4}-\d{2}-\d{2}", s):
        fmt = "%Y-%m-%d"
    elif re.fullmatch(r"\d{8}", s):
        fmt = "%Y%m%d"
    else:
        raise ClientInputError("Invalid date, expected YYYY-MM-DD", date=raw)
    try:
        return datetime.strptime(s, fmt).date()
    except ValueError:
        raise ClientInputError("Invalid date, expected YYYY-MM-DD", date=raw)


# -----------------------------------------------------------
# URL builders (pure)
# -----------------------------------------------------------
def _apisports(sport: str, day: date, api_key: str, live: bool) -> Optional[UpstreamRequestSpec]:
    base = API_SPORTS_BASE.get(sport)
    if not base:
        return None
    if sport == "football":
        # Football supports live fixtures; use them unless a date was asked for
        url = f"{base}/fixtures?live=all" if live else f"{base}/fixtures?date={day.isoformat()}"
    else:
        url = f"{base}/games?date={day.isoformat()}"
    return UpstreamRequestSpec(
        url=url,
        headers={"accept": "application/json", "x-apisports-key": api_key},
    )


def _sportradar(sport: str, day: date, api_key: str, base_url: str) -> Optional[UpstreamRequestSpec]:
    path = SPORTRADAR_PATHS.get(sport)
    if not path:
        return None
    return UpstreamRequestSpec(
        url=f"{base_url.rstrip('/')}{path}/schedules/{day.isoformat()}/summaries.json",
        headers={"accept": "application/json", "x-api-key": api_key},
    )


def _rapidapi(sport: str, day: date, api_key: str) -> Optional[UpstreamRequestSpec]:
    entry = RAPIDAPI_HOSTS.get(sport)
    if not entry:
        return None
    host, path = entry
    return UpstreamRequestSpec(
        url=f"https://{host}{path}?date={day.isoformat()}",
        headers={
            "accept": "application/json",
            "x-rapidapi-key": api_key,
            "x-rapidapi-host": host,
        },
    )


def build_upstream_request(
    provider: str,
    sport: str,
    day: date,
    api_key: str,
    live: bool = True,
    base_url: Optional[str] = None,
) -> Optional[UpstreamRequestSpec]:
    """
    Map (provider, sport, day) to the outbound request.

    Returns None when the provider has no endpoint for the sport; the
    router answers those with a 200 "no data" payload, not an error.
    `live` only matters for API-Sports football.
    """
    if provider == "apisports":
        return _apisports(sport, day, api_key, live)
    if provider == "sportradar":
        return _sportradar(sport, day, api_key, base_url or "https://api.sportradar.com")
    if provider == "rapidapi":
        return _rapidapi(sport, day, api_key)
    raise ValueError(f"unknown provider: {provider}")


def result_items(provider: str, payload: Any) -> List[Any]:
    """The match/fixture list inside a provider payload ([] if absent)."""
    if not isinstance(payload, dict):
        return []
    for key in RESULT_KEYS.get(provider, ("response",)):
        items = payload.get(key)
        if isinstance(items, list) and items:
            return items
    return []


def no_mapping_message(provider: str, sport: str) -> str:
    if sport == "tennis":
        return "No tennis games available until a season or tournament is specified."
    return f"No {sport} data available from {PROVIDER_LABELS.get(provider, provider)}."


def no_games_message(sport: str, requested: Optional[date]) -> str:
    if requested is None:
        return f"No {sport} games scheduled today."
    return f"No {sport} games scheduled on {requested.isoformat()}."

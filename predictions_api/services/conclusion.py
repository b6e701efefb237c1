# predictions_api/services/conclusion.py

from __future__ import annotations

import json
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

Path = Tuple[Any, ...]
Extractor = Callable[[Any], Optional[str]]

DEFAULT_HOME = "Home"
DEFAULT_AWAY = "Away"
DEFAULT_EDGE = "The match appears closely contested"


# -----------------------------------------------------------
# Best-effort document access
# -----------------------------------------------------------
def dig(doc: Any, path: Sequence[Any]) -> Any:
    """
    Follow `path` (dict keys / list indexes) through an untyped document.
    Returns None as soon as a step does not fit.
    """
    cur = doc
    for step in path:
        if isinstance(step, int):
            if not isinstance(cur, list) or not -len(cur) <= step < len(cur):
                return None
            cur = cur[step]
        else:
            if not isinstance(cur, dict):
                return None
            cur = cur.get(step)
        if cur is None:
            return None
    return cur


def _text(v: Any) -> Optional[str]:
    if isinstance(v, str):
        s = v.strip()
        return s or None
    return None


def _name(v: Any) -> Optional[str]:
    """A team given either as {"name": ...} or as a bare string."""
    if isinstance(v, dict):
        return _text(v.get("name"))
    return _text(v)


def _competitor(qualifier: str, index: int) -> Extractor:
    """Sportradar competitors: prefer the qualifier, else positional."""

    def pick(competitors: Any) -> Optional[str]:
        if not isinstance(competitors, list):
            return None
        for c in competitors:
            if isinstance(c, dict) and c.get("qualifier") == qualifier:
                return _name(c)
        return _name(dig(competitors, (index,)))

    return pick


def _edge(v: Any) -> Optional[str]:
    if v is None or v is False or v == "" or v == 0:
        return None
    if isinstance(v, str):
        return _text(v)
    try:
        return json.dumps(v, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        return str(v)


# Ordered (path, extractor) fallbacks; first non-empty wins.
HOME_PATHS: List[Tuple[Path, Extractor]] = [
    (("teams", 0), _name),
    (("match", "teams", 0), _name),
    (("fixture", "teams", 0), _name),
    (("teams", "home"), _name),
    (("sport_event", "competitors"), _competitor("home", 0)),
    (("homeTeam",), _name),
    (("home",), _name),
]

AWAY_PATHS: List[Tuple[Path, Extractor]] = [
    (("teams", 1), _name),
    (("match", "teams", 1), _name),
    (("fixture", "teams", 1), _name),
    (("teams", "away"), _name),
    (("sport_event", "competitors"), _competitor("away", 1)),
    (("awayTeam",), _name),
    (("away",), _name),
]

EDGE_PATHS: List[Tuple[Path, Extractor]] = [
    (("modelEdge",), _edge),
    (("probabilities", "favorite"), _edge),
    (("summary",), _edge),
]

# Where a provider keeps its match list; the first match is a fallback doc
_LIST_KEYS = ("response", "summaries", "schedules", "sport_events")


def _candidates(payload: Any) -> List[Any]:
    docs = [payload]
    if isinstance(payload, dict):
        for key in _LIST_KEYS:
            first = dig(payload, (key, 0))
            if first is not None:
                docs.append(first)
                break
    return docs


def first_match(docs: Iterable[Any], paths: Sequence[Tuple[Path, Extractor]]) -> Optional[str]:
    for doc in docs:
        for path, extract in paths:
            value = extract(dig(doc, path))
            if value:
                return value
    return None


def generate_expert_conclusion(sport: str, payload: Any) -> str:
    """
    Build the "expert" sentence shown under a sport's predictions.

    Pure heuristics over whatever the provider returned: team names fall
    back to Home/Away, and the edge falls back to a neutral phrase.
    Never raises.
    """
    docs = _candidates(payload)
    team_a = first_match(docs, HOME_PATHS) or DEFAULT_HOME
    team_b = first_match(docs, AWAY_PATHS) or DEFAULT_AWAY
    edge = first_match(docs, EDGE_PATHS)

    base_line = f"Edge to {edge}" if edge else DEFAULT_EDGE

    return (
        f"Expert analysis for {sport}: {team_a} vs {team_b}. {base_line}. "
        "Consider recent form, injuries, and venue effects; late team news may "
        "shift momentum. Predictions are guidance, not guarantees."
    )

from typing import Any, Dict, List
from typing_extensions import NotRequired, TypedDict

class NormalizedPrediction(TypedDict):
    sport: str
    fetchedAt: str
    data: Any
    expertConclusion: NotRequired[str]

class Plan(TypedDict):
    name: str
    duration: str
    price: str
    features: List[str]

class LegacyPrediction(TypedDict):
    id: int
    sport: str
    match: str
    prediction: str
    confidence: float

UpstreamHeaders = Dict[str, str]

"""VerdictView Core - Normalization contracts and display models."""

from verdictview.core.models import (
    ClaimBreakdownEntry,
    ClaimStatus,
    Decision,
    DisplayModel,
    ResultView,
    Tone,
    TrafficLights,
    WebResult,
)

__all__ = [
    "ClaimBreakdownEntry",
    "ClaimStatus",
    "Decision",
    "DisplayModel",
    "ResultView",
    "Tone",
    "TrafficLights",
    "WebResult",
]

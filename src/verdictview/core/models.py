"""Core domain models for VerdictView.

These models define the shapes the renderer can rely on:
- Decision / claim status vocabularies (informational, never enforced)
- DisplayModel: the fully-defaulted, immutable view of one analysis
- ResultView: DisplayModel plus derived presentation values
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums
# =============================================================================


class Decision(str, Enum):
    """Top-line verdicts an analysis service is expected to emit.

    Not enforced: unrecognized decision strings pass through untouched.
    """

    TRUE = "True"
    FALSE = "False"
    MISLEADING = "Misleading"
    UNVERIFIABLE = "Unverifiable"
    ERROR = "Error"
    UNKNOWN = "Unknown"  # No decision in payload, or payload unreadable


class ClaimStatus(str, Enum):
    """Per-sub-claim statuses. Also not enforced."""

    SUPPORTED = "Supported"
    REFUTED = "Refuted"
    CONTRADICTED = "Contradicted"
    UNVERIFIABLE = "Unverifiable"


class Tone(str, Enum):
    """Colour family used to present a value."""

    AFFIRMATIVE = "AFFIRMATIVE"  # green
    NEGATIVE = "NEGATIVE"  # red
    WARNING = "WARNING"  # orange
    INFORMATIVE = "INFORMATIVE"  # blue
    MUTED = "MUTED"  # gray


# =============================================================================
# Payload Entries
# =============================================================================


class ClaimBreakdownEntry(BaseModel):
    """One sub-claim verdict from the explanation block."""

    model_config = ConfigDict(frozen=True)

    sub_claim: str = ""
    status: str = ""  # Usually a ClaimStatus value, passed through as-is
    evidence: str = ""
    source_url: str | None = None
    reason_for_decision: str = ""


class WebResult(BaseModel):
    """A search hit the analysis service consulted."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    url: str = ""


# =============================================================================
# Display Model
# =============================================================================


class DisplayModel(BaseModel):
    """
    Normalized, render-ready view of a single analysis payload.

    Every field has a safe default so templates never need to guard
    against missing data. Instances are frozen: one payload, one model,
    one render pass.
    """

    model_config = ConfigDict(frozen=True)

    decision: str = Decision.UNKNOWN.value
    # Higher = more false. None is the "no score" marker.
    score: int | float | None = None

    summary: str = ""
    reasoning: str = ""
    explanation_text: str = ""
    explanatory_tag: str = ""
    corrected_news: str = ""

    claim_breakdown: tuple[ClaimBreakdownEntry, ...] = ()
    techniques: tuple[str, ...] = ()
    web_results: tuple[WebResult, ...] = ()

    # Two independent error channels
    api_error_message: str = ""
    parse_error_message: str = ""


class TrafficLights(BaseModel):
    """Three lamps over the raw score buckets. All unlit without a score."""

    model_config = ConfigDict(frozen=True)

    low: bool = False  # score <= 40
    mid: bool = False  # 40 < score <= 70
    high: bool = False  # score > 70


class ResultView(BaseModel):
    """DisplayModel plus everything the renderer derives from it."""

    model_config = ConfigDict(frozen=True)

    model: DisplayModel = Field(default_factory=DisplayModel)
    loaded: bool = False

    decision_tone: Tone = Tone.MUTED
    score_tone: Tone = Tone.MUTED
    display_percentage: str = "--%"
    traffic_lights: TrafficLights = Field(default_factory=TrafficLights)

    # CSS classes for the results template
    decision_class: str = "text-gray-400"
    score_class: str = "text-gray-400"
    lamp_classes: tuple[str, str, str] = ("bg-gray-600", "bg-gray-600", "bg-gray-600")

    # Drives the "Incomplete Result" banner
    needs_attention: bool = True

    new_check_path: str

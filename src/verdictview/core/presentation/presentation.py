"""
Presentation rules - Pure functions of a DisplayModel.

Scores arrive as "fake scores" (higher = less truthful). The headline
percentage is inverted so that higher reads as more truthful, while the
colour buckets and traffic lights are computed on the raw score.

Bucket boundaries are strict on the upper side: 40 and 70 belong to
the lower bucket.
"""

from verdictview.core.models import (
    Decision,
    DisplayModel,
    ResultView,
    Tone,
    TrafficLights,
)
from verdictview.core.normalizer import NormalizerResult

SCORE_MAX = 100
LOW_THRESHOLD = 40
HIGH_THRESHOLD = 70
SCORE_PLACEHOLDER = "--%"

DECISION_TONES: dict[str, Tone] = {
    Decision.TRUE.value: Tone.AFFIRMATIVE,
    Decision.FALSE.value: Tone.NEGATIVE,
    Decision.MISLEADING.value: Tone.WARNING,
    Decision.UNVERIFIABLE.value: Tone.INFORMATIVE,
}

# Tailwind classes used by the results template
TEXT_CLASSES: dict[Tone, str] = {
    Tone.AFFIRMATIVE: "text-green-400",
    Tone.NEGATIVE: "text-red-400",
    Tone.WARNING: "text-orange-400",
    Tone.INFORMATIVE: "text-blue-400",
    Tone.MUTED: "text-gray-400",
}

# The score readout uses a deeper red than the decision label
SCORE_TEXT_CLASSES: dict[Tone, str] = {
    **TEXT_CLASSES,
    Tone.NEGATIVE: "text-red-500",
}

LAMP_CLASSES: dict[Tone, str] = {
    Tone.AFFIRMATIVE: "bg-green-500",
    Tone.NEGATIVE: "bg-red-500",
    Tone.WARNING: "bg-orange-500",
    Tone.INFORMATIVE: "bg-blue-500",
    Tone.MUTED: "bg-gray-600",
}


def decision_tone(decision: str) -> Tone:
    """Map a decision to its tone. Unknown, Error and anything unrecognized are muted."""
    return DECISION_TONES.get(decision, Tone.MUTED)


def score_tone(score: int | float | None) -> Tone:
    """Tone for the raw score bucket."""
    if score is None:
        return Tone.MUTED
    if score > HIGH_THRESHOLD:
        return Tone.AFFIRMATIVE
    if score > LOW_THRESHOLD:
        return Tone.WARNING
    return Tone.NEGATIVE


def traffic_lights(score: int | float | None) -> TrafficLights:
    """Light exactly one lamp for a score, none without one."""
    if score is None:
        return TrafficLights()
    return TrafficLights(
        low=score <= LOW_THRESHOLD,
        mid=LOW_THRESHOLD < score <= HIGH_THRESHOLD,
        high=score > HIGH_THRESHOLD,
    )


def display_percentage(score: int | float | None) -> str:
    """Inverted score as a percentage label, or the placeholder."""
    if score is None:
        return SCORE_PLACEHOLDER
    return f"{_format_number(SCORE_MAX - score)}%"


def needs_attention(model: DisplayModel) -> bool:
    """Whether the "Incomplete Result" banner should be shown."""
    return bool(
        model.parse_error_message
        or model.api_error_message
        or model.decision == Decision.UNKNOWN.value
    )


def lamp_classes(lights: TrafficLights) -> tuple[str, str, str]:
    """CSS classes for the (low, mid, high) lamps."""
    unlit = LAMP_CLASSES[Tone.MUTED]
    return (
        LAMP_CLASSES[Tone.NEGATIVE] if lights.low else unlit,
        LAMP_CLASSES[Tone.WARNING] if lights.mid else unlit,
        LAMP_CLASSES[Tone.AFFIRMATIVE] if lights.high else unlit,
    )


def present(result: NormalizerResult, new_check_path: str) -> ResultView:
    """Build the full view for one normalized analysis."""
    model = result.model
    lights = traffic_lights(model.score)
    verdict_tone = decision_tone(model.decision)
    bucket_tone = score_tone(model.score)
    return ResultView(
        model=model,
        loaded=result.loaded,
        decision_tone=verdict_tone,
        score_tone=bucket_tone,
        display_percentage=display_percentage(model.score),
        traffic_lights=lights,
        decision_class=TEXT_CLASSES[verdict_tone],
        score_class=SCORE_TEXT_CLASSES[bucket_tone],
        lamp_classes=lamp_classes(lights),
        needs_attention=needs_attention(model),
        new_check_path=new_check_path,
    )


def _format_number(value: int | float) -> str:
    """Render integral floats without a trailing .0"""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

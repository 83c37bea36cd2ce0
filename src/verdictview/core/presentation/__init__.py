"""Presentation - Derived tones, percentages and lamps."""

from verdictview.core.presentation.presentation import (
    LAMP_CLASSES,
    SCORE_PLACEHOLDER,
    SCORE_TEXT_CLASSES,
    TEXT_CLASSES,
    decision_tone,
    display_percentage,
    lamp_classes,
    needs_attention,
    present,
    score_tone,
    traffic_lights,
)

__all__ = [
    "LAMP_CLASSES",
    "SCORE_PLACEHOLDER",
    "SCORE_TEXT_CLASSES",
    "TEXT_CLASSES",
    "decision_tone",
    "display_percentage",
    "lamp_classes",
    "needs_attention",
    "present",
    "score_tone",
    "traffic_lights",
]

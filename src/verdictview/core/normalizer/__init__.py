"""Result Normalizer - Decode, unwrap and default a stored analysis."""

from verdictview.core.normalizer.normalizer import (
    INVALID_FORMAT_MESSAGE,
    NormalizerResult,
    ResultNormalizer,
    normalize_analysis,
)

__all__ = [
    "INVALID_FORMAT_MESSAGE",
    "NormalizerResult",
    "ResultNormalizer",
    "normalize_analysis",
]

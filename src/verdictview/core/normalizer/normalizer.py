"""
Result Normalizer - Turn a stored analysis blob into a DisplayModel.

The normalizer is the only thing standing between an untrusted payload
and the renderer. It never raises: every failure ends up in the result.

Flow:
1. Absent input -> defaults, no error ("still loading")
2. Decode text as JSON -> parse error on failure
3. Require a JSON object -> "invalid format" error otherwise
4. Unwrap a present `results` envelope (even {} or []), one level only
5. Extract each field independently (see FieldExtractor)
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from verdictview.core.extractor import FieldExtractor, FieldIssue, is_truthy
from verdictview.core.models import DisplayModel

logger = logging.getLogger(__name__)

INVALID_FORMAT_MESSAGE = "Stored analysis has an invalid format."
PARSE_FAILURE_PREFIX = "Failed to parse stored analysis"


@dataclass
class NormalizerResult:
    """Result of normalizing one stored analysis."""

    model: DisplayModel
    parse_error: str | None = None
    loaded: bool = False  # True once a payload object was decoded
    issues: list[FieldIssue] = field(default_factory=list)


class _DecodeFailure(Exception):
    """Internal signal carrying a user-facing parse error."""


class ResultNormalizer:
    """Normalize untrusted analysis payloads into render-ready models."""

    ENVELOPE_KEY = "results"

    def __init__(self, extractor: FieldExtractor | None = None):
        self.extractor = extractor or FieldExtractor()

    def normalize(self, raw: Any) -> NormalizerResult:
        """
        Normalize a raw payload.

        Args:
            raw: None, JSON text (str/bytes), or an already-decoded value

        Returns:
            NormalizerResult with a fully-populated DisplayModel
        """
        # Step 1: Nothing stored yet
        if raw is None:
            return NormalizerResult(model=DisplayModel())

        # Steps 2-3: Decode and shape-check
        try:
            decoded = self._try_parse(raw)
        except _DecodeFailure as e:
            message = str(e)
            logger.warning(message)
            return NormalizerResult(
                model=DisplayModel(parse_error_message=message),
                parse_error=message,
            )

        # Step 4: One-level envelope unwrap
        payload = self._unwrap(decoded)

        # Step 5: Field-by-field extraction
        extraction = self.extractor.extract(payload)
        return NormalizerResult(
            model=extraction.model,
            loaded=True,
            issues=extraction.issues,
        )

    def _try_parse(self, raw: Any) -> dict[str, Any]:
        """Decode text to a JSON object, or raise _DecodeFailure."""
        if isinstance(raw, (str, bytes, bytearray)):
            try:
                data = json.loads(raw)
            except (ValueError, RecursionError) as e:
                # JSONDecodeError and UnicodeDecodeError are both ValueErrors
                raise _DecodeFailure(f"{PARSE_FAILURE_PREFIX}: {e}") from e
        else:
            data = raw

        if not isinstance(data, dict):
            raise _DecodeFailure(INVALID_FORMAT_MESSAGE)
        return data

    def _unwrap(self, data: dict[str, Any]) -> Any:
        """Use data["results"] unless it is missing or falsy (None, false, 0, ""). Not recursive."""
        envelope = data.get(self.ENVELOPE_KEY)
        if is_truthy(envelope):
            return envelope
        return data


_default_normalizer = ResultNormalizer()


def normalize_analysis(raw: Any) -> tuple[DisplayModel, str | None]:
    """Stateless entry point: raw payload -> (DisplayModel, parse error or None)."""
    result = _default_normalizer.normalize(raw)
    return result.model, result.parse_error

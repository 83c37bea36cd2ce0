"""Tests for the Result Normalizer."""

import json

import pytest

from verdictview.core.models import Decision, DisplayModel
from verdictview.core.normalizer import (
    INVALID_FORMAT_MESSAGE,
    ResultNormalizer,
    normalize_analysis,
)


def assert_all_defaults(model: DisplayModel) -> None:
    """Every field holds its safe default (error channels aside)."""
    assert model.decision == "Unknown"
    assert model.score is None
    assert model.summary == ""
    assert model.reasoning == ""
    assert model.explanation_text == ""
    assert model.explanatory_tag == ""
    assert model.corrected_news == ""
    assert model.claim_breakdown == ()
    assert model.techniques == ()
    assert model.web_results == ()
    assert model.api_error_message == ""


FULL_PAYLOAD = {
    "summary": "A viral post claims the bridge collapsed.",
    "final_verdict": {
        "decision": "False",
        "fake_score": 85,
        "reasoning": "No credible outlet reported a collapse.",
    },
    "explanation": {
        "claim_breakdown": [
            {
                "sub_claim": "The bridge collapsed on Monday",
                "status": "Refuted",
                "evidence": "Traffic cameras show the bridge intact.",
                "source_url": "https://example.org/cams",
                "reason_for_decision": "Direct visual evidence.",
            }
        ],
        "explanation": "The image is from a 2019 event abroad.",
        "corrected_news": "The bridge is open.",
        "explanatory_tag": "Out of context",
        "misinformation_techniques": ["recycled imagery", "fear appeal"],
    },
    "web_results": [{"title": "City traffic cams", "url": "https://example.org/cams"}],
}


class TestResultNormalizer:
    """Test decoding, envelope handling and defaults."""

    @pytest.fixture
    def normalizer(self) -> ResultNormalizer:
        return ResultNormalizer()

    def test_absent_input_is_loading_state(self, normalizer: ResultNormalizer) -> None:
        """None means nothing stored yet: defaults and no error."""
        result = normalizer.normalize(None)

        assert_all_defaults(result.model)
        assert result.parse_error is None
        assert result.model.parse_error_message == ""
        assert not result.loaded

    def test_empty_string_is_parse_error(self, normalizer: ResultNormalizer) -> None:
        """Empty text is not JSON; only parse error distinguishes it from absent."""
        result = normalizer.normalize("")

        assert_all_defaults(result.model)
        assert result.parse_error is not None
        assert result.parse_error.startswith("Failed to parse stored analysis: ")
        assert result.model.parse_error_message == result.parse_error
        assert not result.loaded

    def test_invalid_json_embeds_reason(self, normalizer: ResultNormalizer) -> None:
        """Parse error message should carry the decoder's reason."""
        result = normalizer.normalize("{not json")

        assert_all_defaults(result.model)
        assert result.parse_error is not None
        assert "Failed to parse stored analysis" in result.parse_error
        assert len(result.parse_error) > len("Failed to parse stored analysis: ")

    @pytest.mark.parametrize("raw", ["42", '"text"', "null", "true", "[1, 2, 3]", "[]"])
    def test_non_object_json_is_invalid_format(
        self, normalizer: ResultNormalizer, raw: str
    ) -> None:
        """Decoded values that are not objects are rejected."""
        result = normalizer.normalize(raw)

        assert_all_defaults(result.model)
        assert result.parse_error == INVALID_FORMAT_MESSAGE

    def test_accepts_bytes(self, normalizer: ResultNormalizer) -> None:
        """Raw bytes decode like text."""
        raw = json.dumps({"final_verdict": {"decision": "True"}}).encode("utf-8")

        result = normalizer.normalize(raw)

        assert result.model.decision == "True"
        assert result.parse_error is None

    def test_invalid_utf8_bytes_is_parse_error(self, normalizer: ResultNormalizer) -> None:
        """Undecodable bytes become a parse error, not an exception."""
        result = normalizer.normalize(b"\xff\xfe\xfa")

        assert result.parse_error is not None
        assert result.parse_error.startswith("Failed to parse stored analysis")

    def test_accepts_already_decoded_object(self, normalizer: ResultNormalizer) -> None:
        """A dict is used as-is without decoding."""
        result = normalizer.normalize({"final_verdict": {"decision": "Misleading"}})

        assert result.model.decision == "Misleading"
        assert result.loaded

    def test_already_decoded_non_object_is_invalid_format(
        self, normalizer: ResultNormalizer
    ) -> None:
        """Decoded lists and numbers fail the shape check too."""
        assert normalizer.normalize([1, 2]).parse_error == INVALID_FORMAT_MESSAGE
        assert normalizer.normalize(7).parse_error == INVALID_FORMAT_MESSAGE

    def test_deeply_nested_garbage_does_not_raise(self, normalizer: ResultNormalizer) -> None:
        """Pathological nesting is reported, never raised."""
        raw = "[" * 100_000 + "]" * 100_000

        result = normalizer.normalize(raw)

        assert_all_defaults(result.model)
        assert result.parse_error is not None

    def test_nested_garbage_object_defaults(self, normalizer: ResultNormalizer) -> None:
        """Wrong types at every level still produce a full model."""
        raw = json.dumps(
            {
                "final_verdict": [1, 2, 3],
                "explanation": "oops",
                "web_results": {"title": "x"},
                "summary": {"nested": {"deeper": [None]}},
            }
        )

        result = normalizer.normalize(raw)

        assert_all_defaults(result.model)
        assert result.parse_error is None
        assert result.loaded

    def test_full_payload(self, normalizer: ResultNormalizer) -> None:
        """A well-formed payload populates every field."""
        result = normalizer.normalize(json.dumps(FULL_PAYLOAD))
        model = result.model

        assert result.parse_error is None
        assert result.issues == []
        assert model.decision == "False"
        assert model.score == 85
        assert model.summary == FULL_PAYLOAD["summary"]
        assert model.reasoning == "No credible outlet reported a collapse."
        assert model.explanation_text == "The image is from a 2019 event abroad."
        assert model.corrected_news == "The bridge is open."
        assert model.explanatory_tag == "Out of context"
        assert model.techniques == ("recycled imagery", "fear appeal")
        assert len(model.claim_breakdown) == 1
        assert model.claim_breakdown[0].status == "Refuted"
        assert model.claim_breakdown[0].source_url == "https://example.org/cams"
        assert model.web_results[0].title == "City traffic cams"


class TestEnvelopeUnwrap:
    """Test the one-level `results` envelope."""

    @pytest.fixture
    def normalizer(self) -> ResultNormalizer:
        return ResultNormalizer()

    def test_with_and_without_envelope_match(self, normalizer: ResultNormalizer) -> None:
        """Unwrapping is transparent when present, safe when absent."""
        wrapped = normalizer.normalize({"results": {"final_verdict": {"decision": "True"}}})
        bare = normalizer.normalize({"final_verdict": {"decision": "True"}})

        assert wrapped.model.decision == "True"
        assert bare.model == wrapped.model

    def test_unwrap_is_not_recursive(self, normalizer: ResultNormalizer) -> None:
        """Only one envelope level is removed."""
        raw = {"results": {"results": {"final_verdict": {"decision": "True"}}}}

        result = normalizer.normalize(raw)

        assert result.model.decision == "Unknown"

    def test_falsy_envelope_uses_object_itself(self, normalizer: ResultNormalizer) -> None:
        """A null, false, zero or empty-string `results` is ignored."""
        for envelope in (None, False, 0, 0.0, ""):
            raw = {"results": envelope, "final_verdict": {"decision": "Misleading"}}
            assert normalizer.normalize(raw).model.decision == "Misleading", envelope

    @pytest.mark.parametrize("envelope", [{}, []])
    def test_empty_container_envelope_is_unwrapped(
        self, normalizer: ResultNormalizer, envelope: object
    ) -> None:
        """An empty object or list under `results` still replaces the outer data."""
        raw = {"results": envelope, "final_verdict": {"decision": "True", "fake_score": 10}}

        result = normalizer.normalize(json.dumps(raw))

        assert_all_defaults(result.model)
        assert result.parse_error is None
        assert result.loaded

    def test_non_object_envelope_defaults(self, normalizer: ResultNormalizer) -> None:
        """A truthy scalar envelope is unwrapped and yields defaults."""
        raw = {"results": "pending", "final_verdict": {"decision": "True"}}

        result = normalizer.normalize(raw)

        assert_all_defaults(result.model)
        assert result.parse_error is None

    def test_error_inside_envelope(self, normalizer: ResultNormalizer) -> None:
        """Error fields are read from the effective payload."""
        result = normalizer.normalize({"results": {"error": "quota exceeded"}})

        assert result.model.api_error_message == "quota exceeded"

    def test_object_error_beats_detail(self, normalizer: ResultNormalizer) -> None:
        """An empty object error still counts as an error."""
        result = normalizer.normalize('{"error": {}, "detail": "d"}')

        assert result.model.api_error_message == "{}"


class TestNormalizeAnalysis:
    """Test the stateless entry point."""

    def test_returns_model_and_parse_error(self) -> None:
        """Returns a (DisplayModel, parse error) pair."""
        model, error = normalize_analysis('{"final_verdict": {"fake_score": 30}}')

        assert model.score == 30
        assert error is None

    def test_parse_error_channel(self) -> None:
        """Parse errors come back in the second slot."""
        model, error = normalize_analysis("<html>")

        assert model.decision == Decision.UNKNOWN.value
        assert error is not None

    def test_absent_has_no_error(self) -> None:
        """Absent input returns no error."""
        model, error = normalize_analysis(None)

        assert model == DisplayModel()
        assert error is None

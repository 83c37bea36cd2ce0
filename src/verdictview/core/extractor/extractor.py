"""
Field Extractor - Type-guarded, field-by-field extraction.

The extractor turns the effective payload (already decoded and
unwrapped by the normalizer) into a DisplayModel:
1. Every field is looked up independently with its own default
2. Every value passes a runtime type guard, never a coercion
3. Anything that fails a guard is recorded as a FieldIssue and defaulted

Nothing here raises on bad data. Issues are diagnostics only.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any

from verdictview.core.models import (
    ClaimBreakdownEntry,
    Decision,
    DisplayModel,
    WebResult,
)

logger = logging.getLogger(__name__)


def is_truthy(value: Any) -> bool:
    """
    Truthiness as the analysis payload's producers define it.

    Only None, False, zero (and NaN) and "" are falsy. Empty objects and
    lists count as present, unlike Python's bool().
    """
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True


@dataclass
class FieldIssue:
    """A single field that could not be taken as-is."""

    field: str
    message: str
    code: str  # e.g., "INVALID_TYPE", "NOT_FINITE", "DROPPED_ITEM"


@dataclass
class ExtractionResult:
    """Result of extraction: always a model, maybe some issues."""

    model: DisplayModel
    issues: list[FieldIssue] = field(default_factory=list)


class FieldExtractor:
    """
    Extract a DisplayModel from an untrusted payload.

    Enforces:
    - Strings only where strings are expected
    - Numeric (non-bool, finite) fake_score only
    - Lists only where sequences are expected
    - error preferred over detail, object detail ignored
    """

    # (model field, parent key, source key) for plain string fields
    STRING_FIELDS: tuple[tuple[str, str | None, str], ...] = (
        ("summary", None, "summary"),
        ("reasoning", "final_verdict", "reasoning"),
        ("explanation_text", "explanation", "explanation"),
        ("explanatory_tag", "explanation", "explanatory_tag"),
        ("corrected_news", "explanation", "corrected_news"),
    )

    CLAIM_STRING_FIELDS = ("sub_claim", "status", "evidence", "reason_for_decision")

    def extract(self, payload: Any) -> ExtractionResult:
        """
        Extract every display field from the effective payload.

        Args:
            payload: Effective payload; a dict when well formed, anything otherwise

        Returns:
            ExtractionResult with a fully-populated DisplayModel
        """
        issues: list[FieldIssue] = []

        verdict = self._section(payload, "final_verdict")
        explanation = self._section(payload, "explanation")

        values: dict[str, Any] = {
            "decision": self._extract_decision(verdict, issues),
            "score": self._extract_score(verdict, issues),
            "claim_breakdown": self._extract_claims(explanation, issues),
            "techniques": self._extract_techniques(explanation, issues),
            "web_results": self._extract_web_results(payload, issues),
            "api_error_message": self._extract_api_error(payload),
        }

        for model_field, parent, key in self.STRING_FIELDS:
            source = payload if parent is None else self._section(payload, parent)
            path = key if parent is None else f"{parent}.{key}"
            values[model_field] = self._string(source, key, path, issues)

        for issue in issues:
            logger.debug(f"Defaulted {issue.field}: {issue.message} ({issue.code})")

        return ExtractionResult(model=DisplayModel(**values), issues=issues)

    # =========================================================================
    # Lookups
    # =========================================================================

    @staticmethod
    def _section(payload: Any, key: str) -> dict[str, Any]:
        """Get a nested object, or an empty dict when absent or not an object."""
        if not isinstance(payload, dict):
            return {}
        value = payload.get(key)
        return value if isinstance(value, dict) else {}

    def _string(
        self,
        source: dict[str, Any],
        key: str,
        path: str,
        issues: list[FieldIssue],
    ) -> str:
        """Get a string value, or "" when absent or not a string."""
        if not isinstance(source, dict):
            return ""
        value = source.get(key)
        if value is None:
            return ""
        if not isinstance(value, str):
            issues.append(
                FieldIssue(
                    field=path,
                    message=f"Expected string, got: {type(value).__name__}",
                    code="INVALID_TYPE",
                )
            )
            return ""
        return value

    # =========================================================================
    # Verdict
    # =========================================================================

    def _extract_decision(
        self, verdict: dict[str, Any], issues: list[FieldIssue]
    ) -> str:
        """Decision passes through unvalidated; only its type is checked."""
        value = verdict.get("decision")
        if value is None:
            return Decision.UNKNOWN.value
        if not isinstance(value, str):
            issues.append(
                FieldIssue(
                    field="final_verdict.decision",
                    message=f"Decision must be a string, got: {type(value).__name__}",
                    code="INVALID_TYPE",
                )
            )
            return Decision.UNKNOWN.value
        return value

    def _extract_score(
        self, verdict: dict[str, Any], issues: list[FieldIssue]
    ) -> int | float | None:
        """Take fake_score only if it is already a number. No coercion."""
        value = verdict.get("fake_score")
        if value is None:
            return None

        # bool is an int subclass; JSON true/false is not a score
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            issues.append(
                FieldIssue(
                    field="final_verdict.fake_score",
                    message=f"Score must be a number, got: {type(value).__name__}",
                    code="INVALID_TYPE",
                )
            )
            return None

        if isinstance(value, float) and not math.isfinite(value):
            issues.append(
                FieldIssue(
                    field="final_verdict.fake_score",
                    message=f"Score must be finite, got: {value}",
                    code="NOT_FINITE",
                )
            )
            return None

        return value

    # =========================================================================
    # Explanation
    # =========================================================================

    def _extract_claims(
        self, explanation: dict[str, Any], issues: list[FieldIssue]
    ) -> tuple[ClaimBreakdownEntry, ...]:
        """Build claim entries from a list of objects; drop anything else."""
        items = self._list(explanation, "claim_breakdown", "explanation.claim_breakdown", issues)

        entries: list[ClaimBreakdownEntry] = []
        for i, item in enumerate(items):
            path = f"explanation.claim_breakdown[{i}]"
            if not isinstance(item, dict):
                issues.append(
                    FieldIssue(
                        field=path,
                        message=f"Claim entry must be an object, got: {type(item).__name__}",
                        code="DROPPED_ITEM",
                    )
                )
                continue

            values = {
                key: self._string(item, key, f"{path}.{key}", issues)
                for key in self.CLAIM_STRING_FIELDS
            }
            source_url = item.get("source_url")
            values["source_url"] = source_url if isinstance(source_url, str) and source_url else None
            entries.append(ClaimBreakdownEntry(**values))

        return tuple(entries)

    def _extract_techniques(
        self, explanation: dict[str, Any], issues: list[FieldIssue]
    ) -> tuple[str, ...]:
        """Techniques only from a genuine list; a scalar never becomes a list."""
        items = self._list(
            explanation,
            "misinformation_techniques",
            "explanation.misinformation_techniques",
            issues,
        )

        techniques: list[str] = []
        for i, item in enumerate(items):
            if not isinstance(item, str):
                issues.append(
                    FieldIssue(
                        field=f"explanation.misinformation_techniques[{i}]",
                        message=f"Technique must be a string, got: {type(item).__name__}",
                        code="DROPPED_ITEM",
                    )
                )
                continue
            techniques.append(item)

        return tuple(techniques)

    def _extract_web_results(
        self, payload: Any, issues: list[FieldIssue]
    ) -> tuple[WebResult, ...]:
        """Pass web results through, keeping only object entries."""
        source = payload if isinstance(payload, dict) else {}
        items = self._list(source, "web_results", "web_results", issues)

        results: list[WebResult] = []
        for i, item in enumerate(items):
            path = f"web_results[{i}]"
            if not isinstance(item, dict):
                issues.append(
                    FieldIssue(
                        field=path,
                        message=f"Web result must be an object, got: {type(item).__name__}",
                        code="DROPPED_ITEM",
                    )
                )
                continue
            results.append(
                WebResult(
                    title=self._string(item, "title", f"{path}.title", issues),
                    url=self._string(item, "url", f"{path}.url", issues),
                )
            )

        return tuple(results)

    def _list(
        self,
        source: dict[str, Any],
        key: str,
        path: str,
        issues: list[FieldIssue],
    ) -> list[Any]:
        """Get a list value, or [] when absent or not a list."""
        value = source.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            issues.append(
                FieldIssue(
                    field=path,
                    message=f"Expected list, got: {type(value).__name__}",
                    code="INVALID_TYPE",
                )
            )
            return []
        return value

    # =========================================================================
    # Upstream errors
    # =========================================================================

    @staticmethod
    def _extract_api_error(payload: Any) -> str:
        """
        Prefer a truthy error; fall back to detail only when it is a string.

        Non-string errors are rendered as JSON text (true, {"code": 1}),
        never as Python reprs.
        """
        if not isinstance(payload, dict):
            return ""

        error = payload.get("error")
        if is_truthy(error):
            if isinstance(error, str):
                return error
            return json.dumps(error, default=str)

        detail = payload.get("detail")
        if isinstance(detail, str):
            return detail

        # Structured detail (e.g. FastAPI validation errors) is never dumped
        return ""

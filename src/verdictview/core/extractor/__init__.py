"""Field Extractor - Type-guarded extraction into a DisplayModel."""

from verdictview.core.extractor.extractor import (
    ExtractionResult,
    FieldExtractor,
    FieldIssue,
    is_truthy,
)

__all__ = ["ExtractionResult", "FieldExtractor", "FieldIssue", "is_truthy"]

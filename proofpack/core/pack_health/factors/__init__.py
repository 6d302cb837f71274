"""Pack Health factor scorers."""

from proofpack.core.pack_health.factors.completeness import (
    distinct_categories_divisor,
    required_categories_divisor,
    score_completeness,
)
from proofpack.core.pack_health.factors.expiration import classify_expiration, score_expiration
from proofpack.core.pack_health.factors.quality import document_quality_points, score_quality
from proofpack.core.pack_health.factors.remediation import score_remediation

__all__ = [
    "score_completeness",
    "distinct_categories_divisor",
    "required_categories_divisor",
    "classify_expiration",
    "score_expiration",
    "document_quality_points",
    "score_quality",
    "score_remediation",
]

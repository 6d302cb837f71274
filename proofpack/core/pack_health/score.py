"""Main Pack Health score computation.

This module orchestrates the scoring by:
1. Coercing inputs to validated models
2. Running each factor scorer on unrounded values
3. Weighting and summing the factors
4. Rounding once at the reporting boundary
"""

import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from proofpack.core.logging import get_logger
from proofpack.core.pack_health.config import DEFAULT_CONFIG, PackHealthConfig
from proofpack.core.pack_health.factors import (
    score_completeness,
    score_expiration,
    score_quality,
    score_remediation,
)
from proofpack.core.pack_health.instants import to_instant, utc_now
from proofpack.core.pack_health.types import (
    Document,
    FactorBreakdown,
    GapItem,
    PackHealthScore,
    ScoreBreakdown,
    parse_documents,
    parse_gaps,
)

logger = get_logger(__name__)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for the non-negative scores we report."""
    return int(math.floor(value + 0.5))


def is_eligible(overall_score: int, config: PackHealthConfig = DEFAULT_CONFIG) -> bool:
    """Whether a pack qualifies for introductions."""
    return overall_score >= config.eligibility_threshold


def calculate_pack_health(
    documents: Iterable[Document | Mapping[str, Any]],
    gaps: Iterable[GapItem | Mapping[str, Any]],
    *,
    now: datetime | None = None,
    config: PackHealthConfig = DEFAULT_CONFIG,
) -> PackHealthScore:
    """
    Compute the Pack Health score for a document collection.

    Pure: nothing is read from or written to storage. Always computed fresh
    from the inputs.

    Args:
        documents: Documents in the pack (models or raw mappings)
        gaps: Current gap list, with statuses persisted by the caller
        now: Instant to score against (defaults to current UTC time)
        config: Scoring configuration

    Returns:
        PackHealthScore with rounded sub-scores and unrounded breakdown

    Raises:
        InvalidDocumentError: If a document or gap is malformed
    """
    docs = parse_documents(documents)
    gap_items = parse_gaps(gaps)
    now = to_instant(now) if now is not None else utc_now()

    raw = {
        "completeness": score_completeness(
            docs, config.required_categories, config.volume_divisor
        ),
        "expiration": score_expiration(docs, now, config.expiring_window_days),
        "quality": score_quality(docs),
        "remediation": score_remediation(gap_items),
    }

    factors: dict[str, FactorBreakdown] = {}
    for name, (score, details) in raw.items():
        weight = config.weights[name]
        factors[name] = FactorBreakdown(
            weight=weight,
            score=score,
            weighted=score * weight,
            details=details,
        )
        logger.debug(f"Pack Health factor {name}: {score:.2f} ({details})")

    # Sum unrounded weighted terms; round only once for the overall score
    overall = round_half_up(sum(f.weighted for f in factors.values()))

    result = PackHealthScore(
        overall_score=overall,
        completeness_score=round_half_up(factors["completeness"].score),
        expiration_score=round_half_up(factors["expiration"].score),
        quality_score=round_half_up(factors["quality"].score),
        remediation_score=round_half_up(factors["remediation"].score),
        breakdown=ScoreBreakdown(**factors),
        is_eligible_for_introductions=is_eligible(overall, config),
        threshold=config.eligibility_threshold,
        calculated_at=now,
    )

    logger.info(
        f"Computed Pack Health {result.overall_score} for {len(docs)} documents, "
        f"{len(gap_items)} gaps (eligible={result.is_eligible_for_introductions})"
    )

    return result

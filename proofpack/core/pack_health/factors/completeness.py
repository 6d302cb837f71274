"""Completeness factor scoring (40% weight).

Measures how many of the required evidence categories have at least one
document, with a small bonus for depth of evidence.
"""

from collections.abc import Callable, Sequence

from proofpack.core.pack_health.types import Document

VOLUME_BONUS_PER_DOC = 5
MAX_VOLUME_BONUS = 20

VolumeDivisor = Callable[[Sequence[Document], Sequence[str]], int]


def distinct_categories_divisor(documents: Sequence[Document], required: Sequence[str]) -> int:
    """Every distinct category present, including non-required ones like 'Other'."""
    return len({d.category for d in documents})


def required_categories_divisor(documents: Sequence[Document], required: Sequence[str]) -> int:
    """Only the required categories that are covered (at least 1)."""
    present = {d.category for d in documents}
    return max(sum(1 for c in required if c in present), 1)


def score_completeness(
    documents: Sequence[Document],
    required_categories: Sequence[str],
    volume_divisor: VolumeDivisor = distinct_categories_divisor,
) -> tuple[float, str]:
    """
    Score category coverage.

    Args:
        documents: Documents in the pack
        required_categories: Categories every pack should cover
        volume_divisor: Strategy for the avg-docs-per-category denominator

    Returns:
        Tuple of (score 0-100, details)
    """
    if not documents:
        return 0, "No documents"

    present = {d.category for d in documents}
    covered = sum(1 for c in required_categories if c in present)
    category_score = (covered / len(required_categories)) * 100

    avg_docs_per_category = len(documents) / volume_divisor(documents, required_categories)
    volume_bonus = min(avg_docs_per_category * VOLUME_BONUS_PER_DOC, MAX_VOLUME_BONUS)

    score = min(category_score + volume_bonus, 100)
    return score, f"{covered}/{len(required_categories)} required categories covered"

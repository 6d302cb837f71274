"""Expiration (freshness) factor scoring (30% weight).

Expired documents are penalised more than twice as hard as documents
that are merely about to expire.
"""

from collections.abc import Sequence
from datetime import datetime

from proofpack.core.pack_health.instants import days_until
from proofpack.core.pack_health.types import Document, ExpirationState

EXPIRING_PENALTY = 0.3
EXPIRED_PENALTY = 0.7


def classify_expiration(document: Document, now: datetime, window_days: int) -> ExpirationState:
    """Bucket a document as valid, expiring (0..window days left) or expired."""
    if document.expiration_date is None:
        return ExpirationState.VALID

    days = days_until(document.expiration_date, now)
    if days < 0:
        return ExpirationState.EXPIRED
    if days <= window_days:
        return ExpirationState.EXPIRING
    return ExpirationState.VALID


def score_expiration(
    documents: Sequence[Document],
    now: datetime,
    window_days: int,
) -> tuple[float, str]:
    """
    Score document freshness.

    Returns:
        Tuple of (score 0-100, details)
    """
    if not documents:
        return 0, "No documents"

    counts = {state: 0 for state in ExpirationState}
    for doc in documents:
        counts[classify_expiration(doc, now, window_days)] += 1

    total = len(documents)
    valid_ratio = counts[ExpirationState.VALID] / total
    expiring_penalty = (counts[ExpirationState.EXPIRING] / total) * EXPIRING_PENALTY
    expired_penalty = (counts[ExpirationState.EXPIRED] / total) * EXPIRED_PENALTY

    score = max((valid_ratio - expiring_penalty - expired_penalty) * 100, 0)
    details = (
        f"{counts[ExpirationState.VALID]} valid, "
        f"{counts[ExpirationState.EXPIRING]} expiring, "
        f"{counts[ExpirationState.EXPIRED]} expired"
    )
    return score, details

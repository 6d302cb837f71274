"""Gap identification for Proof Packs.

Structural gaps (missing categories, expired and expiring documents) are
derived fresh from the current documents on every run. Only the gap
``status`` survives between runs, and the caller owns that persistence;
``merge_gap_statuses`` reapplies it to a freshly derived list.
"""

import re
from collections.abc import Iterable, Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from proofpack.core.logging import get_logger
from proofpack.core.pack_health.config import DEFAULT_CONFIG, PackHealthConfig
from proofpack.core.pack_health.factors.expiration import classify_expiration
from proofpack.core.pack_health.instants import days_until, to_instant, utc_now
from proofpack.core.pack_health.score import round_half_up
from proofpack.core.pack_health.types import (
    Document,
    ExpirationState,
    GapItem,
    GapPriority,
    parse_documents,
    parse_gaps,
)

logger = get_logger(__name__)

ANY_DOCUMENT_TYPE = "Any"

EXPIRED_PREFIX = "gap_expired_"
EXPIRING_PREFIX = "gap_expiring_"


class GapKind(str, Enum):
    MISSING_CATEGORY = "missing_category"
    EXPIRED_DOCUMENT = "expired_document"
    EXPIRING_DOCUMENT = "expiring_document"
    OTHER = "other"


def gap_id_for_category(category: str) -> str:
    """'Past Performance' -> 'gap_past_performance'."""
    return "gap_" + re.sub(r"\s+", "_", category.lower())


def classify_gap(gap: GapItem) -> GapKind:
    """Recover what caused a gap from its deterministic id."""
    if gap.id.startswith(EXPIRED_PREFIX):
        return GapKind.EXPIRED_DOCUMENT
    if gap.id.startswith(EXPIRING_PREFIX):
        return GapKind.EXPIRING_DOCUMENT
    if gap.document_type == ANY_DOCUMENT_TYPE and gap.id == gap_id_for_category(gap.category):
        return GapKind.MISSING_CATEGORY
    return GapKind.OTHER


def identify_gaps(
    documents: Iterable[Document | Mapping[str, Any]],
    *,
    now: datetime | None = None,
    config: PackHealthConfig = DEFAULT_CONFIG,
) -> list[GapItem]:
    """
    Identify gaps in a Proof Pack.

    Emission order: missing categories (category order), then expired
    documents, then expiring documents (document order).

    Args:
        documents: Documents in the pack
        now: Instant to evaluate expirations against
        config: Scoring configuration

    Returns:
        Freshly derived gaps, all with status 'open'

    Raises:
        InvalidDocumentError: If a document is malformed
    """
    docs = parse_documents(documents)
    now = to_instant(now) if now is not None else utc_now()

    gaps: list[GapItem] = []
    present = {d.category for d in docs}

    for category in config.required_categories:
        if category not in present:
            gaps.append(GapItem(
                id=gap_id_for_category(category),
                category=category,
                document_type=ANY_DOCUMENT_TYPE,
                priority=GapPriority.HIGH,
                recommendation=f"Upload at least one {category} document to improve Pack Health",
            ))

    states = [classify_expiration(d, now, config.expiring_window_days) for d in docs]

    for doc, state in zip(docs, states):
        if state == ExpirationState.EXPIRED:
            gaps.append(GapItem(
                id=f"{EXPIRED_PREFIX}{doc.id}",
                category=doc.category,
                document_type=doc.file_name,
                priority=GapPriority.HIGH,
                recommendation=f'Document "{doc.file_name}" has expired. Upload a renewed version.',
            ))

    for doc, state in zip(docs, states):
        if state == ExpirationState.EXPIRING:
            days = round_half_up(days_until(doc.expiration_date, now))
            gaps.append(GapItem(
                id=f"{EXPIRING_PREFIX}{doc.id}",
                category=doc.category,
                document_type=doc.file_name,
                priority=GapPriority.MEDIUM,
                recommendation=f'Document "{doc.file_name}" expires in {days} days. Plan to renew.',
            ))

    logger.debug(f"Identified {len(gaps)} gaps across {len(docs)} documents")
    return gaps


def merge_gap_statuses(
    fresh: Iterable[GapItem | Mapping[str, Any]],
    persisted: Iterable[GapItem | Mapping[str, Any]],
) -> list[GapItem]:
    """
    Carry persisted statuses onto freshly identified gaps.

    Gaps are matched by id. Persisted gaps whose cause no longer exists are
    dropped; fresh gaps with no persisted counterpart stay 'open'.

    Returns:
        New GapItem list in the order of ``fresh``
    """
    statuses = {g.id: g.status for g in parse_gaps(persisted)}

    merged: list[GapItem] = []
    for gap in parse_gaps(fresh):
        status = statuses.get(gap.id)
        if status is not None and status != gap.status:
            gap = gap.model_copy(update={"status": status})
        merged.append(gap)
    return merged

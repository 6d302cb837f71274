"""Remediation planning.

Turns the current gaps into a short, ranked worklist. Actions are grouped
into priority buckets (1 = do first) and ranked by estimated impact within
a bucket.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from proofpack.core.pack_health.gaps import GapKind, classify_gap
from proofpack.core.pack_health.types import (
    Document,
    EffortLevel,
    GapItem,
    RemediationAction,
    parse_documents,
    parse_gaps,
)

MISSING_CATEGORY_IMPACT = 15
EXPIRED_DOCUMENT_IMPACT = 12
METADATA_IMPACT = 8
EXPIRING_DOCUMENT_IMPACT = 5


def get_remediation_actions(
    current_score: float,
    documents: Iterable[Document | Mapping[str, Any]],
    gaps: Iterable[GapItem | Mapping[str, Any]],
    *,
    limit: int | None = None,
) -> list[RemediationAction]:
    """
    Build the remediation worklist for a pack.

    Args:
        current_score: Current overall score (part of the contract; the
            ranking does not depend on it yet)
        documents: Documents in the pack
        gaps: Current gaps
        limit: Maximum number of actions to return after ranking

    Returns:
        Actions sorted by priority bucket (asc), then impact (desc)

    Raises:
        InvalidDocumentError: If a document or gap is malformed
    """
    docs = parse_documents(documents)
    gap_items = parse_gaps(gaps)

    actions: list[RemediationAction] = []

    missing = [g for g in gap_items if classify_gap(g) == GapKind.MISSING_CATEGORY]
    for index, gap in enumerate(missing):
        actions.append(RemediationAction(
            id=f"action_missing_{index}",
            description=f"Add {gap.category} documents",
            estimated_impact=MISSING_CATEGORY_IMPACT,
            effort_level=EffortLevel.MEDIUM,
            priority=1,
        ))

    expired = [g for g in gap_items if classify_gap(g) == GapKind.EXPIRED_DOCUMENT]
    for index, gap in enumerate(expired):
        actions.append(RemediationAction(
            id=f"action_expired_{index}",
            description=f"Renew expired document: {gap.document_type}",
            estimated_impact=EXPIRED_DOCUMENT_IMPACT,
            effort_level=EffortLevel.MEDIUM,
            priority=1,
        ))

    untyped = [d for d in docs if not d.metadata.document_type]
    if untyped:
        actions.append(RemediationAction(
            id="action_metadata",
            description=f"Add document types and notes to {len(untyped)} documents",
            estimated_impact=METADATA_IMPACT,
            effort_level=EffortLevel.LOW,
            priority=2,
        ))

    expiring = [g for g in gap_items if classify_gap(g) == GapKind.EXPIRING_DOCUMENT]
    if expiring:
        actions.append(RemediationAction(
            id="action_expiring",
            description=f"Plan renewal for {len(expiring)} documents expiring soon",
            estimated_impact=EXPIRING_DOCUMENT_IMPACT,
            effort_level=EffortLevel.LOW,
            priority=3,
        ))

    # Stable: equal (priority, impact) keep emission order
    ranked = sorted(actions, key=lambda a: (a.priority, -a.estimated_impact))

    if limit is not None:
        ranked = ranked[:limit]
    return ranked

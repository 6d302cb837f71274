"""Remediation factor scoring (10% weight)."""

from collections.abc import Sequence

from proofpack.core.pack_health.types import GapItem


def score_remediation(gaps: Sequence[GapItem]) -> tuple[float, str]:
    """Share of gaps acknowledged or marked not applicable. No gaps scores 100."""
    if not gaps:
        return 100, "No gaps"

    resolved = sum(1 for g in gaps if g.is_resolved)
    return (resolved / len(gaps)) * 100, f"{resolved}/{len(gaps)} gaps resolved"

"""Pack Health scoring system.

Scores a Proof Pack (a business's evidentiary documents) across 4 factors:
- Completeness (40%): Required categories covered
- Expiration (30%): Documents still in date
- Quality (20%): Naming and metadata
- Remediation (10%): Gaps acknowledged

Usage:
    from proofpack.core.pack_health import calculate_pack_health, identify_gaps

    gaps = identify_gaps(documents)
    score = calculate_pack_health(documents, gaps)
    print(f"Eligible: {score.is_eligible_for_introductions} ({score.overall_score})")
"""

from proofpack.core.pack_health.config import DEFAULT_CONFIG, PackHealthConfig
from proofpack.core.pack_health.gaps import identify_gaps, merge_gap_statuses
from proofpack.core.pack_health.remediation import get_remediation_actions
from proofpack.core.pack_health.score import calculate_pack_health, is_eligible
from proofpack.core.pack_health.submission import (
    PackStatus,
    SubmissionBlockedError,
    check_submission_eligibility,
)
from proofpack.core.pack_health.types import (
    ELIGIBILITY_THRESHOLD,
    FACTOR_WEIGHTS,
    REQUIRED_CATEGORIES,
    Document,
    DocumentMetadata,
    GapItem,
    GapPriority,
    GapStatus,
    InvalidDocumentError,
    PackHealthScore,
    RemediationAction,
)

__all__ = [
    "calculate_pack_health",
    "identify_gaps",
    "merge_gap_statuses",
    "get_remediation_actions",
    "check_submission_eligibility",
    "is_eligible",
    "PackHealthConfig",
    "DEFAULT_CONFIG",
    "PackStatus",
    "SubmissionBlockedError",
    "InvalidDocumentError",
    "Document",
    "DocumentMetadata",
    "GapItem",
    "GapPriority",
    "GapStatus",
    "PackHealthScore",
    "RemediationAction",
    "REQUIRED_CATEGORIES",
    "FACTOR_WEIGHTS",
    "ELIGIBILITY_THRESHOLD",
]

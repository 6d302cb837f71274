"""Submission gate for Proof Packs.

A pack may only go to QA review while it is a draft and its Pack Health
score meets the eligibility threshold.
"""

from enum import Enum

from proofpack.core.pack_health.config import DEFAULT_CONFIG, PackHealthConfig
from proofpack.core.pack_health.score import is_eligible
from proofpack.core.pack_health.types import PackHealthScore


class PackStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    NEEDS_REVISION = "needs_revision"


class SubmissionBlockedError(Exception):
    """Raised when a pack cannot be submitted for review."""

    def __init__(self, reason: str, current_score: int, required_score: int):
        super().__init__(reason)
        self.reason = reason
        self.current_score = current_score
        self.required_score = required_score


def check_submission_eligibility(
    pack_health: PackHealthScore,
    *,
    pack_status: PackStatus | str = PackStatus.DRAFT,
    config: PackHealthConfig = DEFAULT_CONFIG,
) -> None:
    """
    Verify a pack can be submitted for review.

    Raises:
        SubmissionBlockedError: If the score is below threshold or the pack
            is no longer a draft
    """
    required = config.eligibility_threshold
    current = pack_health.overall_score

    if not is_eligible(current, config):
        raise SubmissionBlockedError(
            f"Pack Health score must be >= {required} to submit for review",
            current_score=current,
            required_score=required,
        )

    if PackStatus(pack_status) != PackStatus.DRAFT:
        raise SubmissionBlockedError(
            "Proof Pack has already been submitted",
            current_score=current,
            required_score=required,
        )

"""API endpoints for Proof Pack health scoring.

Stateless: the caller supplies the pack's documents and its persisted gap
statuses, and stores whatever it wants from the response.
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from proofpack.core.config import get_settings
from proofpack.core.logging import get_logger, log_with_context
from proofpack.core.pack_health import (
    GapItem,
    InvalidDocumentError,
    PackHealthScore,
    PackStatus,
    RemediationAction,
    SubmissionBlockedError,
    calculate_pack_health,
    check_submission_eligibility,
    get_remediation_actions,
    identify_gaps,
    merge_gap_statuses,
)
from proofpack.core.pack_health.instants import utc_now
from proofpack.core.pack_health.types import Document, parse_documents, parse_gaps

logger = get_logger(__name__)

router = APIRouter()


class GapsRequest(BaseModel):
    pack_id: str | None = Field(None, description="Caller's Proof Pack id, used for log context")
    documents: list[dict[str, Any]] = Field(default_factory=list, description="Pack documents")


class EvaluateRequest(GapsRequest):
    gaps: list[dict[str, Any]] = Field(
        default_factory=list, description="Previously persisted gaps (statuses are carried over)"
    )


class SubmissionCheckRequest(EvaluateRequest):
    pack_status: PackStatus = Field(default=PackStatus.DRAFT, description="Current pack status")


class EvaluateResponse(BaseModel):
    pack_health: PackHealthScore
    gaps: list[GapItem]
    actions: list[RemediationAction]


class SubmissionCheckResponse(BaseModel):
    eligible: bool
    current_score: int
    required_score: int


def _log_request(body: GapsRequest, msg: str, **fields: Any) -> None:
    """INFO log with the request's pack id (when given) and document count."""
    if body.pack_id:
        fields["pack_id"] = body.pack_id
    log_with_context(logger, logging.INFO, msg, documents=len(body.documents), **fields)


def _load_documents(raw: list[dict[str, Any]]) -> list[Document]:
    """Enforce the request size limit and validate documents."""
    limit = get_settings().MAX_DOCUMENTS_PER_REQUEST
    if len(raw) > limit:
        raise HTTPException(
            status_code=400,
            detail=f"Too many documents ({len(raw)}); limit is {limit}",
        )
    try:
        return parse_documents(raw)
    except InvalidDocumentError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


def _evaluate(body: EvaluateRequest) -> EvaluateResponse:
    documents = _load_documents(body.documents)
    try:
        persisted = parse_gaps(body.gaps)
    except InvalidDocumentError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    # One instant for gaps and score so boundary documents agree
    now = utc_now()
    gaps = merge_gap_statuses(identify_gaps(documents, now=now), persisted)
    pack_health = calculate_pack_health(documents, gaps, now=now)
    actions = get_remediation_actions(pack_health.overall_score, documents, gaps)

    return EvaluateResponse(pack_health=pack_health, gaps=gaps, actions=actions)


@router.post("/pack-health/evaluate", response_model=EvaluateResponse)
async def evaluate_pack_health(body: EvaluateRequest) -> EvaluateResponse:
    """
    Score a Proof Pack and plan its remediation.

    Gaps are re-derived from the documents; statuses from the supplied gaps
    are carried over by id.

    Raises:
        HTTPException 400: If too many documents are supplied
        HTTPException 422: If a document or gap is malformed
        HTTPException 500: If scoring fails
    """
    try:
        result = _evaluate(body)

        _log_request(
            body,
            f"Evaluated Pack Health: {result.pack_health.overall_score}",
            gaps=len(result.gaps),
            eligible=result.pack_health.is_eligible_for_introductions,
        )
        return result

    except HTTPException:
        # Re-raise HTTP exceptions as-is
        raise
    except Exception as e:
        logger.exception("Failed to evaluate Pack Health")
        raise HTTPException(status_code=500, detail="Failed to evaluate Pack Health") from e


@router.post("/pack-health/gaps", response_model=list[GapItem])
async def list_pack_gaps(body: GapsRequest) -> list[GapItem]:
    """
    Identify structural gaps for a set of documents.

    Raises:
        HTTPException 422: If a document is malformed
        HTTPException 500: If gap identification fails
    """
    try:
        documents = _load_documents(body.documents)
        gaps = identify_gaps(documents)

        _log_request(body, f"Identified {len(gaps)} gaps", gaps=len(gaps))
        return gaps
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Failed to identify gaps")
        raise HTTPException(status_code=500, detail="Failed to identify gaps") from e


@router.post("/pack-health/submission-check", response_model=SubmissionCheckResponse)
async def check_pack_submission(body: SubmissionCheckRequest) -> SubmissionCheckResponse:
    """
    Check whether a pack may be submitted for QA review.

    Raises:
        HTTPException 400: If the pack is below threshold or not a draft
        HTTPException 422: If a document or gap is malformed
        HTTPException 500: If scoring fails
    """
    try:
        result = _evaluate(body)
        check_submission_eligibility(result.pack_health, pack_status=body.pack_status)

        _log_request(
            body,
            "Submission allowed",
            score=result.pack_health.overall_score,
            pack_status=body.pack_status.value,
        )
        return SubmissionCheckResponse(
            eligible=True,
            current_score=result.pack_health.overall_score,
            required_score=result.pack_health.threshold,
        )

    except SubmissionBlockedError as e:
        _log_request(body, f"Submission blocked: {e.reason}", score=e.current_score)
        raise HTTPException(
            status_code=400,
            detail={
                "error": e.reason,
                "current_score": e.current_score,
                "required_score": e.required_score,
            },
        ) from e
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Failed to check submission eligibility")
        raise HTTPException(
            status_code=500, detail="Failed to check submission eligibility"
        ) from e

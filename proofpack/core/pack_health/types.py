"""Pydantic models for the Pack Health scoring system."""

from collections.abc import Iterable, Mapping
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from proofpack.core.pack_health.instants import to_instant


# =============================================================================
# Constants
# =============================================================================

# Ordered; gap emission follows this order. Changing it changes scoring
# semantics, so persisted scores must be versioned alongside it.
REQUIRED_CATEGORIES: tuple[str, ...] = (
    "Certifications",
    "Financial",
    "Past Performance",
    "Technical",
    "Quality",
    "Safety",
    "Security",
)

OTHER_CATEGORY = "Other"

# Factor weights - must sum to 1.0
FACTOR_WEIGHTS = MappingProxyType({
    "completeness": 0.4,   # 40% - Required categories covered
    "expiration": 0.3,     # 30% - Documents still in date
    "quality": 0.2,        # 20% - Naming and metadata
    "remediation": 0.1,    # 10% - Gaps acknowledged
})

ELIGIBILITY_THRESHOLD = 70

EXPIRING_WINDOW_DAYS = 30


# =============================================================================
# Errors
# =============================================================================


class InvalidDocumentError(ValueError):
    """Raised when a document or gap cannot be scored because it is malformed."""

    def __init__(self, message: str, index: int | None = None, errors: list[dict] | None = None):
        super().__init__(message)
        self.index = index
        self.errors = errors or []


# =============================================================================
# Enums
# =============================================================================


class GapPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class GapStatus(str, Enum):
    """Gap lifecycle status. Persisted by the caller between scoring runs."""

    OPEN = "open"
    ACKNOWLEDGED = "acknowledged"
    NOT_APPLICABLE = "not_applicable"


RESOLVED_GAP_STATUSES = frozenset({GapStatus.ACKNOWLEDGED, GapStatus.NOT_APPLICABLE})


class EffortLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ExpirationState(str, Enum):
    VALID = "valid"
    EXPIRING = "expiring"
    EXPIRED = "expired"


# =============================================================================
# Evidence
# =============================================================================


class DocumentMetadata(BaseModel):
    """Optional descriptive enrichment attached to a document."""

    model_config = ConfigDict(frozen=True)

    document_type: str | None = Field(None, description="Kind of document (e.g., 'ISO 9001 Certificate')")
    notes: str | None = Field(None, description="Free-form description")


class Document(BaseModel):
    """A single evidence item in a Proof Pack."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Opaque unique identifier")
    file_name: str = Field(..., description="Display name of the uploaded file")
    category: str = Field(..., description="Evidence category (required category or 'Other')")
    mime_type: str = Field(default="", description="MIME type (descriptive only)")
    file_size: int = Field(default=0, ge=0, description="Size in bytes (descriptive only)")
    expiration_date: datetime | None = Field(
        None, description="When the document stops being valid; None never expires"
    )
    uploaded_at: datetime | None = Field(None, description="Upload instant")
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)

    @field_validator("expiration_date", "uploaded_at", mode="before")
    @classmethod
    def normalise_instant(cls, v: Any) -> datetime | None:
        """Coerce timestamp-like input to an aware UTC datetime."""
        if v is None:
            return None
        return to_instant(v)

    @field_validator("metadata", mode="before")
    @classmethod
    def metadata_default(cls, v: Any) -> Any:
        return v if v is not None else {}


class GapItem(BaseModel):
    """A detected deficiency in a Proof Pack."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Deterministic id derived from the gap's cause")
    category: str = Field(..., description="Category the gap belongs to")
    document_type: str = Field(..., description="What is missing or defective")
    priority: GapPriority = Field(..., description="high, medium or low")
    recommendation: str = Field(..., description="Human-readable remediation text")
    status: GapStatus = Field(default=GapStatus.OPEN, description="Lifecycle status")

    @property
    def is_resolved(self) -> bool:
        return self.status in RESOLVED_GAP_STATUSES


# =============================================================================
# Scoring output
# =============================================================================


class FactorBreakdown(BaseModel):
    """Weighted contribution of one factor to the overall score."""

    weight: float = Field(..., ge=0, le=1, description="Weight in overall score")
    score: float = Field(..., ge=0, le=100, description="Unrounded factor score")
    weighted: float = Field(..., description="score * weight")
    details: str | None = Field(None, description="Human-readable explanation")


class ScoreBreakdown(BaseModel):
    completeness: FactorBreakdown
    expiration: FactorBreakdown
    quality: FactorBreakdown
    remediation: FactorBreakdown


class PackHealthScore(BaseModel):
    """Complete Pack Health assessment for a document collection."""

    overall_score: int = Field(..., ge=0, le=100, description="Rounded weighted total")
    completeness_score: int = Field(..., ge=0, le=100)
    expiration_score: int = Field(..., ge=0, le=100)
    quality_score: int = Field(..., ge=0, le=100)
    remediation_score: int = Field(..., ge=0, le=100)
    breakdown: ScoreBreakdown
    is_eligible_for_introductions: bool = Field(
        ..., description="Whether overall_score >= threshold"
    )
    threshold: int = Field(default=ELIGIBILITY_THRESHOLD, description="Eligibility threshold")
    calculated_at: datetime = Field(..., description="When score was computed")


class RemediationAction(BaseModel):
    """A ranked step the pack owner can take to raise their score."""

    id: str = Field(..., description="Action identifier")
    description: str = Field(..., description="What to do")
    estimated_impact: int = Field(..., ge=0, description="Estimated score points gained")
    effort_level: EffortLevel = Field(..., description="Effort level")
    priority: int = Field(..., ge=1, description="Priority bucket (1 = highest)")


# =============================================================================
# Coercion
# =============================================================================


def _summarize(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def parse_documents(items: Iterable[Document | Mapping[str, Any]]) -> list[Document]:
    """
    Coerce raw document mappings to Document models.

    Raises:
        InvalidDocumentError: If any item is missing required fields or has
            a timestamp that cannot be compared,
            or reuses the id of an earlier document
    """
    documents: list[Document] = []
    seen_ids: set[str] = set()
    for index, item in enumerate(items):
        if isinstance(item, Document):
            document = item
        else:
            try:
                document = Document.model_validate(item)
            except ValidationError as e:
                raise InvalidDocumentError(
                    f"Document at index {index} is invalid: {_summarize(e)}",
                    index=index,
                    errors=e.errors(include_url=False),
                ) from e

        # Gap ids are derived from document ids
        if document.id in seen_ids:
            raise InvalidDocumentError(
                f"Document at index {index} reuses id {document.id!r}",
                index=index,
            )
        seen_ids.add(document.id)
        documents.append(document)
    return documents


def parse_gaps(items: Iterable[GapItem | Mapping[str, Any]]) -> list[GapItem]:
    """
    Coerce raw gap mappings to GapItem models.

    Raises:
        InvalidDocumentError: If any gap is malformed
    """
    gaps: list[GapItem] = []
    for index, item in enumerate(items):
        if isinstance(item, GapItem):
            gaps.append(item)
            continue
        try:
            gaps.append(GapItem.model_validate(item))
        except ValidationError as e:
            raise InvalidDocumentError(
                f"Gap at index {index} is invalid: {_summarize(e)}",
                index=index,
                errors=e.errors(include_url=False),
            ) from e
    return gaps

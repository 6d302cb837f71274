"""Quality factor scoring (20% weight).

File names and metadata are a weak proxy for document quality, but they
are what we have without reading the files.
"""

from collections.abc import Sequence

from proofpack.core.pack_health.types import OTHER_CATEGORY, Document

MAX_POINTS_PER_DOC = 4
MIN_FILE_NAME_LENGTH = 10
MIN_NOTES_LENGTH = 10


def document_quality_points(document: Document) -> int:
    """Award 0-4 points for naming, categorisation, type and notes."""
    points = 0

    # Descriptive file name (case-sensitive "untitled" check)
    name = document.file_name
    if name and len(name) > MIN_FILE_NAME_LENGTH and "untitled" not in name:
        points += 1

    if document.category and document.category != OTHER_CATEGORY:
        points += 1

    if document.metadata.document_type:
        points += 1

    notes = document.metadata.notes
    if notes and len(notes) > MIN_NOTES_LENGTH:
        points += 1

    return points


def score_quality(documents: Sequence[Document]) -> tuple[float, str]:
    """
    Score document quality.

    Returns:
        Tuple of (score 0-100, details)
    """
    if not documents:
        return 0, "No documents"

    points = sum(document_quality_points(d) for d in documents)
    max_points = len(documents) * MAX_POINTS_PER_DOC

    return (points / max_points) * 100, f"{points}/{max_points} quality points"

"""Pytest configuration and fixtures."""

import os
from datetime import UTC, datetime, timedelta

import pytest

os.environ.setdefault("PROOFPACK_ENV", "test")

from proofpack.core.pack_health.types import REQUIRED_CATEGORIES, Document  # noqa: E402

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def now():
    """Fixed scoring instant."""
    return NOW


@pytest.fixture
def make_document():
    """Factory for documents with sensible, high-quality defaults."""

    counter = {"n": 0}

    def _make(
        category: str = "Financial",
        *,
        id: str | None = None,
        file_name: str | None = None,
        document_type: str | None = "Audited Statement",
        notes: str | None = None,
        expires_in_days: float | None = None,
    ) -> Document:
        counter["n"] += 1
        doc_id = id or f"doc_{counter['n']}"
        expiration = NOW + timedelta(days=expires_in_days) if expires_in_days is not None else None
        return Document(
            id=doc_id,
            file_name=file_name or f"{category.lower().replace(' ', '_')}_evidence_2025.pdf",
            category=category,
            mime_type="application/pdf",
            file_size=2048,
            expiration_date=expiration,
            uploaded_at=NOW - timedelta(days=10),
            metadata={"document_type": document_type, "notes": notes},
        )

    return _make


@pytest.fixture
def full_pack(make_document):
    """One document per required category, none expiring, typed but no notes."""
    return [make_document(category) for category in REQUIRED_CATEGORIES]

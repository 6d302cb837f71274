"""Tests for the composite Pack Health score."""

from datetime import datetime, timedelta

import pytest

from proofpack.core.pack_health import (
    DEFAULT_CONFIG,
    InvalidDocumentError,
    PackHealthConfig,
    calculate_pack_health,
    identify_gaps,
    is_eligible,
)
from proofpack.core.pack_health.factors import required_categories_divisor
from proofpack.core.pack_health.score import round_half_up
from proofpack.core.pack_health.types import FACTOR_WEIGHTS, REQUIRED_CATEGORIES


class TestScenarios:
    def test_empty_pack_scores_ten(self, now):
        result = calculate_pack_health([], [], now=now)

        assert result.completeness_score == 0
        assert result.expiration_score == 0
        assert result.quality_score == 0
        assert result.remediation_score == 100
        assert result.overall_score == 10
        assert result.is_eligible_for_introductions is False

    def test_typed_pack_without_notes_scores_95(self, full_pack, now):
        result = calculate_pack_health(full_pack, [], now=now)

        assert result.completeness_score == 100
        assert result.expiration_score == 100
        assert result.quality_score == 75
        assert result.remediation_score == 100
        assert result.overall_score == 95
        assert result.is_eligible_for_introductions is True

    def test_complete_fresh_annotated_pack_is_near_maximal(self, make_document, now):
        docs = [
            make_document(c, notes="Reviewed and current for FY2026", expires_in_days=365)
            for c in REQUIRED_CATEGORIES
        ]
        gaps = identify_gaps(docs, now=now)
        result = calculate_pack_health(docs, gaps, now=now)

        assert gaps == []
        assert result.overall_score >= 90

    def test_expired_documents_drag_score(self, full_pack, make_document, now):
        baseline = calculate_pack_health(full_pack, [], now=now)
        stale = full_pack + [make_document("Financial", expires_in_days=-3)]
        result = calculate_pack_health(stale, [], now=now)

        assert result.expiration_score < baseline.expiration_score


class TestBreakdown:
    def test_weights_sum_to_one(self, full_pack, now):
        breakdown = calculate_pack_health(full_pack, [], now=now).breakdown
        total = sum(
            f.weight
            for f in (breakdown.completeness, breakdown.expiration, breakdown.quality, breakdown.remediation)
        )
        assert total == pytest.approx(1.0)

    def test_overall_matches_weighted_sum(self, make_document, now):
        docs = [
            make_document("Financial", expires_in_days=12),
            make_document("Other", document_type=None),
            make_document("Safety", file_name="untitled.pdf", expires_in_days=-2),
        ]
        gaps = identify_gaps(docs, now=now)
        result = calculate_pack_health(docs, gaps, now=now)
        b = result.breakdown

        weighted = b.completeness.weighted + b.expiration.weighted + b.quality.weighted + b.remediation.weighted
        assert result.overall_score == round_half_up(weighted)
        assert b.quality.weighted == pytest.approx(b.quality.score * 0.2)

    def test_breakdown_keeps_unrounded_scores(self, make_document, now):
        docs = [make_document(c) for c in ("Financial", "Technical", "Safety")]
        result = calculate_pack_health(docs, [], now=now)

        assert result.breakdown.completeness.score == pytest.approx(3 / 7 * 100 + 5)
        assert result.completeness_score == 48

    def test_details_populated(self, full_pack, now):
        result = calculate_pack_health(full_pack, [], now=now)
        assert result.breakdown.remediation.details == "No gaps"

    def test_calculated_at_is_scoring_instant(self, now):
        assert calculate_pack_health([], [], now=now).calculated_at == now


class TestEligibility:
    @pytest.mark.parametrize(
        "score,eligible",
        [(69, False), (70, True), (71, True)],
    )
    def test_threshold_boundary(self, score, eligible):
        assert is_eligible(score) is eligible

    def test_custom_threshold(self):
        config = PackHealthConfig(eligibility_threshold=96)
        assert is_eligible(95, config) is False

    def test_result_reports_threshold(self, full_pack, now):
        config = PackHealthConfig(eligibility_threshold=96)
        result = calculate_pack_health(full_pack, [], now=now, config=config)

        assert result.threshold == 96
        assert result.is_eligible_for_introductions is False

    def test_eligibility_uses_rounded_overall(self, now):
        # Empty pack: only remediation (100) contributes, so the raw sum is
        # 100 * remediation weight
        config = PackHealthConfig(
            weights={"completeness": 0.303, "expiration": 0.0, "quality": 0.0, "remediation": 0.697}
        )
        result = calculate_pack_health([], [], now=now, config=config)
        b = result.breakdown
        raw = b.completeness.weighted + b.expiration.weighted + b.quality.weighted + b.remediation.weighted

        assert 69.5 <= raw < 70
        assert result.overall_score == 70
        assert result.is_eligible_for_introductions is True

    def test_raw_sum_rounding_down_is_not_eligible(self, now):
        config = PackHealthConfig(
            weights={"completeness": 0.306, "expiration": 0.0, "quality": 0.0, "remediation": 0.694}
        )
        result = calculate_pack_health([], [], now=now, config=config)

        assert result.overall_score == 69
        assert result.is_eligible_for_introductions is False


class TestRounding:
    def test_half_rounds_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(94.5) == 95
        assert round_half_up(2.4999) == 2


class TestConfig:
    def test_default_weights_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_CONFIG.weights["quality"] = 0.0
        with pytest.raises(TypeError):
            FACTOR_WEIGHTS["quality"] = 0.0

        assert sum(DEFAULT_CONFIG.weights.values()) == pytest.approx(1.0)

    def test_config_copies_caller_weights(self, full_pack, now):
        weights = {"completeness": 0.4, "expiration": 0.3, "quality": 0.2, "remediation": 0.1}
        config = PackHealthConfig(weights=weights)
        weights["quality"] = 0.0

        assert config.weights["quality"] == 0.2
        assert calculate_pack_health(full_pack, [], now=now, config=config).overall_score == 95

    def test_config_is_hashable(self):
        assert hash(DEFAULT_CONFIG) == hash(PackHealthConfig())

    def test_default_matches_reference(self):
        assert DEFAULT_CONFIG.required_categories == REQUIRED_CATEGORIES
        assert DEFAULT_CONFIG.weights == {
            "completeness": 0.4,
            "expiration": 0.3,
            "quality": 0.2,
            "remediation": 0.1,
        }
        assert DEFAULT_CONFIG.eligibility_threshold == 70

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValueError, match="sum to 1.0"):
            PackHealthConfig(
                weights={"completeness": 0.5, "expiration": 0.3, "quality": 0.2, "remediation": 0.1}
            )

    def test_weights_must_cover_factors(self):
        with pytest.raises(ValueError, match="exactly"):
            PackHealthConfig(weights={"completeness": 1.0})

    def test_categories_must_be_unique(self):
        with pytest.raises(ValueError, match="unique"):
            PackHealthConfig(required_categories=("Financial", "Financial"))

    def test_threshold_range(self):
        with pytest.raises(ValueError):
            PackHealthConfig(eligibility_threshold=101)

    def test_alternate_category_set(self, make_document, now):
        config = PackHealthConfig(required_categories=("Financial", "Safety"))
        docs = [make_document("Financial"), make_document("Safety")]
        result = calculate_pack_health(docs, [], now=now, config=config)

        assert result.completeness_score == 100

    def test_swapped_volume_divisor(self, make_document, now):
        config = PackHealthConfig(volume_divisor=required_categories_divisor)
        docs = [make_document("Financial"), make_document("Financial"), make_document("Other")]
        result = calculate_pack_health(docs, [], now=now, config=config)

        assert result.breakdown.completeness.score == pytest.approx(1 / 7 * 100 + 15)


class TestInputValidation:
    def test_accepts_raw_mappings(self, now):
        docs = [{"id": "d1", "file_name": "financial_statement_2025.pdf", "category": "Financial"}]
        result = calculate_pack_health(docs, [], now=now)
        assert result.completeness_score == round_half_up(1 / 7 * 100 + 5)

    def test_epoch_millis_expiration(self, now):
        expires = now - timedelta(days=2)
        docs = [{
            "id": "d1",
            "file_name": "financial_statement_2025.pdf",
            "category": "Financial",
            "expiration_date": int(expires.timestamp() * 1000),
        }]
        result = calculate_pack_health(docs, [], now=now)
        assert result.expiration_score == 0

    def test_naive_now_read_as_utc(self, full_pack, now):
        naive = datetime(2026, 1, 15, 12, 0)
        assert calculate_pack_health(full_pack, [], now=naive).calculated_at == now

    def test_missing_id_rejected(self, now):
        with pytest.raises(InvalidDocumentError) as exc_info:
            calculate_pack_health([{"file_name": "x", "category": "Financial"}], [], now=now)
        assert exc_info.value.index == 0
        assert "id" in str(exc_info.value)

    def test_uncomparable_timestamp_rejected(self, now):
        docs = [
            {"id": "d1", "file_name": "a_long_file_name.pdf", "category": "Financial"},
            {
                "id": "d2",
                "file_name": "another_long_name.pdf",
                "category": "Safety",
                "expiration_date": "next tuesday",
            },
        ]
        with pytest.raises(InvalidDocumentError) as exc_info:
            calculate_pack_health(docs, [], now=now)
        assert exc_info.value.index == 1

    def test_malformed_gap_rejected(self, now):
        with pytest.raises(InvalidDocumentError, match="Gap at index 0"):
            calculate_pack_health([], [{"id": "gap_x", "status": "closed"}], now=now)

    def test_duplicate_document_id_rejected(self, make_document, now):
        docs = [
            make_document("Financial", id="dup", expires_in_days=-1),
            make_document("Safety", id="dup", expires_in_days=-2),
        ]
        with pytest.raises(InvalidDocumentError, match="reuses id 'dup'") as exc_info:
            calculate_pack_health(docs, [], now=now)
        assert exc_info.value.index == 1

"""
Tests for key metrics and pain points.
"""

import pytest

from tryon_insights.analysis.indicators import (
    KEY_METRICS,
    compute_key_metrics,
    compute_pain_points,
    severity_for,
)
from tryon_insights.data.schemas import ResponseRecord, Severity


def make_response(**answers) -> ResponseRecord:
    """Helper to create a ResponseRecord from camelCase answers."""
    return ResponseRecord.model_validate(answers)


class TestSeverity:
    """Tests for severity thresholds."""

    @pytest.mark.parametrize(
        "pct,expected",
        [
            (100, Severity.CRITICAL),
            (50, Severity.CRITICAL),
            (49, Severity.HIGH),
            (30, Severity.HIGH),
            (29, Severity.MEDIUM),
            (15, Severity.MEDIUM),
            (14, Severity.LOW),
            (0, Severity.LOW),
        ],
    )
    def test_thresholds(self, pct: int, expected: Severity) -> None:
        assert severity_for(pct) == expected


class TestKeyMetrics:
    """Tests for compute_key_metrics."""

    def test_display_order(self) -> None:
        keys = [metric.key for metric in compute_key_metrics([])]

        assert keys == [definition.key for definition in KEY_METRICS]

    def test_empty_collection(self) -> None:
        for metric in compute_key_metrics([]):
            assert metric.count == 0
            assert metric.percentage == 0

    def test_upload_willingness_counts_only_definite_yes(self) -> None:
        records = [
            make_response(imageUploadWillingness="yes-upload"),
            make_response(imageUploadWillingness="maybe-upload"),
            make_response(imageUploadWillingness="no-upload"),
            make_response(),
        ]

        metrics = {m.key: m for m in compute_key_metrics(records)}

        assert metrics["upload_willingness"].count == 1
        assert metrics["upload_willingness"].percentage == 25

    def test_adoption_cohort_needs_upload_and_confidence(self) -> None:
        records = [
            make_response(imageUploadWillingness="maybe-upload", purchaseConfidence="very-confident"),
            make_response(imageUploadWillingness="yes-upload", purchaseConfidence="not-confident"),
            make_response(purchaseConfidence="very-confident"),
        ]

        metrics = {m.key: m for m in compute_key_metrics(records)}

        assert metrics["adoption_cohort"].count == 1
        assert metrics["app_adoption"].count == 2

    def test_social_and_purchase_lift(self) -> None:
        records = [
            make_response(socialMediaShopping="sometimes-social", tryOnFromSocialMedia="much-more-likely"),
            make_response(socialMediaShopping="no-social", tryOnFromSocialMedia="no-difference"),
        ]

        metrics = {m.key: m for m in compute_key_metrics(records)}

        assert metrics["social_media_shoppers"].percentage == 50
        assert metrics["try_on_purchase_lift"].percentage == 50


class TestPainPoints:
    """Tests for compute_pain_points."""

    @pytest.fixture
    def records(self) -> list[ResponseRecord]:
        return [
            make_response(returnsProblem="very-often", trustIssues=["scam", "quality"]),
            make_response(returnsProblem="often", clothesFit="not-confident-fit", trustIssues=["scam"]),
            make_response(colorMatchingUncertainty="almost-always"),
            make_response(),
        ]

    def test_counts_and_severity(self, records: list[ResponseRecord]) -> None:
        points = {p.key: p for p in compute_pain_points(records)}

        assert points["frequent_returns"].count == 2
        assert points["frequent_returns"].severity == Severity.CRITICAL
        assert points["poor_fit_confidence"].percentage == 25
        assert points["poor_fit_confidence"].severity == Severity.MEDIUM
        assert points["color_mismatch"].count == 1
        assert points["trust_scam"].count == 2
        assert points["trust_quality"].severity == Severity.MEDIUM

    def test_trust_issue_names_use_option_labels(self, records: list[ResponseRecord]) -> None:
        points = {p.key: p for p in compute_pain_points(records)}

        assert points["trust_scam"].name == "Fear of scams or fraud"

    def test_sorted_by_count_then_definition_order(self, records: list[ResponseRecord]) -> None:
        keys = [p.key for p in compute_pain_points(records)]

        assert keys == [
            "frequent_returns",
            "trust_scam",
            "poor_fit_confidence",
            "color_mismatch",
            "trust_quality",
        ]

    def test_empty_collection(self) -> None:
        points = compute_pain_points([])

        assert [p.key for p in points] == ["frequent_returns", "poor_fit_confidence", "color_mismatch"]
        assert all(p.severity == Severity.LOW for p in points)

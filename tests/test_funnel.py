"""
Tests for the conversion funnel.
"""

from tryon_insights.analysis.funnel import FUNNEL_STAGES, build_funnel
from tryon_insights.data.schemas import ResponseRecord


def make_response(**answers) -> ResponseRecord:
    """Helper to create a ResponseRecord from camelCase answers."""
    return ResponseRecord.model_validate(answers)


class TestBuildFunnel:
    """Tests for build_funnel."""

    def test_stage_order(self) -> None:
        stages = build_funnel([])

        assert [s.stage for s in stages] == ["Awareness", "Interest", "Consideration", "Intent", "Action"]
        assert len(FUNNEL_STAGES) == 5

    def test_empty_collection(self) -> None:
        for stage in build_funnel([]):
            assert stage.count == 0
            assert stage.percentage == 0

    def test_stage_predicates(self) -> None:
        records = [
            make_response(socialMediaShopping="no-social"),
            make_response(socialMediaShopping="yes-social", virtualTryOn="yes"),
            make_response(imageUploadWillingness="maybe-upload", purchaseConfidence="confident"),
            make_response(purchaseConfidence="not-confident"),
        ]

        counts = {s.stage: s.count for s in build_funnel(records)}

        assert counts == {
            "Awareness": 2,
            "Interest": 1,
            "Consideration": 1,
            "Intent": 1,
            "Action": 1,
        }

    def test_later_stage_can_exceed_earlier(self) -> None:
        """Stages are independent counts, not a narrowing filter."""
        records = [
            make_response(purchaseConfidence="very-confident"),
            make_response(purchaseConfidence="confident"),
            make_response(purchaseConfidence="very-confident", socialMediaShopping="no-social"),
        ]

        stages = {s.stage: s for s in build_funnel(records)}

        assert stages["Action"].count == 3
        assert stages["Awareness"].count == 1
        assert stages["Action"].count > stages["Awareness"].count
        assert stages["Action"].percentage == 100
        assert stages["Awareness"].percentage == 33

    def test_percentages_against_total(self) -> None:
        records = [make_response(virtualTryOn="yes")] + [make_response() for _ in range(3)]

        stages = {s.stage: s for s in build_funnel(records)}

        assert stages["Consideration"].percentage == 25

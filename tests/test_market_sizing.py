"""
Tests for the market sizing estimator.
"""

from decimal import Decimal

import pytest

from tryon_insights.analysis.market_sizing import MarketSizingAssumptions, estimate_market
from tryon_insights.data.schemas import ResponseRecord
from tryon_insights.exceptions import DataValidationError
from tryon_insights.settings import Settings


def make_response(**answers) -> ResponseRecord:
    """Helper to create a ResponseRecord from camelCase answers."""
    return ResponseRecord.model_validate(answers)


def ten_responses() -> list[ResponseRecord]:
    """10 responses: 4 in SAM, 2 in SOM."""
    return [
        # SAM via social shopping, also SOM
        make_response(socialMediaShopping="yes-social", virtualTryOn="yes", imageUploadWillingness="yes-upload"),
        # SAM via frequency, also SOM
        make_response(onlineShoppingFrequency="monthly", virtualTryOn="yes", imageUploadWillingness="maybe-upload"),
        # SAM only
        make_response(socialMediaShopping="sometimes-social"),
        make_response(onlineShoppingFrequency="daily", socialMediaShopping="no-social"),
        # Neither
        make_response(socialMediaShopping="no-social", virtualTryOn="yes"),
        make_response(imageUploadWillingness="yes-upload"),
        make_response(virtualTryOn="no", imageUploadWillingness="yes-upload"),
        make_response(),
        make_response(),
        make_response(),
    ]


class TestEstimateMarket:
    """Tests for estimate_market."""

    def test_reference_scenario(self) -> None:
        result = estimate_market(ten_responses())

        assert result.tam == 10000
        assert result.sam == 4000
        assert result.som == 2000
        assert result.potential_revenue == 4500
        assert result.conversion_opportunity == 20

    def test_empty_collection(self) -> None:
        result = estimate_market([])

        assert result.tam == 0
        assert result.sam == 0
        assert result.som == 0
        assert result.potential_revenue == 0
        assert result.conversion_opportunity == 0

    def test_custom_assumptions(self) -> None:
        assumptions = MarketSizingAssumptions(
            users_per_response=500,
            average_order_value=Decimal("120"),
            assumed_conversion_rate=0.05,
        )

        result = estimate_market(ten_responses(), assumptions=assumptions)

        assert result.tam == 5000
        assert result.som == 1000
        assert result.potential_revenue == 6000
        assert result.users_per_response == 500
        assert result.average_order_value == Decimal("120")

    def test_revenue_rounds_half_up(self) -> None:
        assumptions = MarketSizingAssumptions(
            users_per_response=1,
            average_order_value=Decimal("2.5"),
            assumed_conversion_rate=1.0,
        )
        records = [make_response(virtualTryOn="yes", imageUploadWillingness="yes-upload")]

        assert estimate_market(records, assumptions=assumptions).potential_revenue == 3

    @pytest.mark.parametrize(
        "kwargs,field",
        [
            ({"users_per_response": -1}, "users_per_response"),
            ({"average_order_value": Decimal("-5")}, "average_order_value"),
            ({"assumed_conversion_rate": 1.5}, "assumed_conversion_rate"),
        ],
    )
    def test_invalid_assumptions_rejected(self, kwargs: dict, field: str) -> None:
        with pytest.raises(DataValidationError) as exc_info:
            MarketSizingAssumptions(**kwargs)

        assert exc_info.value.field == field

    def test_zero_multiplier_allowed(self) -> None:
        result = estimate_market(ten_responses(), assumptions=MarketSizingAssumptions(users_per_response=0))

        assert result.tam == 0
        assert result.conversion_opportunity == 0

    def test_assumptions_from_settings(self) -> None:
        settings = Settings(users_per_response=10, average_order_value=Decimal("50"), assumed_conversion_rate=0.1)

        assumptions = MarketSizingAssumptions.from_settings(settings)

        assert assumptions == MarketSizingAssumptions(10, Decimal("50"), 0.1)

"""
Module: market_sizing

Purpose: Rough TAM / SAM / SOM and revenue estimate from survey responses.

Key Functions:
- estimate_market: Derive the market-size chain from response counts
- MarketSizingAssumptions: Tunable multiplier, order value and conversion rate

Architecture Notes:
- Each response stands for a fixed number of real-world users
- This is a heuristic, not a statistical model; the only guarantee is
  deterministic arithmetic over the stated assumptions
- Money is computed with Decimal and rounded half up to whole units
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from tryon_insights.data.schemas import MarketEstimate, ResponseRecord
from tryon_insights.exceptions import DataValidationError
from tryon_insights.features.aggregators import count_matching, percentage
from tryon_insights.features.sentiment import DEFAULT_CLASSIFIER, SentimentClassifier
from tryon_insights.settings import Settings

DEFAULT_USERS_PER_RESPONSE = 1000
DEFAULT_AVERAGE_ORDER_VALUE = Decimal("75")
DEFAULT_CONVERSION_RATE = 0.03


@dataclass(frozen=True)
class MarketSizingAssumptions:
    """Configurable assumptions behind the market estimate."""

    users_per_response: int = DEFAULT_USERS_PER_RESPONSE
    average_order_value: Decimal = DEFAULT_AVERAGE_ORDER_VALUE
    assumed_conversion_rate: float = DEFAULT_CONVERSION_RATE

    def __post_init__(self) -> None:
        if self.users_per_response < 0:
            raise DataValidationError(
                "users_per_response must be non-negative",
                field="users_per_response",
                value=self.users_per_response,
            )
        if Decimal(str(self.average_order_value)) < 0:
            raise DataValidationError(
                "average_order_value must be non-negative",
                field="average_order_value",
                value=self.average_order_value,
            )
        if not 0 <= self.assumed_conversion_rate <= 1:
            raise DataValidationError(
                "assumed_conversion_rate must be between 0 and 1",
                field="assumed_conversion_rate",
                value=self.assumed_conversion_rate,
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "MarketSizingAssumptions":
        return cls(
            users_per_response=settings.users_per_response,
            average_order_value=settings.average_order_value,
            assumed_conversion_rate=settings.assumed_conversion_rate,
        )


def estimate_market(
    records: Sequence[ResponseRecord],
    *,
    assumptions: MarketSizingAssumptions | None = None,
    classifier: SentimentClassifier = DEFAULT_CLASSIFIER,
) -> MarketEstimate:
    """
    Estimate addressable market and projected revenue.

    TAM counts every response; SAM counts social shoppers or anyone reporting
    an online shopping frequency; SOM counts responses positive on both
    virtual try-on and photo upload. Revenue is SOM x AOV x conversion rate.

    Args:
        records: Full response collection
        assumptions: Multiplier and revenue assumptions
        classifier: Sentiment classifier

    Returns:
        MarketEstimate
    """
    assumptions = assumptions or MarketSizingAssumptions()
    positive = classifier.is_positive
    multiplier = assumptions.users_per_response

    serviceable = count_matching(
        records,
        lambda r: positive(r.social_media_shopping) or r.answered("online_shopping_frequency"),
    )
    obtainable = count_matching(
        records,
        lambda r: positive(r.virtual_try_on) and positive(r.image_upload_willingness),
    )

    tam = len(records) * multiplier
    sam = serviceable * multiplier
    som = obtainable * multiplier

    revenue = (
        Decimal(som)
        * Decimal(str(assumptions.average_order_value))
        * Decimal(str(assumptions.assumed_conversion_rate))
    ).quantize(Decimal("1"), rounding=ROUND_HALF_UP)

    return MarketEstimate(
        tam=tam,
        sam=sam,
        som=som,
        potential_revenue=int(revenue),
        conversion_opportunity=percentage(som, tam),
        users_per_response=multiplier,
        average_order_value=Decimal(str(assumptions.average_order_value)),
        assumed_conversion_rate=assumptions.assumed_conversion_rate,
    )

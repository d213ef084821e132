"""
Module: funnel

Purpose: Conversion funnel from awareness to action.

The five stages are independent predicate counts shown in a canonical order,
not a sequential filter: a response can reach "Action" without satisfying
"Awareness", so later stages may exceed earlier ones.
"""

from dataclasses import dataclass
from typing import Callable, Sequence

from tryon_insights.data.schemas import FunnelStage, ResponseRecord
from tryon_insights.features.aggregators import count_matching, percentage
from tryon_insights.features.sentiment import DEFAULT_CLASSIFIER, SentimentClassifier


@dataclass(frozen=True)
class FunnelStageDefinition:
    """Name, description and predicate of one stage."""

    stage: str
    description: str
    predicate: Callable[[ResponseRecord, SentimentClassifier], bool]


FUNNEL_STAGES: tuple[FunnelStageDefinition, ...] = (
    FunnelStageDefinition(
        stage="Awareness",
        description="Answered the social media shopping question",
        predicate=lambda record, _: record.answered("social_media_shopping"),
    ),
    FunnelStageDefinition(
        stage="Interest",
        description="Shops through social media",
        predicate=lambda record, classifier: classifier.is_positive(record.social_media_shopping),
    ),
    FunnelStageDefinition(
        stage="Consideration",
        description="Positive on virtual try-on",
        predicate=lambda record, classifier: classifier.is_positive(record.virtual_try_on),
    ),
    FunnelStageDefinition(
        stage="Intent",
        description="Willing to upload a photo",
        predicate=lambda record, classifier: classifier.is_positive(record.image_upload_willingness),
    ),
    FunnelStageDefinition(
        stage="Action",
        description="Confident to purchase with try-on",
        predicate=lambda record, classifier: classifier.is_positive(record.purchase_confidence),
    ),
)


def build_funnel(
    records: Sequence[ResponseRecord],
    *,
    classifier: SentimentClassifier = DEFAULT_CLASSIFIER,
) -> list[FunnelStage]:
    """
    Count each funnel stage against the full response set.

    Args:
        records: Full response collection
        classifier: Sentiment classifier for the positive-answer stages

    Returns:
        Five FunnelStage entries in canonical order
    """
    total = len(records)
    stages: list[FunnelStage] = []
    for definition in FUNNEL_STAGES:
        count = count_matching(records, lambda record: definition.predicate(record, classifier))
        stages.append(
            FunnelStage(
                stage=definition.stage,
                description=definition.description,
                count=count,
                percentage=percentage(count, total),
            )
        )
    return stages

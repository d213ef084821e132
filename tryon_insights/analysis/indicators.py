"""
Module: indicators

Purpose: Headline dashboard figures and shopping pain points.

Key metrics are single predicate counts shown as dashboard cards. Pain points
count responses reporting a shopping problem and grade each by prevalence.
"""

from dataclasses import dataclass
from typing import Callable, Sequence

from tryon_insights.data.question_bank import option_label
from tryon_insights.data.schemas import KeyMetric, PainPoint, ResponseRecord, Severity
from tryon_insights.features.aggregators import count_matching, count_values, percentage
from tryon_insights.features.sentiment import DEFAULT_CLASSIFIER, SentimentClassifier

Predicate = Callable[[ResponseRecord, SentimentClassifier], bool]

# Minimum percentage for each severity, checked from most severe down
SEVERITY_THRESHOLDS: tuple[tuple[int, Severity], ...] = (
    (50, Severity.CRITICAL),
    (30, Severity.HIGH),
    (15, Severity.MEDIUM),
)

FREQUENT_RETURN_ANSWERS = frozenset({"very-often", "often"})
POOR_FIT_ANSWERS = frozenset({"not-confident-fit"})
COLOR_MISMATCH_ANSWERS = frozenset({"almost-always", "often"})


@dataclass(frozen=True)
class IndicatorDefinition:
    key: str
    name: str
    description: str
    predicate: Predicate


KEY_METRICS: tuple[IndicatorDefinition, ...] = (
    IndicatorDefinition(
        key="upload_willingness",
        name="Upload Willingness",
        description="Definitely willing to upload photos for virtual try-on",
        predicate=lambda r, _: r.image_upload_willingness == "yes-upload",
    ),
    IndicatorDefinition(
        key="social_media_shoppers",
        name="Social Media Shoppers",
        description="Shop for clothes through social media platforms",
        predicate=lambda r, c: c.is_positive(r.social_media_shopping),
    ),
    IndicatorDefinition(
        key="try_on_purchase_lift",
        name="Purchase Lift",
        description="More likely to buy from social media after trying on",
        predicate=lambda r, c: c.is_positive(r.try_on_from_social_media),
    ),
    IndicatorDefinition(
        key="app_adoption",
        name="App Adoption Potential",
        description="Likely to use a virtual try-on app",
        predicate=lambda r, c: c.is_positive(r.purchase_confidence),
    ),
    IndicatorDefinition(
        key="adoption_cohort",
        name="Adoption Cohort",
        description="Willing to upload photos and likely to use the app",
        predicate=lambda r, c: c.is_positive(r.image_upload_willingness)
        and c.is_positive(r.purchase_confidence),
    ),
)

PAIN_POINTS: tuple[IndicatorDefinition, ...] = (
    IndicatorDefinition(
        key="frequent_returns",
        name="Frequent returns",
        description="Returns a quarter or more of online clothing orders",
        predicate=lambda r, _: r.returns_problem in FREQUENT_RETURN_ANSWERS,
    ),
    IndicatorDefinition(
        key="poor_fit_confidence",
        name="Poor fit confidence",
        description="Not confident that clothes bought online will fit",
        predicate=lambda r, _: r.clothes_fit in POOR_FIT_ANSWERS,
    ),
    IndicatorDefinition(
        key="color_mismatch",
        name="Colour mismatch",
        description="Items often look different from the photos",
        predicate=lambda r, _: r.color_matching_uncertainty in COLOR_MISMATCH_ANSWERS,
    ),
)


def severity_for(pct: int) -> Severity:
    for threshold, severity in SEVERITY_THRESHOLDS:
        if pct >= threshold:
            return severity
    return Severity.LOW


def compute_key_metrics(
    records: Sequence[ResponseRecord],
    *,
    classifier: SentimentClassifier = DEFAULT_CLASSIFIER,
) -> list[KeyMetric]:
    """Headline card figures, in display order."""
    total = len(records)
    metrics = []
    for definition in KEY_METRICS:
        count = count_matching(records, lambda r: definition.predicate(r, classifier))
        metrics.append(
            KeyMetric(
                key=definition.key,
                name=definition.name,
                description=definition.description,
                count=count,
                percentage=percentage(count, total),
            )
        )
    return metrics


def compute_pain_points(
    records: Sequence[ResponseRecord],
    *,
    classifier: SentimentClassifier = DEFAULT_CLASSIFIER,
) -> list[PainPoint]:
    """
    Prevalence and severity of shopping pain points.

    Covers fixed fit/returns/colour problems plus one entry per reported
    trust issue, sorted by count descending (ties keep definition order).
    """
    total = len(records)
    points: list[PainPoint] = []

    for definition in PAIN_POINTS:
        count = count_matching(records, lambda r: definition.predicate(r, classifier))
        pct = percentage(count, total)
        points.append(
            PainPoint(
                key=definition.key,
                name=definition.name,
                count=count,
                percentage=pct,
                severity=severity_for(pct),
            )
        )

    trust_counts = count_values(records, lambda r: r.trust_issues)
    for issue, count in trust_counts.items():
        pct = percentage(count, total)
        points.append(
            PainPoint(
                key=f"trust_{issue}",
                name=option_label("trust_issues", issue),
                count=count,
                percentage=pct,
                severity=severity_for(pct),
            )
        )

    return sorted(points, key=lambda point: -point.count)

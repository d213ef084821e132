"""
Module: pipeline

Purpose: Metrics facade that derives every dashboard figure from raw responses.

Key Functions:
- compute_all_metrics: Run all aggregation stages over one response snapshot
- compute_metrics_from_repository: Pull a snapshot and compute metrics
- MetricsConfig: Tunables for a metrics run

Architecture Notes:
- Pure and synchronous: no caching, no I/O, no wall-clock reads; identical
  input gives identical output
- Recomputed on every call; nothing derived is persisted
- Safe to call concurrently on the same snapshot
- Tolerates an empty collection, where every figure degrades to zero/empty
"""

import logging
from dataclasses import dataclass, field
from datetime import timezone, tzinfo
from typing import Protocol, Sequence
from zoneinfo import ZoneInfo

from tryon_insights.analysis.funnel import build_funnel
from tryon_insights.analysis.indicators import compute_key_metrics, compute_pain_points
from tryon_insights.analysis.market_sizing import MarketSizingAssumptions, estimate_market
from tryon_insights.data.schemas import DerivedMetrics, DistributionEntry, ResponseRecord
from tryon_insights.features.age_buckets import AGE_BUCKET_ORDER, bucket_age
from tryon_insights.features.aggregators import (
    aggregate_by_day,
    aggregate_distribution,
    top_categories,
)
from tryon_insights.features.sentiment import DEFAULT_CLASSIFIER, SentimentClassifier
from tryon_insights.segmentation.segmenter import segment_responses
from tryon_insights.settings import Settings

logger = logging.getLogger(__name__)


# Fields shown as raw categorical distributions, in dashboard order
DISTRIBUTION_FIELDS: tuple[str, ...] = (
    "gender",
    "shopping_preference",
    "online_shopping_frequency",
    "find_clothes",
    "social_media_shopping",
    "social_media_platforms",
    "clothes_fit",
    "returns_problem",
    "mis_sized_items",
    "trust_issues",
    "color_matching_uncertainty",
    "image_upload_willingness",
    "try_on_from_social_media",
    "try_on_use_frequency",
    "try_on_body_type",
    "try_on_concerns",
    "speed_expectation",
    "skin_tone_accuracy",
    "virtual_try_on",
    "ar_realism",
    "purchase_confidence",
)


# =============================================================================
# CONFIGURATION
# =============================================================================


@dataclass
class MetricsConfig:
    """Configuration for a metrics run."""

    market: MarketSizingAssumptions = field(default_factory=MarketSizingAssumptions)
    classifier: SentimentClassifier = DEFAULT_CLASSIFIER
    top_concerns_limit: int = 8
    day_bucket_tz: tzinfo = timezone.utc
    distribution_fields: tuple[str, ...] = DISTRIBUTION_FIELDS

    @classmethod
    def from_settings(cls, settings: Settings) -> "MetricsConfig":
        return cls(
            market=MarketSizingAssumptions.from_settings(settings),
            top_concerns_limit=settings.top_concerns_limit,
            day_bucket_tz=ZoneInfo(settings.day_bucket_timezone),
        )


class ResponseSource(Protocol):
    """Anything that can return the current response snapshot."""

    def fetch_all(self) -> list[ResponseRecord]: ...


# =============================================================================
# FACADE
# =============================================================================


def compute_age_groups(records: Sequence[ResponseRecord]) -> list[DistributionEntry]:
    """Age-group distribution; absent or unparseable ages count as Unknown."""
    return aggregate_distribution(
        records,
        lambda record: bucket_age(record.age),
        label=str,
        category_order=AGE_BUCKET_ORDER,
    )


def compute_all_metrics(
    records: Sequence[ResponseRecord],
    config: MetricsConfig | None = None,
) -> DerivedMetrics:
    """
    Derive every dashboard metric from one response snapshot.

    Args:
        records: Full, already-fetched response collection
        config: Run configuration (defaults apply when omitted)

    Returns:
        DerivedMetrics with no references back into `records`
    """
    config = config or MetricsConfig()
    classifier = config.classifier
    records = list(records)

    logger.debug("Computing metrics for %d responses", len(records))

    distributions = {
        name: aggregate_distribution(records, name) for name in config.distribution_fields
    }

    segments = segment_responses(records, classifier=classifier)
    funnel = build_funnel(records, classifier=classifier)
    market = estimate_market(records, assumptions=config.market, classifier=classifier)

    logger.debug(
        "Segments: power=%d early=%d skeptics=%d converts=%d unclassified=%d",
        segments.power_users.count,
        segments.early_adopters.count,
        segments.skeptics.count,
        segments.potential_converts.count,
        segments.unclassified.count,
    )
    logger.debug("Market: tam=%d sam=%d som=%d", market.tam, market.sam, market.som)

    return DerivedMetrics(
        total_responses=len(records),
        key_metrics=compute_key_metrics(records, classifier=classifier),
        age_groups=compute_age_groups(records),
        distributions=distributions,
        top_concerns=top_categories(records, "try_on_concerns", limit=config.top_concerns_limit),
        segments=segments,
        funnel=funnel,
        market=market,
        pain_points=compute_pain_points(records, classifier=classifier),
        responses_by_day=aggregate_by_day(records, tz=config.day_bucket_tz),
    )


def compute_metrics_from_repository(
    source: ResponseSource,
    config: MetricsConfig | None = None,
) -> DerivedMetrics:
    """
    Pull the current snapshot from a response source and compute metrics.

    The caller owns polling or subscription; each call is independent.
    """
    records = source.fetch_all()
    return compute_all_metrics(records, config)


def get_headline_summary(metrics: DerivedMetrics) -> dict[str, int]:
    """Flat dict of headline figures for logging and quick display."""
    summary: dict[str, int] = {"total_responses": metrics.total_responses}
    for metric in metrics.key_metrics:
        summary[f"{metric.key}_pct"] = metric.percentage
    for cohort in metrics.segments.cohorts:
        summary[f"{cohort.key}_count"] = cohort.count
    summary["tam"] = metrics.market.tam
    summary["som"] = metrics.market.som
    summary["potential_revenue"] = metrics.market.potential_revenue
    return summary

"""
Module: metrics_reporter

Purpose: Export derived survey metrics as JSON and plain-text reports.

Key Functions:
- metrics_to_dict: Serialisable dict of DerivedMetrics
- export_metrics_to_json: JSON string, optionally written to disk
- generate_text_summary: Plain-text dashboard
- export_text_report: Write the text dashboard to disk

Architecture Notes:
- Output is derived only from DerivedMetrics; no wall-clock values are added
  unless the caller passes generated_at
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from tryon_insights.data.schemas import DerivedMetrics, DistributionEntry
from tryon_insights.exceptions import ReportGenerationError

BAR_WIDTH = 30


# =============================================================================
# JSON EXPORT
# =============================================================================


def metrics_to_dict(metrics: DerivedMetrics) -> dict[str, Any]:
    """
    Convert metrics to a JSON-compatible dictionary.

    Decimals become strings and enums their values.
    """
    return metrics.model_dump(mode="json")


def export_metrics_to_json(
    metrics: DerivedMetrics,
    filepath: str | Path | None = None,
    *,
    indent: int = 2,
    generated_at: datetime | None = None,
) -> str:
    """
    Export metrics to JSON.

    Args:
        metrics: Metrics to export
        filepath: Optional filepath to write to
        indent: JSON indentation level
        generated_at: Optional timestamp recorded under "generated_at"

    Returns:
        JSON string

    Raises:
        ReportGenerationError: If export fails
    """
    try:
        payload = metrics_to_dict(metrics)
        if generated_at is not None:
            payload["generated_at"] = generated_at.isoformat()
        json_str = json.dumps(payload, indent=indent)

        if filepath:
            path = Path(filepath)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json_str)

        return json_str

    except (OSError, TypeError, ValueError) as e:
        raise ReportGenerationError(
            f"Failed to export metrics to JSON: {e}",
            report_type="json",
        ) from e


# =============================================================================
# TEXT REPORT GENERATION
# =============================================================================


def _bar(pct: int) -> str:
    filled = round(BAR_WIDTH * pct / 100)
    return "#" * filled + "." * (BAR_WIDTH - filled)


def _distribution_lines(title: str, entries: list[DistributionEntry]) -> list[str]:
    lines = [title, "-" * 40]
    if not entries:
        lines.append("  (no answers)")
    for entry in entries:
        lines.append(f"  {entry.label:<36} {_bar(entry.percentage)} {entry.count:>5} ({entry.percentage}%)")
    lines.append("")
    return lines


def generate_text_summary(metrics: DerivedMetrics, *, title: str = "SURVEY ANALYTICS") -> str:
    """
    Generate a text dashboard of the derived metrics.

    Args:
        metrics: DerivedMetrics to summarise
        title: Report heading

    Returns:
        Text summary string
    """
    lines: list[str] = []

    lines.append("=" * 60)
    lines.append(title)
    lines.append("=" * 60)
    lines.append(f"Total Responses: {metrics.total_responses:,}")
    lines.append("")

    lines.append("KEY METRICS")
    lines.append("-" * 40)
    for metric in metrics.key_metrics:
        lines.append(f"  {metric.name}: {metric.percentage}% ({metric.count}/{metrics.total_responses})")
    lines.append("")

    lines.append("USER SEGMENTS")
    lines.append("-" * 40)
    for cohort in metrics.segments.cohorts + [metrics.segments.unclassified]:
        lines.append(f"  {cohort.name}: {cohort.count} ({cohort.percentage}%)")
    lines.append("")

    lines.append("CONVERSION FUNNEL")
    lines.append("-" * 40)
    for stage in metrics.funnel:
        lines.append(f"  {stage.stage:<14} {_bar(stage.percentage)} {stage.count:>5} ({stage.percentage}%)")
    lines.append("")

    market = metrics.market
    lines.append("MARKET OPPORTUNITY")
    lines.append("-" * 40)
    lines.append(f"  TAM: {market.tam:,} users")
    lines.append(f"  SAM: {market.sam:,} users")
    lines.append(f"  SOM: {market.som:,} users")
    lines.append(f"  Potential Revenue: ${market.potential_revenue:,}")
    lines.append(f"  Conversion Opportunity: {market.conversion_opportunity}%")
    lines.append(
        f"  (assumes {market.users_per_response:,} users/response, "
        f"AOV ${market.average_order_value}, {market.assumed_conversion_rate:.1%} conversion)"
    )
    lines.append("")

    if metrics.pain_points:
        lines.append("PAIN POINTS")
        lines.append("-" * 40)
        for point in metrics.pain_points:
            lines.append(f"  [{point.severity.value.upper():<8}] {point.name}: {point.count} ({point.percentage}%)")
        lines.append("")

    lines.extend(_distribution_lines("AGE GROUPS", metrics.age_groups))
    lines.extend(_distribution_lines("GENDER", metrics.distribution("gender")))
    lines.extend(_distribution_lines("SHOPPING PREFERENCE", metrics.distribution("shopping_preference")))
    lines.extend(_distribution_lines("SOCIAL MEDIA PLATFORMS", metrics.distribution("social_media_platforms")))
    lines.extend(_distribution_lines("TOP TRY-ON CONCERNS", metrics.top_concerns))

    if metrics.responses_by_day:
        lines.append("RESPONSES BY DAY")
        lines.append("-" * 40)
        for day in metrics.responses_by_day:
            lines.append(f"  {day.date}: {day.count}")
        lines.append("")

    lines.append("=" * 60)
    lines.append("END OF REPORT")
    lines.append("=" * 60)

    return "\n".join(lines)


def export_text_report(
    metrics: DerivedMetrics,
    filepath: str | Path,
) -> None:
    """
    Export metrics as a text file.

    Raises:
        ReportGenerationError: If export fails
    """
    try:
        text = generate_text_summary(metrics)
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
    except OSError as e:
        raise ReportGenerationError(
            f"Failed to export text report: {e}",
            report_type="text",
        ) from e

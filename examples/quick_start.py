#!/usr/bin/env python3
"""Quick start example for the survey insights engine.

Run this script to see the metrics pipeline in action with synthetic responses.

Usage:
    python examples/quick_start.py
"""

from tryon_insights.data.synthetic_generator import generate_responses
from tryon_insights.pipeline import compute_all_metrics, get_headline_summary
from tryon_insights.reporting.metrics_reporter import generate_text_summary
from tryon_insights.segmentation.segmenter import cohort_members


def main() -> None:
    """Run a quick metrics demo."""
    print("=" * 60)
    print("Virtual Try-On Survey Insights - Quick Start Demo")
    print("=" * 60)

    print("\nGenerating 300 synthetic responses...")
    responses = generate_responses(n_responses=300, seed=42)

    metrics = compute_all_metrics(responses)
    print("\n" + generate_text_summary(metrics))

    print("\n" + "=" * 60)
    print("HEADLINE FIGURES")
    print("=" * 60)
    for key, value in get_headline_summary(metrics).items():
        print(f"  {key}: {value:,}")

    # Drill into one cohort
    power_users = cohort_members(responses, metrics.segments.power_users)
    print(f"\nSample power users ({len(power_users)} total):")
    for record in power_users[:3]:
        print(
            f"  {record.response_id[:8]}  age={record.age}  "
            f"platforms={', '.join(record.social_media_platforms) or '-'}"
        )


if __name__ == "__main__":
    main()

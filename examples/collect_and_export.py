#!/usr/bin/env python3
"""Collect submissions into a response store and export the results.

Shows the write boundary (validated, append-only submissions) and the pull
model: metrics are recomputed from a fresh snapshot after every change.

Usage:
    python examples/collect_and_export.py
"""

from pathlib import Path

from tryon_insights.data.response_store import JsonLinesResponseStore, export_responses_csv
from tryon_insights.exceptions import SubmissionValidationError
from tryon_insights.pipeline import compute_metrics_from_repository
from tryon_insights.reporting.metrics_reporter import export_metrics_to_json

SUBMISSIONS = [
    {
        "age": "25-34",
        "gender": "female",
        "shoppingPreference": "mostly-online",
        "onlineShoppingFrequency": "once-week",
        "findClothes": "social-media",
        "socialMediaShopping": "yes-social",
        "socialMediaPlatforms": ["instagram", "tiktok"],
        "trustIssues": ["quality", "color-diff"],
        "colorMatchingUncertainty": "often",
        "imageUploadWillingness": "yes-upload",
        "speedExpectation": "quick",
        "skinToneAccuracy": "critical",
        "virtualTryOn": "yes",
        "arRealism": "close",
        "purchaseConfidence": "very-confident",
    },
    {
        "age": "45-54",
        "shoppingPreference": "mostly-in-store",
        "onlineShoppingFrequency": "few-times-year",
        "findClothes": "brand-retail",
        "socialMediaShopping": "no-social",
        "colorMatchingUncertainty": "rarely",
        "imageUploadWillingness": "no-upload",
        "speedExpectation": "instant",
        "skinToneAccuracy": "nice-to-have",
        "virtualTryOn": "no",
        "purchaseConfidence": "not-confident",
    },
    # Missing required answers; rejected at the write boundary
    {"age": "18-24", "virtualTryOn": "yes"},
]


def main() -> None:
    output_dir = Path("output")
    store = JsonLinesResponseStore(output_dir / "responses.jsonl")

    for answers in SUBMISSIONS:
        try:
            record = store.submit(answers)
            print(f"Accepted {record.response_id}")
        except SubmissionValidationError as e:
            print(f"Rejected: {e.message}")

        metrics = compute_metrics_from_repository(store)
        print(f"  responses={metrics.total_responses} funnel={[s.count for s in metrics.funnel]}")

    export_metrics_to_json(metrics, output_dir / "metrics.json")
    export_responses_csv(store.fetch_all(), output_dir / "responses.csv")
    print(f"\nExported to {output_dir}/")


if __name__ == "__main__":
    main()

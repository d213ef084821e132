#!/usr/bin/env python3
"""
Compute survey dashboard metrics from a response snapshot.

Usage:
    python scripts/compute_metrics.py [--input PATH | --synthetic N] [--output JSON] [--verbose]

Example:
    python scripts/compute_metrics.py --input data/responses.jsonl --output output/metrics.json
    python scripts/compute_metrics.py --synthetic 250 --seed 7
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tryon_insights.data.response_store import export_responses_csv, load_responses
from tryon_insights.data.synthetic_generator import SyntheticResponseGenerator
from tryon_insights.exceptions import ReportGenerationError, ResponseLoadError
from tryon_insights.pipeline import MetricsConfig, compute_all_metrics
from tryon_insights.reporting.metrics_reporter import (
    export_metrics_to_json,
    export_text_report,
    generate_text_summary,
)
from tryon_insights.settings import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Compute virtual try-on survey metrics"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--input",
        "-i",
        type=str,
        default=str(settings.responses_path) if settings.responses_path else None,
        help="JSON array or JSON lines response snapshot (default: TRYON_RESPONSES_PATH)",
    )
    source.add_argument(
        "--synthetic",
        type=int,
        metavar="N",
        help="Generate N synthetic responses instead of reading a file",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Seed for synthetic responses (default: 42)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on malformed rows instead of skipping them",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Output file for metrics JSON (optional)",
    )
    parser.add_argument(
        "--text",
        type=str,
        help="Output file for the text report (optional)",
    )
    parser.add_argument(
        "--csv",
        type=str,
        help="Also export the raw responses to this CSV file (optional)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.synthetic is not None:
        records = SyntheticResponseGenerator(seed=args.seed).generate(args.synthetic)
        logger.info("Generated %d synthetic responses (seed=%d)", len(records), args.seed)
    elif args.input:
        try:
            result = load_responses(args.input, strict=args.strict)
        except ResponseLoadError as e:
            print(f"Error: {e.message}")
            sys.exit(1)
        records = result.records
        logger.info(
            "Loaded %d responses from %s (%d skipped)",
            len(records),
            result.source,
            result.skipped_rows,
        )
    else:
        parser.error("one of --input or --synthetic is required")

    metrics = compute_all_metrics(records, MetricsConfig.from_settings(settings))
    print(generate_text_summary(metrics))

    try:
        if args.output:
            export_metrics_to_json(metrics, args.output, generated_at=datetime.now())
            print(f"\nMetrics saved to: {args.output}")
        if args.text:
            export_text_report(metrics, args.text)
            print(f"Text report saved to: {args.text}")
        if args.csv:
            export_responses_csv(records, args.csv)
            print(f"Responses saved to: {args.csv}")
    except ReportGenerationError as e:
        print(f"Error: {e.message}")
        sys.exit(1)


if __name__ == "__main__":
    main()

"""
Reporting module for the survey insights engine.

Contains JSON and text export of derived metrics.
"""

from tryon_insights.reporting.metrics_reporter import (
    export_metrics_to_json,
    export_text_report,
    generate_text_summary,
    metrics_to_dict,
)

__all__ = [
    "export_metrics_to_json",
    "export_text_report",
    "generate_text_summary",
    "metrics_to_dict",
]

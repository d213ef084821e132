"""
Data module for the survey insights engine.

Contains response schemas, the survey question bank, response storage and
snapshot loading, and synthetic response generation.
"""

from tryon_insights.data.question_bank import (
    CANONICAL_AGE_TOKENS,
    QUESTIONS,
    REQUIRED_FIELDS,
    Option,
    Question,
    get_question,
    is_visible,
    option_label,
    validate_submission,
)
from tryon_insights.data.response_store import (
    InMemoryResponseStore,
    JsonLinesResponseStore,
    LoadResult,
    ResponseRepository,
    export_responses_csv,
    load_responses,
)
from tryon_insights.data.schemas import DerivedMetrics, ResponseRecord
from tryon_insights.data.synthetic_generator import (
    SyntheticResponseGenerator,
    generate_responses,
)

__all__ = [
    # Schemas
    "ResponseRecord",
    "DerivedMetrics",
    # Question bank
    "CANONICAL_AGE_TOKENS",
    "QUESTIONS",
    "REQUIRED_FIELDS",
    "Option",
    "Question",
    "get_question",
    "is_visible",
    "option_label",
    "validate_submission",
    # Storage
    "InMemoryResponseStore",
    "JsonLinesResponseStore",
    "LoadResult",
    "ResponseRepository",
    "export_responses_csv",
    "load_responses",
    # Synthetic data
    "SyntheticResponseGenerator",
    "generate_responses",
]

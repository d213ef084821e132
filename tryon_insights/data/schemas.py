"""
Module: schemas

Purpose: Pydantic models for survey responses and every derived metric.

All models use Pydantic v2. Response records are write-once and accept any
string value for enum fields; the question bank validates domains at the
write boundary, never here.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

SCHEMA_VERSION = 1


# =============================================================================
# ENUMS
# =============================================================================


class SurveyPhase(str, Enum):
    """Survey phases, in the order a respondent sees them."""

    DEMOGRAPHICS = "demographics"
    SHOPPING_EXPERIENCE = "shopping_experience"
    VIRTUAL_TRY_ON = "virtual_try_on"


class Severity(str, Enum):
    """Severity tiers for pain points."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# =============================================================================
# BASE MODELS
# =============================================================================


class BaseSchema(BaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
    )


# =============================================================================
# RESPONSE RECORD
# =============================================================================

SINGLE_VALUE_FIELDS: tuple[str, ...] = (
    "age",
    "gender",
    "shopping_preference",
    "online_shopping_frequency",
    "find_clothes",
    "social_media_shopping",
    "clothes_fit",
    "returns_problem",
    "mis_sized_items",
    "color_matching_uncertainty",
    "image_upload_willingness",
    "try_on_from_social_media",
    "try_on_use_frequency",
    "try_on_body_type",
    "speed_expectation",
    "skin_tone_accuracy",
    "virtual_try_on",
    "ar_realism",
    "purchase_confidence",
)

LIST_VALUE_FIELDS: tuple[str, ...] = (
    "social_media_platforms",
    "trust_issues",
    "try_on_concerns",
)

SURVEY_FIELDS: tuple[str, ...] = SINGLE_VALUE_FIELDS + LIST_VALUE_FIELDS


class ResponseRecord(BaseSchema):
    """One completed survey submission.

    Attributes are snake_case; the stored documents use camelCase keys, and
    both spellings are accepted on input. Store metadata keys not modelled
    here are ignored.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    # Identity
    response_id: str | None = Field(default=None, alias="_id")
    created_at: datetime | None = Field(default=None, alias="_creationTime")
    completed_at: datetime | None = None

    # Phase 1: demographics & shopping behaviour
    age: str | None = None
    gender: str | None = None
    shopping_preference: str | None = None
    online_shopping_frequency: str | None = None

    # Phase 2: online shopping experience & pain points
    find_clothes: str | None = None
    social_media_shopping: str | None = None
    social_media_platforms: list[str] = Field(default_factory=list)
    clothes_fit: str | None = None
    returns_problem: str | None = None
    mis_sized_items: str | None = None
    trust_issues: list[str] = Field(default_factory=list)
    color_matching_uncertainty: str | None = None

    # Phase 3: virtual try-on & AI trust
    image_upload_willingness: str | None = None
    try_on_from_social_media: str | None = None
    try_on_use_frequency: str | None = None
    try_on_body_type: str | None = None
    try_on_concerns: list[str] = Field(default_factory=list)
    speed_expectation: str | None = None
    skin_tone_accuracy: str | None = None
    virtual_try_on: str | None = None
    ar_realism: str | None = None
    purchase_confidence: str | None = None

    # Diagnostics
    user_agent: str | None = None

    @field_validator(*LIST_VALUE_FIELDS, mode="before")
    @classmethod
    def null_list_as_empty(cls, value: Any) -> Any:
        """Stored documents may carry null for an unanswered list question."""
        return [] if value is None else value

    def answered(self, field: str) -> bool:
        """Whether a survey field holds a present, non-empty answer."""
        value = getattr(self, field)
        if isinstance(value, list):
            return any(value)
        return bool(value)

    @property
    def timestamp(self) -> datetime | None:
        """Completion time, falling back to the store's creation time."""
        return self.completed_at or self.created_at

    def __repr__(self) -> str:
        return (
            f"ResponseRecord(response_id={self.response_id!r}, "
            f"completed_at={self.completed_at.isoformat() if self.completed_at else None})"
        )


# =============================================================================
# DERIVED METRIC SCHEMAS
# =============================================================================

Percentage = Annotated[int, Field(ge=0, le=100)]


class DistributionEntry(BaseSchema):
    """Count and share of one category within a field's distribution."""

    category: str  # Grouping key, the raw answer value
    label: str  # Display label, presentation only
    count: Annotated[int, Field(ge=0)]
    percentage: Percentage


class Cohort(BaseSchema):
    """A group of responses assigned to one segment."""

    key: str
    name: str
    description: str
    count: Annotated[int, Field(ge=0)]
    percentage: Percentage
    member_indices: list[int] = Field(default_factory=list)


class SegmentationResult(BaseSchema):
    """Disjoint cohorts produced by ordered rule evaluation."""

    total: Annotated[int, Field(ge=0)]
    power_users: Cohort
    early_adopters: Cohort
    skeptics: Cohort
    potential_converts: Cohort
    unclassified: Cohort

    @property
    def cohorts(self) -> list[Cohort]:
        """The four rule-based cohorts in evaluation order."""
        return [self.power_users, self.early_adopters, self.skeptics, self.potential_converts]


class FunnelStage(BaseSchema):
    """One independent predicate count in the conversion funnel."""

    stage: str
    description: str
    count: Annotated[int, Field(ge=0)]
    percentage: Percentage


class MarketEstimate(BaseSchema):
    """TAM / SAM / SOM chain and projected revenue."""

    tam: Annotated[int, Field(ge=0)]
    sam: Annotated[int, Field(ge=0)]
    som: Annotated[int, Field(ge=0)]
    potential_revenue: Annotated[int, Field(ge=0)]
    conversion_opportunity: Percentage

    # Assumptions used, echoed for presentation
    users_per_response: int
    average_order_value: Decimal
    assumed_conversion_rate: float


class KeyMetric(BaseSchema):
    """Headline figure for a dashboard card."""

    key: str
    name: str
    description: str
    count: Annotated[int, Field(ge=0)]
    percentage: Percentage


class DailyCount(BaseSchema):
    """Number of responses completed on one calendar day."""

    date: str  # YYYY-MM-DD
    count: Annotated[int, Field(ge=0)]


class PainPoint(BaseSchema):
    """A shopping pain point with its prevalence and severity."""

    key: str
    name: str
    count: Annotated[int, Field(ge=0)]
    percentage: Percentage
    severity: Severity


class DerivedMetrics(BaseSchema):
    """Everything the dashboards render, recomputed from raw responses."""

    schema_version: int = SCHEMA_VERSION
    total_responses: Annotated[int, Field(ge=0)]
    key_metrics: list[KeyMetric]
    age_groups: list[DistributionEntry]
    distributions: dict[str, list[DistributionEntry]]
    top_concerns: list[DistributionEntry]
    segments: SegmentationResult
    funnel: list[FunnelStage]
    market: MarketEstimate
    pain_points: list[PainPoint]
    responses_by_day: list[DailyCount]

    def distribution(self, field: str) -> list[DistributionEntry]:
        """Distribution for a survey field, empty when not computed."""
        return self.distributions.get(field, [])

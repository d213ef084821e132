"""
Tests for Pydantic schemas and the exception hierarchy.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from tryon_insights.data.schemas import (
    SURVEY_FIELDS,
    Cohort,
    DistributionEntry,
    ResponseRecord,
)
from tryon_insights.exceptions import (
    DataValidationError,
    ReportGenerationError,
    ResponseLoadError,
    SubmissionValidationError,
    SurveyInsightsError,
)


# =============================================================================
# RESPONSE RECORD TESTS
# =============================================================================


class TestResponseRecord:
    """Tests for ResponseRecord parsing."""

    def test_stored_document_keys(self) -> None:
        record = ResponseRecord.model_validate(
            {
                "_id": "abc123",
                "_creationTime": 1736942400000,
                "completedAt": 1736942460000,
                "shoppingPreference": "mostly-online",
                "socialMediaPlatforms": ["instagram"],
                "userAgent": "Mozilla/5.0",
            }
        )

        assert record.response_id == "abc123"
        assert record.created_at == datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)
        assert record.completed_at == datetime(2025, 1, 15, 12, 1, tzinfo=timezone.utc)
        assert record.shopping_preference == "mostly-online"
        assert record.social_media_platforms == ["instagram"]
        assert record.user_agent == "Mozilla/5.0"

    def test_attribute_names_accepted(self) -> None:
        record = ResponseRecord(shopping_preference="equal", trust_issues=["scam"])

        assert record.shopping_preference == "equal"
        assert record.trust_issues == ["scam"]

    def test_unknown_keys_ignored(self) -> None:
        record = ResponseRecord.model_validate({"age": "18-24", "storageId": "x"})

        assert record.age == "18-24"

    def test_any_string_accepted_for_enum_fields(self) -> None:
        record = ResponseRecord.model_validate({"virtualTryOn": "perhaps"})

        assert record.virtual_try_on == "perhaps"

    def test_defaults(self) -> None:
        record = ResponseRecord()

        for name in SURVEY_FIELDS:
            assert not record.answered(name)
        assert record.social_media_platforms == []
        assert record.timestamp is None

    def test_null_list_answers_are_empty(self) -> None:
        record = ResponseRecord.model_validate(
            {
                "virtualTryOn": "yes",
                "socialMediaPlatforms": None,
                "trustIssues": None,
                "tryOnConcerns": None,
            }
        )

        assert record.social_media_platforms == []
        assert record.trust_issues == []
        assert record.try_on_concerns == []
        assert not record.answered("trust_issues")

    def test_non_list_value_still_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ResponseRecord.model_validate({"trustIssues": 5})

    def test_frozen(self) -> None:
        record = ResponseRecord(age="18-24")

        with pytest.raises(ValidationError):
            record.age = "25-34"

    def test_answered(self) -> None:
        record = ResponseRecord(gender="", trust_issues=[""], try_on_concerns=["privacy"], age="  ")

        assert not record.answered("gender")
        assert not record.answered("trust_issues")
        assert not record.answered("age")
        assert record.answered("try_on_concerns")

    def test_timestamp_prefers_completion(self) -> None:
        created = datetime(2025, 1, 1, tzinfo=timezone.utc)
        completed = datetime(2025, 1, 2, tzinfo=timezone.utc)

        assert ResponseRecord(created_at=created, completed_at=completed).timestamp == completed
        assert ResponseRecord(created_at=created).timestamp == created

    def test_serialize_by_alias(self) -> None:
        dumped = ResponseRecord(response_id="r1", find_clothes="mixed").model_dump(by_alias=True)

        assert dumped["_id"] == "r1"
        assert dumped["findClothes"] == "mixed"


# =============================================================================
# DERIVED METRIC SCHEMA TESTS
# =============================================================================


class TestDerivedSchemas:
    """Tests for derived metric models."""

    def test_percentage_bounds(self) -> None:
        with pytest.raises(ValidationError):
            DistributionEntry(category="a", label="A", count=1, percentage=101)

        with pytest.raises(ValidationError):
            DistributionEntry(category="a", label="A", count=-1, percentage=0)

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            Cohort(key="k", name="K", description="", count=0, percentage=0, colour="red")

    def test_cohort_defaults(self) -> None:
        cohort = Cohort(key="k", name="K", description="", count=0, percentage=0)

        assert cohort.member_indices == []


# =============================================================================
# EXCEPTION TESTS
# =============================================================================


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_hierarchy(self) -> None:
        assert issubclass(DataValidationError, SurveyInsightsError)
        assert issubclass(SubmissionValidationError, DataValidationError)
        assert issubclass(ResponseLoadError, SurveyInsightsError)
        assert issubclass(ReportGenerationError, SurveyInsightsError)

    def test_context(self) -> None:
        error = DataValidationError("bad value", field="age", value="abc")

        assert error.context == {"field": "age", "value": "abc"}
        assert str(error) == "bad value"
        assert "DataValidationError" in repr(error)

    def test_submission_error_fields(self) -> None:
        error = SubmissionValidationError(
            "rejected",
            missing_fields=["age"],
            invalid_fields={"gender": "robot"},
        )

        assert error.missing_fields == ["age"]
        assert error.invalid_fields == {"gender": "robot"}
        assert error.context["missing_fields"] == ["age"]

    def test_load_error_line_number(self) -> None:
        error = ResponseLoadError("broken", source="responses.jsonl", line_number=3)

        assert error.context == {"source": "responses.jsonl", "line_number": 3}

"""
Tests for the survey question bank and submission validation.
"""

import pytest

from tryon_insights.data.question_bank import (
    QUESTIONS,
    REQUIRED_FIELDS,
    find_submission_problems,
    get_question,
    is_visible,
    option_label,
    questions_for_phase,
    validate_submission,
)
from tryon_insights.data.schemas import SURVEY_FIELDS, ResponseRecord, SurveyPhase
from tryon_insights.exceptions import SubmissionValidationError


VALID_ANSWERS = {
    "age": "25-34",
    "shoppingPreference": "mostly-online",
    "onlineShoppingFrequency": "monthly",
    "findClothes": "brand-retail",
    "colorMatchingUncertainty": "often",
    "speedExpectation": "quick",
    "skinToneAccuracy": "important",
    "virtualTryOn": "no",
    "purchaseConfidence": "somewhat-confident",
}


def make_response(**answers) -> ResponseRecord:
    """Helper to create a ResponseRecord from camelCase answers."""
    return ResponseRecord.model_validate(answers)


class TestCatalogue:
    """Tests for the question catalogue itself."""

    def test_every_question_maps_to_a_record_field(self) -> None:
        assert sorted(q.field for q in QUESTIONS) == sorted(SURVEY_FIELDS)

    def test_required_fields(self) -> None:
        assert set(REQUIRED_FIELDS) == {
            "age",
            "shopping_preference",
            "online_shopping_frequency",
            "find_clothes",
            "color_matching_uncertainty",
            "speed_expectation",
            "skin_tone_accuracy",
            "virtual_try_on",
            "purchase_confidence",
        }

    def test_phases_cover_catalogue(self) -> None:
        total = sum(len(questions_for_phase(phase)) for phase in SurveyPhase)

        assert total == len(QUESTIONS)

    def test_stored_key_is_camel_case(self) -> None:
        assert get_question("color_matching_uncertainty").key == "colorMatchingUncertainty"

    def test_unknown_field(self) -> None:
        assert get_question("favourite_colour") is None


class TestOptionLabel:
    """Tests for option_label."""

    def test_known_value(self) -> None:
        assert option_label("social_media_platforms", "tiktok") == "TikTok"

    def test_unknown_value_falls_back(self) -> None:
        assert option_label("gender", "some-other-answer") == "some other answer"

    def test_unknown_field_falls_back(self) -> None:
        assert option_label("nothing", "a-b") == "a b"


class TestVisibility:
    """Tests for question visibility conditions."""

    @pytest.mark.parametrize(
        "field,answers,expected",
        [
            ("social_media_platforms", {"social_media_shopping": "yes-social"}, True),
            ("social_media_platforms", {"social_media_shopping": "no-social"}, False),
            ("mis_sized_items", {"returns_problem": "sometimes"}, True),
            ("mis_sized_items", {"returns_problem": "rarely"}, False),
            ("trust_issues", {"find_clothes": "marketplace"}, False),
            ("trust_issues", {"find_clothes": "mixed"}, True),
            ("try_on_from_social_media", {"image_upload_willingness": "maybe-upload"}, True),
            ("try_on_concerns", {"image_upload_willingness": "maybe-upload"}, False),
            ("ar_realism", {"virtual_try_on": "yes"}, True),
            ("ar_realism", {}, False),
            ("age", {}, True),
        ],
    )
    def test_conditions(self, field: str, answers: dict, expected: bool) -> None:
        assert is_visible(get_question(field), answers) is expected


class TestValidateSubmission:
    """Tests for write-boundary validation."""

    def test_valid_submission(self) -> None:
        record = make_response(**VALID_ANSWERS)

        assert validate_submission(record) is record

    def test_missing_required(self) -> None:
        answers = dict(VALID_ANSWERS)
        del answers["age"]
        answers["speedExpectation"] = ""

        with pytest.raises(SubmissionValidationError) as exc_info:
            validate_submission(make_response(**answers))

        assert exc_info.value.missing_fields == ["age", "speedExpectation"]
        assert exc_info.value.invalid_fields == {}

    def test_out_of_domain_values(self) -> None:
        record = make_response(
            **VALID_ANSWERS,
            gender="robot",
            socialMediaShopping="yes-social",
            socialMediaPlatforms=["instagram", "myspace"],
        )

        missing, invalid = find_submission_problems(record)

        assert missing == []
        assert invalid == {"gender": "robot", "socialMediaPlatforms": ["myspace"]}

    def test_optional_questions_may_be_skipped(self) -> None:
        missing, invalid = find_submission_problems(make_response(**VALID_ANSWERS))

        assert missing == []
        assert invalid == {}

    def test_error_message_names_fields(self) -> None:
        with pytest.raises(SubmissionValidationError, match="purchaseConfidence"):
            validate_submission(make_response(age="18-24"))

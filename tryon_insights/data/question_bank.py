"""
Module: question_bank

Purpose: Declarative catalogue of the three-phase virtual try-on survey.

The engine consumes responses as already-collected records; this catalogue is
used for display labels, for validating submissions at the write boundary,
and for generating synthetic responses.

Key Functions:
- get_question: Look up a question by ResponseRecord attribute name
- option_label: Display label for an answer value
- is_visible: Evaluate a question's visibility condition
- validate_submission: Check required fields and option domains

Architecture Notes:
- Questions are keyed by ResponseRecord attribute (snake_case); the stored
  document key is the camelCase alias
- Visibility conditions read a mapping of attribute name to answer
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from pydantic.alias_generators import to_camel

from tryon_insights.data.schemas import ResponseRecord, SurveyPhase
from tryon_insights.exceptions import SubmissionValidationError

Answers = Mapping[str, Any]


@dataclass(frozen=True)
class Option:
    """One selectable answer."""

    value: str
    label: str


@dataclass(frozen=True)
class Question:
    """A survey question bound to one ResponseRecord field."""

    field: str
    prompt: str
    phase: SurveyPhase
    options: tuple[Option, ...]
    multi: bool = False
    required: bool = False
    condition: Callable[[Answers], bool] | None = None

    @property
    def key(self) -> str:
        """Stored document key."""
        return to_camel(self.field)

    @property
    def values(self) -> tuple[str, ...]:
        return tuple(option.value for option in self.options)

    def label_for(self, value: str) -> str | None:
        for option in self.options:
            if option.value == value:
                return option.label
        return None


def _options(*pairs: tuple[str, str]) -> tuple[Option, ...]:
    return tuple(Option(value=value, label=label) for value, label in pairs)


# =============================================================================
# QUESTION CATALOGUE
# =============================================================================

QUESTIONS: tuple[Question, ...] = (
    # Phase 1: demographics & shopping behaviour
    Question(
        field="age",
        prompt="What is your age group?",
        phase=SurveyPhase.DEMOGRAPHICS,
        required=True,
        options=_options(
            ("under-18", "Under 18"),
            ("18-24", "18-24"),
            ("25-34", "25-34"),
            ("35-44", "35-44"),
            ("45-54", "45-54"),
            ("55-64", "55-64"),
            ("65-over", "65 and over"),
        ),
    ),
    Question(
        field="gender",
        prompt="What is your gender?",
        phase=SurveyPhase.DEMOGRAPHICS,
        options=_options(
            ("male", "Male"),
            ("female", "Female"),
            ("non-binary", "Non-binary"),
            ("prefer-not-to-say", "Prefer not to say"),
        ),
    ),
    Question(
        field="shopping_preference",
        prompt="Do you prefer shopping for clothes online or in-store?",
        phase=SurveyPhase.DEMOGRAPHICS,
        required=True,
        options=_options(
            ("mostly-online", "Mostly online"),
            ("mostly-in-store", "Mostly in-store"),
            ("equal", "Equally online and in-store"),
        ),
    ),
    Question(
        field="online_shopping_frequency",
        prompt="How often do you shop for clothes online?",
        phase=SurveyPhase.DEMOGRAPHICS,
        required=True,
        options=_options(
            ("daily", "Multiple times a week"),
            ("2-3-weekly", "2-3 times a week"),
            ("once-week", "About once a week"),
            ("2-3-monthly", "2-3 times a month"),
            ("monthly", "Once a month"),
            ("few-times-year", "Few times a year"),
        ),
    ),
    # Phase 2: online shopping experience & social media discovery
    Question(
        field="find_clothes",
        prompt="Where do you usually find clothes to buy online?",
        phase=SurveyPhase.SHOPPING_EXPERIENCE,
        required=True,
        options=_options(
            ("brand-retail", "Brand/retailer websites"),
            ("social-media", "Social media"),
            ("indie-indie", "Independent/indie brands"),
            ("marketplace", "Marketplace platforms"),
            ("mixed", "Mix of all the above"),
        ),
    ),
    Question(
        field="social_media_shopping",
        prompt="Have you ever bought clothes you discovered on social media?",
        phase=SurveyPhase.SHOPPING_EXPERIENCE,
        options=_options(
            ("yes-social", "Yes, regularly"),
            ("sometimes-social", "Yes, but occasionally"),
            ("no-social", "No"),
        ),
    ),
    Question(
        field="social_media_platforms",
        prompt="Which platforms do you find clothes on?",
        phase=SurveyPhase.SHOPPING_EXPERIENCE,
        multi=True,
        condition=lambda answers: answers.get("social_media_shopping")
        in ("yes-social", "sometimes-social"),
        options=_options(
            ("instagram", "Instagram"),
            ("tiktok", "TikTok"),
            ("pinterest", "Pinterest"),
            ("youtube", "YouTube"),
            ("facebook", "Facebook"),
            ("twitch", "Twitch"),
            ("other-social", "Other platforms"),
        ),
    ),
    Question(
        field="clothes_fit",
        prompt="How confident are you that clothes bought online will fit?",
        phase=SurveyPhase.SHOPPING_EXPERIENCE,
        options=_options(
            ("very-confident-fit", "Very confident, items usually fit"),
            ("somewhat-confident-fit", "Somewhat confident, hit or miss"),
            ("not-confident-fit", "Not confident, often mis-fit"),
        ),
    ),
    Question(
        field="returns_problem",
        prompt="How often do you return clothes because of fit?",
        phase=SurveyPhase.SHOPPING_EXPERIENCE,
        options=_options(
            ("very-often", "Very often (more than 50% of orders)"),
            ("often", "Often (25-50% of orders)"),
            ("sometimes", "Sometimes (10-25% of orders)"),
            ("rarely", "Rarely (less than 10%)"),
            ("never", "Never"),
        ),
    ),
    Question(
        field="mis_sized_items",
        prompt="Which item types are most often the problem?",
        phase=SurveyPhase.SHOPPING_EXPERIENCE,
        condition=lambda answers: answers.get("returns_problem")
        in ("very-often", "often", "sometimes"),
        options=_options(
            ("jeans", "Jeans/Trousers"),
            ("shirts", "Shirts/Tops"),
            ("jackets", "Jackets/Coats"),
            ("dresses", "Dresses"),
            ("skirts", "Skirts"),
            ("multiple", "Multiple types equally"),
        ),
    ),
    Question(
        field="trust_issues",
        prompt="When buying from indie brands or social media, what concerns you most?",
        phase=SurveyPhase.SHOPPING_EXPERIENCE,
        multi=True,
        condition=lambda answers: answers.get("find_clothes")
        in ("indie-indie", "social-media", "mixed"),
        options=_options(
            ("quality", "Quality might not match photos"),
            ("fit-unknown", "Unknown sizing standards"),
            ("color-diff", "Color might look different in person"),
            ("no-returns", "Difficult or impossible returns"),
            ("scam", "Fear of scams or fraud"),
        ),
    ),
    Question(
        field="color_matching_uncertainty",
        prompt="How often does an item's colour differ from the photos?",
        phase=SurveyPhase.SHOPPING_EXPERIENCE,
        required=True,
        options=_options(
            ("almost-always", "Almost always"),
            ("often", "Often"),
            ("occasionally", "Occasionally"),
            ("rarely", "Rarely"),
            ("never", "Never"),
        ),
    ),
    # Phase 3: virtual try-on & MVP solution
    Question(
        field="image_upload_willingness",
        prompt="Would you upload a photo of yourself to try clothes on virtually?",
        phase=SurveyPhase.VIRTUAL_TRY_ON,
        options=_options(
            ("yes-upload", "Yes, absolutely"),
            ("maybe-upload", "Maybe, depends on accuracy"),
            ("no-upload", "No, I prefer traditional shopping"),
        ),
    ),
    Question(
        field="try_on_from_social_media",
        prompt="Would trying an item on first make you more likely to buy it from social media?",
        phase=SurveyPhase.VIRTUAL_TRY_ON,
        condition=lambda answers: answers.get("image_upload_willingness")
        in ("yes-upload", "maybe-upload"),
        options=_options(
            ("much-more-likely", "Much more likely"),
            ("somewhat-more-likely", "Somewhat more likely"),
            ("no-difference", "No difference"),
        ),
    ),
    Question(
        field="try_on_use_frequency",
        prompt="How often would you use a virtual try-on tool?",
        phase=SurveyPhase.VIRTUAL_TRY_ON,
        condition=lambda answers: answers.get("image_upload_willingness") == "yes-upload",
        options=_options(
            ("every-purchase", "For every online purchase"),
            ("most-purchases", "For most online purchases"),
            ("occasional", "Occasionally for uncertain items"),
            ("rarely", "Rarely"),
        ),
    ),
    Question(
        field="try_on_body_type",
        prompt="How important is an accurate representation of your body shape?",
        phase=SurveyPhase.VIRTUAL_TRY_ON,
        condition=lambda answers: answers.get("image_upload_willingness") == "yes-upload",
        options=_options(
            ("critical-body", "Critical"),
            ("important-body", "Important, general fit is enough"),
            ("nice-body", "Nice to have"),
        ),
    ),
    Question(
        field="try_on_concerns",
        prompt="What concerns you most about uploading photos for virtual try-on?",
        phase=SurveyPhase.VIRTUAL_TRY_ON,
        multi=True,
        condition=lambda answers: answers.get("image_upload_willingness") == "yes-upload",
        options=_options(
            ("privacy", "Privacy"),
            ("accuracy", "Accuracy"),
            ("embarrassment", "Embarrassment"),
            ("data-misuse", "Data misuse"),
            ("none", "No major concerns"),
        ),
    ),
    Question(
        field="speed_expectation",
        prompt="How long would you wait for a try-on result?",
        phase=SurveyPhase.VIRTUAL_TRY_ON,
        required=True,
        options=_options(
            ("instant", "Instant (less than 5 seconds)"),
            ("quick", "Quick (5-30 seconds)"),
            ("moderate", "Moderate (30-60 seconds)"),
            ("patient", "I can wait (1-2 minutes)"),
        ),
    ),
    Question(
        field="skin_tone_accuracy",
        prompt="How important is accurate skin tone rendering?",
        phase=SurveyPhase.VIRTUAL_TRY_ON,
        required=True,
        options=_options(
            ("critical", "Critical, dealbreaker if not accurate"),
            ("important", "Important, would still use it"),
            ("nice-to-have", "Nice to have"),
        ),
    ),
    Question(
        field="virtual_try_on",
        prompt="Have you used a virtual try-on feature before?",
        phase=SurveyPhase.VIRTUAL_TRY_ON,
        required=True,
        options=_options(
            ("yes", "Yes"),
            ("no", "No"),
        ),
    ),
    Question(
        field="ar_realism",
        prompt="How realistic was the try-on experience?",
        phase=SurveyPhase.VIRTUAL_TRY_ON,
        condition=lambda answers: answers.get("virtual_try_on") == "yes",
        options=_options(
            ("matched-well", "Very realistic and accurate"),
            ("close", "Somewhat realistic"),
            ("not-accurate", "Not realistic or helpful"),
        ),
    ),
    Question(
        field="purchase_confidence",
        prompt="How likely are you to use an app with virtual try-on?",
        phase=SurveyPhase.VIRTUAL_TRY_ON,
        required=True,
        options=_options(
            ("very-confident", "Very likely, would use it regularly"),
            ("somewhat-confident", "Somewhat likely, would try it"),
            ("not-confident", "Unlikely, not for me"),
        ),
    ),
)

_QUESTIONS_BY_FIELD: dict[str, Question] = {q.field: q for q in QUESTIONS}

CANONICAL_AGE_TOKENS: tuple[str, ...] = _QUESTIONS_BY_FIELD["age"].values

REQUIRED_FIELDS: tuple[str, ...] = tuple(q.field for q in QUESTIONS if q.required)


# =============================================================================
# LOOKUPS
# =============================================================================


def get_question(field: str) -> Question | None:
    """Return the question bound to a ResponseRecord attribute, if any."""
    return _QUESTIONS_BY_FIELD.get(field)


def questions_for_phase(phase: SurveyPhase) -> list[Question]:
    return [q for q in QUESTIONS if q.phase == phase]


def option_label(field: str, value: str) -> str:
    """
    Display label for an answer value.

    Unknown fields or values fall back to replacing hyphens with spaces.
    """
    question = _QUESTIONS_BY_FIELD.get(field)
    label = question.label_for(value) if question else None
    return label if label is not None else value.replace("-", " ")


def is_visible(question: Question, answers: Answers) -> bool:
    """Whether a question is shown given the answers collected so far."""
    if question.condition is None:
        return True
    return bool(question.condition(answers))


def answers_from_record(record: ResponseRecord) -> dict[str, Any]:
    """Attribute-keyed answers of a record, for evaluating conditions."""
    return {q.field: getattr(record, q.field) for q in QUESTIONS}


# =============================================================================
# WRITE-BOUNDARY VALIDATION
# =============================================================================


def find_submission_problems(record: ResponseRecord) -> tuple[list[str], dict[str, Any]]:
    """
    Collect missing required fields and out-of-domain values.

    Returns:
        (missing_fields, invalid_fields) keyed by stored document key
    """
    answers = answers_from_record(record)
    missing: list[str] = []
    invalid: dict[str, Any] = {}

    for question in QUESTIONS:
        value = answers[question.field]
        if question.required and is_visible(question, answers) and not record.answered(question.field):
            missing.append(question.key)
            continue

        allowed = set(question.values)
        if question.multi:
            bad = [item for item in value if item not in allowed]
            if bad:
                invalid[question.key] = bad
        elif value and value not in allowed:
            invalid[question.key] = value

    return missing, invalid


def validate_submission(record: ResponseRecord) -> ResponseRecord:
    """
    Validate a submission against the question bank.

    Args:
        record: Parsed submission

    Returns:
        The same record when valid

    Raises:
        SubmissionValidationError: If required answers are missing or a value
            is outside its question's options
    """
    missing, invalid = find_submission_problems(record)
    if missing or invalid:
        parts = []
        if missing:
            parts.append(f"missing required answers: {', '.join(missing)}")
        if invalid:
            parts.append(f"invalid answers: {', '.join(sorted(invalid))}")
        raise SubmissionValidationError(
            f"Submission rejected ({'; '.join(parts)})",
            missing_fields=missing,
            invalid_fields=invalid,
        )
    return record

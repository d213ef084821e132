"""
Module: synthetic_generator

Purpose: Generate question-bank-valid survey responses for demos and tests.

Generates responses with:
- Deterministic generation with seed for reproducibility
- Visibility conditions honoured (hidden questions stay unanswered)
- Respondent archetypes so segments and funnel stages are all populated
- Completion times spread over a configurable date range
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import numpy as np

from tryon_insights.data.question_bank import QUESTIONS, Question, is_visible
from tryon_insights.data.schemas import ResponseRecord


# =============================================================================
# RESPONDENT ARCHETYPES
# =============================================================================


class RespondentArchetype:
    """Respondent archetypes driving answer preferences."""

    ENTHUSIAST = "enthusiast"
    SOCIAL_SHOPPER = "social_shopper"
    CAUTIOUS = "cautious"
    TRADITIONAL = "traditional"


ARCHETYPE_WEIGHTS = {
    RespondentArchetype.ENTHUSIAST: 0.25,
    RespondentArchetype.SOCIAL_SHOPPER: 0.30,
    RespondentArchetype.CAUTIOUS: 0.25,
    RespondentArchetype.TRADITIONAL: 0.20,
}

# Preferred answers per archetype; other options remain possible
ARCHETYPE_PREFERENCES: dict[str, dict[str, tuple[str, ...]]] = {
    RespondentArchetype.ENTHUSIAST: {
        "image_upload_willingness": ("yes-upload",),
        "virtual_try_on": ("yes",),
        "purchase_confidence": ("very-confident",),
        "social_media_shopping": ("yes-social", "sometimes-social"),
    },
    RespondentArchetype.SOCIAL_SHOPPER: {
        "social_media_shopping": ("yes-social", "sometimes-social"),
        "find_clothes": ("social-media", "mixed"),
        "image_upload_willingness": ("maybe-upload", "yes-upload"),
    },
    RespondentArchetype.CAUTIOUS: {
        "virtual_try_on": ("no",),
        "find_clothes": ("indie-indie", "mixed"),
        "image_upload_willingness": ("maybe-upload", "no-upload"),
        "purchase_confidence": ("somewhat-confident", "not-confident"),
    },
    RespondentArchetype.TRADITIONAL: {
        "shopping_preference": ("mostly-in-store",),
        "social_media_shopping": ("no-social",),
        "image_upload_willingness": ("no-upload",),
        "purchase_confidence": ("not-confident",),
    },
}

PREFERENCE_PROBABILITY = 0.75
OPTIONAL_ANSWER_PROBABILITY = 0.9

USER_AGENTS = [
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 Mobile/15E148",
    "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 Chrome/120.0 Mobile Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) AppleWebKit/605.1.15 Version/17.0 Safari/605.1.15",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 Chrome/120.0 Safari/537.36",
]


# =============================================================================
# SYNTHETIC RESPONSE GENERATOR
# =============================================================================


class SyntheticResponseGenerator:
    """
    Generate survey responses that would pass write-boundary validation.

    Usage:
        generator = SyntheticResponseGenerator(seed=42)
        responses = generator.generate(200)
    """

    def __init__(self, seed: int = 42) -> None:
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def _choice(self, values: tuple[str, ...] | list[str]) -> str:
        return str(values[int(self.rng.integers(len(values)))])

    def _pick_archetype(self) -> str:
        names = list(ARCHETYPE_WEIGHTS)
        weights = np.array([ARCHETYPE_WEIGHTS[name] for name in names])
        return str(self.rng.choice(names, p=weights / weights.sum()))

    def _answer(self, question: Question, archetype: str) -> Any:
        if question.multi:
            values = list(question.values)
            k = int(self.rng.integers(1, min(3, len(values)) + 1))
            picked = self.rng.choice(len(values), size=k, replace=False)
            return [values[i] for i in sorted(picked)]

        preferred = ARCHETYPE_PREFERENCES.get(archetype, {}).get(question.field)
        if preferred and self.rng.random() < PREFERENCE_PROBABILITY:
            return self._choice(preferred)
        return self._choice(question.values)

    def generate_answers(self, archetype: str | None = None) -> dict[str, Any]:
        """
        Answers for one respondent, keyed by ResponseRecord attribute.

        Questions are answered in catalogue order so that visibility
        conditions see earlier answers. Optional questions are sometimes
        skipped.
        """
        archetype = archetype or self._pick_archetype()
        answers: dict[str, Any] = {}
        for question in QUESTIONS:
            if not is_visible(question, answers):
                continue
            if not question.required and self.rng.random() > OPTIONAL_ANSWER_PROBABILITY:
                continue
            answers[question.field] = self._answer(question, archetype)
        return answers

    def generate(
        self,
        n_responses: int,
        *,
        date_range: tuple[datetime, datetime] | None = None,
    ) -> list[ResponseRecord]:
        """
        Generate a batch of stored-looking responses.

        Args:
            n_responses: Number of responses
            date_range: Window for completion times (defaults to 30 days
                from 2025-01-01 UTC)

        Returns:
            List of ResponseRecord sorted by completion time
        """
        start, end = date_range or (
            datetime(2025, 1, 1, tzinfo=timezone.utc),
            datetime(2025, 1, 31, tzinfo=timezone.utc),
        )
        span_seconds = max(int((end - start).total_seconds()), 1)

        records = []
        for _ in range(n_responses):
            answers = self.generate_answers()
            completed_at = start + timedelta(seconds=int(self.rng.integers(span_seconds)))
            records.append(
                ResponseRecord(
                    response_id=uuid.UUID(bytes=self.rng.bytes(16)).hex,
                    created_at=completed_at,
                    completed_at=completed_at,
                    user_agent=self._choice(USER_AGENTS),
                    **answers,
                )
            )

        return sorted(records, key=lambda r: r.completed_at or start)


def generate_responses(n_responses: int = 100, seed: int = 42) -> list[ResponseRecord]:
    """Convenience wrapper for a seeded batch of responses."""
    return SyntheticResponseGenerator(seed=seed).generate(n_responses)

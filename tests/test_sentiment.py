"""
Tests for the positive-answer sentiment classifier.
"""

import pytest

from tryon_insights.features.sentiment import (
    DEFAULT_CLASSIFIER,
    POSITIVE_LEXICON,
    SentimentClassifier,
    is_positive,
)


class TestIsPositive:
    """Tests for is_positive with the default lexicon."""

    @pytest.mark.parametrize(
        "value",
        [
            "yes-upload",
            "maybe-upload",
            "yes-social",
            "sometimes-social",
            "very-confident",
            "confident",
            "very-interested",
            "interested",
            "much-more-likely",
            "somewhat-more-likely",
            "yes",
            "definitely",
            "very-willing",
            "willing",
            "extremely-important",
            "very-important",
            "important",
            "online-only",
            "online-primarily",
            "both-equally",
        ],
    )
    def test_lexicon_values_are_positive(self, value: str) -> None:
        assert is_positive(value) is True

    @pytest.mark.parametrize("value", [None, ""])
    def test_absent_is_never_positive(self, value: str | None) -> None:
        assert is_positive(value) is False

    @pytest.mark.parametrize(
        "value",
        ["no", "no-upload", "no-social", "not-confident", "somewhat-confident", "not-important"],
    )
    def test_negative_answers(self, value: str) -> None:
        assert is_positive(value) is False

    def test_substring_is_not_enough(self) -> None:
        """Values containing a positive token are not positive themselves."""
        assert is_positive("not-confident-fit") is False
        assert is_positive("yes-but-no") is False

    def test_case_insensitive(self) -> None:
        assert is_positive("YES") is True
        assert is_positive("Very-Confident") is True

    def test_unknown_value_is_neutral(self) -> None:
        assert is_positive("something-unexpected") is False

    def test_stable_across_calls(self) -> None:
        results = {is_positive("yes-social") for _ in range(5)}
        assert results == {True}


class TestSentimentClassifier:
    """Tests for the SentimentClassifier class."""

    def test_default_uses_full_lexicon(self) -> None:
        assert DEFAULT_CLASSIFIER.lexicon == POSITIVE_LEXICON

    def test_custom_lexicon(self) -> None:
        classifier = SentimentClassifier({"Somewhat-Confident"})

        assert classifier.is_positive("somewhat-confident") is True
        assert classifier.is_positive("yes") is False

    def test_callable(self) -> None:
        assert DEFAULT_CLASSIFIER("yes") is True

    def test_repr(self) -> None:
        assert "lexicon_size" in repr(DEFAULT_CLASSIFIER)

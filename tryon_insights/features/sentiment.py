"""
Module: sentiment

Purpose: Classify a single survey answer as a positive signal.

A value is positive only when its lower-cased form is an exact member of the
positive lexicon. Matching is exact, so "not-confident" is never positive even
though it contains "confident".

Key Functions:
- is_positive: Classify with the default lexicon
- SentimentClassifier: Classifier bound to a custom lexicon
"""

from typing import Iterable

# Favourable answers across every field the classifier is applied to
UPLOAD_WILLINGNESS_POSITIVE = frozenset({"yes-upload", "maybe-upload"})
SOCIAL_SHOPPING_POSITIVE = frozenset({"yes-social", "sometimes-social"})
PURCHASE_CONFIDENCE_POSITIVE = frozenset({"very-confident", "confident"})
TRY_ON_INTEREST_POSITIVE = frozenset({"very-interested", "interested"})
TRY_ON_FROM_SOCIAL_POSITIVE = frozenset({"much-more-likely", "somewhat-more-likely"})
GENERIC_AFFIRMATIVES = frozenset({"yes", "definitely", "very-willing", "willing"})
IMPORTANCE_POSITIVE = frozenset({"extremely-important", "very-important", "important"})
SHOPPING_CHANNEL_POSITIVE = frozenset({"online-only", "online-primarily", "both-equally"})

POSITIVE_LEXICON: frozenset[str] = (
    UPLOAD_WILLINGNESS_POSITIVE
    | SOCIAL_SHOPPING_POSITIVE
    | PURCHASE_CONFIDENCE_POSITIVE
    | TRY_ON_INTEREST_POSITIVE
    | TRY_ON_FROM_SOCIAL_POSITIVE
    | GENERIC_AFFIRMATIVES
    | IMPORTANCE_POSITIVE
    | SHOPPING_CHANNEL_POSITIVE
)


class SentimentClassifier:
    """Exact-match positive-answer classifier."""

    def __init__(self, lexicon: Iterable[str] = POSITIVE_LEXICON) -> None:
        self.lexicon = frozenset(token.lower() for token in lexicon)

    def is_positive(self, value: str | None) -> bool:
        """
        Classify one answer.

        Args:
            value: Raw answer, possibly absent

        Returns:
            True only for a lexicon member; absent, empty and unknown
            values are never positive
        """
        if not value:
            return False
        return value.strip().lower() in self.lexicon

    __call__ = is_positive

    def __repr__(self) -> str:
        return f"SentimentClassifier(lexicon_size={len(self.lexicon)})"


DEFAULT_CLASSIFIER = SentimentClassifier()


def is_positive(value: str | None) -> bool:
    """Classify an answer with the default lexicon."""
    return DEFAULT_CLASSIFIER.is_positive(value)

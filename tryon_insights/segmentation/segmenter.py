"""
Module: segmenter

Purpose: Partition survey responses into mutually exclusive user cohorts.

Key Functions:
- segment_responses: Assign every response to at most one cohort
- SegmentRule: Base class for an ordered cohort rule

Architecture Notes:
- Rules are evaluated in order and the first match wins, so cohorts are
  disjoint by construction
- Responses matching no rule are reported in an explicit "unclassified"
  cohort so that cohort counts always sum to the total
- Cohorts hold member indices into the input, never the records themselves
"""

from abc import ABC, abstractmethod
from typing import Sequence

from tryon_insights.data.schemas import Cohort, ResponseRecord, SegmentationResult
from tryon_insights.features.aggregators import percentage
from tryon_insights.features.sentiment import DEFAULT_CLASSIFIER, SentimentClassifier


class SegmentRule(ABC):
    """Base class for one cohort rule."""

    def __init__(self, classifier: SentimentClassifier = DEFAULT_CLASSIFIER) -> None:
        self.classifier = classifier

    @property
    @abstractmethod
    def key(self) -> str:
        """Machine name of the cohort."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name of the cohort."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        ...

    @abstractmethod
    def matches(self, record: ResponseRecord) -> bool:
        """
        Whether a response satisfies this rule on its own.

        Exclusion of responses claimed by earlier rules is handled by
        segment_responses, not here.
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(key={self.key!r})"


class PowerUserRule(SegmentRule):
    """Willing to upload, positive on try-on and confident to buy."""

    @property
    def key(self) -> str:
        return "power_users"

    @property
    def name(self) -> str:
        return "Power Users"

    @property
    def description(self) -> str:
        return "Willing to upload photos, positive on virtual try-on and confident to purchase"

    def matches(self, record: ResponseRecord) -> bool:
        positive = self.classifier.is_positive
        return (
            positive(record.image_upload_willingness)
            and positive(record.virtual_try_on)
            and positive(record.purchase_confidence)
        )


class EarlyAdopterRule(SegmentRule):
    """Positive on try-on and already shopping through social media."""

    @property
    def key(self) -> str:
        return "early_adopters"

    @property
    def name(self) -> str:
        return "Early Adopters"

    @property
    def description(self) -> str:
        return "Positive on virtual try-on and already shopping through social media"

    def matches(self, record: ResponseRecord) -> bool:
        positive = self.classifier.is_positive
        return positive(record.virtual_try_on) and positive(record.social_media_shopping)


class SkepticRule(SegmentRule):
    """Not positive on try-on and reports at least one trust issue."""

    @property
    def key(self) -> str:
        return "skeptics"

    @property
    def name(self) -> str:
        return "Skeptics"

    @property
    def description(self) -> str:
        return "Not positive on virtual try-on and reporting trust issues with online shopping"

    def matches(self, record: ResponseRecord) -> bool:
        return not self.classifier.is_positive(record.virtual_try_on) and record.answered(
            "trust_issues"
        )


class PotentialConvertRule(SegmentRule):
    """Social shopper or confident buyer not claimed by an earlier cohort."""

    @property
    def key(self) -> str:
        return "potential_converts"

    @property
    def name(self) -> str:
        return "Potential Converts"

    @property
    def description(self) -> str:
        return "Shops through social media or is confident to purchase, but not yet engaged with try-on"

    def matches(self, record: ResponseRecord) -> bool:
        positive = self.classifier.is_positive
        return positive(record.social_media_shopping) or positive(record.purchase_confidence)


UNCLASSIFIED_KEY = "unclassified"
UNCLASSIFIED_NAME = "Unclassified"
UNCLASSIFIED_DESCRIPTION = "Matched none of the cohort rules"


def default_rules(classifier: SentimentClassifier = DEFAULT_CLASSIFIER) -> list[SegmentRule]:
    """The four cohort rules in evaluation order."""
    return [
        PowerUserRule(classifier),
        EarlyAdopterRule(classifier),
        SkepticRule(classifier),
        PotentialConvertRule(classifier),
    ]


def assign_cohorts(
    records: Sequence[ResponseRecord],
    rules: Sequence[SegmentRule],
) -> list[str]:
    """
    Cohort key for each response, in input order.

    Each response takes the key of the first matching rule, or
    UNCLASSIFIED_KEY when none match.
    """
    assignments: list[str] = []
    for record in records:
        assigned = UNCLASSIFIED_KEY
        for rule in rules:
            if rule.matches(record):
                assigned = rule.key
                break
        assignments.append(assigned)
    return assignments


def segment_responses(
    records: Sequence[ResponseRecord],
    *,
    classifier: SentimentClassifier = DEFAULT_CLASSIFIER,
) -> SegmentationResult:
    """
    Segment responses into power users, early adopters, skeptics and
    potential converts.

    Args:
        records: Full response collection
        classifier: Sentiment classifier shared by all rules

    Returns:
        SegmentationResult with disjoint cohorts plus the unclassified rest
    """
    rules = default_rules(classifier)
    assignments = assign_cohorts(records, rules)
    total = len(records)

    members: dict[str, list[int]] = {rule.key: [] for rule in rules}
    members[UNCLASSIFIED_KEY] = []
    for index, key in enumerate(assignments):
        members[key].append(index)

    def build(key: str, name: str, description: str) -> Cohort:
        indices = members[key]
        return Cohort(
            key=key,
            name=name,
            description=description,
            count=len(indices),
            percentage=percentage(len(indices), total),
            member_indices=indices,
        )

    cohorts = {rule.key: build(rule.key, rule.name, rule.description) for rule in rules}

    return SegmentationResult(
        total=total,
        power_users=cohorts["power_users"],
        early_adopters=cohorts["early_adopters"],
        skeptics=cohorts["skeptics"],
        potential_converts=cohorts["potential_converts"],
        unclassified=build(UNCLASSIFIED_KEY, UNCLASSIFIED_NAME, UNCLASSIFIED_DESCRIPTION),
    )


def cohort_members(records: Sequence[ResponseRecord], cohort: Cohort) -> list[ResponseRecord]:
    """Resolve a cohort's member indices against the collection it came from."""
    return [records[index] for index in cohort.member_indices]

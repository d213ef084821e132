"""
Module: aggregators

Purpose: Group-by-count-and-percentage reducers over survey responses.

Pure functions used by the metrics pipeline for every categorical field.
Percentages are always taken against the full response count, rounded half
up to whole numbers, and are 0 when there are no responses.
"""

from collections import Counter
from datetime import datetime, timezone, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Literal, Sequence

from tryon_insights.data.question_bank import option_label
from tryon_insights.data.schemas import DailyCount, DistributionEntry, ResponseRecord

FieldValue = str | list[str] | None
FieldSelector = Callable[[ResponseRecord], FieldValue]
LabelFormatter = Callable[[str], str]
SortOrder = Literal["first_seen", "count"]


def percentage(count: int, total: int) -> int:
    """Whole-number share of total, rounded half up; 0 when total is 0."""
    if total <= 0:
        return 0
    value = (Decimal(count) * 100 / Decimal(total)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(value)


def hyphen_to_space(value: str) -> str:
    return value.replace("-", " ")


def field_selector(field: str) -> FieldSelector:
    """Selector reading one ResponseRecord attribute."""

    def select(record: ResponseRecord) -> FieldValue:
        return getattr(record, field)

    select.__name__ = f"select_{field}"
    return select


def count_values(
    records: Sequence[ResponseRecord],
    selector: FieldSelector,
) -> Counter[str]:
    """
    Count answers per category, keeping first-seen order.

    Single values count once per record; every distinct element of a list
    value counts independently, so a record can contribute to several
    categories. Absent and empty values are skipped.
    """
    counts: Counter[str] = Counter()
    for record in records:
        value = selector(record)
        if value is None:
            continue
        if isinstance(value, str):
            if value:
                counts[value] += 1
            continue
        # A repeated element within one record counts once
        for item in dict.fromkeys(value):
            if item:
                counts[item] += 1
    return counts


def aggregate_distribution(
    records: Sequence[ResponseRecord],
    selector: FieldSelector | str,
    *,
    label: LabelFormatter | None = None,
    sort: SortOrder = "first_seen",
    category_order: Sequence[str] | None = None,
    limit: int | None = None,
) -> list[DistributionEntry]:
    """
    Build a count/percentage table for one field.

    List values count each distinct element once per record, so a repeated
    element within one answer is not double counted and every percentage
    stays within 0..100. Distinct elements still count independently.

    Args:
        records: Full response collection; its size is the percentage base
        selector: Attribute name or callable returning a value or list
        label: Display formatter; never changes the grouping key. Defaults to
            the question bank label for attribute selectors, otherwise a
            hyphen-to-space transform
        sort: "first_seen" keeps first-occurrence order, "count" sorts
            descending with ties kept in first-seen order
        category_order: Explicit category order; unlisted categories follow
            in first-seen order. Ignored when sort="count"
        limit: Keep only the first N entries after sorting

    Returns:
        List of DistributionEntry
    """
    if isinstance(selector, str):
        field = selector
        selector = field_selector(field)
        if label is None:
            label = lambda value: option_label(field, value)  # noqa: E731
    label = label or hyphen_to_space

    total = len(records)
    counts = count_values(records, selector)
    categories = list(counts)

    if sort == "count":
        # sorted() is stable, so ties keep first-seen order
        categories = sorted(categories, key=lambda category: -counts[category])
    elif category_order is not None:
        rank = {category: index for index, category in enumerate(category_order)}
        categories = sorted(categories, key=lambda category: rank.get(category, len(rank)))

    if limit is not None:
        categories = categories[:limit]

    return [
        DistributionEntry(
            category=category,
            label=label(category),
            count=counts[category],
            percentage=percentage(counts[category], total),
        )
        for category in categories
    ]


def top_categories(
    records: Sequence[ResponseRecord],
    selector: FieldSelector | str,
    *,
    limit: int,
) -> list[DistributionEntry]:
    """Most frequent categories, descending by count."""
    return aggregate_distribution(records, selector, sort="count", limit=limit)


def count_matching(
    records: Sequence[ResponseRecord],
    predicate: Callable[[ResponseRecord], bool],
) -> int:
    return sum(1 for record in records if predicate(record))


def aggregate_by_day(
    records: Sequence[ResponseRecord],
    *,
    tz: tzinfo = timezone.utc,
) -> list[DailyCount]:
    """
    Count responses per calendar day of completion.

    Naive timestamps are taken as UTC before converting to `tz`. Records with
    no timestamp are skipped. Output is ascending by date.
    """
    counts: Counter[str] = Counter()
    for record in records:
        timestamp = record.timestamp
        if timestamp is None:
            continue
        counts[_day_key(timestamp, tz)] += 1

    return [DailyCount(date=day, count=counts[day]) for day in sorted(counts)]


def _day_key(timestamp: datetime, tz: tzinfo) -> str:
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(tz).date().isoformat()

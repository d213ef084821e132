"""
Module: age_buckets

Purpose: Normalize heterogeneous age answers into fixed age-group labels.

Canonical survey tokens map directly. Anything else is parsed as a numeric
range (bucketed by its lower bound) or a single embedded number. Unparseable
or absent input maps to "Unknown"; bucketing never raises.
"""

import re

UNKNOWN_AGE = "Unknown"

AGE_BUCKETS: tuple[str, ...] = ("<18", "18-24", "25-34", "35-44", "45-54", "55-64", "65+")

# Ordered for presentation, Unknown last
AGE_BUCKET_ORDER: tuple[str, ...] = AGE_BUCKETS + (UNKNOWN_AGE,)

CANONICAL_AGE_MAP: dict[str, str] = {
    "under-18": "<18",
    "18-24": "18-24",
    "25-34": "25-34",
    "35-44": "35-44",
    "45-54": "45-54",
    "55-64": "55-64",
    "65-over": "65+",
}

# Exclusive upper bounds of each band
_AGE_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (18, "<18"),
    (25, "18-24"),
    (35, "25-34"),
    (45, "35-44"),
    (55, "45-54"),
    (65, "55-64"),
)

_RANGE_PATTERN = re.compile(r"(\d{1,3})\s*-\s*(\d{1,3})")
_NUMBER_PATTERN = re.compile(r"\d{1,3}")


def bucket_for_number(age: int) -> str:
    """Band a whole-number age."""
    for upper, label in _AGE_THRESHOLDS:
        if age < upper:
            return label
    return "65+"


def bucket_age(age: str | None) -> str:
    """
    Map an age answer to an age-group label.

    Args:
        age: Canonical token ("under-18", "65-over", ...), a range ("34-40"),
            a free-text string with a number ("52", "34-something"), or None

    Returns:
        One of AGE_BUCKET_ORDER
    """
    if not age:
        return UNKNOWN_AGE

    token = age.strip().lower()
    if token in CANONICAL_AGE_MAP:
        return CANONICAL_AGE_MAP[token]

    range_match = _RANGE_PATTERN.search(token)
    if range_match:
        return bucket_for_number(int(range_match.group(1)))

    number_match = _NUMBER_PATTERN.search(token)
    if number_match:
        return bucket_for_number(int(number_match.group(0)))

    return UNKNOWN_AGE

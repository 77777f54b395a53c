"""Static pattern libraries for the rule-based extractors."""

from __future__ import annotations

import re
from typing import Dict, List, Tuple

from noteparse.extraction.models import Direction, SignalType

# Typographic apostrophes are accepted alongside ASCII ones ("I’ll").
_APOS = "['’]"

# Applied in this order; every template scans the full text, overlaps are kept.
# The ``verb`` group is the second capture of each template and is only reported as
# an action verb when it is in ACTION_VERBS. In the inbound template it captures the
# "'ll" / " will" contraction, so inbound commitments never carry an action verb.
COMMITMENT_PATTERNS: List[Tuple[re.Pattern[str], Direction]] = [
    (
        re.compile(rf"\b(?P<trigger>I{_APOS}ll|I will|gonna|going to)\s+(?P<verb>\w+)", re.IGNORECASE),
        "outbound",
    ),
    (
        re.compile(
            rf"\b(?P<trigger>you(?P<verb>{_APOS}ll| will)|can you|could you)\s+\w+",
            re.IGNORECASE,
        ),
        "inbound",
    ),
    (
        re.compile(
            rf"\b(?P<trigger>we{_APOS}ll|we will|let{_APOS}s|let us)\s+(?P<verb>\w+)",
            re.IGNORECASE,
        ),
        "mutual",
    ),
    (
        re.compile(r"\b(?P<trigger>promised|agreed|committed)\s+to\s+(?P<verb>\w+)", re.IGNORECASE),
        "mutual",
    ),
    (
        re.compile(r"\b(?P<trigger>need to|have to|must)\s+(?P<verb>\w+)", re.IGNORECASE),
        "outbound",
    ),
]

# Category order matters: a keyword listed under several categories yields one
# signal per category, in this order.
RELATIONSHIP_SIGNALS: Dict[SignalType, List[str]] = {
    "professional": [
        "boss",
        "manager",
        "supervisor",
        "colleague",
        "coworker",
        "employee",
        "team member",
        "client",
        "customer",
        "vendor",
        "partner",
        "CEO",
        "CTO",
    ],
    "personal": [
        "friend",
        "close friend",
        "best friend",
        "buddy",
        "pal",
        "family",
        "brother",
        "sister",
        "mom",
        "dad",
        "cousin",
        "aunt",
        "uncle",
    ],
    "transactional": [
        "client",
        "customer",
        "vendor",
        "supplier",
        "contractor",
        "consultant",
    ],
    "hierarchical": [
        "mentor",
        "mentee",
        "teacher",
        "student",
        "advisor",
        "boss",
        "subordinate",
    ],
    "temporal": [
        "old friend",
        "new contact",
        "former colleague",
        "ex-",
        "previous",
    ],
}

ACTION_VERBS: frozenset[str] = frozenset(
    {
        "call",
        "email",
        "text",
        "message",
        "meet",
        "schedule",
        "send",
        "share",
        "review",
        "follow up",
        "check in",
        "connect",
        "reach out",
        "touch base",
    }
)

PHONE_PATTERN = re.compile(r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b")
PHONE_SEPARATORS = re.compile(r"[-.]")

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")


def keyword_pattern(keyword: str) -> re.Pattern[str]:
    """Case-insensitive whole-word pattern for a relationship keyword."""
    return re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE)


SIGNAL_PATTERNS: List[Tuple[SignalType, str, re.Pattern[str]]] = [
    (signal_type, keyword, keyword_pattern(keyword))
    for signal_type, keywords in RELATIONSHIP_SIGNALS.items()
    for keyword in keywords
]


# ---------------------------------------------------------------------------
# Date vocabulary
# ---------------------------------------------------------------------------

MONTHS: Dict[str, int] = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

WEEKDAYS: Dict[str, int] = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}

NUMBER_WORDS: Dict[str, int] = {
    "a": 1,
    "an": 1,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
}

_MONTH_RE = (
    r"(?P<month>jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?"
    r"|aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?"
)
_DAY_RE = r"(?P<day>\d{1,2})(?:st|nd|rd|th)?"
_YEAR_RE = r"(?P<year>\d{4})"
_WEEKDAY_RE = r"(?P<weekday>" + "|".join(WEEKDAYS) + r")"
_COUNT_RE = r"(?P<count>\d+|" + "|".join(NUMBER_WORDS) + r")"
_UNIT_RE = r"(?P<unit>day|week|month|year)s?"

# Each rule name selects a resolver in the date extractor.
DATE_PATTERNS: List[Tuple[str, re.Pattern[str]]] = [
    ("iso", re.compile(r"\b(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})\b")),
    (
        "numeric",
        re.compile(r"\b(?P<month>\d{1,2})/(?P<day>\d{1,2})(?:/(?P<year>\d{4}|\d{2}))?\b"),
    ),
    (
        "month_day",
        re.compile(rf"\b{_MONTH_RE}\s+{_DAY_RE}(?:,?\s+{_YEAR_RE})?\b", re.IGNORECASE),
    ),
    (
        "day_month",
        re.compile(
            rf"\b{_DAY_RE}\s+(?:of\s+)?{_MONTH_RE}(?:,?\s+{_YEAR_RE})?\b", re.IGNORECASE
        ),
    ),
    (
        "relative_day",
        re.compile(r"\b(?P<word>today|tonight|tomorrow|yesterday)\b", re.IGNORECASE),
    ),
    (
        "relative_unit",
        re.compile(r"\b(?P<modifier>next|last|this)\s+(?P<unit>week|month|year)\b", re.IGNORECASE),
    ),
    (
        "weekday",
        re.compile(rf"\b(?:(?P<modifier>next|last|this)\s+)?{_WEEKDAY_RE}\b", re.IGNORECASE),
    ),
    ("offset_ahead", re.compile(rf"\bin\s+{_COUNT_RE}\s+{_UNIT_RE}\b", re.IGNORECASE)),
    ("offset_ago", re.compile(rf"\b{_COUNT_RE}\s+{_UNIT_RE}\s+ago\b", re.IGNORECASE)),
    (
        "time",
        re.compile(
            r"\bat\s+(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?\s*(?P<ampm>a\.m\.|p\.m\.|am\b|pm\b)",
            re.IGNORECASE,
        ),
    ),
]

# Optional time immediately following a date expression.
TIME_SUFFIX_PATTERN = re.compile(
    r"\s+(?:at\s+)?(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?\s*(?P<ampm>a\.m\.|p\.m\.|am\b|pm\b)",
    re.IGNORECASE,
)

FOUR_DIGIT_YEAR = re.compile(r"\d{4}")

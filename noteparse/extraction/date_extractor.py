"""Natural-language date extraction.

Date expressions are located with the regular expressions in
:mod:`noteparse.extraction.patterns` and resolved against a reference instant with
``dateutil`` calendar arithmetic. Both absolute ("Jan 15", "2025-01-15") and relative
("next Friday", "in two weeks", "tomorrow at 3pm") expressions are supported.

Expressions without an explicit time resolve to the configured implied hour (noon by
default) in the configured time zone. Overlapping candidates keep the leftmost match,
then the longest one. Expressions that resolve outside the supported calendar
range (e.g. "in 99999 years") are skipped.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import List, Optional, Protocol, Sequence
from zoneinfo import ZoneInfo

from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta

from noteparse.extraction.models import DateEntity, DateMetadata
from noteparse.extraction.patterns import (
    DATE_PATTERNS,
    FOUR_DIGIT_YEAR,
    MONTHS,
    NUMBER_WORDS,
    TIME_SUFFIX_PATTERN,
    WEEKDAYS,
)
from noteparse.utils.config import DateConfig

_WEEKDAY_OBJECTS = (MO, TU, WE, TH, FR, SA, SU)
_RELATIVE_DAYS = {"today": 0, "tonight": 0, "tomorrow": 1, "yesterday": -1}
_MODIFIER_STEP = {"next": 1, "last": -1, "this": 0}


@dataclass(frozen=True)
class DateMatch:
    """A date expression located in text and resolved to an aware datetime."""

    text: str
    start: int
    moment: datetime

    @property
    def end(self) -> int:
        return self.start + len(self.text)


class DateParser(Protocol):
    """Capability: find and resolve natural-language date expressions."""

    def parse(self, text: str, reference: datetime) -> List[DateMatch]: ...


@dataclass(frozen=True)
class _Candidate:
    rule: str
    match: re.Match[str]
    start: int
    end: int
    time_match: Optional[re.Match[str]]


class RuleBasedDateParser:
    """Regex scanner plus dateutil resolution of date expressions."""

    def __init__(self, config: Optional[DateConfig] = None) -> None:
        self.config = config or DateConfig()
        self.tz = ZoneInfo(self.config.timezone)

    def parse(self, text: str, reference: datetime) -> List[DateMatch]:
        """Return resolved date matches in text order."""
        if not text:
            return []

        reference = _as_aware(reference, self.tz).astimezone(self.tz)
        results: List[DateMatch] = []
        for candidate in self._select(self._candidates(text)):
            moment = self._resolve(candidate, reference)
            if moment is None:
                continue
            results.append(
                DateMatch(
                    text=text[candidate.start : candidate.end],
                    start=candidate.start,
                    moment=moment,
                )
            )
        return results

    def _candidates(self, text: str) -> List[_Candidate]:
        candidates: List[_Candidate] = []
        for rule, pattern in DATE_PATTERNS:
            for match in pattern.finditer(text):
                if rule == "time":
                    candidates.append(_Candidate(rule, match, match.start(), match.end(), match))
                    continue
                suffix = TIME_SUFFIX_PATTERN.match(text, match.end())
                end = suffix.end() if suffix else match.end()
                candidates.append(_Candidate(rule, match, match.start(), end, suffix))
        return candidates

    @staticmethod
    def _select(candidates: Sequence[_Candidate]) -> List[_Candidate]:
        """Drop overlapping candidates, keeping leftmost then longest."""
        ordered = sorted(candidates, key=lambda c: (c.start, -(c.end - c.start)))
        selected: List[_Candidate] = []
        last_end = -1
        for candidate in ordered:
            if candidate.start < last_end:
                continue
            selected.append(candidate)
            last_end = candidate.end
        return selected

    def _resolve(self, candidate: _Candidate, reference: datetime) -> Optional[datetime]:
        groups = candidate.match.groupdict()
        today = reference.date()
        hour = self.config.implied_hour
        rule = candidate.rule

        day: Optional[date]
        if rule == "iso":
            day = _safe_date(int(groups["year"]), int(groups["month"]), int(groups["day"]))
        elif rule == "numeric":
            day = self._calendar_day(
                int(groups["month"]), int(groups["day"]), groups.get("year"), today
            )
        elif rule in ("month_day", "day_month"):
            month = MONTHS[groups["month"].lower()[:3]]
            day = self._calendar_day(month, int(groups["day"]), groups.get("year"), today)
        elif rule == "relative_day":
            word = groups["word"].lower()
            day = _shift(today, days=_RELATIVE_DAYS[word])
            if word == "tonight":
                hour = self.config.tonight_hour
        elif rule == "relative_unit":
            step = _MODIFIER_STEP[groups["modifier"].lower()]
            day = _shift(today, **{f"{groups['unit'].lower()}s": step})
        elif rule == "weekday":
            day = _weekday_from(today, WEEKDAYS[groups["weekday"].lower()], groups.get("modifier"))
        elif rule in ("offset_ahead", "offset_ago"):
            count = _count(groups["count"])
            if rule == "offset_ago":
                count = -count
            day = _shift(today, **{f"{groups['unit'].lower()}s": count})
        elif rule == "time":
            day = today
        else:
            raise ValueError(f"Unknown date rule: {rule}")

        if day is None:
            return None

        minute = 0
        if candidate.time_match is not None:
            clock = _clock(candidate.time_match)
            if clock is None:
                return None
            hour, minute = clock

        moment = datetime.combine(day, time(hour, minute), tzinfo=self.tz)
        try:
            moment.astimezone(timezone.utc)
        except OverflowError:
            # Local moments at the edges of the calendar may not exist in UTC.
            return None
        return moment

    @staticmethod
    def _calendar_day(month: int, day: int, year: Optional[str], today: date) -> Optional[date]:
        """Build a date; without a year, pick the year closest to today."""
        if year is not None:
            full_year = int(year)
            if len(year) == 2:
                full_year += 2000
            return _safe_date(full_year, month, day)

        options = [
            candidate
            for candidate in (
                _safe_date(today.year - 1, month, day),
                _safe_date(today.year, month, day),
                _safe_date(today.year + 1, month, day),
            )
            if candidate is not None
        ]
        if not options:
            return None
        return min(options, key=lambda d: abs((d - today).days))


class DateExtractor:
    """Turn date matches into :class:`DateEntity` values."""

    def __init__(
        self,
        config: Optional[DateConfig] = None,
        parser: Optional[DateParser] = None,
    ) -> None:
        self.config = config or DateConfig()
        self.tz = ZoneInfo(self.config.timezone)
        self.parser: DateParser = parser or RuleBasedDateParser(self.config)

    def extract(self, text: str, now: Optional[datetime] = None) -> List[DateEntity]:
        now = _as_aware(now, self.tz) if now is not None else datetime.now(self.tz)

        entities: List[DateEntity] = []
        for match in self.parser.parse(text, now):
            days_from_now = math.ceil((match.moment - now).total_seconds() / 86400)
            entities.append(
                DateEntity(
                    value=match.text,
                    normalized_value=to_iso_instant(match.moment),
                    confidence="high",
                    start_index=match.start,
                    end_index=match.end,
                    metadata=DateMetadata(
                        original_text=match.text,
                        is_relative=FOUR_DIGIT_YEAR.search(match.text) is None,
                        is_future=match.moment > now,
                        days_from_now=days_from_now,
                    ),
                )
            )
        return entities


def to_iso_instant(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _as_aware(moment: datetime, tz: ZoneInfo) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _shift(today: date, **delta: int) -> Optional[date]:
    """Calendar offset from ``today``, or None when it leaves the supported range."""
    try:
        return today + relativedelta(**delta)
    except (ValueError, OverflowError):
        return None


def _weekday_from(today: date, weekday: int, modifier: Optional[str]) -> date:
    target = _WEEKDAY_OBJECTS[weekday]
    modifier = (modifier or "").lower()
    if modifier == "next":
        return today + relativedelta(days=+1, weekday=target(+1))
    if modifier == "last":
        return today + relativedelta(days=-1, weekday=target(-1))
    return today + relativedelta(weekday=target(+1))


def _count(raw: str) -> int:
    if raw.isdigit():
        return int(raw)
    return NUMBER_WORDS[raw.lower()]


def _clock(match: re.Match[str]) -> Optional[tuple[int, int]]:
    hour = int(match.group("hour"))
    minute = int(match.group("minute") or 0)
    ampm = match.group("ampm").lower().replace(".", "")
    if not 1 <= hour <= 12 or minute > 59:
        return None
    if ampm == "pm" and hour < 12:
        hour += 12
    elif ampm == "am" and hour == 12:
        hour = 0
    return hour, minute

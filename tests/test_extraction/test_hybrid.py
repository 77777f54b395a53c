from __future__ import annotations

from datetime import datetime

from noteparse.extraction.entity_parser import EntityParser
from noteparse.extraction.hybrid import convert_ai_entities, extract_hybrid, merge_ai_entities


def test_merges_new_ai_entities(parser: EntityParser, now: datetime) -> None:
    text = "Meeting with the client about the project timeline."
    result = extract_hybrid(text, ["project budget", "Q4 deadline"], parser=parser, now=now)

    other = result.structured.other
    assert [e.value for e in other] == ["project budget", "Q4 deadline"]
    assert [e.normalized_value for e in other] == ["project budget", "q4 deadline"]
    assert all(e.type == "other" and e.source == "ai" and e.confidence == "medium" for e in other)
    assert result.metadata.ai_count == 2
    assert result.metadata.deterministic_count > 0
    assert result.metadata.total_count == result.metadata.deterministic_count + 2
    assert result.all_entities[-2:] == other


def test_deduplicates_against_deterministic_values(parser: EntityParser, now: datetime) -> None:
    result = extract_hybrid(
        "Meeting with John Smith tomorrow.", ["john smith", "tomorrow"], parser=parser, now=now
    )

    assert result.structured.other == []
    assert result.metadata.ai_count == 0
    assert result.metadata.total_count == result.metadata.deterministic_count


def test_deduplicates_against_normalized_values(parser: EntityParser, now: datetime) -> None:
    result = extract_hybrid(
        "Reach me at John@Example.com or 555-123-4567",
        ["  JOHN@example.COM ", "5551234567", "Acme renewal"],
        parser=parser,
        now=now,
    )

    assert [e.value for e in result.structured.other] == ["Acme renewal"]
    assert result.metadata.ai_count == 1


def test_blank_ai_strings_are_ignored(parser: EntityParser, now: datetime) -> None:
    result = extract_hybrid("Quick sync", ["", "   ", "budget"], parser=parser, now=now)

    assert [e.value for e in result.structured.other] == ["budget"]


def test_empty_ai_list_matches_plain_extract(parser: EntityParser, now: datetime) -> None:
    text = "I'll call Sarah Johnson next Friday about Microsoft."

    plain = parser.extract(text, now=now)
    hybrid = extract_hybrid(text, [], parser=parser, now=now)
    omitted = extract_hybrid(text, parser=parser, now=now)

    assert hybrid.structured.model_dump() == plain.structured.model_dump()
    assert omitted.structured.model_dump() == plain.structured.model_dump()
    assert hybrid.metadata.ai_count == 0
    assert hybrid.metadata.total_count == plain.metadata.total_count


def test_other_is_overwritten_not_appended(parser: EntityParser, now: datetime) -> None:
    base = parser.extract("Lunch with the vendor", now=now)

    first = merge_ai_entities(base, ["pricing"])
    second = merge_ai_entities(first, ["contract terms"])

    assert [e.value for e in second.structured.other] == ["contract terms"]
    assert second.metadata.ai_count == 1
    assert [e.value for e in second.all_entities if e.source == "ai"] == ["contract terms"]
    assert base.structured.other == []


def test_ai_strings_are_not_deduplicated_against_each_other() -> None:
    survivors = convert_ai_entities(["Budget", "budget"], [])

    assert [e.value for e in survivors] == ["Budget", "budget"]


def test_processing_time_is_recorded(parser: EntityParser, now: datetime) -> None:
    result = extract_hybrid("Call me at 555-123-4567", ["x"], parser=parser, now=now)

    assert result.metadata.processing_time >= 0

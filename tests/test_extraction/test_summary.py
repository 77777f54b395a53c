from __future__ import annotations

from datetime import datetime

import pytest

from noteparse.extraction.entity_parser import EntityParser
from noteparse.extraction.models import (
    CommitmentEntity,
    CommitmentMetadata,
    DateEntity,
    DateMetadata,
    PersonEntity,
    PersonMetadata,
    RelationshipSignalEntity,
    RelationshipSignalMetadata,
    StructuredEntities,
)
from noteparse.extraction.summary import (
    deserialize_structured_entities,
    extract_actionable_items,
    get_entity_summary,
    localize_date,
    serialize_structured_entities,
)


def _date(iso: str, is_future: bool) -> DateEntity:
    return DateEntity(
        value="some day",
        normalized_value=iso,
        confidence="high",
        metadata=DateMetadata(
            original_text="some day", is_relative=True, is_future=is_future, days_from_now=1
        ),
    )


def _commitment(value: str, direction: str, verb: str | None = None, linked: str | None = None):
    return CommitmentEntity(
        value=value,
        normalized_value=value,
        confidence="high" if verb else "medium",
        metadata=CommitmentMetadata(direction=direction, action_verb=verb, linked_date=linked),
    )


def _person(name: str) -> PersonEntity:
    return PersonEntity(
        value=name, normalized_value=name, confidence="high", metadata=PersonMetadata(full_name=name)
    )


def _signal(keyword: str) -> RelationshipSignalEntity:
    return RelationshipSignalEntity(
        value=keyword,
        normalized_value=keyword,
        confidence="high",
        metadata=RelationshipSignalMetadata(signal_type="personal", relationship_role=keyword),
    )


def test_summary_highlights_singular() -> None:
    structured = StructuredEntities(
        commitments=[_commitment("I'll call", "outbound", "call")],
        dates=[_date("2026-10-16T12:00:00.000Z", True), _date("2026-01-01T12:00:00.000Z", False)],
        people=[_person("Dana")],
        relationship_signals=[_signal("friend")],
    )

    summary = get_entity_summary(structured)

    assert summary.highlights == [
        "1 commitment",
        "1 upcoming date",
        "1 person mentioned",
        "relationship context",
    ]
    assert summary.total == 5
    assert summary.by_type["dates"] == 2
    assert summary.by_type["relationshipSignals"] == 1


def test_summary_highlights_plural() -> None:
    structured = StructuredEntities(
        commitments=[_commitment("a", "outbound"), _commitment("b", "inbound")],
        dates=[_date("2026-10-16T12:00:00.000Z", True), _date("2026-10-17T12:00:00.000Z", True)],
        people=[_person("Dana"), _person("Sarah Johnson"), _person("John Smith")],
    )

    assert get_entity_summary(structured).highlights == [
        "2 commitments",
        "2 upcoming dates",
        "3 people mentioned",
    ]


def test_summary_of_empty_structure() -> None:
    summary = get_entity_summary(StructuredEntities())

    assert summary.total == 0
    assert summary.highlights == []
    assert set(summary.by_type.values()) == {0}


def test_past_dates_are_not_highlighted() -> None:
    structured = StructuredEntities(dates=[_date("2020-01-01T12:00:00.000Z", False)])

    assert get_entity_summary(structured).highlights == []


def test_actionable_items_order_and_wording() -> None:
    structured = StructuredEntities(
        commitments=[
            _commitment("I'll call", "outbound", "call", linked="2026-10-16T12:00:00.000Z"),
            _commitment("We'll figure", "mutual", None, linked="2026-10-20T15:00:00.000Z"),
            _commitment("need to decide", "outbound"),
            _commitment("could you ask", "inbound"),
        ],
        dates=[_date("2026-10-16T12:00:00.000Z", True), _date("2020-01-01T12:00:00.000Z", False)],
    )

    assert extract_actionable_items(structured) == [
        "call by 10/16/2026",
        "follow up by 10/20/2026",
        "need to decide",
        "Event on 10/16/2026",
    ]


def test_localize_date_uses_time_zone() -> None:
    assert localize_date("2026-10-16T02:00:00.000Z") == "10/16/2026"
    assert localize_date("2026-10-16T02:00:00.000Z", "America/Los_Angeles") == "10/15/2026"


def test_round_trip_of_extracted_entities(parser: EntityParser, now: datetime) -> None:
    text = (
        "Met Sarah Johnson from Microsoft in Chicago. I'll email her next Friday at "
        "sarah@company.org; my old friend Dana said we'll meet on Jan 15."
    )
    structured = parser.extract(text, now=now).structured

    restored = deserialize_structured_entities(serialize_structured_entities(structured))

    assert restored is not None
    assert restored.model_dump() == structured.model_dump()


def test_transport_form_uses_camel_case(parser: EntityParser, now: datetime) -> None:
    structured = parser.extract("I'll call my boss tomorrow", now=now).structured

    payload = serialize_structured_entities(structured)

    assert '"relationshipSignals"' in payload
    assert '"normalizedValue"' in payload
    assert '"linkedDate"' in payload
    assert '"actionVerb":"call"' in payload


@pytest.mark.parametrize(
    "payload",
    ["", "{not json", "[]", "null", '{"people": [{"type": "person"}]}'],
)
def test_malformed_payload_returns_none(payload: str) -> None:
    assert deserialize_structured_entities(payload) is None


def test_empty_object_payload_is_an_empty_structure() -> None:
    restored = deserialize_structured_entities("{}")

    assert restored == StructuredEntities()

from __future__ import annotations

import pytest

from noteparse.extraction.pattern_extractor import (
    extract_commitments,
    extract_emails,
    extract_phones,
    extract_relationship_signals,
)


def test_outbound_commitment_with_action_verb() -> None:
    commitments = extract_commitments("I'll call you back tomorrow")

    first = commitments[0]
    assert first.value == "I'll call"
    assert first.metadata.direction == "outbound"
    assert first.metadata.action_verb == "call"
    assert first.metadata.commitment_type == "promise"
    assert first.confidence == "high"
    assert first.start_index == 0
    assert first.end_index == 9


def test_templates_apply_in_priority_order() -> None:
    commitments = extract_commitments("You'll send the deck and I'll review it; we need to decide")

    assert [(c.value, c.metadata.direction) for c in commitments] == [
        ("I'll review", "outbound"),
        ("You'll send", "inbound"),
        ("need to decide", "outbound"),
    ]
    assert [c.metadata.action_verb for c in commitments] == ["review", None, None]
    assert [c.confidence for c in commitments] == ["high", "medium", "medium"]


def test_same_span_can_match_two_templates() -> None:
    commitments = extract_commitments("I will have to call the bank")

    assert [c.value for c in commitments] == ["I will have", "have to call"]
    assert [c.metadata.direction for c in commitments] == ["outbound", "outbound"]
    assert [c.confidence for c in commitments] == ["medium", "high"]


@pytest.mark.parametrize(
    ("text", "value"),
    [
        ("Could you send me the deck?", "Could you send"),
        ("Can you call me?", "Can you call"),
        ("You'll email the board", "You'll email"),
        ("you will review it", "you will review"),
    ],
)
def test_inbound_commitments_carry_no_action_verb(text: str, value: str) -> None:
    commitments = extract_commitments(text)

    assert len(commitments) == 1
    assert commitments[0].value == value
    assert commitments[0].metadata.direction == "inbound"
    assert commitments[0].metadata.action_verb is None
    assert commitments[0].confidence == "medium"


def test_mutual_commitments() -> None:
    commitments = extract_commitments("We promised to review the draft. Let's meet soon.")

    assert [(c.value, c.metadata.direction) for c in commitments] == [
        ("Let's meet", "mutual"),
        ("promised to review", "mutual"),
    ]
    assert all(c.metadata.action_verb for c in commitments)


def test_unknown_verb_gets_medium_confidence() -> None:
    commitments = extract_commitments("I'm going to think about it")

    assert len(commitments) == 1
    assert commitments[0].metadata.direction == "outbound"
    assert commitments[0].metadata.action_verb is None
    assert commitments[0].confidence == "medium"


def test_verb_lookup_is_case_insensitive() -> None:
    commitments = extract_commitments("MUST EMAIL the board")

    assert commitments[0].metadata.action_verb == "email"
    assert commitments[0].value == "MUST EMAIL"


def test_typographic_apostrophe_is_accepted() -> None:
    commitments = extract_commitments("I’ll text her")

    assert commitments[0].metadata.action_verb == "text"


def test_relationship_signal_professional_boss() -> None:
    signals = extract_relationship_signals("My boss wants to meet")

    assert signals[0].value == "boss"
    assert signals[0].metadata.signal_type == "professional"
    assert signals[0].metadata.relationship_role == "boss"
    assert signals[0].confidence == "high"
    # "boss" is also hierarchical
    assert [s.metadata.signal_type for s in signals] == ["professional", "hierarchical"]


def test_relationship_signals_count_every_occurrence() -> None:
    signals = extract_relationship_signals("A friend of a friend; she is a close friend.")

    values = [s.value for s in signals]
    assert values.count("friend") == 3
    assert values.count("close friend") == 1


def test_relationship_signal_keeps_keyword_casing() -> None:
    signals = extract_relationship_signals("Met the ceo after lunch")

    assert signals[0].value == "CEO"
    assert signals[0].normalized_value == "ceo"
    assert signals[0].start_index == 8


def test_relationship_signals_require_whole_words() -> None:
    assert extract_relationship_signals("The bossa nova band played") == []


def test_ex_prefix_signal() -> None:
    signals = extract_relationship_signals("Ran into my ex-boss")

    assert ("ex-", "temporal") in {(s.value, s.metadata.signal_type) for s in signals}


def test_phone_numbers() -> None:
    phones = extract_phones("Call me at 555-123-4567 or 555.987.6543")

    assert len(phones) == 2
    assert all(p.type == "phone" for p in phones)
    assert [p.normalized_value for p in phones] == ["5551234567", "5559876543"]
    assert phones[0].metadata.is_valid is True
    assert phones[0].metadata.formatted == "555-123-4567"


def test_phone_without_separators() -> None:
    phones = extract_phones("cell 5551234567")

    assert [p.value for p in phones] == ["5551234567"]


def test_email_addresses() -> None:
    emails = extract_emails("Email John@Example.com or sarah@company.org")

    assert len(emails) == 2
    assert all(e.type == "email" for e in emails)
    assert emails[0].normalized_value == "john@example.com"
    assert emails[0].metadata.formatted == "John@Example.com"


def test_no_matches_yield_empty_lists() -> None:
    text = "Nothing actionable here."
    assert extract_commitments(text) == []
    assert extract_relationship_signals(text) == []
    assert extract_phones(text) == []
    assert extract_emails(text) == []

"""Regex-based extractors for commitments, relationship signals and contact details."""

from __future__ import annotations

from typing import List

from noteparse.extraction.models import (
    CommitmentEntity,
    CommitmentMetadata,
    ContactEntity,
    ContactMetadata,
    RelationshipSignalEntity,
    RelationshipSignalMetadata,
)
from noteparse.extraction.patterns import (
    ACTION_VERBS,
    COMMITMENT_PATTERNS,
    EMAIL_PATTERN,
    PHONE_PATTERN,
    PHONE_SEPARATORS,
    SIGNAL_PATTERNS,
)


def extract_commitments(text: str) -> List[CommitmentEntity]:
    """Apply every commitment template to the full text.

    Templates run independently and in priority order, so one phrase can yield
    several commitments (e.g. "I will have to call" is matched by two outbound templates).
    """
    commitments: List[CommitmentEntity] = []
    for pattern, direction in COMMITMENT_PATTERNS:
        for match in pattern.finditer(text):
            verb = (match.group("verb") or "").lower()
            is_action_verb = verb in ACTION_VERBS
            commitments.append(
                CommitmentEntity(
                    value=match.group(0),
                    normalized_value=match.group(0).strip(),
                    confidence="high" if is_action_verb else "medium",
                    start_index=match.start(),
                    end_index=match.end(),
                    metadata=CommitmentMetadata(
                        direction=direction,
                        action_verb=verb if is_action_verb else None,
                    ),
                )
            )
    return commitments


def extract_relationship_signals(text: str) -> List[RelationshipSignalEntity]:
    """Whole-word, case-insensitive keyword matches; every occurrence counts."""
    signals: List[RelationshipSignalEntity] = []
    for signal_type, keyword, pattern in SIGNAL_PATTERNS:
        for match in pattern.finditer(text):
            signals.append(
                RelationshipSignalEntity(
                    value=keyword,
                    normalized_value=keyword.lower(),
                    confidence="high",
                    start_index=match.start(),
                    end_index=match.end(),
                    metadata=RelationshipSignalMetadata(
                        signal_type=signal_type,
                        relationship_role=keyword,
                    ),
                )
            )
    return signals


def extract_phones(text: str) -> List[ContactEntity]:
    return [
        ContactEntity(
            type="phone",
            value=match.group(0),
            normalized_value=PHONE_SEPARATORS.sub("", match.group(0)),
            confidence="high",
            start_index=match.start(),
            end_index=match.end(),
            metadata=ContactMetadata(is_valid=True, formatted=match.group(0)),
        )
        for match in PHONE_PATTERN.finditer(text)
    ]


def extract_emails(text: str) -> List[ContactEntity]:
    return [
        ContactEntity(
            type="email",
            value=match.group(0),
            normalized_value=match.group(0).lower(),
            confidence="high",
            start_index=match.start(),
            end_index=match.end(),
            metadata=ContactMetadata(is_valid=True, formatted=match.group(0)),
        )
        for match in EMAIL_PATTERN.finditer(text)
    ]

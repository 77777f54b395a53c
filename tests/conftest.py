"""Shared fixtures: a blank spaCy pipeline with a rule-based tagger and a fixed clock."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
import spacy
from spacy.language import Language

from noteparse.extraction.entity_parser import EntityParser

# Wednesday, 2026-10-14 09:00 UTC
FIXED_NOW = datetime(2026, 10, 14, 9, 0, tzinfo=UTC)

ENTITY_PATTERNS = [
    {"label": "PERSON", "pattern": "John Smith"},
    {"label": "PERSON", "pattern": "Sarah Johnson"},
    {"label": "PERSON", "pattern": "Dana"},
    {"label": "ORG", "pattern": "Microsoft"},
    {"label": "ORG", "pattern": "Google"},
    {"label": "GPE", "pattern": "San Francisco"},
    {"label": "GPE", "pattern": "Chicago"},
]


def build_nlp() -> Language:
    nlp = spacy.blank("en")
    ruler = nlp.add_pipe("entity_ruler")
    ruler.add_patterns(ENTITY_PATTERNS)
    return nlp


@pytest.fixture(scope="session")
def nlp() -> Language:
    return build_nlp()


@pytest.fixture
def parser(nlp: Language) -> EntityParser:
    return EntityParser(nlp=nlp)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW

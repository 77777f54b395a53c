"""Extraction package exports."""

from noteparse.extraction.cache import ExtractionCache
from noteparse.extraction.date_extractor import DateExtractor, RuleBasedDateParser
from noteparse.extraction.entity_parser import (
    EntityParser,
    extract,
    get_default_parser,
    reset_default_parser,
)
from noteparse.extraction.hybrid import extract_hybrid, merge_ai_entities
from noteparse.extraction.linker import link_dates_to_commitments
from noteparse.extraction.models import (
    EntityExtractionResult,
    EntitySummary,
    ParsedEntity,
    StructuredEntities,
)
from noteparse.extraction.spacy_tagger import NamedEntityExtractor, SpacyTagger, TaggedSpan
from noteparse.extraction.summary import (
    deserialize_structured_entities,
    extract_actionable_items,
    get_entity_summary,
    serialize_structured_entities,
)

serialize = serialize_structured_entities
deserialize = deserialize_structured_entities

__all__ = [
    "DateExtractor",
    "EntityExtractionResult",
    "EntityParser",
    "EntitySummary",
    "ExtractionCache",
    "NamedEntityExtractor",
    "ParsedEntity",
    "RuleBasedDateParser",
    "SpacyTagger",
    "StructuredEntities",
    "TaggedSpan",
    "deserialize",
    "deserialize_structured_entities",
    "extract",
    "extract_actionable_items",
    "extract_hybrid",
    "get_default_parser",
    "get_entity_summary",
    "link_dates_to_commitments",
    "merge_ai_entities",
    "reset_default_parser",
    "serialize",
    "serialize_structured_entities",
]

"""Deterministic entity parser.

Runs every primitive extractor over a note, links commitments to their deadlines
and assembles an :class:`EntityExtractionResult`. The parser holds only immutable
collaborators (spaCy pipeline, date parser, config), so one instance can serve
concurrent callers.
"""

from __future__ import annotations

import time
from datetime import datetime
from functools import lru_cache
from typing import List, Optional

from loguru import logger
from spacy.language import Language

from noteparse.extraction.cache import ExtractionCache
from noteparse.extraction.date_extractor import DateExtractor, DateParser
from noteparse.extraction.linker import link_dates_to_commitments
from noteparse.extraction.models import (
    ContactEntity,
    EntityExtractionResult,
    ExtractionMetadata,
    StructuredEntities,
)
from noteparse.extraction.pattern_extractor import (
    extract_commitments,
    extract_emails,
    extract_phones,
    extract_relationship_signals,
)
from noteparse.extraction.spacy_tagger import (
    NamedEntityExtractor,
    NamedSpanTagger,
    SpacyTagger,
    TaggedSpan,
)
from noteparse.utils.config import ExtractionConfig, get_config


class EntityParser:
    """Rule-based extraction of people, dates, commitments and more from notes."""

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        *,
        nlp: Optional[Language] = None,
        tagger: Optional[NamedSpanTagger] = None,
        date_parser: Optional[DateParser] = None,
    ) -> None:
        self.config = config or ExtractionConfig()

        self.named_entities: Optional[NamedEntityExtractor] = None
        if self._needs_tagger():
            tagger = tagger or SpacyTagger(self.config.spacy, nlp=nlp)
            self.named_entities = NamedEntityExtractor(self.config.spacy, tagger)

        self.dates = DateExtractor(self.config.dates, parser=date_parser)

        logger.info(
            "Initialized EntityParser",
            timezone=self.config.dates.timezone,
            link_window=self.config.linking.window_chars,
            tagger=type(self.named_entities.tagger).__name__ if self.named_entities else None,
        )

    def extract(
        self,
        text: str,
        *,
        now: Optional[datetime] = None,
        cache: Optional[ExtractionCache] = None,
    ) -> EntityExtractionResult:
        """Deterministic pass: extract every category and link commitments to dates."""
        start = time.perf_counter()

        if cache is not None:
            cached = cache.get(text, reference=now)
            if cached is not None:
                logger.debug("Extraction cache hit", chars=len(text))
                return cached

        structured = self.extract_structured(text, now=now)
        all_entities = structured.deterministic_entities()
        count = len(all_entities)

        result = EntityExtractionResult(
            raw=text,
            structured=structured,
            all_entities=all_entities,
            metadata=ExtractionMetadata(
                processing_time=(time.perf_counter() - start) * 1000,
                deterministic_count=count,
                ai_count=0,
                total_count=count,
            ),
        )

        if cache is not None:
            cache.put(text, result, reference=now)

        logger.debug(
            "Extracted entities",
            chars=len(text),
            total=count,
            commitments=len(structured.commitments),
            dates=len(structured.dates),
        )
        return result

    def extract_structured(self, text: str, *, now: Optional[datetime] = None) -> StructuredEntities:
        """Run the primitive extractors and the linker, grouped by category."""
        cfg = self.config
        structured = StructuredEntities()

        if self.named_entities is not None:
            spans: List[TaggedSpan] = self.named_entities.tag(text)
            if cfg.enable_people:
                structured.people = self.named_entities.extract_people(text, spans)
            if cfg.enable_companies:
                structured.companies = self.named_entities.extract_companies(text, spans)
            if cfg.enable_locations:
                structured.locations = self.named_entities.extract_locations(text, spans)

        if cfg.enable_dates:
            structured.dates = self.dates.extract(text, now=now)

        if cfg.enable_commitments:
            structured.commitments = link_dates_to_commitments(
                extract_commitments(text),
                structured.dates,
                text,
                window_chars=cfg.linking.window_chars,
            )

        if cfg.enable_relationship_signals:
            structured.relationship_signals = extract_relationship_signals(text)

        if cfg.enable_contacts:
            contacts: List[ContactEntity] = [*extract_phones(text), *extract_emails(text)]
            structured.contacts = contacts

        return structured

    def _needs_tagger(self) -> bool:
        cfg = self.config
        return cfg.enable_people or cfg.enable_companies or cfg.enable_locations


@lru_cache(maxsize=1)
def get_default_parser() -> EntityParser:
    """Parser built from the loaded global config, or defaults when none is loaded."""
    try:
        config = get_config().extraction
    except RuntimeError:
        config = ExtractionConfig()
    return EntityParser(config)


def reset_default_parser() -> None:
    """Drop the memoized default parser so the next call rebuilds it from config."""
    get_default_parser.cache_clear()


def extract(
    text: str,
    *,
    now: Optional[datetime] = None,
    parser: Optional[EntityParser] = None,
    cache: Optional[ExtractionCache] = None,
) -> EntityExtractionResult:
    """Deterministic-only extraction of a single note."""
    parser = parser or get_default_parser()
    return parser.extract(text, now=now, cache=cache)

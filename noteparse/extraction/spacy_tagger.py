"""spaCy-backed named-span tagging for people, companies and locations.

Any object with a ``tag(text)`` method returning :class:`TaggedSpan` values can stand
in for the spaCy tagger; the extractors only depend on the label vocabulary in
:class:`~noteparse.utils.config.SpacyConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

import spacy
from loguru import logger
from spacy.language import Language

from noteparse.extraction.models import (
    CompanyEntity,
    CompanyMetadata,
    LocationEntity,
    LocationMetadata,
    PersonEntity,
    PersonMetadata,
)
from noteparse.utils.config import SpacyConfig


@dataclass(frozen=True)
class TaggedSpan:
    """A substring classified by a named-entity tagger."""

    text: str
    label: str
    start: int
    end: int


class NamedSpanTagger(Protocol):
    """Capability: classify spans of text as named entities."""

    def tag(self, text: str) -> List[TaggedSpan]: ...


class SpacyTagger:
    """Wrap a spaCy pipeline and expose its ``doc.ents`` as tagged spans."""

    def __init__(
        self,
        config: Optional[SpacyConfig] = None,
        nlp: Optional[Language] = None,
    ) -> None:
        self.config = config or SpacyConfig()
        self.nlp: Language = nlp or self._load_model(self.config.model)

        logger.info(
            "Initialized SpacyTagger",
            model=self.config.model if nlp is None else "injected",
            pipes=self.nlp.pipe_names,
        )

    def tag(self, text: str) -> List[TaggedSpan]:
        if not text.strip():
            return []
        doc = self.nlp(text)
        return [
            TaggedSpan(text=ent.text, label=ent.label_, start=ent.start_char, end=ent.end_char)
            for ent in doc.ents
        ]

    def _load_model(self, model_name: str) -> Language:
        """Load spaCy model with minimal validation."""
        try:
            return spacy.load(model_name)
        except OSError as exc:
            raise RuntimeError(
                f"spaCy model '{model_name}' is not installed. "
                f"Install it with `python -m spacy download {model_name}`."
            ) from exc


class NamedEntityExtractor:
    """Map tagged spans onto person, company and location entities."""

    def __init__(
        self,
        config: Optional[SpacyConfig] = None,
        tagger: Optional[NamedSpanTagger] = None,
    ) -> None:
        self.config = config or SpacyConfig()
        self.tagger: NamedSpanTagger = tagger or SpacyTagger(self.config)
        self._person_labels = set(self.config.person_labels)
        self._company_labels = set(self.config.company_labels)
        self._location_labels = set(self.config.location_labels)

    def tag(self, text: str) -> List[TaggedSpan]:
        return self.tagger.tag(text)

    def extract_people(
        self, text: str, spans: Optional[Sequence[TaggedSpan]] = None
    ) -> List[PersonEntity]:
        people: List[PersonEntity] = []
        for span in self._spans(text, spans, self._person_labels):
            full_name = span.text.strip()
            parts = full_name.split()
            people.append(
                PersonEntity(
                    value=span.text,
                    normalized_value=full_name,
                    confidence="high",
                    start_index=span.start,
                    end_index=span.end,
                    metadata=PersonMetadata(
                        full_name=full_name,
                        first_name=parts[0] if len(parts) > 1 else None,
                        last_name=parts[-1] if len(parts) > 1 else None,
                    ),
                )
            )
        return people

    def extract_companies(
        self, text: str, spans: Optional[Sequence[TaggedSpan]] = None
    ) -> List[CompanyEntity]:
        return [
            CompanyEntity(
                value=span.text,
                normalized_value=span.text.strip(),
                confidence="medium",
                start_index=span.start,
                end_index=span.end,
                metadata=CompanyMetadata(name=span.text.strip()),
            )
            for span in self._spans(text, spans, self._company_labels)
        ]

    def extract_locations(
        self, text: str, spans: Optional[Sequence[TaggedSpan]] = None
    ) -> List[LocationEntity]:
        return [
            LocationEntity(
                value=span.text,
                normalized_value=span.text.strip(),
                confidence="medium",
                start_index=span.start,
                end_index=span.end,
                metadata=LocationMetadata(location_type="general"),
            )
            for span in self._spans(text, spans, self._location_labels)
        ]

    def _spans(
        self, text: str, spans: Optional[Sequence[TaggedSpan]], labels: set[str]
    ) -> List[TaggedSpan]:
        if spans is None:
            spans = self.tagger.tag(text)
        return [span for span in spans if span.label in labels]

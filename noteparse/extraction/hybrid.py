"""Merge deterministic extraction with free-text entities from an AI pass.

The deterministic pass always runs first, so an empty or failed AI pass never
starves the result. AI strings that match (case-insensitively) the ``value`` or
``normalized_value`` of any deterministic entity are dropped as already known;
the rest become ``other`` entities with ``source="ai"``. ``structured.other`` is
reserved for these survivors and is overwritten on every call.
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Set

from loguru import logger

from noteparse.extraction.cache import ExtractionCache
from noteparse.extraction.entity_parser import EntityParser, get_default_parser
from noteparse.extraction.models import AnyEntity, EntityExtractionResult, OtherEntity


def known_values(entities: Iterable[AnyEntity]) -> Set[str]:
    """Lowercased ``value`` and ``normalized_value`` of every entity."""
    values: Set[str] = set()
    for entity in entities:
        if entity.value:
            values.add(entity.value.lower())
        if entity.normalized_value:
            values.add(entity.normalized_value.lower())
    return values


def convert_ai_entities(
    ai_entities: Sequence[str], deterministic: Sequence[AnyEntity]
) -> List[OtherEntity]:
    """Wrap AI strings not already found deterministically as ``other`` entities."""
    seen = known_values(deterministic)
    survivors: List[OtherEntity] = []
    for raw in ai_entities:
        normalized = raw.lower().strip()
        if not normalized or normalized in seen:
            continue
        survivors.append(
            OtherEntity(
                value=raw,
                normalized_value=normalized,
                confidence="medium",
                source="ai",
            )
        )
    return survivors


def merge_ai_entities(
    result: EntityExtractionResult, ai_entities: Optional[Sequence[str]]
) -> EntityExtractionResult:
    """Return a copy of ``result`` with AI survivors merged in and counts updated."""
    if not ai_entities:
        return result

    deterministic = result.structured.deterministic_entities()
    survivors = convert_ai_entities(ai_entities, deterministic)
    deterministic_count = result.metadata.deterministic_count

    logger.debug(
        "Merged AI entities",
        supplied=len(ai_entities),
        kept=len(survivors),
        duplicates=len(ai_entities) - len(survivors),
    )

    return result.model_copy(
        update={
            "structured": result.structured.model_copy(update={"other": survivors}),
            "all_entities": [*deterministic, *survivors],
            "metadata": result.metadata.model_copy(
                update={
                    "ai_count": len(survivors),
                    "total_count": deterministic_count + len(survivors),
                }
            ),
        }
    )


def extract_hybrid(
    text: str,
    ai_entities: Optional[Sequence[str]] = None,
    *,
    now: Optional[datetime] = None,
    parser: Optional[EntityParser] = None,
    cache: Optional[ExtractionCache] = None,
) -> EntityExtractionResult:
    """Deterministic extraction plus an optional merge of AI-suggested strings.

    With no (or empty) ``ai_entities`` this is equivalent to
    :func:`noteparse.extraction.entity_parser.extract`. ``processing_time`` covers
    the whole call, including the deterministic pass.
    """
    start = time.perf_counter()
    parser = parser or get_default_parser()

    result = merge_ai_entities(parser.extract(text, now=now, cache=cache), ai_entities)

    elapsed_ms = (time.perf_counter() - start) * 1000
    return result.model_copy(
        update={"metadata": result.metadata.model_copy(update={"processing_time": elapsed_ms})}
    )

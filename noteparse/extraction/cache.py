"""Caller-owned memoization of deterministic extraction results."""

from __future__ import annotations

import hashlib
from collections import OrderedDict
from datetime import datetime
from typing import Optional, Tuple

from loguru import logger

from noteparse.extraction.models import EntityExtractionResult

_CacheKey = Tuple[str, Optional[str]]


def content_key(text: str) -> str:
    """SHA-256 hex digest of the note text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def _key(text: str, reference: Optional[datetime]) -> _CacheKey:
    return content_key(text), reference.isoformat() if reference is not None else None


class ExtractionCache:
    """Bounded LRU mapping of (content hash, reference instant) to deterministic result.

    Relative dates ("tomorrow", ``isFuture``, ``daysFromNow``) depend on the reference
    instant, so results extracted against an explicit ``reference`` are stored per
    reference. Results extracted against the wall clock (``reference=None``) are keyed
    by content alone and keep the dates resolved at the time they were stored; callers
    that keep such a cache across days should clear it.
    """

    def __init__(self, max_entries: int = 256) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self._entries: OrderedDict[_CacheKey, EntityExtractionResult] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(
        self, text: str, reference: Optional[datetime] = None
    ) -> Optional[EntityExtractionResult]:
        key = _key(text, reference)
        cached = self._entries.get(key)
        if cached is None:
            self.misses += 1
            return None
        self.hits += 1
        self._entries.move_to_end(key)
        return cached.model_copy(deep=True)

    def put(
        self,
        text: str,
        result: EntityExtractionResult,
        reference: Optional[datetime] = None,
    ) -> None:
        key = _key(text, reference)
        self._entries[key] = result.model_copy(deep=True)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            (evicted, _), _ = self._entries.popitem(last=False)
            logger.debug("Evicted cached extraction", key=evicted[:12])

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, text: object) -> bool:
        """True when ``text`` is cached against any reference instant."""
        if not isinstance(text, str):
            return False
        digest = content_key(text)
        return any(key[0] == digest for key in self._entries)

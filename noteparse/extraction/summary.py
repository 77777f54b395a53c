"""Transport (de)serialization, summaries and next-step items for extracted entities."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo

from loguru import logger
from pydantic import ValidationError

from noteparse.extraction.models import EntitySummary, StructuredEntities


def serialize_structured_entities(structured: StructuredEntities) -> str:
    """JSON transport form with camelCase keys, as stored alongside a note."""
    return structured.model_dump_json(by_alias=True, exclude_none=True)


def deserialize_structured_entities(payload: Optional[str]) -> Optional[StructuredEntities]:
    """Parse a transport string; ``None`` when it is empty or malformed."""
    if not payload:
        return None
    try:
        return StructuredEntities.model_validate_json(payload)
    except ValidationError as exc:
        logger.warning(
            "Failed to deserialize structured entities",
            errors=exc.error_count(),
            preview=payload[:80],
        )
        return None


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def get_entity_summary(structured: StructuredEntities) -> EntitySummary:
    """Per-category counts and human-readable highlights."""
    by_type: Dict[str, int] = {
        "people": len(structured.people),
        "companies": len(structured.companies),
        "dates": len(structured.dates),
        "locations": len(structured.locations),
        "commitments": len(structured.commitments),
        "relationshipSignals": len(structured.relationship_signals),
        "contacts": len(structured.contacts),
        "other": len(structured.other),
    }

    highlights: List[str] = []
    if structured.commitments:
        highlights.append(_plural(len(structured.commitments), "commitment", "commitments"))

    upcoming = sum(1 for d in structured.dates if d.metadata.is_future)
    if upcoming:
        highlights.append(_plural(upcoming, "upcoming date", "upcoming dates"))

    if structured.people:
        highlights.append(
            _plural(len(structured.people), "person mentioned", "people mentioned")
        )

    if structured.relationship_signals:
        highlights.append("relationship context")

    return EntitySummary(total=sum(by_type.values()), by_type=by_type, highlights=highlights)


def localize_date(iso_value: str, timezone: str = "UTC") -> str:
    """Render an ISO instant as ``M/D/YYYY`` in the given time zone."""
    moment = datetime.fromisoformat(iso_value.replace("Z", "+00:00"))
    local = moment.astimezone(ZoneInfo(timezone))
    return f"{local.month}/{local.day}/{local.year}"


def extract_actionable_items(structured: StructuredEntities, timezone: str = "UTC") -> List[str]:
    """Next steps: dated commitments, undated outbound ones, then upcoming dates."""
    items: List[str] = []

    for commitment in structured.commitments:
        meta = commitment.metadata
        if meta.linked_date:
            verb = meta.action_verb or "follow up"
            items.append(f"{verb} by {localize_date(meta.linked_date, timezone)}")
        elif meta.direction == "outbound":
            items.append(commitment.value)

    for date in structured.dates:
        if date.metadata.is_future:
            items.append(f"Event on {localize_date(date.normalized_value, timezone)}")

    return items

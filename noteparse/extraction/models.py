"""Shared data models for extraction modules.

Python attributes are snake_case; the transport form (JSON) uses camelCase aliases
so stored blobs stay compatible with the note service payloads. Models accept
either spelling on input.
"""

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EntityType = Literal[
    "person",
    "company",
    "date",
    "location",
    "commitment",
    "relationship_signal",
    "phone",
    "email",
    "url",
    "other",
]
Confidence = Literal["high", "medium", "low"]
Provenance = Literal["deterministic", "ai", "hybrid"]
Direction = Literal["outbound", "inbound", "mutual"]
SignalType = Literal["professional", "personal", "transactional", "hierarchical", "temporal"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


# ---------------------------------------------------------------------------
# Per-category metadata
# ---------------------------------------------------------------------------


class PersonMetadata(_CamelModel):
    full_name: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    possible_contact_match: Optional[str] = None  # contact id, never owned


class CompanyMetadata(_CamelModel):
    name: str
    industry: Optional[str] = None


class DateMetadata(_CamelModel):
    original_text: str
    is_relative: bool
    is_future: bool
    days_from_now: int


class LocationMetadata(_CamelModel):
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    location_type: Literal["city", "address", "venue", "general"] = "general"


class CommitmentMetadata(_CamelModel):
    commitment_type: Literal["promise", "meeting", "task", "followup"] = "promise"
    direction: Direction
    action_verb: Optional[str] = None
    linked_date: Optional[str] = None


class RelationshipSignalMetadata(_CamelModel):
    signal_type: SignalType
    relationship_role: str
    relationship_strength: Optional[Literal["strong", "medium", "weak"]] = None


class ContactMetadata(_CamelModel):
    is_valid: bool = True
    formatted: Optional[str] = None


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


class ParsedEntity(_CamelModel):
    """A typed fact extracted from note text."""

    type: EntityType
    value: str
    normalized_value: Optional[str] = None
    confidence: Confidence
    source: Provenance = "deterministic"
    start_index: Optional[int] = None
    end_index: Optional[int] = None


class PersonEntity(ParsedEntity):
    type: Literal["person"] = "person"
    metadata: PersonMetadata


class CompanyEntity(ParsedEntity):
    type: Literal["company"] = "company"
    metadata: CompanyMetadata


class DateEntity(ParsedEntity):
    type: Literal["date"] = "date"
    normalized_value: str  # ISO-8601 instant (UTC)
    metadata: DateMetadata


class LocationEntity(ParsedEntity):
    type: Literal["location"] = "location"
    metadata: LocationMetadata = Field(default_factory=LocationMetadata)


class CommitmentEntity(ParsedEntity):
    type: Literal["commitment"] = "commitment"
    metadata: CommitmentMetadata


class RelationshipSignalEntity(ParsedEntity):
    type: Literal["relationship_signal"] = "relationship_signal"
    metadata: RelationshipSignalMetadata


class ContactEntity(ParsedEntity):
    type: Literal["phone", "email"]
    metadata: ContactMetadata = Field(default_factory=ContactMetadata)


class OtherEntity(ParsedEntity):
    """Entity without category-specific metadata (AI survivors, urls)."""

    type: Literal["other", "url"] = "other"


AnyEntity = Annotated[
    Union[
        PersonEntity,
        CompanyEntity,
        DateEntity,
        LocationEntity,
        CommitmentEntity,
        RelationshipSignalEntity,
        ContactEntity,
        OtherEntity,
    ],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


class StructuredEntities(_CamelModel):
    """Entities grouped by category, each list in extraction order."""

    people: List[PersonEntity] = Field(default_factory=list)
    companies: List[CompanyEntity] = Field(default_factory=list)
    dates: List[DateEntity] = Field(default_factory=list)
    locations: List[LocationEntity] = Field(default_factory=list)
    commitments: List[CommitmentEntity] = Field(default_factory=list)
    relationship_signals: List[RelationshipSignalEntity] = Field(default_factory=list)
    contacts: List[ContactEntity] = Field(default_factory=list)
    other: List[OtherEntity] = Field(default_factory=list)

    def deterministic_entities(self) -> List[AnyEntity]:
        """Flatten every rule-based category in canonical order."""
        return [
            *self.people,
            *self.companies,
            *self.dates,
            *self.locations,
            *self.commitments,
            *self.relationship_signals,
            *self.contacts,
        ]


class ExtractionMetadata(_CamelModel):
    processing_time: float = 0.0  # milliseconds
    deterministic_count: int = 0
    ai_count: int = 0
    total_count: int = 0


class EntityExtractionResult(_CamelModel):
    """Full output of one extraction call."""

    raw: str
    structured: StructuredEntities = Field(default_factory=StructuredEntities)
    all_entities: List[AnyEntity] = Field(default_factory=list)
    metadata: ExtractionMetadata = Field(default_factory=ExtractionMetadata)


class EntitySummary(_CamelModel):
    total: int
    by_type: Dict[str, int]
    highlights: List[str] = Field(default_factory=list)

"""Data models for the production dashboard's four entity kinds."""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EntityType(str, Enum):
    """Enumeration for the entity kinds held in the upstream workspace."""

    CHARACTER = "Character"
    ELEMENT = "Element"
    PUZZLE = "Puzzle"
    TIMELINE_EVENT = "TimelineEvent"


class DashboardModel(BaseModel):
    """Base for records serialized to the UI with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class RelationRef(DashboardModel):
    """A resolved relation: the related page's id and display name."""

    id: str | None  # None when parsed from free text with no backing page
    name: str


class MemoryProperties(BaseModel):
    """Directives parsed from a memory token's description."""

    model_config = ConfigDict(frozen=True)

    parsed_sf_rfid: str | None = None
    sf_value_rating: float | None = None
    sf_memory_type: str | None = None
    sf_group: str | None = None
    sf_group_multiplier: float = 1.0


class Character(DashboardModel):
    """A character in the game, with relations held as page ids."""

    entity_type: Literal["Character"]
    id: str
    name: str = ""
    type: str | None = None
    tier: str | None = None
    logline: str = ""
    overview: str = ""
    emotion: str = ""
    primary_action: str = ""
    connections: float | None = None
    act_focus: str | None = None
    themes: list[str] = Field(default_factory=list)
    memory_sets: list[str] = Field(default_factory=list)
    resolution_paths: list[str] = Field(default_factory=list)
    narrative_threads: list[str] = Field(default_factory=list)
    last_edited: str | None = None

    events: list[str] = Field(default_factory=list)
    puzzles: list[str] = Field(default_factory=list)
    owned_elements: list[str] = Field(default_factory=list)
    associated_elements: list[str] = Field(default_factory=list)
    linked_characters: list[str] = Field(default_factory=list)


class CharacterOverview(DashboardModel):
    """Just enough of a character to list it."""

    id: str
    name: str


class Element(DashboardModel):
    """A physical or digital game element (props, memory tokens, containers)."""

    entity_type: Literal["Element"]
    id: str
    name: str = ""
    basic_type: str | None = None
    description: str = ""
    status: str | None = None
    first_available: str | None = None
    content_link: str | None = None
    production_notes: str = ""
    act_focus: str | None = None
    themes: list[str] = Field(default_factory=list)
    memory_sets: list[str] = Field(default_factory=list)
    narrative_threads: list[str] = Field(default_factory=list)
    last_edited: str | None = None
    # Only present on memory tokens
    properties: MemoryProperties | None = None

    owner: list[str] = Field(default_factory=list)
    container: list[str] = Field(default_factory=list)
    contents: list[str] = Field(default_factory=list)
    container_puzzle: list[str] = Field(default_factory=list)
    required_for_puzzle: list[str] = Field(default_factory=list)
    rewarded_by_puzzle: list[str] = Field(default_factory=list)
    timeline_event: list[str] = Field(default_factory=list)
    associated_characters: list[str] = Field(default_factory=list)


class Puzzle(DashboardModel):
    """A puzzle, keyed by its ``puzzle`` title."""

    entity_type: Literal["Puzzle"]
    id: str
    puzzle: str = ""
    description: str = ""
    story_reveals: str = ""
    timing: str | None = None
    asset_link: str | None = None
    act_focus: str | None = None
    themes: list[str] = Field(default_factory=list)
    memory_sets: list[str] = Field(default_factory=list)
    resolution_paths: list[str] = Field(default_factory=list)
    narrative_threads: list[str] = Field(default_factory=list)
    last_edited: str | None = None

    owner: list[str] = Field(default_factory=list)
    locked_item: list[str] = Field(default_factory=list)
    puzzle_elements: list[str] = Field(default_factory=list)
    rewards: list[str] = Field(default_factory=list)
    parent_item: list[str] = Field(default_factory=list)
    sub_puzzles: list[str] = Field(default_factory=list)
    impacted_characters: list[str] = Field(default_factory=list)
    related_timeline_events: list[str] = Field(default_factory=list)


class TimelineEvent(DashboardModel):
    """A backstory event on the game timeline."""

    entity_type: Literal["TimelineEvent"]
    id: str
    description: str = ""
    date: str | None = None
    mem_type: str = ""
    notes: str = ""
    act_focus: str | None = None
    themes: list[str] = Field(default_factory=list)
    narrative_threads: list[str] = Field(default_factory=list)
    last_edited: str | None = None

    characters_involved: list[str] = Field(default_factory=list)
    memory_evidence: list[str] = Field(default_factory=list)


# Detail variants: relations resolved to {id, name}. A relation left unset
# means its enrichment did not complete, and ``error`` says why.


class CharacterDetail(Character):
    events: list[RelationRef] | None = None
    puzzles: list[RelationRef] | None = None
    owned_elements: list[RelationRef] | None = None
    associated_elements: list[RelationRef] | None = None
    linked_characters: list[RelationRef] | None = None
    error: str | None = None


class ElementDetail(Element):
    owner: list[RelationRef] | None = None
    container: list[RelationRef] | None = None
    contents: list[RelationRef] | None = None
    container_puzzle: list[RelationRef] | None = None
    required_for_puzzle: list[RelationRef] | None = None
    rewarded_by_puzzle: list[RelationRef] | None = None
    timeline_event: list[RelationRef] | None = None
    associated_characters: list[RelationRef] | None = None
    error: str | None = None


class PuzzleDetail(Puzzle):
    owner: list[RelationRef] | None = None
    locked_item: list[RelationRef] | None = None
    puzzle_elements: list[RelationRef] | None = None
    rewards: list[RelationRef] | None = None
    parent_item: list[RelationRef] | None = None
    sub_puzzles: list[RelationRef] | None = None
    impacted_characters: list[RelationRef] | None = None
    related_timeline_events: list[RelationRef] | None = None
    error: str | None = None


class TimelineEventDetail(TimelineEvent):
    characters_involved: list[RelationRef] | None = None
    memory_evidence: list[RelationRef] | None = None
    error: str | None = None


Entity = Annotated[
    Character | Element | Puzzle | TimelineEvent,
    Field(discriminator="entity_type"),
]

EntityDetail = Annotated[
    CharacterDetail | ElementDetail | PuzzleDetail | TimelineEventDetail,
    Field(discriminator="entity_type"),
]

ENTITY_MODELS: dict[EntityType, type[DashboardModel]] = {
    EntityType.CHARACTER: Character,
    EntityType.ELEMENT: Element,
    EntityType.PUZZLE: Puzzle,
    EntityType.TIMELINE_EVENT: TimelineEvent,
}

DETAIL_MODELS: dict[EntityType, type[DashboardModel]] = {
    EntityType.CHARACTER: CharacterDetail,
    EntityType.ELEMENT: ElementDetail,
    EntityType.PUZZLE: PuzzleDetail,
    EntityType.TIMELINE_EVENT: TimelineEventDetail,
}


class Edge(DashboardModel):
    """A directed, labeled connection between two graph nodes."""

    source: str
    target: str
    label: str


class Graph(DashboardModel):
    """Depth-bounded neighbourhood of a center entity."""

    center: Entity
    nodes: list[Entity]
    edges: list[Edge]
    error: str | None = None  # Set when a traversal level had to be abandoned

"""Relation fields of each entity kind and the graph edges they produce."""

from dataclasses import dataclass

from .entities import EntityType

# Canonical edge labels
PARTICIPATES_IN = "participates_in"
OWNS_PUZZLE = "owns_puzzle"
OWNS = "owns"
ASSOCIATED_WITH = "associated_with"
LINKED_TO = "linked_to"
CONTAINS = "contains"
UNLOCKS = "unlocks"
REQUIRES = "requires"
REWARDS = "rewards"
HAS_SUB_PUZZLE = "has_sub_puzzle"
IMPACTS = "impacts"
RELATED_TO = "related_to"
EVIDENCE_OF = "evidence_of"


@dataclass(frozen=True)
class RelationSpec:
    """
    One relation field on an entity kind.

    Attributes:
        field: Attribute name on the mapped entity
        property_name: Logical upstream property name (resolved by naming variant)
        target: Entity kind the related ids point at
        label: Semantic edge label
        reverse: If True the edge runs from the related page to the owning one,
            so both sides of an inverse pair produce the same edge
    """

    field: str
    property_name: str
    target: EntityType
    label: str
    reverse: bool = False


RELATIONS: dict[EntityType, tuple[RelationSpec, ...]] = {
    EntityType.CHARACTER: (
        RelationSpec("events", "Events", EntityType.TIMELINE_EVENT, PARTICIPATES_IN),
        RelationSpec("puzzles", "Character Puzzles", EntityType.PUZZLE, OWNS_PUZZLE),
        RelationSpec("owned_elements", "Owned Elements", EntityType.ELEMENT, OWNS),
        RelationSpec(
            "associated_elements",
            "Associated Elements",
            EntityType.ELEMENT,
            ASSOCIATED_WITH,
        ),
        RelationSpec(
            "linked_characters", "Linked Characters", EntityType.CHARACTER, LINKED_TO
        ),
    ),
    EntityType.ELEMENT: (
        RelationSpec("owner", "Owner", EntityType.CHARACTER, OWNS, reverse=True),
        RelationSpec(
            "container", "Container", EntityType.ELEMENT, CONTAINS, reverse=True
        ),
        RelationSpec("contents", "Contents", EntityType.ELEMENT, CONTAINS),
        RelationSpec(
            "container_puzzle",
            "Container Puzzle",
            EntityType.PUZZLE,
            UNLOCKS,
            reverse=True,
        ),
        RelationSpec(
            "required_for_puzzle",
            "Required For",
            EntityType.PUZZLE,
            REQUIRES,
            reverse=True,
        ),
        RelationSpec(
            "rewarded_by_puzzle",
            "Rewarded by",
            EntityType.PUZZLE,
            REWARDS,
            reverse=True,
        ),
        RelationSpec(
            "timeline_event", "Timeline Event", EntityType.TIMELINE_EVENT, EVIDENCE_OF
        ),
        RelationSpec(
            "associated_characters",
            "Associated Characters",
            EntityType.CHARACTER,
            ASSOCIATED_WITH,
            reverse=True,
        ),
    ),
    EntityType.PUZZLE: (
        RelationSpec("owner", "Owner", EntityType.CHARACTER, OWNS_PUZZLE, reverse=True),
        RelationSpec("locked_item", "Locked Item", EntityType.ELEMENT, UNLOCKS),
        RelationSpec("puzzle_elements", "Puzzle Elements", EntityType.ELEMENT, REQUIRES),
        RelationSpec("rewards", "Rewards", EntityType.ELEMENT, REWARDS),
        RelationSpec(
            "parent_item", "Parent item", EntityType.PUZZLE, HAS_SUB_PUZZLE, reverse=True
        ),
        RelationSpec("sub_puzzles", "Sub-Puzzles", EntityType.PUZZLE, HAS_SUB_PUZZLE),
        RelationSpec(
            "impacted_characters", "Impacted Characters", EntityType.CHARACTER, IMPACTS
        ),
        RelationSpec(
            "related_timeline_events",
            "Related Timeline Events",
            EntityType.TIMELINE_EVENT,
            RELATED_TO,
        ),
    ),
    EntityType.TIMELINE_EVENT: (
        RelationSpec(
            "characters_involved",
            "Characters Involved",
            EntityType.CHARACTER,
            PARTICIPATES_IN,
            reverse=True,
        ),
        RelationSpec(
            "memory_evidence",
            "Memory/Evidence",
            EntityType.ELEMENT,
            EVIDENCE_OF,
            reverse=True,
        ),
    ),
}

# Property holding each kind's page title
TITLE_PROPERTIES: dict[EntityType, str] = {
    EntityType.CHARACTER: "Name",
    EntityType.ELEMENT: "Name",
    EntityType.PUZZLE: "Puzzle",
    EntityType.TIMELINE_EVENT: "Description",
}

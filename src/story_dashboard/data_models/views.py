"""Read-only dashboard views derived from mapped entities."""

from typing import Literal

from .entities import DashboardModel, PuzzleDetail, RelationRef


class EntityWarning(DashboardModel):
    """One data-quality problem found on an entity."""

    warning_type: str
    message: str


class PuzzleWithWarnings(DashboardModel):
    id: str
    name: str
    type: Literal["Puzzle"] = "Puzzle"
    warnings: list[EntityWarning]
    owner: list[RelationRef] | None = None
    timing: str | None = None


class ElementWithWarnings(DashboardModel):
    id: str
    name: str
    type: Literal["Element"] = "Element"
    basic_type: str | None = None
    status: str | None = None
    owner: list[RelationRef] | None = None
    warnings: list[EntityWarning]


class FlowItem(DashboardModel):
    """A puzzle or element taking part in a puzzle's flow."""

    id: str
    name: str
    type: Literal["Puzzle", "Element"]
    basic_type: str | None = None


class FlowPuzzle(DashboardModel):
    id: str
    name: str
    type: Literal["Puzzle"] = "Puzzle"
    properties: PuzzleDetail


class PuzzleFlow(DashboardModel):
    """What a puzzle consumes, produces, unlocks and depends on."""

    central_puzzle: FlowPuzzle
    input_elements: list[FlowItem]
    output_elements: list[FlowItem]
    unlocks_puzzles: list[FlowItem]
    prerequisite_puzzles: list[FlowItem]


class DatabasesMetadata(DashboardModel):
    databases: dict[str, str]
    element_types: list[str]

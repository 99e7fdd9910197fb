"""Data-quality checks for the dashboard's "needs attention" lists."""

from ..data_models.entities import ElementDetail, PuzzleDetail
from ..data_models.views import EntityWarning
from ..mapping.memory_fields import is_memory_token

# Element types that are never expected to feed into or come out of a puzzle
UNCHECKED_ELEMENT_TYPES = {"Character Sheet", "Set Dressing", "Core Narrative"}


def puzzle_warnings(puzzle: PuzzleDetail) -> list[EntityWarning]:
    """Warnings for a puzzle with no rewards, no inputs or no resolution path."""
    warnings = []
    if not puzzle.rewards:
        warnings.append(
            EntityWarning(warning_type="NoRewards", message="Puzzle has no rewards defined.")
        )
    if not puzzle.puzzle_elements:
        warnings.append(
            EntityWarning(
                warning_type="NoInputs",
                message="Puzzle has no input elements defined (puzzleElements).",
            )
        )
    if not puzzle.resolution_paths:
        warnings.append(
            EntityWarning(
                warning_type="NoResolutionPath",
                message="Puzzle does not contribute to any resolution path.",
            )
        )
    return warnings


def element_warnings(element: ElementDetail) -> list[EntityWarning]:
    """
    Warnings for an element that no puzzle uses or rewards, and for memory
    tokens that belong to no memory set.

    Element types in ``UNCHECKED_ELEMENT_TYPES`` never get warnings.
    """
    if element.basic_type in UNCHECKED_ELEMENT_TYPES:
        return []

    warnings = []
    if not element.required_for_puzzle and not element.rewarded_by_puzzle:
        warnings.append(
            EntityWarning(
                warning_type="NotUsedInOrRewardingPuzzles",
                message=(
                    "Element is not used as an input for any puzzle "
                    "and is not a reward from any puzzle."
                ),
            )
        )
    if is_memory_token(element.basic_type) and not element.memory_sets:
        warnings.append(
            EntityWarning(
                warning_type="NoMemorySet",
                message="Memory Token is not part of any Memory Set.",
            )
        )
    return warnings

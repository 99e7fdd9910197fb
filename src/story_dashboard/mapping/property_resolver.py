"""Resolve logical property names against the keys a property bag really has."""

import logging
import re
from collections.abc import Callable
from typing import Any

from .property_extractor import (
    extract_date,
    extract_multi_select,
    extract_number,
    extract_relation,
    extract_rich_text,
    extract_select,
    extract_title,
    extract_url,
)

logger = logging.getLogger(__name__)

# Tried in order against the bag; the first key present wins.
NAME_VARIANTS: tuple[Callable[[str], str], ...] = (
    lambda name: name,  # "Owned Elements"
    lambda name: re.sub(r"\s", "_", name),  # "Owned_Elements"
    lambda name: name.replace("-", "_"),  # "Sub-Puzzles" -> "Sub_Puzzles"
    lambda name: re.sub(r"(\w)/(\w)", r"\1_\2", name),  # "Memory/Evidence"
    lambda name: name.replace("/", " "),  # "Description/Text" -> "Description Text"
    lambda name: re.sub(r"\s*&\s*|[\s/-]+", "_", name),  # "Overview & Key Relationships"
)


def candidate_names(logical_name: str) -> list[str]:
    """Every key spelling tried for ``logical_name``, in priority order."""
    return list(dict.fromkeys(variant(logical_name) for variant in NAME_VARIANTS))


def get_property(bag: Any, logical_name: str) -> Any:
    """
    Look up a property value by its logical name.

    Args:
        bag: The page's property mapping
        logical_name: Human-readable name, e.g. "Owned Elements"

    Returns:
        The raw property value, or None if no naming variant matched
    """
    if not isinstance(bag, dict):
        return None

    for key in candidate_names(logical_name):
        value = bag.get(key)
        if value is not None:
            return value

    logger.warning(
        f'Property "{logical_name}" not found. '
        f"Available properties: {', '.join(map(str, bag.keys()))}"
    )
    return None


def extract_title_by_name(bag: Any, logical_name: str) -> str:
    prop = get_property(bag, logical_name)
    return extract_title(prop) if prop is not None else ""


def extract_rich_text_by_name(bag: Any, logical_name: str) -> str:
    prop = get_property(bag, logical_name)
    return extract_rich_text(prop) if prop is not None else ""


def extract_select_by_name(bag: Any, logical_name: str) -> str | None:
    prop = get_property(bag, logical_name)
    return extract_select(prop) if prop is not None else None


def extract_multi_select_by_name(bag: Any, logical_name: str) -> list[str]:
    prop = get_property(bag, logical_name)
    return extract_multi_select(prop) if prop is not None else []


def extract_relation_by_name(bag: Any, logical_name: str) -> list[str]:
    prop = get_property(bag, logical_name)
    return extract_relation(prop) if prop is not None else []


def extract_date_by_name(bag: Any, logical_name: str) -> str | None:
    prop = get_property(bag, logical_name)
    return extract_date(prop) if prop is not None else None


def extract_number_by_name(bag: Any, logical_name: str) -> int | float | None:
    prop = get_property(bag, logical_name)
    return extract_number(prop) if prop is not None else None


def extract_url_by_name(bag: Any, logical_name: str) -> str | None:
    prop = get_property(bag, logical_name)
    return extract_url(prop) if prop is not None else None

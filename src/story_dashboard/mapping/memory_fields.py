"""
Parse the ``SF_`` directives embedded in a memory token's description.

Designers record scanner data inline, one directive per line::

    SF_RFID: [ABC123]
    SF_ValueRating: [4]
    SF_MemoryType: [Core]
    SF_Group: [Ephemeral Echo (x2.5)]

Unknown ``SF_`` keys are ignored.
"""

import logging
import re

from ..data_models.entities import MemoryProperties

logger = logging.getLogger(__name__)

MEMORY_TYPE_KEYWORDS = ("memory", "token")

DIRECTIVE_PATTERN = re.compile(
    r"^\s*(SF_[A-Za-z]+)\s*:\s*\[?(.*?)\]?\s*$", re.MULTILINE | re.IGNORECASE
)
GROUP_MULTIPLIER_PATTERN = re.compile(
    r"\(\s*(?:x\s*(\d+(?:\.\d+)?)|(\d+(?:\.\d+)?)\s*x)\s*\)\s*$", re.IGNORECASE
)

DEFAULT_GROUP_MULTIPLIER = 1.0


def is_memory_token(basic_type: str | None) -> bool:
    """Whether an element's basic type marks it as a memory token."""
    if not basic_type:
        return False
    lowered = basic_type.lower()
    return any(keyword in lowered for keyword in MEMORY_TYPE_KEYWORDS)


def _parse_float(raw: str) -> float | None:
    try:
        return float(raw)
    except ValueError:
        return None


def parse_group_multiplier(group_label: str) -> float:
    """Read the trailing ``(xN.N)`` multiplier of a group label."""
    match = GROUP_MULTIPLIER_PATTERN.search(group_label)
    if not match:
        return DEFAULT_GROUP_MULTIPLIER
    multiplier = _parse_float(match.group(1) or match.group(2))
    return DEFAULT_GROUP_MULTIPLIER if multiplier is None else multiplier


def parse_memory_fields(description: str | None) -> MemoryProperties:
    """
    Parse memory directives out of free text.

    Args:
        description: The element's description text

    Returns:
        MemoryProperties with one field per recognized directive; the group
        multiplier defaults to 1.0
    """
    values: dict[str, object] = {}
    for key, raw_value in DIRECTIVE_PATTERN.findall(description or ""):
        value = raw_value.strip()
        if not value:
            continue

        key = key.lower()
        if key == "sf_rfid":
            values.setdefault("parsed_sf_rfid", value)
        elif key == "sf_valuerating":
            rating = _parse_float(value)
            if rating is None:
                logger.warning(f"Ignoring non-numeric SF_ValueRating: {value!r}")
            else:
                values.setdefault("sf_value_rating", rating)
        elif key == "sf_memorytype":
            values.setdefault("sf_memory_type", value)
        elif key == "sf_group" and "sf_group" not in values:
            values["sf_group"] = value
            values["sf_group_multiplier"] = parse_group_multiplier(value)

    values.setdefault("sf_group_multiplier", DEFAULT_GROUP_MULTIPLIER)
    return MemoryProperties(**values)

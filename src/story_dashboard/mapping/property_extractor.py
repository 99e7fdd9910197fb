"""
Typed extraction from upstream property values.

Each upstream property value is a tagged shape, e.g. ``{"title": [...]}``,
``{"select": {"name": ...}}`` or ``{"relation": [{"id": ...}]}``. The
extractors below read one shape each and fall back to an empty default on
anything malformed; none of them raise.
"""

from enum import Enum
from typing import Any


class PropertyKind(str, Enum):
    """The value shapes an upstream property can take."""

    TITLE = "title"
    RICH_TEXT = "rich_text"
    SELECT = "select"
    MULTI_SELECT = "multi_select"
    RELATION = "relation"
    DATE = "date"
    NUMBER = "number"
    URL = "url"


def _payload(prop: Any, kind: PropertyKind) -> Any:
    if not isinstance(prop, dict):
        return None
    return prop.get(kind.value)


def _join_text(runs: Any) -> str:
    if not isinstance(runs, list):
        return ""
    parts = []
    for run in runs:
        if isinstance(run, dict) and isinstance(run.get("plain_text"), str):
            parts.append(run["plain_text"])
    return "".join(parts)


def extract_title(prop: Any) -> str:
    """Concatenate the plain text of a title property."""
    return _join_text(_payload(prop, PropertyKind.TITLE))


def extract_rich_text(prop: Any) -> str:
    """Concatenate the plain text of a rich-text property."""
    return _join_text(_payload(prop, PropertyKind.RICH_TEXT))


def extract_select(prop: Any) -> str | None:
    choice = _payload(prop, PropertyKind.SELECT)
    if isinstance(choice, dict) and isinstance(choice.get("name"), str):
        return choice["name"]
    return None


def extract_multi_select(prop: Any) -> list[str]:
    choices = _payload(prop, PropertyKind.MULTI_SELECT)
    if not isinstance(choices, list):
        return []
    return [
        choice["name"]
        for choice in choices
        if isinstance(choice, dict) and isinstance(choice.get("name"), str)
    ]


def extract_relation(prop: Any) -> list[str]:
    """Return the related page ids of a relation property, in order."""
    related = _payload(prop, PropertyKind.RELATION)
    if not isinstance(related, list):
        return []
    return [
        item["id"]
        for item in related
        if isinstance(item, dict) and isinstance(item.get("id"), str) and item["id"]
    ]


def extract_relation_id(prop: Any) -> str | None:
    """Return only the first related page id, or None."""
    ids = extract_relation(prop)
    return ids[0] if ids else None


def extract_date(prop: Any) -> str | None:
    value = _payload(prop, PropertyKind.DATE)
    if isinstance(value, dict) and isinstance(value.get("start"), str):
        return value["start"]
    return None


def extract_number(prop: Any) -> int | float | None:
    """Return the numeric value; zero is a value, only absence gives None."""
    value = _payload(prop, PropertyKind.NUMBER)
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value


def extract_url(prop: Any) -> str | None:
    value = _payload(prop, PropertyKind.URL)
    if isinstance(value, str) and value:
        return value
    return None


FALLBACK_TITLE_PROPERTIES = ("Name", "Puzzle", "Description")


def extract_page_title(page: Any, preferred: str | None = None) -> str:
    """
    Find a page's display title.

    Tries ``preferred`` first, then the usual title properties, then any
    property carrying a title payload.
    """
    properties = page.get("properties") if isinstance(page, dict) else None
    if not isinstance(properties, dict):
        return ""

    candidates = [preferred] if preferred else []
    candidates.extend(FALLBACK_TITLE_PROPERTIES)
    for name in candidates:
        prop = properties.get(name)
        if isinstance(prop, dict) and PropertyKind.TITLE.value in prop:
            return extract_title(prop)

    for prop in properties.values():
        if isinstance(prop, dict) and isinstance(prop.get(PropertyKind.TITLE.value), list):
            return extract_title(prop)
    return ""

"""Shared fixtures: an in-memory workspace standing in for the upstream API."""

import asyncio
import copy
from typing import Any

import pytest

from story_dashboard.data_models.entities import EntityType
from story_dashboard.upstream.config import NotionConfig
from story_dashboard.upstream.exceptions import UpstreamFailureError
from story_dashboard.upstream.interfaces import Page, PageStore

DATABASE_IDS = {
    EntityType.CHARACTER: "db-characters",
    EntityType.TIMELINE_EVENT: "db-timeline",
    EntityType.PUZZLE: "db-puzzles",
    EntityType.ELEMENT: "db-elements",
}


def title(text: str) -> dict:
    return {"title": [{"plain_text": text}]}


def rich_text(text: str) -> dict:
    return {"rich_text": [{"plain_text": text}]}


def select(name: str) -> dict:
    return {"select": {"name": name}}


def multi_select(*names: str) -> dict:
    return {"multi_select": [{"name": name} for name in names]}


def relation(*ids: str) -> dict:
    return {"relation": [{"id": page_id} for page_id in ids]}


MOCK_CHARACTERS = [
    {
        "id": "char-id-1",
        "properties": {
            "Name": title("Alex Reeves"),
            "Type": select("Player"),
            "Tier": select("Core"),
            "Character_Logline": rich_text("A talented engineer"),
            "Events": relation("event-id-1"),
            "Owned_Elements": relation("element-id-1"),
        },
        "last_edited_time": "2023-01-01",
    },
    {
        "id": "char-id-2",
        "properties": {
            "Name": title("Marcus Blackwood"),
            "Type": select("NPC"),
            "Tier": select("Core"),
            "Character_Logline": rich_text("CEO of Blackwood Tech"),
            "Events": relation("event-id-2"),
            "Owned_Elements": relation("element-id-2"),
        },
        "last_edited_time": "2023-01-02",
    },
]

MOCK_TIMELINE_EVENTS = [
    {
        "id": "event-id-1",
        "properties": {
            "Description": title("Party begins"),
            "Date": {"date": {"start": "2023-01-01"}},
            "Characters_Involved": relation("char-id-1", "char-id-2"),
            "Memory_Evidence": relation("element-id-1"),
        },
        "last_edited_time": "2023-01-01",
    },
    {
        "id": "event-id-2",
        "properties": {
            "Description": title("Discovery of the body"),
            "Date": {"date": {"start": "2023-01-02"}},
            "Characters_Involved": relation("char-id-2"),
            "Memory_Evidence": relation("element-id-2"),
        },
        "last_edited_time": "2023-01-02",
    },
]

MOCK_PUZZLES = [
    {
        "id": "puzzle-id-1",
        "properties": {
            "Puzzle": title("Locked Safe"),
            "Description_Solution": rich_text("A safe that is locked."),
            "Owner": relation("char-id-1"),
            "Timing": select("Act 1"),
            "Rewards": relation("element-id-1"),
            "Narrative_Threads": multi_select("Memory Drug"),
        },
        "last_edited_time": "2023-01-01",
    },
    {
        "id": "puzzle-id-2",
        "properties": {
            "Puzzle": title("Computer Password"),
            "Description_Solution": rich_text("A computer needs a password."),
            "Owner": relation("char-id-2"),
            "Timing": select("Act 1"),
            "Rewards": relation("element-id-2"),
            "Narrative_Threads": multi_select("Memory Drug", "Blackwood Tech"),
        },
        "last_edited_time": "2023-01-02",
    },
]

MOCK_ELEMENTS = [
    {
        "id": "element-id-1",
        "properties": {
            "Name": title("Memory Video 1"),
            "Basic_Type": select("Memory Token Video"),
            "Owner": relation("char-id-1"),
            "Description_Text": rich_text("A corrupted memory video"),
        },
        "last_edited_time": "2023-01-01",
    },
    {
        "id": "element-id-2",
        "properties": {
            "Name": title("CEO ID Badge"),
            "Basic_Type": select("Prop"),
            "Owner": relation("char-id-2"),
            "Description_Text": rich_text("Access badge for CEO office"),
        },
        "last_edited_time": "2023-01-02",
    },
]

MOCK_DATABASES = {
    DATABASE_IDS[EntityType.CHARACTER]: MOCK_CHARACTERS,
    DATABASE_IDS[EntityType.TIMELINE_EVENT]: MOCK_TIMELINE_EVENTS,
    DATABASE_IDS[EntityType.PUZZLE]: MOCK_PUZZLES,
    DATABASE_IDS[EntityType.ELEMENT]: MOCK_ELEMENTS,
}


class InMemoryPageStore(PageStore):
    """
    Page store over a dict of pages.

    Records every call. ``fail_batches`` makes batched fetches raise and
    ``batch_delay`` makes them stall for that many seconds first;
    ``page_delay`` does the same for single-page fetches. ``batch_events``
    logs ``("start" | "end", ids)`` around each batched fetch.
    """

    def __init__(self, pages: list[Page], databases: dict[str, list[Page]] | None = None):
        self.pages = {page["id"]: page for page in pages}
        self.databases = databases or {}
        self.page_calls: list[str] = []
        self.batch_calls: list[list[str]] = []
        self.batch_events: list[tuple[str, tuple[str, ...]]] = []
        self.query_calls: list[tuple[str, dict[str, Any] | None]] = []
        self.fail_batches = False
        self.batch_delay = 0.0
        self.page_delay = 0.0

    async def get_page(self, page_id: str) -> Page | None:
        self.page_calls.append(page_id)
        if self.page_delay:
            await asyncio.sleep(self.page_delay)
        return self.pages.get(page_id)

    async def get_pages_by_ids(self, page_ids: list[str]) -> list[Page]:
        self.batch_calls.append(list(page_ids))
        self.batch_events.append(("start", tuple(page_ids)))
        if self.batch_delay:
            await asyncio.sleep(self.batch_delay)
        self.batch_events.append(("end", tuple(page_ids)))
        if self.fail_batches:
            raise UpstreamFailureError("upstream unavailable")
        return [self.pages[pid] for pid in page_ids if pid in self.pages]

    async def query_database(
        self, database_id: str, filter: dict[str, Any] | None = None
    ) -> list[Page]:
        self.query_calls.append((database_id, filter))
        return self.databases.get(database_id, [])


@pytest.fixture
def mock_pages() -> dict[str, Page]:
    """Every mock page by id (deep-copied per test)."""
    pages = MOCK_CHARACTERS + MOCK_TIMELINE_EVENTS + MOCK_PUZZLES + MOCK_ELEMENTS
    return {page["id"]: copy.deepcopy(page) for page in pages}


@pytest.fixture
def page_store(mock_pages) -> InMemoryPageStore:
    """In-memory store over the mock workspace."""
    databases = {
        db_id: [mock_pages[page["id"]] for page in pages]
        for db_id, pages in MOCK_DATABASES.items()
    }
    return InMemoryPageStore(list(mock_pages.values()), databases)


@pytest.fixture
def notion_config() -> NotionConfig:
    return NotionConfig(api_key="test-key", database_ids=dict(DATABASE_IDS))

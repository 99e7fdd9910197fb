"""Tests for the Notion-backed page store, using a stand-in client."""

import asyncio

import httpx
import pytest

from story_dashboard.data_models.entities import EntityType
from story_dashboard.upstream.config import NotionConfig
from story_dashboard.upstream.exceptions import ConfigurationError, UpstreamFailureError
from story_dashboard.upstream.stores import NotionPageStore


class FakePages:
    def __init__(self, pages, broken):
        self.pages = pages
        self.broken = broken

    async def retrieve(self, page_id):
        if page_id in self.broken:
            raise httpx.ConnectError(f"cannot reach {page_id}")
        return self.pages[page_id]


class FakeClient:
    """Just enough of the client surface the store touches."""

    def __init__(self, pages=None, broken=(), query_responses=None):
        self.pages = FakePages(pages or {}, set(broken))
        self.query_responses = list(query_responses or [])
        self.requests = []
        self.closed = False

    async def request(self, path, method, body=None):
        self.requests.append((path, method, dict(body or {})))
        return self.query_responses.pop(0)

    async def aclose(self):
        self.closed = True


@pytest.fixture
def config():
    return NotionConfig(api_key="test-key", max_concurrency=2)


class TestNotionPageStore:
    def test_batch_drops_failed_pages(self, config):
        client = FakeClient(pages={"a": {"id": "a"}, "c": {"id": "c"}}, broken={"b"})
        store = NotionPageStore(config, client=client)
        pages = asyncio.run(store.get_pages_by_ids(["a", "b", "c", "a"]))
        assert [page["id"] for page in pages] == ["a", "c"]

    def test_batch_raises_when_everything_fails(self, config):
        store = NotionPageStore(config, client=FakeClient(broken={"a", "b"}))
        with pytest.raises(UpstreamFailureError, match="All 2 pages"):
            asyncio.run(store.get_pages_by_ids(["a", "b"]))

    def test_empty_batch_makes_no_requests(self, config):
        store = NotionPageStore(config, client=FakeClient())
        assert asyncio.run(store.get_pages_by_ids([])) == []

    def test_transport_error_on_single_page(self, config):
        store = NotionPageStore(config, client=FakeClient(broken={"a"}))
        with pytest.raises(UpstreamFailureError):
            asyncio.run(store.get_page("a"))

    def test_query_follows_cursors(self, config):
        client = FakeClient(
            query_responses=[
                {"results": [{"id": "a"}], "has_more": True, "next_cursor": "cur-1"},
                {"results": [{"id": "b"}], "has_more": False, "next_cursor": None},
            ]
        )
        store = NotionPageStore(config, client=client)
        notion_filter = {"property": "Tier", "select": {"equals": "Core"}}
        pages = asyncio.run(store.query_database("db-1", notion_filter))

        assert [page["id"] for page in pages] == ["a", "b"]
        assert client.requests[0] == ("databases/db-1/query", "POST", {"filter": notion_filter})
        assert client.requests[1][2]["start_cursor"] == "cur-1"

    def test_close_releases_client(self, config):
        client = FakeClient()
        store = NotionPageStore(config, client=client)
        asyncio.run(store.close())
        assert client.closed

    def test_missing_api_key_fails_on_first_use(self):
        store = NotionPageStore(NotionConfig(api_key=None))
        with pytest.raises(ConfigurationError):
            store.client  # noqa: B018


class TestNotionConfig:
    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("NOTION_API_KEY", "secret")
        monkeypatch.setenv("NOTION_PUZZLES_DB", "puzzles-db")
        monkeypatch.setenv("NOTION_MAX_CONCURRENCY", "5")
        config = NotionConfig.from_environment()

        assert config.api_key == "secret"
        assert config.database_id_for(EntityType.PUZZLE) == "puzzles-db"
        assert config.max_concurrency == 5
        assert config.cache_ttl == 300

    def test_validate_requires_key(self):
        with pytest.raises(ConfigurationError):
            NotionConfig(api_key="").validate()

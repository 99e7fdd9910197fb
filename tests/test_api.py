"""HTTP tests for the dashboard API."""

import pytest
from fastapi.testclient import TestClient

from story_dashboard.api.dependencies import (
    get_entity_service,
    get_graph_config,
    get_notion_config,
    get_page_cache,
    get_page_store,
)
from story_dashboard.api.main import create_app
from story_dashboard.config.graph_config import GraphConfig
from story_dashboard.upstream.cache import TTLPageCache


@pytest.fixture
def page_cache():
    return TTLPageCache(ttl_seconds=300)


@pytest.fixture
def app(page_store, notion_config, page_cache):
    app = create_app()
    app.dependency_overrides[get_page_store] = lambda: page_store
    app.dependency_overrides[get_notion_config] = lambda: notion_config
    app.dependency_overrides[get_graph_config] = lambda: GraphConfig(level_timeout_seconds=2.0)
    app.dependency_overrides[get_page_cache] = lambda: page_cache
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


class TestHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "running" in response.json()["message"]


class TestListing:
    def test_list_characters(self, client):
        response = client.get("/api/characters")
        assert response.status_code == 200
        characters = response.json()
        assert [c["name"] for c in characters] == ["Alex Reeves", "Marcus Blackwood"]
        assert characters[0]["ownedElements"] == [{"id": "element-id-1", "name": "Memory Video 1"}]
        assert "connections" not in characters[0]
        assert "error" not in characters[0]

    def test_list_passes_filters(self, client, page_store):
        client.get("/api/elements", params={"filterGroup": "memoryTypes", "status": "Done"})
        _, notion_filter = page_store.query_calls[-1]
        assert notion_filter["and"][0] == {"property": "Status", "select": {"equals": "Done"}}

    def test_character_overview(self, client):
        response = client.get("/api/characters/overview")
        assert response.status_code == 200
        assert response.json() == [
            {"id": "char-id-1", "name": "Alex Reeves"},
            {"id": "char-id-2", "name": "Marcus Blackwood"},
        ]

    def test_list_timeline(self, client):
        events = client.get("/api/timeline").json()
        assert events[0]["charactersInvolved"][1]["name"] == "Marcus Blackwood"


class TestDetail:
    def test_get_element(self, client):
        response = client.get("/api/elements/element-id-1")
        assert response.status_code == 200
        element = response.json()
        assert element["entityType"] == "Element"
        assert element["basicType"] == "Memory Token Video"
        assert element["properties"]["sf_group_multiplier"] == 1.0

    @pytest.mark.parametrize(
        ("collection", "message"),
        [
            ("characters", "Character not found"),
            ("elements", "Element not found"),
            ("puzzles", "Puzzle not found"),
            ("timeline", "Timeline event not found"),
        ],
    )
    def test_not_found(self, client, collection, message):
        response = client.get(f"/api/{collection}/nope")
        assert response.status_code == 404
        assert response.json() == {"error": message}

    def test_stalled_upstream_is_500(self, app, page_store):
        page_store.page_delay = 0.5
        app.dependency_overrides[get_graph_config] = lambda: GraphConfig(
            level_timeout_seconds=0.05
        )
        response = TestClient(app).get("/api/puzzles/puzzle-id-1")
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to retrieve puzzle"}


class TestWarnings:
    def test_puzzle_warnings(self, client):
        response = client.get("/api/puzzles/warnings")
        assert response.status_code == 200
        first = response.json()[0]
        assert first["type"] == "Puzzle"
        assert first["name"] == "Locked Safe"
        assert first["owner"] == [{"id": "char-id-1", "name": "Alex Reeves"}]
        assert first["warnings"][0] == {
            "warningType": "NoInputs",
            "message": "Puzzle has no input elements defined (puzzleElements).",
        }

    def test_element_warnings(self, client):
        response = client.get("/api/elements/warnings")
        assert response.status_code == 200
        elements = {e["id"]: e for e in response.json()}
        assert elements["element-id-2"]["type"] == "Element"
        assert elements["element-id-2"]["basicType"] == "Prop"


class TestPuzzleFlow:
    def test_flow(self, client, mock_pages):
        mock_pages["puzzle-id-1"]["properties"]["Sub-Puzzles"] = {
            "relation": [{"id": "puzzle-id-2"}]
        }
        response = client.get("/api/puzzles/puzzle-id-1/flow")
        assert response.status_code == 200
        flow = response.json()
        assert flow["centralPuzzle"]["type"] == "Puzzle"
        assert flow["centralPuzzle"]["properties"]["entityType"] == "Puzzle"
        assert flow["outputElements"] == [
            {
                "id": "element-id-1",
                "name": "Memory Video 1",
                "type": "Element",
                "basicType": "Memory Token Video",
            }
        ]
        assert flow["unlocksPuzzles"] == [
            {"id": "puzzle-id-2", "name": "Computer Password", "type": "Puzzle"}
        ]
        assert flow["inputElements"] == []

    def test_flow_not_found(self, client):
        response = client.get("/api/puzzles/nope/flow")
        assert response.status_code == 404
        assert response.json() == {"error": "Puzzle not found"}


class TestMetadata:
    def test_databases_metadata(self, client):
        response = client.get("/api/metadata")
        assert response.status_code == 200
        body = response.json()
        assert body["databases"]["timeline"] == "db-timeline"
        assert body["elementTypes"] == [
            "Prop",
            "Set Dressing",
            "Memory Token Video",
            "Character Sheet",
        ]

    def test_narrative_threads(self, client):
        response = client.get("/api/narrative-threads")
        assert response.status_code == 200
        assert response.json() == ["Blackwood Tech", "Memory Drug"]

    def test_error_model_documented(self, client):
        schema = client.get("/openapi.json").json()
        responses = schema["paths"]["/api/puzzles/{entity_id}"]["get"]["responses"]
        assert responses["404"]["content"]["application/json"]["schema"]["$ref"].endswith(
            "/ErrorResponse"
        )
        assert "ErrorResponse" in schema["components"]["schemas"]


class TestGraph:
    def test_graph_depth_one(self, client):
        graph = client.get("/api/characters/char-id-1/graph", params={"depth": "1"}).json()
        assert graph["center"]["id"] == "char-id-1"
        assert {n["id"] for n in graph["nodes"]} == {"char-id-1", "event-id-1", "element-id-1"}
        assert len(graph["edges"]) >= 2
        assert "error" not in graph

    def test_invalid_depth_is_not_an_error(self, client):
        invalid = client.get("/api/characters/char-id-1/graph", params={"depth": "notanumber"})
        default = client.get("/api/characters/char-id-1/graph")
        assert invalid.status_code == 200
        assert invalid.json() == default.json()

    def test_depth_zero(self, client):
        graph = client.get("/api/puzzles/puzzle-id-1/graph", params={"depth": 0}).json()
        assert [n["id"] for n in graph["nodes"]] == ["puzzle-id-1"]
        assert graph["edges"] == []

    def test_graph_not_found(self, client):
        response = client.get("/api/elements/nope/graph")
        assert response.status_code == 404
        assert "not found" in response.json()["error"]


class TestErrors:
    def test_unhandled_error_is_generic_500(self, app):
        class BrokenService:
            async def list_entities(self, entity_type, query):
                raise RuntimeError("boom")

        app.dependency_overrides[get_entity_service] = lambda: BrokenService()
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/api/puzzles")
        assert response.status_code == 500
        assert response.json() == {"error": "Something went wrong!"}

    def test_unknown_route(self, client):
        response = client.get("/api/unknown")
        assert response.status_code == 404
        assert "error" in response.json()


class TestCache:
    def test_clear(self, client, page_cache):
        page_cache.add("char-id-1", {"id": "char-id-1"})
        response = client.post("/api/cache/clear")
        assert response.status_code == 200
        assert response.json() == {"cleared": 1}
        assert len(page_cache) == 0

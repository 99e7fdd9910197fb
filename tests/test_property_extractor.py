"""Tests for typed property extraction."""

import pytest

from story_dashboard.mapping.property_extractor import (
    extract_date,
    extract_multi_select,
    extract_number,
    extract_page_title,
    extract_relation,
    extract_relation_id,
    extract_rich_text,
    extract_select,
    extract_title,
    extract_url,
)

MALFORMED = [None, "text", 42, [], {}, {"relation": None}, {"multi_select": "x"}]


class TestTextExtraction:
    def test_concatenates_runs_without_separator(self):
        prop = {"title": [{"plain_text": "Alex "}, {"plain_text": "Reeves"}]}
        assert extract_title(prop) == "Alex Reeves"

    def test_rich_text(self):
        prop = {"rich_text": [{"plain_text": "A talented"}, {"plain_text": " engineer"}]}
        assert extract_rich_text(prop) == "A talented engineer"

    @pytest.mark.parametrize("prop", [None, {}, {"title": None}, {"title": "x"}, {"title": []}])
    def test_missing_text_is_empty_string(self, prop):
        assert extract_title(prop) == ""

    def test_skips_runs_without_plain_text(self):
        prop = {"rich_text": [{"plain_text": "a"}, {"text": "b"}, "c", {"plain_text": "d"}]}
        assert extract_rich_text(prop) == "ad"


class TestChoiceExtraction:
    def test_select(self):
        assert extract_select({"select": {"name": "Core"}}) == "Core"

    @pytest.mark.parametrize("prop", [None, {}, {"select": None}, {"select": {"id": "1"}}])
    def test_select_missing(self, prop):
        assert extract_select(prop) is None

    def test_multi_select_keeps_order(self):
        prop = {"multi_select": [{"name": "Memory Drug"}, {"name": "Blackwood Tech"}]}
        assert extract_multi_select(prop) == ["Memory Drug", "Blackwood Tech"]

    @pytest.mark.parametrize("prop", MALFORMED)
    def test_multi_select_malformed_is_empty(self, prop):
        assert extract_multi_select(prop) == []


class TestRelationExtraction:
    def test_relation_ids_in_order(self):
        prop = {"relation": [{"id": "char-id-1"}, {"id": "char-id-2"}]}
        assert extract_relation(prop) == ["char-id-1", "char-id-2"]

    @pytest.mark.parametrize("prop", MALFORMED)
    def test_relation_malformed_is_empty(self, prop):
        assert extract_relation(prop) == []

    def test_relation_skips_entries_without_id(self):
        prop = {"relation": [{"id": "a"}, {}, None, {"id": ""}, {"id": "b"}]}
        assert extract_relation(prop) == ["a", "b"]

    def test_relation_id_first_only(self):
        assert extract_relation_id({"relation": [{"id": "a"}, {"id": "b"}]}) == "a"
        assert extract_relation_id({"relation": []}) is None


class TestScalarExtraction:
    def test_number_zero_is_a_value(self):
        assert extract_number({"number": 0}) == 0

    @pytest.mark.parametrize("prop", [{}, {"number": None}, None, {"number": "3"}, {"number": True}])
    def test_number_missing(self, prop):
        assert extract_number(prop) is None

    def test_number_float(self):
        assert extract_number({"number": 2.5}) == 2.5

    def test_date_start(self):
        assert extract_date({"date": {"start": "2023-01-01", "end": None}}) == "2023-01-01"
        assert extract_date({"date": None}) is None

    def test_url(self):
        assert extract_url({"url": "https://example.com"}) == "https://example.com"
        assert extract_url({"url": ""}) is None
        assert extract_url({"url": None}) is None


class TestPageTitle:
    def test_preferred_property(self):
        page = {"properties": {"Puzzle": {"title": [{"plain_text": "Locked Safe"}]}}}
        assert extract_page_title(page, "Puzzle") == "Locked Safe"

    def test_falls_back_to_any_title_property(self):
        page = {"properties": {"Event": {"title": [{"plain_text": "Party begins"}]}}}
        assert extract_page_title(page, "Description") == "Party begins"

    def test_no_properties(self):
        assert extract_page_title({"id": "x"}) == ""
        assert extract_page_title(None) == ""

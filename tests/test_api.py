"""End-to-end tests for the HTTP endpoints."""

import hashlib
from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient

from app.main import create_app


def sha256_hash(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8")).hexdigest()


def post(client, value):
    return client.post("/strings", json={"value": value})


def values(resp):
    return sorted(item["value"] for item in resp.json()["data"])


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class TestHealth:
    def test_root(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


# ---------------------------------------------------------------------------
# POST /strings
# ---------------------------------------------------------------------------


class TestCreateString:
    def test_create(self, client):
        resp = post(client, "Race car")
        assert resp.status_code == 201
        data = resp.json()
        assert set(data) == {"id", "value", "properties", "created_at"}
        assert data["id"] == sha256_hash("Race car")
        assert data["value"] == "Race car"
        assert data["properties"] == {
            "length": 8,
            "is_palindrome": True,
            "unique_characters": 6,
            "word_count": 2,
            "sha256_hash": sha256_hash("Race car"),
            "character_frequency_map": {"R": 1, "a": 2, "c": 2, "e": 1, " ": 1, "r": 1},
        }

    def test_duplicate(self, client):
        assert post(client, "twice").status_code == 201
        resp = post(client, "twice")
        assert resp.status_code == 409
        assert "error" in resp.json()

    def test_missing_value(self, client):
        resp = client.post("/strings", json={})
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_missing_body(self, client):
        assert client.post("/strings").status_code == 400

    def test_malformed_json(self, client):
        resp = client.post(
            "/strings",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400

    @pytest.mark.parametrize("value", [123, None, ["a"], {"a": 1}, True])
    def test_wrong_type(self, client, value):
        resp = post(client, value)
        assert resp.status_code == 422
        assert "error" in resp.json()

    def test_lone_surrogate_rejected(self, client):
        resp = client.post(
            "/strings",
            content='{"value": "\\ud800"}',
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 422
        assert "error" in resp.json()
        assert client.get("/strings").json()["count"] == 0

    def test_empty_string_allowed(self, client):
        resp = post(client, "")
        assert resp.status_code == 201
        assert resp.json()["properties"]["word_count"] == 0


# ---------------------------------------------------------------------------
# GET / DELETE /strings/{value}
# ---------------------------------------------------------------------------


class TestSingleString:
    def test_get(self, client):
        created = post(client, "Able was I ere I saw Elba").json()
        resp = client.get("/strings/" + quote("Able was I ere I saw Elba"))
        assert resp.status_code == 200
        assert resp.json() == created

    def test_get_missing(self, client):
        resp = client.get("/strings/ghost")
        assert resp.status_code == 404
        assert "error" in resp.json()

    def test_value_with_slash(self, client):
        post(client, "either/or")
        resp = client.get("/strings/" + quote("either/or", safe=""))
        assert resp.status_code == 200
        assert resp.json()["value"] == "either/or"

    def test_unicode_value(self, client):
        post(client, "ñandú 😀")
        resp = client.get("/strings/" + quote("ñandú 😀"))
        assert resp.status_code == 200
        assert resp.json()["properties"]["length"] == 7

    def test_delete(self, client):
        post(client, "short lived")
        resp = client.delete("/strings/" + quote("short lived"))
        assert resp.status_code == 204
        assert resp.content == b""
        assert client.get("/strings/" + quote("short lived")).status_code == 404

    def test_delete_missing(self, client):
        assert client.delete("/strings/never").status_code == 404

    def test_delete_twice(self, client):
        post(client, "once")
        assert client.delete("/strings/once").status_code == 204
        assert client.delete("/strings/once").status_code == 404


# ---------------------------------------------------------------------------
# GET /strings
# ---------------------------------------------------------------------------


class TestListStrings:
    @pytest.fixture(autouse=True)
    def populate(self, client):
        for value in ["racecar", "level", "hello world", "a", "step on no pets", "zebra"]:
            assert post(client, value).status_code == 201

    def test_no_filters(self, client):
        resp = client.get("/strings")
        assert resp.status_code == 200
        body = resp.json()
        assert body["count"] == 6
        assert len(body["data"]) == 6
        assert body["filters_applied"] == {}

    def test_palindrome_min_length(self, client):
        resp = client.get("/strings", params={"min_length": 5, "is_palindrome": "true"})
        assert resp.status_code == 200
        assert values(resp) == ["level", "racecar", "step on no pets"]
        assert resp.json()["filters_applied"] == {"is_palindrome": True, "min_length": 5}

    def test_filter_order_does_not_matter(self, client):
        a = client.get("/strings?is_palindrome=true&min_length=5")
        b = client.get("/strings?min_length=5&is_palindrome=true")
        assert values(a) == values(b)

    def test_max_length_and_word_count(self, client):
        resp = client.get("/strings", params={"max_length": 11, "word_count": 2})
        assert values(resp) == ["hello world"]

    def test_contains_character(self, client):
        resp = client.get("/strings", params={"contains_character": "z"})
        assert values(resp) == ["zebra"]
        assert resp.json()["count"] == 1

    def test_is_palindrome_false(self, client):
        resp = client.get("/strings", params={"is_palindrome": "false"})
        assert values(resp) == ["hello world", "zebra"]

    @pytest.mark.parametrize("params", [
        {"min_length": "abc"},
        {"max_length": -1},
        {"word_count": "two"},
        {"is_palindrome": "maybe"},
        {"contains_character": "ab"},
    ])
    def test_invalid_params(self, client, params):
        resp = client.get("/strings", params=params)
        assert resp.status_code == 400
        assert "error" in resp.json()


# ---------------------------------------------------------------------------
# GET /strings/filter-by-natural-language
# ---------------------------------------------------------------------------


class TestNaturalLanguage:
    @pytest.fixture(autouse=True)
    def populate(self, client):
        for value in ["racecar", "level", "pizza", "buzz word", "zz"]:
            assert post(client, value).status_code == 201

    def test_longer_than_containing_letter(self, client):
        query = "strings longer than 3 containing the letter z"
        resp = client.get("/strings/filter-by-natural-language", params={"query": query})
        assert resp.status_code == 200
        body = resp.json()
        assert body["interpreted_query"] == {
            "original": query,
            "parsed_filters": {"min_length": 4, "contains_character": "z"},
        }
        assert values(resp) == ["buzz word", "pizza"]
        assert body["count"] == 2

    def test_single_word_palindromes(self, client):
        resp = client.get(
            "/strings/filter-by-natural-language",
            params={"query": "all single word palindromic strings"},
        )
        assert values(resp) == ["level", "racecar", "zz"]

    def test_unparsed_query_matches_everything(self, client):
        resp = client.get("/strings/filter-by-natural-language", params={"query": "anything goes"})
        assert resp.status_code == 200
        assert resp.json()["count"] == 5
        assert resp.json()["interpreted_query"]["parsed_filters"] == {}

    def test_missing_query(self, client):
        resp = client.get("/strings/filter-by-natural-language")
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_empty_query(self, client):
        assert client.get("/strings/filter-by-natural-language?query=").status_code == 400


# ---------------------------------------------------------------------------
# Restart
# ---------------------------------------------------------------------------


class TestRestart:
    def test_records_survive_restart(self, settings):
        with TestClient(create_app(settings)) as first:
            ids = {post(first, v).json()["id"] for v in ["one", "two words", "kayak"]}
            first.delete("/strings/one")
            ids.discard(sha256_hash("one"))

        with TestClient(create_app(settings)) as second:
            resp = second.get("/strings")
            assert {item["id"] for item in resp.json()["data"]} == ids
            assert post(second, "kayak").status_code == 409

    def test_corrupt_data_file_starts_empty(self, settings, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text("garbage", encoding="utf-8")
        with TestClient(create_app(settings)) as client:
            assert client.get("/").status_code == 200
            assert client.get("/strings").json()["count"] == 0


def test_unknown_route(client):
    resp = client.get("/nowhere")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}

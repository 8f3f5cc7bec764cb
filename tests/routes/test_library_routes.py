from __future__ import annotations

import json
from datetime import datetime

import pytest


def _library_cookie(client):
    cookie = client.get_cookie("userLibrary")
    assert cookie is not None
    return cookie


def test_add_to_empty_library(client):
    resp = client.post("/api/library/add", json={"id": "99", "title": "Test Manga"})

    assert resp.status_code == 200
    assert resp.get_json() == {
        "message": "Manga added to library successfully",
        "manga": {"id": "99", "title": "Test Manga"},
    }
    cookie = _library_cookie(client)
    assert cookie.http_only
    assert cookie.max_age == 30 * 24 * 60 * 60
    document = json.loads(cookie.decoded_value)
    assert len(document["manga"]) == 1
    entry = document["manga"][0]
    assert entry["id"] == "99"
    assert entry["title"] == "Test Manga"
    datetime.fromisoformat(entry["createdAt"].replace("Z", "+00:00"))


def test_add_same_id_twice_keeps_one_entry(client):
    client.post("/api/library/add", json={"id": "5", "title": "Blue Box", "status": "PLANNING", "progress": 0})
    client.post("/api/library/add", json={"id": "5", "title": "Blue Box", "status": "CURRENT", "progress": 8})
    client.post("/api/library/add", json={"id": "6", "title": "Kagurabachi", "status": "CURRENT"})

    library = client.get("/api/library/add").get_json()

    assert [e["id"] for e in library["manga"]] == ["5", "6"]
    first = library["manga"][0]
    assert first["status"] == "CURRENT"
    assert first["progress"] == 8
    assert "updatedAt" in first
    assert "updatedAt" not in library["manga"][1]


@pytest.mark.parametrize("payload", [{"title": "No id"}, {"id": "1"}, []])
def test_add_rejects_invalid_entries(client, payload):
    resp = client.post("/api/library/add", json=payload)

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Invalid manga data"}
    assert client.get_cookie("userLibrary") is None


def test_add_rejects_non_json_body(client):
    resp = client.post("/api/library/add", data="id=1", content_type="text/plain")

    assert resp.status_code == 400


def test_get_library_filters_by_section(client):
    client.post("/api/library/add", json={"id": "1", "title": "A", "status": "CURRENT"})
    client.post("/api/library/add", json={"id": "2", "title": "B", "status": "completed"})

    everything = client.get("/api/library").get_json()
    completed = client.get("/api/library?section=COMPLETED").get_json()

    assert len(everything["manga"]) == 2
    assert [e["id"] for e in completed["manga"]] == ["2"]


def test_malformed_cookie_reads_as_empty(client):
    client.set_cookie("userLibrary", "definitely not json")

    assert client.get("/api/library").get_json() == {"manga": []}

    resp = client.post("/api/library/add", json={"id": "1", "title": "Fresh"})
    assert resp.status_code == 200
    assert [e["id"] for e in client.get("/api/library").get_json()["manga"]] == ["1"]


def test_cookie_with_non_object_entries_reads_as_empty(client):
    client.set_cookie("userLibrary", json.dumps({"manga": [None]}))

    read = client.get("/api/library?section=current")
    assert read.status_code == 200
    assert read.get_json() == {"manga": []}

    added = client.post("/api/library/add", json={"id": "1", "title": "Fresh"})
    assert added.status_code == 200
    document = json.loads(_library_cookie(client).decoded_value)
    assert [e["id"] for e in document["manga"]] == ["1"]

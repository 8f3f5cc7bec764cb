from __future__ import annotations

import json

import pytest

from mangashelf.errors import ValidationError
from mangashelf.services import library_service


def test_adding_same_id_twice_updates_in_place():
    library = library_service.empty_library()

    library_service.upsert_entry(library, {"id": "5", "title": "Ichi the Witch", "status": "PLANNING", "progress": 0})
    library_service.upsert_entry(library, {"id": "5", "title": "Ichi the Witch", "status": "CURRENT", "progress": 12})

    assert len(library["manga"]) == 1
    entry = library["manga"][0]
    assert entry["status"] == "CURRENT"
    assert entry["progress"] == 12
    assert "createdAt" in entry
    assert "updatedAt" in entry


def test_different_ids_append():
    library = library_service.empty_library()

    library_service.upsert_entry(library, {"id": "1", "title": "One"})
    library_service.upsert_entry(library, {"id": "2", "title": "Two"})

    assert [e["id"] for e in library["manga"]] == ["1", "2"]
    assert all("updatedAt" not in e for e in library["manga"])


@pytest.mark.parametrize("entry", [{}, {"id": "1"}, {"title": "No id"}, {"id": "", "title": "x"}, ["id", "title"]])
def test_entry_requires_id_and_title(entry):
    with pytest.raises(ValidationError) as excinfo:
        library_service.upsert_entry(library_service.empty_library(), entry)
    assert excinfo.value.message == "Invalid manga data"


@pytest.mark.parametrize("raw", [
    None, "", "not json", json.dumps([1, 2]), json.dumps({"manga": "nope"}),
    json.dumps({"manga": [None]}),
    json.dumps({"manga": [{"id": "1", "title": "ok"}, "stray"]}),
])
def test_load_library_falls_back_to_empty(raw):
    cookies = {} if raw is None else {"userLibrary": raw}
    assert library_service.load_library(cookies) == {"manga": []}


def test_filter_section_is_case_insensitive_exact_match():
    library = {"manga": [
        {"id": "1", "title": "a", "status": "CURRENT"},
        {"id": "2", "title": "b", "status": "current"},
        {"id": "3", "title": "c", "status": "CURRENTLY"},
        {"id": "4", "title": "d"},
    ]}

    filtered = library_service.filter_section(library, "Current")

    assert [e["id"] for e in filtered["manga"]] == ["1", "2"]
    assert library_service.filter_section(library, None) is library

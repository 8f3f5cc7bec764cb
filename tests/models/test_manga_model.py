from datetime import datetime

import pytest

from mangashelf import db
from mangashelf.errors import ValidationError
from mangashelf.models.manga import Manga


def test_defaults_and_json_projection(app):
    released = datetime(2026, 10, 1, 12, 0, 0)
    manga = Manga(
        title=" Blue Box ",
        description="Badminton and basketball.",
        genres=["Romance", "Slice of Life"],
        latest_chapter_release_date=released,
    )
    db.session.add(manga)
    db.session.commit()

    data = manga.to_dict()
    assert data["title"] == "Blue Box"
    assert data["coverImage"] == "/default-manga-cover.jpg"
    assert data["status"] == "Ongoing"
    assert data["genres"] == ["Romance", "Slice of Life"]
    assert data["latestChapter"] == {"number": 1, "releaseDate": released.isoformat()}
    assert data["totalChapters"] == 0
    assert data["rating"] == 0


@pytest.mark.parametrize(
    "fields",
    [
        {"title": ""},
        {"description": ""},
        {"genres": ["Action", "Cooking"]},
        {"status": "Cancelled"},
        {"rating": 11},
        {"rating": -0.5},
        {"total_chapters": -3},
    ],
)
def test_invalid_fields_are_rejected(app, fields):
    base = {"title": "Kagurabachi", "description": "A swordsmith's son."}
    base.update(fields)
    with pytest.raises(ValidationError):
        Manga(**base)

from __future__ import annotations

from datetime import datetime, timedelta

from mangashelf import db
from mangashelf.models.manga import Manga


def _manga(title, released=None, updated=None):
    now = datetime.utcnow()
    manga = Manga(
        title=title,
        description=f"{title} description",
        latest_chapter_release_date=released or now,
        updated_at=updated or now,
    )
    db.session.add(manga)
    return manga


def test_new_releases_only_include_last_week_newest_first(client):
    now = datetime.utcnow()
    _manga("Older", released=now - timedelta(days=10))
    _manga("Three days", released=now - timedelta(days=3))
    _manga("Yesterday", released=now - timedelta(days=1))
    db.session.commit()

    body = client.get("/api/manga/new-releases").get_json()

    assert [m["title"] for m in body] == ["Yesterday", "Three days"]
    assert "releaseDate" in body[0]["latestChapter"]


def test_new_releases_are_capped_at_ten(client):
    now = datetime.utcnow()
    for i in range(12):
        _manga(f"Manga {i}", released=now - timedelta(hours=i))
    db.session.commit()

    body = client.get("/api/manga/new-releases").get_json()

    assert len(body) == 10
    assert body[0]["title"] == "Manga 0"


def test_recent_updates_use_thirty_day_window(client):
    now = datetime.utcnow()
    _manga("Stale", updated=now - timedelta(days=45))
    _manga("Last month", updated=now - timedelta(days=20))
    _manga("Today", updated=now - timedelta(minutes=5))
    db.session.commit()

    body = client.get("/api/manga/recent-updates").get_json()

    assert [m["title"] for m in body] == ["Today", "Last month"]


def test_query_failure_maps_to_error_body(client, monkeypatch):
    from mangashelf.blueprints.manga import routes

    def broken(*_args, **_kwargs):
        raise RuntimeError("database is gone")

    monkeypatch.setattr(routes.manga_service, "new_releases", broken)

    resp = client.get("/api/manga/new-releases")

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to fetch new releases"}

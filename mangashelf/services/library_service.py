"""Reading list kept client-side in the ``userLibrary`` cookie.

The cookie holds a JSON document ``{"manga": [entry, ...]}``. Entries are
keyed by their ``id``; adding an id that is already present merges the new
fields over the stored ones.
"""
import json
from datetime import datetime, timezone

from mangashelf.errors import ValidationError
from mangashelf.utils.logging import get_logger


LIBRARY_COOKIE = "userLibrary"
LIBRARY_MAX_AGE = 30 * 24 * 60 * 60

log = get_logger("mangashelf.library")


def _now_iso():
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def empty_library():
    return {"manga": []}


def load_library(cookies):
    raw = cookies.get(LIBRARY_COOKIE)
    if not raw:
        return empty_library()
    try:
        library = json.loads(raw)
    except ValueError:
        log.warning("discarding unreadable %s cookie", LIBRARY_COOKIE)
        return empty_library()
    if (
        not isinstance(library, dict)
        or not isinstance(library.get("manga"), list)
        or not all(isinstance(entry, dict) for entry in library["manga"])
    ):
        log.warning("discarding malformed %s cookie", LIBRARY_COOKIE)
        return empty_library()
    return library


def save_library(library, response):
    response.set_cookie(
        LIBRARY_COOKIE,
        json.dumps(library, separators=(",", ":")),
        max_age=LIBRARY_MAX_AGE,
        httponly=True,
        samesite="Strict",
        path="/",
    )
    return response


def upsert_entry(library, entry):
    if not isinstance(entry, dict) or not entry.get("id") or not entry.get("title"):
        raise ValidationError("Invalid manga data")

    for index, existing in enumerate(library["manga"]):
        if existing.get("id") == entry["id"]:
            merged = dict(existing)
            merged.update(entry)
            merged["updatedAt"] = _now_iso()
            library["manga"][index] = merged
            return merged

    added = dict(entry)
    added["createdAt"] = _now_iso()
    library["manga"].append(added)
    return added


def filter_section(library, section):
    if not section:
        return library
    wanted = section.lower()
    return {
        "manga": [
            entry for entry in library["manga"]
            if str(entry.get("status") or "").lower() == wanted
        ]
    }

"""Merge the catalog-hosted reading list with the cookie-backed one.

Both sources are split into the same five buckets. The local list takes
precedence: within a bucket local entries come first and the first entry
seen for an id is kept, and any id present in the local list is dropped from
the remote buckets so it only shows up where the user filed it locally.
"""
from typing import Any, Callable, Dict, List, Optional

from mangashelf.utils.logging import get_logger


BUCKETS = ("reading", "completed", "planToRead", "dropped", "paused")

LOCAL_STATUS_ALIASES = {
    "current": "reading",
    "reading": "reading",
    "completed": "completed",
    "finished": "completed",
    "planning": "planToRead",
    "plantoread": "planToRead",
    "plan-to-read": "planToRead",
    "plan to read": "planToRead",
    "plan_to_read": "planToRead",
    "dropped": "dropped",
    "paused": "paused",
    "on-hold": "paused",
    "on hold": "paused",
}

log = get_logger("mangashelf.library")

Buckets = Dict[str, List[Dict[str, Any]]]


def empty_buckets() -> Buckets:
    return {bucket: [] for bucket in BUCKETS}


def bucket_for_status(status) -> Optional[str]:
    if not status:
        return None
    return LOCAL_STATUS_ALIASES.get(str(status).strip().lower())


def entry_key(entry: Dict[str, Any]) -> str:
    return str(entry.get("id"))


def local_buckets(library: Dict[str, Any]) -> Buckets:
    buckets = empty_buckets()
    for entry in library.get("manga") or []:
        bucket = bucket_for_status(entry.get("status"))
        if bucket is None:
            continue
        buckets[bucket].append({
            **entry,
            "displayTitle": entry.get("title"),
            "coverImage": entry.get("coverImage"),
        })
    return buckets


def merge_buckets(local: Buckets, remote: Buckets) -> Buckets:
    local_ids = {entry_key(e) for bucket in BUCKETS for e in local.get(bucket) or []}
    merged = empty_buckets()
    for bucket in BUCKETS:
        unique = {}
        for entry in local.get(bucket) or []:
            unique.setdefault(entry_key(entry), entry)
        for entry in remote.get(bucket) or []:
            key = entry_key(entry)
            if key in local_ids:
                continue
            unique.setdefault(key, entry)
        merged[bucket] = list(unique.values())
    return merged


def fetch_buckets(source: str, fetch: Callable[[], Buckets]) -> Buckets:
    """Run one source fetch, degrading to empty buckets on any failure."""
    try:
        buckets = fetch()
    except Exception:
        log.exception("failed to load %s reading list", source)
        return empty_buckets()
    result = empty_buckets()
    for bucket in BUCKETS:
        result[bucket] = list((buckets or {}).get(bucket) or [])
    return result


def matches(entry: Dict[str, Any], query: str) -> bool:
    needle = query.lower()
    title = str(entry.get("displayTitle") or entry.get("title") or "")
    if needle in title.lower():
        return True
    return any(needle in str(genre).lower() for genre in entry.get("genres") or [])


def filter_buckets(buckets: Buckets, query: str) -> Buckets:
    if not query or not query.strip():
        return {bucket: list(entries) for bucket, entries in buckets.items()}
    query = query.strip()
    return {
        bucket: [entry for entry in entries if matches(entry, query)]
        for bucket, entries in buckets.items()
    }

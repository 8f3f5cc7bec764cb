# Client for the AniList GraphQL catalog and Kitsu cover lookups.

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

import requests
from flask import current_app, has_app_context

from mangashelf.errors import UpstreamError
from mangashelf.models.manga import DEFAULT_COVER
from mangashelf.utils.logging import get_logger


PAGE_SIZE = 24

MEDIA_FIELDS = """
        id
        title {
          romaji
          english
          native
        }
        description
        genres
        status
        averageScore
        coverImage {
          large
          medium
        }
        chapters
"""

EXPLORE_QUERY = """
  query ($perPage: Int) {
    trending: Page(page: 1, perPage: $perPage) {
      media(type: MANGA, sort: TRENDING_DESC) {%s}
    }
    popular: Page(page: 1, perPage: $perPage) {
      media(type: MANGA, sort: POPULARITY_DESC) {%s}
    }
  }
""" % (MEDIA_FIELDS, MEDIA_FIELDS)

RECENT_QUERY = """
  query ($perPage: Int) {
    newlyAdded: Page(page: 1, perPage: $perPage) {
      media(type: MANGA, sort: ID_DESC) {%s}
    }
    recentlyUpdated: Page(page: 1, perPage: $perPage) {
      media(type: MANGA, status: RELEASING, sort: UPDATED_AT_DESC) {%s}
    }
  }
""" % (MEDIA_FIELDS, MEDIA_FIELDS)

SEARCH_QUERY = """
  query SearchManga($search: String, $page: Int, $perPage: Int) {
    Page(page: $page, perPage: $perPage) {
      media(type: MANGA, search: $search, sort: POPULARITY_DESC) {%s}
    }
  }
""" % MEDIA_FIELDS

# Catalog list status -> bucket name.
LIST_STATUSES = {
    "CURRENT": "reading",
    "COMPLETED": "completed",
    "PLANNING": "planToRead",
    "DROPPED": "dropped",
    "PAUSED": "paused",
}

USER_LIST_QUERY = "  query ($userId: Int!) {\n%s  }\n" % "".join(
    """    %s: MediaListCollection(userId: $userId, type: MANGA, status: %s) {
      lists {
        entries {
          status
          progress
          media {%s}
        }
      }
    }
""" % (bucket, status, MEDIA_FIELDS)
    for status, bucket in LIST_STATUSES.items()
)

log = get_logger("mangashelf.catalog")


def display_title(media: Dict[str, Any]) -> str:
    title = media.get("title") or {}
    return title.get("english") or title.get("romaji") or title.get("native") or "Unknown"


class CatalogClient:
    def __init__(
        self,
        api_url: Optional[str] = None,
        image_api_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        image_timeout: Optional[float] = None,
        workers: Optional[int] = None,
    ):
        config = current_app.config if has_app_context() else {}
        self.api_url = api_url or config.get("ANILIST_API_URL", "https://graphql.anilist.co")
        self.image_api_url = (image_api_url or config.get("KITSU_API_URL", "https://kitsu.io/api/edge")).rstrip("/")
        self.user_agent = user_agent or config.get("CATALOG_USER_AGENT", "Mangashelf/1.0")
        self.timeout = timeout or config.get("CATALOG_REQUEST_TIMEOUT", 10.0)
        self.image_timeout = image_timeout or config.get("IMAGE_LOOKUP_TIMEOUT", 3.0)
        self.workers = workers or config.get("IMAGE_LOOKUP_WORKERS", 8)

    def graphql(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        headers = {
            "User-Agent": self.user_agent,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        try:
            response = requests.post(
                self.api_url,
                json={"query": query, "variables": variables or {}},
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise UpstreamError(f"Catalog request failed: {exc}")
        if response.status_code != 200:
            raise UpstreamError(f"Unexpected status code {response.status_code} from catalog")
        try:
            payload = response.json()
        except ValueError:
            raise UpstreamError("Catalog returned invalid JSON")
        if not isinstance(payload, dict):
            raise UpstreamError("Catalog returned an unexpected payload")
        errors = payload.get("errors")
        if errors:
            if not isinstance(errors, list):
                errors = [errors]
            messages = "; ".join(
                str(e.get("message") if isinstance(e, dict) else e) for e in errors
            )
            raise UpstreamError(f"Catalog query failed: {messages}")
        data = payload.get("data") or {}
        if not isinstance(data, dict):
            raise UpstreamError("Catalog returned an unexpected payload")
        return data

    def _page_media(self, data: Dict[str, Any], alias: str) -> List[Dict[str, Any]]:
        return list(((data.get(alias) or {}).get("media")) or [])

    def explore(self, per_page: int = PAGE_SIZE) -> Dict[str, List[Dict[str, Any]]]:
        data = self.graphql(EXPLORE_QUERY, {"perPage": per_page})
        return {
            "trending": self.enrich(self._page_media(data, "trending")),
            "popular": self.enrich(self._page_media(data, "popular")),
        }

    def trending(self, per_page: int = PAGE_SIZE) -> List[Dict[str, Any]]:
        return self.explore(per_page)["trending"]

    def popular(self, per_page: int = PAGE_SIZE) -> List[Dict[str, Any]]:
        return self.explore(per_page)["popular"]

    def recent(self, per_page: int = PAGE_SIZE) -> Dict[str, List[Dict[str, Any]]]:
        data = self.graphql(RECENT_QUERY, {"perPage": per_page})
        return {
            "newlyAdded": self.enrich(self._page_media(data, "newlyAdded")),
            "recentlyUpdated": self.enrich(self._page_media(data, "recentlyUpdated")),
        }

    def newly_added(self, per_page: int = PAGE_SIZE) -> List[Dict[str, Any]]:
        return self.recent(per_page)["newlyAdded"]

    def recently_updated(self, per_page: int = PAGE_SIZE) -> List[Dict[str, Any]]:
        return self.recent(per_page)["recentlyUpdated"]

    def search(self, text: str, page: int = 1, per_page: int = PAGE_SIZE) -> List[Dict[str, Any]]:
        data = self.graphql(SEARCH_QUERY, {"search": text, "page": page, "perPage": per_page})
        return self.enrich(self._page_media(data, "Page"))

    def user_media_list(self, user_id: int) -> Dict[str, List[Dict[str, Any]]]:
        data = self.graphql(USER_LIST_QUERY, {"userId": user_id})
        buckets = {}
        for bucket in LIST_STATUSES.values():
            collection = data.get(bucket) or {}
            entries = []
            for group in collection.get("lists") or []:
                for entry in group.get("entries") or []:
                    media = entry.get("media") or {}
                    entries.append({
                        **media,
                        "displayTitle": display_title(media),
                        "coverImage": (media.get("coverImage") or {}).get("large") or DEFAULT_COVER,
                        "chapters": media.get("chapters") or None,
                        "progress": entry.get("progress") or 0,
                    })
            buckets[bucket] = entries
        return buckets

    def cover_image(self, title: str) -> Optional[str]:
        if not title:
            return None
        try:
            response = requests.get(
                f"{self.image_api_url}/manga",
                params={"filter[text]": title, "page[limit]": 1},
                headers={"User-Agent": self.user_agent, "Accept": "application/vnd.api+json"},
                timeout=self.image_timeout,
            )
            if response.status_code != 200:
                raise UpstreamError(f"Unexpected status code {response.status_code} from image lookup")
            results = self._image_results(response.json())
        except (requests.RequestException, ValueError, UpstreamError) as exc:
            log.warning("cover lookup failed for %r: %s", title, exc)
            return None
        if not results:
            return None
        attributes = results[0].get("attributes")
        poster = attributes.get("posterImage") if isinstance(attributes, dict) else None
        if not isinstance(poster, dict):
            return None
        original = poster.get("original")
        return original if isinstance(original, str) and original else None

    def _image_results(self, payload: Any) -> List[Dict[str, Any]]:
        """Return the ``data`` list of a JSON:API document, rejecting other shapes."""
        if not isinstance(payload, dict):
            raise UpstreamError("Image lookup returned an unexpected payload")
        results = payload.get("data") or []
        if not isinstance(results, list) or not all(isinstance(r, dict) for r in results):
            raise UpstreamError("Image lookup returned an unexpected payload")
        return results

    def _enrich_one(self, media: Dict[str, Any]) -> Dict[str, Any]:
        title = display_title(media)
        cover = self.cover_image(title)
        fallback = (media.get("coverImage") or {}).get("large") if isinstance(media.get("coverImage"), dict) else None
        return {
            **media,
            "displayTitle": title,
            "coverImage": cover or fallback or DEFAULT_COVER,
        }

    def enrich(self, media: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        if not media:
            return []
        with ThreadPoolExecutor(max_workers=max(1, min(self.workers, len(media)))) as executor:
            return list(executor.map(self._enrich_one, media))

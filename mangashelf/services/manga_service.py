from datetime import datetime, timedelta

from mangashelf.repositories.manga_repository import MangaRepository


NEW_RELEASE_WINDOW = timedelta(days=7)
RECENT_UPDATE_WINDOW = timedelta(days=30)
RESULT_LIMIT = 10


class MangaService:
    def __init__(self, manga_repository=None):
        self.manga_repository = manga_repository or MangaRepository()

    def new_releases(self, now=None):
        since = (now or datetime.utcnow()) - NEW_RELEASE_WINDOW
        return self.manga_repository.released_since(since, RESULT_LIMIT)

    def recent_updates(self, now=None):
        since = (now or datetime.utcnow()) - RECENT_UPDATE_WINDOW
        return self.manga_repository.updated_since(since, RESULT_LIMIT)

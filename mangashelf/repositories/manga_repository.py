from mangashelf.models.manga import Manga


class MangaRepository:
    def released_since(self, since, limit):
        return (
            Manga.query.filter(Manga.latest_chapter_release_date >= since)
            .order_by(Manga.latest_chapter_release_date.desc())
            .limit(limit)
            .all()
        )

    def updated_since(self, since, limit):
        return (
            Manga.query.filter(Manga.updated_at >= since)
            .order_by(Manga.updated_at.desc())
            .limit(limit)
            .all()
        )

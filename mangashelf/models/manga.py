from datetime import datetime

from sqlalchemy.orm import validates

from mangashelf import db
from mangashelf.errors import ValidationError


GENRES = (
    "Action", "Adventure", "Comedy", "Drama",
    "Fantasy", "Horror", "Mystery",
    "Romance", "Sci-Fi", "Slice of Life",
    "Sports", "Supernatural",
)
STATUSES = ("Ongoing", "Completed", "Hiatus")
DEFAULT_COVER = "/default-manga-cover.jpg"


class Manga(db.Model):
    __tablename__ = "manga"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    cover_image = db.Column(db.String(512), nullable=False, default=DEFAULT_COVER)
    genres = db.Column(db.JSON, nullable=False, default=list)
    status = db.Column(db.String(16), nullable=False, default="Ongoing")
    latest_chapter_number = db.Column(db.Float, nullable=False, default=1)
    latest_chapter_release_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    total_chapters = db.Column(db.Integer, nullable=False, default=0)
    rating = db.Column(db.Float, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    @validates("title")
    def validate_title(self, key, value):
        value = (value or "").strip()
        if not value:
            raise ValidationError("Please provide a manga title")
        return value

    @validates("description")
    def validate_description(self, key, value):
        if not value:
            raise ValidationError("Please provide a manga description")
        return value

    @validates("genres")
    def validate_genres(self, key, value):
        value = list(value or [])
        for genre in value:
            if genre not in GENRES:
                raise ValidationError(f"`{genre}` is not a valid genre")
        return value

    @validates("status")
    def validate_status(self, key, value):
        if value not in STATUSES:
            raise ValidationError(f"`{value}` is not a valid status")
        return value

    @validates("rating")
    def validate_rating(self, key, value):
        if value is not None and not 0 <= value <= 10:
            raise ValidationError("Rating must be between 0 and 10")
        return value

    @validates("total_chapters")
    def validate_total_chapters(self, key, value):
        if value is not None and value < 0:
            raise ValidationError("Total chapters cannot be negative")
        return value

    def to_dict(self):
        release = self.latest_chapter_release_date
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "coverImage": self.cover_image or DEFAULT_COVER,
            "genres": list(self.genres or []),
            "status": self.status,
            "latestChapter": {
                "number": self.latest_chapter_number,
                "releaseDate": release.isoformat() if release else None,
            },
            "totalChapters": self.total_chapters,
            "rating": self.rating,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


db.Index(
    "ix_manga_latest_release",
    Manga.latest_chapter_release_date.desc(),
    Manga.created_at.desc(),
)

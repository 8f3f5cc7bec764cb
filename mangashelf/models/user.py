import re
from datetime import datetime

from sqlalchemy.orm import deferred, validates
from werkzeug.security import check_password_hash, generate_password_hash

from mangashelf import db
from mangashelf.errors import ValidationError


EMAIL_PATTERN = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")
DEFAULT_AVATAR = "/default-avatar.png"
DEFAULT_READING_GOAL = 50
MIN_PASSWORD_LENGTH = 6


user_manga = db.Table(
    "user_manga",
    db.Column("user_id", db.Integer, db.ForeignKey("user.id"), primary_key=True),
    db.Column("manga_id", db.Integer, db.ForeignKey("manga.id"), primary_key=True),
)


class User(db.Model):
    __tablename__ = "user"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    # Not loaded unless explicitly undeferred.
    password_hash = deferred(db.Column(db.String(256), nullable=False))
    avatar = db.Column(db.String(512), nullable=False, default=DEFAULT_AVATAR)
    bio = db.Column(db.String(500), nullable=False, default="")
    reading_goal = db.Column(db.Integer, nullable=False, default=DEFAULT_READING_GOAL)
    total_read = db.Column(db.Integer, nullable=False, default=0)
    completed = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    manga_list = db.relationship("Manga", secondary=user_manga, lazy="select")

    @validates("name")
    def validate_name(self, key, value):
        value = (value or "").strip()
        if not value:
            raise ValidationError("Please provide a name")
        if len(value) > 50:
            raise ValidationError("Name cannot be more than 50 characters")
        return value

    @validates("email")
    def validate_email(self, key, value):
        value = (value or "").strip().lower()
        if not value:
            raise ValidationError("Please provide an email")
        if not EMAIL_PATTERN.match(value):
            raise ValidationError("Please provide a valid email")
        return value

    @validates("bio")
    def validate_bio(self, key, value):
        value = value or ""
        if len(value) > 500:
            raise ValidationError("Bio cannot be more than 500 characters")
        return value

    @validates("reading_goal")
    def validate_reading_goal(self, key, value):
        if value is not None and value < 0:
            raise ValidationError("Reading goal cannot be negative")
        return value

    @validates("total_read", "completed")
    def validate_stats(self, key, value):
        if value is not None and value < 0:
            if key == "total_read":
                raise ValidationError("Total read cannot be negative")
            raise ValidationError("Completed manga count cannot be negative")
        return value

    def set_password(self, password):
        if not password or len(str(password)) < MIN_PASSWORD_LENGTH:
            raise ValidationError("Password must be at least 6 characters")
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def public_dict(self):
        return {"id": self.id, "name": self.name, "email": self.email}

    def profile_dict(self):
        return {
            "name": self.name,
            "email": self.email,
            "avatar": self.avatar or DEFAULT_AVATAR,
            "bio": self.bio or "",
            "readingGoal": DEFAULT_READING_GOAL if self.reading_goal is None else self.reading_goal,
            "readingStats": {
                "totalRead": self.total_read or 0,
                "completed": self.completed or 0,
            },
        }

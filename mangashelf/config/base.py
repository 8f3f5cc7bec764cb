import os


PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))


class BaseConfig:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key")
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", "sqlite:///mangashelf.db"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # The signed Flask session cookie is the user's session token.
    SESSION_COOKIE_NAME = "userSession"
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"

    UPLOAD_FOLDER = os.environ.get(
        "UPLOAD_FOLDER",
        os.path.join(PROJECT_ROOT, "public", "uploads"),
    )
    MAX_AVATAR_BYTES = 5 * 1024 * 1024
    # Whole request body: the avatar plus the other form fields.
    MAX_CONTENT_LENGTH = MAX_AVATAR_BYTES + 512 * 1024

    ANILIST_API_URL = os.environ.get("ANILIST_API_URL", "https://graphql.anilist.co")
    ANILIST_USER_ID = int(os.environ.get("ANILIST_USER_ID", "123"))
    KITSU_API_URL = os.environ.get("KITSU_API_URL", "https://kitsu.io/api/edge")
    CATALOG_USER_AGENT = os.environ.get(
        "CATALOG_USER_AGENT",
        "Mangashelf/1.0 (+https://example.com; contact: admin@example.com)",
    )
    CATALOG_REQUEST_TIMEOUT = float(os.environ.get("CATALOG_REQUEST_TIMEOUT", "10"))
    IMAGE_LOOKUP_TIMEOUT = float(os.environ.get("IMAGE_LOOKUP_TIMEOUT", "3"))
    IMAGE_LOOKUP_WORKERS = int(os.environ.get("IMAGE_LOOKUP_WORKERS", "8"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class DevelopmentConfig(BaseConfig):
    DEBUG = True


class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "testing-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    IMAGE_LOOKUP_WORKERS = 2

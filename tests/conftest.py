import pytest
import responses

from mangashelf import create_app, db
from mangashelf.config import TestingConfig
from mangashelf.repositories.user_repository import UserRepository


@pytest.fixture
def app(tmp_path):
    class Config(TestingConfig):
        UPLOAD_FOLDER = str(tmp_path / "uploads")
        ANILIST_API_URL = "https://catalog.test/graphql"
        KITSU_API_URL = "https://images.test/api/edge"

    app = create_app(Config)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user(app):
    return UserRepository().create(
        name="Reader",
        email="reader@example.com",
        password="Secret123!",
    )


@pytest.fixture
def logged_in_client(client, user):
    resp = client.post(
        "/api/auth/login",
        json={"email": "reader@example.com", "password": "Secret123!"},
    )
    assert resp.status_code == 200
    return client


@pytest.fixture
def responses_mock():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps

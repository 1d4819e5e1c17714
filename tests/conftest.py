import mongomock
import pytest

from app import create_app
from config import TestingConfig
from models.users import User
from utils.db import mongo, ensure_indexes

TEST_PASSWORD = "secret123"


@pytest.fixture()
def app(tmp_path):
    """Flask app backed by an in-memory mongomock database."""

    class Config(TestingConfig):
        UPLOAD_FOLDER = str(tmp_path / "uploads")

    app = create_app(Config)
    mongo.db = mongomock.MongoClient()["police_test"]
    ensure_indexes()
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_user(app):
    """Insert a user straight into the collection and return the stored document."""

    def _make_user(username, role="user", password=TEST_PASSWORD, **extra):
        data = {
            "username": username,
            "email": f"{username}@police.gov",
            "password": password,
            "firstName": username.capitalize(),
            "lastName": "Tester",
            "role": role,
        }
        data.update(extra)
        return User.create(data)

    return _make_user


def _login(client, username, password=TEST_PASSWORD):
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.get_json()
    return client


@pytest.fixture()
def admin_client(client, make_user):
    make_user("admin", role="admin")
    return _login(client, "admin")


@pytest.fixture()
def user_client(client, make_user):
    make_user("officer")
    return _login(client, "officer")

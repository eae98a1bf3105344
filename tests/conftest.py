# tests/conftest.py
import itertools
import os
import sys
from types import SimpleNamespace

import pytest

# so that `from app import create_app` works when run from the repo root
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from app import create_app  # noqa: E402
from extensions import db  # noqa: E402
from models import User  # noqa: E402
from modules.auth.accounts import hash_password  # noqa: E402
from modules.auth.tokens import issue_token  # noqa: E402

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
    "SECRET_KEY": "test-secret",
    "JWT_SECRET": "test-jwt-secret",
    "PASSWORD_HASH_METHOD": "pbkdf2:sha256:1000",  # fast hashing in tests
    "USE_HTTPS": False,
    "APP_ENV": "testing",
}


@pytest.fixture()
def app():
    app = create_app(dict(TEST_CONFIG))
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_user(app):
    """Factory: stores a user and returns its id, token and auth headers."""
    counter = itertools.count(1)

    def _make(role: str = "user", username: str | None = None, email: str | None = None,
              password: str = "secret"):
        n = next(counter)
        with app.app_context():
            user = User(
                username=username or f"{role}{n}",
                email=email or f"{role}{n}@example.com",
                password=hash_password(password),
                role=role,
            )
            db.session.add(user)
            db.session.commit()
            token = issue_token(user)
            return SimpleNamespace(
                id=user.id,
                username=user.username,
                email=user.email,
                role=role,
                token=token,
                headers={"Authorization": f"Bearer {token}"},
            )

    return _make


@pytest.fixture()
def admin(make_user):
    return make_user("admin")


@pytest.fixture()
def manager(make_user):
    return make_user("manager")


@pytest.fixture()
def reader(make_user):
    return make_user("user")


@pytest.fixture()
def other_reader(make_user):
    return make_user("user")


def book_payload(**overrides) -> dict:
    data = {
        "title": "The Hobbit",
        "author": "J.R.R. Tolkien",
        "isbn": "978-0547928227",
        "publicationDate": "1937-09-21",
        "description": "A hobbit goes there and back again.",
        "category": "Fantasy",
        "condition": "Good",
        "price": 12.5,
        "quantity": 3,
    }
    data.update(overrides)
    return data


@pytest.fixture()
def create_book(client, admin):
    """Factory: creates a book through the API and returns its id."""

    def _create(**overrides) -> int:
        resp = client.post("/api/books", json=book_payload(**overrides), headers=admin.headers)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()["book"]["id"]

    return _create


@pytest.fixture()
def article_id(client, manager) -> int:
    resp = client.post(
        "/api/articles",
        json={"title": "Caring for old books", "content": "Keep them dry.", "category": "Tips"},
        headers=manager.headers,
    )
    assert resp.status_code == 201
    return resp.get_json()["id"]


@pytest.fixture()
def post_id(client, manager) -> int:
    resp = client.post(
        "/api/blog",
        json={"title": "Shop news", "content": "We moved to a bigger store."},
        headers=manager.headers,
    )
    assert resp.status_code == 201
    return resp.get_json()["post"]["id"]


@pytest.fixture()
def book_data():
    return book_payload

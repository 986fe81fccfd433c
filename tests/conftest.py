import mongomock
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

import auth
from database import get_db
from main import app


def bearer(role, user_id=None, name="Tester"):
    token = auth.create_access_token(user_id or str(ObjectId()), name, role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def db():
    return mongomock.MongoClient()["tastify_test"]


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin():
    return bearer(auth.ROLE_ADMIN)


@pytest.fixture
def worker():
    return bearer(auth.ROLE_WORKER)


@pytest.fixture
def guest():
    return bearer(auth.ROLE_GUEST)

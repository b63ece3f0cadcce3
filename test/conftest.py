import mongomock
import pytest
from fastapi.testclient import TestClient

from auth.utils import hash_password
from config import Settings
from main import create_app
from models.user import ADMIN, USER, User
from repositories.user_repository import create_user

ADMIN_PASSWORD = "admin-pass"
USER_PASSWORD = "user-pass"


@pytest.fixture
def settings():
    return Settings(JWT_SECRET="test-secret", MONGO_DB="songbook_test", ENV="test")


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def db(settings, mongo_client):
    return mongo_client[settings.MONGO_DB]


@pytest.fixture
def app(settings, mongo_client):
    return create_app(settings, client=mongo_client)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_user(db):
    create_user(db, User(username="admin", password=hash_password(ADMIN_PASSWORD), role=ADMIN))
    return {"username": "admin", "password": ADMIN_PASSWORD}


@pytest.fixture
def regular_user(db):
    create_user(db, User(username="listener", password=hash_password(USER_PASSWORD), role=USER))
    return {"username": "listener", "password": USER_PASSWORD}


def login(client, credentials):
    resp = client.post("/login", json=credentials)
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_token(client, admin_user):
    return login(client, admin_user)


@pytest.fixture
def user_token(client, regular_user):
    return login(client, regular_user)

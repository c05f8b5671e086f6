import pytest
from fastapi.testclient import TestClient

from expenso.config import Settings
from expenso.main import create_app

TEST_SECRET = "test-secret-key-with-enough-length-for-hs256"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'expenso_test.db'}",
        SECRET_KEY=TEST_SECRET,
        ACCESS_TOKEN_EXPIRE_MINUTES=60 * 24,
        TIMEZONE="UTC",
        LOG_FILE=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def register(client, name, email, password="s3cret-pass"):
    return client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(client):
    resp = register(client, "Alice", "alice@example.com")
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return {"id": body["user"]["id"], "token": body["token"], "headers": auth_header(body["token"])}


@pytest.fixture
def bob(client):
    resp = register(client, "Bob", "bob@example.com")
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return {"id": body["user"]["id"], "token": body["token"], "headers": auth_header(body["token"])}


def first_category_id(client, user):
    resp = client.get("/api/categories", headers=user["headers"])
    assert resp.status_code == 200
    return resp.json()[0]["id"]


def create_expense(client, user, category_id, amount=12.5, day="2024-03-10", description="Lunch"):
    return client.post(
        "/api/expenses",
        json={
            "amount": amount,
            "description": description,
            "category_id": category_id,
            "date": day,
        },
        headers=user["headers"],
    )

import pytest
from sqlalchemy import select, func
from eclinic.database import async_session
from eclinic.models.user import User
from eclinic.seed import DEFAULT_USER, seed_default_user


def test_seed_creates_exactly_one_user(client):
    r = client.get("/api/user")
    assert r.status_code == 200
    data = r.json()
    assert data["username"] == "admin"
    assert data["name"] == DEFAULT_USER["name"]
    assert data["role"] == DEFAULT_USER["role"]
    assert data["recovery_question"] == DEFAULT_USER["recovery_question"]
    # The seed account is the only one, so any other name is free
    assert client.get("/api/check-username", params={"username": "someone"}).json() == {"available": True}
    assert client.get("/api/check-username", params={"username": "admin"}).json() == {"available": False}


def test_login_success_hides_secrets(client):
    r = client.post("/api/login", json={"username": "admin", "password": "password123"})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["token_type"] == "bearer"
    assert body["access_token"]
    user = body["user"]
    assert user["username"] == "admin"
    assert "password" not in user
    assert "password_hash" not in user
    assert "recovery_answer_hash" not in user


def test_login_wrong_password(client):
    r = client.post("/api/login", json={"username": "admin", "password": "wrong"})
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "Invalid username or password"}


def test_login_unknown_user_same_failure(client):
    r = client.post("/api/login", json={"username": "ghost", "password": "password123"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid username or password"


def test_forgot_password_returns_question(client):
    r = client.get("/api/forgot-password", params={"username": "admin"})
    assert r.status_code == 200
    assert r.json() == {"success": True, "question": "What is your favorite color?"}


def test_forgot_password_unknown_user(client):
    r = client.get("/api/forgot-password", params={"username": "ghost"})
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Username not found"}


def test_reset_password_round_trip(client):
    r = client.post("/api/reset-password", json={"username": "admin", "answer": "EMERALD", "newPassword": "newpw"})
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Password reset successfully"}

    assert client.post("/api/login", json={"username": "admin", "password": "newpw"}).status_code == 200
    assert client.post("/api/login", json={"username": "admin", "password": "password123"}).status_code == 401


def test_reset_password_wrong_answer(client):
    r = client.post("/api/reset-password", json={"username": "admin", "answer": "blue", "newPassword": "newpw"})
    assert r.status_code == 401
    assert r.json()["message"] == "Incorrect recovery answer"
    assert client.post("/api/login", json={"username": "admin", "password": "password123"}).status_code == 200


def test_reset_password_missing_answer_is_a_mismatch(client):
    r = client.post("/api/reset-password", json={"username": "admin", "newPassword": "newpw"})
    assert r.status_code == 401


def test_reset_password_unknown_user(client):
    r = client.post("/api/reset-password", json={"username": "ghost", "answer": "emerald", "newPassword": "x"})
    assert r.status_code == 404


def test_invalid_token_rejected(client):
    r = client.get("/api/user", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["success"] is False


def test_seeding_twice_keeps_a_single_user(client):
    async def seed_and_count():
        await seed_default_user()
        await seed_default_user()
        async with async_session() as session:
            return await session.scalar(select(func.count(User.id)))

    assert client.portal.call(seed_and_count) == 1
    assert client.get("/api/user").json()["username"] == DEFAULT_USER["username"]


@pytest.mark.parametrize("body", [{}, {"username": "admin"}, {"password": "password123"}])
def test_login_with_missing_fields_is_a_failed_login(client, body):
    r = client.post("/api/login", json=body)
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "Invalid username or password"}

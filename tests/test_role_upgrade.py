"""Role upgrade endpoint tests."""

from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from restaurant_api.core.config import Settings
from restaurant_api.main import create_app


def _build_client(tmp_path: Path) -> TestClient:
    settings = Settings(database_url=f"sqlite:///{tmp_path / 'roles.db'}", jwt_secret_key="test-secret")
    return TestClient(create_app(settings))


def _login_as(client: TestClient, email: str) -> int:
    """Register (or log in) ``email`` and leave its cookie on the client."""
    client.cookies.clear()
    response = client.post("/auth/register", json={"email": email, "password": "secret123"})
    if response.status_code == 400:
        response = client.post("/auth/login", json={"email": email, "password": "secret123"})
    return response.json()["id"]


def _create_restaurant(client: TestClient, street: str = "1 Main St", email: str = "pizza@example.com") -> dict:
    response = client.post(
        "/restaurants",
        json={"name": "Pizza", "email": email, "address": {"street": street, "city": "Springfield"}},
    )
    assert response.status_code == 201
    return response.json()


def test_owner_upgrade_returns_user_and_restaurant(tmp_path: Path) -> None:
    with _build_client(tmp_path) as client:
        user_id = _login_as(client, "owner@example.com")
        restaurant = _create_restaurant(client)

        response = client.patch(
            f"/auth/roleRequest/{user_id}",
            json={"userRole": 1, "restaurantId": restaurant["id"]},
        )
        stored = client.get(f"/restaurants/{restaurant['id']}").json()
        me = client.get("/auth/me").json()

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["id"] == user_id
    assert body["user"]["role"] == "OWNER"
    assert body["user"]["restaurant_id"] == restaurant["id"]
    assert body["restaurant"]["owner_id"] == user_id
    assert stored["owner_id"] == user_id
    assert me["role"] == "OWNER"


def test_regular_role_leaves_restaurant_untouched(tmp_path: Path) -> None:
    with _build_client(tmp_path) as client:
        user_id = _login_as(client, "user@example.com")
        restaurant = _create_restaurant(client)

        response = client.patch(
            f"/auth/roleRequest/{user_id}",
            json={"userRole": 0, "restaurantId": restaurant["id"]},
        )
        stored = client.get(f"/restaurants/{restaurant['id']}").json()

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"user"}
    assert body["user"]["role"] == "REGULAR"
    assert stored["owner_id"] is None


def test_upgrade_requires_authentication(tmp_path: Path) -> None:
    with _build_client(tmp_path) as client:
        response = client.patch("/auth/roleRequest/1", json={"userRole": 0})

    assert response.status_code == 401
    assert response.json()["code"] == "authentication_token_missing"


def test_cannot_change_another_users_role(tmp_path: Path) -> None:
    with _build_client(tmp_path) as client:
        victim_id = _login_as(client, "victim@example.com")
        _login_as(client, "attacker@example.com")

        response = client.patch(f"/auth/roleRequest/{victim_id}", json={"userRole": 0})

    assert response.status_code == 403
    assert response.json()["code"] == "not_authorized"


def test_owner_upgrade_requires_restaurant_id(tmp_path: Path) -> None:
    with _build_client(tmp_path) as client:
        user_id = _login_as(client, "owner@example.com")
        response = client.patch(f"/auth/roleRequest/{user_id}", json={"userRole": 1})

    assert response.status_code == 422


def test_unknown_role_code_is_rejected(tmp_path: Path) -> None:
    with _build_client(tmp_path) as client:
        user_id = _login_as(client, "owner@example.com")
        response = client.patch(f"/auth/roleRequest/{user_id}", json={"userRole": 5})

    assert response.status_code == 422


def test_missing_restaurant_keeps_user_role(tmp_path: Path) -> None:
    with _build_client(tmp_path) as client:
        user_id = _login_as(client, "owner@example.com")
        response = client.patch(
            f"/auth/roleRequest/{user_id}",
            json={"userRole": 1, "restaurantId": 404},
        )
        me = client.get("/auth/me").json()

    assert response.status_code == 404
    assert response.json()["code"] == "restaurant_not_found"
    assert me["role"] == "REGULAR"


def test_restaurant_owned_by_someone_else_is_rejected(tmp_path: Path) -> None:
    with _build_client(tmp_path) as client:
        first_id = _login_as(client, "first@example.com")
        restaurant = _create_restaurant(client)
        client.patch(f"/auth/roleRequest/{first_id}", json={"userRole": 1, "restaurantId": restaurant["id"]})

        second_id = _login_as(client, "second@example.com")
        response = client.patch(
            f"/auth/roleRequest/{second_id}",
            json={"userRole": 1, "restaurantId": restaurant["id"]},
        )

    assert response.status_code == 409
    assert response.json()["code"] == "restaurant_already_owned"


def test_owner_can_move_to_another_restaurant(tmp_path: Path) -> None:
    with _build_client(tmp_path) as client:
        user_id = _login_as(client, "owner@example.com")
        first = _create_restaurant(client)
        second = _create_restaurant(client, street="2 Main St", email="sushi@example.com")
        client.patch(f"/auth/roleRequest/{user_id}", json={"userRole": 1, "restaurantId": first["id"]})

        response = client.patch(
            f"/auth/roleRequest/{user_id}",
            json={"userRole": 1, "restaurantId": second["id"]},
        )
        first_after = client.get(f"/restaurants/{first['id']}").json()

    assert response.status_code == 200
    assert response.json()["restaurant"]["owner_id"] == user_id
    assert response.json()["user"]["restaurant_id"] == second["id"]
    assert first_after["owner_id"] is None


def test_database_failure_rolls_back_upgrade(tmp_path: Path, monkeypatch) -> None:
    """A failed commit should report an internal error and keep the old role."""
    with _build_client(tmp_path) as client:
        user_id = _login_as(client, "owner@example.com")
        restaurant = _create_restaurant(client)

        def broken_commit(self):
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(Session, "commit", broken_commit)
        response = client.patch(
            f"/auth/roleRequest/{user_id}",
            json={"userRole": 1, "restaurantId": restaurant["id"]},
        )
        monkeypatch.undo()
        me = client.get("/auth/me").json()
        stored = client.get(f"/restaurants/{restaurant['id']}").json()

    assert response.status_code == 500
    assert response.json()["code"] == "internal_error"
    assert me["role"] == "REGULAR"
    assert stored["owner_id"] is None

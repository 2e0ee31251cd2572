"""Tests for the HTTP API."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from photogram.containers import AppContainer
from tests.conftest import InMemoryPhotoRepository

PHOTO = {
    "photo": "http://img/1.png",
    "name": "Sunset",
    "description": "Nice view",
}


def _register(client: TestClient, username: str) -> tuple[str, str]:
    response = client.post(
        "/api/auth/register",
        json={
            "username": username,
            "email": f"{username}@x.com",
            "password": "pw123456",
        },
    )
    assert response.status_code == 201
    data = response.json()
    return data["token"], data["user"]["id"]


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_health(app: FastAPI) -> None:
    response = TestClient(app).get("/health")

    assert response.json() == {"status": "ok"}


def test_register_then_create_photo(app: FastAPI) -> None:
    client = TestClient(app)
    token, alice_id = _register(client, "alice")

    response = client.post("/api/explore", json=PHOTO, headers=_auth(token))

    assert response.status_code == 201
    data = response.json()
    assert data["owner"] == alice_id
    assert data["name"] == "Sunset"


def test_create_ignores_client_supplied_owner(app: FastAPI) -> None:
    client = TestClient(app)
    token, alice_id = _register(client, "alice")
    _, bob_id = _register(client, "bob")

    response = client.post(
        "/api/explore",
        json={**PHOTO, "owner": bob_id, "user": bob_id},
        headers=_auth(token),
    )

    assert response.status_code == 201
    assert response.json()["owner"] == alice_id


def test_other_user_cannot_update(
    app: FastAPI, photo_repository: InMemoryPhotoRepository
) -> None:
    client = TestClient(app)
    alice_token, _ = _register(client, "alice")
    bob_token, _ = _register(client, "bob")
    photo_id = client.post("/api/explore", json=PHOTO, headers=_auth(alice_token)).json()[
        "id"
    ]

    response = client.put(
        f"/api/explore/{photo_id}",
        json={"name": "Stolen", "description": "Mine"},
        headers=_auth(bob_token),
    )

    assert response.status_code == 401
    assert response.json() == {"message": "User not authorized", "error": "forbidden"}
    stored = next(iter(photo_repository.photos.values()))
    assert stored.name == "Sunset"
    assert stored.description == "Nice view"


def test_update_unknown_id_is_404(app: FastAPI) -> None:
    client = TestClient(app)
    token, _ = _register(client, "alice")

    response = client.put(
        "/api/explore/000000000000000000000000",
        json={"name": "x"},
        headers=_auth(token),
    )

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_create_without_description_is_400(
    app: FastAPI, photo_repository: InMemoryPhotoRepository
) -> None:
    client = TestClient(app)
    token, _ = _register(client, "alice")

    response = client.post(
        "/api/explore",
        json={"photo": "http://img/1.png", "name": "Sunset"},
        headers=_auth(token),
    )

    assert response.status_code == 400
    assert response.json() == {
        "message": "Please provide all fields",
        "error": "validation",
    }
    assert photo_repository.photos == {}


def test_create_with_blank_field_is_400(app: FastAPI) -> None:
    client = TestClient(app)
    token, _ = _register(client, "alice")

    response = client.post(
        "/api/explore", json={**PHOTO, "name": "   "}, headers=_auth(token)
    )

    assert response.status_code == 400


def test_list_is_public_and_newest_first(app: FastAPI) -> None:
    client = TestClient(app)
    token, _ = _register(client, "alice")
    for name in ("one", "two", "three"):
        client.post("/api/explore", json={**PHOTO, "name": name}, headers=_auth(token))

    response = client.get("/api/explore")

    assert response.status_code == 200
    data = response.json()
    assert [item["name"] for item in data] == ["three", "two", "one"]
    assert {item["owner_username"] for item in data} == {"alice"}


def test_owner_updates_and_deletes(app: FastAPI) -> None:
    client = TestClient(app)
    token, _ = _register(client, "alice")
    created = client.post("/api/explore", json=PHOTO, headers=_auth(token)).json()

    updated = client.put(
        f"/api/explore/{created['id']}",
        json={"description": "Even nicer", "photo": "http://img/other.png"},
        headers=_auth(token),
    )
    deleted = client.delete(f"/api/explore/{created['id']}", headers=_auth(token))

    assert updated.status_code == 200
    assert updated.json()["description"] == "Even nicer"
    assert updated.json()["photo"] == PHOTO["photo"]
    assert deleted.json() == {"message": "Photo removed"}
    assert client.get("/api/explore").json() == []


def test_mutations_require_token(app: FastAPI) -> None:
    client = TestClient(app)

    missing = client.post("/api/explore", json=PHOTO)
    malformed = client.post(
        "/api/explore", json=PHOTO, headers={"Authorization": "Token abc"}
    )
    garbage = client.delete("/api/explore/123", headers=_auth("garbage"))

    assert missing.status_code == 401
    assert missing.json()["error"] == "unauthorized"
    assert malformed.json()["error"] == "unauthorized"
    assert garbage.status_code == 401
    assert garbage.json()["error"] == "forbidden"


def test_login_and_me(app: FastAPI) -> None:
    client = TestClient(app)
    _, alice_id = _register(client, "alice")

    bad = client.post(
        "/api/auth/login", json={"username": "alice", "password": "wrong-pass"}
    )
    good = client.post(
        "/api/auth/login", json={"username": "alice", "password": "pw123456"}
    )
    me = client.get("/api/auth/me", headers=_auth(good.json()["token"]))

    assert bad.status_code == 401
    assert bad.json()["error"] == "auth"
    assert good.status_code == 200
    assert me.json() == {"id": alice_id, "username": "alice", "email": "alice@x.com"}


def test_duplicate_registration_is_400(app: FastAPI) -> None:
    client = TestClient(app)
    _register(client, "alice")

    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "new@x.com", "password": "pw123456"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "User already exists"


def test_unexpected_error_is_opaque_500(app: FastAPI, container: AppContainer) -> None:
    def broken_feed() -> list:
        raise RuntimeError("database password is hunter2")

    container.photo_service.repository.list_feed = broken_feed  # type: ignore[method-assign]
    client = TestClient(app)

    response = client.get("/api/explore")

    assert response.status_code == 500
    assert response.json() == {"message": "Server Error", "error": "server"}

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_register_returns_token(client: AsyncClient, seeded_points):
    response = await client.post(
        "/api/v1/users",
        json={"username": "ada", "email": "ada@example.com", "first_name": "Ada", "last_name": "Lovelace"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Registration successful"
    assert data["user"]["role"] == "learner"
    assert data["user"]["alex_points"] == 100
    assert "api_token_hash" not in data["user"]

    me = await client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "ada@example.com"


async def test_register_conflict(client: AsyncClient, make_user):
    await make_user("ada")
    response = await client.post("/api/v1/users", json={"username": "ada", "email": "new@example.com"})

    assert response.status_code == 409
    assert response.json() == {"message": "Username or email is already taken"}


@pytest.mark.parametrize(
    "payload",
    [
        {"username": "ada", "email": "not-an-email"},
        {"username": "a", "email": "ada@example.com"},
        {"username": "root", "email": "root@example.com", "role": "admin"},
    ],
)
async def test_register_validation(client: AsyncClient, payload):
    response = await client.post("/api/v1/users", json=payload)

    assert response.status_code == 422
    data = response.json()
    assert data["message"] == "The given data was invalid."
    assert data["errors"]


@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer wrong"}])
async def test_me_requires_valid_token(client: AsyncClient, headers):
    response = await client.get("/api/v1/users/me", headers=headers)

    assert response.status_code == 401
    assert response.json() == {"message": "Unauthenticated."}


async def test_public_profile(client: AsyncClient, make_user, auth_headers):
    ada = await make_user("ada", first_name="Ada")
    bob = await make_user("bob")
    await client.post("/api/v1/follow/ada", headers=auth_headers(bob))

    response = await client.get("/api/v1/users/ada")

    assert response.status_code == 200
    data = response.json()
    assert data["user"]["id"] == ada.id
    assert "email" not in data["user"]
    assert data["followers_count"] == 1
    assert data["following_count"] == 0
    assert (await client.get(f"/api/v1/users/{ada.id}")).json()["user"]["username"] == "ada"


async def test_profile_not_found(client: AsyncClient):
    response = await client.get("/api/v1/users/ghost")
    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


async def test_followers_and_following_lists(client: AsyncClient, make_user, auth_headers):
    await make_user("ada")
    bob = await make_user("bob")
    await client.post("/api/v1/follow/ada", headers=auth_headers(bob))

    followers = (await client.get("/api/v1/users/ada/followers")).json()
    following = (await client.get("/api/v1/users/bob/following")).json()

    assert followers["count"] == 1
    assert followers["users"][0]["username"] == "bob"
    assert [u["username"] for u in following["users"]] == ["ada"]

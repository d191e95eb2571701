import pytest
import pytest_asyncio
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def creator(make_user):
    return await make_user("ada")


@pytest_asyncio.fixture
async def library(client: AsyncClient, creator, auth_headers) -> dict:
    response = await client.post(
        "/api/v1/libraries", json={"name": "Type theory", "description": "Papers and notes"}, headers=auth_headers(creator)
    )
    assert response.status_code == 201
    return response.json()


async def test_created_library_is_pending(library, creator):
    assert library["creator_id"] == creator.id
    assert library["approval_status"] == "pending"
    assert library["is_approved"] is False


async def test_link_unknown_course(client: AsyncClient, creator, auth_headers):
    response = await client.post(
        "/api/v1/libraries", json={"name": "Orphan", "course_id": 42}, headers=auth_headers(creator)
    )
    assert response.status_code == 404


async def test_add_and_list_contents(client: AsyncClient, library, creator, auth_headers):
    for title, score in (("Low", 0.1), ("High", 0.9)):
        response = await client.post(
            f"/api/v1/libraries/{library['id']}/contents",
            json={"title": title, "url": f"https://example.com/{title}", "relevance_score": score},
            headers=auth_headers(creator),
        )
        assert response.status_code == 201

    contents = await client.get(f"/api/v1/libraries/{library['id']}/contents", headers=auth_headers(creator))
    assert [c["title"] for c in contents.json()] == ["High", "Low"]


async def test_relevance_score_range(client: AsyncClient, library, creator, auth_headers):
    response = await client.post(
        f"/api/v1/libraries/{library['id']}/contents",
        json={"title": "Bad", "url": "https://example.com", "relevance_score": 1.5},
        headers=auth_headers(creator),
    )
    assert response.status_code == 422


async def test_others_cannot_add_content(client: AsyncClient, library, make_user, auth_headers):
    eve = await make_user("eve")
    response = await client.post(
        f"/api/v1/libraries/{library['id']}/contents",
        json={"title": "Spam", "url": "https://spam.example"},
        headers=auth_headers(eve),
    )
    assert response.status_code == 403


async def test_pending_library_visibility(client: AsyncClient, library, creator, make_user, auth_headers):
    eve = await make_user("eve")

    assert (await client.get(f"/api/v1/libraries/{library['id']}")).status_code == 404
    assert (await client.get(f"/api/v1/libraries/{library['id']}", headers=auth_headers(eve))).status_code == 404

    own = await client.get(f"/api/v1/libraries/{library['id']}", headers=auth_headers(creator))
    assert own.status_code == 200
    assert own.json()["approval_info"] == {"can_approve": False, "can_reject": True, "approver": None}

from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import AsyncClient

from alexandria.core.database.entities import Course
from alexandria.libraries import MIN_CONTENT_FOR_APPROVAL, LibraryService

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def admin(make_user):
    return await make_user("root", "admin")


@pytest_asyncio.fixture
async def learner(make_user):
    return await make_user("ada")


@pytest_asyncio.fixture
async def library(repos, learner):
    return await LibraryService(repos).create_library(learner, "Distributed systems")


@pytest_asyncio.fixture
async def paid_reference(client: AsyncClient, repos, learner, make_educator, auth_headers) -> str:
    educator = await make_educator("grace")
    course = await repos.courses.create(Course(user_id=educator.id, title="Compilers", price=Decimal("10000")))
    await repos.session.commit()
    response = await client.post(
        "/api/v1/payment-splits/test-course", json={"course_id": course.id}, headers=auth_headers(learner)
    )
    reference = response.json()["reference"]
    await client.get("/api/v1/payments/verify", params={"reference": reference})
    return reference


async def test_admin_routes_require_admin(client: AsyncClient, learner, auth_headers):
    for path in ("/api/v1/admin/libraries", "/api/v1/admin/refunds", "/api/v1/admin/analytics/overview"):
        response = await client.get(path, headers=auth_headers(learner))
        assert response.status_code == 403


class TestLibraryReview:
    async def test_list_pending(self, client: AsyncClient, admin, library, auth_headers):
        response = await client.get("/api/v1/admin/libraries", params={"status": "pending"}, headers=auth_headers(admin))

        assert response.status_code == 200
        data = response.json()
        assert [lib["id"] for lib in data["libraries"]] == [library.id]
        assert data["pagination"] == {"total": 1, "per_page": 10, "current_page": 1, "last_page": 1}

    async def test_invalid_status_filter(self, client: AsyncClient, admin, auth_headers):
        response = await client.get("/api/v1/admin/libraries", params={"status": "archived"}, headers=auth_headers(admin))
        assert response.status_code == 422

    async def test_approve_needs_content(self, client: AsyncClient, admin, library, auth_headers):
        response = await client.post(f"/api/v1/admin/libraries/{library.id}/approve", headers=auth_headers(admin))

        assert response.status_code == 400
        assert response.json() == {
            "message": "Library must have at least 5 content items to be approved",
            "error": {"content_count": 0},
        }

    async def test_approve(self, client: AsyncClient, repos, admin, learner, library, auth_headers):
        libraries = LibraryService(repos)
        for i in range(MIN_CONTENT_FOR_APPROVAL):
            await libraries.add_content(learner, library.id, f"Paper {i}", f"https://example.com/{i}")

        response = await client.post(f"/api/v1/admin/libraries/{library.id}/approve", headers=auth_headers(admin))

        assert response.status_code == 200
        assert response.json()["approval_status"] == "approved"
        assert response.json()["approved_by"] == admin.id
        public = await client.get(f"/api/v1/libraries/{library.id}")
        assert public.status_code == 200
        assert public.json()["approval_info"]["approver"] == {"id": admin.id, "username": "root"}

    async def test_reject_with_reason(self, client: AsyncClient, admin, library, auth_headers):
        response = await client.post(
            f"/api/v1/admin/libraries/{library.id}/reject", json={"reason": "Duplicate"}, headers=auth_headers(admin)
        )

        assert response.status_code == 200
        assert response.json()["rejection_reason"] == "Duplicate"
        again = await client.post(f"/api/v1/admin/libraries/{library.id}/reject", headers=auth_headers(admin))
        assert again.status_code == 400

    async def test_unknown_library(self, client: AsyncClient, admin, auth_headers):
        response = await client.post("/api/v1/admin/libraries/999/approve", headers=auth_headers(admin))
        assert response.status_code == 404


class TestRefunds:
    async def test_full_refund(self, client: AsyncClient, admin, paid_reference, auth_headers, gateway):
        response = await client.post(
            "/api/v1/admin/refunds", json={"reference": paid_reference, "reason": "Duplicate charge"}, headers=auth_headers(admin)
        )

        assert response.status_code == 201
        refund = response.json()
        assert refund["amount"] == 10000.0
        assert refund["status"] == "processed"
        assert refund["processor_id"] == admin.id
        assert gateway.calls_to("refund_transaction")[0]["amount"] is None

        fetched = await client.get(f"/api/v1/admin/refunds/{refund['id']}", headers=auth_headers(admin))
        assert fetched.json()["transaction_reference"] == paid_reference
        listed = await client.get("/api/v1/admin/refunds", params={"status": "processed"}, headers=auth_headers(admin))
        assert [r["id"] for r in listed.json()] == [refund["id"]]

        again = await client.post("/api/v1/admin/refunds", json={"reference": paid_reference}, headers=auth_headers(admin))
        assert again.status_code == 404

    async def test_partial_refund(self, client: AsyncClient, admin, paid_reference, auth_headers, gateway):
        response = await client.post(
            "/api/v1/admin/refunds", json={"reference": paid_reference, "amount": 2500}, headers=auth_headers(admin)
        )

        assert response.status_code == 201
        assert response.json()["amount"] == 2500.0
        assert gateway.calls_to("refund_transaction")[0]["amount"] == Decimal("2500")

    async def test_refund_exceeding_payment(self, client: AsyncClient, admin, paid_reference, auth_headers):
        response = await client.post(
            "/api/v1/admin/refunds", json={"reference": paid_reference, "amount": 20000}, headers=auth_headers(admin)
        )
        assert response.status_code == 400

    async def test_gateway_refusal(self, client: AsyncClient, admin, paid_reference, auth_headers, gateway):
        gateway.fail_on.add("refund_transaction")
        response = await client.post("/api/v1/admin/refunds", json={"reference": paid_reference}, headers=auth_headers(admin))

        assert response.status_code == 500
        failed = await client.get("/api/v1/admin/refunds", params={"status": "failed"}, headers=auth_headers(admin))
        assert len(failed.json()) == 1

    async def test_unknown_refund(self, client: AsyncClient, admin, auth_headers):
        response = await client.get("/api/v1/admin/refunds/999", headers=auth_headers(admin))
        assert response.status_code == 404


class TestAnalytics:
    async def test_overview(self, client: AsyncClient, admin, library, auth_headers):
        response = await client.get("/api/v1/admin/analytics/overview", headers=auth_headers(admin))

        assert response.status_code == 200
        data = response.json()
        assert data["total_users"] == 2
        assert data["libraries_by_status"]["pending"] == 1

    async def test_revenue(self, client: AsyncClient, admin, paid_reference, auth_headers):
        response = await client.get("/api/v1/admin/analytics/revenue", headers=auth_headers(admin))

        data = response.json()
        assert data["gross_volume"] == 10000.0
        assert data["platform_fees"] == 500.0
        assert data["educator_payouts"] == 9500.0
        assert data["payments_by_status"]["success"] == 1


class TestVerification:
    async def test_verify_educator(self, client: AsyncClient, admin, make_educator, auth_headers):
        educator = await make_educator("linus", verified=False)

        response = await client.post(f"/api/v1/admin/users/{educator.id}/verify", headers=auth_headers(admin))
        assert response.status_code == 200
        assert response.json()["is_verified"] is True

        revoked = await client.post(
            f"/api/v1/admin/users/{educator.id}/verify", json={"is_verified": False}, headers=auth_headers(admin)
        )
        assert revoked.json()["is_verified"] is False

    async def test_verify_unknown_user(self, client: AsyncClient, admin, auth_headers):
        response = await client.post("/api/v1/admin/users/999/verify", headers=auth_headers(admin))
        assert response.status_code == 404

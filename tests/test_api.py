# =============================================================================
# tests/test_api.py - HTTP Endpoint Tests
# =============================================================================
# End-to-end through FastAPI with the in-memory store: status codes,
# auth failures, and the farmer onboarding flow.
# =============================================================================

from datetime import timedelta

import pytest

from app.auth.tokens import issue_token, verify_token
from core.models.user import UserStatus
from tests.conftest import auth_headers
from tests.fakes import FakeAPIError


def register(client, name, email, role, password="pw123"):
    return client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password, "role": role},
    )


def login(client, email, password="pw123"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


# =============================================================================
# Root / Health
# =============================================================================

class TestRoot:
    """Tests for the root and health endpoints."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {"ok": True, "message": "Temo Connect API running"}

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, client):
        assert client.get("/health/ready").json()["status"] == "ready"

    def test_ready_degraded(self, client, fake_db):
        fake_db.fail_with = FakeAPIError("connection refused", code="08006")

        body = client.get("/health/ready").json()

        assert body["status"] == "degraded"
        assert body["checks"]["database"].startswith("unhealthy")


# =============================================================================
# Auth
# =============================================================================

class TestRegisterEndpoint:
    """Tests for POST /api/auth/register."""

    def test_register_farmer(self, client):
        response = register(client, "Alice", "alice@farm.test", "farmer")

        assert response.status_code == 201
        body = response.json()
        assert body["user"]["status"] == "pending"
        assert "password_hash" not in body["user"]
        claims = verify_token(body["token"])
        assert claims.id == body["user"]["id"]
        assert claims.status is UserStatus.PENDING

    def test_register_consumer(self, client):
        response = register(client, "Carol", "carol@home.test", "consumer")

        assert response.status_code == 201
        assert response.json()["user"]["status"] == "approved"

    def test_missing_fields(self, client):
        response = client.post("/api/auth/register", json={"name": "Alice", "email": "a@b.test"})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_empty_field(self, client):
        response = register(client, "", "alice@farm.test", "farmer")

        assert response.status_code == 400

    @pytest.mark.parametrize("role", ["admin", "wizard"])
    def test_invalid_role(self, client, role):
        assert register(client, "Eve", "eve@x.test", role).status_code == 400

    def test_duplicate_email(self, client):
        register(client, "Alice", "alice@farm.test", "farmer")

        response = register(client, "Other", "alice@farm.test", "consumer")

        assert response.status_code == 409
        assert response.json()["code"] == "EMAIL_EXISTS"


class TestLoginEndpoint:
    """Tests for POST /api/auth/login."""

    def test_login(self, client):
        created = register(client, "Alice", "alice@farm.test", "farmer").json()["user"]

        response = login(client, "alice@farm.test")

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["id"] == created["id"]
        assert "password_hash" not in body["user"]
        claims = verify_token(body["token"])
        assert (claims.id, claims.role.value, claims.status.value) == (created["id"], "farmer", "pending")

    def test_wrong_password(self, client):
        register(client, "Alice", "alice@farm.test", "farmer")

        response = login(client, "alice@farm.test", password="wrong")

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_unknown_email_same_response(self, client):
        register(client, "Alice", "alice@farm.test", "farmer")

        wrong_password = login(client, "alice@farm.test", password="wrong")
        unknown = login(client, "nobody@farm.test")

        assert unknown.status_code == 401
        assert unknown.json() == wrong_password.json()

    def test_missing_fields(self, client):
        assert client.post("/api/auth/login", json={"email": "a@b.test"}).status_code == 400


class TestMeEndpoint:
    """Tests for GET /api/auth/me and bearer token handling."""

    def test_me(self, client, consumer):
        response = client.get("/api/auth/me", headers=auth_headers(consumer))

        assert response.status_code == 200
        assert response.json() == {
            "id": consumer["id"],
            "role": "consumer",
            "status": "approved",
            "name": "Carol",
        }

    def test_missing_header(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["detail"] == "Missing token"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_wrong_scheme(self, client, consumer):
        token = issue_token(consumer)

        response = client.get("/api/auth/me", headers={"Authorization": f"Token {token}"})

        assert response.status_code == 401

    def test_invalid_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer abc.def.ghi"})

        assert response.status_code == 401

    def test_expired_token(self, client, consumer):
        token = issue_token(consumer, expires_delta=timedelta(seconds=-1))

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"


# =============================================================================
# Products
# =============================================================================

class TestProductEndpoints:
    """Tests for /api/products."""

    @pytest.fixture
    def bob_headers(self, approved_farmer):
        return auth_headers(approved_farmer)

    @pytest.fixture
    def product(self, client, bob_headers):
        response = client.post(
            "/api/products",
            json={"name": "Tomatoes", "price": 2.5, "quantity": 40},
            headers=bob_headers,
        )
        assert response.status_code == 201
        return response.json()

    def test_public_listing(self, client, product):
        response = client.get("/api/products")

        assert response.status_code == 200
        assert response.json() == [{
            "id": product["id"],
            "name": "Tomatoes",
            "price": 2.5,
            "quantity": 40,
            "image_url": None,
            "description": None,
            "created_at": product["created_at"],
            "farmer_name": "Bob",
        }]

    def test_create_requires_token(self, client):
        response = client.post("/api/products", json={"name": "Kale", "price": 1, "quantity": 1})

        assert response.status_code == 401

    def test_consumer_forbidden(self, client, consumer):
        response = client.post(
            "/api/products",
            json={"name": "Kale", "price": 1, "quantity": 1},
            headers=auth_headers(consumer),
        )

        assert response.status_code == 403
        assert response.json()["code"] == "FARMER_ONLY"

    def test_pending_farmer_forbidden_everywhere(self, client, fake_db, pending_farmer, product):
        headers = auth_headers(pending_farmer)

        responses = [
            client.post("/api/products", json={"name": "Kale", "price": 1, "quantity": 1}, headers=headers),
            client.put(f"/api/products/{product['id']}", json={"price": 1}, headers=headers),
            client.delete(f"/api/products/{product['id']}", headers=headers),
        ]

        for response in responses:
            assert response.status_code == 403
            assert response.json()["code"] == "FARMER_NOT_APPROVED"
            assert response.json()["detail"] == "Farmer not approved by admin yet"
        assert len(fake_db.tables["products"]) == 1

    def test_missing_fields(self, client, bob_headers):
        response = client.post("/api/products", json={"name": "Kale"}, headers=bob_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "name, price, quantity are required"

    def test_zero_quantity_rejected_on_create(self, client, bob_headers):
        response = client.post(
            "/api/products",
            json={"name": "Kale", "price": 1.5, "quantity": 0},
            headers=bob_headers,
        )

        assert response.status_code == 400

    @pytest.mark.parametrize("body", [
        {"name": "Kale", "price": -1, "quantity": 1},
        {"name": "Kale", "price": 1, "quantity": -3},
        {"name": "Kale", "price": "cheap", "quantity": 1},
    ])
    def test_invalid_values(self, client, bob_headers, body):
        assert client.post("/api/products", json=body, headers=bob_headers).status_code == 400

    def test_update(self, client, bob_headers, product):
        response = client.put(
            f"/api/products/{product['id']}",
            json={"quantity": 12, "description": "Last few"},
            headers=bob_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["quantity"] == 12
        assert body["description"] == "Last few"
        assert body["name"] == "Tomatoes"
        assert body["price"] == 2.5

    def test_delete(self, client, bob_headers, product):
        response = client.delete(f"/api/products/{product['id']}", headers=bob_headers)

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert client.get("/api/products").json() == []

    def test_other_farmer_gets_404_like_missing(self, client, user_service, product):
        dave = user_service.register("Dave", "dave@farm.test", "pw", "farmer")
        dave = user_service.approve_farmer(dave["id"])
        headers = auth_headers(dave)

        not_owned_put = client.put(f"/api/products/{product['id']}", json={"price": 9}, headers=headers)
        missing_put = client.put("/api/products/9999", json={"price": 9}, headers=headers)
        not_owned_delete = client.delete(f"/api/products/{product['id']}", headers=headers)
        missing_delete = client.delete("/api/products/9999", headers=headers)

        for response in (not_owned_put, missing_put, not_owned_delete, missing_delete):
            assert response.status_code == 404
            assert response.json()["detail"] == "Product not found"
        assert client.get("/api/products").json()[0]["price"] == 2.5

    def test_store_failure_is_500(self, client, fake_db):
        fake_db.fail_with = FakeAPIError("connection refused", code="08006")

        response = client.get("/api/products")

        assert response.status_code == 500
        assert response.json()["detail"] == "Server error"


# =============================================================================
# Admin
# =============================================================================

class TestAdminEndpoints:
    """Tests for /api/admin."""

    def test_pending_list(self, client, admin_headers, pending_farmer, approved_farmer):
        response = client.get("/api/admin/farmers/pending", headers=admin_headers)

        assert response.status_code == 200
        assert [f["email"] for f in response.json()] == ["alice@farm.test"]

    @pytest.mark.parametrize("who", ["consumer", "approved_farmer"])
    def test_non_admin_forbidden(self, client, request, who):
        headers = auth_headers(request.getfixturevalue(who))

        assert client.get("/api/admin/farmers/pending", headers=headers).status_code == 403

    def test_requires_token(self, client):
        assert client.get("/api/admin/farmers/pending").status_code == 401
        assert client.patch("/api/admin/farmers/1/approve").status_code == 401

    def test_approve(self, client, admin_headers, pending_farmer):
        response = client.patch(
            f"/api/admin/farmers/{pending_farmer['id']}/approve", headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert client.get("/api/admin/farmers/pending", headers=admin_headers).json() == []

    def test_approve_twice_is_404(self, client, admin_headers, pending_farmer):
        url = f"/api/admin/farmers/{pending_farmer['id']}/approve"
        client.patch(url, headers=admin_headers)

        response = client.patch(url, headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Farmer not found or already approved"

    def test_approve_unknown_is_404(self, client, admin_headers):
        assert client.patch("/api/admin/farmers/4242/approve", headers=admin_headers).status_code == 404


# =============================================================================
# Onboarding Scenario
# =============================================================================

class TestFarmerOnboarding:
    """Register -> blocked -> approved -> log in again -> sell."""

    def test_full_flow(self, client, admin_headers):
        registered = register(client, "Alice", "alice@farm.test", "farmer")
        assert registered.status_code == 201
        alice = registered.json()
        assert alice["user"]["status"] == "pending"
        old_headers = {"Authorization": f"Bearer {alice['token']}"}
        new_product = {"name": "Honey", "price": 8.0, "quantity": 12}

        blocked = client.post("/api/products", json=new_product, headers=old_headers)
        assert blocked.status_code == 403

        approved = client.patch(
            f"/api/admin/farmers/{alice['user']['id']}/approve", headers=admin_headers
        )
        assert approved.status_code == 200

        # The old token still says pending
        still_blocked = client.post("/api/products", json=new_product, headers=old_headers)
        assert still_blocked.status_code == 403

        relogin = login(client, "alice@farm.test")
        assert verify_token(relogin.json()["token"]).status is UserStatus.APPROVED
        new_headers = {"Authorization": f"Bearer {relogin.json()['token']}"}

        created = client.post("/api/products", json=new_product, headers=new_headers)
        assert created.status_code == 201
        assert created.json()["farmer_id"] == alice["user"]["id"]

        listing = client.get("/api/products").json()
        assert [(p["name"], p["farmer_name"]) for p in listing] == [("Honey", "Alice")]

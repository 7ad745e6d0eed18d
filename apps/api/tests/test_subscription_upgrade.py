"""Tests for POST /api/tenants/{slug}/upgrade."""

from notes_api.db.models import Tenant


def test_admin_upgrades_own_tenant(client, auth_headers) -> None:
    response = client.post("/api/tenants/acme/upgrade", headers=auth_headers("admin@acme.test"))

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Subscription upgraded to Pro successfully"
    assert body["data"]["slug"] == "acme"
    assert body["data"]["subscription_plan"] == "pro"


def test_second_upgrade_rejected_and_plan_stays_pro(client, auth_headers, db_session) -> None:
    headers = auth_headers("admin@acme.test")
    assert client.post("/api/tenants/acme/upgrade", headers=headers).status_code == 200

    again = client.post("/api/tenants/acme/upgrade", headers=headers)

    assert again.status_code == 400
    assert again.json()["error"] == "Tenant is already on Pro plan"
    assert again.json()["code"] == "VALIDATION_ERROR"
    tenant = db_session.query(Tenant).filter(Tenant.slug == "acme").one()
    assert tenant.subscription_plan == "pro"


def test_admin_cannot_upgrade_other_tenant(client, auth_headers, db_session) -> None:
    response = client.post("/api/tenants/globex/upgrade", headers=auth_headers("admin@acme.test"))

    assert response.status_code == 403
    assert response.json()["code"] == "TENANT_ISOLATION_ERROR"
    assert response.json()["error"] == "You can only upgrade your own tenant subscription"
    globex = db_session.query(Tenant).filter(Tenant.slug == "globex").one()
    assert globex.subscription_plan == "free"


def test_member_cannot_upgrade(client, auth_headers) -> None:
    response = client.post("/api/tenants/acme/upgrade", headers=auth_headers("user@acme.test"))

    assert response.status_code == 403
    assert response.json()["error"] == "Admin access required"
    assert response.json()["code"] == "AUTH_ERROR"


def test_unknown_tenant(client, auth_headers) -> None:
    response = client.post("/api/tenants/initech/upgrade", headers=auth_headers("admin@acme.test"))

    assert response.status_code == 404
    assert response.json()["error"] == "Tenant not found"


def test_upgrade_requires_authentication(client, seeded) -> None:
    response = client.post("/api/tenants/acme/upgrade")

    assert response.status_code == 401


def test_upgrade_visible_to_other_members(client, auth_headers) -> None:
    client.post("/api/tenants/acme/upgrade", headers=auth_headers("admin@acme.test"))

    me = client.get("/api/auth/me", headers=auth_headers("user@acme.test")).json()["data"]

    assert me["tenant"]["subscription_plan"] == "pro"
    assert me["usage"]["notes_limit"] is None

from datetime import date, timedelta

import pytest

START = date.today() + timedelta(days=30)


def _booking_body(*item_ids, **overrides):
    body = {
        "start_date": START.isoformat(),
        "end_date": (START + timedelta(days=1)).isoformat(),
        "delivery_type": "pickup",
        "items": [{"item_id": item_id, "quantity": 1} for item_id in item_ids],
        "customer": {
            "name": "Dana",
            "phone": "081234567890",
            "email": "dana@example.com",
        },
        "discount": 0,
    }
    body.update(overrides)
    return body


@pytest.fixture
async def customer(make_user):
    return await make_user("customer", name="Dana")


@pytest.fixture
async def admin(make_user):
    return await make_user("admin")


@pytest.fixture
async def host(make_user):
    return await make_user("host")


async def test_ping(client):
    res = await client.get("/ping")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


async def test_missing_token_is_401_envelope(client):
    res = await client.get("/api/identity")

    assert res.status_code == 401
    assert res.json()["success"] is False


async def test_garbage_token_is_401(client):
    res = await client.get("/api/booking", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401


async def test_customer_cannot_reach_admin_routes(client, customer, auth_headers):
    res = await client.get("/api/admin/identity/pending", headers=auth_headers(customer))

    assert res.status_code == 403
    assert res.json()["success"] is False


async def test_identity_review_flow(client, customer, admin, auth_headers):
    res = await client.get("/api/identity", headers=auth_headers(customer))
    assert res.status_code == 404

    res = await client.post(
        "/api/identity",
        json={"document_url": "https://x/a.jpg"},
        headers=auth_headers(customer),
    )
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    identity_id = body["data"]["id"]
    assert body["data"]["status"] == "pending"

    res = await client.get("/api/admin/identity/pending", headers=auth_headers(admin))
    assert res.status_code == 200
    pending = res.json()["data"]["items"]
    assert [p["id"] for p in pending] == [identity_id]
    assert pending[0]["user_name"] == "Dana"

    res = await client.post(
        f"/api/admin/identity/{identity_id}/validate",
        json={"status": "rejected"},
        headers=auth_headers(admin),
    )
    assert res.status_code == 400

    res = await client.post(
        f"/api/admin/identity/{identity_id}/validate",
        json={"status": "rejected", "reason": "blurry"},
        headers=auth_headers(admin),
    )
    assert res.status_code == 200
    assert res.json()["data"]["reason"] == "blurry"

    res = await client.put(
        "/api/identity",
        json={"document_url": "https://x/b.jpg"},
        headers=auth_headers(customer),
    )
    assert res.status_code == 200
    assert res.json()["data"]["status"] == "pending"
    assert res.json()["data"]["reason"] is None

    res = await client.post(
        f"/api/admin/identity/{identity_id}/validate",
        json={"status": "approved"},
        headers=auth_headers(admin),
    )
    assert res.status_code == 200
    assert res.json()["data"]["verified"] is True

    res = await client.get(f"/api/admin/identity/user/{customer.id}", headers=auth_headers(admin))
    assert res.status_code == 200
    assert res.json()["data"]["status"] == "approved"

    res = await client.post(
        "/api/identity",
        json={"document_url": "https://x/c.jpg"},
        headers=auth_headers(customer),
    )
    assert res.status_code == 409
    assert res.json() == {"success": False, "message": "identity already uploaded"}


async def test_validate_unknown_identity_is_404(client, admin, auth_headers):
    res = await client.post(
        "/api/admin/identity/9999/validate",
        json={"status": "approved"},
        headers=auth_headers(admin),
    )
    assert res.status_code == 404


async def test_create_and_read_booking(client, customer, host, make_item, auth_headers):
    item = await make_item(host, price_per_day=100, deposit_per_unit=50)

    res = await client.post(
        "/api/booking", json=_booking_body(item.id), headers=auth_headers(customer)
    )
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["booking"]["total_days"] == 2
    assert data["booking"]["total"] == 250
    assert data["booking"]["time_remaining_minutes"] == 30
    assert data["customer"]["delivery_address"] == "N/A"
    booking_id = data["booking"]["id"]

    res = await client.get(f"/api/booking/{booking_id}", headers=auth_headers(customer))
    assert res.status_code == 200
    assert res.json()["data"]["items"][0]["name"] == "Camera"

    res = await client.get("/api/booking", headers=auth_headers(customer))
    assert res.status_code == 200
    items = res.json()["data"]["items"]
    assert [s["booking_id"] for s in items] == [booking_id]
    assert items[0]["total_items"] == 1


async def test_booking_validation_errors_are_400(client, customer, host, make_item, auth_headers):
    item = await make_item(host)

    res = await client.post(
        "/api/booking",
        json=_booking_body(item.id, delivery_type="drone"),
        headers=auth_headers(customer),
    )
    assert res.status_code == 400
    assert res.json()["success"] is False

    res = await client.post(
        "/api/booking", json=_booking_body(), headers=auth_headers(customer)
    )
    assert res.status_code == 400
    assert res.json()["message"] == "at least one item is required"


async def test_other_customer_cannot_read_booking(
    client, customer, host, make_user, make_item, auth_headers
):
    item = await make_item(host)
    res = await client.post(
        "/api/booking", json=_booking_body(item.id), headers=auth_headers(customer)
    )
    booking_id = res.json()["data"]["booking"]["id"]
    stranger = await make_user("customer")

    res = await client.get(f"/api/booking/{booking_id}", headers=auth_headers(stranger))

    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "booking not found"}


async def test_host_views(client, customer, host, make_user, make_item, auth_headers):
    item = await make_item(host)
    res = await client.post(
        "/api/booking", json=_booking_body(item.id), headers=auth_headers(customer)
    )
    booking_id = res.json()["data"]["booking"]["id"]

    res = await client.get("/api/host/bookings", headers=auth_headers(host))
    assert res.status_code == 200
    rows = res.json()["data"]["items"]
    assert [r["booking_id"] for r in rows] == [booking_id]
    assert rows[0]["customer_name"] == "Dana"

    res = await client.get(f"/api/host/bookings/{booking_id}", headers=auth_headers(host))
    assert res.status_code == 200
    assert res.json()["data"]["customer"]["phone"] == "081234567890"

    other_host = await make_user("host")
    res = await client.get(f"/api/host/bookings/{booking_id}", headers=auth_headers(other_host))
    assert res.status_code == 404

    res = await client.get("/api/host/bookings", headers=auth_headers(customer))
    assert res.status_code == 403


async def test_host_customer_list(client, customer, host, make_user, make_item, auth_headers):
    item = await make_item(host)
    for _ in range(2):
        res = await client.post(
            "/api/booking", json=_booking_body(item.id), headers=auth_headers(customer)
        )
        assert res.status_code == 200

    res = await client.get("/api/host/customers", headers=auth_headers(host))
    assert res.status_code == 200
    rows = res.json()["data"]["items"]
    assert [r["user_id"] for r in rows] == [customer.id]
    assert rows[0]["name"] == "Dana"
    assert rows[0]["phone"] == "081234567890"

    other_host = await make_user("host")
    res = await client.get("/api/host/customers", headers=auth_headers(other_host))
    assert res.json()["data"]["items"] == []

    res = await client.get("/api/host/customers", headers=auth_headers(customer))
    assert res.status_code == 403

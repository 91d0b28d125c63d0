"""Интеграционные тесты API."""
from datetime import datetime, timedelta, timezone

import pytest

API = "/api/v1"


def iso_in_days(days: int) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def parse_datetime(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def create_house(client, house_number, **fields):
    response = client.post(f"{API}/houses", json={"house_number": house_number, **fields})
    assert response.status_code == 201
    return response.json()


def create_log(client, **fields):
    response = client.post(f"{API}/info-logs", json=fields)
    assert response.status_code == 201
    return response.json()


def create_member(client, house_id, email, **fields):
    return client.post(f"{API}/members", json={"house_id": house_id, "member_email": email, **fields})


@pytest.fixture
def house(client):
    return create_house(client, "A101")


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_protected_routes_require_token(anonymous_client):
    assert anonymous_client.get(f"{API}/houses").status_code == 401
    assert anonymous_client.get(f"{API}/members").status_code == 401


def test_end_to_end_provisioning_and_duplicate(client, house):
    log = create_log(client, line_id="U1", email="a@x.com", expiration_date=iso_in_days(30))

    response = client.patch(f"{API}/info-logs/{log['id']}", json={"house_group": "A101"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["provisioning"]["outcome"] == "created"

    members = client.get(f"{API}/members").json()
    assert len(members) == 1
    assert members[0]["house_id"] == house["id"]
    assert members[0]["house_number"] == "A101"
    assert members[0]["member_email"] == "a@x.com"
    assert members[0]["status"] == "active"
    assert members[0]["is_effectively_active"] is True

    response = client.patch(f"{API}/info-logs/{log['id']}", json={"house_group": "A101"})
    assert response.json()["provisioning"]["outcome"] == "skipped_duplicate"
    assert len(client.get(f"{API}/members").json()) == 1


def test_full_house_rejects_provisioning(client, house):
    for i in range(5):
        assert create_member(client, house["id"], f"seat{i}@x.com").status_code == 201
    log = create_log(client, line_id="U2")

    response = client.patch(f"{API}/info-logs/{log['id']}", json={"house_group": "A101"})

    assert response.status_code == 200
    assert response.json()["provisioning"]["outcome"] == "skipped_at_capacity"
    assert len(client.get(f"{API}/members", params={"house_id": house["id"]}).json()) == 5
    # Сама заявка обновлена
    assert client.get(f"{API}/info-logs/{log['id']}").json()["house_group"] == "A101"


def test_past_expiration_creates_expired_member(client, house):
    log = create_log(client, line_id="U3", expiration_date=iso_in_days(-2))
    client.patch(f"{API}/info-logs/{log['id']}", json={"house_group": "A101"})

    member = client.get(f"{API}/members").json()[0]
    assert member["status"] == "expired"
    assert member["is_active"] is False
    assert member["is_effectively_active"] is False


def test_update_without_house_group_reports_no_provisioning(client, house):
    log = create_log(client, line_id="U1")
    response = client.patch(f"{API}/info-logs/{log['id']}", json={"customer_name": "Malee"})
    assert response.json() == {"success": True, "provisioning": None}


def test_unknown_house_group_still_updates_log(client):
    log = create_log(client, line_id="U1")
    response = client.patch(f"{API}/info-logs/{log['id']}", json={"house_group": "Z999"})
    assert response.json()["provisioning"]["outcome"] == "skipped_house_not_found"
    assert client.get(f"{API}/info-logs/{log['id']}").json()["house_group"] == "Z999"


def test_update_missing_log_returns_404(client):
    assert client.patch(f"{API}/info-logs/999", json={"house_group": "A101"}).status_code == 404


def test_empty_date_strings_are_absent(client):
    log = create_log(client, line_id="U1", registration_date="", expiration_date="")
    assert log["registration_date"] is None
    assert log["expiration_date"] is None


def test_invalid_channel_rejected(client):
    assert client.post(f"{API}/info-logs", json={"channel": "email"}).status_code == 422


def test_info_logs_listed_newest_first(client):
    first = create_log(client, customer_name="first")
    second = create_log(client, customer_name="second")
    ids = [log["id"] for log in client.get(f"{API}/info-logs").json()]
    assert ids == [second["id"], first["id"]]


def test_delete_info_log(client):
    log = create_log(client, customer_name="gone")
    assert client.delete(f"{API}/info-logs/{log['id']}").status_code == 204
    assert client.get(f"{API}/info-logs/{log['id']}").status_code == 404


def test_duplicate_house_number_rejected(client, house):
    response = client.post(f"{API}/houses", json={"house_number": "A101"})
    assert response.status_code == 400


def test_get_house_by_number(client, house):
    assert client.get(f"{API}/houses/by-number/A101").json()["id"] == house["id"]
    assert client.get(f"{API}/houses/by-number/Z999").status_code == 404


def test_update_house(client, house):
    create_house(client, "B201")
    response = client.patch(f"{API}/houses/{house['id']}", json={"status": "moved", "note": "moved out"})
    assert response.status_code == 200
    assert response.json()["status"] == "moved"
    assert client.patch(f"{API}/houses/{house['id']}", json={"house_number": "B201"}).status_code == 400


def test_delete_house(client):
    empty = create_house(client, "C301")
    assert client.delete(f"{API}/houses/{empty['id']}").status_code == 204
    assert client.get(f"{API}/houses/{empty['id']}").status_code == 404


def test_houses_with_member_count(client, house):
    other = create_house(client, "B201")
    create_member(client, house["id"], "a@x.com")
    create_member(client, house["id"], "b@x.com", expiration_date=iso_in_days(-10))

    counts = {h["house_number"]: h for h in client.get(f"{API}/houses/with-member-count").json()}
    assert counts["A101"]["member_count"] == 2
    assert counts["A101"]["capacity_remaining"] == 3
    assert counts["B201"]["member_count"] == 0
    assert counts["B201"]["capacity_remaining"] == 5
    assert other["id"] == counts["B201"]["id"]


def test_available_houses_excludes_full(client, house):
    create_house(client, "B201")
    for i in range(5):
        create_member(client, house["id"], f"seat{i}@x.com")
    numbers = [h["house_number"] for h in client.get(f"{API}/members/available-houses").json()]
    assert numbers == ["B201"]


def test_manual_member_create_enforces_capacity(client, house):
    for i in range(5):
        create_member(client, house["id"], f"seat{i}@x.com")
    assert create_member(client, house["id"], "extra@x.com").status_code == 409


def test_manual_member_create_unknown_house(client):
    assert create_member(client, 999, "a@x.com").status_code == 404


def test_member_update_recomputes_status(client, house):
    member = create_member(client, house["id"], "a@x.com").json()
    assert member["status"] == "active"

    response = client.patch(f"{API}/members/{member['id']}", json={"expiration_date": iso_in_days(-1)})
    assert response.json()["status"] == "expired"
    assert response.json()["is_active"] is False


def test_member_move_to_other_house_not_capacity_checked(client, house):
    other = create_house(client, "B201")
    for i in range(5):
        create_member(client, other["id"], f"seat{i}@x.com")
    member = create_member(client, house["id"], "mover@x.com").json()

    response = client.patch(f"{API}/members/{member['id']}", json={"house_id": other["id"]})
    assert response.status_code == 200
    assert len(client.get(f"{API}/members", params={"house_id": other["id"]}).json()) == 6


def test_member_move_to_unknown_house(client, house):
    member = create_member(client, house["id"], "a@x.com").json()
    assert client.patch(f"{API}/members/{member['id']}", json={"house_id": 999}).status_code == 404


def test_active_members_sorted_by_house_number(client):
    a10 = create_house(client, "A10")
    a2 = create_house(client, "A2")
    create_member(client, a10["id"], "ten@x.com")
    create_member(client, a2["id"], "two@x.com", expiration_date=iso_in_days(5))
    create_member(client, a2["id"], "old@x.com", expiration_date=iso_in_days(-5))

    emails = [m["member_email"] for m in client.get(f"{API}/members/active").json()]
    assert emails == ["two@x.com", "ten@x.com"]


def test_expired_members_latest_first(client, house):
    create_member(client, house["id"], "long-ago@x.com", expiration_date=iso_in_days(-30))
    create_member(client, house["id"], "recent@x.com", expiration_date=iso_in_days(-2))
    create_member(client, house["id"], "current@x.com")

    expired = client.get(f"{API}/members/expired").json()
    assert [m["member_email"] for m in expired] == ["recent@x.com", "long-ago@x.com"]
    assert expired[0]["days_expired"] in (1, 2)
    assert expired[1]["days_expired"] in (29, 30)


def test_delete_member(client, house):
    member = create_member(client, house["id"], "a@x.com").json()
    assert client.delete(f"{API}/members/{member['id']}").status_code == 204
    assert client.get(f"{API}/members/{member['id']}").status_code == 404


def test_dashboard(client):
    create_house(client, "A101")
    create_house(client, "B201", status="expired")
    for i in range(7):
        create_log(client, customer_name=f"c{i}")

    body = client.get(f"{API}/dashboard").json()
    assert body["stats"] == {
        "info_log_count": 7,
        "house_count": 2,
        "member_count": 0,
        "expired_house_count": 1,
    }
    assert [log["customer_name"] for log in body["recent_info_logs"]] == ["c6", "c5", "c4", "c3", "c2"]
    assert [h["house_number"] for h in body["expired_houses"]] == ["B201"]


def test_offset_expiration_date_is_stored_as_utc(client, house):
    bangkok = timezone(timedelta(hours=7))
    sent = (datetime.now(timezone.utc) - timedelta(hours=1)).astimezone(bangkok)
    log = create_log(client, line_id="U7")

    response = client.patch(
        f"{API}/info-logs/{log['id']}",
        json={"house_group": "A101", "expiration_date": sent.isoformat()},
    )
    assert response.json()["provisioning"]["outcome"] == "created"

    stored_log = client.get(f"{API}/info-logs/{log['id']}").json()
    assert parse_datetime(stored_log["expiration_date"]) == sent

    member = client.get(f"{API}/members").json()[0]
    assert parse_datetime(member["expiration_date"]) == sent
    assert member["status"] == "expired"
    assert member["is_effectively_active"] is False
    assert [m["member_email"] for m in client.get(f"{API}/members/active").json()] == []
    assert len(client.get(f"{API}/members/expired").json()) == 1


def test_null_for_required_columns_rejected(client, house):
    log = create_log(client, line_id="U1")
    member = create_member(client, house["id"], "a@x.com").json()

    assert client.patch(f"{API}/info-logs/{log['id']}", json={"sync_status": None}).status_code == 422
    assert client.patch(f"{API}/houses/{house['id']}", json={"status": None}).status_code == 422
    assert client.patch(f"{API}/houses/{house['id']}", json={"house_number": None}).status_code == 422
    assert client.patch(f"{API}/members/{member['id']}", json={"member_email": None}).status_code == 422
    assert client.patch(f"{API}/members/{member['id']}", json={"house_id": None}).status_code == 422

    # Отклонённые запросы не ломают последующие
    response = client.patch(f"{API}/houses/{house['id']}", json={"status": "moved"})
    assert response.status_code == 200
    assert client.get(f"{API}/info-logs/{log['id']}").json()["sync_status"] == "pending"


def test_provisioning_outcomes_listed_in_openapi(client):
    schemas = client.get("/openapi.json").json()["components"]["schemas"]
    assert set(schemas["ProvisionOutcome"]["enum"]) == {
        "created",
        "skipped_no_house_group",
        "skipped_house_not_found",
        "skipped_at_capacity",
        "skipped_duplicate",
        "failed",
    }

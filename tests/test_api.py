"""Tests API / API tests."""

import pytest
from httpx import ASGITransport, AsyncClient

from lab_scheduler.database import get_db
from lab_scheduler.main import app
from lab_scheduler.models.user import User, UserRole
from lab_scheduler.rate_limit import limiter
from lab_scheduler.utils.auth import create_access_token, hash_password

from tests.factories import RecordingNotifier

BOOKING = {
    "grade_id": 3,
    "grade_class": "A",
    "teacher_name": "Maria Souza",
    "date": "2024-03-04",
    "time_slot_id": 1,
    "equipment_id": 1,
    "content": "Frações no Scratch",
}


def auth(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
async def users(session_factory):
    async with session_factory() as session:
        created = {
            "admin": User(username="admin", display_name="PROATI", hashed_password=hash_password("admin"),
                          role=UserRole.ADMIN),
            "teacher": User(username="maria", display_name="Maria Souza", hashed_password=hash_password("senha123"),
                            role=UserRole.TEACHER, assigned_class="3A"),
            "coordinator": User(username="coord", display_name="Coordenação", hashed_password=hash_password("coord123"),
                                role=UserRole.COORDINATOR),
        }
        session.add_all(created.values())
        await session.commit()
    return created


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.state.notifier = RecordingNotifier()
    limiter.enabled = False
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.mark.asyncio
async def test_root(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "running"
    assert "X-Request-ID" in resp.headers
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


@pytest.mark.asyncio
async def test_api_health(client):
    resp = await client.get("/api/")
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_catalog_is_public(client):
    resp = await client.get("/api/catalog/grades")
    assert resp.status_code == 200
    assert len(resp.json()) == 13

    resp = await client.get("/api/catalog/time-slots", params={"shift": "night"})
    assert [s["id"] for s in resp.json()] == [13, 14, 15, 16, 17]

    resp = await client.get("/api/catalog/classes")
    assert "1EM-A" in resp.json()


@pytest.mark.asyncio
async def test_schedules_require_authentication(client):
    resp = await client.get("/api/schedules/")
    assert resp.status_code in (401, 403)


@pytest.mark.asyncio
async def test_login_and_me(client, users):
    resp = await client.post("/api/auth/login", json={"username": "maria", "password": "senha123"})
    assert resp.status_code == 200
    token = resp.json()["access_token"]

    resp = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.json()["assigned_class"] == "3A"
    assert resp.json()["role"] == "teacher"


@pytest.mark.asyncio
async def test_login_wrong_password(client, users):
    resp = await client.post("/api/auth/login", json={"username": "maria", "password": "errada"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_create_weekly_series(client, users):
    payload = {**BOOKING, "is_recurring": True, "recurring_frequency": "weekly", "recurring_end_date": "2024-03-18"}
    resp = await client.post("/api/schedules/", json=payload, headers=auth(users["teacher"]))
    assert resp.status_code == 201
    data = resp.json()
    assert data["total_created"] == 3
    assert "3 semanas" in data["message"]
    assert data["schedule"]["period"] == "afternoon"
    assert [c["recurring_parent_id"] for c in data["children"]] == [data["schedule"]["id"]] * 2
    assert data["conflicts"] == []

    resp = await client.get("/api/schedules/date/2024-03-11", headers=auth(users["coordinator"]))
    assert resp.status_code == 200
    assert len(resp.json()) == 1

    resp = await client.get(f"/api/schedules/{data['schedule']['id']}/series", headers=auth(users["admin"]))
    assert [b["date"] for b in resp.json()] == ["2024-03-04", "2024-03-11", "2024-03-18"]

    resp = await client.get(
        "/api/schedules/range",
        params={"start_date": "2024-03-05", "end_date": "2024-03-31"},
        headers=auth(users["teacher"]),
    )
    assert len(resp.json()) == 2


@pytest.mark.asyncio
async def test_create_single_booking(client, users):
    resp = await client.post("/api/schedules/", json=BOOKING, headers=auth(users["admin"]))
    assert resp.status_code == 201
    assert resp.json()["message"] == "Agendamento criado com sucesso."
    assert app.state.notifier.sent[-1][1] == "Novo agendamento"


@pytest.mark.asyncio
async def test_conflict_is_reported(client, users):
    first = await client.post("/api/schedules/", json=BOOKING, headers=auth(users["admin"]))
    resp = await client.post("/api/schedules/", json={**BOOKING, "grade_class": "B"}, headers=auth(users["admin"]))
    assert resp.status_code == 201
    assert resp.json()["conflicts"][0]["booking_id"] == first.json()["schedule"]["id"]


@pytest.mark.asyncio
async def test_coordinator_cannot_create(client, users):
    resp = await client.post("/api/schedules/", json=BOOKING, headers=auth(users["coordinator"]))
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Você só pode criar agendamentos para a sua turma"

    resp = await client.get("/api/schedules/", headers=auth(users["coordinator"]))
    assert resp.json() == []


@pytest.mark.asyncio
async def test_teacher_cannot_book_other_class(client, users):
    resp = await client.post("/api/schedules/", json={**BOOKING, "grade_class": "B"}, headers=auth(users["teacher"]))
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_shift_mismatch_is_rejected(client, users):
    resp = await client.post("/api/schedules/", json={**BOOKING, "time_slot_id": 7}, headers=auth(users["admin"]))
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_malformed_date_is_rejected(client, users):
    resp = await client.post("/api/schedules/", json={**BOOKING, "date": "04/03/2024"}, headers=auth(users["admin"]))
    assert resp.status_code == 422

    resp = await client.get("/api/schedules/date/2024-02-30", headers=auth(users["admin"]))
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_update_complete_and_delete(client, users):
    headers = auth(users["teacher"])
    created = await client.post("/api/schedules/", json=BOOKING, headers=headers)
    booking_id = created.json()["schedule"]["id"]

    resp = await client.put(f"/api/schedules/{booking_id}", json={"content": "Planilhas"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["schedule"]["content"] == "Planilhas"

    resp = await client.patch(f"/api/schedules/{booking_id}/complete", json={"is_completed": True}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["is_completed"] is True

    resp = await client.patch(
        f"/api/schedules/{booking_id}/complete", json={"is_completed": True}, headers=auth(users["coordinator"])
    )
    assert resp.status_code == 403

    resp = await client.delete(f"/api/schedules/{booking_id}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Agendamento excluído com sucesso"

    resp = await client.get(f"/api/schedules/{booking_id}", headers=headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_upcoming_limit_validation(client, users):
    resp = await client.get("/api/schedules/upcoming", params={"limit": 0}, headers=auth(users["admin"]))
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_weekly_export_csv(client, users):
    await client.post("/api/schedules/", json=BOOKING, headers=auth(users["admin"]))
    resp = await client.get(
        "/api/exports/weekly",
        params={"date": "2024-03-06", "shift": "afternoon", "format": "csv"},
        headers=auth(users["coordinator"]),
    )
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert resp.content.startswith(b"\xef\xbb\xbf")
    assert "Frações no Scratch" in resp.content.decode("utf-8-sig")


@pytest.mark.asyncio
async def test_users_admin_only(client, users):
    resp = await client.get("/api/users/", headers=auth(users["teacher"]))
    assert resp.status_code == 403

    resp = await client.get("/api/users/", headers=auth(users["admin"]))
    assert resp.status_code == 200
    assert len(resp.json()) == 3


@pytest.mark.asyncio
async def test_teacher_needs_valid_class(client, users):
    payload = {"username": "joao", "password": "senha123", "display_name": "João", "role": "teacher"}
    resp = await client.post("/api/users/", json=payload, headers=auth(users["admin"]))
    assert resp.status_code == 422

    resp = await client.post("/api/users/", json={**payload, "assigned_class": "3C"}, headers=auth(users["admin"]))
    assert resp.status_code == 422

    resp = await client.post("/api/users/", json={**payload, "assigned_class": "3B"}, headers=auth(users["admin"]))
    assert resp.status_code == 201
    assert resp.json()["assigned_class"] == "3B"


@pytest.mark.asyncio
async def test_admin_cannot_delete_self(client, users):
    resp = await client.delete(f"/api/users/{users['admin'].id}", headers=auth(users["admin"]))
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_send_all_without_subscribers(client, users):
    resp = await client.post(
        "/api/push/send-all", json={"title": "Aviso", "message": "Laboratório fechado"}, headers=auth(users["admin"])
    )
    assert resp.status_code == 200
    assert resp.json()["warning"] is True


@pytest.mark.asyncio
async def test_subscribe_and_send_test(client, users):
    subscription = {"endpoint": "https://push.example.com/abc", "keys": {"p256dh": "key", "auth": "secret"}}
    resp = await client.post("/api/push/subscribe", json=subscription, headers=auth(users["teacher"]))
    assert resp.status_code == 201

    resp = await client.post(
        "/api/push/send-test", json={"user_id": users["teacher"].id}, headers=auth(users["admin"])
    )
    assert resp.status_code == 200
    assert app.state.notifier.sent[-1][0] == users["teacher"].id

    resp = await client.request(
        "DELETE", "/api/push/unsubscribe", json={"endpoint": subscription["endpoint"]}, headers=auth(users["teacher"])
    )
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_audit_log_records_booking_changes(client, users):
    created = await client.post("/api/schedules/", json=BOOKING, headers=auth(users["admin"]))
    booking_id = created.json()["schedule"]["id"]
    await client.patch(f"/api/schedules/{booking_id}/complete", json={"is_completed": True}, headers=auth(users["admin"]))

    resp = await client.get("/api/audit/", params={"booking_id": booking_id}, headers=auth(users["admin"]))
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 2
    assert [item["action"] for item in data["items"]] == ["COMPLETE", "CREATE"]

    resp = await client.get("/api/audit/", params={"action": "CREATE"}, headers=auth(users["admin"]))
    assert [item["entity_id"] for item in resp.json()["items"]] == [booking_id]


@pytest.mark.asyncio
async def test_audit_filters_are_restricted(client, users):
    headers = auth(users["admin"])
    assert (await client.get("/api/audit/", params={"entity_type": "Vehicle"}, headers=headers)).status_code == 422
    assert (await client.get("/api/audit/", params={"action": "DROP"}, headers=headers)).status_code == 422
    assert (await client.get("/api/audit/", headers=auth(users["teacher"]))).status_code == 403

    await client.post("/api/auth/login", json={"username": "maria", "password": "errada"})
    resp = await client.get("/api/audit/", params={"entity_type": "auth"}, headers=headers)
    assert [item["action"] for item in resp.json()["items"]] == ["LOGIN_FAILED"]


@pytest.mark.asyncio
async def test_update_cannot_relink_series(client, users):
    payload = {**BOOKING, "is_recurring": True, "recurring_frequency": "weekly", "recurring_end_date": "2024-03-11"}
    created = (await client.post("/api/schedules/", json=payload, headers=auth(users["admin"]))).json()
    child_id = created["children"][0]["id"]

    resp = await client.put(
        f"/api/schedules/{child_id}", json={"recurring_parent_id": None}, headers=auth(users["admin"])
    )
    assert resp.status_code == 422

    resp = await client.get(f"/api/schedules/{child_id}", headers=auth(users["admin"]))
    assert resp.json()["recurring_parent_id"] == created["schedule"]["id"]

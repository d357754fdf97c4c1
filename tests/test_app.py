from __future__ import annotations

import pytest

from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.database.offline_store import OfflineDocumentStore
from src.school_attendance.school_attendance.main import create_app


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, username="admin", password="admin123"):
    return client.post("/login", json={"username": username, "password": password})


def test_status(client):
    resp = client.get("/api/status")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["connected"] is True
    assert body["active_year"] == "2024/2025"


def test_login_and_me(client):
    assert client.get("/api/me").status_code == 401

    resp = _login(client)
    assert resp.status_code == 200
    assert resp.get_json()["user"]["role"] == "ADMIN"
    assert client.get("/api/me").get_json()["user"]["user_id"] == "admin"

    client.post("/logout")
    assert client.get("/api/me").status_code == 401


def test_wrong_password_is_401(client):
    resp = _login(client, password="salah")
    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Username atau password salah", "retryable": False}


def test_save_and_load_daily_attendance(client, make_student):
    make_student("s1", "Andi")
    make_student("s2", "Budi")
    _login(client)

    resp = client.post(
        "/api/attendance/daily",
        json={"date": "2026-10-19", "class_id": "1", "statuses": {"s1": "H", "s2": "S"}},
    )
    assert resp.status_code == 200
    assert resp.get_json()["saved"] == 2

    body = client.get("/api/attendance/daily?date=2026-10-19&class_id=1").get_json()
    assert body["day_name"] == "Senin"
    assert body["day_off"] is None
    assert [(s["name"], s["status"]) for s in body["students"]] == [("Andi", "H"), ("Budi", "S")]


def test_day_off_is_400(client, make_student):
    make_student("s1", "Andi")
    _login(client)

    resp = client.post(
        "/api/attendance/daily",
        json={"date": "2026-10-25", "class_id": "1", "statuses": {"s1": "H"}},
    )
    assert resp.status_code == 400
    assert "Akhir Pekan" in resp.get_json()["message"]

    check = client.post("/api/attendance/check", json={"date": "2024-08-17", "status": "H"})
    assert check.status_code == 400
    assert "Hari Kemerdekaan RI" in check.get_json()["message"]


def test_homeroom_teacher_is_forbidden_elsewhere(client, container):
    container.teacher_service.save_user(name="Bu Sari", username="sari", password="rahasia", class_id="1")
    _login(client, "sari", "rahasia")

    assert client.get("/api/attendance/daily?date=2026-10-19&class_id=1").status_code == 200
    assert client.get("/api/attendance/daily?date=2026-10-19&class_id=3").status_code == 403
    assert client.get("/api/teachers").status_code == 403


def test_store_failure_is_503_and_retryable(client, store, make_student):
    make_student("s1", "Andi")
    _login(client)
    store.fail_next_commit = True

    resp = client.post(
        "/api/attendance/daily",
        json={"date": "2026-10-19", "class_id": "1", "statuses": {"s1": "H"}},
    )

    assert resp.status_code == 503
    assert resp.get_json()["retryable"] is True


def test_offline_store_write_is_503(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(build_container(store=OfflineDocumentStore()))
    client = app.test_client()
    with client.session_transaction() as sess:
        sess.update({"user_id": "admin", "name": "Administrator", "role": "ADMIN"})

    assert client.get("/api/status").get_json()["connected"] is False
    resp = client.post("/api/subjects", json={"name": "Math"})
    assert resp.status_code == 503
    assert resp.get_json()["retryable"] is False


def test_parent_login_and_history(client, container, make_student):
    make_student("s1", "Andi", nisn="0099")
    make_student("s2", "Budi")
    _login(client)
    client.post("/api/attendance/daily", json={"date": "2026-10-19", "class_id": "1", "statuses": {"s1": "I"}})
    client.post("/logout")

    assert client.post("/login/parent", json={"nisn": "0099"}).status_code == 200

    records = client.get("/api/attendance/student/s1").get_json()["records"]
    assert [(r["date"], r["status"]) for r in records] == [("2026-10-19", "I")]
    assert client.get("/api/attendance/student/s2").status_code == 403
    assert client.get("/api/attendance/daily?date=2026-10-19&class_id=1").status_code == 403


def test_monthly_csv_download(client, make_student):
    make_student("s1", "Andi")
    _login(client)
    client.post("/api/attendance/daily", json={"date": "2026-10-19", "class_id": "1", "statuses": {"s1": "H"}})

    resp = client.get("/reports/monthly.csv?year=2026&month=10&class_id=1")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert 'filename="Absensi_Harian_Oktober.csv"' in resp.headers["Content-Disposition"]
    assert resp.data.startswith(b"\xef\xbb\xbf")
    text = resp.data.decode("utf-8-sig")
    assert text.splitlines()[0] == "Laporan Absensi Harian"
    assert text.splitlines()[5].startswith("1,00s1,Andi,1,")


def test_monthly_print_page(client, container, make_student):
    make_student("s1", "Andi")
    container.headmaster_service.update(name="Drs. Hasan", nip="196001011990")
    _login(client)

    resp = client.get("/reports/monthly/print?year=2026&month=10&class_id=1")

    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert "LAPORAN ABSENSI HARIAN" in html
    assert "Drs. Hasan" in html
    assert "Andi" in html


def test_report_json(client, make_student):
    make_student("s1", "Andi")
    _login(client)

    body = client.get("/api/reports/monthly?year=2026&month=10&class_id=1").get_json()

    assert body["report"]["eligible_slots"] == 22
    assert body["report"]["percentage"] == "0.00"

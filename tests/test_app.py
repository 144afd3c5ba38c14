from __future__ import annotations

import io

import pytest

from src.absensi_pdm.absensi_pdm.main import create_app


@pytest.fixture
def app():
    return create_app("config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, username: str, password: str = "123"):
    return client.post("/", data={"username": username, "password": password})


def test_login_page_and_bad_password(client):
    assert client.get("/").status_code == 200

    resp = _login(client, "admin", "salah")

    assert resp.status_code == 200
    assert "Username atau password salah!" in resp.get_data(as_text=True)


def test_protected_pages_redirect_to_login(client):
    resp = client.get("/dashboard")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/")


def test_admin_login_and_dashboard(client):
    resp = _login(client, "admin")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/dashboard")

    page = client.get("/dashboard").get_data(as_text=True)
    assert "Total Peserta" in page
    assert "Sebaran Unit Amal Usaha" in page


def test_logout_clears_session(client):
    _login(client, "admin")
    client.get("/logout")

    assert client.get("/dashboard").status_code == 302


def test_unit_user_falls_back_from_reports(client):
    _login(client, "sd")

    resp = client.get("/reports")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/dashboard")
    assert client.get("/reports/export.csv").status_code == 302


def test_unit_user_cannot_toggle_period(client):
    _login(client, "sd")

    assert client.post("/attendance/0/toggle").status_code == 403


def test_closed_month_is_locked_for_unit_user(client):
    _login(client, "sd")

    resp = client.get("/attendance/0")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/attendance")


def test_checkin_flow_and_csv_export(app, client):
    container = app.extensions["absensi_container"]
    _login(client, "admin")
    client.post("/attendance/0/toggle")

    client.get("/logout")
    _login(client, "sd")
    assert client.get("/attendance/0?q=siti").status_code == 200

    resp = client.post("/attendance/0/checkin", data={"participant_id": "2", "status": "izin", "notes": ""})
    assert resp.status_code == 302
    assert container.attendance_service.record_for("2", "2026-01-01") is None

    client.post("/attendance/0/checkin", data={"participant_id": "2", "status": "izin", "notes": "sakit keluarga"})
    rec = container.attendance_service.record_for("2", "2026-01-01")
    assert rec is not None and rec.notes == "sakit keluarga"

    client.get("/logout")
    _login(client, "admin")
    resp = client.get("/reports/export.csv?month=0")
    assert resp.status_code == 200
    assert resp.headers["Content-Disposition"] == "attachment; filename=rekap_absensi_Januari_2026.csv"
    body = resp.data.decode("utf-8-sig")
    assert body.splitlines()[1].endswith(',IZIN,"sakit keluarga"')


def test_api_checkin_statuses(client):
    _login(client, "sd")

    closed = client.post("/api/attendance/checkin", json={"participant_id": "2", "status": "hadir", "month_index": 5})
    assert closed.status_code == 403
    assert closed.get_json()["success"] is False

    missing = client.post("/api/attendance/checkin", json={"participant_id": "1", "status": "hadir", "month_index": 5})
    assert missing.status_code == 400


def test_admin_api_checkin_twice(client):
    _login(client, "admin")
    payload = {"participant_id": "1", "status": "hadir", "month_index": 3}

    first = client.post("/api/attendance/checkin", json=payload)
    second = client.post("/api/attendance/checkin", json=payload)

    assert first.status_code == 201
    assert first.get_json()["record"]["dateString"] == "2026-04-01"
    assert second.status_code == 400


def test_import_upload_forces_unit(app, client):
    container = app.extensions["absensi_container"]
    _login(client, "sd")

    data = {"file": (io.BytesIO(b"nama,unit\nBudi,SMA X\n"), "peserta.csv")}
    resp = client.post("/participants/import", data=data, content_type="multipart/form-data")

    assert resp.status_code == 302
    budi = [p for p in container.participants_repo.list_all() if p.name == "Budi"]
    assert [p.unit for p in budi] == ["SD Muhammadiyah 1 Pagar Alam"]


def test_participants_page_and_template(client):
    _login(client, "sd")

    page = client.get("/participants").get_data(as_text=True)
    assert "Siti Rohimah" in page
    assert "Ahmad Fauzan" not in page

    tpl = client.get("/participants/template.csv")
    assert tpl.data.startswith(b"nama_peserta\n")


def test_participant_qr_scoped(client):
    _login(client, "sd")

    assert client.get("/participants/2/qr.png").mimetype == "image/png"
    assert client.get("/participants/1/qr.png").status_code == 404

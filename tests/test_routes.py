import base64
import inspect

import pytest
from fastapi.testclient import TestClient

from conftest import FakeError, make_row
from sophia_recruit.api import routes
from sophia_recruit.config import settings
from sophia_recruit.core.board import ApplicantBoard
from sophia_recruit.main import app

ADMIN = {"X-Admin-Password": settings.ADMIN_PASSWORD}

FORM = {
    "first_name": "Jean",
    "last_name": "Dupont",
    "email": "Jean.Dupont@exemple.com",
    "phone": "06 12 34 56 78",
    "position": "Serveur",
    "start_date": "2026-05-01",
    "end_date": "2026-09-30",
    "notes": "Deux saisons en brasserie",
}


@pytest.fixture
def client(monkeypatch, database):
    monkeypatch.setattr(routes, "db", database)
    monkeypatch.setattr(routes, "board", ApplicantBoard(database))
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").json()["database_connected"] is True


def test_form_page_lists_positions(client):
    page = client.get("/apply")
    assert page.status_code == 200
    assert '<option value="Plongeur">' in page.text


def test_submit_without_file_stores_new_applicant(client, supabase):
    response = client.post("/api/applicants", data=FORM)

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "NEW"
    assert body["cv_url"] is None
    row = supabase.applicants.rows[0]
    assert row["status"] == "NEW"
    assert row["cv_file_path"] is None
    assert row["cv_file_name"] is None
    assert row["email"] == "jean.dupont@exemple.com"


def test_submit_with_file_uploads_to_bucket(client, supabase):
    files = {"resume": ("cv.pdf", b"%PDF-1.4", "application/pdf")}
    response = client.post("/api/applicants", data=FORM, files=files)

    assert response.status_code == 201
    row = supabase.applicants.rows[0]
    assert row["cv_file_name"] == "cv.pdf"
    assert row["cv_file_path"].startswith("https://example.supabase.co/storage/v1/object/public/cv/")


def test_submit_falls_back_to_data_uri(client, supabase):
    supabase.storage.upload_error = FakeError("Bucket not found")
    files = {"resume": ("cv.pdf", b"%PDF-1.4", "application/pdf")}

    response = client.post("/api/applicants", data=FORM, files=files)

    assert response.status_code == 201
    path = supabase.applicants.rows[0]["cv_file_path"]
    assert base64.b64decode(path.split(",", 1)[1]) == b"%PDF-1.4"


def test_submit_rejects_bad_extension(client, supabase):
    files = {"resume": ("cv.exe", b"MZ", "application/octet-stream")}

    response = client.post("/api/applicants", data=FORM, files=files)

    assert response.status_code == 400
    assert supabase.applicants.rows == []


def test_submit_rejects_invalid_email(client):
    response = client.post("/api/applicants", data={**FORM, "email": "pas-un-email"})

    assert response.status_code == 400
    assert "email" in response.json()["detail"]


def test_submit_surfaces_insert_failure(client, supabase):
    supabase.applicants.errors["insert"] = FakeError("permission denied")

    response = client.post("/api/applicants", data=FORM)

    assert response.status_code == 500
    assert response.json()["detail"] == routes.SUBMISSION_FAILED


def test_admin_requires_password(client):
    assert client.get("/api/admin/applicants").status_code == 401
    assert client.get("/api/admin/applicants", headers={"X-Admin-Password": "nope"}).status_code == 403


def test_admin_login(client):
    assert client.post("/api/admin/login", json={"password": settings.ADMIN_PASSWORD}).status_code == 200
    assert client.post("/api/admin/login", json={"password": "nope"}).status_code == 401


def _seed(supabase):
    supabase.applicants.rows = [
        make_row("a1", "Jean", "Dupont", "Serveur"),
        make_row("a2", "Marie", "Curie", "Cuisinier", status="HIRED", created_at="2026-01-09T09:00:00+00:00"),
    ]


def test_list_filters_and_searches(client, supabase):
    _seed(supabase)

    everyone = client.get("/api/admin/applicants", headers=ADMIN).json()
    assert everyone["total"] == 2

    found = client.get("/api/admin/applicants", params={"search": "dupo"}, headers=ADMIN).json()
    assert [a["id"] for a in found["applicants"]] == ["a1"]

    hired = client.get("/api/admin/applicants", params={"status": "HIRED", "search": "dupo"}, headers=ADMIN).json()
    assert hired["applicants"] == []


def test_list_rejects_unknown_status(client):
    assert client.get("/api/admin/applicants", params={"status": "LOST"}, headers=ADMIN).status_code == 400


def test_list_degrades_to_empty_on_backend_error(client, supabase):
    supabase.applicants.errors["select"] = FakeError("boom")

    body = client.get("/api/admin/applicants", headers=ADMIN).json()

    assert body["applicants"] == []


def test_status_change_reports_unsynced_on_remote_failure(client, supabase):
    _seed(supabase)
    client.get("/api/admin/applicants", headers=ADMIN)
    supabase.applicants.errors["update"] = FakeError("timeout")

    response = client.patch("/api/admin/applicants/a1/status", json={"status": "INTERVIEWING"}, headers=ADMIN)

    assert response.status_code == 200
    assert response.json()["synced"] is False
    assert response.json()["applicant"]["status"] == "INTERVIEWING"
    listing = client.get("/api/admin/applicants", headers=ADMIN).json()
    assert listing["unsynced"] == ["a1"]
    assert listing["applicants"][0]["status"] == "INTERVIEWING"


def test_position_change(client, supabase):
    _seed(supabase)

    response = client.patch("/api/admin/applicants/a2/position", json={"position": "Manager"}, headers=ADMIN)

    assert response.json()["synced"] is True
    assert supabase.applicants.rows[1]["position"] == "Manager"


def test_unknown_applicant_is_404(client, supabase):
    _seed(supabase)
    assert client.get("/api/admin/applicants/zzz", headers=ADMIN).status_code == 404
    assert client.patch("/api/admin/applicants/zzz/status", json={"status": "HIRED"}, headers=ADMIN).status_code == 404


def test_delete_removes_even_when_remote_fails(client, supabase):
    _seed(supabase)
    client.get("/api/admin/applicants", headers=ADMIN)
    supabase.applicants.errors["delete"] = FakeError("permission denied")

    response = client.delete("/api/admin/applicants/a1", headers=ADMIN)

    assert response.json() == {"deleted": "a1", "synced": False}
    ids = [a["id"] for a in client.get("/api/admin/applicants", headers=ADMIN).json()["applicants"]]
    assert ids == ["a2"]


def test_stats(client, supabase):
    _seed(supabase)

    stats = client.get("/api/admin/stats", headers=ADMIN).json()

    assert stats["total"] == 2
    assert stats["hired"] == 1


def test_qrcode_points_at_form(client, monkeypatch):
    monkeypatch.setattr(settings, "PUBLIC_FORM_URL", "")

    body = client.get("/api/admin/qrcode", headers=ADMIN).json()

    assert body["target_url"] == "http://testserver/apply"
    assert "data=http%3A%2F%2Ftestserver%2Fapply" in body["qr_code_url"]


def test_qrcode_download(client, monkeypatch):
    monkeypatch.setattr(routes, "render_qr_panel", lambda target: b"\x89PNG fake")

    response = client.get("/api/admin/qrcode/download", headers=ADMIN)

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert "sofia-recrutement-qrcode.png" in response.headers["content-disposition"]


def test_export_failure_is_generic(client, monkeypatch):
    def broken(config, target):
        raise routes.ExportError("tainted")

    monkeypatch.setattr(routes, "render_flyer", broken)

    response = client.post("/api/admin/flyer/download", json={}, headers=ADMIN)

    assert response.status_code == 502
    assert response.json()["detail"] == routes.EXPORT_FAILED


def test_flyer_background_generation_is_disabled(client):
    config = {"headline": "ON RECRUTE", "background_image": "https://picsum.photos/800/800"}

    response = client.post("/api/admin/flyer/background", json={"prompt": "terrasse", "config": config}, headers=ADMIN)

    assert response.json()["background_image"] == "https://picsum.photos/800/800"
    assert response.json()["headline"] == "ON RECRUTE"


def test_submission_after_listing_shows_up(client, supabase):
    assert client.get("/api/admin/applicants", headers=ADMIN).json()["total"] == 0

    created = client.post("/api/applicants", data=FORM).json()

    listing = client.get("/api/admin/applicants", headers=ADMIN).json()
    assert [a["id"] for a in listing["applicants"]] == [created["id"]]
    assert client.get(f"/api/admin/applicants/{created['id']}", headers=ADMIN).status_code == 200
    assert client.get("/api/admin/stats", headers=ADMIN).json()["total"] == 1


def test_submission_keeps_text_as_typed(client, supabase):
    data = {**FORM, "last_name": "D'Arc", "notes": "J'adore l'équipe; \"top\""}

    response = client.post("/api/applicants", data=data)

    assert response.status_code == 201
    row = supabase.applicants.rows[0]
    assert row["last_name"] == "D'Arc"
    assert row["notes"] == "J'adore l'équipe; \"top\""


def test_submission_fails_when_resume_cannot_be_stored(client, supabase, monkeypatch):
    monkeypatch.setattr(routes.db, "upload_cv", lambda fileobj, filename, content_type: None)
    files = {"resume": ("cv.pdf", b"%PDF-1.4", "application/pdf")}

    response = client.post("/api/applicants", data=FORM, files=files)

    assert response.status_code == 500
    assert response.json()["detail"] == routes.SUBMISSION_FAILED
    assert supabase.applicants.rows == []


def test_submission_rejects_oversized_resume(client, supabase, monkeypatch):
    monkeypatch.setattr(settings, "MAX_CV_SIZE_MB", 0)
    files = {"resume": ("cv.pdf", b"%PDF-1.4", "application/pdf")}

    response = client.post("/api/applicants", data=FORM, files=files)

    assert response.status_code == 400
    assert supabase.applicants.rows == []


def test_export_routes_run_in_threadpool():
    assert not inspect.iscoroutinefunction(routes.download_qrcode)
    assert not inspect.iscoroutinefunction(routes.download_flyer)

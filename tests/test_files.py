"""Tests for capability statement upload and download."""

from pathlib import Path

from bizconnect.core.config import get_settings


def test_upload_attaches_to_user(client, vendor, settings):
    response = client.post(
        "/api/upload-cs",
        files={"file": ("capabilities.pdf", b"%PDF-1.4 test", "application/pdf")},
        data={"userId": str(vendor["id"])},
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["originalName"] == "capabilities.pdf"
    assert body["fileName"].startswith("cs-")
    assert body["fileName"].endswith(".pdf")
    assert body["path"] == f"/uploads/{body['fileName']}"
    assert (Path(settings.upload_dir) / body["fileName"]).read_bytes() == b"%PDF-1.4 test"

    user = client.get(f"/api/users/{vendor['id']}").json()
    assert user["capabilityStatement"] == body["path"]

    download = client.get(f"/api/vendors/{vendor['id']}/capability-statement")
    assert download.status_code == 200
    assert download.content == b"%PDF-1.4 test"


def test_upload_without_user(client):
    response = client.post(
        "/upload-cs",
        files={"file": ("cs.DOCX", b"doc", "application/octet-stream")},
    )
    assert response.status_code == 200
    assert response.json()["fileName"].endswith(".docx")


def test_disallowed_extension(client):
    response = client.post("/api/upload-cs", files={"file": ("run.exe", b"MZ", "application/octet-stream")})
    assert response.status_code == 400


def test_missing_file(client):
    assert client.post("/api/upload-cs", data={"userId": "1"}).status_code == 400


def test_too_large(client, settings, monkeypatch):
    monkeypatch.setenv("UPLOAD_MAX_BYTES", "16")
    get_settings.cache_clear()

    response = client.post("/api/upload-cs", files={"file": ("big.pdf", b"x" * 64, "application/pdf")})
    assert response.status_code == 413
    assert list(Path(settings.upload_dir).glob("*")) == []


def test_download_without_statement_is_404(client, vendor):
    assert client.get(f"/api/vendors/{vendor['id']}/capability-statement").status_code == 404

def test_list_files_starts_empty(client):
    response = client.get("/api/files")

    assert response.status_code == 200
    assert response.json() == {"files": []}


def test_upload_then_download(client, upload_dir):
    response = client.post(
        "/api/files/upload",
        files={"file": ("price list.csv", b"name,price\nshirt,5\n", "text/csv")},
    )

    assert response.status_code == 201
    filename = response.json()["filename"]
    assert filename.endswith("_pricelist.csv")

    assert client.get("/api/files").json() == {"files": [filename]}

    download = client.get(f"/api/files/download/{filename}")
    assert download.status_code == 200
    assert download.content == b"name,price\nshirt,5\n"


def test_upload_rejects_disallowed_type(client, upload_dir):
    response = client.post(
        "/api/files/upload",
        files={"file": ("script.sh", b"echo hi", "application/x-sh")},
    )

    assert response.status_code == 415
    assert list(upload_dir.iterdir()) == []


def test_upload_rejects_oversized_file(client, upload_dir, monkeypatch):
    from shopdesk.core.config import settings

    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE_MB", 0)

    response = client.post(
        "/api/files/upload",
        files={"file": ("big.csv", b"a,b\n1,2\n", "text/csv")},
    )

    assert response.status_code == 413
    assert list(upload_dir.iterdir()) == []


def test_download_missing_file_is_404(client):
    assert client.get("/api/files/download/nothing.pdf").status_code == 404


def test_download_outside_upload_dir_is_404(client, upload_dir):
    (upload_dir.parent / "secret.txt").write_text("secret")

    response = client.get("/api/files/download/..%2Fsecret.txt")

    assert response.status_code == 404


def test_health_check(client):
    assert client.get("/").json() == {"message": "Shopdesk API is running"}


def test_upload_rejects_extension_with_mismatched_type(client, upload_dir):
    response = client.post(
        "/api/files/upload",
        files={"file": ("report.pdf", b"<html></html>", "text/html")},
    )

    assert response.status_code == 415
    assert list(upload_dir.iterdir()) == []


def test_upload_rejects_allowed_type_with_bad_extension(client, upload_dir):
    response = client.post(
        "/api/files/upload",
        files={"file": ("setup.exe", b"MZ", "application/pdf")},
    )

    assert response.status_code == 415
    assert list(upload_dir.iterdir()) == []


def test_upload_accepts_untyped_file_with_allowed_extension(client, upload_dir):
    response = client.post(
        "/api/files/upload",
        files={"file": ("prices.csv", b"a,b\n", "application/octet-stream")},
    )

    assert response.status_code == 201
    assert len(list(upload_dir.iterdir())) == 1

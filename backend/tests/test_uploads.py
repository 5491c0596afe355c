import io

import pytest
from PIL import Image

from photoprint.services.storage import InvalidUploadPath, UploadStorage
from photoprint.services.uploads import InvalidUpload, UploadService


def _image_bytes(mode="RGB", size=(40, 30), color="white", fmt="PNG") -> bytes:
    img = Image.new(mode, size, color)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def test_upload_converts_to_jpeg(client, upload_root):
    data = {"file": ("holiday.png", _image_bytes(), "image/png")}

    response = client.post("/api/v1/upload", files=data)

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["success"] is True
    assert body["originalName"] == "holiday.png"
    assert body["fileName"].endswith(".jpg")

    stored = upload_root / body["fileName"]
    with Image.open(stored) as img:
        assert img.format == "JPEG"
        assert img.mode == "RGB"
        assert img.size == (40, 30)


def test_transparent_upload_is_flattened_onto_white(client, upload_root):
    data = {"file": ("logo.png", _image_bytes(mode="RGBA", color=(0, 0, 0, 0)), "image/png")}

    response = client.post("/api/v1/upload", files=data)

    assert response.status_code == 200, response.text
    with Image.open(upload_root / response.json()["fileName"]) as img:
        r, g, b = img.getpixel((20, 15))
        assert min(r, g, b) > 240


def test_upload_rejects_non_image(client, upload_root):
    data = {"file": ("fake.jpg", b"definitely not a jpeg", "image/jpeg")}

    response = client.post("/api/v1/upload", files=data)

    assert response.status_code == 400
    assert list(upload_root.iterdir()) == []


def test_upload_over_size_limit_is_rejected(client, storage, upload_root):
    from photoprint.api.v1.dependencies import get_upload_service
    from photoprint.main import app

    app.dependency_overrides[get_upload_service] = lambda: UploadService(storage, max_bytes=64)
    data = {"file": ("big.png", _image_bytes(size=(400, 300), color="red"), "image/png")}

    response = client.post("/api/v1/upload", files=data)

    assert response.status_code == 400
    assert response.json()["detail"].startswith("Upload failed: File too large")
    assert list(upload_root.iterdir()) == []


@pytest.mark.anyio
async def test_service_rejects_oversize_data(storage, upload_root):
    service = UploadService(storage, max_bytes=10)

    with pytest.raises(InvalidUpload, match="File too large"):
        await service.store_photo(b"x" * 11, "big.jpg")

    service.check_size(10)
    assert list(upload_root.iterdir()) == []


def test_upload_without_file(client):
    response = client.post("/api/v1/upload")

    assert response.status_code == 400
    assert response.json()["detail"] == "No file uploaded"


def test_serve_loose_and_order_files(client, upload_root):
    (upload_root / "abc.jpg").write_bytes(b"jpeg-bytes")
    (upload_root / "10002").mkdir()
    (upload_root / "10002" / "proof.pdf").write_bytes(b"%PDF-1.4")

    loose = client.get("/api/v1/uploads/abc.jpg")
    claimed = client.get("/api/v1/uploads/10002/proof.pdf")

    assert loose.status_code == 200
    assert loose.content == b"jpeg-bytes"
    assert loose.headers["content-type"] == "image/jpeg"
    assert loose.headers["cache-control"] == "public, max-age=31536000, immutable"
    assert claimed.status_code == 200
    assert claimed.headers["content-type"] == "application/pdf"


def test_serve_missing_file(client):
    assert client.get("/api/v1/uploads/nope.jpg").status_code == 404


@pytest.mark.parametrize("path", ["../secret.txt", "10002/../../etc/passwd", "a\\b.jpg", "/etc/passwd", ""])
def test_storage_rejects_paths_outside_root(tmp_path, path):
    storage = UploadStorage(tmp_path)

    with pytest.raises(InvalidUploadPath):
        storage.resolve(path)

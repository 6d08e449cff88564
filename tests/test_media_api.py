"""Tests for media upload, validation, thumbnails and deletion."""

import os
from io import BytesIO

from PIL import Image

from blogcms.models.media_item import MediaItem


def upload(client, headers, payload, filename, content_type, **form):
    data = dict(form, file=(BytesIO(payload), filename, content_type))
    return client.post(
        "/api/media/upload",
        data=data,
        headers=headers,
        content_type="multipart/form-data",
    )


def test_upload_png_creates_thumbnail(client, db, author, headers_for, png_bytes):
    response = upload(client, headers_for(author), png_bytes(), "photo.png", "image/png", altText="A photo")

    assert response.status_code == 201
    media = response.get_json()
    assert media["mimeType"] == "image/png"
    assert media["originalFileName"] == "photo.png"
    assert media["title"] == "photo"
    assert media["altText"] == "A photo"
    assert (media["width"], media["height"]) == (800, 600)
    assert media["url"].startswith("/uploads/")
    assert media["url"].endswith(".png")
    assert media["thumbnailUrl"].split("/")[-1].startswith("thumb_")

    item = db.session.get(MediaItem, media["id"])
    assert os.path.exists(item.storage_path)
    with Image.open(item.thumbnail_path) as thumb:
        assert thumb.size == (400, 300)


def test_uploaded_file_is_served(client, author, headers_for, png_bytes):
    payload = png_bytes()
    media = upload(client, headers_for(author), payload, "photo.png", "image/png").get_json()

    assert client.get(media["url"]).data == payload
    assert client.get(f"/api/media/{media['id']}/file").data == payload

    thumb = client.get(f"/api/media/{media['id']}/thumbnail")
    assert thumb.status_code == 200
    assert thumb.mimetype == "image/jpeg"


def test_unsupported_type_rejected(client, author, headers_for):
    response = upload(
        client, headers_for(author), b"\x7fELF...", "tool", "application/x-executable"
    )

    assert response.status_code == 400
    assert "Unsupported file type" in response.get_json()["message"]
    assert MediaItem.query.count() == 0


def test_octet_stream_allowed_by_extension(client, author, headers_for):
    response = upload(
        client, headers_for(author), b"PK\x03\x04 zip", "bundle.zip", "application/octet-stream"
    )
    assert response.status_code == 201

    response = upload(
        client, headers_for(author), b"MZ", "setup.exe", "application/octet-stream"
    )
    assert response.status_code == 400


def test_extension_cannot_override_declared_type(client, author, headers_for):
    payload = b"<script>alert(1)</script>"
    response = upload(client, headers_for(author), payload, "evil.html", "image/png")

    assert response.status_code == 201
    media = response.get_json()
    assert media["mimeType"] == "image/png"
    assert media["originalFileName"] == "evil.html"
    assert not media["url"].endswith(".html")

    served = client.get(media["url"])
    assert served.data == payload
    assert served.mimetype == "image/png"
    assert client.get(f"/api/media/{media['id']}/file").mimetype == "image/png"


def test_upload_without_file(client, author, headers_for):
    response = client.post(
        "/api/media/upload", data={}, headers=headers_for(author), content_type="multipart/form-data"
    )
    assert response.status_code == 400
    assert response.get_json()["message"] == "No file uploaded"


def test_corrupt_image_still_uploads(client, author, headers_for):
    response = upload(client, headers_for(author), b"not really a png", "broken.png", "image/png")

    assert response.status_code == 201
    media = response.get_json()
    assert media["thumbnailUrl"] is None
    assert media["width"] is None

    placeholder = client.get(f"/api/media/{media['id']}/thumbnail")
    assert placeholder.mimetype == "image/svg+xml"
    assert b"Preview Unavailable" in placeholder.data


def test_pdf_thumbnail_is_placeholder(client, author, headers_for):
    media = upload(client, headers_for(author), b"%PDF-1.4", "doc.pdf", "application/pdf").get_json()

    assert media["thumbnailUrl"] is None
    response = client.get(f"/api/media/{media['id']}/thumbnail")
    assert response.mimetype == "image/svg+xml"


def test_subscriber_cannot_upload(client, subscriber, headers_for, png_bytes):
    response = upload(client, headers_for(subscriber), png_bytes(), "p.png", "image/png")
    assert response.status_code == 403


def test_list_filters(client, author, headers_for, png_bytes):
    headers = headers_for(author)
    upload(client, headers, png_bytes(), "cat.png", "image/png")
    upload(client, headers, b"%PDF-1.4", "report.pdf", "application/pdf")

    body = client.get("/api/media?mimeType=image/", headers=headers).get_json()
    assert [m["originalFileName"] for m in body["items"]] == ["cat.png"]

    body = client.get("/api/media?search=report", headers=headers).get_json()
    assert [m["originalFileName"] for m in body["items"]] == ["report.pdf"]

    body = client.get(f"/api/media?uploadedBy={author.id}", headers=headers).get_json()
    assert body["pagination"]["total"] == 2


def test_update_metadata(client, author, headers_for, png_bytes):
    headers = headers_for(author)
    media = upload(client, headers, png_bytes(), "p.png", "image/png").get_json()

    response = client.put(
        f"/api/media/{media['id']}",
        json={"title": "Sunset", "caption": "Evening"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.get_json()["title"] == "Sunset"
    assert response.get_json()["caption"] == "Evening"


def test_author_cannot_edit_others_media(client, make_user, headers_for, png_bytes):
    owner = make_user("author")
    other = make_user("author")
    media = upload(client, headers_for(owner), png_bytes(), "p.png", "image/png").get_json()

    response = client.put(f"/api/media/{media['id']}", json={"title": "x"}, headers=headers_for(other))
    assert response.status_code == 403


def test_trash_hides_media(client, author, headers_for, png_bytes):
    headers = headers_for(author)
    media = upload(client, headers, png_bytes(), "p.png", "image/png").get_json()

    assert client.delete(f"/api/media/{media['id']}", headers=headers).status_code == 200
    assert client.get(f"/api/media/{media['id']}").status_code == 404
    assert client.get("/api/media", headers=headers).get_json()["items"] == []


def test_purge_removes_files_and_detaches_pages(client, db, editor, headers_for, png_bytes):
    headers = headers_for(editor)
    media = upload(client, headers, png_bytes(), "p.png", "image/png").get_json()
    item = db.session.get(MediaItem, media["id"])
    paths = [item.storage_path, item.thumbnail_path]

    page = client.post(
        "/api/pages", json={"title": "With image", "featuredMediaId": media["id"]}, headers=headers
    ).get_json()
    assert page["featuredMediaId"] == media["id"]

    assert client.delete(f"/api/media/{media['id']}/hard", headers=headers).status_code == 200

    assert db.session.get(MediaItem, media["id"]) is None
    assert not any(os.path.exists(p) for p in paths)
    page = client.get(f"/api/pages/{page['id']}", headers=headers).get_json()
    assert page["featuredMediaId"] is None


def test_trashed_media_cannot_be_featured(client, editor, headers_for, png_bytes):
    headers = headers_for(editor)
    media = upload(client, headers, png_bytes(), "p.png", "image/png").get_json()
    client.delete(f"/api/media/{media['id']}", headers=headers)

    response = client.post(
        "/api/pages", json={"title": "T", "featuredMediaId": media["id"]}, headers=headers
    )
    assert response.status_code == 404
    assert response.get_json()["message"] == "Featured media not found"

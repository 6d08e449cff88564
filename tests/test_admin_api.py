"""Tests for newsletter, dashboard, activity, health and the CLI."""

from blogcms.models.newsletter_subscriber import NewsletterSubscriber
from blogcms.models.user import User


def test_subscribe_is_idempotent(client):
    assert client.post("/api/newsletter/subscribe", json={"email": "Reader@Example.com"}).status_code == 200
    assert client.post("/api/newsletter/subscribe", json={"email": "reader@example.com"}).status_code == 200

    assert NewsletterSubscriber.query.count() == 1
    assert NewsletterSubscriber.query.one().email == "reader@example.com"


def test_subscribe_validates_email(client):
    assert client.post("/api/newsletter/subscribe", json={}).status_code == 400
    assert client.post("/api/newsletter/subscribe", json={"email": "not-an-email"}).status_code == 400


def test_subscriber_list_is_admin_only(client, admin, editor, headers_for):
    client.post("/api/newsletter/subscribe", json={"email": "a@example.com"})

    assert client.get("/api/admin/newsletter/subscribers", headers=headers_for(editor)).status_code == 403

    body = client.get("/api/admin/newsletter/subscribers", headers=headers_for(admin)).get_json()
    assert [s["email"] for s in body["items"]] == ["a@example.com"]


def test_dashboard_stats(client, admin, author, subscriber, headers_for):
    author_headers = headers_for(author)
    client.post("/api/pages", json={"title": "P"}, headers=author_headers)
    post = client.post(
        "/api/posts", json={"title": "Live", "status": "published"}, headers=author_headers
    ).get_json()
    client.post("/api/posts", json={"title": "Draft"}, headers=author_headers)
    client.post("/api/comments", json={"postId": post["id"], "content": "hi"}, headers=headers_for(subscriber))

    stats = client.get("/api/admin/dashboard/stats", headers=headers_for(admin)).get_json()

    assert stats["totalUsers"] == 3
    assert stats["totalPosts"] == 2
    assert stats["publishedPosts"] == 1
    assert stats["draftPosts"] == 1
    assert stats["totalPages"] == 1
    assert stats["totalComments"] == 1
    assert stats["pendingComments"] == 0


def test_dashboard_forbidden_for_editors(client, editor, headers_for):
    assert client.get("/api/admin/dashboard/stats", headers=headers_for(editor)).status_code == 403


def test_activity_listing_filters(client, admin, author, headers_for):
    page = client.post("/api/pages", json={"title": "Logged"}, headers=headers_for(author)).get_json()
    client.put(f"/api/pages/{page['id']}", json={"content": "x"}, headers=headers_for(author))

    headers = headers_for(admin)
    body = client.get(f"/api/admin/activity?entityType=page&entityId={page['id']}", headers=headers).get_json()
    assert sorted(a["action"] for a in body["items"]) == ["page.create", "page.update"]

    body = client.get(f"/api/admin/activity?action=page.update&actorId={author.id}", headers=headers).get_json()
    assert body["pagination"]["total"] == 1
    assert body["items"][0]["payload"]["version"] == 2


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_unknown_route_is_json_404(client):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert "message" in response.get_json()


def test_create_admin_command(app):
    runner = app.test_cli_runner()

    result = runner.invoke(
        args=[
            "create-admin",
            "--email", "root@example.com",
            "--first-name", "Root",
            "--last-name", "User",
            "--password", "correct-horse",
        ]
    )

    assert result.exit_code == 0, result.output
    user = User.query.filter_by(email="root@example.com").one()
    assert user.role == "superadmin"
    assert user.check_password("correct-horse")


def test_create_admin_command_rejects_duplicates(app, make_user):
    make_user("admin", email="root@example.com")
    runner = app.test_cli_runner()

    result = runner.invoke(
        args=[
            "create-admin",
            "--email", "root@example.com",
            "--first-name", "Root",
            "--last-name", "User",
            "--password", "correct-horse",
        ]
    )

    assert result.exit_code != 0
    assert "already exists" in result.output

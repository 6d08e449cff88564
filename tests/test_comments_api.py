"""Tests for comments and moderation."""

import pytest

from blogcms.models.comment import Comment


@pytest.fixture
def post(client, author, headers_for):
    response = client.post(
        "/api/posts", json={"title": "Post", "status": "published"}, headers=headers_for(author)
    )
    return response.get_json()


def comment_on(client, headers, post_id, content="Great read"):
    return client.post("/api/comments", json={"postId": post_id, "content": content}, headers=headers)


def test_create_and_list(client, post, subscriber, headers_for):
    response = comment_on(client, headers_for(subscriber), post["id"], "  Great read  ")

    assert response.status_code == 201
    comment = response.get_json()
    assert comment["content"] == "Great read"
    assert comment["isApproved"] is True
    assert comment["user"]["id"] == subscriber.id

    body = client.get(f"/api/posts/{post['id']}/comments").get_json()
    assert [c["id"] for c in body["items"]] == [comment["id"]]


def test_content_validation(client, post, subscriber, headers_for):
    headers = headers_for(subscriber)
    assert comment_on(client, headers, post["id"], "   ").status_code == 400
    assert comment_on(client, headers, post["id"], "x" * 2001).status_code == 400
    assert comment_on(client, headers, post["id"], "x" * 2000).status_code == 201


def test_comment_requires_existing_post(client, subscriber, headers_for):
    assert comment_on(client, headers_for(subscriber), "missing").status_code == 404


def test_comments_disabled(client, author, subscriber, headers_for):
    post = client.post(
        "/api/posts",
        json={"title": "Quiet", "status": "published", "allowComments": False},
        headers=headers_for(author),
    ).get_json()

    assert comment_on(client, headers_for(subscriber), post["id"]).status_code == 400


def test_anonymous_cannot_comment(client, post):
    response = client.post("/api/comments", json={"postId": post["id"], "content": "hi"})
    assert response.status_code == 401


def test_owner_edits_and_others_cannot(client, post, make_user, headers_for):
    owner = make_user("subscriber")
    stranger = make_user("subscriber")
    comment = comment_on(client, headers_for(owner), post["id"]).get_json()

    response = client.put(
        f"/api/comments/{comment['id']}", json={"content": "Edited"}, headers=headers_for(stranger)
    )
    assert response.status_code == 403

    response = client.put(
        f"/api/comments/{comment['id']}", json={"content": "Edited"}, headers=headers_for(owner)
    )
    assert response.status_code == 200
    assert response.get_json()["content"] == "Edited"


def test_staff_can_delete_any_comment(client, post, subscriber, editor, headers_for):
    comment = comment_on(client, headers_for(subscriber), post["id"]).get_json()

    response = client.delete(f"/api/comments/{comment['id']}", headers=headers_for(editor))
    assert response.status_code == 200
    assert client.get(f"/api/posts/{post['id']}/comments").get_json()["items"] == []


def test_moderation_flow(app, client, post, subscriber, editor, headers_for):
    app.config["COMMENTS_AUTO_APPROVE"] = False
    comment = comment_on(client, headers_for(subscriber), post["id"]).get_json()
    assert comment["isApproved"] is False
    assert client.get(f"/api/posts/{post['id']}/comments").get_json()["items"] == []

    staff = headers_for(editor)
    pending = client.get("/api/comments/pending", headers=staff).get_json()
    assert [c["id"] for c in pending["items"]] == [comment["id"]]
    assert pending["items"][0]["status"] == "pending"
    assert pending["items"][0]["postTitle"] == "Post"

    response = client.post(f"/api/comments/{comment['id']}/approve", headers=staff)
    assert response.get_json()["status"] == "approved"

    approved = client.get("/api/comments?status=approved", headers=staff).get_json()
    assert approved["pagination"]["total"] == 1
    assert client.get("/api/comments?status=bogus", headers=staff).status_code == 400

    public = client.get(f"/api/posts/{post['id']}/comments").get_json()
    assert len(public["items"]) == 1


def test_subscriber_cannot_moderate(client, subscriber, headers_for):
    assert client.get("/api/comments", headers=headers_for(subscriber)).status_code == 403


def test_staff_reply_threads_under_comment(client, db, post, subscriber, editor, headers_for):
    comment = comment_on(client, headers_for(subscriber), post["id"]).get_json()

    response = client.post(
        f"/api/comments/{comment['id']}/reply", json={"content": "  Thanks!  "}, headers=headers_for(editor)
    )

    assert response.status_code == 201
    reply = response.get_json()
    assert reply["parentId"] == comment["id"]
    assert reply["postId"] == post["id"]
    assert reply["content"] == "Thanks!"
    assert reply["user"]["id"] == editor.id
    assert reply["status"] == "approved"

    public = client.get(f"/api/posts/{post['id']}/comments").get_json()
    assert {c["id"] for c in public["items"]} == {comment["id"], reply["id"]}

    client.delete(f"/api/comments/{comment['id']}", headers=headers_for(editor))
    assert db.session.get(Comment, reply["id"]).parent_id is None


def test_reply_validation_and_permissions(client, post, subscriber, editor, headers_for):
    comment = comment_on(client, headers_for(subscriber), post["id"]).get_json()
    url = f"/api/comments/{comment['id']}/reply"

    assert client.post(url, json={"content": "Me too"}, headers=headers_for(subscriber)).status_code == 403
    assert client.post(url, json={"content": "   "}, headers=headers_for(editor)).status_code == 400
    assert client.post(
        "/api/comments/missing/reply", json={"content": "Hi"}, headers=headers_for(editor)
    ).status_code == 404

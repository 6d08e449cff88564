"""Tests for blog posts and categories."""

from blogcms.models.comment import Comment
from blogcms.models.post import Post


def create_post(client, headers, **data):
    data.setdefault("title", "First post")
    response = client.post("/api/posts", json=data, headers=headers)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def create_category(client, headers, name):
    response = client.post("/api/categories", json={"name": name}, headers=headers)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def test_create_post_defaults(client, db, author, headers_for):
    post = create_post(client, headers_for(author), content="Body")

    assert post["status"] == "draft"
    assert post["type"] == "update"
    assert post["publishedAt"] is None
    assert post["allowComments"] is True
    assert post["tags"] == []
    assert post["userName"] == author.name

    db.session.refresh(author)
    assert author.posts_count == 1


def test_publish_rule_applies_to_posts(client, author, headers_for):
    headers = headers_for(author)
    post = create_post(client, headers, status="published")
    assert post["publishedAt"] is not None

    response = client.put(f"/api/posts/{post['id']}", json={"status": "archived"}, headers=headers)
    assert response.get_json()["publishedAt"] is None


def test_invalid_type_and_status(client, author, headers_for):
    headers = headers_for(author)
    assert client.post("/api/posts", json={"title": "T", "type": "essay"}, headers=headers).status_code == 400
    assert client.post("/api/posts", json={"title": "T", "status": "gone"}, headers=headers).status_code == 400


def test_anonymous_sees_published_posts_only(client, author, headers_for):
    headers = headers_for(author)
    draft = create_post(client, headers, title="Draft")
    create_post(client, headers, title="Live", status="published")

    body = client.get("/api/posts").get_json()
    assert [p["title"] for p in body["items"]] == ["Live"]
    assert client.get(f"/api/posts/{draft['id']}").status_code == 404


def test_post_filters(client, editor, headers_for):
    headers = headers_for(editor)
    news = create_category(client, headers, "News")
    create_post(client, headers, title="Tagged", tags=["python", "flask"], categoryId=news["id"])
    create_post(client, headers, title="Featured", featured=True, type="announcement")
    create_post(client, headers, title="Plain", tags=["pythonic"])

    def titles(query):
        body = client.get(f"/api/posts?{query}&sortBy=title&sortOrder=asc", headers=headers).get_json()
        return [p["title"] for p in body["items"]]

    assert titles("tag=python") == ["Tagged"]
    assert titles("featured=true") == ["Featured"]
    assert titles("type=announcement") == ["Featured"]
    assert titles(f"categoryId={news['id']}") == ["Tagged"]
    assert titles(f"userId={editor.id}") == ["Featured", "Plain", "Tagged"]
    assert titles("search=plain") == ["Plain"]
    assert titles("dateFrom=2000-01-01") == ["Featured", "Plain", "Tagged"]


def test_bad_date_filter(client, editor, headers_for):
    response = client.get("/api/posts?dateFrom=yesterday-ish", headers=headers_for(editor))
    assert response.status_code == 400


def test_author_cannot_edit_others_post(client, make_user, headers_for):
    owner = make_user("author")
    other = make_user("author")
    post = create_post(client, headers_for(owner))

    response = client.put(f"/api/posts/{post['id']}", json={"title": "x"}, headers=headers_for(other))
    assert response.status_code == 403

    response = client.delete(f"/api/posts/{post['id']}", headers=headers_for(other))
    assert response.status_code == 403


def test_delete_post_removes_comments(client, db, author, subscriber, headers_for):
    post = create_post(client, headers_for(author), status="published")
    client.post(
        "/api/comments", json={"postId": post["id"], "content": "Nice"}, headers=headers_for(subscriber)
    )

    response = client.delete(f"/api/posts/{post['id']}", headers=headers_for(author))

    assert response.status_code == 200
    assert db.session.get(Post, post["id"]) is None
    assert Comment.query.count() == 0



def test_reading_published_post_counts_views(client, db, author, headers_for):
    post = create_post(client, headers_for(author), status="published")

    for expected in range(1, 4):
        body = client.get(f"/api/posts/{post['id']}").get_json()
        assert body["viewCount"] == expected

    db.session.refresh(author)
    assert author.total_views == 3
    assert client.get(f"/api/users/{author.id}").get_json()["totalViews"] == 3


def test_reading_draft_does_not_count(client, db, author, headers_for):
    post = create_post(client, headers_for(author))

    body = client.get(f"/api/posts/{post['id']}", headers=headers_for(author)).get_json()
    assert body["viewCount"] == 0

    db.session.refresh(author)
    assert author.total_views == 0


def test_sort_by_view_count(client, editor, headers_for):
    headers = headers_for(editor)
    quiet = create_post(client, headers, title="Quiet", status="published")
    popular = create_post(client, headers, title="Popular", status="published")
    for _ in range(2):
        client.get(f"/api/posts/{popular['id']}")
    client.get(f"/api/posts/{quiet['id']}")

    body = client.get("/api/posts?sortBy=viewCount&sortOrder=desc").get_json()
    assert [p["id"] for p in body["items"]] == [popular["id"], quiet["id"]]


def test_like_and_share_increment_counters(client, author, subscriber, headers_for):
    post = create_post(client, headers_for(author), status="published")
    headers = headers_for(subscriber)

    response = client.post(f"/api/posts/{post['id']}/like", headers=headers)
    assert response.status_code == 200
    assert response.get_json()["likeCount"] == 1
    assert client.post(f"/api/posts/{post['id']}/like", headers=headers).get_json()["likeCount"] == 2

    response = client.post(f"/api/posts/{post['id']}/share", headers=headers)
    assert response.status_code == 200
    assert response.get_json()["shareCount"] == 1

    body = client.get(f"/api/posts/{post['id']}").get_json()
    assert (body["likeCount"], body["shareCount"]) == (2, 1)


def test_reactions_require_login_and_published_post(client, author, headers_for):
    draft = create_post(client, headers_for(author))
    published = create_post(client, headers_for(author), title="Live", status="published")

    assert client.post(f"/api/posts/{published['id']}/like").status_code == 401
    assert client.post(f"/api/posts/{draft['id']}/like", headers=headers_for(author)).status_code == 404
    assert client.post("/api/posts/missing/share", headers=headers_for(author)).status_code == 404

# ------------------------
# Categories
# ------------------------

def test_category_crud(client, editor, headers_for):
    headers = headers_for(editor)
    category = create_category(client, headers, "Release Notes")
    assert category["slug"] == "release-notes"

    response = client.put(
        f"/api/categories/{category['id']}", json={"description": "Changelogs"}, headers=headers
    )
    assert response.get_json()["description"] == "Changelogs"

    listing = client.get("/api/categories").get_json()
    assert [c["name"] for c in listing] == ["Release Notes"]


def test_duplicate_category_name_conflicts(client, editor, headers_for):
    headers = headers_for(editor)
    create_category(client, headers, "News")

    response = client.post("/api/categories", json={"name": "news"}, headers=headers)
    assert response.status_code == 409


def test_author_cannot_manage_categories(client, author, headers_for):
    response = client.post("/api/categories", json={"name": "X"}, headers=headers_for(author))
    assert response.status_code == 403


def test_deleting_category_detaches_posts(client, editor, headers_for):
    headers = headers_for(editor)
    category = create_category(client, headers, "Temp")
    post = create_post(client, headers, categoryId=category["id"])

    assert client.delete(f"/api/categories/{category['id']}", headers=headers).status_code == 200

    body = client.get(f"/api/posts/{post['id']}", headers=headers).get_json()
    assert body["categoryId"] is None
    assert client.get(f"/api/categories/{category['id']}").status_code == 404

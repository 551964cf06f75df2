# File: tests/test_posts_api.py

import uuid

from user_api.db.init_db import seed_initial_data
from user_api.services.post_service import list_posts


def _create_post(client, author_id, title="Hello World"):
    resp = client.post(
        "/api/posts",
        json={"title": title, "content": "This is a post", "author": author_id},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def test_create_post_populates_author(client, make_user):
    author = make_user()
    post = _create_post(client, author["id"])

    assert post["title"] == "Hello World"
    assert post["author"] == {
        "id": author["id"],
        "fullName": "Ahtasham Khan",
        "email": "ahtasham@example.com",
    }


def test_populate_and_lookup_return_the_same_posts(client, make_user):
    first = make_user(email="first@example.com")
    second = make_user(firstName="Sara", lastName="Ali", email="sara@example.com")
    _create_post(client, first["id"], title="One")
    _create_post(client, second["id"], title="Two")

    populated = client.get("/api/posts", params={"strategy": "populate"}).json()
    looked_up = client.get("/api/posts", params={"strategy": "lookup"}).json()

    assert populated["count"] == 2
    assert populated["data"] == looked_up["data"]
    assert [p["author"]["fullName"] for p in populated["data"]] == ["Sara Ali", "Ahtasham Khan"]


def test_deleting_author_leaves_post_without_author(client, make_user):
    author = make_user()
    _create_post(client, author["id"])
    client.delete(f"/api/users/{author['id']}")

    for strategy in ("populate", "lookup"):
        data = client.get("/api/posts", params={"strategy": strategy}).json()["data"]
        assert len(data) == 1
        assert data[0]["author"] is None


def test_create_post_for_missing_author(client):
    resp = client.post("/api/posts", json={"title": "Orphan", "author": uuid.uuid4().hex})
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Author not found"}


def test_create_post_with_malformed_author(client):
    resp = client.post("/api/posts", json={"title": "Orphan", "author": "abc"})
    assert resp.status_code == 400


def test_create_post_requires_title(client, make_user):
    author = make_user()
    resp = client.post("/api/posts", json={"title": "  ", "author": author["id"]})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Validation error"


def test_unknown_strategy(client):
    resp = client.get("/api/posts", params={"strategy": "graph"})
    assert resp.status_code == 400


def test_seed_initial_data_runs_once(db):
    assert seed_initial_data(db) == 2
    assert seed_initial_data(db) == 0

    for strategy in ("populate", "lookup"):
        posts = list_posts(db, strategy)
        assert [p.title for p in posts] == ["My first blog"]
        assert posts[0].author.full_name == "Ahtasham Khan"

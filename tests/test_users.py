from __future__ import annotations

from urllib.parse import parse_qs, urlparse

from conftest import publish, signup


def test_get_profile_hides_private_fields(client, alice):
    publish(client, alice["access_token"])
    r = client.post("/get-profile", json={"username": "alice"})
    assert r.status_code == 200
    profile = r.json()
    assert profile["fullname"] == "Alice Liddell"
    assert profile["account_info"] == {"total_posts": 1, "total_reads": 0}
    for private in ("password", "google_auth", "blogs"):
        assert private not in profile


def test_get_profile_unknown(client):
    r = client.post("/get-profile", json={"username": "ghost"})
    assert r.status_code == 404
    assert r.json() == {"error": "User not found"}


def test_search_users(client):
    signup(client, "Alice Liddell", "alice@example.com")
    signup(client, "Malice Mizer", "malice@example.com")
    signup(client, "Bob Builder", "bob@example.com")

    users = client.post("/search-users", json={"query": "ALI"}).json()["users"]
    assert [u["username"] for u in users] == ["alice", "malice"]
    assert set(users[0]) == {"fullname", "username", "profile_img"}

    assert client.post("/search-users", json={"query": ""}).json() == {"users": []}


def test_upload_url(client):
    r = client.get("/get-upload-url")
    assert r.status_code == 200
    url = urlparse(r.json()["uploadURL"])
    assert "test-bucket" in url.netloc + url.path
    assert url.path.endswith(".jpeg")
    query = parse_qs(url.query)
    assert query["X-Amz-Expires"] == ["1000"]
    assert "X-Amz-Signature" in query


def test_upload_urls_are_unique(client):
    first = client.get("/get-upload-url").json()["uploadURL"]
    second = client.get("/get-upload-url").json()["uploadURL"]
    assert urlparse(first).path != urlparse(second).path


def test_healthz(client):
    r = client.get("/healthz")
    assert r.json() == {"ok": True, "redis": {"connected": True}}

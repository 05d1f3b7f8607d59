from __future__ import annotations

import pytest

from conftest import auth, blog_payload, publish, signup


def _profile(client, username):
    r = client.post("/get-profile", json={"username": username})
    assert r.status_code == 200
    return r.json()


@pytest.mark.parametrize("overrides, message", [
    ({"title": ""}, "title"),
    ({"des": ""}, "description"),
    ({"des": "x" * 201}, "description"),
    ({"banner": ""}, "banner"),
    ({"content": {"blocks": []}}, "content"),
    ({"tags": []}, "tags"),
    ({"tags": [f"t{i}" for i in range(11)]}, "tags"),
])
def test_publish_validation(client, alice, overrides, message):
    r = client.post("/create-blog", json=blog_payload(**overrides), headers=auth(alice["access_token"]))
    assert r.status_code == 403
    assert message in r.json()["error"]


@pytest.mark.parametrize("overrides", [
    {"tags": []},
    {"tags": [f"t{i}" for i in range(11)]},
    {"content": {"blocks": []}},
    {"des": "", "banner": ""},
])
def test_drafts_skip_publish_checks(client, alice, overrides):
    r = client.post("/create-blog", json=blog_payload(draft=True, **overrides), headers=auth(alice["access_token"]))
    assert r.status_code == 200
    assert r.json()["id"]


def test_draft_still_needs_title(client, alice):
    r = client.post("/create-blog", json=blog_payload(draft=True, title=""), headers=auth(alice["access_token"]))
    assert r.status_code == 403


def test_create_blog_normalizes_and_counts(client, alice):
    token = alice["access_token"]
    blog_id = publish(client, token, title="Hello, World!", tags=["Tech", "PYTHON"])
    assert blog_id.startswith("Hello-World")

    r = client.post("/get-blog", json={"blog_id": blog_id})
    blog = r.json()["blog"]
    assert blog["tags"] == ["tech", "python"]
    assert blog["author"]["username"] == "alice"
    assert blog["content"]["blocks"][0]["data"]["text"] == "We walked."

    publish(client, token, draft=True)
    assert _profile(client, "alice")["account_info"]["total_posts"] == 1


def test_tags_are_deduplicated_and_blank_ones_dropped(client, alice):
    blog_id = publish(client, alice["access_token"], tags=["Go", "go", " ", " Web "])
    assert client.post("/get-blog", json={"blog_id": blog_id}).json()["blog"]["tags"] == ["go", "web"]

    r = client.post("/create-blog", json=blog_payload(tags=[" ", ""]), headers=auth(alice["access_token"]))
    assert r.status_code == 403
    assert "tags" in r.json()["error"]


def test_latest_pagination(client, alice):
    token = alice["access_token"]
    for i in range(1, 13):
        publish(client, token, title=f"Post {i}")
    publish(client, token, title="Hidden draft", draft=True)

    page1 = client.post("/latest-blogs", json={"page": 1}).json()["blogs"]
    page2 = client.post("/latest-blogs", json={"page": 2}).json()["blogs"]
    page9 = client.post("/latest-blogs", json={"page": 9})

    assert [b["title"] for b in page1] == ["Post 12", "Post 11", "Post 10", "Post 9", "Post 8"]
    assert [b["title"] for b in page2] == ["Post 7", "Post 6", "Post 5", "Post 4", "Post 3"]
    assert page9.status_code == 200
    assert page9.json() == {"blogs": []}
    assert client.post("/all-latest-blogs-count").json() == {"totalDocs": 12}


def test_latest_rejects_page_zero(client):
    assert client.post("/latest-blogs", json={"page": 0}).status_code == 422


def test_get_blog_draft_access(client, alice):
    blog_id = publish(client, alice["access_token"], draft=True)

    denied = client.post("/get-blog", json={"blog_id": blog_id})
    assert denied.status_code == 403
    assert denied.json() == {"error": "You cannot access draft blogs"}

    allowed = client.post("/get-blog", json={"blog_id": blog_id, "draft": True, "mode": "edit"})
    assert allowed.status_code == 200
    assert allowed.json()["blog"]["draft"] is True
    assert allowed.json()["blog"]["activity"]["total_reads"] == 0


def test_get_blog_unknown(client):
    r = client.post("/get-blog", json={"blog_id": "nope"})
    assert r.status_code == 404


def test_reads_increment_except_in_edit_mode(client, alice):
    blog_id = publish(client, alice["access_token"])

    client.post("/get-blog", json={"blog_id": blog_id})
    r = client.post("/get-blog", json={"blog_id": blog_id})
    assert r.json()["blog"]["activity"]["total_reads"] == 2

    r = client.post("/get-blog", json={"blog_id": blog_id, "mode": "edit"})
    assert r.json()["blog"]["activity"]["total_reads"] == 2
    assert _profile(client, "alice")["account_info"]["total_reads"] == 2


def test_update_blog(client, alice):
    token = alice["access_token"]
    blog_id = publish(client, token, draft=True, tags=["Draft"])
    assert _profile(client, "alice")["account_info"]["total_posts"] == 0
    assert client.post("/all-latest-blogs-count").json()["totalDocs"] == 0

    r = client.post("/create-blog", json=blog_payload(id=blog_id, title="Now public", tags=["Go"]), headers=auth(token))
    assert r.json() == {"id": blog_id}
    assert _profile(client, "alice")["account_info"]["total_posts"] == 1
    assert client.post("/all-latest-blogs-count").json()["totalDocs"] == 1

    blog = client.post("/get-blog", json={"blog_id": blog_id}).json()["blog"]
    assert blog["title"] == "Now public"
    assert blog["tags"] == ["go"]
    assert client.post("/search-blogs", json={"tag": "draft", "page": 1}).json()["blogs"] == []


def test_update_keeps_counters(client, alice, bob):
    blog_id = publish(client, alice["access_token"])
    client.post("/like-blog", json={"blog_id": blog_id}, headers=auth(bob["access_token"]))
    client.post("/get-blog", json={"blog_id": blog_id})

    client.post("/create-blog", json=blog_payload(id=blog_id, title="Renamed"), headers=auth(alice["access_token"]))
    activity = client.post("/get-blog", json={"blog_id": blog_id, "mode": "edit"}).json()["blog"]["activity"]
    assert activity["total_likes"] == 1
    assert activity["total_reads"] == 1


def test_update_by_other_user_forbidden(client, alice, bob):
    blog_id = publish(client, alice["access_token"])
    r = client.post("/create-blog", json=blog_payload(id=blog_id, title="Hijack"), headers=auth(bob["access_token"]))
    assert r.status_code == 403


def test_update_unknown_blog(client, alice):
    r = client.post("/create-blog", json=blog_payload(id="missing"), headers=auth(alice["access_token"]))
    assert r.status_code == 404


def test_trending_order(client, alice, bob):
    token = alice["access_token"]
    a = publish(client, token, title="Liked")
    b = publish(client, token, title="Most read")
    c = publish(client, token, title="Read once")
    publish(client, token, title="Newest")

    client.post("/like-blog", json={"blog_id": a}, headers=auth(bob["access_token"]))
    for _ in range(2):
        client.post("/get-blog", json={"blog_id": b})
    client.post("/get-blog", json={"blog_id": c})

    titles = [x["title"] for x in client.get("/trending-blogs").json()["blogs"]]
    assert titles == ["Most read", "Read once", "Liked", "Newest"]


def test_search_filters(client, alice, bob):
    a1 = publish(client, alice["access_token"], title="Python tips", tags=["Python"])
    r1 = publish(client, alice["access_token"], title="Rust notes", tags=["rust"])
    b1 = publish(client, bob["access_token"], title="More PYTHON", tags=["python", "web"])
    publish(client, bob["access_token"], title="Python draft", tags=["python"], draft=True)

    def search(**body):
        r = client.post("/search-blogs", json={"page": 1, "limit": 10, **body})
        assert r.status_code == 200
        return [x["blog_id"] for x in r.json()["blogs"]]

    assert search(tag="Python") == [b1, a1]
    assert search(tag="python", eliminate_blog=b1) == [a1]
    assert search(query="pyth") == [b1, a1]
    bob_id = client.post("/get-blog", json={"blog_id": b1}).json()["blog"]["author_id"]
    assert search(author=bob_id) == [b1]
    # tag wins over query
    assert search(tag="rust", query="python") == [r1]

    assert client.post("/search-blogs-count", json={"tag": "python"}).json() == {"totalDocs": 2}
    assert client.post("/search-blogs-count", json={"query": "notes"}).json() == {"totalDocs": 1}


def test_search_default_page_size(client, alice):
    for i in range(3):
        publish(client, alice["access_token"], title=f"Tagged {i}", tags=["same"])
    page1 = client.post("/search-blogs", json={"tag": "same", "page": 1}).json()["blogs"]
    page2 = client.post("/search-blogs", json={"tag": "same", "page": 2}).json()["blogs"]
    page3 = client.post("/search-blogs", json={"tag": "same", "page": 3}).json()["blogs"]
    assert len(page1) == 2
    assert len(page2) == 1
    assert page3 == []


def test_search_requires_a_filter(client):
    r = client.post("/search-blogs", json={"page": 1})
    assert r.status_code == 403
    assert client.post("/search-blogs-count", json={}).status_code == 403


def test_like_toggle_round_trip(client, alice, bob):
    blog_id = publish(client, alice["access_token"])
    headers = auth(bob["access_token"])

    assert client.post("/isliked-by-user", json={"blog_id": blog_id}, headers=headers).json() == {"result": False}

    first = client.post("/like-blog", json={"blog_id": blog_id}, headers=headers).json()
    assert first == {"liked_by_user": True, "total_likes": 1}
    assert client.post("/isliked-by-user", json={"blog_id": blog_id}, headers=headers).json() == {"result": True}

    second = client.post("/like-blog", json={"blog_id": blog_id}, headers=headers).json()
    assert second == {"liked_by_user": False, "total_likes": 0}
    assert client.post("/isliked-by-user", json={"blog_id": blog_id}, headers=headers).json() == {"result": False}


def test_likes_are_per_user(client, alice, bob):
    blog_id = publish(client, alice["access_token"])
    carol = signup(client, "Carol Danvers", "carol@example.com")
    client.post("/like-blog", json={"blog_id": blog_id}, headers=auth(bob["access_token"]))
    r = client.post("/like-blog", json={"blog_id": blog_id}, headers=auth(carol["access_token"]))
    assert r.json() == {"liked_by_user": True, "total_likes": 2}


def test_like_unknown_blog(client, bob):
    r = client.post("/like-blog", json={"blog_id": "missing"}, headers=auth(bob["access_token"]))
    assert r.status_code == 404

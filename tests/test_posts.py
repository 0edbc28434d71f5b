from conftest import as_user, create_post, register


async def test_create_post_with_image(client, upload_dir):
    user_id = await register(client, "alice")

    resp = await client.post(
        f"/users/{user_id}/posts",
        data={"content": "cat picture"},
        files={"image_file": ("my cat.png", b"\x89PNG fake", "image/png")},
        headers=as_user(user_id),
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["author_id"] == user_id
    assert body["media_url"].startswith("/uploads/")
    assert body["media_url"].endswith("_my_cat.png")
    assert body["comments_count"] == 0
    assert body["likes_count"] == 0
    stored = list(upload_dir.iterdir())
    assert len(stored) == 1
    assert stored[0].read_bytes() == b"\x89PNG fake"


async def test_disallowed_extension_writes_nothing(client, upload_dir):
    user_id = await register(client, "alice")

    resp = await client.post(
        f"/users/{user_id}/posts",
        data={"content": "bitmap"},
        files={"image_file": ("a.bmp", b"BM....", "image/bmp")},
        headers=as_user(user_id),
    )

    assert resp.status_code == 400
    assert list(upload_dir.iterdir()) == []
    assert (await client.get("/posts")).json() == []


async def test_oversized_image_rejected(client, upload_dir):
    user_id = await register(client, "alice")

    resp = await client.post(
        f"/users/{user_id}/posts",
        data={"content": "huge"},
        files={"image_file": ("big.jpg", b"0" * (5 * 1024 * 1024 + 1), "image/jpeg")},
        headers=as_user(user_id),
    )

    assert resp.status_code == 400
    assert list(upload_dir.iterdir()) == []


async def test_create_post_identity_checks(client):
    alice = await register(client, "alice")
    bob = await register(client, "bob")

    anonymous = await client.post(f"/users/{alice}/posts", data={"content": "x"})
    other = await client.post(f"/users/{alice}/posts", data={"content": "x"}, headers=as_user(bob))
    missing = await client.post("/users/999/posts", data={"content": "x"}, headers=as_user(999))

    assert anonymous.status_code == 401
    assert other.status_code == 403
    assert missing.status_code == 404


async def test_blank_content_rejected(client):
    user_id = await register(client, "alice")

    resp = await client.post(f"/users/{user_id}/posts", data={"content": "   "}, headers=as_user(user_id))

    assert resp.status_code == 400


async def test_unknown_community_rejected(client):
    user_id = await register(client, "alice")

    resp = await client.post(
        f"/users/{user_id}/posts",
        data={"content": "x", "community_id": "42"},
        headers=as_user(user_id),
    )

    assert resp.status_code == 404


async def test_share_url_unique(client):
    user_id = await register(client, "alice")
    await create_post(client, user_id, share_url="https://s/1")

    resp = await client.post(
        f"/users/{user_id}/posts",
        data={"content": "again", "share_url": "https://s/1"},
        headers=as_user(user_id),
    )

    assert resp.status_code == 409


async def test_post_projection(client, add_community, add_topic):
    community_id = await add_community("Cats")
    topic_id = await add_topic("Pets")
    alice = await register(client, "alice")
    bob = await register(client, "bob")
    post = await create_post(client, alice, community_id=community_id, topic_id=topic_id)

    for text in ("one", "two"):
        await client.post(f"/posts/{post['id']}/comments", json={"comment_text": text}, headers=as_user(bob))
    await client.post(f"/posts/{post['id']}/likes", headers=as_user(bob))

    body = (await client.get(f"/posts/{post['id']}")).json()
    assert body["community"] == {"id": community_id, "name": "Cats"}
    assert body["topic"] == {"id": topic_id, "name": "Pets"}
    assert body["comments_count"] == 2
    assert body["likes_count"] == 1


async def test_post_listing_filters_and_order(client, add_community):
    cats = await add_community("Cats")
    dogs = await add_community("Dogs")
    alice = await register(client, "alice")
    bob = await register(client, "bob")
    first = await create_post(client, alice, "first", community_id=cats)
    second = await create_post(client, bob, "second", community_id=dogs)
    third = await create_post(client, alice, "third", community_id=cats)

    everything = (await client.get("/posts")).json()
    assert [p["id"] for p in everything] == [third["id"], second["id"], first["id"]]

    in_cats = (await client.get("/posts", params={"community_id": cats})).json()
    assert [p["id"] for p in in_cats] == [third["id"], first["id"]]

    by_bob = (await client.get("/posts", params={"author_id": bob})).json()
    assert [p["id"] for p in by_bob] == [second["id"]]

    alice_posts = (await client.get(f"/users/{alice}/posts")).json()
    assert [p["content"] for p in alice_posts] == ["third", "first"]


async def test_update_post_owner_only(client):
    alice = await register(client, "alice")
    bob = await register(client, "bob")
    post = await create_post(client, alice, "original")

    forbidden = await client.put(f"/posts/{post['id']}", json={"content": "hijack"}, headers=as_user(bob))
    assert forbidden.status_code == 403

    resp = await client.put(f"/posts/{post['id']}", json={"content": "edited"}, headers=as_user(alice))
    assert resp.status_code == 200
    assert resp.json()["content"] == "edited"
    assert (await client.get(f"/posts/{post['id']}")).json()["content"] == "edited"


async def test_missing_post_is_not_found_before_identity(client):
    resp = await client.put("/posts/999", json={"content": "x"})

    assert resp.status_code == 404


async def test_delete_post_removes_comments_and_likes(client):
    alice = await register(client, "alice")
    bob = await register(client, "bob")
    post = await create_post(client, alice)
    await client.post(f"/posts/{post['id']}/comments", json={"comment_text": "hi"}, headers=as_user(bob))
    await client.post(f"/posts/{post['id']}/likes", headers=as_user(bob))

    assert (await client.delete(f"/posts/{post['id']}", headers=as_user(bob))).status_code == 403
    assert (await client.delete(f"/posts/{post['id']}", headers=as_user(alice))).status_code == 204

    assert (await client.get(f"/posts/{post['id']}")).status_code == 404
    assert (await client.get(f"/users/{bob}/comments")).json() == []
    assert (await client.get(f"/users/{bob}/likes")).json() == []


async def test_empty_share_url_on_update_clears_it(client):
    user_id = await register(client, "alice")
    first = await create_post(client, user_id, share_url="https://s/1")
    second = await create_post(client, user_id, share_url="https://s/2")

    for post in (first, second):
        resp = await client.put(f"/posts/{post['id']}", json={"share_url": ""}, headers=as_user(user_id))
        assert resp.status_code == 200
        assert resp.json()["share_url"] is None


async def test_oversized_image_reports_size_limit(client, upload_dir):
    user_id = await register(client, "alice")

    resp = await client.post(
        f"/users/{user_id}/posts",
        data={"content": "huge"},
        files={"image_file": ("big.png", b"0" * (6 * 1024 * 1024), "image/png")},
        headers=as_user(user_id),
    )

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Image size must not exceed 5MB."
    assert list(upload_dir.iterdir()) == []

from conftest import as_user, create_post, register


async def test_comment_update_is_owner_only(client):
    alice = await register(client, "alice")
    bob = await register(client, "bob")
    post = await create_post(client, alice)
    comment = (await client.post(
        f"/posts/{post['id']}/comments",
        json={"comment_text": "first"},
        headers=as_user(alice),
    )).json()

    forbidden = await client.put(
        f"/comments/{comment['id']}",
        json={"comment_text": "bob was here"},
        headers=as_user(bob),
    )
    assert forbidden.status_code == 403

    resp = await client.put(
        f"/comments/{comment['id']}",
        json={"comment_text": "edited"},
        headers=as_user(alice),
    )
    assert resp.status_code == 200
    assert resp.json()["comment_text"] == "edited"


async def test_comment_requires_identity_and_post(client):
    alice = await register(client, "alice")
    post = await create_post(client, alice)

    anonymous = await client.post(f"/posts/{post['id']}/comments", json={"comment_text": "x"})
    bad_header = await client.post(
        f"/posts/{post['id']}/comments",
        json={"comment_text": "x"},
        headers={"X-User-Id": "abc"},
    )
    no_post = await client.post("/posts/999/comments", json={"comment_text": "x"}, headers=as_user(alice))

    assert anonymous.status_code == 401
    assert bad_header.status_code == 401
    assert no_post.status_code == 404


async def test_comment_listings(client):
    alice = await register(client, "alice")
    bob = await register(client, "bob")
    await client.put(f"/users/{bob}", json={"avatar_url": "/bob.png"})
    post = await create_post(client, alice, "the post")
    for text in ("older", "newer"):
        await client.post(f"/posts/{post['id']}/comments", json={"comment_text": text}, headers=as_user(bob))

    on_post = (await client.get(f"/posts/{post['id']}/comments")).json()
    assert [c["comment_text"] for c in on_post] == ["newer", "older"]
    assert on_post[0]["user_login"] == "bob"
    assert on_post[0]["user_avatar_url"] == "/bob.png"

    by_bob = (await client.get(f"/users/{bob}/comments")).json()
    assert len(by_bob) == 2
    assert by_bob[0]["post_content"] == "the post"
    assert by_bob[0]["post_author_id"] == alice
    assert by_bob[0]["post_author_login"] == "alice"

    single = (await client.get(f"/comments/{on_post[0]['id']}")).json()
    assert single["user_login"] == "bob"


async def test_delete_comment(client):
    alice = await register(client, "alice")
    bob = await register(client, "bob")
    post = await create_post(client, alice)
    comment = (await client.post(
        f"/posts/{post['id']}/comments",
        json={"comment_text": "bye"},
        headers=as_user(bob),
    )).json()

    assert (await client.delete(f"/comments/{comment['id']}", headers=as_user(alice))).status_code == 403
    assert (await client.delete(f"/comments/{comment['id']}", headers=as_user(bob))).status_code == 204
    assert (await client.get(f"/comments/{comment['id']}")).status_code == 404

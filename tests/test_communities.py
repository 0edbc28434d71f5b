from conftest import as_user, create_post, register


async def test_list_and_lookup(client, add_community):
    cats = await add_community("Cats")
    await add_community("Dogs")

    names = [c["name"] for c in (await client.get("/communities")).json()]
    assert names == ["Cats", "Dogs"]

    assert (await client.get(f"/communities/{cats}")).json()["name"] == "Cats"
    by_name = await client.get("/communities/by-name", params={"name": "Dogs"})
    assert by_name.json()["name"] == "Dogs"
    assert (await client.get("/communities/by-name", params={"name": "Birds"})).status_code == 404
    assert (await client.get("/communities/999")).status_code == 404


async def test_most_popular_orders_by_counter(client, add_community):
    busy = await add_community("Busy", publication_count=10)
    unset = await add_community("Unset", publication_count=None)
    quiet = await add_community("Quiet", publication_count=3)

    top_two = (await client.get("/communities/most-popular", params={"count": 2})).json()
    assert [c["id"] for c in top_two] == [busy, quiet]

    default = (await client.get("/communities/most-popular")).json()
    assert [c["id"] for c in default] == [busy, quiet, unset]

    assert (await client.get("/communities/most-popular", params={"count": 0})).status_code == 400


async def test_community_with_posts_and_subscriptions(client, add_community):
    cats = await add_community("Cats")
    alice = await register(client, "alice")
    bob = await register(client, "bob")
    post = await create_post(client, alice, "meow", community_id=cats)
    await create_post(client, alice, "elsewhere")
    await client.post(f"/users/{bob}/subscriptions", json={"community_id": cats}, headers=as_user(bob))

    with_posts = (await client.get(f"/communities/{cats}/with-posts")).json()
    assert with_posts["name"] == "Cats"
    assert [p["id"] for p in with_posts["posts"]] == [post["id"]]

    with_subs = (await client.get(f"/communities/{cats}/with-subscriptions")).json()
    assert [(s["user_id"], s["user_login"]) for s in with_subs["subscriptions"]] == [(bob, "bob")]


async def test_topics(client, add_topic):
    pets = await add_topic("Pets")
    alice = await register(client, "alice")
    post = await create_post(client, alice, topic_id=pets)

    assert [t["name"] for t in (await client.get("/topics")).json()] == ["Pets"]
    assert (await client.get("/topics/by-name", params={"name": "Pets"})).json()["id"] == pets
    assert (await client.get(f"/topics/{pets}")).json()["name"] == "Pets"
    assert (await client.get("/topics/999")).status_code == 404

    with_posts = (await client.get(f"/topics/{pets}/with-posts")).json()
    assert [p["id"] for p in with_posts["posts"]] == [post["id"]]
    assert with_posts["posts"][0]["topic"] == {"id": pets, "name": "Pets"}

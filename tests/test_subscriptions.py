from conftest import as_user, register


async def test_subscription_lifecycle(client, add_community):
    cats = await add_community("Cats", description="All about cats")
    alice = await register(client, "alice")
    url = f"/users/{alice}/subscriptions"

    created = await client.post(url, json={"community_id": cats}, headers=as_user(alice))
    assert created.status_code == 201
    assert created.json()["community_id"] == cats

    again = await client.post(url, json={"community_id": cats}, headers=as_user(alice))
    assert again.status_code == 409

    listing = (await client.get(url)).json()
    assert listing == [{
        "community_id": cats,
        "community_name": "Cats",
        "community_description": "All about cats",
    }]

    assert (await client.delete(f"{url}/{cats}", headers=as_user(alice))).status_code == 204
    assert (await client.delete(f"{url}/{cats}", headers=as_user(alice))).status_code == 404


async def test_subscription_ownership(client, add_community):
    cats = await add_community("Cats")
    alice = await register(client, "alice")
    bob = await register(client, "bob")
    url = f"/users/{alice}/subscriptions"

    anonymous = await client.post(url, json={"community_id": cats})
    other = await client.post(url, json={"community_id": cats}, headers=as_user(bob))

    assert anonymous.status_code == 401
    assert other.status_code == 403
    assert (await client.get(url)).json() == []


async def test_subscribe_to_missing_community(client):
    alice = await register(client, "alice")

    resp = await client.post(
        f"/users/{alice}/subscriptions",
        json={"community_id": 999},
        headers=as_user(alice),
    )

    assert resp.status_code == 404

import pytest
from sqlalchemy import delete, func, select

from conftest import as_user, create_post, register
from format_api.dependencies import parse_identity
from format_api.models.comment import Comment
from format_api.models.community import Community
from format_api.models.like import Like
from format_api.models.post import Post
from format_api.models.subscription import Subscription
from format_api.models.topic import Topic
from format_api.services.authorization import ensure_owner, require_identity
from format_api.services.media_service import MediaUpload
from format_api.utils.exceptions import BadRequestError, ForbiddenError, UnauthorizedError


async def count(session, model, *where):
    result = await session.execute(select(func.count()).select_from(model).where(*where))
    return result.scalar_one()


async def test_deleting_user_keeps_their_posts(client, session_factory, add_community):
    cats = await add_community("Cats")
    alice = await register(client, "alice")
    bob = await register(client, "bob")
    alice_post = await create_post(client, alice)
    bob_post = await create_post(client, bob)
    await client.post(f"/posts/{alice_post['id']}/comments", json={"comment_text": "c"}, headers=as_user(bob))
    await client.post(f"/posts/{alice_post['id']}/likes", headers=as_user(bob))
    await client.post(f"/users/{bob}/subscriptions", json={"community_id": cats}, headers=as_user(bob))

    assert (await client.delete(f"/users/{bob}")).status_code == 204

    async with session_factory() as session:
        assert await count(session, Comment, Comment.user_id == bob) == 0
        assert await count(session, Like, Like.user_id == bob) == 0
        assert await count(session, Subscription, Subscription.user_id == bob) == 0
        orphan = await session.get(Post, bob_post["id"])
        assert orphan is not None
        assert orphan.author_id is None

    # A post without an author can no longer be changed by anyone
    resp = await client.put(f"/posts/{bob_post['id']}", json={"content": "x"}, headers=as_user(bob))
    assert resp.status_code == 403


async def test_deleting_community_and_topic_nulls_post_references(
    client, session_factory, add_community, add_topic,
):
    cats = await add_community("Cats")
    pets = await add_topic("Pets")
    alice = await register(client, "alice")
    post = await create_post(client, alice, community_id=cats, topic_id=pets)

    async with session_factory() as session:
        await session.execute(delete(Community).where(Community.id == cats))
        await session.execute(delete(Topic).where(Topic.id == pets))
        await session.commit()

    body = (await client.get(f"/posts/{post['id']}")).json()
    assert body["community"] is None
    assert body["topic"] is None


@pytest.mark.parametrize("raw, expected", [
    ("5", 5),
    (" 7 ", 7),
    ("", None),
    ("abc", None),
    (None, None),
    ("+3", 3),
    ("1_0", None),
    ("\u0665", None),
    ("1.5", None),
])
def test_parse_identity(raw, expected):
    assert parse_identity(raw) == expected


def test_ownership_gate():
    with pytest.raises(UnauthorizedError):
        require_identity(None)
    with pytest.raises(UnauthorizedError):
        ensure_owner(None, 1, "post")
    with pytest.raises(ForbiddenError):
        ensure_owner(2, 1, "comment")
    with pytest.raises(ForbiddenError):
        ensure_owner(1, None, "post")
    assert ensure_owner(1, 1, "subscription") == 1


async def test_media_storage(media_storage, upload_dir):
    media_storage.validate(MediaUpload("PHOTO.JPEG", b"x"))
    with pytest.raises(BadRequestError):
        media_storage.validate(MediaUpload("notes.txt", b"x"))
    with pytest.raises(BadRequestError):
        media_storage.validate(MediaUpload("noext", b"x"))

    reference = await media_storage.save(MediaUpload("a.gif", b"GIF89a"))
    assert reference.startswith("/uploads/")
    assert len(list(upload_dir.iterdir())) == 1

    await media_storage.delete(reference)
    assert list(upload_dir.iterdir()) == []


async def test_health(client):
    resp = await client.get("/health")

    assert resp.json() == {"status": "ok"}

"""
Writes that pass the service pre-checks but lose a race at commit time.
The pre-check is replaced with one that answers as the database did a moment
earlier, so the constraint in the store is what rejects the write.
"""
import pytest

from format_api.models.community import Community
from format_api.models.post import Post
from format_api.models.subscription import Subscription
from format_api.models.user import User
from format_api.repositories.subscription_repository import SubscriptionRepository
from format_api.repositories.user_repository import UserRepository
from format_api.services.comment_service import CommentService
from format_api.services.like_service import LikeService
from format_api.services.post_service import PostService
from format_api.services.subscription_service import SubscriptionService
from format_api.services.user_service import DUPLICATE_USER_MESSAGE, UserService
from format_api.utils.exceptions import ConflictError, NotFoundError


def answer(value):
    """Stand-in for an async existence check with a fixed result"""
    async def _check(*args, **kwargs):
        return value
    return _check


@pytest.fixture
async def alice(db_session):
    user = User(login="alice", email="alice@x.com", password="pw")
    db_session.add(user)
    await db_session.commit()
    return user.id


# ─── Parent deleted after the existence check ──────────────────────────
async def test_comment_on_vanished_post_is_not_found(db_session, alice):
    service = CommentService(db_session)
    service.post_repo.exists = answer(True)

    with pytest.raises(NotFoundError):
        await service.create_comment(999, alice, "hi")


async def test_like_on_vanished_post_is_not_found(db_session, alice):
    service = LikeService(db_session)
    service.post_repo.exists = answer(True)
    service.like_repo.exists = answer(False)

    with pytest.raises(NotFoundError):
        await service.add_like(999, alice)


async def test_subscription_to_vanished_community_is_not_found(db_session, alice):
    service = SubscriptionService(db_session)
    service.community_repo.exists = answer(True)
    service.subscription_repo.exists = answer(False)

    with pytest.raises(NotFoundError):
        await service.subscribe(alice, alice, 999)


async def test_post_in_vanished_community_is_not_found(db_session, alice):
    service = PostService(db_session)
    service.community_repo.exists = answer(True)

    with pytest.raises(NotFoundError):
        await service.create_post(alice, alice, "hello", community_id=999)

    db_session.expunge_all()
    assert await db_session.get(Post, 1) is None


# ─── Duplicate inserted after the uniqueness check ─────────────────────
@pytest.mark.parametrize("login, email", [
    ("alice", "new@x.com"),
    ("newcomer", "alice@x.com"),
])
async def test_concurrent_registration_conflicts(db_session, alice, login, email):
    service = UserService(db_session)
    service.user_repo.exists_by_login_or_email = answer(False)

    with pytest.raises(ConflictError) as exc_info:
        await service.register(login, email, "pw")

    assert exc_info.value.message == DUPLICATE_USER_MESSAGE
    assert await UserRepository(db_session).find_by_login("newcomer") is None


async def test_concurrent_subscription_conflicts(db_session, alice):
    community = Community(name="Cats")
    db_session.add(community)
    await db_session.commit()

    repo = SubscriptionRepository(db_session)
    repo.add(Subscription(user_id=alice, community_id=community.id))
    await repo.commit()

    service = SubscriptionService(db_session)
    service.subscription_repo.exists = answer(False)

    with pytest.raises(ConflictError):
        await service.subscribe(alice, alice, community.id)
    assert len(await repo.list_for_user(alice)) == 1

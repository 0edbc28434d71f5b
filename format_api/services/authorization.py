"""
Ownership gate for mutations of comments, posts and subscriptions.

The caller identity is an integer asserted by the client and passed in
explicitly; nothing here verifies it beyond its presence.
"""
import logging
from typing import Optional

from format_api.utils.exceptions import ForbiddenError, UnauthorizedError

logger = logging.getLogger(__name__)


def require_identity(actor_id: Optional[int]) -> int:
    """
    Return the caller id, or raise UnauthorizedError when there is none
    """
    if actor_id is None:
        raise UnauthorizedError("User ID header missing or invalid.")
    return actor_id


def ensure_owner(actor_id: Optional[int], owner_id: Optional[int], resource: str) -> int:
    """
    Check that the caller owns the loaded resource.
    Must run after the resource was found and before it is changed.
    An owner of None (e.g. a post whose author was deleted) matches nobody.
    """
    actor_id = require_identity(actor_id)
    if owner_id is None or actor_id != owner_id:
        logger.warning(
            "Ownership check failed: actor=%s owner=%s resource=%s",
            actor_id, owner_id, resource,
        )
        raise ForbiddenError(f"You are not the owner of this {resource}.")
    return actor_id

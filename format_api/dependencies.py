import logging
import re
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from format_api.core.config import get_settings, Settings
from format_api.core.database import get_db_session
from format_api.services.media_service import MediaStorage, get_media_storage
from format_api.services.post_service import PostService

logger = logging.getLogger(__name__)

# Optional sign and ASCII digits only
IDENTITY_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_identity(raw_value: Optional[str]) -> Optional[int]:
    """
    Turn the raw identity header value into a user id
    - absent, empty or non-integer values mean "no identity"
    """
    if raw_value is None:
        return None
    value = raw_value.strip()
    if not IDENTITY_PATTERN.fullmatch(value):
        logger.debug("Ignoring non-integer identity header: %r", raw_value)
        return None
    return int(value)


async def get_current_user_id(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> Optional[int]:
    """
    Caller identity for the current request.
    The value is asserted by the client and is not verified against any credential;
    services receive it as an explicit argument and decide what it may do.
    """
    return parse_identity(request.headers.get(settings.IDENTITY_HEADER))


def get_post_service(
    db: AsyncSession = Depends(get_db_session),
    media: MediaStorage = Depends(get_media_storage),
) -> PostService:
    """
    PostService dependency with the configured media storage
    """
    return PostService(db, media)

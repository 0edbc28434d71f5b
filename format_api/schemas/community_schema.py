from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import datetime

from format_api.schemas.post_schema import PostResponse
from format_api.schemas.subscription_schema import SubscriberResponse


class CommunityResponse(BaseModel):
    """Community as stored"""
    model_config = ConfigDict(from_attributes=True)

    id:                int                = Field(..., description="Community ID")
    name:              str                = Field(..., description="Community name")
    description:       Optional[str]      = Field(None, description="Description")
    avatar_url:        Optional[str]      = Field(None, description="Avatar URL")
    created_at:        Optional[datetime] = Field(None, description="Creation time (UTC)")
    publication_count: Optional[int]      = Field(None, description="Stored publication counter")


class CommunityWithPostsResponse(CommunityResponse):
    posts: List[PostResponse] = Field(default_factory=list, description="Posts of the community")


class CommunityWithSubscriptionsResponse(CommunityResponse):
    subscriptions: List[SubscriberResponse] = Field(default_factory=list, description="Subscribers")

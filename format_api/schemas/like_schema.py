from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime


class LikeResponse(BaseModel):
    """Stored like"""
    model_config = ConfigDict(from_attributes=True)

    id:      int = Field(..., description="Like ID")
    user_id: int = Field(..., description="User ID")
    post_id: int = Field(..., description="Post ID")


class LikedPostResponse(BaseModel):
    """Entry of a user's liked-posts listing"""
    post_id:      int                = Field(..., description="Liked post ID")
    content:      str                = Field(..., description="Post body")
    author_id:    Optional[int]      = Field(None, description="Post author ID")
    author_login: Optional[str]      = Field(None, description="Post author login")
    media_url:    Optional[str]      = Field(None, description="Post image reference")
    created_at:   Optional[datetime] = Field(None, description="Post creation time (UTC)")

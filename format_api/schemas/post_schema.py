from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime

# ─── Post request/response schemas ─────────────────────────────────────

class CommunitySummary(BaseModel):
    """Community reference nested in a post"""
    id:   int = Field(..., description="Community ID")
    name: str = Field(..., description="Community name")


class TopicSummary(BaseModel):
    """Topic reference nested in a post"""
    id:   int = Field(..., description="Topic ID")
    name: str = Field(..., description="Topic name")


class PostUpdateRequest(BaseModel):
    """
    Post update request; omitted fields are left unchanged
    """
    content:      Optional[str] = Field(None, description="New content")
    media_url:    Optional[str] = Field(None, description="New media reference")
    community_id: Optional[int] = Field(None, description="New community ID")
    topic_id:     Optional[int] = Field(None, description="New topic ID")
    share_url:    Optional[str] = Field(None, max_length=500, description="New share URL")

    model_config = {
        "json_schema_extra": {
            "example": {
                "content": "Edited post text",
                "topic_id": 3,
            }
        }
    }


class PostResponse(BaseModel):
    """
    Denormalized post view
    - community/topic summaries and counts are computed at read time
    """
    id:             int                        = Field(..., description="Post ID")
    content:        str                        = Field(..., description="Post body")
    media_url:      Optional[str]              = Field(None, description="Attached image reference")
    share_url:      Optional[str]              = Field(None, description="Share URL")
    created_at:     Optional[datetime]         = Field(None, description="Creation time (UTC)")
    author_id:      Optional[int]              = Field(None, description="Author user ID")
    community:      Optional[CommunitySummary] = Field(None, description="Community summary")
    topic:          Optional[TopicSummary]     = Field(None, description="Topic summary")
    comments_count: int                        = Field(0, description="Number of comments")
    likes_count:    int                        = Field(0, description="Number of likes")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "content": "Hello feed",
                "media_url": "/uploads/3f1c..._cat.png",
                "share_url": None,
                "created_at": "2025-05-10T20:00:00Z",
                "author_id": 42,
                "community": {"id": 1, "name": "Cats"},
                "topic": {"id": 2, "name": "Pets"},
                "comments_count": 4,
                "likes_count": 10,
            }
        }
    )

from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional

from format_api.schemas.post_schema import PostResponse


class TopicResponse(BaseModel):
    """Topic as stored"""
    model_config = ConfigDict(from_attributes=True)

    id:       int           = Field(..., description="Topic ID")
    name:     str           = Field(..., description="Topic name")
    icon_url: Optional[str] = Field(None, description="Icon URL")


class TopicWithPostsResponse(TopicResponse):
    posts: List[PostResponse] = Field(default_factory=list, description="Posts tagged with the topic")

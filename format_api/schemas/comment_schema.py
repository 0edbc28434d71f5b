from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime

# ─── Comment request/response schemas ──────────────────────────────────

class CommentCreateRequest(BaseModel):
    """New comment"""
    comment_text: str = Field(..., min_length=1, description="Comment body")


class CommentUpdateRequest(BaseModel):
    """Comment edit; an omitted text keeps the current one"""
    comment_text: Optional[str] = Field(None, description="New comment body")


class CommentResponse(BaseModel):
    """Comment as stored"""
    model_config = ConfigDict(from_attributes=True)

    id:           int                = Field(..., description="Comment ID")
    comment_text: str                = Field(..., description="Comment body")
    created_at:   Optional[datetime] = Field(None, description="Creation time (UTC)")
    post_id:      int                = Field(..., description="Post ID")
    user_id:      int                = Field(..., description="Author user ID")


class PostCommentResponse(CommentResponse):
    """Comment in a post's listing, with the commenter's login and avatar"""
    user_login:      Optional[str] = Field(None, description="Commenter login")
    user_avatar_url: Optional[str] = Field(None, description="Commenter avatar URL")


class UserCommentResponse(BaseModel):
    """Comment in a user's listing, with the parent post's context"""
    id:                int                = Field(..., description="Comment ID")
    comment_text:      str                = Field(..., description="Comment body")
    created_at:        Optional[datetime] = Field(None, description="Creation time (UTC)")
    post_id:           int                = Field(..., description="Post ID")
    post_content:      str                = Field(..., description="Parent post body")
    post_author_id:    Optional[int]      = Field(None, description="Parent post author ID")
    post_author_login: Optional[str]      = Field(None, description="Parent post author login")

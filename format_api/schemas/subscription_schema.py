from pydantic import BaseModel, Field, ConfigDict
from typing import Optional


class SubscribeRequest(BaseModel):
    """Subscription request"""
    community_id: int = Field(..., description="Community to subscribe to")


class SubscriptionResponse(BaseModel):
    """Stored subscription"""
    model_config = ConfigDict(from_attributes=True)

    id:           int = Field(..., description="Subscription ID")
    user_id:      int = Field(..., description="Subscriber user ID")
    community_id: int = Field(..., description="Community ID")


class UserSubscriptionResponse(BaseModel):
    """Entry of a user's subscription listing"""
    community_id:          int           = Field(..., description="Community ID")
    community_name:        str           = Field(..., description="Community name")
    community_description: Optional[str] = Field(None, description="Community description")


class SubscriberResponse(BaseModel):
    """Entry of a community's subscriber list"""
    id:         int           = Field(..., description="Subscription ID")
    user_id:    int           = Field(..., description="Subscriber user ID")
    user_login: Optional[str] = Field(None, description="Subscriber login")

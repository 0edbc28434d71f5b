from pydantic import BaseModel, EmailStr, Field
from pydantic import ConfigDict
from typing import Optional

# ─── User request/response schemas ─────────────────────────────────────

class UserRegisterRequest(BaseModel):
    """
    Registration request
    - login and email must both be unused
    """
    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "login":    "alice",
                "email":    "alice@x.com",
                "password": "secret",
                "phone":    "+10000000000",
            }
        },
    )

    login:    str           = Field(..., min_length=1, max_length=50, description="Login name")
    email:    EmailStr      = Field(..., description="E-mail address")
    password: str           = Field(..., min_length=1, description="Password")
    phone:    Optional[str] = Field(None, max_length=20, description="Phone number")


class UserLoginRequest(BaseModel):
    """
    Login request
    """
    model_config = ConfigDict(extra="ignore")
    login:    str = Field(..., min_length=1, description="Login name")
    password: str = Field(..., min_length=1, description="Password")


class UserUpdateRequest(BaseModel):
    """
    Profile update request; omitted fields are left unchanged
    """
    email:      Optional[EmailStr] = Field(None, description="New e-mail address")
    phone:      Optional[str]      = Field(None, max_length=20, description="New phone number")
    avatar_url: Optional[str]      = Field(None, max_length=500, description="New avatar URL")
    password:   Optional[str]      = Field(None, description="New password")


class ChangePasswordRequest(BaseModel):
    """
    Password change request
    """
    old_password: str = Field(..., description="Current password")
    new_password: str = Field(..., min_length=1, description="New password")


class UserResponse(BaseModel):
    """
    Public user view; the password is never returned
    """
    model_config = ConfigDict(from_attributes=True)

    id:         int           = Field(..., description="User ID")
    login:      str           = Field(..., description="Login name")
    email:      str           = Field(..., description="E-mail address")
    phone:      Optional[str] = Field(None, description="Phone number")
    avatar_url: Optional[str] = Field(None, description="Avatar URL")
    role_id:    Optional[int] = Field(None, description="Role ID")


class UserAuthResponse(BaseModel):
    """
    Registration / login result
    """
    message: str          = Field(..., description="Response message")
    user:    UserResponse = Field(..., description="Authenticated user")

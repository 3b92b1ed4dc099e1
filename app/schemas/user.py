from pydantic import BaseModel, Field, ConfigDict, field_validator
from datetime import datetime
from typing import Optional


def ensure_password_length(password: str) -> str:
    """bcrypt only looks at the first 72 bytes"""
    if len(password.encode('utf-8')) > 72:
        raise ValueError('Password cannot be longer than 72 bytes')
    return password


# Schema for user creation (signup)
class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)

    # Stored exactly as sent so login can look it up the same way
    @field_validator('username')
    @classmethod
    def reject_blank_username(cls, v):
        if not v.strip():
            raise ValueError('Username cannot be blank')
        return v

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        return ensure_password_length(v)

# Schema for user login
class UserLogin(BaseModel):
    username: str
    password: str

# Schema for user response
class UserResponse(BaseModel):
    id: int
    username: str
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class UserCreatedResponse(BaseModel):
    message: str
    userId: int


class LoginResponse(BaseModel):
    message: str
    userId: int
    username: str
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class PasswordUpdate(BaseModel):
    """Body of PUT /user/{userId}/password"""
    new_password: str = Field(..., min_length=1, alias="newPassword")
    model_config = ConfigDict(populate_by_name=True)

    @field_validator('new_password')
    @classmethod
    def validate_new_password(cls, v):
        return ensure_password_length(v)


class MessageResponse(BaseModel):
    message: str

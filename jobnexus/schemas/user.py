from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from jobnexus.models.user import UserType


class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1)
    email: str = Field(min_length=3, max_length=200)
    name: str = Field(min_length=1, max_length=200)
    user_type: UserType


class LoginRequest(BaseModel):
    username: str
    password: str


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    name: str
    user_type: UserType
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

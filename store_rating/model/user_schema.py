from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from store_rating.auth.permissions import Role


class UserRegister(BaseModel):
    name: str
    email: str
    password: str
    address: str


class UserCreate(UserRegister):
    role: Role


class UserLogin(BaseModel):
    email: str
    password: str


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    role: Optional[Role] = None


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    address: str
    role: Role
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserListItem(UserResponse):
    average_rating: Optional[float] = None


class LoginResponse(BaseModel):
    message: str
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class UserEnvelope(BaseModel):
    message: Optional[str] = None
    user: UserResponse

from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime
from enum import Enum

class Role(str, Enum):
    """Role granted to a user account"""
    ADMIN = "admin"
    HOTEL = "hotel"
    CUSTOMER = "customer"
    NONE = "none"

class UserBase(BaseModel):
    email: EmailStr
    full_name: Optional[str] = None
    phone: Optional[str] = None

class UserCreate(UserBase):
    password: str

class User(UserBase):
    id: int
    role: Role = Role.NONE
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# Explicit identity context handed to every handler
class CurrentUser(BaseModel):
    id: int
    email: EmailStr
    full_name: Optional[str] = None
    role: Role = Role.NONE

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class AuthResponse(BaseModel):
    access_token: str
    token_type: str
    user: User

class RoleUpdate(BaseModel):
    role: Role

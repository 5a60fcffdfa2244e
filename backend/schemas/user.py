from datetime import datetime
from pydantic import BaseModel, EmailStr
from typing import Optional

# Shared properties for user models
class UserBase(BaseModel):
    username: str
    email: EmailStr
    address: Optional[str] = None

# Schema for user registration requests
class UserCreate(UserBase):
    password: str

# Schema for full user updates (PUT)
class UserUpdate(UserBase):
    password: str
    role: Optional[str] = None

# Output schema for user details; the password hash is never exposed
class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    address: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# Body returned after a successful registration
class UserCreated(BaseModel):
    userId: int
    message: str

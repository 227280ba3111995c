from pydantic import BaseModel
from typing import Optional


class SignupRequest(BaseModel):
    """Signup fields. Presence is checked by the service, not here, so that
    missing fields are reported as 400 rather than a schema error."""
    name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    gender: Optional[str] = None
    role: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserPublic(BaseModel):
    """Safe projection of a user: never carries the password hash."""
    id: int
    name: str
    email: str
    role: str
    photo: Optional[str] = None

    class Config:
        from_attributes = True


class SignupResponse(UserPublic):
    gender: Optional[str] = None

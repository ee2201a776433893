from typing import Optional
from pydantic import BaseModel, Field

from storefront.enums.role import Role


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6)


class GoogleSignInRequest(BaseModel):
    id_token: str


class AuthResponse(BaseModel):
    id: int
    name: Optional[str] = None
    email: str
    role: Role
    token: str
    is_new_user: bool = False


class UserRead(BaseModel):
    id: int
    name: Optional[str] = None
    email: str
    role: Role

    class Config:
        from_attributes = True

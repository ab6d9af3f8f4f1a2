"""Pydantic schemas for authentication."""

from typing import Literal

from pydantic import BaseModel

Role = Literal["super_admin", "admin", "staff"]


class TokenUser(BaseModel):
    """Lightweight user representation from JWT claims. No DB query needed."""

    id: str
    username: str
    role: Role
    email: str = ""


class UserResponse(BaseModel):
    """Public user information."""

    id: str
    username: str
    email: str = ""
    role: Role

    model_config = {"from_attributes": True}

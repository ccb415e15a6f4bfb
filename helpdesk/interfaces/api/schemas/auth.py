"""Pydantic models for authentication responses."""

from pydantic import BaseModel


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    role: str


__all__ = ["Token"]

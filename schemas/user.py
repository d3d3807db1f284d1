from __future__ import annotations

from pydantic import BaseModel


class UserCreate(BaseModel):
    """Profile sent on first sign-in; any extra profile fields are kept."""

    email: str

    model_config = {"extra": "allow"}

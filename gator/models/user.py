"""User model."""

from pydantic import Field

from .base import DBModel


class User(DBModel):
    """Registered user. Names are unique across the store."""

    name: str = Field(..., description="User name")

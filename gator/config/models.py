"""Configuration models."""

from pydantic import BaseModel, Field


class ConfigModel(BaseModel):
    """Persisted per-user configuration."""

    db_url: str = Field("", description="Postgres connection string")
    current_user_name: str = Field("", description="Name of the logged-in user")

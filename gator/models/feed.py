"""Feed and feed-follow models."""

from uuid import UUID

from pydantic import Field

from .base import DBModel


class Feed(DBModel):
    """RSS feed registered by a user."""

    name: str = Field(..., description="Feed name")
    url: str = Field(..., description="Feed URL (unique)")
    user_id: UUID = Field(..., description="Foreign key to the owning user")


class FeedFollow(DBModel):
    """Link recording that a user follows a feed."""

    user_id: UUID = Field(..., description="Foreign key to users table")
    feed_id: UUID = Field(..., description="Foreign key to feeds table")


class FollowedFeed(FeedFollow):
    """Feed follow joined with the names it links."""

    feed_name: str = Field(..., description="Name of the followed feed")
    user_name: str = Field(..., description="Name of the following user")

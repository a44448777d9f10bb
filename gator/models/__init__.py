"""Data models for gator."""

from .base import DBModel, utc_now
from .feed import Feed, FeedFollow, FollowedFeed
from .user import User

__all__ = ["DBModel", "utc_now", "Feed", "FeedFollow", "FollowedFeed", "User"]

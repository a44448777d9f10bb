"""Persistence gateway interface.

Command handlers only talk to storage through this interface. Lookups
that match nothing raise ``RecordNotFoundError``; writes that break a
uniqueness constraint raise ``DuplicateRecordError``; every other
storage failure surfaces as ``PersistenceError``.
"""

from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from ..models import Feed, FeedFollow, FollowedFeed, User


class PersistenceGateway(ABC):
    """Abstract base class for user/feed/follow storage."""

    # Users

    @abstractmethod
    def create_user(self, user: User) -> User:
        """Insert a user and return the stored record."""
        pass

    @abstractmethod
    def get_user_by_name(self, name: str) -> User:
        """Get a user by unique name."""
        pass

    @abstractmethod
    def get_user_by_id(self, user_id: UUID) -> User:
        """Get a user by id."""
        pass

    @abstractmethod
    def get_users(self) -> List[User]:
        """Get all users."""
        pass

    # Feeds

    @abstractmethod
    def create_feed(self, feed: Feed) -> Feed:
        """Insert a feed and return the stored record."""
        pass

    @abstractmethod
    def get_feeds(self) -> List[Feed]:
        """Get all feeds."""
        pass

    @abstractmethod
    def get_feed_by_url(self, url: str) -> Feed:
        """Get a feed by exact URL."""
        pass

    # Follows

    @abstractmethod
    def create_feed_follow(self, follow: FeedFollow) -> FollowedFeed:
        """Insert a follow and return it joined with user and feed names."""
        pass

    @abstractmethod
    def get_feed_follows_for_user(self, user_id: UUID) -> List[FollowedFeed]:
        """Get the follows of one user."""
        pass

    @abstractmethod
    def delete_feed_follow(self, user_id: UUID, feed_id: UUID) -> int:
        """Delete the follow keyed by (user_id, feed_id).

        Returns:
            Number of rows deleted (0 or 1).
        """
        pass

    # Schema

    @abstractmethod
    def execute_script(self, sql: str) -> None:
        """Execute raw DDL, possibly several statements."""
        pass

    def close(self) -> None:
        """Release any held resources."""
        pass

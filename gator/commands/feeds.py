"""Feed commands: agg, addfeed, feeds, follow, following, unfollow."""

import logging
from uuid import uuid4

from ..exceptions import (
    AlreadyFollowingError,
    DuplicateRecordError,
    FeedNotFoundError,
    NotFollowingError,
    RecordNotFoundError,
)
from ..ingestion import print_feed
from ..models import Feed, FeedFollow, User, utc_now
from .registry import AuthenticatedHandler, Command, Handler
from .session import Session

logger = logging.getLogger(__name__)

AGG_FEED_URL = "https://www.wagslane.dev/index.xml"


def _new_follow(user: User, feed: Feed) -> FeedFollow:
    """Build a follow record for ``user`` and ``feed``."""
    now = utc_now()
    return FeedFollow(id=uuid4(), created_at=now, updated_at=now, user_id=user.id, feed_id=feed.id)


def _get_feed(session: Session, url: str) -> Feed:
    """Resolve a feed by exact URL."""
    try:
        return session.gateway.get_feed_by_url(url)
    except RecordNotFoundError as e:
        raise FeedNotFoundError(url) from e


class AggHandler(Handler):
    """Fetch one feed and print it. Nothing is stored."""

    def __init__(self, url: str = AGG_FEED_URL) -> None:
        self.url = url

    def execute(self, session: Session, command: Command) -> None:
        document = session.fetcher.fetch(self.url)
        print_feed(document, session.console)


class AddFeedHandler(AuthenticatedHandler):
    """Create a feed owned by the user and follow it."""

    def execute(self, session: Session, command: Command, user: User) -> None:
        name, url = command.require_args(2, "<name> <url>")

        now = utc_now()
        feed = session.gateway.create_feed(
            Feed(id=uuid4(), created_at=now, updated_at=now, name=name, url=url, user_id=user.id)
        )
        logger.info("Created feed %s (%s)", feed.name, feed.id)

        # Not atomic: a failure here leaves the feed without a follow.
        session.gateway.create_feed_follow(_new_follow(user, feed))

        console = session.console
        console.print("Feed created:", highlight=False)
        console.print(f"  ID:      {feed.id}", highlight=False, markup=False)
        console.print(f"  Name:    {feed.name}", highlight=False, markup=False)
        console.print(f"  URL:     {feed.url}", highlight=False, markup=False)
        console.print(f"  User:    {user.name}", highlight=False, markup=False)
        console.print(f"  Created: {feed.created_at.isoformat()}", highlight=False)


class FeedsHandler(Handler):
    """List all feeds with their owners."""

    def execute(self, session: Session, command: Command) -> None:
        for feed in session.gateway.get_feeds():
            owner = session.gateway.get_user_by_id(feed.user_id)
            session.console.print(
                f"* Name: {feed.name}, URL: {feed.url}, User: {owner.name}",
                highlight=False,
                markup=False,
            )


class FollowHandler(AuthenticatedHandler):
    """Follow an existing feed by URL."""

    def execute(self, session: Session, command: Command, user: User) -> None:
        (url,) = command.require_args(1, "<url>")

        feed = _get_feed(session, url)
        try:
            follow = session.gateway.create_feed_follow(_new_follow(user, feed))
        except DuplicateRecordError as e:
            raise AlreadyFollowingError(user.name, url) from e

        session.console.print(
            f"{follow.user_name} now follows {follow.feed_name}", highlight=False, markup=False
        )


class FollowingHandler(AuthenticatedHandler):
    """List the feeds the user follows."""

    def execute(self, session: Session, command: Command, user: User) -> None:
        for follow in session.gateway.get_feed_follows_for_user(user.id):
            session.console.print(f"* {follow.feed_name}", highlight=False, markup=False)


class UnfollowHandler(AuthenticatedHandler):
    """Stop following a feed by URL."""

    def execute(self, session: Session, command: Command, user: User) -> None:
        (url,) = command.require_args(1, "<url>")

        feed = _get_feed(session, url)
        if session.gateway.delete_feed_follow(user.id, feed.id) == 0:
            raise NotFollowingError(user.name, url)

        session.console.print(f"{user.name} unfollowed {feed.name}", highlight=False, markup=False)

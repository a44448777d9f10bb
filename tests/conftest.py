"""Test configuration and fixtures."""

import io
from typing import Dict, List, Optional
from uuid import UUID

import httpx
import pytest
from rich.console import Console

from gator.commands import Session
from gator.config import Config
from gator.db import Migration, MigrationSource, PersistenceGateway
from gator.exceptions import DuplicateRecordError, RecordNotFoundError
from gator.ingestion import FeedFetcher
from gator.models import Feed, FeedFollow, FollowedFeed, User

SAMPLE_RSS = b"""<rss><channel><title>T</title><link>L</link><description>D</description><item><title>I1</title><link>IL1</link><description>ID1</description><pubDate>P1</pubDate></item></channel></rss>"""


class InMemoryGateway(PersistenceGateway):
    """Gateway double with the same uniqueness rules as the schema."""

    def __init__(self) -> None:
        self.users: Dict[UUID, User] = {}
        self.feeds: Dict[UUID, Feed] = {}
        self.follows: Dict[UUID, FeedFollow] = {}
        self.scripts: List[str] = []
        self.calls: List[str] = []

    def create_user(self, user: User) -> User:
        self.calls.append("create_user")
        if any(u.name == user.name for u in self.users.values()):
            raise DuplicateRecordError("user", user.name)
        self.users[user.id] = user
        return user

    def get_user_by_name(self, name: str) -> User:
        self.calls.append("get_user_by_name")
        for user in self.users.values():
            if user.name == name:
                return user.model_copy()
        raise RecordNotFoundError("user", name)

    def get_user_by_id(self, user_id: UUID) -> User:
        self.calls.append("get_user_by_id")
        if user_id not in self.users:
            raise RecordNotFoundError("user", str(user_id))
        return self.users[user_id]

    def get_users(self) -> List[User]:
        self.calls.append("get_users")
        return list(self.users.values())

    def create_feed(self, feed: Feed) -> Feed:
        self.calls.append("create_feed")
        if any(f.url == feed.url for f in self.feeds.values()):
            raise DuplicateRecordError("feed", feed.url)
        self.feeds[feed.id] = feed
        return feed

    def get_feeds(self) -> List[Feed]:
        self.calls.append("get_feeds")
        return list(self.feeds.values())

    def get_feed_by_url(self, url: str) -> Feed:
        self.calls.append("get_feed_by_url")
        for feed in self.feeds.values():
            if feed.url == url:
                return feed
        raise RecordNotFoundError("feed", url)

    def _joined(self, follow: FeedFollow) -> FollowedFeed:
        return FollowedFeed(
            **follow.model_dump(),
            feed_name=self.feeds[follow.feed_id].name,
            user_name=self.users[follow.user_id].name,
        )

    def create_feed_follow(self, follow: FeedFollow) -> FollowedFeed:
        self.calls.append("create_feed_follow")
        for existing in self.follows.values():
            if (existing.user_id, existing.feed_id) == (follow.user_id, follow.feed_id):
                raise DuplicateRecordError("feed follow", f"{follow.user_id}/{follow.feed_id}")
        self.follows[follow.id] = follow
        return self._joined(follow)

    def get_feed_follows_for_user(self, user_id: UUID) -> List[FollowedFeed]:
        self.calls.append("get_feed_follows_for_user")
        return [self._joined(f) for f in self.follows.values() if f.user_id == user_id]

    def delete_feed_follow(self, user_id: UUID, feed_id: UUID) -> int:
        self.calls.append("delete_feed_follow")
        doomed = [
            key
            for key, f in self.follows.items()
            if (f.user_id, f.feed_id) == (user_id, feed_id)
        ]
        for key in doomed:
            del self.follows[key]
        return len(doomed)

    def execute_script(self, sql: str) -> None:
        self.calls.append("execute_script")
        self.scripts.append(sql)
        if sql.startswith("DROP TABLE IF EXISTS users"):
            self.users.clear()
            self.feeds.clear()
            self.follows.clear()


class StaticMigrationSource(MigrationSource):
    """Migrations held in memory."""

    def __init__(self, migrations: Optional[List[Migration]] = None) -> None:
        self.migrations = migrations or []

    def __iter__(self):
        return iter(self.migrations)


def mock_client(handler) -> httpx.Client:
    """HTTP client whose requests are answered by ``handler``."""
    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture
def config_path(tmp_path):
    """Path of a not-yet-written config file."""
    return tmp_path / ".gatorconfig.json"


@pytest.fixture
def config(config_path):
    """Config manager on a temporary file."""
    return Config(config_path)


@pytest.fixture
def gateway():
    """Empty in-memory gateway."""
    return InMemoryGateway()


@pytest.fixture
def feed_requests():
    """Requests seen by the session's fetcher."""
    return []


@pytest.fixture
def fetcher(feed_requests):
    """Fetcher answering every URL with the sample feed."""

    def handler(request: httpx.Request) -> httpx.Response:
        feed_requests.append(request)
        return httpx.Response(200, content=SAMPLE_RSS)

    return FeedFetcher(client=mock_client(handler))


@pytest.fixture
def console():
    """Console writing to a buffer."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def session(config, gateway, fetcher, console):
    """Anonymous session on in-memory collaborators."""
    return Session(
        config,
        gateway,
        fetcher=fetcher,
        migrations=StaticMigrationSource(
            [Migration("001_users.sql", "CREATE TABLE users ();")]
        ),
        console=console,
    )


@pytest.fixture
def output(console):
    """Return everything printed to the session console so far."""
    return lambda: console.file.getvalue()

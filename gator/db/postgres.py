"""Postgres implementation of the persistence gateway."""

import logging
from contextlib import contextmanager
from typing import Generator, List, Optional
from uuid import UUID

import psycopg
from psycopg import errors

from ..exceptions import DuplicateRecordError, PersistenceError, RecordNotFoundError
from ..models import Feed, FeedFollow, FollowedFeed, User
from .connection import ConnectionManager
from .gateway import PersistenceGateway

logger = logging.getLogger(__name__)


FOLLOW_COLUMNS = """
    ff.id, ff.created_at, ff.updated_at, ff.user_id, ff.feed_id,
    f.name AS feed_name, u.name AS user_name
"""


class PostgresGateway(PersistenceGateway):
    """Persistence gateway backed by a psycopg connection pool."""

    def __init__(self, db_url: str) -> None:
        """Initialize gateway; no connection is opened until first use."""
        self.connections = ConnectionManager(db_url)

    @contextmanager
    def _cursor(
        self,
        operation: str,
        entity: str,
        key: Optional[str] = None,
    ) -> Generator[psycopg.Cursor, None, None]:
        """Open a cursor and translate driver errors for one operation."""
        logger.debug("db %s %s", operation, key or "")
        try:
            with self.connections.connection() as conn:
                with conn.cursor() as cur:
                    yield cur
                conn.commit()
        except errors.UniqueViolation as e:
            raise DuplicateRecordError(entity, key or "") from e
        except psycopg.Error as e:
            raise PersistenceError(operation, e, entity=f"{entity} {key}" if key else entity) from e

    # Users

    def create_user(self, user: User) -> User:
        """Insert a user and return the stored record."""
        with self._cursor("create_user", "user", user.name) as cur:
            cur.execute(
                """
                INSERT INTO users (id, created_at, updated_at, name)
                VALUES (%s, %s, %s, %s)
                RETURNING *
                """,
                (user.id, user.created_at, user.updated_at, user.name),
            )
            return User(**cur.fetchone())

    def get_user_by_name(self, name: str) -> User:
        """Get a user by unique name."""
        with self._cursor("get_user_by_name", "user", name) as cur:
            cur.execute("SELECT * FROM users WHERE name = %s", (name,))
            row = cur.fetchone()
        if row is None:
            raise RecordNotFoundError("user", name)
        return User(**row)

    def get_user_by_id(self, user_id: UUID) -> User:
        """Get a user by id."""
        with self._cursor("get_user_by_id", "user", str(user_id)) as cur:
            cur.execute("SELECT * FROM users WHERE id = %s", (user_id,))
            row = cur.fetchone()
        if row is None:
            raise RecordNotFoundError("user", str(user_id))
        return User(**row)

    def get_users(self) -> List[User]:
        """Get all users, oldest first."""
        with self._cursor("get_users", "user") as cur:
            cur.execute("SELECT * FROM users ORDER BY created_at, name")
            return [User(**row) for row in cur.fetchall()]

    # Feeds

    def create_feed(self, feed: Feed) -> Feed:
        """Insert a feed and return the stored record."""
        with self._cursor("create_feed", "feed", feed.url) as cur:
            cur.execute(
                """
                INSERT INTO feeds (id, created_at, updated_at, name, url, user_id)
                VALUES (%s, %s, %s, %s, %s, %s)
                RETURNING *
                """,
                (feed.id, feed.created_at, feed.updated_at, feed.name, feed.url, feed.user_id),
            )
            return Feed(**cur.fetchone())

    def get_feeds(self) -> List[Feed]:
        """Get all feeds, oldest first."""
        with self._cursor("get_feeds", "feed") as cur:
            cur.execute("SELECT * FROM feeds ORDER BY created_at, name")
            return [Feed(**row) for row in cur.fetchall()]

    def get_feed_by_url(self, url: str) -> Feed:
        """Get a feed by exact URL."""
        with self._cursor("get_feed_by_url", "feed", url) as cur:
            cur.execute("SELECT * FROM feeds WHERE url = %s", (url,))
            row = cur.fetchone()
        if row is None:
            raise RecordNotFoundError("feed", url)
        return Feed(**row)

    # Follows

    def create_feed_follow(self, follow: FeedFollow) -> FollowedFeed:
        """Insert a follow and return it joined with user and feed names."""
        key = f"{follow.user_id}/{follow.feed_id}"
        with self._cursor("create_feed_follow", "feed follow", key) as cur:
            cur.execute(
                f"""
                WITH ff AS (
                    INSERT INTO feed_follows (id, created_at, updated_at, user_id, feed_id)
                    VALUES (%s, %s, %s, %s, %s)
                    RETURNING *
                )
                SELECT {FOLLOW_COLUMNS}
                FROM ff
                JOIN feeds f ON f.id = ff.feed_id
                JOIN users u ON u.id = ff.user_id
                """,
                (follow.id, follow.created_at, follow.updated_at, follow.user_id, follow.feed_id),
            )
            return FollowedFeed(**cur.fetchone())

    def get_feed_follows_for_user(self, user_id: UUID) -> List[FollowedFeed]:
        """Get the follows of one user, oldest first."""
        with self._cursor("get_feed_follows_for_user", "feed follow", str(user_id)) as cur:
            cur.execute(
                f"""
                SELECT {FOLLOW_COLUMNS}
                FROM feed_follows ff
                JOIN feeds f ON f.id = ff.feed_id
                JOIN users u ON u.id = ff.user_id
                WHERE ff.user_id = %s
                ORDER BY ff.created_at, f.name
                """,
                (user_id,),
            )
            return [FollowedFeed(**row) for row in cur.fetchall()]

    def delete_feed_follow(self, user_id: UUID, feed_id: UUID) -> int:
        """Delete the follow keyed by (user_id, feed_id)."""
        key = f"{user_id}/{feed_id}"
        with self._cursor("delete_feed_follow", "feed follow", key) as cur:
            cur.execute(
                "DELETE FROM feed_follows WHERE user_id = %s AND feed_id = %s",
                (user_id, feed_id),
            )
            return cur.rowcount

    # Schema

    def execute_script(self, sql: str) -> None:
        """Execute raw DDL, possibly several statements."""
        with self._cursor("execute_script", "schema") as cur:
            cur.execute(sql)

    def close(self) -> None:
        """Close the connection pool."""
        self.connections.close()

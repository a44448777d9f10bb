"""Database connection management."""

from contextlib import contextmanager
from typing import Generator, Optional

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool


class ConnectionManager:
    """Lazily opened connection pool for one database URL."""

    def __init__(self, db_url: str, max_size: int = 4) -> None:
        """Initialize connection manager."""
        self.db_url = db_url
        self.max_size = max_size
        self._pool: Optional[ConnectionPool] = None

    @property
    def pool(self) -> ConnectionPool:
        """Get or create the connection pool."""
        if self._pool is None:
            self._pool = ConnectionPool(
                self.db_url,
                min_size=1,
                max_size=self.max_size,
                kwargs={"row_factory": dict_row},
                open=True,
            )
        return self._pool

    @contextmanager
    def connection(self) -> Generator[psycopg.Connection, None, None]:
        """Get a database connection from the pool."""
        with self.pool.connection() as conn:
            yield conn

    def close(self) -> None:
        """Close the pool if it was ever opened."""
        if self._pool is not None:
            self._pool.close()
            self._pool = None

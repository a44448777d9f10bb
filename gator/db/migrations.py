"""Schema migrations and reset.

Migration files carry goose-style markers; only the forward ("Up")
segment is ever executed.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, NamedTuple, Optional

from ..exceptions import GatorError, MigrationError
from .gateway import PersistenceGateway

logger = logging.getLogger(__name__)

UP_MARKER = "-- +goose Up"
DOWN_MARKER = "-- +goose Down"

SCHEMA_DIR = Path(__file__).parent / "schema"

# Dependent tables first.
RESET_STATEMENTS = [
    ("drop feed_follows", "DROP TABLE IF EXISTS feed_follows CASCADE;"),
    ("drop feeds", "DROP TABLE IF EXISTS feeds CASCADE;"),
    ("drop users", "DROP TABLE IF EXISTS users CASCADE;"),
    ("create pgcrypto", 'CREATE EXTENSION IF NOT EXISTS "pgcrypto";'),
]


class Migration(NamedTuple):
    """One migration: identifier plus forward SQL."""

    name: str
    forward_sql: str


def split_forward_segment(text: str) -> str:
    """Extract the forward segment of a migration file.

    Returns the text between the Up marker and the Down marker (or end of
    file), stripped. Returns "" when there is no Up marker.
    """
    _, found, after = text.partition(UP_MARKER)
    if not found:
        return ""
    forward, _, _ = after.partition(DOWN_MARKER)
    return forward.strip()


class MigrationSource(ABC):
    """Ordered source of migrations."""

    @abstractmethod
    def __iter__(self) -> Iterator[Migration]:
        """Yield migrations in application order."""
        pass


class DirectoryMigrationSource(MigrationSource):
    """Migrations read from ``*.sql`` files in a directory."""

    def __init__(self, directory: Optional[Path] = None) -> None:
        """Initialize source; defaults to the packaged schema directory."""
        self.directory = directory if directory is not None else SCHEMA_DIR

    def __iter__(self) -> Iterator[Migration]:
        """Yield migrations in filename-lexical order."""
        try:
            entries = sorted(self.directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise GatorError(f"failed to read migrations directory {self.directory}: {e}") from e

        for path in entries:
            if path.is_dir() or path.suffix != ".sql":
                continue
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise MigrationError(path.name, e) from e
            yield Migration(path.name, split_forward_segment(text))


def apply_migrations(gateway: PersistenceGateway, source: MigrationSource) -> int:
    """Apply every non-empty forward segment in order.

    Returns:
        Number of migrations executed.
    """
    applied = 0
    for migration in source:
        if not migration.forward_sql:
            logger.debug("Skipping empty migration %s", migration.name)
            continue
        logger.info("Applying %s", migration.name)
        try:
            gateway.execute_script(migration.forward_sql)
        except GatorError as e:
            raise MigrationError(migration.name, e) from e
        applied += 1
    return applied


def reset_schema(gateway: PersistenceGateway, source: MigrationSource) -> int:
    """Drop every table, recreate extensions and replay migrations.

    Not transactional: a failure part-way leaves earlier steps applied.

    Returns:
        Number of migrations executed.
    """
    for step, statement in RESET_STATEMENTS:
        logger.info("Reset step: %s", step)
        gateway.execute_script(statement)
    return apply_migrations(gateway, source)

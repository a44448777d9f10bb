"""Database access for gator."""

from .gateway import PersistenceGateway
from .migrations import (
    DirectoryMigrationSource,
    Migration,
    MigrationSource,
    apply_migrations,
    reset_schema,
    split_forward_segment,
)
from .postgres import PostgresGateway

__all__ = [
    "DirectoryMigrationSource",
    "Migration",
    "MigrationSource",
    "PersistenceGateway",
    "PostgresGateway",
    "apply_migrations",
    "reset_schema",
    "split_forward_segment",
]

"""Session state passed to every command."""

from typing import Optional

from rich.console import Console

from ..config import Config
from ..db import DirectoryMigrationSource, MigrationSource, PersistenceGateway
from ..ingestion import FeedFetcher


class Session:
    """Logged-in user plus handles to storage, network and output.

    A session is anonymous while ``current_user_name`` is empty and
    authenticated otherwise. Only login and register change it.
    """

    def __init__(
        self,
        config: Config,
        gateway: PersistenceGateway,
        fetcher: Optional[FeedFetcher] = None,
        migrations: Optional[MigrationSource] = None,
        console: Optional[Console] = None,
    ) -> None:
        """Initialize session."""
        self.config = config
        self.gateway = gateway
        self.fetcher = fetcher or FeedFetcher()
        self.migrations = migrations or DirectoryMigrationSource()
        self.console = console or Console()

    @property
    def current_user_name(self) -> str:
        """Get the logged-in user name ("" when anonymous)."""
        return self.config.current_user_name

    def set_current_user(self, user_name: str) -> None:
        """Log ``user_name`` in and persist the choice."""
        self.config.set_user(user_name)

"""Exception hierarchy for gator.

Every failure raised by a command handler derives from ``GatorError`` so
the CLI can report it and exit non-zero in one place.
"""

from typing import Optional


class GatorError(Exception):
    """Base exception class for all gator errors."""

    pass


class ConfigError(GatorError):
    """Raised when the config file cannot be read or written."""

    pass


# Dispatch and input validation


class UnknownCommandError(GatorError):
    """Raised when no handler is registered under a command name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown command: {name}")


class MissingArgumentError(GatorError):
    """Raised when a command is invoked without its required arguments."""

    def __init__(self, command: str, usage: str):
        self.command = command
        self.usage = usage
        super().__init__(f"usage: {command} {usage}")


# Authentication


class NotLoggedInError(GatorError):
    """Raised when a protected command runs without a current user."""

    def __init__(self) -> None:
        super().__init__("not logged in: run 'login <name>' or 'register <name>' first")


class CurrentUserError(GatorError):
    """Raised when the session's current user cannot be resolved."""

    def __init__(self, name: str, cause: Exception):
        self.name = name
        self.cause = cause
        super().__init__(f"cannot resolve current user {name!r}: {cause}")


# Domain outcomes


class UserNotFoundError(GatorError):
    """Raised when login names a user that does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"user not found: {name}")


class UserAlreadyExistsError(GatorError):
    """Raised when register names a user that already exists."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"user already exists: {name}")


class FeedNotFoundError(GatorError):
    """Raised when no feed has the given URL."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"feed not found: {url}")


class AlreadyFollowingError(GatorError):
    """Raised when a user follows a feed they already follow."""

    def __init__(self, user_name: str, url: str):
        self.user_name = user_name
        self.url = url
        super().__init__(f"{user_name} already follows {url}")


class NotFollowingError(GatorError):
    """Raised when a user unfollows a feed they do not follow."""

    def __init__(self, user_name: str, url: str):
        self.user_name = user_name
        self.url = url
        super().__init__(f"{user_name} does not follow {url}")


# Feed fetching


class FetchError(GatorError):
    """Raised when fetching a remote feed fails.

    Attributes:
        url: The feed URL that failed.
    """

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"failed to fetch {url}: {message}")


class FeedTransportError(FetchError):
    """Raised when the request never produced a response."""

    pass


class FeedStatusError(FetchError):
    """Raised when the server answers with anything but 200.

    Attributes:
        status_code: The HTTP status code received.
    """

    def __init__(self, url: str, status_code: int):
        self.status_code = status_code
        super().__init__(url, f"non-200 response: {status_code}")


class FeedParseError(FetchError):
    """Raised when the response body is not a parseable feed."""

    pass


# Persistence


class PersistenceError(GatorError):
    """Raised when a gateway operation fails.

    Attributes:
        operation: Gateway operation that failed (e.g. 'create_feed').
        entity: Entity or key the operation was acting on, if any.
    """

    def __init__(self, operation: str, cause: Exception, entity: Optional[str] = None):
        self.operation = operation
        self.entity = entity
        self.cause = cause
        target = f" ({entity})" if entity else ""
        super().__init__(f"{operation}{target} failed: {cause}")


class RecordNotFoundError(GatorError):
    """Raised by the gateway when a lookup matches no row."""

    def __init__(self, entity: str, key: str):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")


class DuplicateRecordError(GatorError):
    """Raised by the gateway when a write violates a uniqueness constraint."""

    def __init__(self, entity: str, key: str):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} already exists: {key}")


class MigrationError(GatorError):
    """Raised when a schema migration fails to apply."""

    def __init__(self, name: str, cause: Exception):
        self.name = name
        self.cause = cause
        super().__init__(f"migration {name} failed: {cause}")

"""Command dispatch and authentication.

Two handler shapes exist. A ``Handler`` runs with the session alone; an
``AuthenticatedHandler`` additionally needs the resolved current user.
``require_user`` adapts the second shape into the first once, at
registration time, so the dispatcher only ever sees plain handlers.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, NamedTuple, Sequence, Tuple

from ..exceptions import (
    CurrentUserError,
    GatorError,
    MissingArgumentError,
    NotLoggedInError,
    UnknownCommandError,
)
from ..models import User
from .session import Session

logger = logging.getLogger(__name__)


class Command(NamedTuple):
    """One invocation: command name plus its raw arguments."""

    name: str
    args: Tuple[str, ...] = ()

    @classmethod
    def from_argv(cls, name: str, args: Sequence[str]) -> "Command":
        """Build a command from process arguments."""
        return cls(name, tuple(args))

    def require_args(self, count: int, usage: str) -> Tuple[str, ...]:
        """Return the first ``count`` arguments or fail with usage."""
        if len(self.args) < count:
            raise MissingArgumentError(self.name, usage)
        return self.args[:count]


class Handler(ABC):
    """Command handler that needs only the session."""

    @abstractmethod
    def execute(self, session: Session, command: Command) -> None:
        """Run the command."""
        pass


class AuthenticatedHandler(ABC):
    """Command handler that needs the logged-in user."""

    @abstractmethod
    def execute(self, session: Session, command: Command, user: User) -> None:
        """Run the command on behalf of ``user``."""
        pass


class LoggedInHandler(Handler):
    """Adapter resolving the current user before delegating."""

    def __init__(self, inner: AuthenticatedHandler) -> None:
        """Initialize adapter around ``inner``."""
        self.inner = inner

    def execute(self, session: Session, command: Command) -> None:
        """Resolve the session user and run the inner handler with it."""
        user_name = session.current_user_name
        if not user_name:
            raise NotLoggedInError()

        try:
            user = session.gateway.get_user_by_name(user_name)
        except GatorError as e:
            raise CurrentUserError(user_name, e) from e

        return self.inner.execute(session, command, user)


def require_user(handler: AuthenticatedHandler) -> Handler:
    """Adapt an authenticated handler into a plain one."""
    return LoggedInHandler(handler)


class CommandRegistry:
    """Mapping from command name to handler."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._handlers: Dict[str, Handler] = {}

    def register(self, name: str, handler: Handler) -> None:
        """Bind ``name`` to ``handler``; an existing binding is replaced."""
        if name in self._handlers:
            logger.debug("Replacing handler for %s", name)
        self._handlers[name] = handler

    def names(self) -> List[str]:
        """Get registered command names, sorted."""
        return sorted(self._handlers)

    def run(self, session: Session, command: Command) -> None:
        """Dispatch ``command`` to its handler."""
        handler = self._handlers.get(command.name)
        if handler is None:
            raise UnknownCommandError(command.name)

        logger.debug("Running %s %s", command.name, list(command.args))
        return handler.execute(session, command)

"""Command handlers and dispatch."""

from .feeds import (
    AddFeedHandler,
    AggHandler,
    FeedsHandler,
    FollowHandler,
    FollowingHandler,
    UnfollowHandler,
)
from .registry import (
    AuthenticatedHandler,
    Command,
    CommandRegistry,
    Handler,
    LoggedInHandler,
    require_user,
)
from .session import Session
from .users import LoginHandler, RegisterHandler, ResetHandler, UsersHandler


def build_registry() -> CommandRegistry:
    """Create a registry with every built-in command."""
    registry = CommandRegistry()

    registry.register("login", LoginHandler())
    registry.register("register", RegisterHandler())
    registry.register("reset", ResetHandler())
    registry.register("users", UsersHandler())
    registry.register("agg", AggHandler())
    registry.register("feeds", FeedsHandler())

    # Protected commands
    registry.register("addfeed", require_user(AddFeedHandler()))
    registry.register("follow", require_user(FollowHandler()))
    registry.register("following", require_user(FollowingHandler()))
    registry.register("unfollow", require_user(UnfollowHandler()))

    return registry


__all__ = [
    "AuthenticatedHandler",
    "Command",
    "CommandRegistry",
    "Handler",
    "LoggedInHandler",
    "Session",
    "build_registry",
    "require_user",
]

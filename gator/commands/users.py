"""User and schema commands: login, register, reset, users."""

import logging
from uuid import uuid4

from ..db import reset_schema
from ..exceptions import (
    DuplicateRecordError,
    RecordNotFoundError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from ..models import User, utc_now
from .registry import Command, Handler
from .session import Session

logger = logging.getLogger(__name__)


class LoginHandler(Handler):
    """Switch the current user to an existing one."""

    def execute(self, session: Session, command: Command) -> None:
        (name,) = command.require_args(1, "<name>")

        try:
            user = session.gateway.get_user_by_name(name)
        except RecordNotFoundError as e:
            raise UserNotFoundError(name) from e

        session.set_current_user(user.name)
        session.console.print(f"Logged in as user: {user.name}", highlight=False, markup=False)


class RegisterHandler(Handler):
    """Create a user and log in as them."""

    def execute(self, session: Session, command: Command) -> None:
        (name,) = command.require_args(1, "<name>")

        now = utc_now()
        try:
            user = session.gateway.create_user(
                User(id=uuid4(), created_at=now, updated_at=now, name=name)
            )
        except DuplicateRecordError as e:
            raise UserAlreadyExistsError(name) from e

        logger.info("Created user %s (%s)", user.name, user.id)
        session.set_current_user(user.name)
        session.console.print(
            f"Registered and logged in as user: {user.name}", highlight=False, markup=False
        )


class ResetHandler(Handler):
    """Drop all data and rebuild the schema from migrations."""

    def execute(self, session: Session, command: Command) -> None:
        applied = reset_schema(session.gateway, session.migrations)
        session.console.print(
            f"Database reset: all users deleted, {applied} migrations applied", highlight=False
        )


class UsersHandler(Handler):
    """List users, marking the current one."""

    def execute(self, session: Session, command: Command) -> None:
        current = session.current_user_name
        for user in session.gateway.get_users():
            suffix = " (current)" if user.name == current else ""
            session.console.print(f"* {user.name}{suffix}", highlight=False, markup=False)

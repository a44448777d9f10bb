"""Tests for command dispatch."""

import pytest

from gator.commands import Command, CommandRegistry, Handler, build_registry
from gator.commands.registry import LoggedInHandler
from gator.exceptions import MissingArgumentError, UnknownCommandError


class RecordingHandler(Handler):
    def __init__(self, result=None):
        self.calls = []
        self.result = result

    def execute(self, session, command):
        self.calls.append((session, command))
        return self.result


class FailingHandler(Handler):
    def execute(self, session, command):
        raise RuntimeError("handler blew up")


def test_run_invokes_registered_handler(session):
    registry = CommandRegistry()
    handler = RecordingHandler()
    registry.register("users", handler)

    command = Command("users", ("a", "b"))
    registry.run(session, command)

    assert handler.calls == [(session, command)]


@pytest.mark.parametrize("name", ["bogus", "", "LOGIN", "login "])
def test_unknown_command_names_the_command_and_runs_nothing(session, name):
    registry = CommandRegistry()
    handler = RecordingHandler()
    registry.register("login", handler)

    with pytest.raises(UnknownCommandError) as exc_info:
        registry.run(session, Command(name))

    assert exc_info.value.name == name
    assert str(exc_info.value) == f"unknown command: {name}"
    assert handler.calls == []


def test_register_replaces_existing_binding(session):
    registry = CommandRegistry()
    first, second = RecordingHandler(), RecordingHandler()
    registry.register("agg", first)
    registry.register("agg", second)

    registry.run(session, Command("agg"))

    assert first.calls == []
    assert len(second.calls) == 1


def test_run_propagates_handler_result_and_errors(session):
    registry = CommandRegistry()
    registry.register("ok", RecordingHandler(result="done"))
    registry.register("bad", FailingHandler())

    assert registry.run(session, Command("ok")) == "done"
    with pytest.raises(RuntimeError, match="handler blew up"):
        registry.run(session, Command("bad"))


def test_command_from_argv_keeps_arguments_verbatim():
    command = Command.from_argv("addfeed", ["News", "--weird", "http://example.com/feed"])

    assert command.name == "addfeed"
    assert command.args == ("News", "--weird", "http://example.com/feed")


def test_require_args_reports_usage():
    with pytest.raises(MissingArgumentError, match="usage: addfeed <name> <url>"):
        Command("addfeed", ("News",)).require_args(2, "<name> <url>")

    assert Command("login", ("alice", "extra")).require_args(1, "<name>") == ("alice",)


def test_build_registry_wraps_protected_commands():
    registry = build_registry()

    assert registry.names() == [
        "addfeed",
        "agg",
        "feeds",
        "follow",
        "following",
        "login",
        "register",
        "reset",
        "unfollow",
        "users",
    ]
    protected = {
        name
        for name, handler in registry._handlers.items()
        if isinstance(handler, LoggedInHandler)
    }
    assert protected == {"addfeed", "follow", "following", "unfollow"}

import random

import pytest

from bsptile.core.commands import CommandDispatcher, CommandError, build_default_commands
from bsptile.core.controller import TileController
from bsptile.tiling.node import Internal, Leaf
from bsptile.tiling.rect import Rect


@pytest.fixture
def session():
    ctl = TileController(Rect(0, 0, 800, 600), rng=random.Random(9))
    dispatcher = CommandDispatcher()
    output = []
    build_default_commands(dispatcher, ctl, output=output.append)
    return ctl, dispatcher, output


def test_register_execute_and_unknown():
    dispatcher = CommandDispatcher()
    calls = []

    @dispatcher.command("ping", description="test", usage="<x>")
    def ping(*args):
        calls.append(args)

    assert dispatcher.has("ping")
    assert dispatcher.count == 1
    assert dispatcher.execute("ping", "1")
    assert calls == [("1",)]
    assert not dispatcher.execute("pong")


def test_errors_are_reported_not_raised():
    dispatcher = CommandDispatcher()

    def bad_args(*args):
        raise CommandError("nope")

    def crash(*args):
        raise RuntimeError("boom")

    dispatcher.register("bad", bad_args)
    dispatcher.register("crash", crash)
    assert not dispatcher.execute("bad")
    assert not dispatcher.execute("crash")


def test_execute_line():
    dispatcher = CommandDispatcher()
    calls = []
    dispatcher.register("say", lambda *args: calls.append(args))
    assert dispatcher.execute_line('say "hello world" 2')
    assert calls == [("hello world", "2")]
    assert not dispatcher.execute_line("")
    assert not dispatcher.execute_line('say "unterminated')


def test_replace_command():
    dispatcher = CommandDispatcher()
    dispatcher.register("x", lambda: None, description="first")
    dispatcher.register("x", lambda: None, description="second")
    assert dispatcher.count == 1
    assert dispatcher.get("x").description == "second"


def test_default_commands_registered(session):
    _ctl, dispatcher, _output = session
    for name in ("split_vertical", "split_horizontal", "remove", "move", "drag", "reset", "show", "help"):
        assert dispatcher.has(name)


def test_split_and_remove_commands(session):
    ctl, dispatcher, _output = session
    assert dispatcher.execute_line("split_vertical 0")
    assert dispatcher.execute_line("split_horizontal 1")
    assert len(ctl.leaves) == 3
    assert ctl.root.is_vertical is True
    assert ctl.root.right.is_vertical is False

    assert dispatcher.execute_line("remove 2")
    assert len(ctl.leaves) == 2


def test_bad_tile_arguments(session):
    ctl, dispatcher, _output = session
    assert not dispatcher.execute_line("split_vertical x")
    assert not dispatcher.execute_line("split_vertical 5")
    assert not dispatcher.execute_line("split_vertical")
    assert not dispatcher.execute_line("remove 0")
    assert isinstance(ctl.root, Leaf)


def test_move_command(session):
    ctl, dispatcher, _output = session
    dispatcher.execute_line("split_vertical 0")
    a, b = ctl.leaves
    assert dispatcher.execute_line("move 0 1 left")

    root = ctl.root
    assert root.left is a
    assert isinstance(root.right, Internal)
    assert root.right.is_vertical is True
    assert root.right.left.color == a.color
    assert root.right.right is b


@pytest.mark.parametrize("position, is_vertical", [("top", False), ("bottom", False), ("right", True)])
def test_move_command_sides(session, position, is_vertical):
    ctl, dispatcher, _output = session
    dispatcher.execute_line("split_vertical 0")
    assert dispatcher.execute_line(f"move 0 1 {position}")
    assert ctl.root.right.is_vertical is is_vertical


def test_move_command_bad_position(session):
    ctl, dispatcher, _output = session
    dispatcher.execute_line("split_vertical 0")
    root = ctl.root
    assert not dispatcher.execute_line("move 0 1 sideways")
    assert ctl.root is root


def test_drag_command(session):
    ctl, dispatcher, _output = session
    dispatcher.execute_line("split_vertical 0")
    a, _b = ctl.leaves
    assert dispatcher.execute_line("drag 0 200 0")
    assert ctl.root.left is a
    assert ctl.root.right.color == a.color
    assert not dispatcher.execute_line("drag 0 far 0")


def test_show_help_and_reset(session):
    ctl, dispatcher, output = session
    dispatcher.execute_line("split_vertical 0")
    assert dispatcher.execute_line("show")
    assert "2 tiles" in output[-1]
    assert dispatcher.execute_line("help")
    assert "split_vertical <tile>" in output[-1]
    assert dispatcher.execute_line("reset")
    assert isinstance(ctl.root, Leaf)

"""
bsptile.core.commands - Dispatcher de comandos del layout.

Mapea nombres de comandos en string a acciones del TileController, para
que una sesion de consola, un script o una capa de keybindings manejen
el layout con texto plano como "split_vertical 0" o "move 2 0 left".

Los tiles se indican por su indice en orden de layout (el orden en que
walk() los recorre, izquierda-derecha / arriba-abajo), resuelto contra
el arbol vigente en el momento de ejecutar el comando.

    dispatcher = CommandDispatcher()
    build_default_commands(dispatcher, controller)
    dispatcher.execute("split_vertical", "0")

Tambien se puede usar como decorador:
    @dispatcher.command("show")
    def show():
        ...
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable
from dataclasses import dataclass

log = logging.getLogger(__name__)


# Commands receive their arguments as strings
CommandFn = Callable[..., None]


class CommandError(ValueError):
    """Raised by a command when its arguments are invalid."""
    pass


@dataclass(frozen=True, slots=True)
class Command:
    """Metadata for a registered command."""

    name: str
    fn: CommandFn
    description: str
    usage: str


class CommandDispatcher:
    """Registry that maps command name strings to callables."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    @property
    def count(self) -> int:
        return len(self._commands)

    @property
    def command_names(self) -> list[str]:
        """All registered command names, sorted."""
        return sorted(self._commands.keys())

    def register(
        self,
        name: str,
        fn: CommandFn,
        description: str = "",
        usage: str = "",
    ) -> None:
        """
        Register a command by name.

        If a command with the same name already exists, it is replaced.

        Args:
            name:        Unique command name (e.g. "split_vertical").
            fn:          The callable to invoke with the string arguments.
            description: Human-readable description.
            usage:       Argument synopsis, e.g. "<tile>".
        """
        if name in self._commands:
            log.info("Command replaced: %s", name)

        self._commands[name] = Command(
            name=name,
            fn=fn,
            description=description,
            usage=usage,
        )
        log.debug("Command registered: %s", name)

    def command(
        self,
        name: str,
        description: str = "",
        usage: str = "",
    ) -> Callable[[CommandFn], CommandFn]:
        """Decorator form of register()."""

        def decorator(fn: CommandFn) -> CommandFn:
            self.register(name, fn, description=description, usage=usage)
            return fn

        return decorator

    def get(self, name: str) -> Command | None:
        return self._commands.get(name)

    def has(self, name: str) -> bool:
        return name in self._commands

    def execute(self, name: str, *args: str) -> bool:
        """
        Execute a command by name.

        Returns:
            True if the command was found and ran without error. Argument
            errors and unexpected exceptions are logged, not raised.
        """
        cmd = self._commands.get(name)
        if cmd is None:
            log.warning("Unknown command: %s", name)
            return False

        log.debug("Executing command: %s %s", name, " ".join(args))
        try:
            cmd.fn(*args)
        except CommandError as exc:
            usage = f" (usage: {name} {cmd.usage})" if cmd.usage else ""
            log.warning("%s: %s%s", name, exc, usage)
            return False
        except Exception:
            log.exception("Error executing command: %s", name)
            return False

        return True

    def execute_line(self, line: str) -> bool:
        """Split a text line into name and arguments and execute it."""
        try:
            parts = shlex.split(line)
        except ValueError as exc:
            log.warning("Cannot parse command line %r: %s", line, exc)
            return False
        if not parts:
            return False
        return self.execute(parts[0], *parts[1:])

    def dump_state(self) -> str:
        """Formatted list of all commands, used as the console help text."""
        lines = [f"=== CommandDispatcher: {len(self._commands)} commands ==="]
        for name in self.command_names:
            cmd = self._commands[name]
            synopsis = f"{name} {cmd.usage}".strip()
            desc = f"  {cmd.description}" if cmd.description else ""
            lines.append(f"  {synopsis:<28s}{desc}")
        return "\n".join(lines)


def build_default_commands(
    dispatcher: CommandDispatcher,
    controller: object,
    output: Callable[[str], None] = print,
) -> None:
    """
    Register the built-in layout commands into the dispatcher.

    Args:
        dispatcher: The CommandDispatcher to populate.
        controller: The TileController the commands act on.
        output:     Where "show" and "help" write their text.
    """
    from bsptile.core.controller import TileController
    from bsptile.tiling.node import Leaf
    from bsptile.tiling.rewrite import InsertPosition

    assert isinstance(controller, TileController)

    def _tile(arg: str) -> Leaf:
        try:
            index = int(arg)
        except ValueError:
            raise CommandError(f"tile index must be an integer, got {arg!r}") from None
        leaves = controller.leaves
        if not 0 <= index < len(leaves):
            raise CommandError(f"no tile {index} (have {len(leaves)})")
        return leaves[index]

    def _number(arg: str) -> float:
        try:
            return float(arg)
        except ValueError:
            raise CommandError(f"expected a number, got {arg!r}") from None

    def _position(arg: str) -> InsertPosition:
        try:
            return InsertPosition(arg.lower())
        except ValueError:
            choices = "|".join(p.value for p in InsertPosition)
            raise CommandError(f"position must be one of {choices}, got {arg!r}") from None

    def _arity(args: tuple, count: int) -> None:
        if len(args) != count:
            raise CommandError(f"expected {count} argument(s), got {len(args)}")

    # -- Tile commands -------------------------------------------------
    @dispatcher.command("split_vertical", description="Split a tile into left/right", usage="<tile>")
    def split_vertical(*args: str) -> None:
        _arity(args, 1)
        controller.split_leaf(_tile(args[0]), is_vertical=True)

    @dispatcher.command("split_horizontal", description="Split a tile into top/bottom", usage="<tile>")
    def split_horizontal(*args: str) -> None:
        _arity(args, 1)
        controller.split_leaf(_tile(args[0]), is_vertical=False)

    @dispatcher.command("remove", description="Close a tile", usage="<tile>")
    def remove(*args: str) -> None:
        _arity(args, 1)
        leaf = _tile(args[0])
        if not controller.can_remove(leaf):
            raise CommandError("the last tile cannot be closed")
        controller.remove_leaf(leaf)

    # -- Drag commands -------------------------------------------------
    @dispatcher.command(
        "move",
        description="Drop a tile beside (or onto) another",
        usage="<tile> <target> <left|right|top|bottom|replace>",
    )
    def move(*args: str) -> None:
        _arity(args, 3)
        source, target = _tile(args[0]), _tile(args[1])
        position = _position(args[2])
        controller.on_drag_start(source)
        controller.on_hover(target)
        # The target is the hovered tile; the side comes from how far
        # the source tile itself is pushed
        source_rect = controller.rect_of(source)
        dx = dy = 0.0
        if position == InsertPosition.LEFT:
            dx = -source_rect.w
        elif position == InsertPosition.RIGHT:
            dx = source_rect.w
        elif position == InsertPosition.TOP:
            dy = -source_rect.h
        elif position == InsertPosition.BOTTOM:
            dy = source_rect.h
        controller.on_drag(dx, dy)
        controller.on_drag_end()

    @dispatcher.command(
        "drag",
        description="Drag a tile by a pointer offset and release",
        usage="<tile> <dx> <dy>",
    )
    def drag(*args: str) -> None:
        _arity(args, 3)
        source = _tile(args[0])
        dx, dy = _number(args[1]), _number(args[2])
        controller.on_drag_start(source)
        controller.on_drag(dx, dy)
        controller.on_drag_end()

    # -- Session commands ----------------------------------------------
    @dispatcher.command("reset", description="Start over with a single tile")
    def reset(*args: str) -> None:
        _arity(args, 0)
        controller.reset()

    @dispatcher.command("show", description="Print the current layout")
    def show(*args: str) -> None:
        _arity(args, 0)
        output(controller.dump_state())

    @dispatcher.command("help", description="List commands")
    def help_(*args: str) -> None:
        output(dispatcher.dump_state())

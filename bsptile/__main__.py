"""
bsptile - Entry point.

Run with:  python -m bsptile [--config FILE] [--width W --height H]

Starts a console session on a single BSP canvas. Commands are read from
stdin, one per line (see "help"); the layout is printed after every
command that changes it. "quit" or end of input exits.
"""

from __future__ import annotations

import argparse
import logging
import random
import sys

from bsptile.config.settings import ConfigError, Settings, load_settings
from bsptile.core.commands import CommandDispatcher, build_default_commands
from bsptile.core.controller import TileController
from bsptile.tiling.rect import Rect

log = logging.getLogger("bsptile")


class SafeStreamHandler(logging.StreamHandler):
    """Handler that replaces unencodable characters instead of crashing."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            enc = getattr(self.stream, "encoding", "utf-8") or "utf-8"
            safe = msg.encode(enc, errors="replace").decode(enc, errors="replace")
            self.stream.write(safe + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


def setup_logging(level: int | str = logging.INFO) -> None:
    """Configure logging for the session."""
    fmt = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
    handler = SafeStreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bsptile",
        description="BSP tiling layout console session",
    )
    parser.add_argument("-c", "--config", help="INI settings file")
    parser.add_argument("--width", type=int, help="canvas width in pixels")
    parser.add_argument("--height", type=int, help="canvas height in pixels")
    parser.add_argument("--seed", type=int, help="seed for tile colours")
    parser.add_argument(
        "--monitor",
        action="store_true",
        help="use the primary monitor work area as canvas (Windows only)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def resolve_canvas(args: argparse.Namespace, settings: Settings) -> Rect:
    """Canvas from --monitor, then --width/--height, then the settings."""
    if args.monitor:
        # pywin32 is only installed on Windows
        from bsptile.tiling.monitor import get_canvas

        return get_canvas()

    width = args.width if args.width is not None else settings.canvas_width
    height = args.height if args.height is not None else settings.canvas_height
    if width <= 0 or height <= 0:
        raise ConfigError(f"Canvas size must be positive, got {width}x{height}")
    return Rect(0, 0, width, height)


def build_controller(
    settings: Settings, canvas: Rect, seed: int | None = None
) -> TileController:
    seed = seed if seed is not None else settings.seed
    rng = random.Random(seed) if seed is not None else None
    return TileController(
        canvas,
        rng=rng,
        drop_zone=settings.drop_zone,
        move_tiles=settings.move_tiles,
        empty_color=settings.empty_color,
        gap=settings.gap,
    )


def run_session(dispatcher: CommandDispatcher, stream) -> int:
    """Execute commands from *stream* until "quit" or EOF. Returns failures."""
    failures = 0
    for raw in stream:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line in ("quit", "exit"):
            break
        if not dispatcher.execute_line(line):
            failures += 1
    return failures


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        print(f"bsptile: invalid config: {exc}", file=sys.stderr)
        return 2

    setup_logging(logging.DEBUG if args.verbose else settings.log_level)

    try:
        canvas = resolve_canvas(args, settings)
    except ImportError:
        log.error("--monitor needs pywin32 (Windows only)")
        return 2
    except (ConfigError, RuntimeError) as exc:
        log.error("%s", exc)
        return 2

    controller = build_controller(settings, canvas, args.seed)

    dispatcher = CommandDispatcher()
    build_default_commands(dispatcher, controller)
    controller.on_tree_changed(lambda _old, _new: print(controller.dump_state()))

    print(controller.dump_state())
    print(dispatcher.dump_state())

    try:
        failures = run_session(dispatcher, sys.stdin)
    except KeyboardInterrupt:
        failures = 0

    log.info("Session finished: %d tiles, %d failed commands", len(controller.leaves), failures)
    return 0


if __name__ == "__main__":
    sys.exit(main())

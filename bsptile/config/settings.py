"""
bsptile.config.settings - Configuracion desde un archivo INI.

Todas las claves van en la seccion [bsptile] y todas son opcionales:

    [bsptile]
    canvas_width = 1280
    canvas_height = 720
    gap = 4
    drop_zone = 1.0
    move_tiles = false
    empty_color = #ffffff
    seed =
    log_level = INFO

Si el archivo no existe se usan los valores por defecto. Un valor
invalido lanza ConfigError.
"""

from __future__ import annotations

import configparser
import logging
from dataclasses import dataclass
from pathlib import Path

from bsptile.tiling.color import EMPTY_COLOR, Color, parse_hex
from bsptile.tiling.rect import Rect

log = logging.getLogger(__name__)

SECTION = "bsptile"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised when a configuration file contains an invalid value."""
    pass


@dataclass(frozen=True, slots=True)
class Settings:
    """Runtime settings for the layout engine and the console session."""

    canvas_width: int = 1280
    canvas_height: int = 720
    gap: int = 4
    drop_zone: float = 1.0
    move_tiles: bool = False
    empty_color: Color = EMPTY_COLOR
    seed: int | None = None
    log_level: str = "INFO"

    @property
    def canvas(self) -> Rect:
        return Rect(0, 0, self.canvas_width, self.canvas_height)


def _get_int(cfg: configparser.ConfigParser, key: str, default: int) -> int:
    raw = cfg.get(SECTION, key, fallback="").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{key}: expected an integer, got {raw!r}") from None


def load_settings(path: str | Path | None = None) -> Settings:
    """
    Read settings from *path*.

    Args:
        path: INI file. None or a missing file returns the defaults.

    Raises:
        ConfigError: If a value has the wrong type or is out of range.
    """
    defaults = Settings()
    if path is None:
        return defaults

    path = Path(path)
    if not path.exists():
        log.info("Config file %s not found, using defaults", path)
        return defaults

    cfg = configparser.ConfigParser()
    try:
        cfg.read(path, encoding="utf-8")
    except configparser.Error as exc:
        raise ConfigError(f"Cannot parse {path}: {exc}") from exc

    if not cfg.has_section(SECTION):
        log.warning("Config file %s has no [%s] section", path, SECTION)
        return defaults

    width = _get_int(cfg, "canvas_width", defaults.canvas_width)
    height = _get_int(cfg, "canvas_height", defaults.canvas_height)
    if width <= 0 or height <= 0:
        raise ConfigError(f"Canvas size must be positive, got {width}x{height}")

    gap = _get_int(cfg, "gap", defaults.gap)
    if gap < 0:
        raise ConfigError(f"gap must be >= 0, got {gap}")

    raw_zone = cfg.get(SECTION, "drop_zone", fallback="").strip()
    drop_zone = defaults.drop_zone
    if raw_zone:
        try:
            drop_zone = float(raw_zone)
        except ValueError:
            raise ConfigError(f"drop_zone: expected a number, got {raw_zone!r}") from None
        if not 0.0 < drop_zone <= 1.0:
            raise ConfigError(f"drop_zone must be in (0, 1], got {drop_zone}")

    try:
        move_tiles = cfg.getboolean(SECTION, "move_tiles", fallback=defaults.move_tiles)
    except ValueError as exc:
        raise ConfigError(f"move_tiles: {exc}") from None

    raw_color = cfg.get(SECTION, "empty_color", fallback="").strip()
    empty_color = defaults.empty_color
    if raw_color:
        try:
            empty_color = parse_hex(raw_color)
        except ValueError as exc:
            raise ConfigError(f"empty_color: {exc}") from None

    raw_seed = cfg.get(SECTION, "seed", fallback="").strip()
    seed = _get_int(cfg, "seed", 0) if raw_seed else None

    log_level = cfg.get(SECTION, "log_level", fallback=defaults.log_level).strip().upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {log_level!r}")

    settings = Settings(
        canvas_width=width,
        canvas_height=height,
        gap=gap,
        drop_zone=drop_zone,
        move_tiles=move_tiles,
        empty_color=empty_color,
        seed=seed,
        log_level=log_level,
    )
    log.debug("Settings loaded from %s: %s", path, settings)
    return settings

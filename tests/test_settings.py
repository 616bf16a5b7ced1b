import pytest

from bsptile.config.settings import ConfigError, Settings, load_settings
from bsptile.tiling.color import EMPTY_COLOR
from bsptile.tiling.rect import Rect


def _write(tmp_path, body):
    path = tmp_path / "bsptile.ini"
    path.write_text(body, encoding="utf-8")
    return path


def test_defaults():
    settings = load_settings(None)
    assert settings == Settings()
    assert settings.canvas == Rect(0, 0, 1280, 720)
    assert settings.empty_color == EMPTY_COLOR
    assert settings.seed is None


def test_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "nope.ini") == Settings()


def test_missing_section_gives_defaults(tmp_path):
    assert load_settings(_write(tmp_path, "[other]\nx = 1\n")) == Settings()


def test_full_file(tmp_path):
    path = _write(
        tmp_path,
        "[bsptile]\n"
        "canvas_width = 1920\n"
        "canvas_height = 1040\n"
        "gap = 0\n"
        "drop_zone = 0.5\n"
        "move_tiles = yes\n"
        "empty_color = #202020\n"
        "seed = 42\n"
        "log_level = debug\n",
    )
    settings = load_settings(path)
    assert settings.canvas == Rect(0, 0, 1920, 1040)
    assert settings.gap == 0
    assert settings.drop_zone == 0.5
    assert settings.move_tiles is True
    assert settings.empty_color == (32, 32, 32)
    assert settings.seed == 42
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "line",
    [
        "canvas_width = wide",
        "canvas_height = 0",
        "gap = -1",
        "drop_zone = 0",
        "drop_zone = 1.5",
        "drop_zone = half",
        "move_tiles = maybe",
        "empty_color = red",
        "seed = abc",
        "log_level = loud",
    ],
)
def test_invalid_values(tmp_path, line):
    path = _write(tmp_path, f"[bsptile]\n{line}\n")
    with pytest.raises(ConfigError):
        load_settings(path)


def test_unparseable_file(tmp_path):
    path = _write(tmp_path, "canvas_width = 10\n")
    with pytest.raises(ConfigError):
        load_settings(path)

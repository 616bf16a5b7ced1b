import io
import logging

import pytest

from bsptile import __main__ as cli

REAL_SETUP_LOGGING = cli.setup_logging


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda level=None: None)


def test_session_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("split_vertical 0\n# comment\n\nshow\nquit\nremove 0\n"))
    assert cli.main(["--width", "400", "--height", "300", "--seed", "1"]) == 0

    out = capsys.readouterr().out
    assert "Rect(400x300+0+0)" in out
    assert "=== TileController: 2 tiles ===" in out
    assert "Rect(200x300+200+0)" in out


def test_invalid_config_exits_with_2(tmp_path, capsys):
    path = tmp_path / "bad.ini"
    path.write_text("[bsptile]\ngap = -3\n", encoding="utf-8")
    assert cli.main(["--config", str(path)]) == 2
    assert "invalid config" in capsys.readouterr().err


def test_invalid_canvas_exits_with_2():
    assert cli.main(["--width", "0"]) == 2


def test_run_session_counts_failures():
    ctl = cli.build_controller(cli.Settings(), cli.Rect(0, 0, 100, 100), seed=3)
    dispatcher = cli.CommandDispatcher()
    cli.build_default_commands(dispatcher, ctl, output=lambda text: None)
    failures = cli.run_session(dispatcher, io.StringIO("split_vertical 0\nbogus\nremove 9\nexit\n"))
    assert failures == 2
    assert len(ctl.leaves) == 2


def test_setup_logging_leaves_module_loggers_alone():
    root = logging.getLogger()
    rewrite_log = logging.getLogger("bsptile.tiling.rewrite")
    handlers, level = list(root.handlers), root.level
    try:
        REAL_SETUP_LOGGING(logging.DEBUG)
        assert root.level == logging.DEBUG
        assert rewrite_log.level == logging.NOTSET
        assert rewrite_log.isEnabledFor(logging.DEBUG)
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)

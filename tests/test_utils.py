import logging

from imgloader.utils import resolve_log_level, set_log_level


def test_level_from_argument():
    assert resolve_log_level("debug") == logging.DEBUG
    assert resolve_log_level(" Warning ") == logging.WARNING


def test_level_from_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    assert resolve_log_level() == logging.ERROR


def test_unknown_level_falls_back_to_info(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    assert resolve_log_level("loud") == logging.INFO
    assert resolve_log_level() == logging.INFO


def test_set_log_level_changes_root():
    root = logging.getLogger()
    previous = root.level
    try:
        set_log_level("DEBUG")
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)

# tests/test_logging_config.py
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import logging_config  # noqa: E402


def test_configure_logging_adds_file_handler(monkeypatch, tmp_path):
    captured = {}
    monkeypatch.setattr(logging_config.logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

    logging_config.configure_logging("debug", str(tmp_path / "neo.log"))

    handlers = captured["handlers"]
    assert captured["level"] == logging.DEBUG
    assert any(isinstance(h, logging.FileHandler) for h in handlers)
    for handler in handlers:
        if isinstance(handler, logging.FileHandler):
            handler.close()


def test_configure_logging_unknown_level_falls_back_to_info(monkeypatch):
    captured = {}
    monkeypatch.setattr(logging_config.logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

    logging_config.configure_logging("chatty")

    assert captured["level"] == logging.INFO
    assert len(captured["handlers"]) == 1

import logging

from minecrawl import app
from minecrawl.server import _configure_logging


def test_configure_logging_is_idempotent(tmp_path, monkeypatch):
    monkeypatch.setattr(app, "instance_path", str(tmp_path))
    root = logging.getLogger()
    saved = list(root.handlers)
    try:
        _configure_logging()
        _configure_logging()
        assert len(root.handlers) == 2
        logging.getLogger("minecrawl.test").info("hello")
        assert (tmp_path / "app.log").exists()
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved:
            root.addHandler(h)

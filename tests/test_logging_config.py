import logging

import pytest

from listnest import logging_config
from listnest.config import ConfigManager


@pytest.fixture
def restore_logging():
    """Undo what dictConfig and the debug overrides do to global loggers."""
    root = logging.getLogger()
    saved_level = root.level
    watched = [logging.getLogger(name) for name in (*logging_config._EDITING_LOGGERS, "listnest.core.editor")]
    saved = [(lg, list(lg.handlers), lg.level, lg.propagate) for lg in watched]
    yield
    # Configured handlers are plain Stream/File handlers; pytest's own are subclasses
    for h in list(root.handlers):
        if type(h) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(h)
            h.close()
    root.setLevel(saved_level)
    for lg, handlers, level, propagate in saved:
        for h in list(lg.handlers):
            if h not in handlers:
                lg.removeHandler(h)
                h.close()
        lg.setLevel(level)
        lg.propagate = propagate


def test_setup_logging_uses_config_and_log_dir(tmp_path, monkeypatch, restore_logging):
    log_dir = tmp_path / "logs"
    monkeypatch.setenv("LISTNEST_LOG_DIR", str(log_dir))
    monkeypatch.delenv("LISTNEST_DEBUG_EDITING", raising=False)
    monkeypatch.delenv("LISTNEST_DEBUG_MODULES", raising=False)

    logging_config.setup_logging()

    file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
    assert file_handlers
    assert file_handlers[0].baseFilename == str(log_dir / "app.log")
    assert log_dir.is_dir()


def test_minimal_fallback_when_config_missing(tmp_path, monkeypatch, restore_logging):
    monkeypatch.setenv("LISTNEST_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setattr(ConfigManager, "get_logging_config", lambda self: {})

    logging_config.setup_logging()

    editing = logging.getLogger("listnest.core.services.list_editing_service")
    assert editing.level == logging.INFO
    assert editing.propagate is False


def test_debug_overrides(tmp_path, monkeypatch, restore_logging):
    monkeypatch.setenv("LISTNEST_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("LISTNEST_DEBUG_EDITING", "yes")
    monkeypatch.setenv("LISTNEST_DEBUG_MODULES", "listnest.core.editor, ")

    logging_config.setup_logging()

    for name in (*logging_config._EDITING_LOGGERS, "listnest.core.editor"):
        assert logging.getLogger(name).level == logging.DEBUG

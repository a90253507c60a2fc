import logging

import pytest

from pagescrub_project.src.utils.logging_utils import LOG_FORMAT, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if handler.formatter is not None and handler.formatter._fmt == LOG_FORMAT:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def test_file_handler_creates_directory(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "pagescrub.log"
    setup_logging(logging.DEBUG, str(log_file))

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 2
    assert all(h.formatter._fmt == LOG_FORMAT for h in root.handlers)

    logging.getLogger("pagescrub.test").info("hello")
    for handler in root.handlers:
        handler.flush()
    assert "pagescrub.test - INFO - hello" in log_file.read_text(encoding="utf-8")


def test_repeated_setup_replaces_handlers(restore_root_logger):
    setup_logging()
    setup_logging()
    assert len(restore_root_logger.handlers) == 1

"""Test logging setup."""

import logging
import logging.handlers

import pytest

from movie_details.config import LoggingConfig
from movie_details.infrastructure import setup_logging
from movie_details.infrastructure.logging import QUIET_LOGGERS, LoggerMixin


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest left it."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.mark.unit
def test_setup_logging_with_file(tmp_path, restore_root_logger):
    """A configured file gets a rotating handler and quiet client loggers."""
    log_file = tmp_path / "logs" / "movie_details.log"

    setup_logging(LoggingConfig(level="debug", file=str(log_file), backup_count=2))

    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 2
    file_handler = root_logger.handlers[1]
    assert isinstance(file_handler, logging.handlers.RotatingFileHandler)
    assert file_handler.backupCount == 2
    assert log_file.parent.exists()
    for name in QUIET_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


@pytest.mark.unit
def test_setup_logging_does_not_stack_handlers(restore_root_logger):
    """Calling setup twice keeps a single console handler."""
    setup_logging(LoggingConfig())
    setup_logging(LoggingConfig())

    assert len(logging.getLogger().handlers) == 1


class Worker(LoggerMixin):
    """Class logging through the mixin."""


@pytest.mark.unit
def test_logger_mixin_without_context():
    """Without context the plain class logger is returned."""
    logger = Worker().logger

    assert isinstance(logger, logging.Logger)
    assert logger.name == f"{__name__}.Worker"


@pytest.mark.unit
def test_logger_mixin_tags_movie(caplog):
    """Messages of an instance with a movie context are prefixed."""
    worker = Worker()
    worker.log_context = {"movie_id": 42}

    with caplog.at_level(logging.INFO, logger=f"{__name__}.Worker"):
        worker.logger.info("Loaded")

    assert "[movie 42] Loaded" in caplog.messages


@pytest.mark.unit
def test_page_parts_share_movie_context(page):
    """Every part of a detail page logs with the page's movie."""
    assert page.store.log_context == {"movie_id": 42}
    assert page.rating_workflow.log_context == {"movie_id": 42}
    assert page.aggregator.log_context == {"movie_id": 42}

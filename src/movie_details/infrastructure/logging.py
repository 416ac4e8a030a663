"""Logging configuration and setup."""

import logging
import logging.handlers
from pathlib import Path
from typing import Any, Dict, List, MutableMapping, Tuple, Union

from ..config.models import LoggingConfig

# HTTP client and event loop chatter, quiet unless they warn
QUIET_LOGGERS = ("aiohttp.access", "aiohttp.client", "aiohttp.internal", "asyncio", "urllib3")


def setup_logging(config: LoggingConfig) -> None:
    """Set up logging configuration.

    Args:
        config: Logging configuration.
    """
    level = getattr(logging, config.level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Repeated CLI invocations in one process must not stack handlers
    root_logger.handlers.clear()

    formatter = logging.Formatter(config.format)
    for handler in _build_handlers(config):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.info(f"Logging configured with level {config.level}")


def _build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=config.max_size_mb * 1024 * 1024,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        )

    return handlers


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


class ContextAdapter(logging.LoggerAdapter):
    """Prefixes messages with the page they belong to.

    Several detail pages can be alive at once, each with its own store,
    aggregator and rating workflow. The ``movie_id`` in the context tells
    their log lines apart.
    """

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        movie_id = self.extra.get("movie_id") if self.extra else None
        if movie_id is not None:
            msg = f"[movie {movie_id}] {msg}"
        return msg, kwargs


class LoggerMixin:
    """Mixin class that provides logging functionality.

    Set ``log_context`` (for example ``{"movie_id": 42}``) to have every
    message of the instance tagged with it.
    """

    log_context: Dict[str, Any] = {}

    @property
    def logger(self) -> Union[logging.Logger, ContextAdapter]:
        """Get logger for this class."""
        logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")
        if self.log_context:
            return ContextAdapter(logger, self.log_context)
        return logger

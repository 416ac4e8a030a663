"""Infrastructure module for cross-cutting concerns."""

from .container import Container
from .logging import LoggerMixin, get_logger, setup_logging

__all__ = [
    "Container",
    "LoggerMixin",
    "get_logger",
    "setup_logging",
]

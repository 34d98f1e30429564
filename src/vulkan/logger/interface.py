"""
Logger interface for Vulkan.

Every component (probes, backup stages, routes) receives a Logger by
injection rather than reaching for a module-level logger.
"""

from abc import ABC, abstractmethod
from typing import Any


class Logger(ABC):
    """Abstract logging contract.

    Keyword arguments are structured fields: text output appends them as
    ``key=value`` pairs, JSON output merges them into the record.

    Example:
        logger.info("Backup pushed", trigger="POST /vault/spend", branch="master")
    """

    @abstractmethod
    def debug(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def info(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def warning(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def error(self, message: str, **kwargs: Any) -> None:
        """Log an error message.

        Args:
            message: The message to log
            **kwargs: Structured fields; ``exc_info=True`` attaches the
                active exception's traceback
        """
        pass

    @abstractmethod
    def critical(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def get_session_id(self) -> str:
        """Get the unique identifier of this logger instance (one per process start)."""
        pass

"""
Logging manager for gqlclient.

Installs console and file handlers on the root logger from a
:class:`LoggingConfig` and removes exactly those handlers again on cleanup,
leaving handlers installed by the host application alone.
"""

import logging
import sys
from typing import List, Optional

from ..config.models import LoggingConfig, LogLevel
from .filters import SensitiveDataFilter
from .formatters import ColoredFormatter, StructuredFormatter


def _to_level(level: LogLevel) -> int:
    return logging.getLevelName(level.value)


class LoggingManager:
    """Owns the handlers gqlclient adds to the root logger."""

    def __init__(self) -> None:
        self._installed: List[logging.Handler] = []
        self._masking = SensitiveDataFilter()

    def setup_logging(self, config: LoggingConfig) -> None:
        """
        Configure the root logger from ``config``.

        Calling it again replaces the previous setup.

        Args:
            config: Logging configuration
        """
        self.cleanup()

        level = _to_level(config.level)
        logging.getLogger().setLevel(level)

        if config.enable_console:
            console = logging.StreamHandler(sys.stderr)
            console.setFormatter(
                StructuredFormatter() if config.enable_structured else ColoredFormatter(config.format)
            )
            self._install(console, level)

        if config.file_path is not None:
            config.file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(config.file_path, encoding="utf-8")
            file_handler.setFormatter(
                StructuredFormatter()
                if config.enable_structured
                else logging.Formatter(config.format)
            )
            self._install(file_handler, level)

        for name, component_level in config.component_levels.items():
            logging.getLogger(name).setLevel(_to_level(component_level))

        logging.getLogger(__name__).debug(
            "Logging configured (level=%s, handlers=%d)", config.level.value, len(self._installed)
        )

    def _install(self, handler: logging.Handler, level: int) -> None:
        handler.setLevel(level)
        handler.addFilter(self._masking)
        logging.getLogger().addHandler(handler)
        self._installed.append(handler)

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(name)

    def set_level(self, level: LogLevel, component: Optional[str] = None) -> None:
        """
        Change the level of one component logger, or of the root logger and
        every installed handler when ``component`` is None.
        """
        numeric = _to_level(level)
        if component:
            logging.getLogger(component).setLevel(numeric)
            return

        logging.getLogger().setLevel(numeric)
        for handler in self._installed:
            handler.setLevel(numeric)

    def cleanup(self) -> None:
        """Remove and close the handlers this manager installed."""
        root_logger = logging.getLogger()
        while self._installed:
            handler = self._installed.pop()
            root_logger.removeHandler(handler)
            handler.close()

    def is_configured(self) -> bool:
        return bool(self._installed)


_manager = LoggingManager()


def setup_logging(config: LoggingConfig) -> None:
    """Configure logging through the shared manager."""
    _manager.setup_logging(config)


def get_logger(name: str) -> logging.Logger:
    return _manager.get_logger(name)


def cleanup_logging() -> None:
    _manager.cleanup()

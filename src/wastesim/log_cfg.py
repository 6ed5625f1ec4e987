"""Configure logging for wastesim.

The module exposes the shared :data:`logger` used by every wastesim module and
the :class:`LogConfig` helper that attaches a colored console handler and an
optional file handler to it. Logging is silent until a :class:`LogConfig` is
created with ``enabled=True``.

Levels used by the package
==========================
* ``logging.DEBUG``: process activation and termination, facility seize and
  release, streets taken from the pool.
* ``logging.INFO``: run start and finish.
"""
from __future__ import annotations
import logging
import colorlog

LOGGER_NAME = "wastesim"


class LogConfig:
    """
    Holds the handlers of the ``wastesim`` logger. Creating a new instance
    replaces the handlers of the previous one, so the most recent configuration
    always wins.
    """
    _last_instance = None

    class _LoggingEnabledFilter(logging.Filter):
        def __init__(self, log_instance: LogConfig):
            super().__init__()
            self.log_instance = log_instance

        def filter(self, record):
            return self.log_instance.enabled

    def __init__(self, enabled=False, console_level=logging.INFO, file_level=logging.DEBUG,
                 file_path=None):

        self.enabled = enabled
        """Records pass through the handlers only while this is ``True``."""

        self._logger = logging.getLogger(LOGGER_NAME)
        self._clear_existing_handlers()

        self._console_level = console_level
        self._file_level = file_level
        self._file_path = file_path

        self._console_handler = logging.StreamHandler()

        # the file is only opened for an enabled configuration with a path
        self._file_handler = None
        if self.enabled and self._file_path:
            self._file_handler = logging.FileHandler(self._file_path)

        self._configure_logger()
        LogConfig._last_instance = self

    def _clear_existing_handlers(self) -> None:
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

    @property
    def logger(self) -> logging.Logger:
        """The shared ``wastesim`` logger."""
        return self._logger

    @property
    def console_level(self) -> int:
        return self._console_level

    @console_level.setter
    def console_level(self, value) -> None:
        self._console_level = value
        self._console_handler.setLevel(value)

    @property
    def file_level(self) -> int:
        return self._file_level

    @file_level.setter
    def file_level(self, value) -> None:
        self._file_level = value
        if self._file_handler:
            self._file_handler.setLevel(value)

    @property
    def file_path(self) -> str | None:
        return self._file_path

    def _configure_logger(self):
        self.logger.setLevel(logging.DEBUG)
        filt = self._LoggingEnabledFilter(self)

        console_handler = self._console_handler
        console_handler.setLevel(self.console_level)
        console_handler.addFilter(filt)
        console_handler.setFormatter(
            colorlog.ColoredFormatter(
                '%(log_color)s%(levelname)s:%(name)s:%(message)s',
                log_colors={
                    'DEBUG': 'cyan',
                    'INFO': 'white',
                    'WARNING': 'yellow',
                    'ERROR': 'red',
                    'CRITICAL': 'bold_red'
                }
            )
        )
        self.logger.addHandler(console_handler)

        if self._file_handler:
            file_handler = self._file_handler
            file_handler.setLevel(self.file_level)
            file_handler.setFormatter(logging.Formatter('%(asctime)s:%(levelname)s:%(message)s'))
            file_handler.addFilter(filt)
            self.logger.addHandler(file_handler)

    @classmethod
    def last_instance(cls) -> LogConfig:
        """Return the latest :class:`LogConfig` instance or create a disabled one."""
        if cls._last_instance is None:
            return LogConfig(enabled=False)
        return cls._last_instance


def log_config() -> LogConfig:
    """Return the current :class:`LogConfig` instance."""
    return LogConfig.last_instance()


logger = logging.getLogger(LOGGER_NAME)

"""Structured logging for i18n-sweep.

All modules log through the ``i18n_sweep`` logger hierarchy. The CLI calls
:func:`configure_logging` once; library users can attach their own handlers
to ``logging.getLogger('i18n_sweep')`` instead.
"""

import logging
import sys
from typing import Optional
from pathlib import Path

from .colors import Colors

ROOT_LOGGER_NAME = 'i18n_sweep'


class ColoredFormatter(logging.Formatter):
    """
    Formatter that wraps console messages in ANSI colors.

    File output uses a plain formatter so log files stay free of escape codes.
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.OKCYAN,
        logging.INFO: Colors.OKGREEN,
        logging.WARNING: Colors.WARNING,
        logging.ERROR: Colors.FAIL,
        logging.CRITICAL: Colors.FAIL + Colors.BOLD,
    }

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        """
        Initialize the formatter.

        Args:
            fmt: Format string for log messages
            use_colors: Whether to use ANSI colors
        """
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors if enabled."""
        message = super().format(record)

        if self.use_colors:
            color = self.LEVEL_COLORS.get(record.levelno, '')
            message = f"{color}{message}{Colors.ENDC}"

        return message


class Logger:
    """
    Owner of the ``i18n_sweep`` root logger.

    Keeps exactly one console handler and at most one file handler attached,
    so repeated configuration never duplicates output.
    """

    _instance: Optional['Logger'] = None
    _initialized: bool = False

    def __new__(cls) -> 'Logger':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if Logger._initialized:
            return

        self._logger = logging.getLogger(ROOT_LOGGER_NAME)
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False
        self._logger.handlers = []

        self._console_handler = self._create_console_handler()
        self._logger.addHandler(self._console_handler)

        self._file_handler: Optional[logging.FileHandler] = None

        Logger._initialized = True

    def _create_console_handler(
        self,
        level: int = logging.WARNING,
        use_colors: bool = True
    ) -> logging.StreamHandler:
        """
        Create a console handler writing to stderr.

        Args:
            level: Minimum log level for console output
            use_colors: Whether to use ANSI colors

        Returns:
            Configured StreamHandler
        """
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(ColoredFormatter(fmt='%(message)s', use_colors=use_colors))
        return handler

    def _create_file_handler(
        self,
        file_path: Path,
        level: int = logging.DEBUG
    ) -> logging.FileHandler:
        """
        Create a file handler for logging to file.

        Args:
            file_path: Path to log file
            level: Minimum log level for file output

        Returns:
            Configured FileHandler
        """
        file_path.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.FileHandler(file_path, encoding='utf-8')
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        return handler

    def configure(
        self,
        verbose: bool = False,
        quiet: bool = False,
        log_file: Optional[Path] = None,
        use_colors: bool = True
    ) -> None:
        """
        Configure console verbosity and optional file logging.

        Args:
            verbose: Enable DEBUG console output
            quiet: Only ERROR and above on the console
            log_file: Optional file path for logging
            use_colors: Whether to use colors in console
        """
        if quiet:
            console_level = logging.ERROR
        elif verbose:
            console_level = logging.DEBUG
        else:
            console_level = logging.WARNING

        self._logger.removeHandler(self._console_handler)
        self._console_handler.close()
        self._console_handler = self._create_console_handler(
            level=console_level,
            use_colors=use_colors
        )
        self._logger.addHandler(self._console_handler)

        if log_file:
            if self._file_handler:
                self._logger.removeHandler(self._file_handler)
                self._file_handler.close()
            self._file_handler = self._create_file_handler(Path(log_file))
            self._logger.addHandler(self._file_handler)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def console_handler(self) -> logging.StreamHandler:
        return self._console_handler

    @property
    def file_handler(self) -> Optional[logging.FileHandler]:
        return self._file_handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return the root ``i18n_sweep`` logger or one of its children.

    Args:
        name: Optional child name, e.g. ``'core.scanner'``

    Returns:
        Standard library logger
    """
    Logger()
    if name:
        return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
    return logging.getLogger(ROOT_LOGGER_NAME)


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
    use_colors: bool = True
) -> None:
    """Configure the global logger (see :meth:`Logger.configure`)."""
    Logger().configure(
        verbose=verbose,
        quiet=quiet,
        log_file=log_file,
        use_colors=use_colors
    )


def reset_logger() -> None:
    """Detach and close all handlers (mainly for testing)."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)
    Logger._instance = None
    Logger._initialized = False

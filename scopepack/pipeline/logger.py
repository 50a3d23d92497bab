"""Console and file logging for build execution."""

import logging
import sys
from pathlib import Path
from typing import Optional

from ..io.logging import get_timestamped_log_path


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name for console output."""

    def __init__(self, fmt: str, datefmt: str, colors: dict):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.colors = colors

    def format(self, record):
        original = record.levelname
        color = self.colors.get(original, self.colors["RESET"])
        record.levelname = f"{color}{original}{self.colors['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


class BuildLogger:
    """Structured logging for build execution.

    Console output is colored and concise; when a log directory is given
    a detailed, timestamped log file is written as well. Task events
    (start, completion, failure) are logged in a fixed format.

    Parameters
    ----------
    log_dir : str, optional
        Directory for log files. No file handler if omitted
    log_level : str
        Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_name : str, optional
        Logger name. Default: "scopepack"

    Example
    -------
    >>> logger = BuildLogger("build/logs", log_level="INFO")
    >>> logger.setup()
    >>> logger.log_task_start("package", "Generates a war archive")
    >>> logger.log_task_complete("package", 1.2)
    """

    COLORS = {
        "DEBUG": "\033[0;36m",  # Cyan
        "INFO": "\033[0;34m",  # Blue
        "WARNING": "\033[1;33m",  # Yellow
        "ERROR": "\033[0;31m",  # Red
        "CRITICAL": "\033[1;31m",  # Bold Red
        "RESET": "\033[0m",
    }

    def __init__(
        self,
        log_dir: Optional[str] = None,
        log_level: str = "INFO",
        log_name: str = "scopepack",
    ):
        self.log_dir = Path(log_dir) if log_dir else None
        self.log_file: Optional[Path] = None
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = get_timestamped_log_path(self.log_dir / "build.log")

        self.log_level = getattr(logging, log_level.upper())
        self.logger = logging.getLogger(log_name)
        self.logger.setLevel(self.log_level)
        self.logger.handlers = []

    def setup(self) -> None:
        """Attach the console handler and, if configured, the file handler."""
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(
            ColoredFormatter(
                fmt="%(asctime)s - %(levelname)s - %(message)s",
                datefmt="%H:%M:%S",
                colors=self.COLORS,
            )
        )
        self.logger.addHandler(console_handler)

        if self.log_file is not None:
            file_handler = logging.FileHandler(self.log_file, mode="w")
            file_handler.setLevel(self.log_level)
            file_handler.setFormatter(
                logging.Formatter(
                    fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            self.logger.addHandler(file_handler)

    def log_task_start(self, task_name: str, description: str = "") -> None:
        separator = "=" * 80
        self.logger.info(separator)
        if description:
            self.logger.info(f"> Task :{task_name} - {description}")
        else:
            self.logger.info(f"> Task :{task_name}")
        self.logger.info(separator)

    def log_task_complete(self, task_name: str, duration: float) -> None:
        self.logger.info(
            f"Task :{task_name} completed in {self.format_duration(duration)}"
        )

    def log_task_error(self, task_name: str, error: str) -> None:
        self.logger.error(f"Task :{task_name} failed: {error}")

    def log_info(self, message: str) -> None:
        self.logger.info(message)

    def log_warning(self, message: str) -> None:
        self.logger.warning(message)

    def log_error(self, message: str) -> None:
        self.logger.error(message)

    def log_debug(self, message: str) -> None:
        self.logger.debug(message)

    @staticmethod
    def format_duration(seconds: float) -> str:
        """Format duration in seconds to human-readable string.

        Parameters
        ----------
        seconds : float
            Duration in seconds

        Returns
        -------
        str
            Formatted string (e.g., "45.2s", "1m 23s", "2h 15m")
        """
        if seconds < 60:
            return f"{seconds:.1f}s"
        elif seconds < 3600:
            return f"{int(seconds // 60)}m {int(seconds % 60)}s"
        else:
            return f"{int(seconds // 3600)}h {int((seconds % 3600) // 60)}m"

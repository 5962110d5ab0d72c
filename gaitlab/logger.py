"""
Loguru setup for the gait backend

Two sinks: a console sink for errors only, so server and CLI output stay
readable, and a rotating file sink at the configured level. Both share a
filter that drops repeats from one log call within a short window, which
keeps a burst of skipped entries from one device down to a single line.
"""
from loguru import logger
import sys
import time
import threading
from pathlib import Path
from collections import deque
from typing import Dict, Any, List, Optional, Tuple
from gaitlab.config import settings


LEVELS: Tuple[str, ...] = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


class LogDeduplicationFilter:
    """Drop a record when the same file:line logged within the threshold.

    Only the last `max_history` call sites are remembered.

    Example:
        10:00:01.268 | WARNING | gaitlab.services.ingestion:ingest:88 - Skipping invalid entry 3  <- kept
        10:00:01.270 | WARNING | gaitlab.services.ingestion:ingest:88 - Skipping invalid entry 4  <- dropped
        10:00:02.800 | WARNING | gaitlab.services.ingestion:ingest:88 - Skipping invalid entry 0  <- kept
    """

    def __init__(self, max_history: int = 5, time_threshold_seconds: float = 1.0):
        self.max_history = max_history
        self.time_threshold = time_threshold_seconds
        # (path, line) -> monotonic time of the last record allowed through
        self._seen: deque = deque(maxlen=max_history)
        self._lock = threading.Lock()

    def __call__(self, record: Dict[str, Any]) -> bool:
        site = (record["file"].path, record["line"])
        now = time.monotonic()

        with self._lock:
            for seen_site, seen_at in self._seen:
                if seen_site == site and now - seen_at < self.time_threshold:
                    return False
            self._seen.append((site, now))
            return True


class LoggerManager:
    """Owns the loguru sinks and the file sink level"""

    def __init__(self, config=None):
        config = config or settings.LOGGER
        self.level = self._check_level(config.default_level)
        self.file_path = Path(config.file_path)
        self.rotation = config.rotation
        self.retention = config.retention
        self.dedup_filter: Optional[LogDeduplicationFilter] = None
        if config.filter_enabled:
            self.dedup_filter = LogDeduplicationFilter(
                max_history=config.filter_max_history,
                time_threshold_seconds=config.filter_time_threshold_seconds,
            )
        self.setup_logger()

    @staticmethod
    def _check_level(level: str) -> str:
        name = level.upper()
        if name not in LEVELS:
            raise ValueError(f"Invalid level '{level}'. Choose from: {', '.join(LEVELS)}")
        return name

    def setup_logger(self):
        """(Re)install the console and file sinks"""
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        logger.remove()

        logger.add(
            sys.stdout,
            level="ERROR",
            format=CONSOLE_FORMAT,
            colorize=True,
            filter=self.dedup_filter,
        )
        logger.add(
            str(self.file_path),
            level=self.level,
            format=FILE_FORMAT,
            rotation=self.rotation,
            retention=self.retention,
            compression="zip",
            enqueue=True,
            filter=self.dedup_filter,
        )
        logger.debug(f"Logging to {self.file_path} at {self.level}")

    def set_level(self, level: str) -> str:
        """
        Change the file sink level

        Args:
            level: Any of LEVELS, case-insensitive

        Returns:
            The level now in effect

        Raises:
            ValueError: If level is not a loguru level name
        """
        new_level = self._check_level(level)
        if new_level != self.level:
            previous, self.level = self.level, new_level
            self.setup_logger()
            logger.info(f"Log level changed from {previous} to {new_level}")
        return self.level

    def get_level(self) -> str:
        return self.level

    @staticmethod
    def available_levels() -> List[str]:
        return list(LEVELS)


logger_manager = LoggerManager()

__all__ = ["logger", "logger_manager", "LogDeduplicationFilter", "LoggerManager", "LEVELS"]

"""Logging and console progress for romfetch.

Every component reports through one `EventSink`: a console line for the user
and a matching record in the rotating log file. The sink is shared by all
download workers, so each line/record pair is written under a single lock.
"""
import logging
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .utils.constants import LOG_FILENAME


def setup_logger(log_dir: Path) -> Optional[logging.Logger]:
    """Per-directory logger writing to `romfetch.log` (5 MB x 3 backups)."""
    try:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        logger = logging.getLogger(f'RomFetcher:{log_dir}')
        # Avoid adding duplicate handlers when reusing the same logger
        if not logger.handlers:
            handler = RotatingFileHandler(str(log_dir / LOG_FILENAME), maxBytes=5 * 1024 * 1024,
                                          backupCount=3, encoding='utf-8')
            handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(message)s'))
            logger.addHandler(handler)
            logger.setLevel(logging.INFO)
        return logger
    except OSError:
        # Logging should never block downloader operation
        return None


def close_logger(logger: Optional[logging.Logger]):
    """Close and detach file handlers so temporary directories can be removed."""
    if logger is None:
        return
    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)


class EventSink:
    """Thread-safe console + log reporting handle."""

    def __init__(self, logger: Optional[logging.Logger] = None, echo: bool = True):
        self.logger = logger
        self.echo = echo
        self._lock = threading.Lock()

    def _emit(self, level: int, message: str, console: Optional[str], exc_info: bool = False):
        with self._lock:
            if self.echo and console:
                print(console, flush=True)
            if self.logger:
                self.logger.log(level, message, exc_info=exc_info)

    def info(self, message: str, console: Optional[str] = None):
        self._emit(logging.INFO, message, console)

    def warning(self, message: str, console: Optional[str] = None):
        self._emit(logging.WARNING, message, console if console is not None else f"  ⚠️  {message}")

    def error(self, message: str, console: Optional[str] = None, exc_info: bool = False):
        self._emit(logging.ERROR, message, console if console is not None else f"  ✗ {message}", exc_info)

    def line(self, console: str):
        """Console-only progress line (headers, separators)."""
        self._emit(logging.DEBUG, console, console)

"""
File logging for an attention tracking run.

This module provides a singleton that routes everything logged under the
`attention_engine` package into one file per session:

- DEBUG level to <session_dir>/attention_engine.log
- WARNING level to the console

Usage:
    from attention_engine.telemetry.loggers.session_logger import get_session_logger

    session_log = get_session_logger(session_dir=Path("logs/session_2026-01-15_10-30-00"))
    session_log.logger.info("Tracking started")
    session_log.close()
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "attention_engine"
LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


class SessionLogger:
    """Singleton logger setup for one tracking session."""

    _instance = None
    _initialized = False

    def __new__(cls, session_dir: Optional[Path] = None, console_level: int = logging.WARNING):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, session_dir: Optional[Path] = None, console_level: int = logging.WARNING):
        if self._initialized:
            return

        if session_dir is None:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            self.log_dir = Path("logs") / f"session_{timestamp}"
        else:
            self.log_dir = Path(session_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = self.log_dir / "attention_engine.log"

        self.logger = logging.getLogger(ROOT_LOGGER_NAME)
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        self.logger.handlers.clear()

        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        fh = logging.FileHandler(self.log_file, mode="w")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(formatter)

        ch = logging.StreamHandler()
        ch.setLevel(console_level)
        ch.setFormatter(formatter)

        self.logger.addHandler(fh)
        self.logger.addHandler(ch)

        SessionLogger._initialized = True

    def close(self):
        """Close all handlers and allow a new session to be configured."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)
        self.logger.propagate = True
        self.logger.setLevel(logging.NOTSET)
        SessionLogger._instance = None
        SessionLogger._initialized = False


def get_session_logger(session_dir: Optional[Path] = None, console_level: int = logging.WARNING) -> SessionLogger:
    """Get or create the session logger singleton."""
    return SessionLogger(session_dir=session_dir, console_level=console_level)

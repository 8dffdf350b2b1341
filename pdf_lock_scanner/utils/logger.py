"""
Logging utilities for the PDF Lock Scanner.
"""

import logging
import os
import sys
from typing import Optional


LOGGER_NAME = "pdf_lock_scanner"


class Logger:
    """Configures the named logger used throughout the scanner"""

    def __init__(self, name: str = LOGGER_NAME, log_file: Optional[str] = None,
                 level: int = logging.INFO, console: bool = True):
        """Initialize the logger

        Args:
            name: Logger name
            log_file: Optional file to log to
            level: Logging level
            console: Whether to log to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self.logger.propagate = False

        # Reconfiguring replaces earlier handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        if console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if log_file:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())

    def get_logger(self):
        """Get the logger instance"""
        return self.logger


def get_logger(suffix: Optional[str] = None) -> logging.Logger:
    """Return the package logger or one of its children"""
    if suffix:
        return logging.getLogger(f"{LOGGER_NAME}.{suffix}")
    return logging.getLogger(LOGGER_NAME)

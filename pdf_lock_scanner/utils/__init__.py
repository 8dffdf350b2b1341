"""
Utility modules for the PDF Lock Scanner.
"""

from .config import Config, verbosity_to_level
from .exceptions import (
    PDFLockScannerError,
    ExternalToolError,
    FilesystemAccessError,
    CrackAttemptFailure,
    FatalScanError,
    InvalidPasswordGeneratorError,
    ConfigError,
)
from .logger import Logger, get_logger

"""
Custom exceptions for the PDF Lock Scanner.
"""

class PDFLockScannerError(Exception):
    """Base exception for PDF lock scanner errors"""
    pass


class ExternalToolError(PDFLockScannerError):
    """The external rendering engine could not be run or crashed"""
    pass


class FilesystemAccessError(PDFLockScannerError):
    """A file or directory could not be read during traversal"""
    pass


class CrackAttemptFailure(PDFLockScannerError):
    """A single password trial failed to run"""
    pass


class FatalScanError(PDFLockScannerError):
    """The scan root could not be enumerated"""
    pass


class InvalidPasswordGeneratorError(PDFLockScannerError):
    """Invalid password generator configuration"""
    pass


class ConfigError(PDFLockScannerError):
    """Error in configuration"""
    pass

"""
PDF Lock Scanner

Finds password-protected PDF files under a directory and tries to recover
date-based passwords using Ghostscript as the validity check.
"""

__version__ = "0.1.0"

from pdf_lock_scanner.core.cracker import PDFCracker
from pdf_lock_scanner.core.engine import GhostscriptEngine
from pdf_lock_scanner.core.generator import (
    PasswordGenerator,
    DatePasswordGenerator,
    generate_date_passwords,
)
from pdf_lock_scanner.core.scanner import PDFScanner, ScanResult, find_pdf_files

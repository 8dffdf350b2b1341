"""
Core functionality for the PDF Lock Scanner.
"""

from .cracker import PDFCracker
from .engine import GhostscriptEngine
from .generator import (
    PasswordGenerator,
    DatePasswordGenerator,
    generate_date_passwords,
)
from .progress import ProgressReporter, ConsoleProgress
from .report import generate_report, display_results, write_report
from .scanner import PDFScanner, ScanResult, find_pdf_files

"""
Directory scanning for the PDF Lock Scanner.
"""

import os
from typing import Iterable, List, Optional

from .progress import ProgressReporter
from pdf_lock_scanner.utils.exceptions import (
    FatalScanError,
    FilesystemAccessError,
    PDFLockScannerError,
)
from pdf_lock_scanner.utils.logger import get_logger


DEFAULT_EXTENSIONS = (".pdf",)


class ScanResult:
    """Outcome of checking one PDF"""

    def __init__(self, filename: str, path: str, is_locked: bool = False,
                 error: Optional[str] = None, cracked_password: Optional[str] = None):
        self.filename = filename
        self.path = path
        self.is_locked = is_locked
        self.error = error
        self.cracked_password = cracked_password

    @property
    def is_cracked(self) -> bool:
        return self.is_locked and self.cracked_password is not None

    @property
    def is_still_locked(self) -> bool:
        return self.is_locked and self.cracked_password is None

    @property
    def is_accessible(self) -> bool:
        return not self.is_locked and self.error is None

    def __repr__(self) -> str:
        return (f"ScanResult(filename={self.filename!r}, path={self.path!r}, "
                f"is_locked={self.is_locked}, error={self.error!r}, "
                f"cracked_password={self.cracked_password!r})")


def _normalize_extensions(extensions: Iterable[str]) -> tuple:
    normalized = []
    for ext in extensions:
        ext = ext.lower()
        normalized.append(ext if ext.startswith(".") else f".{ext}")
    return tuple(normalized)


def find_pdf_files(directory: str, extensions: Iterable[str] = DEFAULT_EXTENSIONS,
                   skip_hidden: bool = True,
                   progress: Optional[ProgressReporter] = None) -> List[str]:
    """Recursively collect files with a matching extension

    Args:
        directory: Root directory to scan
        extensions: File extensions to match, case-insensitively
        skip_hidden: Skip files and directories whose name starts with "."
        progress: Optional progress reporter

    Returns:
        Matching file paths in sorted traversal order; symlinked
        directories are not descended into

    Raises:
        FatalScanError: if the root directory cannot be enumerated
    """
    progress = progress or ProgressReporter()
    extensions = _normalize_extensions(extensions)

    if not os.path.isdir(directory):
        raise FatalScanError(f"Not a directory: {directory}")
    try:
        with os.scandir(directory) as it:
            root_entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise FatalScanError(f"Cannot read directory: {directory} - {e}")

    progress.scan_started(directory)
    files = []

    def walk(entries) -> None:
        for entry in entries:
            if skip_hidden and entry.name.startswith("."):
                continue
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                progress.entry_skipped(
                    entry.path, FilesystemAccessError(f"Cannot access: {entry.path} - {e}")
                )
                continue

            if is_dir:
                progress.directory_entered(entry.path)
                try:
                    with os.scandir(entry.path) as it:
                        children = sorted(it, key=lambda child: child.name)
                except OSError as e:
                    progress.entry_skipped(
                        entry.path,
                        FilesystemAccessError(f"Cannot read directory: {entry.path} - {e}"),
                    )
                    continue
                walk(children)
            elif is_file and os.path.splitext(entry.name)[1].lower() in extensions:
                progress.file_found(entry.path)
                files.append(entry.path)

    walk(root_entries)
    progress.scan_finished(len(files))
    return files


class PDFScanner:
    """Classifies every PDF under a directory and optionally cracks locked ones"""

    def __init__(self, engine, cracker=None, progress: Optional[ProgressReporter] = None,
                 extensions: Iterable[str] = DEFAULT_EXTENSIONS, skip_hidden: bool = True,
                 logger=None):
        """Initialize the scanner

        Args:
            engine: Object with a ``check_locked(path) -> bool`` method
            cracker: Optional PDFCracker used when cracking is requested
            progress: Optional progress reporter
            extensions: File extensions to treat as PDFs
            skip_hidden: Skip dot-files and dot-directories
            logger: Optional logger instance
        """
        self.engine = engine
        self.cracker = cracker
        self.progress = progress or ProgressReporter()
        self.extensions = tuple(extensions)
        self.skip_hidden = skip_hidden
        self.logger = logger or get_logger("scanner")

    def find_files(self, directory: str) -> List[str]:
        return find_pdf_files(directory, self.extensions, self.skip_hidden, self.progress)

    def check_file(self, pdf_path: str, crack: bool = False) -> ScanResult:
        """Classify one file; errors end up in the result, never raised"""
        result = ScanResult(os.path.basename(pdf_path), pdf_path)
        self.progress.file_checking(pdf_path)

        try:
            result.is_locked = self.engine.check_locked(pdf_path)
        except PDFLockScannerError as e:
            self.logger.error(f"Could not check {pdf_path}: {e}")
            result.error = str(e)
            return result

        if result.is_locked and crack and self.cracker is not None:
            try:
                result.cracked_password = self.cracker.crack_file(pdf_path)
            except PDFLockScannerError as e:
                self.logger.error(f"Could not crack {pdf_path}: {e}")
                result.error = str(e)
        return result

    def scan_files(self, paths: Iterable[str], crack: bool = False) -> List[ScanResult]:
        return [self.check_file(path, crack) for path in paths]

    def scan(self, directory: str, crack: bool = False) -> List[ScanResult]:
        """Find and classify every PDF under ``directory``

        Raises:
            FatalScanError: if the directory cannot be enumerated
        """
        return self.scan_files(self.find_files(directory), crack)

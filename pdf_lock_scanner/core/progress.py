"""
Progress reporting for the PDF Lock Scanner.

The scanner and cracker report what they are doing through a
ProgressReporter so they never write to the console themselves.
"""

from typing import Optional

from tqdm import tqdm


class ProgressReporter:
    """Receives scan and crack events; every hook is a no-op by default"""

    def scan_started(self, directory: str) -> None:
        pass

    def directory_entered(self, directory: str) -> None:
        pass

    def file_found(self, path: str) -> None:
        pass

    def entry_skipped(self, path: str, error: Exception) -> None:
        pass

    def scan_finished(self, file_count: int) -> None:
        pass

    def file_checking(self, path: str) -> None:
        pass

    def crack_started(self, path: str, total: int) -> None:
        pass

    def crack_progress(self, tried: int, total: int, chunks: int) -> None:
        pass

    def crack_finished(self, path: str, password: Optional[str], total: int) -> None:
        pass


class ConsoleProgress(ProgressReporter):
    """Logs progress and shows a progress bar while cracking"""

    def __init__(self, logger, show_bar: bool = True):
        self.logger = logger
        self.show_bar = show_bar
        self.progress_bar = None

    def scan_started(self, directory: str) -> None:
        self.logger.info(f"Starting scan from: {directory}")

    def directory_entered(self, directory: str) -> None:
        self.logger.info(f"Scanning directory: {directory}")

    def file_found(self, path: str) -> None:
        self.logger.info(f"Found PDF: {path}")

    def entry_skipped(self, path: str, error: Exception) -> None:
        self.logger.warning(f"Skipping {path}: {error}")

    def scan_finished(self, file_count: int) -> None:
        self.logger.info(f"Scan complete. Found {file_count} PDF files total.")

    def file_checking(self, path: str) -> None:
        self.logger.info(f"Checking: {path}")

    def crack_started(self, path: str, total: int) -> None:
        self.logger.info(f"Attempting to crack password for: {path}")
        self.logger.info(f"Generated {total:,} password candidates (prioritized by filename patterns)")
        if self.show_bar:
            self.progress_bar = tqdm(total=total, unit="pw", desc="Trying passwords")

    def crack_progress(self, tried: int, total: int, chunks: int) -> None:
        if self.progress_bar is not None:
            self.progress_bar.update(tried - self.progress_bar.n)
            self.progress_bar.set_postfix(chunks=chunks)
        else:
            self.logger.debug(f"Testing passwords in parallel: {tried}/{total} ({chunks} chunks)")

    def crack_finished(self, path: str, password: Optional[str], total: int) -> None:
        if self.progress_bar is not None:
            self.progress_bar.close()
            self.progress_bar = None
        if password is not None:
            self.logger.info(f"Password found: {password}")
        else:
            self.logger.warning(f"Password not found after {total:,} attempts")

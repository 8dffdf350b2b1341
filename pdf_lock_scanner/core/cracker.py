"""
Main cracker class for the PDF Lock Scanner.

This module provides the PDFCracker class that schedules password attempts
against the external engine in bounded, deterministic waves.
"""

import os
import threading
from concurrent.futures import ALL_COMPLETED, ThreadPoolExecutor, wait
from typing import List, Optional, Sequence

from .generator import DEFAULT_MAX_AGE, DEFAULT_MIN_AGE, DatePasswordGenerator, PasswordGenerator
from .progress import ProgressReporter
from pdf_lock_scanner.utils.logger import get_logger


DEFAULT_CHUNK_SIZE = 100
DEFAULT_MAX_CONCURRENCY = 10


class PDFCracker:
    """Tries candidate passwords against a PDF using a bounded worker pool

    Candidates are split into fixed-size chunks. Up to ``max_concurrency``
    chunks form a wave and are scanned concurrently; the whole wave settles
    before its results are read in chunk order, so the earliest matching
    candidate always wins regardless of which thread finished first.
    """

    def __init__(self, engine, chunk_size: int = DEFAULT_CHUNK_SIZE,
                 max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
                 progress: Optional[ProgressReporter] = None,
                 min_age: int = DEFAULT_MIN_AGE, max_age: int = DEFAULT_MAX_AGE,
                 logger=None):
        """Initialize the cracker

        Args:
            engine: Object with a ``try_password(path, password) -> bool`` method
            chunk_size: Number of candidates scanned sequentially per task
            max_concurrency: Maximum number of chunks (and engine processes) in flight
            progress: Optional progress reporter
            min_age: Youngest owner age used when generating candidates
            max_age: Oldest owner age used when generating candidates
            logger: Optional logger instance
        """
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        if min_age < 0 or max_age < min_age:
            raise ValueError(f"Invalid age range: {min_age}-{max_age}")

        self.engine = engine
        self.chunk_size = chunk_size
        self.max_concurrency = max_concurrency
        self.progress = progress or ProgressReporter()
        self.min_age = min_age
        self.max_age = max_age
        self.logger = logger or get_logger("cracker")

    def _scan_chunk(self, pdf_path: str, chunk: Sequence[str],
                    found_flags: List[threading.Event], index: int) -> Optional[str]:
        """Try each password of one chunk in order

        Stops early once an earlier chunk of the same wave has matched, since
        that chunk's password takes precedence anyway.
        """
        earlier = found_flags[:index]
        for password in chunk:
            if any(flag.is_set() for flag in earlier):
                return None
            if self.engine.try_password(pdf_path, password):
                found_flags[index].set()
                return password
        return None

    def _run_wave(self, executor: ThreadPoolExecutor, pdf_path: str,
                  candidates: Sequence[str], wave_start: int, wave_end: int) -> Optional[str]:
        starts = range(wave_start, wave_end, self.chunk_size)
        found_flags = [threading.Event() for _ in starts]
        futures = [
            executor.submit(
                self._scan_chunk,
                pdf_path,
                candidates[start:min(start + self.chunk_size, wave_end)],
                found_flags,
                i,
            )
            for i, start in enumerate(starts)
        ]

        wait(futures, return_when=ALL_COMPLETED)

        for start, future in zip(starts, futures):
            error = future.exception()
            if error is not None:
                self.logger.debug(f"Chunk starting at {start} failed: {error}")
                continue
            password = future.result()
            if password is not None:
                return password
        return None

    def crack(self, pdf_path: str, candidates: Sequence[str]) -> Optional[str]:
        """Attempt to crack the PDF password with the given candidates

        Args:
            pdf_path: Path to the PDF file
            candidates: Ordered candidate passwords

        Returns:
            The found password or None if not found
        """
        candidates = list(candidates)
        total = len(candidates)
        if not total:
            self.logger.debug(f"No candidates to try for {pdf_path}")
            return None

        self.progress.crack_started(pdf_path, total)
        wave_span = self.chunk_size * self.max_concurrency
        found_password = None

        try:
            with ThreadPoolExecutor(max_workers=self.max_concurrency) as executor:
                for wave_start in range(0, total, wave_span):
                    wave_end = min(wave_start + wave_span, total)
                    found_password = self._run_wave(
                        executor, pdf_path, candidates, wave_start, wave_end
                    )
                    chunks = -(-(wave_end - wave_start) // self.chunk_size)
                    self.progress.crack_progress(wave_end, total, chunks)
                    if found_password is not None:
                        break
        except Exception as e:
            self.logger.error(f"Cracking {pdf_path} stopped unexpectedly: {e}")
            found_password = None
        finally:
            self.progress.crack_finished(pdf_path, found_password, total)

        return found_password

    def crack_file(self, pdf_path: str,
                   generator: Optional[PasswordGenerator] = None) -> Optional[str]:
        """Generate candidates for a PDF and try them

        Without an explicit generator, date candidates are derived from the
        file's name and the configured age range.
        """
        if generator is None:
            generator = DatePasswordGenerator(
                os.path.basename(pdf_path),
                min_age=self.min_age,
                max_age=self.max_age,
            )
        candidates = generator.generate(0, generator.get_total_count())
        return self.crack(pdf_path, candidates)

"""
Ghostscript adapter for the PDF Lock Scanner.

Whether a PDF opens, with or without a password, is decided by Ghostscript
rendering it to the null device. Only the exit status and the diagnostic
stream of each run are inspected.
"""

import os
import subprocess
from typing import List, Optional, Tuple

from pdf_lock_scanner.utils.exceptions import (
    ConfigError,
    CrackAttemptFailure,
    ExternalToolError,
)
from pdf_lock_scanner.utils.logger import get_logger


# Diagnostics Ghostscript emits for encrypted documents
PASSWORD_PHRASES = (
    "This file requires a password",
    "Password required",
    "InvalidPassword",
    "PDF file is encrypted",
    "Couldn't find trailer",
    "This document is password protected",
)

# Markers that reject an attempted password
WRONG_PASSWORD_MARKERS = ("Password", "InvalidPassword")

GENERIC_ERROR_MARKER = "Error"

LOCK_POLICIES = ("phrases", "strict")


def is_locked_output(returncode: int, stderr: str, policy: str = "phrases") -> bool:
    """Classify a password-less run of the engine

    Args:
        returncode: Exit status of the engine
        stderr: Diagnostic output of the engine
        policy: "phrases" only trusts known password diagnostics; "strict"
            also treats a failing run that reports a generic error as locked

    Returns:
        True if the output indicates a password-protected document
    """
    if policy not in LOCK_POLICIES:
        raise ConfigError(f"Unknown lock policy: {policy}")

    if any(phrase in stderr for phrase in PASSWORD_PHRASES):
        return True
    if policy == "strict":
        return returncode != 0 and GENERIC_ERROR_MARKER in stderr
    return False


def is_password_accepted(returncode: int, stderr: str) -> bool:
    """A password works only if the run succeeds without password complaints"""
    return returncode == 0 and not any(marker in stderr for marker in WRONG_PASSWORD_MARKERS)


class GhostscriptEngine:
    """Runs Ghostscript as a black-box validity check"""

    def __init__(self, command: str = "gs", timeout: Optional[float] = None,
                 lock_policy: str = "phrases", logger=None):
        """Initialize the engine

        Args:
            command: Ghostscript executable name or path
            timeout: Optional per-invocation timeout in seconds
            lock_policy: Lock classification rule ("phrases" or "strict")
            logger: Optional logger instance
        """
        if lock_policy not in LOCK_POLICIES:
            raise ConfigError(f"Unknown lock policy: {lock_policy}")

        self.command = command
        self.timeout = timeout
        self.lock_policy = lock_policy
        self.logger = logger or get_logger("engine")

    def build_command(self, pdf_path: str, password: Optional[str] = None) -> List[str]:
        """Command line for a prompt-less, display-less null render"""
        cmd = [
            self.command,
            "-dNODISPLAY",
            "-dQUIET",
            "-dBATCH",
            "-dNOPAUSE",
            "-sDEVICE=nullpage",
            f"-sOutputFile={os.devnull}",
        ]
        if password is not None:
            cmd.append(f"-sPDFPassword={password}")
        cmd.append(pdf_path)
        return cmd

    def _run(self, pdf_path: str, password: Optional[str] = None) -> Tuple[int, str]:
        """Run the engine once and return its exit status and stderr

        Raises:
            ExternalToolError: if the engine cannot be started, times out or
                is killed by a signal
        """
        cmd = self.build_command(pdf_path, password)
        try:
            process = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                universal_newlines=True,
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise ExternalToolError(
                f"{self.command} timed out after {self.timeout}s on {pdf_path}"
            )
        except OSError as e:
            raise ExternalToolError(f"Cannot run {self.command}: {e}")

        if process.returncode < 0:
            raise ExternalToolError(
                f"{self.command} was terminated by signal {-process.returncode} on {pdf_path}"
            )
        return process.returncode, process.stderr or ""

    def check_locked(self, pdf_path: str) -> bool:
        """Check whether the PDF needs a password to open

        Raises:
            ExternalToolError: if the engine could not classify the file
        """
        returncode, stderr = self._run(pdf_path)
        locked = is_locked_output(returncode, stderr, self.lock_policy)
        self.logger.debug(
            f"{pdf_path}: exit={returncode} locked={locked} stderr={stderr.strip()[:200]!r}"
        )
        return locked

    def _attempt(self, pdf_path: str, password: str) -> bool:
        try:
            returncode, stderr = self._run(pdf_path, password)
        except ExternalToolError as e:
            raise CrackAttemptFailure(str(e))
        return is_password_accepted(returncode, stderr)

    def try_password(self, pdf_path: str, password: str) -> bool:
        """Try a single password on the PDF

        Args:
            pdf_path: Path to the PDF file
            password: Password to try

        Returns:
            True if password is correct, False otherwise (including when the
            attempt itself could not run)
        """
        try:
            return self._attempt(pdf_path, password)
        except CrackAttemptFailure as e:
            self.logger.debug(f"Attempt with password {password!r} failed: {e}")
            return False

    def version(self) -> Optional[str]:
        """Ghostscript version string, or None if it cannot be run"""
        try:
            process = subprocess.run(
                [self.command, "--version"],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                universal_newlines=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.SubprocessError):
            return None
        if process.returncode != 0:
            return None
        return process.stdout.strip() or None

import os
import threading
import time

import pytest

from pdf_lock_scanner.core.progress import ProgressReporter
from pdf_lock_scanner.utils.exceptions import ExternalToolError


class FakeEngine:
    """Stands in for Ghostscript; files are identified by basename"""

    command = "fake-gs"

    def __init__(self, passwords=None, locked=(), broken=(), failing_passwords=(),
                 delay=0.0):
        self.passwords = dict(passwords or {})
        self.locked = set(locked) | set(self.passwords)
        self.broken = set(broken)
        self.failing_passwords = set(failing_passwords)
        self.delay = delay
        self.attempts = []
        self.checked = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def check_locked(self, pdf_path):
        name = os.path.basename(pdf_path)
        self.checked.append(name)
        if name in self.broken:
            raise ExternalToolError(f"Cannot run fake-gs on {name}")
        return name in self.locked

    def try_password(self, pdf_path, password):
        with self._lock:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
            self.attempts.append(password)
        try:
            if self.delay:
                time.sleep(self.delay)
            if password in self.failing_passwords:
                raise RuntimeError(f"engine blew up on {password}")
            return self.passwords.get(os.path.basename(pdf_path)) == password
        finally:
            with self._lock:
                self.in_flight -= 1

    def version(self):
        return "10.02.1"


class RecordingProgress(ProgressReporter):
    def __init__(self):
        self.events = []

    def scan_started(self, directory):
        self.events.append(("scan_started", directory))

    def entry_skipped(self, path, error):
        self.events.append(("entry_skipped", path, error))

    def file_found(self, path):
        self.events.append(("file_found", path))

    def scan_finished(self, file_count):
        self.events.append(("scan_finished", file_count))

    def crack_started(self, path, total):
        self.events.append(("crack_started", path, total))

    def crack_progress(self, tried, total, chunks):
        self.events.append(("crack_progress", tried, total, chunks))

    def crack_finished(self, path, password, total):
        self.events.append(("crack_finished", path, password, total))

    def named(self, name):
        return [event for event in self.events if event[0] == name]


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def recording_progress():
    return RecordingProgress()


@pytest.fixture
def pdf_tree(tmp_path):
    """A small directory tree with PDFs, other files and hidden entries"""
    root = tmp_path / "docs"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / ".hidden_dir").mkdir()
    (root / "a.pdf").write_bytes(b"%PDF-1.4")
    (root / "B.PDF").write_bytes(b"%PDF-1.4")
    (root / "notes.txt").write_text("not a pdf")
    (root / ".secret.pdf").write_bytes(b"%PDF-1.4")
    (root / ".hidden_dir" / "inside.pdf").write_bytes(b"%PDF-1.4")
    (root / "sub" / "c.pdf").write_bytes(b"%PDF-1.4")
    (root / "sub" / "deeper" / "d.pdf").write_bytes(b"%PDF-1.4")
    return root

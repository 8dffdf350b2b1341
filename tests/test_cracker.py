import pytest

from conftest import FakeEngine
from pdf_lock_scanner.core.cracker import PDFCracker
from pdf_lock_scanner.core.generator import DatePasswordGenerator
from pdf_lock_scanner.core.progress import ConsoleProgress


PDF = "/data/locked.pdf"


def _candidates(count):
    return [f"pw{i:04d}" for i in range(count)]


def test_empty_candidate_list_never_calls_engine(fake_engine, recording_progress):
    cracker = PDFCracker(fake_engine, progress=recording_progress)
    assert cracker.crack(PDF, []) is None
    assert fake_engine.attempts == []
    assert recording_progress.events == []


def test_finds_password():
    engine = FakeEngine(passwords={"locked.pdf": "pw0137"})
    cracker = PDFCracker(engine, chunk_size=10, max_concurrency=4)
    assert cracker.crack(PDF, _candidates(200)) == "pw0137"


def test_earliest_candidate_wins_within_a_wave():
    class TwoPasswordEngine(FakeEngine):
        def try_password(self, pdf_path, password):
            super().try_password(pdf_path, password)
            return password in ("pw0005", "pw0031")

    # the fourth chunk matches on its second try, the first only on its sixth
    engine = TwoPasswordEngine(delay=0.001)
    cracker = PDFCracker(engine, chunk_size=10, max_concurrency=4)
    for _ in range(5):
        assert cracker.crack(PDF, _candidates(40)) == "pw0005"


def test_earlier_wave_preferred_and_later_waves_not_started():
    class TwoPasswordEngine(FakeEngine):
        def try_password(self, pdf_path, password):
            super().try_password(pdf_path, password)
            return password in ("pw0015", "pw0045")

    engine = TwoPasswordEngine()
    cracker = PDFCracker(engine, chunk_size=10, max_concurrency=2)
    assert cracker.crack(PDF, _candidates(60)) == "pw0015"
    assert all(int(pw[2:]) < 20 for pw in engine.attempts)


def test_failing_chunk_counts_as_no_match():
    engine = FakeEngine(passwords={"locked.pdf": "pw0015"}, failing_passwords={"pw0002"})
    cracker = PDFCracker(engine, chunk_size=10, max_concurrency=4)
    assert cracker.crack(PDF, _candidates(40)) == "pw0015"


def test_exhausts_every_candidate_without_a_match():
    engine = FakeEngine(passwords={"locked.pdf": "not-a-date"})
    cracker = PDFCracker(engine, chunk_size=7, max_concurrency=3)
    candidates = _candidates(100)
    assert cracker.crack(PDF, candidates) is None
    assert sorted(engine.attempts) == candidates


def test_concurrency_is_bounded():
    engine = FakeEngine(delay=0.002)
    cracker = PDFCracker(engine, chunk_size=5, max_concurrency=3)
    assert cracker.crack(PDF, _candidates(60)) is None
    assert 1 <= engine.max_in_flight <= 3


def test_progress_is_reported_per_wave(recording_progress):
    engine = FakeEngine(passwords={"locked.pdf": "pw0250"})
    cracker = PDFCracker(engine, chunk_size=10, max_concurrency=10, progress=recording_progress)
    assert cracker.crack(PDF, _candidates(250 + 1)) == "pw0250"

    assert recording_progress.named("crack_started") == [("crack_started", PDF, 251)]
    assert recording_progress.named("crack_progress") == [
        ("crack_progress", 100, 251, 10),
        ("crack_progress", 200, 251, 10),
        ("crack_progress", 251, 251, 6),
    ]
    assert recording_progress.named("crack_finished") == [("crack_finished", PDF, "pw0250", 251)]


def test_crack_file_uses_filename_hints():
    engine = FakeEngine(passwords={"invoice_19052023.pdf": "19052023"})
    cracker = PDFCracker(engine)
    assert cracker.crack_file("/data/invoice_19052023.pdf") == "19052023"


def test_crack_file_with_explicit_generator():
    engine = FakeEngine(passwords={"x.pdf": "15Aug1995"})
    generator = DatePasswordGenerator(current_year=2025, min_age=30, max_age=30)
    cracker = PDFCracker(engine, chunk_size=50, max_concurrency=2)
    assert cracker.crack_file("/data/x.pdf", generator) == "15Aug1995"


@pytest.mark.parametrize("kwargs", [
    {"chunk_size": 0},
    {"max_concurrency": 0},
    {"min_age": 60, "max_age": 50},
])
def test_invalid_settings(fake_engine, kwargs):
    with pytest.raises(ValueError):
        PDFCracker(fake_engine, **kwargs)


def test_console_progress_without_bar():
    class ListLogger:
        def __init__(self):
            self.messages = []

        def info(self, msg):
            self.messages.append(("info", msg))

        def warning(self, msg):
            self.messages.append(("warning", msg))

        def debug(self, msg):
            self.messages.append(("debug", msg))

    logger = ListLogger()
    engine = FakeEngine()
    cracker = PDFCracker(engine, chunk_size=10, progress=ConsoleProgress(logger, show_bar=False))
    assert cracker.crack(PDF, _candidates(20)) is None
    assert ("warning", "Password not found after 20 attempts") in logger.messages
    assert any(level == "debug" and "20/20" in msg for level, msg in logger.messages)

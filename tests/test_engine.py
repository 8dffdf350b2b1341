import os
import subprocess

import pytest

from pdf_lock_scanner.core import engine as engine_module
from pdf_lock_scanner.core.engine import (
    GhostscriptEngine,
    is_locked_output,
    is_password_accepted,
)
from pdf_lock_scanner.utils.exceptions import ConfigError, ExternalToolError


def fake_run(returncode=0, stderr="", stdout="", exc=None, calls=None):
    def run(cmd, **kwargs):
        if calls is not None:
            calls.append((cmd, kwargs))
        if exc is not None:
            raise exc
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)
    return run


def test_command_is_non_interactive_null_render():
    engine = GhostscriptEngine(command="gs")
    cmd = engine.build_command("/tmp/a.pdf")
    assert cmd[0] == "gs"
    assert cmd[-1] == "/tmp/a.pdf"
    for flag in ("-dNODISPLAY", "-dQUIET", "-dBATCH", "-dNOPAUSE", "-sDEVICE=nullpage"):
        assert flag in cmd
    assert f"-sOutputFile={os.devnull}" in cmd
    assert not any(arg.startswith("-sPDFPassword") for arg in cmd)

    cmd = engine.build_command("/tmp/a.pdf", "01Sep1990")
    assert cmd[-2:] == ["-sPDFPassword=01Sep1990", "/tmp/a.pdf"]


@pytest.mark.parametrize("stderr", [
    "This file requires a password for access.",
    "   **** Error: Password required",
    "Error: /InvalidPassword in --run--",
    "   **** Error: Couldn't find trailer dictionary.",
])
def test_password_phrases_mean_locked(stderr):
    assert is_locked_output(1, stderr, "phrases")
    assert is_locked_output(1, stderr, "strict")


def test_generic_error_only_locked_under_strict_policy():
    stderr = "   **** Error: syntax error in xref table"
    assert not is_locked_output(1, stderr, "phrases")
    assert is_locked_output(1, stderr, "strict")
    assert not is_locked_output(0, stderr, "strict")


def test_clean_run_is_unlocked():
    assert not is_locked_output(0, "", "strict")


def test_unknown_policy_rejected():
    with pytest.raises(ConfigError):
        is_locked_output(0, "", "lenient")
    with pytest.raises(ConfigError):
        GhostscriptEngine(lock_policy="lenient")


@pytest.mark.parametrize("returncode,stderr,expected", [
    (0, "", True),
    (0, "Password did not work", False),
    (0, "/InvalidPassword", False),
    (1, "", False),
])
def test_password_acceptance(returncode, stderr, expected):
    assert is_password_accepted(returncode, stderr) is expected


def test_check_locked_runs_engine_without_password(monkeypatch):
    calls = []
    monkeypatch.setattr(engine_module.subprocess, "run",
                        fake_run(1, "This file requires a password", calls=calls))
    engine = GhostscriptEngine(timeout=5)
    assert engine.check_locked("/tmp/a.pdf") is True

    cmd, kwargs = calls[0]
    assert cmd[-1] == "/tmp/a.pdf"
    assert kwargs["stdin"] is subprocess.DEVNULL
    assert kwargs["timeout"] == 5


def test_check_locked_unlocked_file(monkeypatch):
    monkeypatch.setattr(engine_module.subprocess, "run", fake_run(0, ""))
    assert GhostscriptEngine().check_locked("/tmp/a.pdf") is False


@pytest.mark.parametrize("run", [
    fake_run(exc=FileNotFoundError(2, "No such file or directory: 'gs'")),
    fake_run(exc=subprocess.TimeoutExpired(["gs"], 5)),
    fake_run(returncode=-9),
])
def test_check_locked_raises_external_tool_error(monkeypatch, run):
    monkeypatch.setattr(engine_module.subprocess, "run", run)
    with pytest.raises(ExternalToolError):
        GhostscriptEngine(timeout=5).check_locked("/tmp/a.pdf")


def test_try_password(monkeypatch):
    calls = []
    monkeypatch.setattr(engine_module.subprocess, "run", fake_run(0, "", calls=calls))
    assert GhostscriptEngine().try_password("/tmp/a.pdf", "19052023") is True
    assert "-sPDFPassword=19052023" in calls[0][0]

    monkeypatch.setattr(engine_module.subprocess, "run", fake_run(1, "Error: /InvalidPassword"))
    assert GhostscriptEngine().try_password("/tmp/a.pdf", "nope") is False


@pytest.mark.parametrize("run", [
    fake_run(exc=OSError("too many open files")),
    fake_run(exc=subprocess.TimeoutExpired(["gs"], 1)),
    fake_run(returncode=-11),
])
def test_try_password_never_raises(monkeypatch, run):
    monkeypatch.setattr(engine_module.subprocess, "run", run)
    assert GhostscriptEngine(timeout=1).try_password("/tmp/a.pdf", "x") is False


def test_version(monkeypatch):
    monkeypatch.setattr(engine_module.subprocess, "run", fake_run(0, stdout="10.02.1\n"))
    assert GhostscriptEngine().version() == "10.02.1"

    monkeypatch.setattr(engine_module.subprocess, "run", fake_run(exc=FileNotFoundError()))
    assert GhostscriptEngine().version() is None

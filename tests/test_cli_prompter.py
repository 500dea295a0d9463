from __future__ import annotations

import asyncio
import os
import select
import signal
import subprocess
import sys
import time
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from src.cli.app import app
from src.cli.prompter import TyperPrompter

ROOT = Path(__file__).resolve().parents[1]


def test_prompter_returns_answer(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, object] = {}

    def fake_prompt(message: str, **kwargs):
        seen["message"] = message
        seen.update(kwargs)
        return "myapp"

    monkeypatch.setattr("src.cli.prompter.typer.prompt", fake_prompt)
    answer = asyncio.run(TyperPrompter().ask("name", "App name", "App"))

    assert answer == "myapp"
    assert seen == {"message": "App name", "default": "App", "show_default": True}


def test_prompter_abort_becomes_keyboard_interrupt(monkeypatch: pytest.MonkeyPatch) -> None:
    def aborting_prompt(_message: str, **_kwargs):
        raise typer.Abort()

    monkeypatch.setattr("src.cli.prompter.typer.prompt", aborting_prompt)
    with pytest.raises(KeyboardInterrupt):
        asyncio.run(TyperPrompter().ask("dir", "Directory for new app"))


def test_prompter_restores_sigint_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    during: list[object] = []

    def fake_prompt(_message: str, **_kwargs):
        during.append(signal.getsignal(signal.SIGINT))
        return ""

    def custom_handler(_signum, _frame) -> None:
        pass

    previous = signal.signal(signal.SIGINT, custom_handler)
    try:
        monkeypatch.setattr("src.cli.prompter.typer.prompt", fake_prompt)
        asyncio.run(TyperPrompter().ask("dir", "Directory for new app"))
        assert signal.getsignal(signal.SIGINT) is custom_handler
    finally:
        signal.signal(signal.SIGINT, previous)
    assert during == [signal.default_int_handler]


def test_closed_stdin_at_prompt_aborts_without_creating_anything(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CAPSTAN_SKIP_INSTALL", "1")
    monkeypatch.setenv("CAPSTAN_HOST_OS", "linux")

    res = CliRunner().invoke(app, ["create"], input="")

    assert res.exit_code == 1
    assert "Error:" not in res.output
    assert list(tmp_path.iterdir()) == []


def _read_until(proc: subprocess.Popen, marker: bytes, *, timeout: float) -> bytes:
    assert proc.stdout is not None
    fd = proc.stdout.fileno()
    deadline = time.monotonic() + timeout
    buf = b""
    while marker not in buf:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise AssertionError(f"timed out waiting for {marker!r}; got {buf!r}")
        ready, _, _ = select.select([fd], [], [], remaining)
        if not ready:
            continue
        chunk = os.read(fd, 4096)
        if not chunk:
            raise AssertionError(f"process closed stdout before {marker!r}; got {buf!r}")
        buf += chunk
    return buf


@pytest.mark.skipif(sys.platform == "win32", reason="needs POSIX signals and select on pipes")
def test_ctrl_c_at_directory_prompt_exits(tmp_path: Path) -> None:
    env = {
        **os.environ,
        "PYTHONPATH": str(ROOT),
        "PYTHONUNBUFFERED": "1",
        "CAPSTAN_SKIP_INSTALL": "1",
        "CAPSTAN_HOST_OS": "linux",
    }
    proc = subprocess.Popen(
        [sys.executable, "-m", "src.cli", "create"],
        cwd=str(tmp_path),
        env=env,
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
    )
    try:
        _read_until(proc, b"Directory for new app", timeout=30)
        proc.send_signal(signal.SIGINT)
        rc = proc.wait(timeout=10)
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.wait()
        for stream in (proc.stdin, proc.stdout):
            if stream is not None:
                stream.close()

    assert rc != 0
    assert list(tmp_path.iterdir()) == []

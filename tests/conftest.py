from __future__ import annotations

import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest


class FakeRun:
    """Records subprocess.run calls and answers with scripted exit codes."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.kwargs: list[dict[str, object]] = []
        self.exit_codes: dict[str, int] = {}
        self.missing: set[str] = set()
        self.on_call: Callable[[list[str]], None] | None = None
        self.queued: list[int] = []

    def fail(self, program: str, code: int = 1) -> None:
        self.exit_codes[program] = code

    def queue_exit_codes(self, *codes: int) -> None:
        """Answer the next calls with these exit codes, in order."""
        self.queued.extend(codes)

    def programs(self) -> list[str]:
        return [cmd[0] for cmd in self.calls]

    def __call__(self, cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        if cmd[0] in self.missing:
            raise FileNotFoundError(2, "No such file or directory", cmd[0])
        self.calls.append(list(cmd))
        self.kwargs.append(kwargs)
        if self.on_call is not None:
            self.on_call(cmd)
        code = self.queued.pop(0) if self.queued else self.exit_codes.get(cmd[0], 0)
        return subprocess.CompletedProcess(cmd, code)


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakeRun:
    fake = FakeRun()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for var in ("GCCRS_EXTRA_ARGS", "AR_EXTRA_ARGS", "CARGO_GCCRS_VERBOSE", "RUSTC_WRAPPER"):
        monkeypatch.delenv(var, raising=False)
    # Never pick up the developer's own ~/.cargo-gccrs/config.toml
    monkeypatch.setenv("CARGO_GCCRS_CONFIG", str(tmp_path / "no-config.toml"))

"""Integration-test fixtures for deterministic provider and process behavior."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from cargo_check_i18n.llm.client import TranslationClient


class FakeCargoProcess:
    """Popen-like stand-in for a finished `cargo check` child process."""

    def __init__(self, stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0) -> None:
        """Initialize the fake child's output streams and exit status."""

        self.stdout = io.BytesIO(stdout)
        self.stderr = io.BytesIO(stderr)
        self.returncode = returncode

    def wait(self) -> int:
        """Return the configured exit code."""

        return self.returncode

    def terminate(self) -> None:
        """Accept termination requests."""


@pytest.fixture(autouse=True)
def _mock_translation_calls(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock translation calls in integration tests to avoid network/key requirements."""

    def _mock_translate(self, prompt: str) -> str:
        """Return deterministic placeholder text for translated diagnostics."""

        _ = self
        _ = prompt
        return "integration-mocked-translation"

    monkeypatch.setattr(TranslationClient, "translate", _mock_translate)


@pytest.fixture
def config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide a valid configuration file with rate limiting effectively disabled."""

    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    path = tmp_path / "config" / "config.yaml"
    path.parent.mkdir(parents=True)
    path.write_text('api_key: "test-key"\nrate_limit: 1000\n', encoding="utf-8")
    return path


@pytest.fixture
def fake_cargo_process() -> type[FakeCargoProcess]:
    """Provide the fake child-process class for Popen replacements."""

    return FakeCargoProcess

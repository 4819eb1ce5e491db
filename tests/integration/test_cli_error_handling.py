"""CLI bootstrap and error-handling tests for concise diagnostics."""

from __future__ import annotations

from pathlib import Path

from pytest import MonkeyPatch
from typer.testing import CliRunner

from cargo_check_i18n.cli import app
from cargo_check_i18n.config import CONFIG_TEMPLATE


def _forbid_spawn(*_: object, **__: object) -> None:
    """Fail loudly if the build tool would be started."""

    raise AssertionError("cargo must not be spawned")


def test_check_without_config_writes_template_and_exits_cleanly(
    monkeypatch: MonkeyPatch, tmp_path: Path
) -> None:
    """First run should create the template and exit 0 without running cargo."""

    monkeypatch.setattr("cargo_check_i18n.pipeline.supervisor.subprocess.Popen", _forbid_spawn)
    config_path = tmp_path / "settings" / "config.yaml"
    runner = CliRunner()

    result = runner.invoke(app, ["check", str(tmp_path), "--config", str(config_path)])

    assert result.exit_code == 0
    assert config_path.read_text(encoding="utf-8") == CONFIG_TEMPLATE
    assert "has been created. Please fill in the api_key" in result.output
    assert not (tmp_path / ".cargo-check-i18n-cache.json").exists()


def test_check_reports_missing_credential(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """A template without `api_key` should fail at the config stage with exit code 1."""

    monkeypatch.setattr("cargo_check_i18n.pipeline.supervisor.subprocess.Popen", _forbid_spawn)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["check", str(tmp_path), "--config", str(config_path)])

    assert result.exit_code == 1
    assert "check failed at stage `config`" in result.output
    assert "`api_key` is missing" in result.output


def test_check_reports_spawn_failure(
    monkeypatch: MonkeyPatch, tmp_path: Path, config_path: Path
) -> None:
    """A missing build tool should fail at the spawn stage with exit code 1."""

    def _missing_binary(*_: object, **__: object) -> None:
        """Simulate a missing `cargo` executable."""

        raise FileNotFoundError(2, "No such file or directory", "cargo")

    monkeypatch.setattr("cargo_check_i18n.pipeline.supervisor.subprocess.Popen", _missing_binary)
    runner = CliRunner()

    result = runner.invoke(app, ["check", str(tmp_path), "--config", str(config_path)])

    assert result.exit_code == 1
    assert "check failed at stage `spawn`" in result.output
    assert "Hint: Verify that `cargo` is installed" in result.output


def test_init_writes_template_and_refuses_to_overwrite(tmp_path: Path) -> None:
    """Init should create the template once and require `--force` afterwards."""

    config_path = tmp_path / "config.yaml"
    runner = CliRunner()

    first = runner.invoke(app, ["init", "--config", str(config_path)])
    config_path.write_text("api_key: mine\n", encoding="utf-8")
    second = runner.invoke(app, ["init", "--config", str(config_path)])
    forced = runner.invoke(app, ["init", "--config", str(config_path), "--force"])

    assert first.exit_code == 0
    assert second.exit_code == 1
    assert "already exists" in second.output
    assert forced.exit_code == 0
    assert config_path.read_text(encoding="utf-8") == CONFIG_TEMPLATE

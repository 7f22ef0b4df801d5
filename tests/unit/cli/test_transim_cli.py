"""Unit tests for transim-cli."""

import json
from pathlib import Path

from typer.testing import CliRunner

from transim_cli.main import app
from transim_schemas.exit_codes import ExitCode

runner = CliRunner()

XLIFF = """<?xml version="1.0" encoding="UTF-8"?>
<xliff version="1.2" xmlns="urn:oasis:names:tc:xliff:document:1.2">
  <file original="page" source-language="en" target-language="de">
    <body>
      <trans-unit id="1"><source>Hello</source><target>Hello</target></trans-unit>
    </body>
  </file>
</xliff>
"""


def _write_input(tmp_path: Path) -> Path:
    path = tmp_path / "page.xlf"
    path.write_text(XLIFF, encoding="utf-8")
    return path


def _write_config(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "transim.toml"
    path.write_text(content, encoding="utf-8")
    return path


def _simulate(tmp_path: Path, config: str, *extra: str) -> list[str]:
    return [
        "simulate",
        "--input",
        str(_write_input(tmp_path)),
        "--config",
        str(_write_config(tmp_path, config)),
        "--output",
        str(tmp_path / "out"),
        "--poll-interval",
        "0",
        "--json",
        *extra,
    ]


FAST_MOCK = "[mock]\nstateChangeDelaySeconds = 0\n"


def test_version_command() -> None:
    """Ensure version prints the package version."""
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "transim v0.1.0" in result.stdout


def test_scenarios_json() -> None:
    """Ensure scenarios are listed as JSON."""
    result = runner.invoke(app, ["scenarios", "--json"])

    assert result.exit_code == 0
    response = json.loads(result.stdout)
    assert response["error"] is None
    ids = [item["id"] for item in response["data"]]
    assert "submission-redelivered" in ids
    assert ids == sorted(ids)


def test_scenarios_table() -> None:
    """Ensure scenarios are rendered as a table."""
    result = runner.invoke(app, ["scenarios"])

    assert result.exit_code == 0
    assert "no-operation" in result.stdout


def test_simulate_delivers_translations(tmp_path: Path) -> None:
    """Ensure a submission is downloaded, confirmed and delivered."""
    result = runner.invoke(
        app, _simulate(tmp_path, FAST_MOCK, "--target", "de", "--target", "fr")
    )

    assert result.exit_code == 0
    response = json.loads(result.stdout)
    data = response["data"]
    assert data["final_state"] == "DELIVERED"
    assert data["delivered_locales"] == ["de", "fr"]
    assert [item["state"] for item in data["observations"]] == [
        "COMPLETED",
        "DELIVERED",
    ]
    output = tmp_path / "out" / "page_de.xlf"
    assert str(output) in data["output_files"]
    assert "Ħéļļō" in output.read_text(encoding="utf-8")


def test_simulate_confirms_cancellation(tmp_path: Path) -> None:
    """Ensure a backend cancellation is confirmed."""
    result = runner.invoke(
        app,
        _simulate(
            tmp_path, FAST_MOCK, "--target", "de", "--subject", "states: cancelled"
        ),
    )

    assert result.exit_code == 0
    data = json.loads(result.stdout)["data"]
    assert data["final_state"] == "CANCELLATION_CONFIRMED"
    assert data["delivered_locales"] == []


def test_simulate_writes_facade_log(tmp_path: Path) -> None:
    """Ensure configured log sinks receive facade events."""
    log_path = tmp_path / "logs" / "facade.jsonl"
    config = FAST_MOCK + (
        f'\n[logging]\nsinks = [{{ type = "file", path = "{log_path.as_posix()}" }}]\n'
    )

    result = runner.invoke(app, _simulate(tmp_path, config, "--target", "de"))

    assert result.exit_code == 0
    events = [
        json.loads(line)["event"]
        for line in log_path.read_text(encoding="utf-8").splitlines()
    ]
    assert events[:2] == ["content_uploaded", "submission_submitted"]
    assert "task_downloaded" in events


def test_simulate_times_out(tmp_path: Path) -> None:
    """Ensure a submission without progress hits the timeout."""
    result = runner.invoke(
        app,
        _simulate(
            tmp_path,
            FAST_MOCK,
            "--target",
            "de",
            "--subject",
            "states: other",
            "--timeout",
            "0",
        ),
    )

    assert result.exit_code == ExitCode.TIMEOUT_ERROR
    response = json.loads(result.stdout)
    assert response["error"]["code"] == "timeout"
    assert response["data"] is None


def test_simulate_disabled_facade(tmp_path: Path) -> None:
    """Ensure the disabled facade fails with its exit code."""
    result = runner.invoke(
        app, _simulate(tmp_path, 'type = "disabled"\n', "--target", "de")
    )

    assert result.exit_code == ExitCode.DISABLED_ERROR
    response = json.loads(result.stdout)
    assert response["error"]["code"] == "facade_disabled"
    assert response["error"]["exit_code"] == ExitCode.DISABLED_ERROR


def test_simulate_upload_outage(tmp_path: Path) -> None:
    """Ensure simulated outages map to the communication exit code."""
    config = '[mock]\nscenario = "gcc-outage-on-upload"\n'

    result = runner.invoke(app, _simulate(tmp_path, config, "--target", "de"))

    assert result.exit_code == ExitCode.COMMUNICATION_ERROR
    assert json.loads(result.stdout)["error"]["code"] == "communication_error"


def test_simulate_invalid_mock_settings(tmp_path: Path) -> None:
    """Ensure out-of-range settings are reported as configuration errors."""
    config = "[mock]\nstateChangeDelayOffsetPercentage = 150\n"

    result = runner.invoke(app, _simulate(tmp_path, config, "--target", "de"))

    assert result.exit_code == ExitCode.CONFIG_ERROR
    assert json.loads(result.stdout)["error"]["code"] == "configuration_error"


def test_simulate_missing_config(tmp_path: Path) -> None:
    """Ensure a missing settings file is a config error."""
    result = runner.invoke(
        app,
        [
            "simulate",
            "--input",
            str(_write_input(tmp_path)),
            "--target",
            "de",
            "--config",
            str(tmp_path / "missing.toml"),
            "--json",
        ],
    )

    assert result.exit_code == ExitCode.CONFIG_ERROR
    assert json.loads(result.stdout)["error"]["code"] == "config_error"


def test_simulate_requires_target(tmp_path: Path) -> None:
    """Ensure at least one target locale is required."""
    result = runner.invoke(
        app, ["simulate", "--input", str(_write_input(tmp_path)), "--json"]
    )

    assert result.exit_code == ExitCode.VALIDATION_ERROR
    assert json.loads(result.stdout)["error"]["code"] == "validation_error"


def test_simulate_renders_table(tmp_path: Path) -> None:
    """Ensure the human readable output names the final state."""
    args = _simulate(tmp_path, FAST_MOCK, "--target", "de")
    args.remove("--json")

    result = runner.invoke(app, args)

    assert result.exit_code == 0
    assert "DELIVERED" in result.stdout

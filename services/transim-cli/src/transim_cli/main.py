"""CLI entry point - thin adapter over transim-core."""

from __future__ import annotations

import time
import tomllib
from datetime import UTC, datetime
from pathlib import Path
from typing import BinaryIO, TypeVar

import typer
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from transim_core import VERSION
from transim_core.mock.backend import MockBackend
from transim_core.ports.facade import FacadeError, TranslationFacadeProtocol
from transim_core.ports.log import LogSinkProtocol
from transim_core.providers import open_facade
from transim_core.scenarios import list_scenarios
from transim_io.log_sink import build_log_sink
from transim_schemas.exit_codes import ExitCode, resolve_exit_code
from transim_schemas.models import SubmissionModel, TaskModel
from transim_schemas.primitives import JsonValue, SubmissionState
from transim_schemas.responses import (
    ApiResponse,
    ErrorResponse,
    MetaInfo,
    ScenarioInfo,
    SimulationResult,
    StateObservation,
)
from transim_schemas.settings import LoggingConfig

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to TOML settings with [mock] and [logging] tables",
)
INPUT_OPTION = typer.Option(..., "--input", "-i", help="XLIFF file to translate")
SUBJECT_OPTION = typer.Option(
    "", "--subject", "-s", help="Submission subject, e.g. 'states: other, completed'"
)
TARGET_OPTION = typer.Option(
    None, "--target", "-t", help="Target locale (repeatable)"
)
SOURCE_LOCALE_OPTION = typer.Option(
    "en", "--source-locale", help="Source locale of the content"
)
OUTPUT_OPTION = typer.Option(
    None, "--output", "-o", help="Directory for downloaded translations"
)
POLL_INTERVAL_OPTION = typer.Option(
    1.0, "--poll-interval", min=0.0, help="Seconds between submission queries"
)
TIMEOUT_OPTION = typer.Option(
    600.0, "--timeout", min=0.0, help="Seconds to wait for a terminal state"
)
JSON_OPTION = typer.Option(False, "--json", help="Output result as JSON")

TERMINAL_STATES = frozenset(
    {SubmissionState.DELIVERED, SubmissionState.CANCELLATION_CONFIRMED}
)
DOWNLOADABLE_STATES = frozenset(
    {SubmissionState.COMPLETED, SubmissionState.REDELIVERED}
)

app = typer.Typer(
    help="Simulate an asynchronous translation backend",
    no_args_is_help=True,
)


@app.callback()
def main() -> None:
    """Transim CLI."""


@app.command()
def version() -> None:
    """Display version information."""
    rprint(f"[bold]transim[/bold] v{VERSION}")


@app.command()
def scenarios(json_output: bool = JSON_OPTION) -> None:
    """List registered mock scenarios."""
    infos = [
        ScenarioInfo(id=scenario.id, description=scenario.description)
        for scenario in list_scenarios()
    ]
    if json_output:
        response: ApiResponse[list[ScenarioInfo]] = ApiResponse(
            data=infos, error=None, meta=MetaInfo(timestamp=_now_timestamp())
        )
        print(response.model_dump_json())
        return

    table = Table(title="Mock scenarios")
    table.add_column("Scenario", style="bold")
    table.add_column("Description")
    for info in infos:
        table.add_row(info.id, info.description)
    Console().print(table)


@app.command()
def simulate(
    input_path: Path = INPUT_OPTION,
    target: list[str] | None = TARGET_OPTION,
    config_path: Path | None = CONFIG_OPTION,
    subject: str = SUBJECT_OPTION,
    source_locale: str = SOURCE_LOCALE_OPTION,
    output_dir: Path | None = OUTPUT_OPTION,
    poll_interval: float = POLL_INTERVAL_OPTION,
    timeout: float = TIMEOUT_OPTION,
    json_output: bool = JSON_OPTION,
) -> None:
    """Submit an XLIFF file and poll it until delivered or cancelled.

    Raises:
        typer.Exit: With the exit code of the failure category.
    """
    console = Console(stderr=True, quiet=json_output)
    try:
        if not target:
            raise ValueError("At least one --target locale is required")
        config = _load_config(config_path)
        log_sink = _build_log_sink(config)
        backend = MockBackend(log_sink=log_sink)
        facade = open_facade(config, backend)
        result = _simulate(
            facade,
            input_path=input_path,
            targets=target,
            subject=subject,
            source_locale=source_locale,
            output_dir=output_dir or input_path.parent,
            poll_interval=poll_interval,
            timeout=timeout,
            console=console,
        )
        response: ApiResponse[SimulationResult] = ApiResponse(
            data=result, error=None, meta=MetaInfo(timestamp=_now_timestamp())
        )
    except Exception as exc:
        response = _error_response(_error_from_exception(exc))

    if json_output:
        print(response.model_dump_json())
    elif response.data is not None:
        _render_result(response.data, console=Console())
    if response.error is not None:
        if not json_output:
            rprint(f"[red]Error:[/red] {response.error.message}")
        raise typer.Exit(code=response.error.exit_code or ExitCode.RUNTIME_ERROR)


class _ConfigError(Exception):
    """Raised when the settings file cannot be loaded."""


class _SimulationTimeoutError(Exception):
    """Raised when no terminal state is reached in time."""


def _load_config(config_path: Path | None) -> dict[str, JsonValue]:
    if config_path is None:
        return {}
    if not config_path.exists():
        raise _ConfigError(f"Config not found: {config_path}")
    try:
        with open(config_path, "rb") as handle:
            payload: dict[str, JsonValue] = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise _ConfigError(f"Failed to read config: {exc}") from exc
    return payload


def _build_log_sink(config: dict[str, JsonValue]) -> LogSinkProtocol | None:
    logging_table = config.get("logging")
    if logging_table is None:
        return None
    return build_log_sink(LoggingConfig.model_validate(logging_table, strict=False))


def _simulate(
    facade: TranslationFacadeProtocol,
    *,
    input_path: Path,
    targets: list[str],
    subject: str,
    source_locale: str,
    output_dir: Path,
    poll_interval: float,
    timeout: float,
    console: Console,
) -> SimulationResult:
    handle = facade.upload_content(input_path.name, input_path, source_locale)
    submission_id = facade.submit_submission(
        subject,
        None,
        None,
        None,
        None,
        source_locale,
        {handle: targets},
    )
    output_files: list[str] = []
    delivered: set[str] = set()

    def consume(stream: BinaryIO, task: TaskModel) -> bool:
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / f"{input_path.stem}_{task.locale}{input_path.suffix}"
        path.write_bytes(stream.read())
        output_files.append(str(path))
        delivered.add(task.locale)
        return True

    observations: list[StateObservation] = []
    started = time.monotonic()
    submission: SubmissionModel
    with console.status(f"Polling submission {submission_id}"):
        while True:
            elapsed = time.monotonic() - started
            submission = facade.get_submission(submission_id)
            state = SubmissionState(submission.state)
            if not observations or (
                observations[-1].state != state
                or observations[-1].error != submission.error
            ):
                observations.append(
                    StateObservation(
                        elapsed_seconds=elapsed, state=state, error=submission.error
                    )
                )
                console.log(f"Submission {submission_id}: {state}")
            if state in TERMINAL_STATES:
                break
            if state in DOWNLOADABLE_STATES:
                facade.download_completed_tasks(submission_id, consume)
                facade.confirm_completed_tasks(submission_id, delivered)
            elif state == SubmissionState.CANCELLED:
                facade.confirm_cancelled_tasks(submission_id)
            if elapsed >= timeout:
                raise _SimulationTimeoutError(
                    f"Submission {submission_id} still {state} after {timeout:g}s"
                )
            time.sleep(poll_interval)

    return SimulationResult(
        submission_id=submission_id,
        final_state=SubmissionState(submission.state),
        observations=observations,
        delivered_locales=sorted(delivered),
        output_files=output_files,
    )


def _render_result(result: SimulationResult, *, console: Console) -> None:
    table = Table(title=f"Submission {result.submission_id}")
    table.add_column("Elapsed", justify="right")
    table.add_column("State")
    table.add_column("Error")
    for observation in result.observations:
        table.add_row(
            f"{observation.elapsed_seconds:.1f}s",
            str(observation.state),
            "yes" if observation.error else "",
        )
    console.print(table)
    console.print(f"[bold]Final state:[/bold] {result.final_state}")
    if result.delivered_locales:
        console.print(
            f"[bold]Delivered:[/bold] {', '.join(result.delivered_locales)}"
        )
    for path in result.output_files:
        console.print(f"  {path}")


def _now_timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


ResponseT = TypeVar("ResponseT")


def _error_response(error: ErrorResponse) -> ApiResponse[ResponseT]:
    return ApiResponse(
        data=None,
        error=error,
        meta=MetaInfo(timestamp=_now_timestamp()),
    )


def _with_exit_code(error: ErrorResponse) -> ErrorResponse:
    error.exit_code = int(resolve_exit_code(error.code))
    return error


def _error_from_exception(exc: Exception) -> ErrorResponse:
    if isinstance(exc, FacadeError):
        return exc.info.to_error_response()
    if isinstance(exc, ValidationError):
        message = "Config validation failed"
        errors = exc.errors()
        if errors:
            first = errors[0]
            loc = first.get("loc", [])
            label = ".".join(str(part) for part in loc) if loc else ""
            detail = first.get("msg", "")
            if label and detail:
                message = f"Config validation failed: {label} - {detail}"
            elif detail:
                message = f"Config validation failed: {detail}"
        return _with_exit_code(
            ErrorResponse(code="validation_error", message=message, details=None)
        )
    if isinstance(exc, _ConfigError):
        return _with_exit_code(
            ErrorResponse(code="config_error", message=str(exc), details=None)
        )
    if isinstance(exc, _SimulationTimeoutError):
        return _with_exit_code(
            ErrorResponse(code="timeout", message=str(exc), details=None)
        )
    if isinstance(exc, ValueError):
        return _with_exit_code(
            ErrorResponse(code="validation_error", message=str(exc), details=None)
        )
    return _with_exit_code(
        ErrorResponse(code="runtime_error", message=str(exc) or type(exc).__name__)
    )


if __name__ == "__main__":
    app()

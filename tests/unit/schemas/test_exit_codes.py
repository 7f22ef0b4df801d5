"""Unit tests for the exit code registry."""

import pytest

from transim_schemas.exit_codes import (
    ERROR_CODE_TO_EXIT_CODE,
    ExitCode,
    resolve_exit_code,
)


@pytest.mark.parametrize(
    ("error_code", "expected"),
    [
        ("config_error", ExitCode.CONFIG_ERROR),
        ("configuration_error", ExitCode.CONFIG_ERROR),
        ("validation_error", ExitCode.VALIDATION_ERROR),
        ("submission_not_found", ExitCode.NOT_FOUND_ERROR),
        ("invalid_content", ExitCode.CONTENT_ERROR),
        ("timeout", ExitCode.TIMEOUT_ERROR),
        ("communication_error", ExitCode.COMMUNICATION_ERROR),
        ("facade_disabled", ExitCode.DISABLED_ERROR),
    ],
)
def test_resolve_exit_code(error_code: str, expected: ExitCode) -> None:
    """Ensure registered error codes resolve to their category."""
    assert resolve_exit_code(error_code) == expected


def test_unknown_error_code_is_runtime_error() -> None:
    """Ensure unknown error codes fall back to the runtime exit code."""
    assert resolve_exit_code("something_else") == ExitCode.RUNTIME_ERROR


def test_exit_codes_are_never_success() -> None:
    """Ensure no error code maps to a successful exit."""
    assert ExitCode.SUCCESS not in ERROR_CODE_TO_EXIT_CODE.values()

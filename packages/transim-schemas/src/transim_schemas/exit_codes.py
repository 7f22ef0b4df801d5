"""CLI exit code taxonomy and error-to-exit-code registry.

Exit code ranges:
- 0: Success
- 10-19: Client/input errors (config, validation)
- 20-29: Domain errors (not found, invalid content)
- 30-39: Simulated backend errors (communication)
- 99: Unexpected runtime errors
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """CLI exit codes by failure category."""

    SUCCESS = 0
    CONFIG_ERROR = 10
    VALIDATION_ERROR = 11
    NOT_FOUND_ERROR = 20
    CONTENT_ERROR = 21
    TIMEOUT_ERROR = 22
    COMMUNICATION_ERROR = 30
    DISABLED_ERROR = 31
    RUNTIME_ERROR = 99


ERROR_CODE_TO_EXIT_CODE: dict[str, ExitCode] = {
    "config_error": ExitCode.CONFIG_ERROR,
    "validation_error": ExitCode.VALIDATION_ERROR,
    "runtime_error": ExitCode.RUNTIME_ERROR,
    "timeout": ExitCode.TIMEOUT_ERROR,
    "submission_not_found": ExitCode.NOT_FOUND_ERROR,
    "content_not_found": ExitCode.NOT_FOUND_ERROR,
    "content_io_error": ExitCode.CONTENT_ERROR,
    "invalid_content": ExitCode.CONTENT_ERROR,
    "communication_error": ExitCode.COMMUNICATION_ERROR,
    "configuration_error": ExitCode.CONFIG_ERROR,
    "facade_disabled": ExitCode.DISABLED_ERROR,
}


def resolve_exit_code(error_code: str) -> ExitCode:
    """Resolve the exit code for an error code.

    Args:
        error_code: Error code string from an ErrorResponse.

    Returns:
        ExitCode: Registered exit code, RUNTIME_ERROR if unknown.
    """
    return ERROR_CODE_TO_EXIT_CODE.get(error_code, ExitCode.RUNTIME_ERROR)

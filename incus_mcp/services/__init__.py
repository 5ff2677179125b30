"""Services for Incus MCP."""

from incus_mcp.services.cli import IncusCLI
from incus_mcp.services.decode import (
    check_exit,
    combined_output,
    decode_json,
    decode_text,
    diagnostic_text,
    with_json_format,
)
from incus_mcp.services.errors import (
    CommandTimeoutError,
    DecodeError,
    ErrorKind,
    IncusToolError,
    InputValidationError,
    NonZeroExitError,
    UnavailableError,
)
from incus_mcp.services.executors import (
    DEFAULT_TIMEOUT_MS,
    EXEC_TIMEOUT_MS,
    LAUNCH_TIMEOUT_MS,
    run_process,
)
from incus_mcp.services.probe import PROBE_TIMEOUT_MS, AvailabilityProber

__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "EXEC_TIMEOUT_MS",
    "LAUNCH_TIMEOUT_MS",
    "PROBE_TIMEOUT_MS",
    "AvailabilityProber",
    "CommandTimeoutError",
    "DecodeError",
    "ErrorKind",
    "IncusCLI",
    "IncusToolError",
    "InputValidationError",
    "NonZeroExitError",
    "UnavailableError",
    "check_exit",
    "combined_output",
    "decode_json",
    "decode_text",
    "diagnostic_text",
    "run_process",
    "with_json_format",
]

"""Application settings from environment variables.

Centralized environment variable parsing and validation. Settings are
read once at startup and never reloaded.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

PREFIX = "INCUS_MCP_"
DEFAULT_LOG_FILE = "incus-mcp.log"
_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Application settings from environment.

    Every setting reads ``INCUS_MCP_<NAME>`` first and, where one exists,
    falls back to the unprefixed legacy name (``STRICT_PROJECTS``,
    ``LOG_LEVEL``...).
    """

    # Projects
    strict_projects: bool = field(default=False)

    # incus
    incus_binary: str = field(default="incus")

    # Transport
    transport: str = field(default="stdio")
    http_host: str = field(default="127.0.0.1")
    http_port: int = field(default=8000)

    # Logging
    log_level: str = field(default="INFO")
    log_file: Path | None = field(default=None)
    log_truncate: bool = field(default=True)
    log_max_age_hours: float = field(default=24.0)
    log_to_stderr: bool = field(default=True)
    log_colors: bool = field(default=True)
    log_payloads: bool = field(default=False)
    slow_threshold_ms: int = field(default=1000)
    include_traceback: bool = field(default=False)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """Load settings from environment variables.

        Args:
            env: Mapping to read instead of ``os.environ`` (for tests)

        Returns:
            Settings instance with values from environment
        """
        env = os.environ if env is None else env
        return cls(
            strict_projects=cls._get_bool(env, "STRICT_PROJECTS", False, legacy=True),
            incus_binary=cls._get_str(env, "BINARY", "incus"),
            transport=cls._get_transport(env),
            http_host=cls._get_str(env, "HTTP_HOST", "127.0.0.1"),
            http_port=cls._get_int(env, "HTTP_PORT", 8000),
            log_level=cls._get_str(env, "LOG_LEVEL", "INFO", legacy=True).upper(),
            log_file=cls._get_log_file(env),
            log_truncate=cls._get_bool(env, "LOG_TRUNCATE", True, legacy=True),
            log_max_age_hours=cls._get_float(env, "LOG_MAX_AGE_HOURS", 24.0, legacy=True),
            log_to_stderr=cls._get_bool(env, "LOG_TO_STDERR", True, legacy=True),
            log_colors=cls._get_bool(env, "LOG_COLORS", True),
            log_payloads=cls._get_bool(env, "LOG_PAYLOADS", False),
            slow_threshold_ms=cls._get_int(env, "SLOW_THRESHOLD_MS", 1000),
            include_traceback=cls._get_bool(env, "INCLUDE_TRACEBACK", False),
        )

    @staticmethod
    def _lookup(env: Mapping[str, str], name: str, legacy: bool) -> str | None:
        """Prefixed value, else the legacy unprefixed one. Empty means unset."""
        value = env.get(PREFIX + name)
        if not value and legacy:
            value = env.get(name)
        return value or None

    @classmethod
    def _get_str(
        cls, env: Mapping[str, str], name: str, default: str, legacy: bool = False
    ) -> str:
        return cls._lookup(env, name, legacy) or default

    @classmethod
    def _get_int(
        cls, env: Mapping[str, str], name: str, default: int, legacy: bool = False
    ) -> int:
        value = cls._lookup(env, name, legacy)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", name, value, default)
            return default

    @classmethod
    def _get_float(
        cls, env: Mapping[str, str], name: str, default: float, legacy: bool = False
    ) -> float:
        value = cls._lookup(env, name, legacy)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            logger.warning("Invalid number for %s: %s, using default %s", name, value, default)
            return default

    @classmethod
    def _get_bool(
        cls, env: Mapping[str, str], name: str, default: bool, legacy: bool = False
    ) -> bool:
        value = cls._lookup(env, name, legacy)
        if value is None:
            return default
        return value.lower() in _TRUE_VALUES

    @classmethod
    def _get_transport(cls, env: Mapping[str, str]) -> str:
        transport = cls._get_str(env, "TRANSPORT", "stdio").lower()
        if transport in ("http", "stdio"):
            return transport
        logger.warning("Unknown transport %r, using stdio", transport)
        return "stdio"

    @classmethod
    def _get_log_file(cls, env: Mapping[str, str]) -> Path | None:
        """Resolve the log file path.

        A relative ``LOG_FILE`` is placed under ``LOG_DIR`` (or the working
        directory). ``LOG_DIR`` alone logs to ``incus-mcp.log`` inside it.
        Neither set disables file logging.
        """
        log_file = cls._lookup(env, "LOG_FILE", legacy=True)
        log_dir = cls._lookup(env, "LOG_DIR", legacy=True)
        if not log_file and not log_dir:
            return None

        base = Path(log_dir).expanduser().resolve() if log_dir else Path.cwd()
        if not log_file:
            return base / DEFAULT_LOG_FILE

        path = Path(log_file).expanduser()
        if path.is_absolute():
            return path
        return base / path

"""Colorful console logging formatter."""

import logging
import re
from datetime import datetime

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "white": "\033[37m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

# Component colors for logger names
COMPONENT_COLORS = {
    "incus_mcp.server": COLORS["bright_cyan"],
    "incus_mcp.services": COLORS["bright_magenta"],
    "incus_mcp.tools": COLORS["bright_blue"],
    "incus_mcp.middleware": COLORS["yellow"],
    "incus_mcp.config": COLORS["green"],
    "default": COLORS["white"],
}

_DURATION_PATTERN = re.compile(r"(\d+\.?\d*ms)")
_TOOL_PATTERN = re.compile(r"(TOOL: [\w-]+)")
_INCUS_PATTERN = re.compile(r"(\bincus(?: [\w-]+){1,3})")


class ColorfulFormatter(logging.Formatter):
    """Colorful log formatter with local timestamps and component columns."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _colorize(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def _get_component_color(self, name: str) -> str:
        for prefix, color in COMPONENT_COLORS.items():
            if prefix != "default" and name.startswith(prefix):
                return color
        return COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created).astimezone()
        return f"{dt:%H:%M:%S}.{int(record.msecs):03d} {dt:%m/%d}"

    def _format_level(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelname, COLORS["white"])
        return self._colorize(f"{record.levelname:<8}", color)

    def _format_component(self, record: logging.LogRecord) -> str:
        name = record.name.removeprefix("incus_mcp.")
        color = self._get_component_color(record.name)
        return self._colorize(f"{name:<20}", color)

    def _highlight_message(self, message: str) -> str:
        """Highlight tool names, incus commands and durations."""
        if not self.use_colors:
            return message
        reset = COLORS["reset"]
        message = _TOOL_PATTERN.sub(f"{COLORS['bright_cyan']}\\1{reset}", message)
        message = _INCUS_PATTERN.sub(f"{COLORS['bright_magenta']}\\1{reset}", message)
        return _DURATION_PATTERN.sub(f"{COLORS['bright_yellow']}\\1{reset}", message)

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self._colorize(self._format_timestamp(record), COLORS["dim"])
        level = self._format_level(record)
        component = self._format_component(record)
        sep = self._colorize("|", COLORS["dim"])
        message = self._highlight_message(record.getMessage())

        line = f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class MCPRequestFormatter(ColorfulFormatter):
    """Extended formatter with activity markers for MCP traffic."""

    # Checked in order; first match wins
    MARKERS = (
        (("starting", "ready"), ">>>", "bright_green"),
        (("shutting down", "shutdown"), "<<<", "bright_red"),
        (("error", "failed", "timed out"), "!!", "bright_red"),
        (("warning", "slow", "killing"), "!", "bright_yellow"),
        (("completed", "available"), "OK", "bright_green"),
        (("running", "registered"), "+", "bright_cyan"),
    )

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        if not self.use_colors:
            return base

        message = record.getMessage().lower()
        for words, marker, color in self.MARKERS:
            if any(word in message for word in words):
                return f"{COLORS[color]}{marker:<3}{COLORS['reset']} {base}"
        return f"    {base}"

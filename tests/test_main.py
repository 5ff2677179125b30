"""Tests for main entry point."""

from unittest.mock import MagicMock, patch

from incus_mcp.config import Settings


class TestMain:
    """Tests for __main__ module."""

    def test_runs_with_stdio_by_default(self) -> None:
        """Server runs with STDIO transport by default."""
        mock_mcp = MagicMock()

        with patch("incus_mcp.__main__.mcp", mock_mcp), \
             patch("incus_mcp.__main__.settings", Settings()):
            from incus_mcp.__main__ import run_server
            run_server()

        mock_mcp.run.assert_called_once_with(transport="stdio")

    def test_runs_with_http_when_configured(self) -> None:
        """Server runs with HTTP transport on the configured address."""
        mock_mcp = MagicMock()
        settings = Settings(transport="http", http_host="0.0.0.0", http_port=9000)

        with patch("incus_mcp.__main__.mcp", mock_mcp), \
             patch("incus_mcp.__main__.settings", settings):
            from incus_mcp.__main__ import run_server
            run_server()

        mock_mcp.run.assert_called_once_with(
            transport="http",
            host="0.0.0.0",
            port=9000,
        )

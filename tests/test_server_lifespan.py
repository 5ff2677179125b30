"""Tests for server lifespan."""

from unittest.mock import MagicMock, patch

import pytest

from incus_mcp.config import Settings
from incus_mcp.dependencies import Dependencies
from incus_mcp.server import app_lifespan, create_server
from incus_mcp.tools import build_registry


@pytest.mark.asyncio
async def test_lifespan_yields_tool_names(runner) -> None:
    """Lifespan exposes the registered tool names."""
    deps = Dependencies(
        settings=Settings(strict_projects=True),
        cli=MagicMock(),
        registry=build_registry(runner),
    )
    mcp = create_server(deps)

    async with app_lifespan(mcp) as result:
        assert result["tools"] == deps.registry.names()
        assert "instance-list" in result["tools"]


@pytest.mark.asyncio
async def test_lifespan_logs_startup_and_shutdown(runner) -> None:
    deps = Dependencies(settings=Settings(), cli=MagicMock(), registry=build_registry(runner))
    mcp = create_server(deps)

    with patch("incus_mcp.server.logger") as mock_logger:
        async with app_lifespan(mcp):
            pass

    messages = " ".join(str(call) for call in mock_logger.info.call_args_list)
    assert "starting up" in messages
    assert "shutdown complete" in messages

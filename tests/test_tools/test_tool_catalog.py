"""Tests for the incus tool tables: argument vectors, tiers and schemas."""

import pytest

from incus_mcp.models import ExecutionResult
from incus_mcp.services.executors import EXEC_TIMEOUT_MS, LAUNCH_TIMEOUT_MS
from incus_mcp.tools import ToolRegistry, all_tools, build_registry
from incus_mcp.tools.builders import ProjectScope

EXPECTED_TOOLS = {
    "remote-list",
    "remote-get-default",
    "instance-list",
    "instance-info",
    "instance-launch",
    "instance-start",
    "instance-stop",
    "instance-delete",
    "instance-exec",
    "instance-rebuild",
    "image_list",
    "image_info",
    "image_delete",
    "network-list",
    "network-info",
    "network-create",
    "network-delete",
    "storage_pool_list",
    "storage_pool_info",
    "storage_volume_list",
    "storage_volume_info",
    "storage_volume_create",
    "storage_volume_delete",
    "profile_list",
    "profile_info",
    "profile_create",
    "profile_edit",
    "profile_delete",
    "project-list",
    "project-info",
    "project-create",
    "project-delete",
    "snapshot-list",
    "snapshot-create",
    "snapshot-restore",
    "snapshot-delete",
}


@pytest.fixture
def registry(runner) -> ToolRegistry:
    """Non-strict registry."""
    return build_registry(runner, ProjectScope(strict=False))


@pytest.fixture
def strict_registry(runner) -> ToolRegistry:
    return build_registry(runner, ProjectScope(strict=True))


def test_catalog_names() -> None:
    """Every tool is registered exactly once."""
    names = [tool.name for tool in all_tools()]
    assert len(names) == len(set(names))
    assert set(names) == EXPECTED_TOOLS


def test_schemas_forbid_additional_properties() -> None:
    """Advertised input schemas reject unknown fields."""
    for tool in all_tools():
        schema = tool.input_schema()
        assert schema["type"] == "object", tool.name
        assert schema.get("additionalProperties") is False, tool.name
        assert "title" not in schema


def test_volume_create_schema_uses_camel_case() -> None:
    tool = next(t for t in all_tools() if t.name == "storage_volume_create")
    properties = tool.input_schema()["properties"]
    assert "contentType" in properties
    assert "content_type" not in properties


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("tool", "arguments", "expected"),
    [
        ("instance-list", {}, ["list", "--all-projects"]),
        ("instance-list", {"remote": "prod"}, ["list", "prod:", "--all-projects"]),
        ("instance-list", {"project": "dev"}, ["list", "--project", "dev"]),
        ("instance-info", {"name": "web1"}, ["list", "web1", "--all-projects"]),
        ("image_list", {"remote": "images"}, ["image", "list", "images:", "--all-projects"]),
        ("image_info", {"fingerprint": "abc123"}, ["image", "list", "abc123", "--all-projects"]),
        ("network-list", {}, ["network", "list", "--all-projects"]),
        ("storage_pool_list", {}, ["storage", "list", "--all-projects"]),
        ("storage_pool_info", {"name": "default"}, ["storage", "show", "default", "--all-projects"]),
        ("storage_volume_list", {"pool": "default"}, ["storage", "volume", "list", "default"]),
        ("profile_list", {}, ["profile", "list", "--all-projects"]),
        ("project-list", {"remote": "prod"}, ["project", "list", "prod:"]),
        ("snapshot-list", {"instance": "web1"}, ["snapshot", "list", "web1"]),
        ("remote-list", {}, ["remote", "list"]),
    ],
)
async def test_structured_argument_vectors(
    registry: ToolRegistry, runner, tool: str, arguments: dict, expected: list[str]
) -> None:
    """JSON tools build the expected argument vector."""
    response = await registry.invoke(tool, arguments)

    assert not response.is_error, response.joined_text
    assert runner.last.args == expected


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("tool", "arguments", "expected"),
    [
        ("instance-start", {"name": "web1", "remote": "prod"}, ["start", "prod:web1"]),
        ("instance-stop", {"name": "web1", "force": True}, ["stop", "web1", "--force"]),
        ("instance-stop", {"name": "web1"}, ["stop", "web1"]),
        ("instance-delete", {"name": "web1", "force": True, "project": "dev"},
         ["delete", "web1", "--force", "--project", "dev"]),
        ("instance-rebuild", {"name": "web1", "image": "images:debian/12", "force": True},
         ["rebuild", "images:debian/12", "web1", "--force"]),
        ("image_delete", {"fingerprint": "abc123", "remote": "prod"},
         ["image", "delete", "prod:abc123"]),
        ("network-info", {"name": "incusbr0"}, ["network", "show", "incusbr0"]),
        ("network-create", {"name": "br1", "type": "bridge", "config": {"ipv4.address": "auto"}},
         ["network", "create", "br1", "--type", "bridge", "ipv4.address=auto"]),
        ("network-delete", {"name": "br1"}, ["network", "delete", "br1"]),
        ("storage_volume_info", {"pool": "default", "volume": "data"},
         ["storage", "volume", "show", "default", "data"]),
        ("storage_volume_create",
         {"pool": "default", "name": "data", "contentType": "block", "config": {"size": "10GiB"}},
         ["storage", "volume", "create", "default", "data", "--content-type", "block", "size=10GiB"]),
        ("storage_volume_delete", {"pool": "default", "volume": "data", "project": "dev"},
         ["storage", "volume", "delete", "default", "data", "--project", "dev"]),
        ("profile_info", {"name": "default"}, ["profile", "show", "default"]),
        ("profile_create", {"name": "web", "description": "Web tier"},
         ["profile", "create", "web", "--description", "Web tier"]),
        ("profile_delete", {"name": "web"}, ["profile", "delete", "web"]),
        ("project-info", {"name": "dev"}, ["project", "show", "dev"]),
        ("project-create", {"name": "dev", "description": "Dev", "config": {"features.images": "false"}},
         ["project", "create", "dev", "--description", "Dev", "-c", "features.images=false"]),
        ("project-delete", {"name": "dev", "remote": "prod"}, ["project", "delete", "prod:dev"]),
        ("snapshot-create", {"instance": "web1"}, ["snapshot", "create", "web1"]),
        ("snapshot-create", {"instance": "web1", "name": "snap0", "stateful": True},
         ["snapshot", "create", "web1", "snap0", "--stateful"]),
        ("snapshot-restore", {"instance": "web1", "name": "snap0"},
         ["snapshot", "restore", "web1", "snap0"]),
        ("snapshot-delete", {"instance": "web1", "name": "snap0", "remote": "prod"},
         ["snapshot", "delete", "prod:web1", "snap0"]),
    ],
)
async def test_text_argument_vectors(
    registry: ToolRegistry, runner, tool: str, arguments: dict, expected: list[str]
) -> None:
    """Text tools build the expected argument vector."""
    response = await registry.invoke(tool, arguments)

    assert not response.is_error, response.joined_text
    assert runner.last.args == expected


@pytest.mark.asyncio
async def test_instance_launch_full_vector(registry: ToolRegistry, runner) -> None:
    """Launch renders every option in a fixed order under the launch tier."""
    arguments = {
        "name": "web1",
        "image": "images:debian/12",
        "remote": "prod",
        "project": "dev",
        "vm": True,
        "profile": "web",
        "network": "incusbr0",
        "storage": "fast",
        "config": {"limits.cpu": "2", "limits.memory": "2GiB"},
    }

    await registry.invoke("instance-launch", arguments)

    assert runner.last.args == [
        "launch", "images:debian/12", "prod:web1",
        "--vm",
        "-p", "web",
        "-n", "incusbr0",
        "-s", "fast",
        "-c", "limits.cpu=2",
        "-c", "limits.memory=2GiB",
        "--project", "dev",
    ]
    assert runner.last.timeout_ms == LAUNCH_TIMEOUT_MS


@pytest.mark.asyncio
async def test_instance_exec_combines_output(registry: ToolRegistry, runner) -> None:
    """exec places the guest command after '--' and merges both streams."""
    runner.result = ExecutionResult(0, "total 0\n", "warning: locale\n")
    arguments = {
        "name": "web1",
        "command": ["ls", "-la", "/tmp"],
        "cwd": "/root",
        "env": {"LANG": "C"},
        "project": "dev",
    }

    response = await registry.invoke("instance-exec", arguments)

    assert runner.last.method == "run"
    assert runner.last.args == [
        "exec", "web1", "-T",
        "--cwd", "/root",
        "--env", "LANG=C",
        "--project", "dev",
        "--", "ls", "-la", "/tmp",
    ]
    assert runner.last.timeout_ms == EXEC_TIMEOUT_MS
    assert response.joined_text == "total 0\nwarning: locale"


@pytest.mark.asyncio
async def test_instance_exec_requires_command(registry: ToolRegistry, runner) -> None:
    response = await registry.invoke("instance-exec", {"name": "web1", "command": []})

    assert response.is_error
    assert runner.calls == []


@pytest.mark.asyncio
async def test_default_tier_left_to_runner(registry: ToolRegistry, runner) -> None:
    """Tools without a tier let the runner apply its default deadline."""
    await registry.invoke("instance-start", {"name": "web1"})

    assert runner.last.timeout_ms is None


@pytest.mark.asyncio
async def test_profile_edit_feeds_yaml(registry: ToolRegistry, runner) -> None:
    """profile_edit sends YAML on stdin and returns a fixed confirmation."""
    yaml = "config:\n  limits.cpu: \"2\"\n"

    response = await registry.invoke("profile_edit", {"name": "web", "yaml": yaml})

    assert runner.last.method == "run"
    assert runner.last.args == ["profile", "edit", "web"]
    assert runner.last.stdin == yaml
    assert response.joined_text == "Profile updated."


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("tool", "arguments", "expected"),
    [
        ("instance-list", {}, ["list"]),
        ("instance-info", {"name": "web1"}, ["list", "web1"]),
        ("image_list", {}, ["image", "list"]),
        ("network-list", {}, ["network", "list"]),
        ("storage_pool_list", {}, ["storage", "list"]),
        ("profile_list", {}, ["profile", "list"]),
        ("instance-list", {"project": "dev"}, ["list", "--project", "dev"]),
    ],
)
async def test_strict_mode_never_lists_all_projects(
    strict_registry: ToolRegistry, runner, tool: str, arguments: dict, expected: list[str]
) -> None:
    """Strict mode confines listings to the current or named project."""
    await strict_registry.invoke(tool, arguments)

    assert runner.last.args == expected


@pytest.mark.asyncio
async def test_project_tools_ignore_scope(registry: ToolRegistry, runner) -> None:
    """Project management tools never carry project flags."""
    await registry.invoke("project-list", {})
    assert runner.last.args == ["project", "list"]

    response = await registry.invoke("project-list", {"project": "dev"})
    assert response.is_error


@pytest.mark.asyncio
async def test_volume_create_rejects_snake_case(registry: ToolRegistry, runner) -> None:
    """Only the advertised camelCase field name is accepted."""
    response = await registry.invoke(
        "storage_volume_create",
        {"pool": "default", "name": "data", "content_type": "block"},
    )

    assert response.is_error
    assert runner.calls == []

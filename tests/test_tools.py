"""Tests for the operation adapter (dispatch, summaries, tool metadata)."""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from mcp.types import Tool

from mcp_git_tool.config import AdapterConfig
from mcp_git_tool.core.tools import (
    TOOL_NAME,
    TOOL_SCHEMA,
    GitOperationAdapter,
    format_summary,
)
from mcp_git_tool.errors import ExecutionFailure, InvalidRequest
from mcp_git_tool.git import operations
from mcp_git_tool.git.models import OPERATION_NAMES, CommitRequest, OperationResult


@pytest.fixture
def mock_run_git():
    with patch.object(operations, "run_git", new=AsyncMock(return_value=(0, "done\n"))) as mock:
        yield mock


class TestToolMetadata:
    def test_name_and_description(self, adapter):
        assert adapter.name == TOOL_NAME == "git_mcp"
        assert "clone" in adapter.description

    def test_schema(self, adapter):
        schema = adapter.schema()
        assert schema["type"] == "object"
        assert schema["required"] == ["operation"]
        assert schema["properties"]["operation"]["enum"] == list(OPERATION_NAMES)
        assert set(schema["properties"]["options"]["properties"]) == {"limit", "oneline", "cached"}

    def test_as_tool(self, adapter):
        tool = adapter.as_tool()
        assert isinstance(tool, Tool)
        assert tool.name == "git_mcp"
        assert tool.inputSchema == TOOL_SCHEMA

    def test_default_working_dir_is_cwd(self):
        assert GitOperationAdapter().working_dir == Path.cwd()
        assert GitOperationAdapter(AdapterConfig(working_dir="")).working_dir == Path.cwd()


class TestFormatSummary:
    def test_output_only(self):
        result = OperationResult(operation="status", output="On branch main\n", path="/r")
        assert format_summary(result) == "Git status operation completed.\nOn branch main\n"

    def test_empty_output(self):
        result = OperationResult(operation="push", path="/r")
        assert format_summary(result) == "Git push operation completed.\n"

    def test_advisory_error_appended(self):
        result = OperationResult(operation="diff", output="x", error="exit status 1", path="/r")
        assert format_summary(result) == (
            "Git diff operation completed.\nx\nWarnings/Errors: exit status 1"
        )


class TestExecute:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", ["bogus", "Status", "log ", "git_status"])
    async def test_unrecognized_operation_runs_nothing(self, adapter, mock_run_git, operation):
        with pytest.raises(InvalidRequest, match="unsupported operation"):
            await adapter.execute({"operation": operation})
        mock_run_git.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_operation(self, adapter, mock_run_git):
        with pytest.raises(InvalidRequest, match="operation parameter is required"):
            await adapter.execute({"path": "/tmp"})

    @pytest.mark.asyncio
    async def test_clone_without_url_creates_nothing(self, adapter, mock_run_git, tmp_path):
        target = tmp_path / "parent" / "clone"
        with pytest.raises(InvalidRequest, match="repository URL is required"):
            await adapter.execute({"operation": "clone", "repository": "", "path": str(target)})

        assert not (tmp_path / "parent").exists()
        mock_run_git.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_commit_without_message(self, adapter, mock_run_git):
        with pytest.raises(InvalidRequest, match="commit message is required"):
            await adapter.execute({"operation": "commit", "message": ""})
        mock_run_git.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_checkout_without_branch(self, adapter, mock_run_git):
        with pytest.raises(InvalidRequest, match="branch name is required"):
            await adapter.execute({"operation": "checkout", "branch": ""})
        mock_run_git.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_with_bad_files(self, adapter, mock_run_git):
        with pytest.raises(InvalidRequest, match="invalid files parameter type"):
            await adapter.execute({"operation": "add", "files": 7})
        mock_run_git.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_dispatches_raw_arguments(self, adapter, mock_run_git, tmp_path):
        result, summary = await adapter.execute({"operation": "status"})

        assert mock_run_git.await_args.args[0] == ["-C", str(tmp_path), "status"]
        assert result.operation == "status"
        assert result.path == str(tmp_path)
        assert summary == "Git status operation completed.\ndone\n"

    @pytest.mark.asyncio
    async def test_dispatches_typed_request(self, adapter, mock_run_git, tmp_path):
        result, _ = await adapter.execute(CommitRequest(message="typed"))

        assert mock_run_git.await_args.args[0] == ["-C", str(tmp_path), "commit", "-m", "typed"]
        assert result.operation == "commit"

    @pytest.mark.asyncio
    async def test_rejects_other_request_types(self, adapter, mock_run_git):
        with pytest.raises(InvalidRequest, match="unsupported request type"):
            await adapter.execute("status")

    @pytest.mark.asyncio
    async def test_execution_failure_propagates(self, adapter, tmp_path):
        failing = AsyncMock(return_value=(1, "error: pathspec 'x' did not match\n"))
        with patch.object(operations, "run_git", new=failing):
            with pytest.raises(ExecutionFailure, match="checkout failed") as exc_info:
                await adapter.execute({"operation": "checkout", "branch": "x"})

        assert exc_info.value.result.path == str(tmp_path)
        assert "pathspec" in exc_info.value.output

    @pytest.mark.asyncio
    async def test_diff_warning_in_summary(self, adapter):
        failing = AsyncMock(return_value=(1, ""))
        with patch.object(operations, "run_git", new=failing):
            result, summary = await adapter.execute({"operation": "diff"})

        assert result.error == "exit status 1"
        assert summary.endswith("\nWarnings/Errors: exit status 1")

    @pytest.mark.asyncio
    async def test_timeout_forwarded(self, adapter, mock_run_git):
        await adapter.execute({"operation": "status"}, timeout=3)

        assert mock_run_git.await_args.args[1] == 3

    @pytest.mark.asyncio
    async def test_concurrent_calls_do_not_interfere(self, adapter, mock_run_git, tmp_path):
        first, second = await asyncio.gather(
            adapter.execute({"operation": "status", "path": str(tmp_path / "a")}),
            adapter.execute({"operation": "log", "path": str(tmp_path / "b")}),
        )

        assert first[0].path == str(tmp_path / "a")
        assert second[0].path == str(tmp_path / "b")
        assert adapter.working_dir == tmp_path


@pytest.mark.requires_git
class TestScenarios:
    """End-to-end flows through the adapter with real git."""

    @pytest.mark.asyncio
    async def test_init_then_status(self, adapter, tmp_path):
        result, text = await adapter.execute({"operation": "init", "path": str(tmp_path)})

        assert result.path == str(tmp_path)
        assert text.startswith("Git init operation completed.")
        assert (tmp_path / ".git").is_dir()

        result, text = await adapter.execute({"operation": "status"})
        assert "No commits yet" in result.output

    @pytest.mark.asyncio
    async def test_diff_on_clean_repository(self, clean_git_repo):
        adapter = GitOperationAdapter(AdapterConfig(working_dir=clean_git_repo))

        result, text = await adapter.execute({"operation": "diff"})

        assert result.error is None
        assert text == "Git diff operation completed.\n"

    @pytest.mark.asyncio
    async def test_add_commit_log(self, dirty_git_repo):
        adapter = GitOperationAdapter(AdapterConfig(working_dir=dirty_git_repo))

        await adapter.execute({"operation": "add"})
        await adapter.execute({"operation": "commit", "message": "Everything"})
        result, _ = await adapter.execute(
            {"operation": "log", "options": {"limit": 1, "oneline": True}}
        )

        assert result.output.strip().endswith("Everything")

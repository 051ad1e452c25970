"""Git operation adapter: tool metadata and operation dispatch"""

from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Tuple, Union

from mcp.types import Tool

from ..config import AdapterConfig
from ..errors import InvalidRequest
from ..git.models import (
    OPERATION_NAMES,
    GitOperation,
    GitRequest,
    OperationResult,
    parse_request,
)
from ..git.operations import (
    git_add,
    git_branch,
    git_checkout,
    git_clone,
    git_commit,
    git_diff,
    git_init,
    git_log,
    git_pull,
    git_push,
    git_status,
)

TOOL_NAME = "git_mcp"

TOOL_DESCRIPTION = (
    "Execute git operations following Model Context Protocol. Supports clone, "
    "status, log, diff, add, commit, push, pull, branch, checkout and init "
    "operations."
)

TOOL_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "operation": {
            "type": "string",
            "description": "Git operation to perform",
            "enum": list(OPERATION_NAMES),
        },
        "repository": {
            "type": "string",
            "description": "Repository URL (for clone operation)",
        },
        "path": {
            "type": "string",
            "description": "Local path for the repository or files",
        },
        "message": {
            "type": "string",
            "description": "Commit message (for commit operation)",
        },
        "branch": {
            "type": "string",
            "description": "Branch name (for branch/checkout operations)",
        },
        "files": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Files to add (for add operation)",
        },
        "options": {
            "type": "object",
            "description": "Additional options for the git command",
            "properties": {
                "limit": {
                    "type": "integer",
                    "description": "Limit number of results (for log operation)",
                },
                "oneline": {
                    "type": "boolean",
                    "description": "Show one line per entry (for log operation)",
                },
                "cached": {
                    "type": "boolean",
                    "description": "Show cached/staged changes (for diff operation)",
                },
            },
        },
    },
    "required": ["operation"],
}

OperationHandler = Callable[..., Awaitable[OperationResult]]


def format_summary(result: OperationResult) -> str:
    """Human-readable text for a completed operation"""
    text = f"Git {result.operation} operation completed.\n"
    if result.output:
        text += result.output
    if result.error:
        text += f"\nWarnings/Errors: {result.error}"
    return text


class GitOperationAdapter:
    """Single entry point routing a named operation to its git handler.

    The adapter keeps nothing between calls apart from its immutable
    configuration, so one instance can serve concurrent callers.
    """

    name = TOOL_NAME
    description = TOOL_DESCRIPTION

    def __init__(self, config: Optional[AdapterConfig] = None):
        self.config = config or AdapterConfig()
        self._handlers: Dict[str, OperationHandler] = {
            GitOperation.CLONE.value: git_clone,
            GitOperation.STATUS.value: git_status,
            GitOperation.LOG.value: git_log,
            GitOperation.DIFF.value: git_diff,
            GitOperation.ADD.value: git_add,
            GitOperation.COMMIT.value: git_commit,
            GitOperation.PUSH.value: git_push,
            GitOperation.PULL.value: git_pull,
            GitOperation.BRANCH.value: git_branch,
            GitOperation.CHECKOUT.value: git_checkout,
            GitOperation.INIT.value: git_init,
        }

    @property
    def working_dir(self):
        return self.config.working_dir

    def schema(self) -> Dict[str, Any]:
        return TOOL_SCHEMA

    def as_tool(self) -> Tool:
        """MCP tool definition for this adapter"""
        return Tool(name=self.name, description=self.description, inputSchema=self.schema())

    async def execute(
        self,
        request: Union[GitRequest, Mapping[str, Any]],
        timeout: Optional[float] = None,
    ) -> Tuple[OperationResult, str]:
        """Run one operation and return its result with a summary.

        Args:
            request: a typed request, or the raw argument mapping of a tool call
            timeout: seconds before the git process is killed and the call fails

        Raises:
            InvalidRequest: unknown operation or invalid arguments; git never runs
            ExecutionFailure: git failed (not raised for diff)
            FilesystemFailure: clone/init target directory could not be created
        """
        if isinstance(request, Mapping):
            request = parse_request(request)
        elif not isinstance(request, GitRequest):
            raise InvalidRequest(f"unsupported request type: {type(request).__name__}")

        operation = getattr(request, "operation", None)
        handler = self._handlers.get(operation)
        if handler is None:
            raise InvalidRequest(f"unsupported operation: {operation}")

        result = await handler(request, self.config.working_dir, timeout)
        return result, format_summary(result)

"""Error taxonomy for the MCP Git tool."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .git.models import OperationResult


class GitToolError(Exception):
    """Base class for every failure raised by the Git tool."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation


class InvalidRequest(GitToolError):
    """Unknown operation, or a missing, empty or malformed argument."""


class ExecutionFailure(GitToolError):
    """The git executable reported failure (or could not be run).

    The populated result is kept so the caller can inspect the captured
    output.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        result: Optional["OperationResult"] = None,
    ):
        super().__init__(message, operation)
        self.result = result

    @property
    def output(self) -> str:
        return self.result.output if self.result is not None else ""


class FilesystemFailure(GitToolError):
    """A target directory could not be created before running git."""


class ToolUnavailable(GitToolError):
    """The git executable cannot be invoked at all."""


class NotARepository(GitToolError):
    """No repository metadata was found walking up from a start path."""

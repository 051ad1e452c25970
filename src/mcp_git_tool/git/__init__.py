"""Git operations for MCP Git Tool"""

from .models import *
from .operations import *
from .utils import *

__all__ = [
    # Request and result models
    "GitOperation",
    "GitRequest",
    "OPERATION_NAMES",
    "OperationRequest",
    "OperationResult",
    "LogOptions",
    "DiffOptions",
    "CloneRequest",
    "StatusRequest",
    "LogRequest",
    "DiffRequest",
    "AddRequest",
    "CommitRequest",
    "PushRequest",
    "PullRequest",
    "BranchRequest",
    "CheckoutRequest",
    "InitRequest",
    "parse_request",
    # Core git operations
    "run_git",
    "git_clone",
    "git_status",
    "git_log",
    "git_diff",
    "git_add",
    "git_commit",
    "git_push",
    "git_pull",
    "git_branch",
    "git_checkout",
    "git_init",
    # Repository helpers
    "resolve_path",
    "resolve_target_path",
    "is_repository",
    "find_root",
    "check_tool_available",
    "sanitize_url",
]

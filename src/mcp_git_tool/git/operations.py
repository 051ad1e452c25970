"""Git operations for MCP Git Tool

Each operation resolves its path, builds the git argument vector, runs git
as a subprocess and shapes the outcome into an ``OperationResult``.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..errors import ExecutionFailure, FilesystemFailure
from .models import (
    AddRequest,
    BranchRequest,
    CheckoutRequest,
    CloneRequest,
    CommitRequest,
    DiffOptions,
    DiffRequest,
    InitRequest,
    LogOptions,
    LogRequest,
    OperationResult,
    PullRequest,
    PushRequest,
    StatusRequest,
)
from .utils import PathLike, resolve_path, resolve_target_path, sanitize_url

logger = logging.getLogger(__name__)

GIT_EXECUTABLE = "git"


def _loggable(args: Sequence[str]) -> str:
    shown = list(args)
    if len(shown) > 1 and shown[0] == "clone":
        shown[1] = sanitize_url(shown[1])
    return " ".join([GIT_EXECUTABLE, *shown])


async def run_git(
    args: Sequence[str], timeout: Optional[float] = None
) -> Tuple[int, str]:
    """Run git with ``args`` and return its exit code and combined output.

    The child process is killed when the calling task is cancelled or the
    timeout expires; the CancelledError/TimeoutError is then re-raised.
    """
    logger.debug(f"Running: {_loggable(args)}")
    process = await asyncio.create_subprocess_exec(
        GIT_EXECUTABLE,
        *args,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.STDOUT,
    )
    try:
        stdout, _ = await asyncio.wait_for(process.communicate(), timeout)
    except (asyncio.CancelledError, asyncio.TimeoutError):
        if process.returncode is None:
            process.kill()
        await process.wait()
        logger.warning(f"Killed git process {process.pid}: {_loggable(args)}")
        raise

    output = stdout.decode("utf-8", errors="replace") if stdout else ""
    return process.returncode, output


async def _execute(
    operation: str, args: List[str], path: str, timeout: Optional[float]
) -> OperationResult:
    """Run git and capture the outcome; only deadline expiry raises"""
    try:
        returncode, output = await run_git(args, timeout)
    except asyncio.TimeoutError as e:
        cause = f"timed out after {timeout}s"
        result = OperationResult(operation=operation, error=cause, path=path)
        raise ExecutionFailure(
            f"{operation} failed: {cause}", operation=operation, result=result
        ) from e
    except OSError as e:
        return OperationResult(operation=operation, error=str(e), path=path)

    error = None if returncode == 0 else f"exit status {returncode}"
    return OperationResult(operation=operation, output=output, error=error, path=path)


def _check(result: OperationResult) -> OperationResult:
    if result.error:
        raise ExecutionFailure(
            f"{result.operation} failed: {result.error}",
            operation=result.operation,
            result=result,
        )
    return result


def _make_directory(operation: str, directory: str) -> None:
    try:
        Path(directory).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemFailure(
            f"{operation} failed: could not create directory {directory}: {e}",
            operation=operation,
        ) from e


async def git_clone(
    request: CloneRequest, working_dir: PathLike, timeout: Optional[float] = None
) -> OperationResult:
    """Clone ``request.repository`` into the target path, creating its parent"""
    target = resolve_target_path(request.path, working_dir)
    _make_directory("clone", os.path.dirname(target))

    logger.info(f"Cloning {sanitize_url(request.repository)} into {target}")
    result = await _execute("clone", ["clone", request.repository, target], target, timeout)
    return _check(result)


async def git_status(
    request: StatusRequest, working_dir: PathLike, timeout: Optional[float] = None
) -> OperationResult:
    path = resolve_path(request.path, working_dir)
    return _check(await _execute("status", ["-C", path, "status"], path, timeout))


async def git_log(
    request: LogRequest, working_dir: PathLike, timeout: Optional[float] = None
) -> OperationResult:
    """Show commit history, optionally limited and one line per commit"""
    path = resolve_path(request.path, working_dir)
    options = request.options or LogOptions()

    args = ["-C", path, "log"]
    if options.limit is not None and options.limit > 0:
        args.append(f"-n{options.limit}")
    if options.oneline:
        args.append("--oneline")

    return _check(await _execute("log", args, path, timeout))


async def git_diff(
    request: DiffRequest, working_dir: PathLike, timeout: Optional[float] = None
) -> OperationResult:
    """Show unstaged (or, with ``cached``, staged) changes.

    A failing git run does not fail the call: the failure is only recorded
    on ``result.error``. Deadline expiry still raises.
    """
    path = resolve_path(request.path, working_dir)
    options = request.options or DiffOptions()

    args = ["-C", path, "diff"]
    if options.cached:
        args.append("--cached")

    result = await _execute("diff", args, path, timeout)
    if result.error:
        logger.debug(f"diff at {path} reported {result.error}; returning as advisory")
    return result


async def git_add(
    request: AddRequest, working_dir: PathLike, timeout: Optional[float] = None
) -> OperationResult:
    """Stage the given files, or everything when no file list was given"""
    path = resolve_path(request.path, working_dir)

    args = ["-C", path, "add"]
    if request.files is None:
        args.append(".")
    else:
        args.extend(["--", *request.files])

    return _check(await _execute("add", args, path, timeout))


async def git_commit(
    request: CommitRequest, working_dir: PathLike, timeout: Optional[float] = None
) -> OperationResult:
    path = resolve_path(request.path, working_dir)
    args = ["-C", path, "commit", "-m", request.message]
    return _check(await _execute("commit", args, path, timeout))


async def git_push(
    request: PushRequest, working_dir: PathLike, timeout: Optional[float] = None
) -> OperationResult:
    path = resolve_path(request.path, working_dir)
    return _check(await _execute("push", ["-C", path, "push"], path, timeout))


async def git_pull(
    request: PullRequest, working_dir: PathLike, timeout: Optional[float] = None
) -> OperationResult:
    path = resolve_path(request.path, working_dir)
    return _check(await _execute("pull", ["-C", path, "pull"], path, timeout))


async def git_branch(
    request: BranchRequest, working_dir: PathLike, timeout: Optional[float] = None
) -> OperationResult:
    """List branches, or create ``request.branch`` when one is named"""
    path = resolve_path(request.path, working_dir)

    args = ["-C", path, "branch"]
    if request.branch:
        args.append(request.branch)

    return _check(await _execute("branch", args, path, timeout))


async def git_checkout(
    request: CheckoutRequest, working_dir: PathLike, timeout: Optional[float] = None
) -> OperationResult:
    path = resolve_path(request.path, working_dir)
    args = ["-C", path, "checkout", request.branch]
    return _check(await _execute("checkout", args, path, timeout))


async def git_init(
    request: InitRequest, working_dir: PathLike, timeout: Optional[float] = None
) -> OperationResult:
    """Create the target directory if needed and initialize a repository in it"""
    target = resolve_target_path(request.path, working_dir)
    _make_directory("init", target)
    return _check(await _execute("init", ["-C", target, "init"], target, timeout))

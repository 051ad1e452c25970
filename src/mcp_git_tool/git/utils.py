"""Path resolution and repository helpers"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from ..errors import NotARepository, ToolUnavailable

logger = logging.getLogger(__name__)

GIT_DIR_NAME = ".git"

PathLike = Union[str, os.PathLike]


def resolve_path(path: Optional[str], working_dir: PathLike) -> str:
    """Resolve the repository path for an operation.

    An explicit path is made absolute against the process current directory
    and cleaned. Without one, the configured working directory is returned
    unchanged.
    """
    if not path:
        return str(working_dir)

    cleaned = os.path.normpath(path)
    if os.path.isabs(cleaned):
        return cleaned
    try:
        return os.path.abspath(cleaned)
    except OSError as e:
        # Current directory vanished; keep the relative form
        logger.debug(f"Could not make {path!r} absolute: {e}")
        return cleaned


def resolve_target_path(path: Optional[str], working_dir: PathLike) -> str:
    """Target path for clone/init, which may not exist yet.

    Resolved the same way as ``resolve_path``; nothing is checked on disk.
    """
    return resolve_path(path, working_dir)


def is_repository(path: PathLike) -> bool:
    """Return True if ``path`` holds a ``.git`` directory"""
    return (Path(path) / GIT_DIR_NAME).is_dir()


def find_root(start_path: PathLike) -> str:
    """Walk up from ``start_path`` to the first directory that is a repository.

    Raises:
        NotARepository: the filesystem root was reached without a match
    """
    current = Path(os.path.abspath(start_path))
    while True:
        if is_repository(current):
            return str(current)
        parent = current.parent
        if parent == current:
            raise NotARepository(
                "not a git repository (or any of the parent directories): "
                f"{start_path}"
            )
        current = parent


def check_tool_available() -> str:
    """Confirm the git executable can be run and return its version string.

    Raises:
        ToolUnavailable: git is missing or cannot be executed
    """
    try:
        # GitPython refuses to import when no git executable is found
        import git
        from git.exc import CommandError

        return git.Git().version()
    except ImportError as e:
        raise ToolUnavailable(f"git is not installed or not in PATH: {e}") from e
    except (CommandError, OSError) as e:
        raise ToolUnavailable(f"git is not installed or not in PATH: {e}") from e


def sanitize_url(url: str) -> str:
    """Drop credentials from a URL by keeping what follows the last ``@``.

    This is a naive redaction helper for display, not a URL parser.
    """
    if "@" in url:
        return url.rsplit("@", 1)[-1]
    return url

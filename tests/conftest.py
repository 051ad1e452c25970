"""
Global pytest configuration and fixtures for the MCP Git Tool test suite.
"""

import shutil
from pathlib import Path

import pytest

from fixtures.git_repos import GitRepositoryFactory
from mcp_git_tool.config import AdapterConfig
from mcp_git_tool.core.tools import GitOperationAdapter

GIT_AVAILABLE = shutil.which("git") is not None


def pytest_collection_modifyitems(config, items):
    """Skip tests marked requires_git when git is not on PATH."""
    for item in items:
        if "requires_git" in item.keywords and not GIT_AVAILABLE:
            item.add_marker(pytest.mark.skip(reason="git is not installed"))


@pytest.fixture
def adapter(tmp_path: Path) -> GitOperationAdapter:
    """Adapter whose default working directory is an empty temp directory."""
    return GitOperationAdapter(AdapterConfig(working_dir=tmp_path))


@pytest.fixture
def clean_git_repo(tmp_path: Path) -> Path:
    """A git repository with a single commit and no pending changes."""
    return GitRepositoryFactory.create_clean_repo(tmp_path / "clean_repo")


@pytest.fixture
def dirty_git_repo(tmp_path: Path) -> Path:
    """A git repository with a modified and an untracked file."""
    return GitRepositoryFactory.create_dirty_repo(tmp_path / "dirty_repo")


@pytest.fixture
def history_git_repo(tmp_path: Path) -> Path:
    """A git repository with five commits."""
    return GitRepositoryFactory.create_repo_with_history(tmp_path / "history_repo")

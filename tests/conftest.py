"""Pytest configuration and shared fixtures."""

import subprocess
from pathlib import Path

import pytest

# ============================================================================
# Git Repository Helpers
# ============================================================================
# These helpers consolidate git setup code to avoid duplication across tests.
# Use these functions in fixtures to create consistent test repositories.


def run_git(path: Path, *args: str) -> str:
    """Run a git command in path and return its stripped stdout.

    Raises:
        subprocess.CalledProcessError: If the git command fails.
    """
    result = subprocess.run(
        ["git", *args],
        cwd=path,
        check=True,
        capture_output=True,
        text=True,
        timeout=10,
    )
    return result.stdout.strip()


def init_git_repo(
    path: Path,
    user_name: str = "Test User",
    user_email: str = "test@example.com",
) -> None:
    """Initialize a git repository with user configuration.

    The initial branch is always "main" so tests do not depend on the
    installed git's init.defaultBranch.

    Args:
        path: Directory to initialize as a git repository.
        user_name: Git user.name configuration value.
        user_email: Git user.email configuration value.

    Raises:
        subprocess.CalledProcessError: If git commands fail.
    """
    run_git(path, "init")
    run_git(path, "symbolic-ref", "HEAD", "refs/heads/main")
    run_git(path, "config", "user.name", user_name)
    run_git(path, "config", "user.email", user_email)
    run_git(path, "config", "commit.gpgsign", "false")
    run_git(path, "config", "tag.gpgsign", "false")


def git_add_and_commit(path: Path, message: str = "Initial commit") -> str:
    """Stage all files and create a git commit.

    Returns:
        Commit id of the new commit.

    Raises:
        subprocess.CalledProcessError: If git commands fail.
    """
    run_git(path, "add", ".")
    run_git(path, "commit", "-m", message)
    return run_git(path, "rev-parse", "HEAD")


def git_tag(path: Path, name: str) -> None:
    """Create a lightweight tag at HEAD."""
    run_git(path, "tag", name)


def create_test_files(path: Path, files: dict[str, str]) -> None:
    """Create multiple files in a directory.

    Args:
        path: Base directory for file creation.
        files: Mapping of relative file paths to file contents.
               Parent directories are created automatically.
    """
    for file_path, content in files.items():
        full_path = path / file_path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content)


def create_git_repo(
    path: Path,
    files: dict[str, str] | None = None,
    commit_message: str = "Initial commit",
) -> Path:
    """Create a git repository with optional files in an initial commit.

    Returns:
        Path to the repository root.
    """
    path.mkdir(parents=True, exist_ok=True)
    init_git_repo(path)

    if files:
        create_test_files(path, files)
        git_add_and_commit(path, message=commit_message)

    return path


API_V0_9 = "package api\n\nfunc Get() {}\n"
API_V1_0 = "package api\n\nfunc Get() {}\n\nfunc Put() {}\n"
API_HEAD = "package api\n\nfunc Get(ctx Context) {}\n\nfunc Put() {}\n"


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a git repository with a single untagged commit."""
    return create_git_repo(
        tmp_path / "test_repo",
        files={
            "README.md": "# test\n",
            "pkg/api.go": API_V0_9,
        },
    )


@pytest.fixture
def tagged_repo(tmp_path: Path) -> Path:
    """Create a repository with a short release history.

    History on branch main:
    - v0.9.0: pkg/api.go == API_V0_9
    - v1.0.0: pkg/api.go == API_V1_0, adds pkg/store.go
    - HEAD (untagged): pkg/api.go == API_HEAD

    Also carries a non-semver tag "nightly" on the v1.0.0 commit.
    """
    repo = create_git_repo(
        tmp_path / "tagged_repo",
        files={"README.md": "# api\n", "pkg/api.go": API_V0_9},
        commit_message="Release 0.9.0",
    )
    git_tag(repo, "v0.9.0")

    create_test_files(repo, {"pkg/api.go": API_V1_0, "pkg/store.go": "package api\n"})
    git_add_and_commit(repo, "Release 1.0.0")
    git_tag(repo, "v1.0.0")
    git_tag(repo, "nightly")

    create_test_files(repo, {"pkg/api.go": API_HEAD})
    git_add_and_commit(repo, "Take a context")
    return repo

"""Git adapter implementing the RepositoryClient protocol using subprocess git commands."""

import logging
import subprocess
from pathlib import Path

from revtree.domain.exceptions import (
    CheckoutError,
    CloneError,
    TagQueryError,
    VersionQueryError,
)

logger = logging.getLogger(__name__)


class GitAdapter:
    """Git repository client using subprocess calls to the git CLI.

    The adapter does not validate the path on construction: a remote
    repository's local path is still empty until clone() runs. Use
    check_local() to validate an existing working copy.
    """

    def __init__(
        self,
        local_path: Path,
        remote_url: str | None = None,
        executable: str = "git",
    ) -> None:
        """Initialize Git adapter.

        Args:
            local_path: Working copy location (existing, or the clone target).
            remote_url: Remote to ping and clone. When None, the working
                copy's origin remote is used for ping().
            executable: git binary to run.
        """
        self.local_path = local_path.resolve()
        self.remote_url = remote_url
        self.executable = executable

    def _run_git(
        self,
        args: list[str],
        check: bool = True,
        in_repo: bool = True,
    ) -> subprocess.CompletedProcess[bytes]:
        """Run a git command.

        Args:
            args: Git command arguments (without 'git' prefix).
            check: Whether to raise CalledProcessError on non-zero exit.
            in_repo: Run against the working copy (git -C local_path).

        Returns:
            CompletedProcess with command results.

        Raises:
            subprocess.CalledProcessError: If check=True and command fails.
            FileNotFoundError: If the git executable cannot be found.
        """
        cmd = [self.executable]
        if in_repo:
            cmd += ["-C", str(self.local_path)]
        cmd += args
        logger.debug("Running %s", " ".join(cmd))
        return subprocess.run(cmd, capture_output=True, check=check)

    def _format_git_error(
        self,
        error: subprocess.CalledProcessError | OSError,
        context: str,
    ) -> str:
        """Format a git failure with full context.

        Args:
            error: The failed command, or the OSError from starting git.
            context: Human-readable description of what was being done.

        Returns:
            Formatted error message with exit code and stderr.
        """
        if isinstance(error, OSError):
            return f"{context}: could not run {self.executable}: {error}"

        stderr = error.stderr.decode("utf-8", errors="replace").strip() if error.stderr else ""

        msg = f"{context} (git exit code {error.returncode})"
        if stderr:
            msg += f": {stderr}"
        else:
            msg += " (no error output from git)"

        return msg

    def _output(self, result: subprocess.CompletedProcess[bytes]) -> str:
        return result.stdout.decode("utf-8", errors="replace").strip()

    def check_local(self) -> bool:
        """Check if local_path is inside a git working copy."""
        if not self.local_path.is_dir():
            return False
        try:
            self._run_git(["rev-parse", "--show-toplevel"])
            return True
        except (subprocess.CalledProcessError, OSError):
            return False

    def origin_url(self) -> str | None:
        """Get the URL of the working copy's origin remote, if configured."""
        try:
            result = self._run_git(["config", "--get", "remote.origin.url"], check=False)
        except OSError:
            return None
        url = self._output(result)
        return url if result.returncode == 0 and url else None

    def ping(self) -> bool:
        """Check that the repository's remote answers.

        A working copy without any remote has nothing to reach and counts as
        reachable.
        """
        remote = self.remote_url or self.origin_url()
        if remote is None:
            logger.debug("No remote configured for %s; skipping ping", self.local_path)
            return True
        try:
            self._run_git(["ls-remote", remote, "HEAD"], in_repo=False)
            return True
        except (subprocess.CalledProcessError, OSError) as e:
            logger.warning(self._format_git_error(e, f"Failed to reach {remote}"))
            return False

    def clone(self) -> None:
        """Clone remote_url into local_path.

        Raises:
            CloneError: If there is no remote URL or git clone fails.
        """
        if not self.remote_url:
            raise CloneError(f"No remote URL to clone into {self.local_path}")
        try:
            self._run_git(["clone", self.remote_url, str(self.local_path)], in_repo=False)
        except (subprocess.CalledProcessError, OSError) as e:
            raise CloneError(
                self._format_git_error(e, f"Failed to clone {self.remote_url}")
            ) from e

    def tags(self) -> list[str]:
        """List tag names.

        Raises:
            TagQueryError: If git tag fails.
        """
        try:
            result = self._run_git(["tag", "--list"])
        except (subprocess.CalledProcessError, OSError) as e:
            raise TagQueryError(self._format_git_error(e, "Failed to list tags")) from e
        return [line.strip() for line in self._output(result).splitlines() if line.strip()]

    def current_version(self) -> str:
        """Get the commit id HEAD points at.

        Raises:
            VersionQueryError: If HEAD cannot be resolved (e.g. no commits yet).
        """
        try:
            result = self._run_git(["rev-parse", "HEAD"])
        except (subprocess.CalledProcessError, OSError) as e:
            raise VersionQueryError(
                self._format_git_error(e, f"Failed to read current version of {self.local_path}")
            ) from e
        return self._output(result)

    def current_ref(self) -> str:
        """Get the checked-out branch, or the commit id when HEAD is detached.

        Raises:
            VersionQueryError: If HEAD cannot be resolved.
        """
        try:
            result = self._run_git(["symbolic-ref", "--quiet", "--short", "HEAD"], check=False)
        except OSError as e:
            raise VersionQueryError(
                self._format_git_error(e, "Failed to read current branch")
            ) from e
        branch = self._output(result)
        if result.returncode == 0 and branch:
            return branch
        return self.current_version()

    def is_clean(self) -> bool:
        """Check that the working copy has no local changes or untracked files.

        Ignored files do not count.

        Raises:
            VersionQueryError: If git status fails.
        """
        try:
            result = self._run_git(["status", "--porcelain", "--untracked-files=all"])
        except (subprocess.CalledProcessError, OSError) as e:
            raise VersionQueryError(
                self._format_git_error(e, f"Failed to read status of {self.local_path}")
            ) from e
        return not self._output(result)

    def switch_to_version(self, revision: str) -> None:
        """Check out revision.

        revision must name a commit. It is never read as an option or a
        pathspec, so a file name is rejected instead of being restored from
        the index.

        Raises:
            CheckoutError: If revision is not a commit or git checkout fails
                (local changes that would be overwritten, ...).
        """
        if not revision or revision.startswith("-"):
            raise CheckoutError(f"Invalid revision '{revision}'")
        try:
            self._run_git(["rev-parse", "--verify", "--quiet", f"{revision}^{{commit}}"])
        except (subprocess.CalledProcessError, OSError) as e:
            raise CheckoutError(
                self._format_git_error(e, f"Unknown revision '{revision}'"),
                hint="Use a branch, tag or commit id (see 'revtree tags')",
            ) from e
        try:
            self._run_git(["checkout", "--quiet", revision, "--"])
        except (subprocess.CalledProcessError, OSError) as e:
            raise CheckoutError(
                self._format_git_error(e, f"Failed to check out '{revision}'")
            ) from e

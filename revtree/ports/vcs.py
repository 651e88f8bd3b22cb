"""Version Control System (VCS) port interface.

Defines the narrow capability surface revtree needs from a repository client.
"""

from typing import Protocol


class RepositoryClient(Protocol):
    """Protocol for operations on one working copy and its remote."""

    def check_local(self) -> bool:
        """Return True if the local path is a valid working copy."""
        ...

    def ping(self) -> bool:
        """Return True if the repository (possibly remote) is reachable."""
        ...

    def clone(self) -> None:
        """Materialize the remote repository into the local path.

        Raises:
            CloneError: If the clone fails.
        """
        ...

    def tags(self) -> list[str]:
        """List every tag name in the repository.

        Raises:
            TagQueryError: If tags cannot be listed.
        """
        ...

    def current_version(self) -> str:
        """Get the version identifier the working copy is checked out at.

        Returns:
            Commit id of the working copy's HEAD.

        Raises:
            VersionQueryError: If the version cannot be determined.
        """
        ...

    def current_ref(self) -> str:
        """Get a revision that restores the current checkout.

        Returns:
            Branch name, or the commit id when HEAD is detached.

        Raises:
            VersionQueryError: If HEAD cannot be resolved.
        """
        ...

    def is_clean(self) -> bool:
        """Check whether the working copy matches its checked-out revision.

        Returns:
            False when there are local changes or untracked files.

        Raises:
            VersionQueryError: If the status cannot be read.
        """
        ...

    def switch_to_version(self, revision: str) -> None:
        """Check out revision in the working copy.

        Args:
            revision: Branch, tag or commit id. Anything else (a file name,
                an option) is rejected.

        Raises:
            CheckoutError: If revision is not a commit or the checkout fails.
        """
        ...

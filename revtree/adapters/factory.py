"""Factories for opening repository sessions.

This module is the only place that knows about the concrete git and file
system adapters. The CLI (or any other caller) asks for a session by local
path or remote URL and receives a VersionedAccessor.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from revtree.adapters.fs.local import LocalFileSystem
from revtree.adapters.git_cmd import GitAdapter
from revtree.core.accessor import VersionedAccessor
from revtree.domain.entities import Repository
from revtree.domain.exceptions import NotARepositoryError, UnreachableError

if TYPE_CHECKING:
    from revtree.domain.config import RevtreeConfig
    from revtree.ports.vcs import RepositoryClient

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Path, "str | None"], "RepositoryClient"]


class SessionFactory:
    """Factory for repository sessions.

    Args:
        config: RevtreeConfig with git, clone and tag settings.
        client_factory: Builds the repository client for (local_path,
            remote_url). Defaults to a GitAdapter using the configured git
            executable.
    """

    def __init__(
        self,
        config: RevtreeConfig,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or self._git_client

    def _git_client(self, local_path: Path, remote_url: str | None) -> RepositoryClient:
        return GitAdapter(local_path, remote_url, executable=self._config.git.executable)

    def _session(self, repository: Repository, client: RepositoryClient) -> VersionedAccessor:
        return VersionedAccessor(
            repository,
            client,
            LocalFileSystem(),
            select=self._config.tags.select,
        )

    def open_local(self, path: Path) -> VersionedAccessor:
        """Open an existing working copy in place.

        Args:
            path: Root of the working copy.

        Returns:
            Session reading from path.

        Raises:
            NotARepositoryError: If path is not a working copy.
            UnreachableError: If its remote cannot be reached (only checked
                when git.verify_remote is enabled).
        """
        local_path = path.resolve()
        client = self._client_factory(local_path, None)
        if not client.check_local():
            raise NotARepositoryError(
                f"Directory is not a repository: {local_path}",
                hint="Pass the root of a git working copy, or use --remote URL",
            )
        if self._config.git.verify_remote and not client.ping():
            raise UnreachableError(
                f"Cannot ping remote repository of {local_path}",
                hint="Check your network connection, or set verify_remote = false "
                "under [git] in .revtree.toml",
            )
        return self._session(Repository(local_path=local_path), client)

    def open_remote(self, url: str) -> VersionedAccessor:
        """Clone a remote repository into a fresh temporary directory.

        The temporary clone is not removed when the session ends.

        Args:
            url: Anything git clone accepts.

        Returns:
            Session reading from the new clone.

        Raises:
            OSError: If the temporary directory cannot be created.
            UnreachableError: If the remote cannot be reached.
            CloneError: If the clone fails.
        """
        local_path = Path(tempfile.mkdtemp(prefix=self._config.clone.temp_prefix))
        logger.info("Creating new repo %s at %s", url, local_path)
        client = self._client_factory(local_path, url)

        logger.info("Pinging repository...")
        if not client.ping():
            raise UnreachableError(
                f"Cannot ping remote repository {url}",
                hint="Check the URL and your credentials",
            )

        logger.info("Cloning repository...")
        client.clone()
        return self._session(Repository(local_path=local_path, remote_url=url), client)

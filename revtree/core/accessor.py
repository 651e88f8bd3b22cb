"""Revision-scoped reads of a repository.

VersionedAccessor is the object callers hold for a session: it answers
"list this directory / open this file as of revision X" by positioning the
working copy first and reading from disk second.
"""

import logging
from pathlib import Path
from typing import BinaryIO

from revtree.core.tags import select_comparison_tag
from revtree.core.working_copy import WorkingCopy
from revtree.domain.config import TagSelection
from revtree.domain.entities import FileEntry, Repository
from revtree.domain.exceptions import ReadError
from revtree.domain.revision import WORKING_TREE, Revision, RevisionPair
from revtree.ports.fs import FileSystem
from revtree.ports.vcs import RepositoryClient

logger = logging.getLogger(__name__)


class VersionedAccessor:
    """Directory listings and file contents of a repository at any revision.

    Paths are resolved against the repository root, never against the
    process working directory. They are not checked for traversal outside
    the root; that is left to the caller.

    Args:
        repository: Repository being read.
        client: Client operating on the repository's working copy.
        fs: File system the working copy lives on.
        select: Which semver tag default_revisions() uses as baseline.
    """

    def __init__(
        self,
        repository: Repository,
        client: RepositoryClient,
        fs: FileSystem,
        select: TagSelection = "latest",
    ) -> None:
        self.repository = repository
        self.client = client
        self.fs = fs
        self.select = select
        self.working_copy = WorkingCopy(client)

    def default_revisions(self) -> RevisionPair:
        """Pick the revisions to compare when none are given.

        Does not touch the working copy.

        Returns:
            (semver baseline tag, WORKING_TREE)

        Raises:
            TagQueryError: If the tags cannot be listed.
            NoTagsError: If the repository has no tags.
            NoValidSemverTagError: If no tag is a semantic version.
        """
        before = select_comparison_tag(self.client.tags(), self.select)
        return RevisionPair(before=before, after=WORKING_TREE)

    def ensure_revision(self, revision: Revision) -> None:
        """Position the working copy at revision (see WorkingCopy)."""
        self.working_copy.ensure_revision(revision)

    def list_directory(self, revision: Revision, path: str | Path = ".") -> list[FileEntry]:
        """List a directory as of revision.

        Args:
            revision: Revision to read at.
            path: Directory relative to the repository root.

        Returns:
            Entries sorted by name.

        Raises:
            VersionQueryError, CheckoutError: If positioning fails.
            ReadError: If the directory cannot be read.
        """
        self.ensure_revision(revision)
        target = self.repository.resolve(path)
        logger.debug("Listing %s at %s", target, revision)
        try:
            return self.fs.list_dir(target)
        except OSError as e:
            raise ReadError(
                f"Cannot list '{path}' at {revision}: {e.strerror or e}",
                revision=revision,
                path=str(path),
            ) from e

    def read_file(self, revision: Revision, path: str | Path) -> BinaryIO:
        """Open a file as of revision.

        The stream reads the working copy directly, so it must be consumed
        before the next call switches to another revision. Close it on every
        path, e.g. with a ``with`` block.

        Args:
            revision: Revision to read at.
            path: File relative to the repository root.

        Returns:
            Binary stream positioned at the start of the file.

        Raises:
            VersionQueryError, CheckoutError: If positioning fails.
            ReadError: If the file cannot be opened.
        """
        self.ensure_revision(revision)
        target = self.repository.resolve(path)
        logger.debug("Opening %s at %s", target, revision)
        try:
            return self.fs.open_binary(target)
        except OSError as e:
            raise ReadError(
                f"Cannot open '{path}' at {revision}: {e.strerror or e}",
                revision=revision,
                path=str(path),
            ) from e

    def read_bytes(self, revision: Revision, path: str | Path) -> bytes:
        """Read a whole file as of revision.

        Raises:
            VersionQueryError, CheckoutError: If positioning fails.
            ReadError: If the file cannot be opened or read.
        """
        with self.read_file(revision, path) as stream:
            try:
                return stream.read()
            except OSError as e:
                raise ReadError(
                    f"Cannot read '{path}' at {revision}: {e.strerror or e}",
                    revision=revision,
                    path=str(path),
                ) from e

"""Checkout orchestration for a session's working copy.

The working copy is a single mutable resource: exactly one revision is on
disk at a time. WorkingCopy remembers which one, so consecutive reads at the
same revision do not pay for a checkout each time.

There is no locking. A WorkingCopy must be driven by one caller at a time;
concurrent consumers need their own clone.
"""

import logging
from dataclasses import dataclass

from revtree.domain.exceptions import CheckoutError
from revtree.domain.revision import Revision, is_working_tree
from revtree.ports.vcs import RepositoryClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RevisionCache:
    """Last revision the working copy was confirmed to be at.

    Attributes:
        version: Version reported by the client after the checkout (a
            commit id for git).
        requested: Revision token the caller asked for. Tags and branches
            are reported back as commit ids, so the request is kept to
            recognize a repeat of the same request.
    """

    version: str
    requested: Revision

    def satisfies(self, revision: Revision) -> bool:
        return revision in (self.version, self.requested)


class WorkingCopy:
    """Keeps a repository's working copy positioned at the requested revision.

    Args:
        client: Repository client operating on the working copy.
    """

    def __init__(self, client: RepositoryClient) -> None:
        self._client = client
        self._cache: RevisionCache | None = None
        # Ref checked out before this session first moved the tree.
        self._origin: Revision | None = None

    @property
    def cache(self) -> RevisionCache | None:
        """Current cache entry, or None before the first confirmed checkout."""
        return self._cache

    @property
    def moved(self) -> bool:
        """True while the tree sits at a revision this session checked out."""
        return self._origin is not None

    def ensure_revision(self, revision: Revision) -> None:
        """Make sure the working copy reflects revision.

        The working tree sentinel leaves the tree alone, unless this session
        checked out another revision earlier; then the ref that was checked
        out before is restored. That restore is the one checkout the
        sentinel ever makes, so "." is not strictly checkout-free.

        The first switch away from the user's tree is refused while the tree
        has local changes or untracked files.

        On failure the cache is left as it was, so a retry repeats the same
        comparison.

        Args:
            revision: Revision to position the working copy at.

        Raises:
            VersionQueryError: If the current version or status cannot be read.
            CheckoutError: If the tree is dirty or the checkout fails.
        """
        if is_working_tree(revision):
            if self._origin is None:
                return
            logger.debug("Restoring working tree to %s", self._origin)
            self._switch(self._origin)
            self._origin = None
            return

        self._switch(revision)

    def _switch(self, revision: Revision) -> None:
        if self._cache is not None and self._cache.satisfies(revision):
            logger.debug("Working copy already at %s (cached)", revision)
            return

        current = self._client.current_version()
        if current == revision:
            logger.debug("Working copy already at %s", revision)
            self._cache = RevisionCache(version=current, requested=revision)
            return

        origin = self._origin
        if origin is None:
            # git carries local edits and untracked files across a checkout,
            # so the tree would not match revision.
            if not self._client.is_clean():
                raise CheckoutError(
                    f"Cannot check out '{revision}': the working copy has local changes",
                    hint="Commit or stash your changes (including untracked files), "
                    "or read the working tree with revision '.'",
                )
            origin = self._client.current_ref()

        logger.debug("Checking out %s (currently %s)", revision, current)
        self._client.switch_to_version(revision)
        self._origin = origin

        # The tree has moved; drop the old entry in case the re-query fails.
        self._cache = None
        self._cache = RevisionCache(
            version=self._client.current_version(), requested=revision
        )

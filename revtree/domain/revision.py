"""Revision identifiers.

A revision is any token the underlying version-control client accepts
(branch, tag, commit id), or the WORKING_TREE sentinel meaning "the tree as
currently checked out, unmodified".
"""

from typing import Final, NamedTuple

Revision = str

# git never produces "." as a branch, tag or commit id.
WORKING_TREE: Final[Revision] = "."


def is_working_tree(revision: Revision) -> bool:
    """Return True if revision is the working tree sentinel."""
    return revision == WORKING_TREE


class RevisionPair(NamedTuple):
    """Default pair of revisions to compare.

    Attributes:
        before: Baseline revision (a semver tag).
        after: Revision to compare against the baseline (the working tree).
    """

    before: Revision
    after: Revision

"""Domain entities for revtree."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class Repository:
    """A version-controlled source tree available on local disk.

    Created once per session: validated in place for local repositories, or
    cloned into a temporary directory for remote ones. Temporary clones are
    never removed by revtree.

    Attributes:
        local_path: Root of the working copy on disk.
        remote_url: URL the working copy was cloned from, if any.
    """

    local_path: Path
    remote_url: str | None = None

    @property
    def is_remote(self) -> bool:
        return self.remote_url is not None

    def resolve(self, path: str | Path) -> Path:
        """Resolve a caller-supplied path against the repository root.

        The path is not checked for traversal outside the root.
        """
        return self.local_path / path


@dataclass(frozen=True)
class FileEntry:
    """Metadata for one directory entry.

    Attributes:
        name: Base name of the entry.
        path: Absolute path of the entry.
        size: Size in bytes (as reported by lstat).
        mode: Raw st_mode bits.
        modified: Last modification time (UTC).
        is_dir: True for directories.
    """

    name: str
    path: Path
    size: int
    mode: int
    modified: datetime
    is_dir: bool

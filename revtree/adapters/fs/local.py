"""Local file system adapter.

Implements the FileSystem port using the standard library pathlib.
"""

from datetime import datetime, timezone
from pathlib import Path
from stat import S_ISDIR
from typing import BinaryIO

from revtree.domain.entities import FileEntry


class LocalFileSystem:
    """Local file system implementation using pathlib."""

    def list_dir(self, path: Path) -> list[FileEntry]:
        """List a directory.

        Args:
            path: Absolute path to a directory.

        Returns:
            Entries sorted by name. Symlinks are described, not followed.

        Raises:
            OSError: If the directory cannot be read.
        """
        entries = []
        for child in sorted(path.iterdir(), key=lambda p: p.name):
            st = child.lstat()
            entries.append(
                FileEntry(
                    name=child.name,
                    path=child,
                    size=st.st_size,
                    mode=st.st_mode,
                    modified=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
                    is_dir=S_ISDIR(st.st_mode),
                )
            )
        return entries

    def open_binary(self, path: Path) -> BinaryIO:
        """Open a file for binary reading.

        Raises:
            OSError: If the file cannot be opened.
        """
        return path.open("rb")

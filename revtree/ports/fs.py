"""File System port interface.

Defines the read-only file system operations used by the versioned accessor.
"""

from pathlib import Path
from typing import BinaryIO, Protocol

from revtree.domain.entities import FileEntry


class FileSystem(Protocol):
    """Protocol for file system reads."""

    def list_dir(self, path: Path) -> list[FileEntry]:
        """List a directory.

        Args:
            path: Absolute path to a directory.

        Returns:
            Entries sorted by name.

        Raises:
            OSError: If the directory cannot be read.
        """
        ...

    def open_binary(self, path: Path) -> BinaryIO:
        """Open a file for binary reading.

        Args:
            path: Absolute path to a file.

        Returns:
            Open stream; the caller must close it.

        Raises:
            OSError: If the file cannot be opened.
        """
        ...

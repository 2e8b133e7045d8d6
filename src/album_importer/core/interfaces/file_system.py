"""Filesystem interface."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List


class IFileSystem(ABC):
    """Interface for the filesystem holding source and storage directories."""

    @abstractmethod
    async def path_exists(self, path: Path) -> bool:
        """Check if a path exists."""
        pass

    @abstractmethod
    async def make_directory(self, path: Path, recursive: bool = True) -> None:
        """Create a directory; existing directories are left alone.

        Raises:
            FileSystemError: If the directory cannot be created.
        """
        pass

    @abstractmethod
    async def remove_recursive(self, path: Path) -> None:
        """Remove a file or directory tree.

        Raises:
            FileSystemError: If removal fails.
        """
        pass

    @abstractmethod
    async def move_directory(self, source: Path, target: Path) -> None:
        """Move a directory to a new location.

        Raises:
            FileSystemError: If the move fails.
        """
        pass

    @abstractmethod
    async def list_directories(self, root: Path) -> List[str]:
        """List names of the visible subdirectories of root.

        Raises:
            FileSystemError: If root cannot be read.
        """
        pass

    @abstractmethod
    async def has_media_files(self, path: Path, extensions: Iterable[str]) -> bool:
        """Check if a directory directly contains a file with one of the extensions."""
        pass

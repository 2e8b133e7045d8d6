"""Local filesystem implementation."""

import shutil
from pathlib import Path
from typing import Iterable, List

import aiofiles.os

from ..config.models import Config
from ..core.interfaces import IFileSystem
from ..utils import FileSystemError, has_extension, is_hidden_file
from .logging import LoggerMixin

_rmtree = aiofiles.os.wrap(shutil.rmtree)
# shutil.move falls back to copy + delete across devices
_move = aiofiles.os.wrap(shutil.move)


class LocalFileSystem(IFileSystem, LoggerMixin):
    """Filesystem access through aiofiles so the event loop never blocks."""

    def __init__(self, config: Config) -> None:
        """Initialize filesystem service.

        Args:
            config: Application configuration.
        """
        self._config = config

    async def path_exists(self, path: Path) -> bool:
        """Check if a path exists."""
        return await aiofiles.os.path.exists(path)

    async def make_directory(self, path: Path, recursive: bool = True) -> None:
        """Create a directory; existing directories are left alone."""
        try:
            if recursive:
                await aiofiles.os.makedirs(path, exist_ok=True)
            elif not await aiofiles.os.path.isdir(path):
                await aiofiles.os.mkdir(path)
        except OSError as e:
            raise FileSystemError(f"Cannot create directory {path}: {e}") from e

    async def remove_recursive(self, path: Path) -> None:
        """Remove a file or directory tree."""
        try:
            if await aiofiles.os.path.islink(path) or await aiofiles.os.path.isfile(path):
                await aiofiles.os.remove(path)
            elif await aiofiles.os.path.isdir(path):
                await _rmtree(path)
        except OSError as e:
            raise FileSystemError(f"Cannot remove {path}: {e}") from e

    async def move_directory(self, source: Path, target: Path) -> None:
        """Move a directory to a new location."""
        try:
            await _move(str(source), str(target))
        except (OSError, shutil.Error) as e:
            raise FileSystemError(f"Cannot move {source} to {target}: {e}") from e

        self.logger.debug(f"Moved {source} -> {target}")

    async def list_directories(self, root: Path) -> List[str]:
        """List names of the visible subdirectories of root, sorted by name."""
        try:
            names = await aiofiles.os.listdir(root)
        except OSError as e:
            raise FileSystemError(f"Cannot list directory {root}: {e}") from e

        folders = []
        for name in names:
            entry = root / name
            if is_hidden_file(entry):
                continue
            if await aiofiles.os.path.isdir(entry):
                folders.append(name)

        return sorted(folders)

    async def has_media_files(self, path: Path, extensions: Iterable[str]) -> bool:
        """Check if a directory directly contains a file with one of the extensions."""
        extensions = list(extensions)
        try:
            names = await aiofiles.os.listdir(path)
        except OSError as e:
            self.logger.warning(f"Cannot read folder content {path}: {e}")
            return False

        for name in names:
            if has_extension(name, extensions) and await aiofiles.os.path.isfile(path / name):
                return True

        return False

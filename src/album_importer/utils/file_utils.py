"""File system utilities."""

import os
from pathlib import Path
from typing import Iterable


def is_hidden_file(path: Path) -> bool:
    """Check if file is hidden.

    Args:
        path: Path to check.

    Returns:
        True if file is hidden.
    """
    # Unix-style hidden files (start with dot)
    if path.name.startswith("."):
        return True

    # Windows hidden files
    if os.name == "nt":
        try:
            import stat

            return bool(path.stat().st_file_attributes & stat.FILE_ATTRIBUTE_HIDDEN)
        except (AttributeError, OSError):
            pass

    return False


def has_extension(name: str, extensions: Iterable[str]) -> bool:
    """Check if a file name ends with one of the extensions (case-insensitive).

    Args:
        name: File name.
        extensions: Extensions with leading dots.

    Returns:
        True if the suffix matches.
    """
    suffix = Path(name).suffix.lower()
    return bool(suffix) and suffix in {ext.lower() for ext in extensions}


def album_storage_path(storage_root: Path, album_id: int) -> Path:
    """Get the storage directory of an album.

    Args:
        storage_root: Permanent storage root.
        album_id: Album ID.

    Returns:
        ``<storage_root>/<album_id>``.
    """
    return storage_root / str(album_id)

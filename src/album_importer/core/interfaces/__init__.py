"""Core interfaces for dependency injection."""

from .catalog_store import ICatalogStore
from .file_system import IFileSystem
from .folder_parser import IFolderNameParser
from .import_executor import IImportExecutor
from .import_orchestrator import IImportOrchestrator

__all__ = [
    "ICatalogStore",
    "IFileSystem",
    "IFolderNameParser",
    "IImportExecutor",
    "IImportOrchestrator",
]

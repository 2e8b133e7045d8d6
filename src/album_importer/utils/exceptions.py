"""Custom exceptions for the application."""


class AlbumImporterError(Exception):
    """Base exception for all application errors."""

    pass


class ConfigurationError(AlbumImporterError):
    """Configuration-related errors."""

    pass


class CatalogStoreError(AlbumImporterError):
    """Catalog store errors."""

    pass


class FileSystemError(AlbumImporterError):
    """Filesystem errors."""

    pass


class ReviewSessionError(AlbumImporterError):
    """Review session errors (unknown item, invalid action)."""

    pass


class OrchestratorError(AlbumImporterError):
    """Orchestrator errors."""

    pass

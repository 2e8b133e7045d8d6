"""Utility functions and classes."""

from .exceptions import (
    AlbumImporterError,
    CatalogStoreError,
    ConfigurationError,
    FileSystemError,
    OrchestratorError,
    ReviewSessionError,
)
from .file_utils import album_storage_path, has_extension, is_hidden_file
from .name_tokens import extract_candidate_names, is_date_token, is_identity_token

__all__ = [
    "AlbumImporterError",
    "ConfigurationError",
    "CatalogStoreError",
    "FileSystemError",
    "ReviewSessionError",
    "OrchestratorError",
    "album_storage_path",
    "has_extension",
    "is_hidden_file",
    "extract_candidate_names",
    "is_date_token",
    "is_identity_token",
]

"""Catalog persistence."""

from .catalog_store import SqlCatalogStore
from .database import Database
from .models import AlbumRecord, Base, ModelRecord, StudioRecord

__all__ = [
    "SqlCatalogStore",
    "Database",
    "Base",
    "StudioRecord",
    "ModelRecord",
    "AlbumRecord",
]

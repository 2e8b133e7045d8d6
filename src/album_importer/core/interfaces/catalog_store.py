"""Catalog store interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import AlbumDraft, AlbumInfo, ModelInfo, StudioInfo


class ICatalogStore(ABC):
    """Interface for the relational store holding studios, models and albums."""

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the store (create tables if configured).

        Raises:
            CatalogStoreError: If the store cannot be prepared.
        """
        pass

    @abstractmethod
    async def find_studio(self, name: str) -> Optional[int]:
        """Look up a studio by name. Never creates studios.

        Args:
            name: Studio name.

        Returns:
            Studio ID or None if no studio matches.

        Raises:
            CatalogStoreError: If the lookup fails.
        """
        pass

    @abstractmethod
    async def create_studio(self, name: str) -> int:
        """Create a curated studio.

        Args:
            name: Studio name.

        Returns:
            ID of the new (or already existing) studio.

        Raises:
            CatalogStoreError: If the name is blank or the insert fails.
        """
        pass

    @abstractmethod
    async def find_or_create_model(self, name: str) -> Optional[int]:
        """Look up a model by name, creating it when missing.

        Args:
            name: Model name.

        Returns:
            Model ID, or None for a blank name.

        Raises:
            CatalogStoreError: If the lookup or insert fails.
        """
        pass

    @abstractmethod
    async def create_album(self, draft: AlbumDraft) -> int:
        """Insert an album record.

        Args:
            draft: Album fields.

        Returns:
            New album ID.

        Raises:
            CatalogStoreError: If the insert fails.
        """
        pass

    @abstractmethod
    async def get_album(self, album_id: int) -> Optional[AlbumInfo]:
        """Get an album by ID."""
        pass

    @abstractmethod
    async def list_studios(self) -> List[StudioInfo]:
        """List all studios ordered by name."""
        pass

    @abstractmethod
    async def list_models(self) -> List[ModelInfo]:
        """List all models ordered by name."""
        pass

    @abstractmethod
    async def count_albums(self) -> int:
        """Count album records."""
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if a trivial query succeeds.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""
        pass

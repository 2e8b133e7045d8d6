"""SQL catalog store implementation."""

import asyncio
from typing import List, Optional, Type, Union

from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from ...config.models import Config
from ...core.interfaces import ICatalogStore
from ...core.models import AlbumDraft, AlbumInfo, ModelInfo, StudioInfo
from ...utils import CatalogStoreError
from ..logging import LoggerMixin
from .database import Database
from .models import AlbumRecord, ModelRecord, StudioRecord

NamedRecord = Union[Type[StudioRecord], Type[ModelRecord]]

# Two imports creating the same model at once collide on the unique name;
# the second attempt finds the row inserted by the winner.
_retry_on_duplicate = retry(
    reraise=True,
    stop=stop_after_attempt(3),
    wait=wait_fixed(0.05),
    retry=retry_if_exception_type(IntegrityError),
)


class SqlCatalogStore(ICatalogStore, LoggerMixin):
    """Catalog store backed by SQLAlchemy's async ORM."""

    def __init__(self, config: Config) -> None:
        """Initialize the store.

        Args:
            config: Application configuration.
        """
        self._config = config
        self._database = Database(config.catalog)
        self._initialized = False
        self._init_lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Create tables when configured to."""
        if self._initialized:
            return

        async with self._init_lock:
            if self._initialized:
                return

            if self._config.catalog.create_tables:
                try:
                    await self._database.create_tables()
                except SQLAlchemyError as e:
                    raise CatalogStoreError(f"Failed to create catalog tables: {e}") from e

            self._initialized = True

    async def find_studio(self, name: str) -> Optional[int]:
        """Look up a studio by name. Never creates studios."""
        trimmed = (name or "").strip()
        if not trimmed:
            return None

        await self.initialize()

        try:
            async with self._database.session_scope() as session:
                return await self._find_id(session, StudioRecord, trimmed)
        except SQLAlchemyError as e:
            error_msg = f"Failed to look up studio '{trimmed}': {e}"
            self.logger.error(error_msg)
            raise CatalogStoreError(error_msg) from e

    async def create_studio(self, name: str) -> int:
        """Create a curated studio, returning the existing ID if present."""
        trimmed = (name or "").strip()
        if not trimmed:
            raise CatalogStoreError("Studio name must not be empty")

        await self.initialize()

        try:
            studio_id = await self._find_or_create(StudioRecord, trimmed, intro=trimmed)
        except SQLAlchemyError as e:
            error_msg = f"Failed to create studio '{trimmed}': {e}"
            self.logger.error(error_msg)
            raise CatalogStoreError(error_msg) from e

        self.logger.info(f"Studio ready: {trimmed} (id={studio_id})")
        return studio_id

    async def find_or_create_model(self, name: str) -> Optional[int]:
        """Look up a model by name, creating it when missing."""
        trimmed = (name or "").strip()
        if not trimmed:
            return None

        await self.initialize()

        try:
            return await self._find_or_create(ModelRecord, trimmed)
        except SQLAlchemyError as e:
            error_msg = f"Failed to find or create model '{trimmed}': {e}"
            self.logger.error(error_msg)
            raise CatalogStoreError(error_msg) from e

    async def create_album(self, draft: AlbumDraft) -> int:
        """Insert an album record."""
        await self.initialize()

        try:
            async with self._database.session_scope() as session:
                record = AlbumRecord(
                    title=draft.title,
                    studio_id=draft.studio_id,
                    model_id=draft.model_id,
                    resource_url=draft.resource_url,
                    source_page_url=draft.source_page_url,
                )
                session.add(record)
                await session.flush()
                album_id = record.id
        except SQLAlchemyError as e:
            error_msg = f"Failed to create album '{draft.title}': {e}"
            self.logger.error(error_msg)
            raise CatalogStoreError(error_msg) from e

        self.logger.debug(f"Created album {album_id}: {draft.title}")
        return album_id

    async def get_album(self, album_id: int) -> Optional[AlbumInfo]:
        """Get an album by ID."""
        await self.initialize()

        try:
            async with self._database.session_scope() as session:
                record = await session.get(AlbumRecord, album_id)
                if record is None:
                    return None
                return AlbumInfo(
                    id=record.id,
                    title=record.title,
                    studio_id=record.studio_id,
                    model_id=record.model_id,
                    resource_url=record.resource_url,
                    source_page_url=record.source_page_url,
                    created_at=record.created_at,
                )
        except SQLAlchemyError as e:
            raise CatalogStoreError(f"Failed to get album {album_id}: {e}") from e

    async def list_studios(self) -> List[StudioInfo]:
        """List all studios ordered by name."""
        await self.initialize()

        try:
            async with self._database.session_scope() as session:
                result = await session.execute(select(StudioRecord).order_by(StudioRecord.name))
                return [StudioInfo(id=row.id, name=row.name) for row in result.scalars()]
        except SQLAlchemyError as e:
            raise CatalogStoreError(f"Failed to list studios: {e}") from e

    async def list_models(self) -> List[ModelInfo]:
        """List all models ordered by name."""
        await self.initialize()

        try:
            async with self._database.session_scope() as session:
                result = await session.execute(select(ModelRecord).order_by(ModelRecord.name))
                return [ModelInfo(id=row.id, name=row.name) for row in result.scalars()]
        except SQLAlchemyError as e:
            raise CatalogStoreError(f"Failed to list models: {e}") from e

    async def count_albums(self) -> int:
        """Count album records."""
        await self.initialize()

        try:
            async with self._database.session_scope() as session:
                result = await session.execute(select(func.count(AlbumRecord.id)))
                return int(result.scalar_one())
        except SQLAlchemyError as e:
            raise CatalogStoreError(f"Failed to count albums: {e}") from e

    async def ping(self) -> bool:
        """Check if the store is reachable."""
        try:
            async with self._database.session_scope() as session:
                await session.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            self.logger.warning(f"Catalog store ping failed: {e}")
            return False

    async def close(self) -> None:
        """Release connections."""
        await self._database.close()

    @_retry_on_duplicate
    async def _find_or_create(self, record_type: NamedRecord, name: str, **extra: str) -> int:
        """Find a named row or insert it.

        Args:
            record_type: StudioRecord or ModelRecord.
            name: Trimmed name.
            **extra: Additional column values for a new row.

        Returns:
            Row ID.
        """
        async with self._database.session_scope() as session:
            existing_id = await self._find_id(session, record_type, name)
            if existing_id is not None:
                return existing_id

            record = record_type(name=name, **extra)
            session.add(record)
            await session.flush()
            self.logger.info(f"Created {record_type.__tablename__[:-1]}: {name} (id={record.id})")
            return record.id

    @staticmethod
    async def _find_id(session, record_type: NamedRecord, name: str) -> Optional[int]:
        result = await session.execute(
            select(record_type.id).where(record_type.name == name).limit(1)
        )
        return result.scalar_one_or_none()

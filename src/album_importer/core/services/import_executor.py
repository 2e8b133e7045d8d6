"""Import executor service implementation."""

import asyncio
import time
import uuid
from pathlib import Path
from typing import Optional, Sequence

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import FileSystemError, album_storage_path
from ..interfaces import ICatalogStore, IFileSystem, IImportExecutor
from ..models import AlbumDraft, ImportItem, ImportOutcome, ImportStatus, ImportSummary

STUDIO_NOT_FOUND = "studio not found"
MOVE_FAILED = "folder move failed"
NO_MEDIA_FILES = "no media files"
SOURCE_NOT_FOUND = "source folder not found"
DRY_RUN = "dry run"


class ImportExecutor(IImportExecutor, LoggerMixin):
    """Commits reviewed folders into the catalog and permanent storage.

    For each item:
        - resolve (or create) the model
        - resolve the studio, which must already exist
        - create the album record with a placeholder resource URL
        - move the folder to ``<storage_root>/<album_id>``

    Items run concurrently in fixed-size batches; batches run one after
    another. Each item ends up as exactly one outcome in the summary.
    """

    def __init__(
        self,
        config: Config,
        catalog_store: ICatalogStore,
        file_system: IFileSystem,
    ):
        """Initialize import executor.

        Args:
            config: Application configuration.
            catalog_store: Catalog store.
            file_system: Filesystem access.
        """
        self._config = config
        self._settings = config.import_config
        self._catalog_store = catalog_store
        self._file_system = file_system
        self._import_root = Path(config.paths.import_root)
        self._storage_root = Path(config.paths.storage_root)

    async def import_batch(self, items: Sequence[ImportItem]) -> ImportSummary:
        """Import folders, creating catalog records and relocating content.

        Args:
            items: Folders to import.

        Returns:
            Import summary with one outcome per item, in input order.
        """
        start_time = time.time()
        summary = ImportSummary(total=len(items))
        batch_size = self._settings.batch_size

        for start in range(0, len(items), batch_size):
            chunk = items[start : start + batch_size]
            self.logger.debug(f"Importing items {start + 1}-{start + len(chunk)} of {len(items)}")

            outcomes = await asyncio.gather(*(self._import_item(item) for item in chunk))
            for outcome in outcomes:
                summary.add_outcome(outcome)

        summary.processing_time_seconds = time.time() - start_time
        self.logger.info(
            f"Import finished: {summary.imported} imported, {summary.skipped} skipped, "
            f"{summary.failed} failed"
        )
        return summary

    async def _import_item(self, item: ImportItem) -> ImportOutcome:
        """Import a single folder.

        Args:
            item: Folder to import.

        Returns:
            Outcome of the item. Never raises.
        """
        outcome = ImportOutcome(
            source_folder=item.folder_name,
            status=ImportStatus.FAILED,
            studio=item.studio or None,
            model=item.model or None,
            title=item.folder_name,
        )
        source = self._import_root / item.folder_name

        try:
            if self._settings.require_media_content:
                reason = await self._check_source(source)
                if reason is not None:
                    outcome.reason = reason
                    if reason == NO_MEDIA_FILES:
                        outcome.status = ImportStatus.SKIPPED
                    return self._finish(outcome)

            if self._config.app.dry_run:
                studio_id = await self._catalog_store.find_studio(item.studio)
                if studio_id is None:
                    outcome.reason = STUDIO_NOT_FOUND
                else:
                    outcome.status = ImportStatus.SKIPPED
                    outcome.reason = DRY_RUN
                return self._finish(outcome)

            model_id = await self._catalog_store.find_or_create_model(item.model)
            studio_id = await self._catalog_store.find_studio(item.studio)
            if studio_id is None:
                outcome.reason = STUDIO_NOT_FOUND
                return self._finish(outcome)

            album_id = await self._catalog_store.create_album(
                AlbumDraft(
                    title=item.folder_name,
                    studio_id=studio_id,
                    model_id=model_id,
                    resource_url=self._placeholder_resource_url(),
                )
            )
            # Kept even if the move fails so the move can be retried later
            outcome.album_id = album_id

            if not await self._relocate(source, album_storage_path(self._storage_root, album_id)):
                outcome.reason = MOVE_FAILED
                return self._finish(outcome)

            outcome.status = ImportStatus.SUCCESS
            return self._finish(outcome)

        except Exception as e:
            outcome.status = ImportStatus.FAILED
            outcome.reason = str(e) or e.__class__.__name__
            return self._finish(outcome)

    async def _check_source(self, source: Path) -> Optional[str]:
        if not await self._file_system.path_exists(source):
            return SOURCE_NOT_FOUND
        if not await self._file_system.has_media_files(source, self._settings.media_extensions):
            return NO_MEDIA_FILES
        return None

    async def _relocate(self, source: Path, destination: Path) -> bool:
        """Move a source folder into permanent storage.

        An existing destination is removed first. Nothing locks the
        destination; album IDs are unique so two items never share one.

        Args:
            source: Source folder.
            destination: Album storage directory.

        Returns:
            True if the destination exists after the move.
        """
        try:
            await self._file_system.make_directory(self._storage_root, recursive=True)
            if await self._file_system.path_exists(destination):
                await self._file_system.remove_recursive(destination)
            await self._file_system.move_directory(source, destination)
            return await self._file_system.path_exists(destination)
        except (FileSystemError, OSError) as e:
            self.logger.error(f"Failed to move {source} to {destination}: {e}")
            return False

    def _placeholder_resource_url(self) -> str:
        timestamp = int(time.time() * 1000)
        return f"{self._settings.resource_url_scheme}://imported-{timestamp}-{uuid.uuid4().hex[:8]}"

    def _finish(self, outcome: ImportOutcome) -> ImportOutcome:
        if outcome.status == ImportStatus.FAILED:
            self.logger.error(f"Import of '{outcome.source_folder}' failed: {outcome.reason}")
        elif outcome.status == ImportStatus.SKIPPED:
            self.logger.info(f"Skipped '{outcome.source_folder}': {outcome.reason}")
        else:
            self.logger.info(
                f"Imported '{outcome.source_folder}' as album {outcome.album_id}"
            )
        return outcome

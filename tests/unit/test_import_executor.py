"""Test import executor service."""

import asyncio
from pathlib import Path

import pytest

from album_importer.core.models import AlbumDraft, ImportItem, ImportStatus
from album_importer.core.services import ImportExecutor
from album_importer.core.services.import_executor import (
    DRY_RUN,
    MOVE_FAILED,
    NO_MEDIA_FILES,
    SOURCE_NOT_FOUND,
    STUDIO_NOT_FOUND,
)
from album_importer.utils import CatalogStoreError, FileSystemError


def _item(folder_name: str, studio: str = "MetArt", model: str = "Emma") -> ImportItem:
    return ImportItem(folder_name=folder_name, studio=studio, model=model, title=folder_name)


@pytest.mark.asyncio
async def test_import_single_item(config, mock_catalog_store, mock_file_system, storage_root):
    """Test the happy path creates records and moves the folder."""
    executor = ImportExecutor(config, mock_catalog_store, mock_file_system)

    summary = await executor.import_batch([_item("[MetArt][Emma]Summer Dreams")])

    assert summary.success
    assert summary.total == 1
    assert summary.imported == 1
    outcome = summary.details[0]
    assert outcome.status == ImportStatus.SUCCESS
    assert outcome.album_id == 100

    mock_catalog_store.find_or_create_model.assert_awaited_once_with("Emma")
    mock_catalog_store.find_studio.assert_awaited_once_with("MetArt")

    draft: AlbumDraft = mock_catalog_store.create_album.await_args.args[0]
    assert draft.title == "[MetArt][Emma]Summer Dreams"
    assert draft.studio_id == 1
    assert draft.model_id == 2
    assert draft.resource_url.startswith("local://imported-")

    mock_file_system.move_directory.assert_awaited_once_with(
        Path(config.paths.import_root) / "[MetArt][Emma]Summer Dreams", storage_root / "100"
    )


@pytest.mark.asyncio
async def test_existing_destination_removed_first(config, mock_catalog_store, mock_file_system):
    """Test that a stale destination directory is replaced."""
    executor = ImportExecutor(config, mock_catalog_store, mock_file_system)

    await executor.import_batch([_item("folder")])

    mock_file_system.make_directory.assert_awaited_once()
    mock_file_system.remove_recursive.assert_awaited_once()


@pytest.mark.asyncio
async def test_move_failure_keeps_album_id(config, mock_catalog_store, mock_file_system):
    """Test that a failed move is reported with the created album id."""
    mock_file_system.move_directory.side_effect = FileSystemError("disk full")
    executor = ImportExecutor(config, mock_catalog_store, mock_file_system)

    summary = await executor.import_batch([_item("folder")])

    assert summary.failed == 1
    assert summary.details[0].status == ImportStatus.FAILED
    assert summary.details[0].reason == MOVE_FAILED
    assert summary.details[0].album_id == 100


@pytest.mark.asyncio
async def test_unverified_move_is_failure(config, mock_catalog_store, mock_file_system):
    """Test that a destination missing after the move counts as a move failure."""
    # destination missing before and after the move
    mock_file_system.path_exists.side_effect = [False, False]
    executor = ImportExecutor(config, mock_catalog_store, mock_file_system)

    summary = await executor.import_batch([_item("folder")])

    assert summary.details[0].reason == MOVE_FAILED
    assert summary.details[0].album_id is not None


@pytest.mark.asyncio
async def test_unknown_studio_is_never_created(config, mock_catalog_store, mock_file_system):
    """Test that an unknown studio fails the item without an album."""
    mock_catalog_store.find_studio.return_value = None
    executor = ImportExecutor(config, mock_catalog_store, mock_file_system)

    summary = await executor.import_batch([_item("folder", studio="Nobody")])

    assert summary.failed == 1
    assert summary.details[0].reason == STUDIO_NOT_FOUND
    assert summary.details[0].album_id is None
    mock_catalog_store.create_studio.assert_not_awaited()
    mock_catalog_store.create_album.assert_not_awaited()
    mock_file_system.move_directory.assert_not_awaited()


@pytest.mark.asyncio
async def test_item_errors_do_not_abort_batch(config, mock_catalog_store, mock_file_system):
    """Test that a store error fails one item and the rest still import."""

    async def find_or_create_model(name):
        if name == "Broken":
            raise CatalogStoreError("database is locked")
        return 2

    mock_catalog_store.find_or_create_model.side_effect = find_or_create_model
    executor = ImportExecutor(config, mock_catalog_store, mock_file_system)

    summary = await executor.import_batch(
        [_item("a"), _item("b", model="Broken"), _item("c")]
    )

    assert summary.total == 3
    assert summary.imported == 2
    assert summary.failed == 1
    assert [outcome.source_folder for outcome in summary.details] == ["a", "b", "c"]
    assert summary.details[1].reason == "database is locked"


@pytest.mark.asyncio
async def test_batches_run_sequentially(config, mock_catalog_store, mock_file_system):
    """Test that at most batch_size items are in flight at once."""
    config.import_config.batch_size = 3
    in_flight = 0
    peak = 0

    async def move_directory(source, target):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1

    mock_file_system.move_directory.side_effect = move_directory
    executor = ImportExecutor(config, mock_catalog_store, mock_file_system)

    summary = await executor.import_batch([_item(f"folder-{i}") for i in range(7)])

    assert summary.imported == 7
    assert peak == 3
    assert [outcome.source_folder for outcome in summary.details] == [
        f"folder-{i}" for i in range(7)
    ]


@pytest.mark.asyncio
async def test_empty_batch(config, mock_catalog_store, mock_file_system):
    """Test that an empty batch reports zeros."""
    executor = ImportExecutor(config, mock_catalog_store, mock_file_system)

    summary = await executor.import_batch([])

    assert summary.success
    assert summary.total == 0
    assert summary.details == []


@pytest.mark.asyncio
async def test_dry_run_writes_nothing(config, mock_catalog_store, mock_file_system):
    """Test that dry run only reports."""
    config.app.dry_run = True
    executor = ImportExecutor(config, mock_catalog_store, mock_file_system)

    summary = await executor.import_batch([_item("folder")])

    assert summary.skipped == 1
    assert summary.details[0].reason == DRY_RUN
    mock_catalog_store.find_or_create_model.assert_not_awaited()
    mock_catalog_store.create_album.assert_not_awaited()
    mock_file_system.move_directory.assert_not_awaited()


@pytest.mark.asyncio
async def test_media_check(config, mock_catalog_store, mock_file_system):
    """Test that folders without media are skipped before any catalog write."""
    config.import_config.require_media_content = True
    mock_file_system.has_media_files.return_value = False
    executor = ImportExecutor(config, mock_catalog_store, mock_file_system)

    summary = await executor.import_batch([_item("folder")])

    assert summary.skipped == 1
    assert summary.details[0].reason == NO_MEDIA_FILES
    mock_catalog_store.find_or_create_model.assert_not_awaited()


@pytest.mark.asyncio
async def test_media_check_missing_source(config, mock_catalog_store, mock_file_system):
    """Test that a missing source folder fails when content is checked."""
    config.import_config.require_media_content = True
    mock_file_system.path_exists.return_value = False
    executor = ImportExecutor(config, mock_catalog_store, mock_file_system)

    summary = await executor.import_batch([_item("folder")])

    assert summary.failed == 1
    assert summary.details[0].reason == SOURCE_NOT_FOUND

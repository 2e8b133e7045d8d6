"""End-to-end import tests with SQLite and real directories."""

import pytest

from album_importer.core.interfaces import ICatalogStore, IImportOrchestrator
from album_importer.core.models import (
    ConfidenceTier,
    ImportItem,
    ImportStatus,
    ItemAction,
    TierAction,
)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_review_and_import(container, make_album_folder, import_root, storage_root):
    """Test the guided flow from folder listing to stored albums."""
    make_album_folder("[MetArt][Emma]Summer Dreams")
    make_album_folder("Emma @ MetArt")
    make_album_folder("[Unknown][Jane]Beach")
    make_album_folder("2023-05-01 - Playboy - Jane Doe")

    orchestrator = container.get(IImportOrchestrator)
    store = container.get(ICatalogStore)

    try:
        await store.create_studio("MetArt")

        session = await orchestrator.create_review_session()
        assert len(session.items) == 4

        folder_ids = {item.folder_name: item.id for item in session.items}
        confirmed = session.apply_tier_action(ConfidenceTier.HIGH, TierAction.CONFIRM_ALL)
        assert sorted(confirmed) == sorted(
            [folder_ids["[MetArt][Emma]Summer Dreams"], folder_ids["[Unknown][Jane]Beach"]]
        )
        session.item_action(folder_ids["Emma @ MetArt"], ItemAction.CONFIRM)
        session.item_action(folder_ids["2023-05-01 - Playboy - Jane Doe"], ItemAction.SKIP)

        summary = await orchestrator.import_selected_albums(session.to_import_items())

        assert summary.total == 3
        assert summary.imported == 2
        assert summary.failed == 1

        outcomes = {outcome.source_folder: outcome for outcome in summary.details}
        assert outcomes["[Unknown][Jane]Beach"].reason == "studio not found"
        assert (import_root / "[Unknown][Jane]Beach").exists()
        assert (import_root / "2023-05-01 - Playboy - Jane Doe").exists()

        for name in ("[MetArt][Emma]Summer Dreams", "Emma @ MetArt"):
            outcome = outcomes[name]
            assert outcome.status == ImportStatus.SUCCESS
            assert (storage_root / str(outcome.album_id) / "001.jpg").exists()
            assert not (import_root / name).exists()

            album = await store.get_album(outcome.album_id)
            assert album.title == name

        assert [model.name for model in await store.list_models()] == ["Emma", "Jane"]
        assert await store.count_albums() == 2
    finally:
        await container.aclose()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_failed_move_keeps_album(container):
    """Test that an album created before a failed move stays in the catalog."""
    orchestrator = container.get(IImportOrchestrator)
    store = container.get(ICatalogStore)

    try:
        await store.create_studio("MetArt")

        # The source folder does not exist, so the move itself fails
        summary = await orchestrator.import_selected_albums(
            [ImportItem(folder_name="[MetArt][Emma]Gone", studio="MetArt", model="Emma")]
        )

        assert summary.failed == 1
        outcome = summary.details[0]
        assert outcome.status == ImportStatus.FAILED
        assert outcome.reason == "folder move failed"
        assert outcome.album_id is not None
        assert await store.get_album(outcome.album_id) is not None
    finally:
        await container.aclose()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_import_all_pending(container, make_album_folder, storage_root):
    """Test importing every strictly named folder without review."""
    make_album_folder("[MetArt][Emma]One")
    make_album_folder("[MetArt][]Two")
    make_album_folder("Emma @ MetArt")

    orchestrator = container.get(IImportOrchestrator)
    store = container.get(ICatalogStore)

    try:
        await store.create_studio("MetArt")

        summary = await orchestrator.import_all_pending_albums()

        assert summary.success
        assert summary.total == 3
        assert summary.imported == 2
        assert summary.failed == 1
        assert [outcome.source_folder for outcome in summary.details] == [
            "Emma @ MetArt",
            "[MetArt][Emma]One",
            "[MetArt][]Two",
        ]

        no_model = summary.details[2]
        assert (await store.get_album(no_model.album_id)).model_id is None
        assert len(list(storage_root.iterdir())) == 2
    finally:
        await container.aclose()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_media_content_required(container, config, make_album_folder):
    """Test that folders without media are skipped when content is checked."""
    config.import_config.require_media_content = True
    make_album_folder("[MetArt][Emma]Empty", files=("readme.txt",))

    orchestrator = container.get(IImportOrchestrator)
    store = container.get(ICatalogStore)

    try:
        await store.create_studio("MetArt")

        summary = await orchestrator.import_all_pending_albums()

        assert summary.skipped == 1
        assert summary.details[0].reason == "no media files"
        assert await store.list_models() == []
    finally:
        await container.aclose()

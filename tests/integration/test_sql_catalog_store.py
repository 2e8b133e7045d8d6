"""Catalog store integration tests on a SQLite file database."""

import pytest
from sqlalchemy.exc import IntegrityError

from album_importer.core.models import AlbumDraft
from album_importer.infrastructure.persistence import SqlCatalogStore
from album_importer.utils import CatalogStoreError


@pytest.fixture
def store(config):
    """Catalog store on the temporary database."""
    return SqlCatalogStore(config)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_studios_are_never_created_by_lookup(store):
    """Test that find_studio only reads."""
    try:
        assert await store.find_studio("MetArt") is None
        assert await store.find_studio("   ") is None
        assert await store.list_studios() == []

        studio_id = await store.create_studio(" MetArt ")

        assert await store.find_studio("MetArt") == studio_id
        assert await store.create_studio("MetArt") == studio_id
        assert [studio.name for studio in await store.list_studios()] == ["MetArt"]
    finally:
        await store.close()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_blank_studio_rejected(store):
    """Test that a studio needs a name."""
    try:
        with pytest.raises(CatalogStoreError):
            await store.create_studio("  ")
    finally:
        await store.close()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_find_or_create_model(store):
    """Test that models are created once and blank names give no model."""
    try:
        assert await store.find_or_create_model("") is None

        first = await store.find_or_create_model("Emma")
        second = await store.find_or_create_model(" Emma ")

        assert first == second
        assert [model.name for model in await store.list_models()] == ["Emma"]
    finally:
        await store.close()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_duplicate_insert_is_retried(store):
    """Test that a unique-constraint error on insert leads to a second lookup."""
    try:
        await store.initialize()
        model_id = await store.find_or_create_model("Emma")

        original = store._find_id
        calls = []

        async def stale_then_real(session, record_type, name):
            calls.append(name)
            if len(calls) == 1:
                return None
            return await original(session, record_type, name)

        store._find_id = stale_then_real

        assert await store.find_or_create_model("Emma") == model_id
        assert len(calls) == 2
    finally:
        await store.close()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_and_get_album(store):
    """Test album creation with and without a model."""
    try:
        studio_id = await store.create_studio("MetArt")
        model_id = await store.find_or_create_model("Emma")

        album_id = await store.create_album(
            AlbumDraft(
                title="[MetArt][Emma]Summer Dreams",
                studio_id=studio_id,
                model_id=model_id,
                resource_url="local://imported-1-abc",
            )
        )
        no_model_id = await store.create_album(
            AlbumDraft(
                title="[MetArt][]Sunset",
                studio_id=studio_id,
                model_id=None,
                resource_url="local://imported-2-def",
            )
        )

        album = await store.get_album(album_id)
        assert album is not None
        assert album.title == "[MetArt][Emma]Summer Dreams"
        assert album.model_id == model_id
        assert album.created_at is not None
        assert (await store.get_album(no_model_id)).model_id is None
        assert await store.get_album(9999) is None
        assert await store.count_albums() == 2
    finally:
        await store.close()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_album_requires_existing_studio(store):
    """Test that the foreign key on studio is enforced."""
    try:
        with pytest.raises(CatalogStoreError) as exc_info:
            await store.create_album(
                AlbumDraft(title="x", studio_id=42, resource_url="local://imported-3-ghi")
            )
        assert isinstance(exc_info.value.__cause__, IntegrityError)
    finally:
        await store.close()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_ping(store):
    """Test that the store answers a trivial query."""
    try:
        assert await store.ping()
    finally:
        await store.close()

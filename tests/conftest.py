"""Pytest configuration and fixtures."""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import yaml

from album_importer.config import ConfigManager
from album_importer.core.interfaces import ICatalogStore, IFileSystem
from album_importer.core.services import FolderNameParser
from album_importer.infrastructure import Container


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests without I/O")
    config.addinivalue_line("markers", "integration: tests touching SQLite and real directories")


@pytest.fixture
def import_root(tmp_path):
    """Directory holding folders waiting for import."""
    path = tmp_path / "incoming"
    path.mkdir()
    return path


@pytest.fixture
def storage_root(tmp_path):
    """Permanent album storage directory (created on first import)."""
    return tmp_path / "albums"


@pytest.fixture
def config_data(tmp_path, import_root, storage_root):
    """Raw configuration used by the temporary config file."""
    return {
        "paths": {
            "import_root": str(import_root),
            "storage_root": str(storage_root),
        },
        "catalog": {
            "url": f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
        },
        "import": {
            "batch_size": 10,
            "require_media_content": False,
        },
        "logging": {
            "level": "WARNING",
        },
        "app": {
            "interactive": False,
        },
    }


@pytest.fixture
def temp_config_file(tmp_path, config_data):
    """Create a temporary configuration file."""
    config_file = tmp_path / "config.yaml"
    with open(config_file, "w") as f:
        yaml.dump(config_data, f, default_flow_style=False, indent=2)
    return config_file


@pytest.fixture
def config_manager(temp_config_file):
    """Create a configuration manager with test config."""
    return ConfigManager(temp_config_file)


@pytest.fixture
def config(config_manager):
    """Load test configuration."""
    return config_manager.load_config()


@pytest.fixture
def container(config_manager):
    """Create a test container with default services."""
    container = Container(config_manager)
    container.configure_default_services()
    return container


@pytest.fixture
def parser(config):
    """Folder name parser with default strategies."""
    return FolderNameParser(config)


@pytest.fixture
def mock_catalog_store():
    """Catalog store where every studio exists."""
    store = AsyncMock(spec=ICatalogStore)
    store.find_studio.return_value = 1
    store.find_or_create_model.return_value = 2
    store.create_album.side_effect = range(100, 1000)
    store.ping.return_value = True
    return store


@pytest.fixture
def mock_file_system():
    """Filesystem where every move succeeds."""
    file_system = AsyncMock(spec=IFileSystem)
    file_system.path_exists.return_value = True
    file_system.has_media_files.return_value = True
    file_system.list_directories.return_value = []
    return file_system


@pytest.fixture
def make_album_folder(import_root):
    """Create a folder in the import root with one image."""

    def _make(name: str, files=("001.jpg",)) -> Path:
        folder = import_root / name
        folder.mkdir()
        for file_name in files:
            (folder / file_name).write_bytes(b"fake image content")
        return folder

    return _make

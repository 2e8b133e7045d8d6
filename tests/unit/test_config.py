"""Test configuration management."""

from pathlib import Path

import pytest

from album_importer.config import Config, ConfigManager
from album_importer.core.interfaces import IFolderNameParser, IImportOrchestrator
from album_importer.core.services import FolderNameParser, ImportOrchestrator


def test_config_manager_loads_config(config_manager, import_root):
    """Test that config manager loads configuration correctly."""
    config = config_manager.load_config()

    assert isinstance(config, Config)
    assert config.paths.import_root == str(import_root)
    assert config.import_config.batch_size == 10
    assert config.parsing.human_verified_confidence == 95
    assert config.tiers.high_threshold == 80
    assert config.app.interactive is False


def test_config_manager_caches_config(config_manager):
    """Test that config manager caches loaded configuration."""
    config1 = config_manager.load_config()
    config2 = config_manager.get_config()

    assert config1 is config2


def test_config_manager_reload_config(config_manager):
    """Test that config manager can reload configuration."""
    config1 = config_manager.load_config()
    config2 = config_manager.reload_config()

    assert config1 is not config2
    assert config1.paths == config2.paths


def test_config_manager_missing_file():
    """Test that config manager raises error for missing file."""
    config_manager = ConfigManager(Path("nonexistent.yaml"))

    with pytest.raises(FileNotFoundError):
        config_manager.load_config()


def test_environment_variables_expanded(tmp_path, monkeypatch):
    """Test ${VAR} expansion in configuration values."""
    monkeypatch.setenv("ALBUM_TEST_ROOT", str(tmp_path))
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        'paths:\n  import_root: "${ALBUM_TEST_ROOT}/in"\n  storage_root: "${ALBUM_TEST_ROOT}/out"\n'
    )

    config = ConfigManager(config_file).load_config()

    assert config.paths.import_root == f"{tmp_path}/in"
    assert config.paths.storage_root == f"{tmp_path}/out"


def test_dotenv_file_loaded(tmp_path, monkeypatch):
    """Test that a .env file next to the config provides variables."""
    monkeypatch.delenv("ALBUM_DOTENV_ROOT", raising=False)
    (tmp_path / ".env").write_text(f"ALBUM_DOTENV_ROOT={tmp_path}\n")
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        'paths:\n  import_root: "${ALBUM_DOTENV_ROOT}/in"\n  storage_root: "/srv/albums"\n'
    )

    try:
        config = ConfigManager(config_file).load_config()
    finally:
        monkeypatch.delenv("ALBUM_DOTENV_ROOT", raising=False)

    assert config.paths.import_root == f"{tmp_path}/in"


def test_config_env_location(temp_config_file, monkeypatch):
    """Test that ALBUM_IMPORTER_CONFIG points at the configuration file."""
    monkeypatch.setenv("ALBUM_IMPORTER_CONFIG", str(temp_config_file))

    config = ConfigManager().load_config()

    assert config.app.interactive is False


def test_config_validation_invalid_tiers(tmp_path):
    """Test that the medium threshold must be below the high one."""
    config_file = tmp_path / "invalid.yaml"
    config_file.write_text(
        "paths:\n  import_root: /in\n  storage_root: /out\n"
        "tiers:\n  high_threshold: 50\n  medium_threshold: 80\n"
    )

    config_manager = ConfigManager(config_file)

    with pytest.raises(ValueError):
        config_manager.load_config()
    assert not config_manager.validate_config_file(config_file)


def test_config_requires_paths(tmp_path):
    """Test that paths are mandatory."""
    config_file = tmp_path / "no_paths.yaml"
    config_file.write_text("logging:\n  level: INFO\n")

    assert not ConfigManager(config_file).validate_config_file(config_file)


def test_media_extensions_normalized(tmp_path):
    """Test that extensions are lowercased and dotted."""
    config = Config(
        paths={"import_root": str(tmp_path), "storage_root": str(tmp_path / "albums")},
        **{"import": {"media_extensions": ["JPG", ".PNG"]}},
    )

    assert config.import_config.media_extensions == [".jpg", ".png"]


def test_create_default_config(tmp_path):
    """Test creating default configuration file."""
    output_path = tmp_path / "default_config.yaml"

    ConfigManager.create_default_config(output_path)

    assert output_path.exists()
    content = output_path.read_text()
    assert "paths:" in content
    assert "import_root" in content


def test_container_resolves_services(container):
    """Test that the container wires services through constructor injection."""
    parser = container.get(IFolderNameParser)
    orchestrator = container.get(IImportOrchestrator)

    assert isinstance(parser, FolderNameParser)
    assert isinstance(orchestrator, ImportOrchestrator)
    assert container.get(IFolderNameParser) is parser

import pytest

from subtrack.config_loader import DEFAULT_CONFIG, ConfigLoader, load_settings
from subtrack.exceptions import ConfigurationError


def test_load_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("cache_max_age: 60\npublic_dir: /srv/public\n", encoding="utf-8")
    assert ConfigLoader().load_config(str(path)) == {"cache_max_age": 60, "public_dir": "/srv/public"}


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigLoader().load_config(str(tmp_path / "nope.yaml"))


def test_directory_path_raises(tmp_path):
    with pytest.raises(ConfigurationError):
        ConfigLoader().load_config(str(tmp_path))


def test_invalid_yaml_raises(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("a: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        ConfigLoader().load_config(str(path))


def test_non_mapping_root_raises(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        ConfigLoader().load_config(str(path))


def test_load_settings_defaults(monkeypatch):
    monkeypatch.delenv("SUBTRACK_CONFIG", raising=False)
    assert load_settings() == DEFAULT_CONFIG


def test_load_settings_overlays_file(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("port: 9000\n", encoding="utf-8")
    monkeypatch.setenv("SUBTRACK_CONFIG", str(path))
    settings = load_settings()
    assert settings["port"] == 9000
    assert settings["cache_max_age"] == 3600

# quotesync Config Tests
# Tests for configuration loading and validation

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from quotesync.config.defaults import DEFAULT_CONFIG, generate_default_config
from quotesync.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    load_or_default_config,
    save_config,
    validate_config_file,
)
from quotesync.config.schema import QuoteSyncConfig, RemoteConfig


class TestQuoteSyncConfig:
    """Tests for QuoteSyncConfig schema."""

    def test_defaults(self):
        config = QuoteSyncConfig()
        assert config.remote.endpoint_url is None
        assert config.remote.poll_interval_ms == 30_000
        assert config.remote.use_fallback is True

    def test_full_config(self, sample_config: dict):
        config = QuoteSyncConfig.model_validate(sample_config)
        assert config.remote.poll_interval_ms == 1000
        assert config.remote.fallback_latency_ms == 0

    def test_empty_endpoint_is_none(self):
        assert RemoteConfig(endpoint_url="  ").endpoint_url is None

    def test_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            RemoteConfig(poll_interval_ms=0)

    def test_storage_path_expanded(self):
        config = QuoteSyncConfig.model_validate({"storage": {"path": "~/quotes.yaml"}})
        assert not config.storage.path.startswith("~")


class TestConfigLoader:
    """Tests for configuration loading."""

    def test_load_config(self, config_file: Path, temp_dir: Path):
        config = load_config(config_file)
        assert config.storage.path == str(temp_dir / "quotes.yaml")

    def test_load_missing_raises(self, temp_dir: Path):
        with pytest.raises(FileNotFoundError):
            load_config(temp_dir / "missing.yaml")

    def test_partial_config_merged_with_defaults(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text("remote:\n  endpoint_url: https://example.com/api/quotes\n", encoding="utf-8")

        config = load_config(path)

        assert config.remote.endpoint_url == "https://example.com/api/quotes"
        assert config.remote.poll_interval_ms == DEFAULT_CONFIG["remote"]["poll_interval_ms"]

    def test_load_or_default_without_file(self, temp_dir: Path):
        config = load_or_default_config(temp_dir / "missing.yaml")
        assert config.remote.endpoint_url is None
        assert not (temp_dir / "missing.yaml").exists()

    def test_save_and_reload(self, temp_dir: Path, sample_config: dict):
        config = QuoteSyncConfig.model_validate(sample_config)
        path = save_config(config, temp_dir / "out" / "config.yaml")

        assert load_config(path) == config

    def test_config_path_env_override(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("QUOTESYNC_CONFIG", str(temp_dir / "custom.yaml"))
        assert get_config_path() == temp_dir / "custom.yaml"

    def test_default_config_path(self, temp_home: Path):
        assert get_config_path() == temp_home / ".config" / "quotesync" / "config.yaml"

    def test_ensure_config_exists(self, temp_dir: Path):
        path = temp_dir / "new" / "config.yaml"

        created_path, created = ensure_config_exists(path)
        assert created is True
        assert created_path.exists()

        _, created_again = ensure_config_exists(path)
        assert created_again is False


class TestValidateConfig:
    """Tests for validate_config_file."""

    def test_valid(self, config_file: Path):
        is_valid, errors = validate_config_file(config_file)
        assert is_valid
        assert errors == []

    def test_invalid_value(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text(yaml.dump({"remote": {"poll_interval_ms": -5}}), encoding="utf-8")

        is_valid, errors = validate_config_file(path)

        assert not is_valid
        assert any("poll_interval_ms" in e for e in errors)

    def test_invalid_yaml(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text("remote: [unclosed", encoding="utf-8")

        is_valid, errors = validate_config_file(path)

        assert not is_valid
        assert "Invalid YAML" in errors[0]

    def test_empty_file(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert validate_config_file(path) == (False, ["Configuration file is empty"])

    def test_missing_remote_section(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text(yaml.dump({"output": {"verbose": True}}), encoding="utf-8")

        is_valid, errors = validate_config_file(path)

        assert not is_valid
        assert "Missing 'remote' section" in errors


class TestDefaults:
    """Tests for default configuration."""

    def test_generated_default_is_valid(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text(generate_default_config(), encoding="utf-8")

        assert validate_config_file(path) == (True, [])
        assert load_config(path).remote.endpoint_url is None

    def test_header_present(self):
        assert generate_default_config().startswith("# quotesync Configuration")

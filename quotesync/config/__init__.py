# quotesync Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from quotesync.config.defaults import DEFAULT_CONFIG, generate_default_config, get_default_config
from quotesync.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    load_or_default_config,
    save_config,
    validate_config_file,
)
from quotesync.config.schema import OutputConfig, QuoteSyncConfig, RemoteConfig, StorageConfig

__all__ = [
    # Schema
    "QuoteSyncConfig",
    "RemoteConfig",
    "StorageConfig",
    "OutputConfig",
    # Loader
    "load_config",
    "load_or_default_config",
    "save_config",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "get_default_config",
    "generate_default_config",
]

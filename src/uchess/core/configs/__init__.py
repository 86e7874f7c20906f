"""Configuration management utilities."""

from uchess.core.configs.loader import config_to_yaml, load_config, save_config
from uchess.core.configs.schema import (
    CPU,
    HUMAN,
    AppConfig,
    ConfigurationError,
    EngineConfig,
    EngineOption,
    EngineRoles,
    config_from_dict,
    config_to_dict,
    default_config,
    resolve_roles,
)

__all__ = [
    "CPU",
    "HUMAN",
    "AppConfig",
    "ConfigurationError",
    "EngineConfig",
    "EngineOption",
    "EngineRoles",
    "config_from_dict",
    "config_to_dict",
    "config_to_yaml",
    "default_config",
    "load_config",
    "resolve_roles",
    "save_config",
]

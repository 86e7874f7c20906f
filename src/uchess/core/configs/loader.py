"""Configuration loading utilities."""

from pathlib import Path

from omegaconf import OmegaConf

from uchess.core.configs.schema import (
    AppConfig,
    ConfigurationError,
    config_from_dict,
    config_to_dict,
)


def load_config(config_path: str | Path, overrides: list[str] | None = None) -> AppConfig:
    """Load a configuration file with optional overrides.

    Both YAML and JSON files are accepted.

    Args:
        config_path: Path to the configuration file.
        overrides: Optional list of CLI-style overrides (e.g., ["black_piece=human"]).

    Returns:
        Parsed AppConfig.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        msg = f"Config file not found: {config_path}"
        raise FileNotFoundError(msg)

    config = OmegaConf.load(config_path)

    if overrides:
        override_conf = OmegaConf.from_dotlist(overrides)
        config = OmegaConf.merge(config, override_conf)

    data = OmegaConf.to_container(config, resolve=True)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {config_path}")
    return config_from_dict(data)


def config_to_yaml(config: AppConfig) -> str:
    return OmegaConf.to_yaml(OmegaConf.create(config_to_dict(config)))


def save_config(config: AppConfig, path: str | Path) -> None:
    """Save a configuration to a YAML file.

    Args:
        config: Configuration to save.
        path: Path to save the configuration to.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(config_to_yaml(config))

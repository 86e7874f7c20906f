"""Shared building blocks: configuration, material balance, input buffer."""

from uchess.core.configs import AppConfig, ConfigurationError, load_config, save_config
from uchess.core.input_buffer import InputBuffer
from uchess.core.material import MaterialBalance, board_balance, material_balance

__all__ = [
    "AppConfig",
    "ConfigurationError",
    "InputBuffer",
    "MaterialBalance",
    "board_balance",
    "load_config",
    "material_balance",
    "save_config",
]

"""uchess: terminal chess against UCI engines.

- `from uchess.game import GameController, GameSession`
- `from uchess.engine import UCIEngine, start_engines`
- `from uchess.core import load_config, material_balance, InputBuffer`
"""

__version__ = "0.1.0"

# Re-export common utilities for convenience
from uchess.core import InputBuffer, load_config, material_balance, save_config
from uchess.utils import setup_logging

__all__ = [
    "InputBuffer",
    "__version__",
    "load_config",
    "material_balance",
    "save_config",
    "setup_logging",
]

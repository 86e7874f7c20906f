"""Strongly-typed configuration schemas for uchess.

These dataclasses are the single source of truth for engine and game
options. Defaults are built on demand by ``default_config`` and threaded
into engine construction explicitly.
"""

from dataclasses import asdict, dataclass, field
from typing import Any

import chess

HUMAN = "human"
CPU = "cpu"
PLAYER_TYPES = (HUMAN, CPU)


class ConfigurationError(ValueError):
    """Raised when the configuration cannot produce a complete game setup."""

    pass


@dataclass(frozen=True)
class EngineOption:
    """Free-form UCI option sent with ``setoption``."""

    name: str
    value: str


@dataclass(frozen=True)
class EngineConfig:
    """Identity and tuning for one UCI engine."""

    name: str
    path: str
    hash: int = 128  # MB
    ponder: bool = False
    own_book: bool = False
    multi_pv: int = 1
    depth: int = 1
    search_moves: str = ""  # Space separated UCI moves, empty = unrestricted
    move_time: int = 100  # Milliseconds
    options: tuple[EngineOption, ...] = ()

    @property
    def search_move_list(self) -> list[str]:
        return self.search_moves.split()


@dataclass(frozen=True)
class EngineRoles:
    """Resolved engine configuration for each role."""

    white: EngineConfig
    black: EngineConfig
    hint: EngineConfig


@dataclass
class AppConfig:
    """Top-level configuration."""

    uci_white: str = "stockfish"
    uci_black: str = "stockfish"
    uci_hint: str = "stockfish"
    engines: list[EngineConfig] = field(default_factory=list)
    fen: str = chess.STARTING_FEN
    white_piece: str = HUMAN
    black_piece: str = CPU
    white_name: str = ""
    black_name: str = ""
    eval_depth: int = 10
    save_dir: str = "."
    timeout: float = 60.0  # Seconds to wait for an engine response

    def is_cpu(self, color: chess.Color) -> bool:
        """Whether the given colour is played by an engine."""
        piece = self.white_piece if color == chess.WHITE else self.black_piece
        return piece == CPU

    @property
    def is_interactive(self) -> bool:
        """False only when both colours are automated."""
        return not (self.is_cpu(chess.WHITE) and self.is_cpu(chess.BLACK))

    def validate(self) -> None:
        """Check player types and the starting position.

        Raises:
            ConfigurationError: On an unknown player type or malformed FEN.
        """
        for label, piece in (("white", self.white_piece), ("black", self.black_piece)):
            if piece not in PLAYER_TYPES:
                msg = f"Invalid {label} player '{piece}', expected one of {PLAYER_TYPES}"
                raise ConfigurationError(msg)
        try:
            chess.Board(self.fen)
        except ValueError as e:
            raise ConfigurationError(f"Invalid FEN '{self.fen}': {e}") from e


def resolve_roles(config: AppConfig) -> EngineRoles:
    """Look up the engine configuration for the white, black and hint roles.

    Raises:
        ConfigurationError: If any role names an engine that is not configured.
    """
    by_name = {engine.name: engine for engine in config.engines}
    resolved = {}
    for role, name in (("white", config.uci_white), ("black", config.uci_black), ("hint", config.uci_hint)):
        if name not in by_name:
            msg = f"Failed to import {role} engine config: no engine named '{name}'"
            raise ConfigurationError(msg)
        resolved[role] = by_name[name]
    return EngineRoles(**resolved)


def default_config(engine_path: str = "") -> AppConfig:
    """Zero-configuration setup: human white against a Stockfish black."""
    engine = EngineConfig(
        name="stockfish",
        path=engine_path,
        options=(EngineOption("Skill Level", "3"),),
    )
    return AppConfig(engines=[engine])


def engine_from_dict(data: dict[str, Any]) -> EngineConfig:
    """Create an EngineConfig from a dictionary.

    The engine path may be given as ``path`` or ``engine``.
    """
    data = dict(data)
    if "engine" in data and "path" not in data:
        data["path"] = data.pop("engine")
    options = tuple(EngineOption(str(o["name"]), str(o["value"])) for o in data.pop("options", None) or [])
    try:
        return EngineConfig(**data, options=options)
    except TypeError as e:
        raise ConfigurationError(f"Invalid engine config {data.get('name', '?')!r}: {e}") from e


def config_from_dict(data: dict[str, Any]) -> AppConfig:
    """Create AppConfig from a dictionary (e.g., from OmegaConf).

    Args:
        data: Dictionary with configuration values.

    Returns:
        AppConfig instance.
    """
    data = dict(data)
    engines = [engine_from_dict(e) for e in data.pop("engines", None) or []]
    try:
        return AppConfig(**data, engines=engines)
    except TypeError as e:
        raise ConfigurationError(f"Invalid config: {e}") from e


def config_to_dict(config: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to a dictionary for serialization."""
    result = asdict(config)
    for engine in result["engines"]:
        engine["options"] = list(engine["options"])
    return result

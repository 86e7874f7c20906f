"""Startup and teardown of the engines behind each game role."""

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

import chess
from loguru import logger

from uchess.core.configs.schema import AppConfig, EngineConfig, resolve_roles
from uchess.engine.base import Engine
from uchess.engine.uci_engine import UCIEngine

EngineFactory = Callable[[EngineConfig], Engine]


@dataclass
class EngineRoster:
    """Engines owned by one game, at most one per role.

    A colour played by a human has no engine.
    """

    white: Engine | None
    black: Engine | None
    hint: Engine
    white_config: EngineConfig
    black_config: EngineConfig
    hint_config: EngineConfig

    def for_color(self, color: chess.Color) -> tuple[Engine | None, EngineConfig]:
        """Engine and config playing the given colour."""
        if color == chess.WHITE:
            return self.white, self.white_config
        return self.black, self.black_config

    def stop(self) -> None:
        """Stop every engine. Safe to call more than once."""
        for engine in (self.white, self.black, self.hint):
            if engine is not None:
                engine.stop()


def start_engines(config: AppConfig, factory: EngineFactory | None = None) -> EngineRoster:
    """Resolve the engine roles and start one engine process per role.

    Roles never share a process, even when they name the same engine.
    Engines already started are stopped if a later one fails.

    Args:
        config: Application configuration.
        factory: Builds an engine from its config; defaults to UCIEngine.

    Raises:
        ConfigurationError: If a role names an unknown engine.
        EngineUnreachable: If an engine fails to start.
    """
    roles = resolve_roles(config)
    if factory is None:
        factory = partial(UCIEngine, timeout=config.timeout)

    started: list[Engine] = []

    def launch(role: str, engine_config: EngineConfig) -> Engine:
        logger.info(f"Starting {role} engine '{engine_config.name}'")
        engine = factory(engine_config)
        started.append(engine)
        return engine

    try:
        white = launch("white", roles.white) if config.is_cpu(chess.WHITE) else None
        black = launch("black", roles.black) if config.is_cpu(chess.BLACK) else None
        hint = launch("hint", roles.hint)
    except Exception:
        for engine in started:
            engine.stop()
        raise

    return EngineRoster(
        white=white,
        black=black,
        hint=hint,
        white_config=roles.white,
        black_config=roles.black,
        hint_config=roles.hint,
    )

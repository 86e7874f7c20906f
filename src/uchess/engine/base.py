"""Base engine protocol for evaluation and move search."""

from dataclasses import dataclass
from typing import Protocol

import chess


class EngineError(Exception):
    """Raised when an engine gives no usable answer (recoverable)."""

    pass


class EngineUnreachable(EngineError):
    """Raised when an engine cannot be started or fails its handshake."""

    pass


@dataclass(frozen=True)
class SearchResult:
    """Outcome of the last completed search."""

    best_move: str
    score: int  # Centipawns, side to move
    depth: int


class Engine(Protocol):
    """Protocol for engines bound to one game role.

    Engines receive the full position on every request; they keep no game
    history between calls.
    """

    @property
    def name(self) -> str:
        """Return the name of the engine for logging/display."""
        ...

    def evaluate(self, board: chess.Board, depth: int) -> int:
        """Score the position in centipawns, 0 when the engine reports none."""
        ...

    def search(
        self,
        board: chess.Board,
        *,
        depth: int | None = None,
        move_time: int | None = None,
        search_moves: list[str] | None = None,
    ) -> chess.Move:
        """Return the engine's best move, legal in ``board``.

        Raises:
            EngineError: If no legal best move could be obtained.
        """
        ...

    def stop(self) -> None:
        """Terminate the engine. Safe to call more than once."""
        ...

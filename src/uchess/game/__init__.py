"""Game state and the controller that drives it."""

from uchess.game.controller import CommandResult, GameController, parse_move
from uchess.game.export import save_pgn, save_svg, session_to_pgn
from uchess.game.session import GameSession, Outcome

__all__ = [
    "CommandResult",
    "GameController",
    "GameSession",
    "Outcome",
    "parse_move",
    "save_pgn",
    "save_svg",
    "session_to_pgn",
]

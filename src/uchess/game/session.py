"""Authoritative game state."""

from dataclasses import dataclass, field
from enum import Enum

import chess


class Outcome(Enum):
    """Where the game stands."""

    IN_PROGRESS = "in-progress"
    CHECKMATE = "checkmate"
    DRAW = "draw"
    RESIGNED_WHITE = "resigned-white"
    RESIGNED_BLACK = "resigned-black"

    @property
    def is_terminal(self) -> bool:
        return self is not Outcome.IN_PROGRESS


@dataclass
class GameSession:
    """One game: the board with its move history, plus resignation and hint.

    The board's root is the starting position; its move stack is the move
    history. Draws are those python-chess declares without a claim
    (stalemate, insufficient material, fivefold repetition, 75-move rule).
    """

    board: chess.Board = field(default_factory=chess.Board)
    resigned: chess.Color | None = None
    hint: chess.Move | None = None
    score: int = 0

    @classmethod
    def from_fen(cls, fen: str = chess.STARTING_FEN) -> "GameSession":
        return cls(board=chess.Board(fen))

    @property
    def outcome(self) -> Outcome:
        if self.resigned is not None:
            return Outcome.RESIGNED_WHITE if self.resigned == chess.WHITE else Outcome.RESIGNED_BLACK
        if self.board.is_checkmate():
            return Outcome.CHECKMATE
        if self.board.is_game_over():
            return Outcome.DRAW
        return Outcome.IN_PROGRESS

    @property
    def in_progress(self) -> bool:
        return self.outcome is Outcome.IN_PROGRESS

    @property
    def turn(self) -> chess.Color:
        return self.board.turn

    @property
    def moves(self) -> list[chess.Move]:
        return list(self.board.move_stack)

    @property
    def starting_fen(self) -> str:
        return self.board.root().fen()

    def fen(self) -> str:
        return self.board.fen()

    def result(self) -> str:
        """PGN result string."""
        if self.resigned is not None:
            return "0-1" if self.resigned == chess.WHITE else "1-0"
        return self.board.result()

    def check_state(self) -> tuple[bool, bool]:
        """Whether (white, black) is currently in check."""
        in_check = self.board.is_check()
        return in_check and self.turn == chess.WHITE, in_check and self.turn == chess.BLACK


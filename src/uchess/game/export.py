"""Writers for the save and image commands."""

from datetime import datetime
from pathlib import Path

import chess.pgn
import chess.svg

from uchess.game.session import GameSession


def timestamp() -> str:
    return datetime.now().strftime("%Y%m%d%H%M%S")


def session_to_pgn(
    session: GameSession,
    white_name: str = "White",
    black_name: str = "Black",
    event: str = "uchess",
) -> str:
    """Generate a PGN string for the session."""
    game = chess.pgn.Game.from_board(session.board)
    game.headers["Event"] = event
    game.headers["Site"] = "Local"
    game.headers["Date"] = datetime.now().strftime("%Y.%m.%d")
    game.headers["White"] = white_name
    game.headers["Black"] = black_name
    game.headers["Result"] = session.result()
    if session.resigned is not None:
        game.headers["Termination"] = "resignation"
    return str(game) + "\n"


def save_pgn(
    session: GameSession,
    directory: str | Path = ".",
    *,
    white_name: str = "White",
    black_name: str = "Black",
) -> Path:
    """Write the game to ``uchess_<timestamp>.pgn``.

    Raises:
        OSError: If the file cannot be written.
    """
    path = Path(directory) / f"uchess_{timestamp()}.pgn"
    path.write_text(session_to_pgn(session, white_name, black_name))
    return path


def save_svg(board: chess.Board, directory: str | Path = ".") -> Path:
    """Write an SVG picture of the board to ``uchess_<timestamp>.svg``.

    Raises:
        OSError: If the file cannot be written.
    """
    lastmove = board.peek() if board.move_stack else None
    check = board.king(board.turn) if board.is_check() else None
    path = Path(directory) / f"uchess_{timestamp()}.svg"
    path.write_text(chess.svg.board(board, lastmove=lastmove, check=check))
    return path

"""Material balance derived from the pieces left on the board.

Captures are counted per piece type against the full starting complement,
then each side's captures cancel the other side's piece for piece (a lost
knight cancels a captured knight, never a bishop). Whatever survives the
cancellation is that side's material advantage.
"""

from collections import Counter
from dataclasses import dataclass

import chess

# Starting complement per side
STARTING_COUNTS: dict[int, int] = {
    chess.PAWN: 8,
    chess.BISHOP: 2,
    chess.KNIGHT: 2,
    chess.ROOK: 2,
    chess.QUEEN: 1,
    chess.KING: 1,
}

PIECE_VALUES: dict[int, int] = {
    chess.PAWN: 1,
    chess.KNIGHT: 3,
    chess.BISHOP: 3,
    chess.ROOK: 5,
    chess.QUEEN: 9,
    chess.KING: 0,
}

# Display order of advantage glyphs
GLYPH_ORDER = (chess.PAWN, chess.BISHOP, chess.KNIGHT, chess.ROOK, chess.QUEEN, chess.KING)


@dataclass(frozen=True)
class MaterialBalance:
    """Renderable advantage for both sides."""

    white_advantage: str
    black_advantage: str
    white_diff: str
    black_diff: str


def _surviving_pieces(pieces: str) -> dict[chess.Color, Counter]:
    """Count surviving pieces per colour.

    Accepts a bare string of piece letters or a FEN placement field; digits,
    rank separators and anything after the placement field are ignored.
    """
    placement = pieces.split(" ", 1)[0]
    counts: dict[chess.Color, Counter] = {chess.WHITE: Counter(), chess.BLACK: Counter()}
    for symbol in placement:
        if symbol.isdigit() or symbol == "/":
            continue
        piece = chess.Piece.from_symbol(symbol)
        counts[piece.color][piece.piece_type] += 1
    return counts


def captured_pieces(pieces: str) -> dict[chess.Color, Counter]:
    """Return, per colour, how many pieces of each type that colour has lost."""
    surviving = _surviving_pieces(pieces)
    captured: dict[chess.Color, Counter] = {}
    for color, counts in surviving.items():
        lost = Counter()
        for piece_type, start in STARTING_COUNTS.items():
            # Promotions can push a type above its starting count
            lost[piece_type] = max(0, start - counts[piece_type])
        captured[color] = +lost
    return captured


def _glyphs(advantage: Counter) -> str:
    return "".join(
        chess.Piece(piece_type, chess.WHITE).unicode_symbol() * advantage[piece_type]
        for piece_type in GLYPH_ORDER
    )


def _points(advantage: Counter) -> int:
    return sum(PIECE_VALUES[piece_type] * count for piece_type, count in advantage.items())


def material_balance(pieces: str) -> MaterialBalance:
    """Compute the advantage strings and point differentials.

    Args:
        pieces: Piece letters currently on the board (case gives colour), or
            a FEN / FEN placement field.

    Returns:
        MaterialBalance where each side's advantage lists the opponent's
        pieces it has captured in excess of its own losses, and only the
        leading side carries a "+N" differential.
    """
    captured = captured_pieces(pieces)

    # Counter subtraction drops non-positive counts
    white_adv = captured[chess.BLACK] - captured[chess.WHITE]
    black_adv = captured[chess.WHITE] - captured[chess.BLACK]

    diff = _points(white_adv) - _points(black_adv)
    white_diff = f"+{diff}" if diff > 0 else ""
    black_diff = f"+{-diff}" if diff < 0 else ""

    return MaterialBalance(
        white_advantage=_glyphs(white_adv),
        black_advantage=_glyphs(black_adv),
        white_diff=white_diff,
        black_diff=black_diff,
    )


def board_balance(board: chess.Board) -> MaterialBalance:
    """Material balance of a python-chess board."""
    return material_balance(board.board_fen())

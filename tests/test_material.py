"""Tests for the material advantage calculator."""

import chess

from uchess.core.material import board_balance, captured_pieces, material_balance

START_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


class TestMaterialBalance:
    """Tests for material_balance()."""

    def test_starting_position_is_even(self) -> None:
        """No captures means no advantage and no differential."""
        balance = material_balance(START_PLACEMENT)
        assert balance.white_advantage == ""
        assert balance.black_advantage == ""
        assert balance.white_diff == ""
        assert balance.black_diff == ""

    def test_bare_piece_letters_are_accepted(self) -> None:
        """A multiset of piece letters works like a placement field."""
        pieces = "PPPPPPPPRNBQKBNR" + "pppppppprnbkbnr"  # black queen missing
        balance = material_balance(pieces)
        assert balance.white_advantage == "♕"
        assert balance.white_diff == "+9"
        assert balance.black_diff == ""

    def test_missing_black_queen(self) -> None:
        """White leads by a queen when black's queen is gone."""
        balance = material_balance("rnb1kbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR")
        assert balance.white_advantage.count("♕") == 1
        assert balance.white_diff == "+9"
        assert balance.black_advantage == ""
        assert balance.black_diff == ""

    def test_full_fen_is_accepted(self) -> None:
        """Fields after the placement are ignored."""
        balance = material_balance("rnb1kbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1")
        assert balance.white_diff == "+9"

    def test_equal_trades_cancel(self) -> None:
        """A knight for a knight leaves nothing to show."""
        balance = material_balance("r1bqkbnr/pppppppp/8/8/8/8/PPPPPPPP/R1BQKBNR")
        assert balance.white_advantage == ""
        assert balance.black_advantage == ""
        assert balance.white_diff == ""
        assert balance.black_diff == ""

    def test_cancellation_is_per_piece_type(self) -> None:
        """A lost knight does not cancel a captured bishop."""
        # White lost a knight, black lost a bishop
        balance = material_balance("rn1qkbnr/pppppppp/8/8/8/8/PPPPPPPP/R1BQKBNR")
        assert balance.white_advantage == "♗"
        assert balance.black_advantage == "♘"
        # Equal points, so nobody leads
        assert balance.white_diff == ""
        assert balance.black_diff == ""

    def test_black_leading(self) -> None:
        """Only the leading side gets a differential."""
        # White lost a rook and a pawn, black lost a pawn
        balance = material_balance("rnbqkbnr/ppppppp1/8/8/8/8/PPPPPPP1/RNBQKBN1")
        assert balance.black_advantage == "♖"
        assert balance.white_advantage == ""
        assert balance.black_diff == "+5"
        assert balance.white_diff == ""

    def test_glyph_order(self) -> None:
        """Glyphs are listed pawn, bishop, knight, rook, queen."""
        balance = material_balance("4k3/8/8/8/8/8/PPPPPPPP/RNBQKBNR")
        assert balance.white_advantage == "♙" * 8 + "♗♗♘♘♖♖♕"
        assert balance.white_diff == "+39"

    def test_promotion_does_not_go_negative(self) -> None:
        """An extra promoted queen counts as a lost pawn, not a negative queen."""
        captured = captured_pieces("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPP1/RNBQKBNQ")
        assert captured[chess.WHITE][chess.PAWN] == 1
        assert captured[chess.WHITE][chess.ROOK] == 1
        assert captured[chess.WHITE][chess.QUEEN] == 0

    def test_board_balance(self) -> None:
        """board_balance reads a python-chess board."""
        board = chess.Board()
        for san in ["e4", "d5", "exd5"]:
            board.push_san(san)
        balance = board_balance(board)
        assert balance.white_advantage == "♙"
        assert balance.white_diff == "+1"

"""Game controller: turns committed input into game state transitions.

Every committed string is either a control keyword or a move. Anything that
is not a keyword is tried as a move (SAN or UCI), so a mistyped keyword is
reported as an illegal move.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import chess
from loguru import logger

from uchess.core.configs.schema import AppConfig
from uchess.engine.base import EngineError
from uchess.engine.roster import EngineRoster
from uchess.game.export import save_pgn, save_svg
from uchess.game.session import GameSession

ILLEGAL_MOVE = "⚠ Illegal. Try again."
ENGINE_MOVE_ERROR = "⚠ Error. Engine move."
ENGINE_COMMAND_ERROR = "⚠ Error. Engine command."
GAME_OVER = "Game over. Type reset."


@dataclass
class CommandResult:
    """Status message and resulting session for one command."""

    message: str
    session: GameSession
    quit: bool = False


def parse_move(board: chess.Board, text: str) -> chess.Move:
    """Parse a move in SAN or UCI notation.

    Raises:
        ValueError: If the text is not a legal move in this position.
    """
    try:
        move = board.parse_san(text)
    except ValueError:
        move = board.parse_uci(text)
    if not move:
        raise ValueError(f"null move in {board.fen()}")
    return move


class GameController:
    """Owns the game session and applies one command at a time.

    The controller is the only writer of the session. Engine calls are
    synchronous; at most one request per role is outstanding.
    """

    def __init__(
        self,
        config: AppConfig,
        engines: EngineRoster,
        session: GameSession | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            config: Application configuration (players, names, save_dir).
            engines: Started engines for each role.
            session: Initial session; defaults to the configured FEN.
        """
        self.config = config
        self.engines = engines
        self.session = session if session is not None else GameSession.from_fen(config.fen)
        self._commands: dict[str, Callable[[], tuple[str, bool]]] = {
            "back": self._back,
            "reset": self._reset,
            "resign": self._resign,
            "save": self._save,
            "image": self._image,
            "fen": self._fen,
            "hint": self._hint,
        }

    @property
    def white_name(self) -> str:
        return self.config.white_name or "White"

    @property
    def black_name(self) -> str:
        return self.config.black_name or "Black"

    def start(self) -> str:
        """Let an automated first player move before any input."""
        return self.play_automated_turn() or ""

    def process_command(self, text: str) -> CommandResult:
        """Apply one committed input string.

        Args:
            text: Raw input, possibly padded with spaces.

        Returns:
            CommandResult with the status message and the current session.
        """
        command = text.strip()
        self.session.hint = None

        if command == "quit":
            return CommandResult("quit", self.session, quit=True)

        handler = self._commands.get(command)
        if handler is not None:
            message, changed = handler()
        else:
            message, changed = self._move(command)

        # The turn may now belong to an engine
        if changed:
            reply = self.play_automated_turn()
            if reply is not None:
                message = reply

        return CommandResult(message, self.session)

    def play_automated_turn(self) -> str | None:
        """Play the engine move if the side to move is automated.

        Returns:
            Status message, or None if no engine was due to move. On engine
            failure the session is left untouched.
        """
        session = self.session
        if not session.in_progress or not self.config.is_cpu(session.turn):
            return None

        engine, engine_config = self.engines.for_color(session.turn)
        if engine is None:
            logger.error(f"No engine running for {chess.COLOR_NAMES[session.turn]}")
            return ENGINE_MOVE_ERROR

        try:
            move = engine.search(
                session.board,
                depth=engine_config.depth,
                move_time=engine_config.move_time,
                search_moves=engine_config.search_move_list,
            )
        except EngineError as e:
            logger.warning(f"Engine {engine.name} failed to move: {e}")
            return ENGINE_MOVE_ERROR

        if move not in session.board.legal_moves:
            logger.warning(f"Engine {engine.name} played illegal move {move.uci()}")
            return ENGINE_MOVE_ERROR

        san = session.board.san(move)
        session.board.push(move)
        logger.info(f"{engine.name} plays {san}")
        return f"{engine.name} played {san}"

    def refresh_score(self) -> int:
        """Re-evaluate the position with the hint engine while in progress."""
        session = self.session
        if not session.in_progress:
            return session.score
        try:
            session.score = self.engines.hint.evaluate(session.board, self.config.eval_depth)
        except EngineError as e:
            logger.warning(f"Evaluation failed: {e}")
        return session.score

    def _move(self, command: str) -> tuple[str, bool]:
        if not self.session.in_progress:
            return GAME_OVER, False
        board = self.session.board
        try:
            move = parse_move(board, command)
        except ValueError:
            logger.debug(f"Rejected input '{command}'")
            return ILLEGAL_MOVE, False
        san = board.san(move)
        board.push(move)
        logger.info(f"Player plays {san}")
        return "", True

    def _back(self) -> tuple[str, bool]:
        """Undo one full round by replaying all but the last two moves."""
        if not self.session.in_progress:
            return GAME_OVER, False
        old = self.session
        board = chess.Board(old.starting_fen)
        for move in old.moves[:-2]:
            board.push(move)
        self.session = GameSession(board=board, score=old.score)
        return "", True

    def _reset(self) -> tuple[str, bool]:
        self.session = GameSession.from_fen(chess.STARTING_FEN)
        return "", True

    def _resign(self) -> tuple[str, bool]:
        if not self.session.in_progress:
            return GAME_OVER, False
        color = self.session.turn
        self.session.resigned = color
        logger.info(f"{chess.COLOR_NAMES[color]} resigns")
        return f"{chess.COLOR_NAMES[color].capitalize()} resigns.", False

    def _save(self) -> tuple[str, bool]:
        try:
            path = save_pgn(
                self.session,
                Path(self.config.save_dir),
                white_name=self.white_name,
                black_name=self.black_name,
            )
        except OSError as e:
            return str(e), False
        return f"Saved {path.name}", False

    def _image(self) -> tuple[str, bool]:
        try:
            path = save_svg(self.session.board, Path(self.config.save_dir))
        except OSError as e:
            return str(e), False
        return f"Saved {path.name}", False

    def _fen(self) -> tuple[str, bool]:
        return self.session.fen(), False

    def _hint(self) -> tuple[str, bool]:
        session = self.session
        if not session.in_progress:
            return GAME_OVER, False
        hint_config = self.engines.hint_config
        try:
            move = self.engines.hint.search(
                session.board,
                depth=hint_config.depth,
                move_time=hint_config.move_time,
                search_moves=hint_config.search_move_list,
            )
        except EngineError as e:
            logger.warning(f"Hint failed: {e}")
            return ENGINE_COMMAND_ERROR, False
        session.hint = move
        return f"Hint: {session.board.san(move)}", False

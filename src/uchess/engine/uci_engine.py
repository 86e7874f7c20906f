"""UCI engine wrapper for communicating with external chess engines.

This module drives a long-lived UCI engine subprocess via pexpect. Each
request sends the full position, so undo, reset and resign can jump to any
position without the engine tracking history.

Uses pexpect for reliable interactive communication with the subprocess,
which handles PTY allocation and buffering correctly.
"""

import re
import shutil

import chess
import pexpect
from loguru import logger

from uchess.core.configs.schema import EngineConfig
from uchess.engine.base import EngineError, EngineUnreachable, SearchResult

MATE_SCORE = 10000

_SCORE_RE = re.compile(r"\bscore\s+(cp|mate)\s+(-?\d+)")
_DEPTH_RE = re.compile(r"\bdepth\s+(\d+)")
_MULTIPV_RE = re.compile(r"\bmultipv\s+(\d+)")
_BESTMOVE_RE = re.compile(r"^bestmove\s+(\S+)")


def _uci_bool(value: bool) -> str:
    return "true" if value else "false"


def parse_info(line: str) -> tuple[int | None, int | None]:
    """Extract (score, depth) from an ``info`` line.

    Only the principal line counts when several PVs are reported. Mate
    scores map to +/-MATE_SCORE.
    """
    multipv = _MULTIPV_RE.search(line)
    if multipv and int(multipv.group(1)) != 1:
        return None, None

    depth_match = _DEPTH_RE.search(line)
    depth = int(depth_match.group(1)) if depth_match else None

    score_match = _SCORE_RE.search(line)
    if not score_match:
        return None, depth
    kind, value = score_match.group(1), int(score_match.group(2))
    if kind == "cp":
        return value, depth
    # "mate 0" means the side to move is already mated
    return (MATE_SCORE if value > 0 else -MATE_SCORE), depth


class UCIEngine:
    """UCI protocol wrapper bound to one engine configuration.

    The subprocess is started and configured on construction and kept
    running until ``stop``.

    Example:
        engine = UCIEngine(config)
        move = engine.search(board)
        engine.stop()

    Or as a context manager:
        with UCIEngine(config) as engine:
            score = engine.evaluate(board, depth=10)
    """

    def __init__(self, config: EngineConfig, *, timeout: float = 60.0) -> None:
        """Start the engine and run the UCI handshake.

        Args:
            config: Engine identity and tuning.
            timeout: Timeout in seconds for each UCI response.

        Raises:
            EngineUnreachable: If the executable is missing, cannot be
                spawned, or does not complete the handshake.
        """
        self.config = config
        self.timeout = timeout
        self.last_result: SearchResult | None = None
        self._child: pexpect.spawn | None = None
        self._start_engine()

    def _start_engine(self) -> None:
        """Start the UCI engine subprocess and apply options."""
        executable = shutil.which(self.config.path) if self.config.path else None
        if executable is None:
            raise EngineUnreachable(f"Engine binary not found: {self.config.path!r} ({self.config.name})")

        logger.debug(f"Starting UCI engine {self.config.name}: {executable}")

        try:
            self._child = pexpect.spawn(
                executable,
                encoding="utf-8",
                codec_errors="replace",
                timeout=self.timeout,
                echo=False,
            )
        except pexpect.ExceptionPexpect as e:
            raise EngineUnreachable(f"Failed to start engine {self.config.name}: {e}") from e

        try:
            self._send_command("uci")
            self._wait_for_response("uciok")

            # Standard options first so explicit options win ties
            self._set_option("Hash", str(self.config.hash))
            self._set_option("Ponder", _uci_bool(self.config.ponder))
            self._set_option("OwnBook", _uci_bool(self.config.own_book))
            self._set_option("MultiPV", str(self.config.multi_pv))
            for option in self.config.options:
                self._set_option(option.name, option.value)

            self._send_command("ucinewgame")
            self._send_command("isready")
            self._wait_for_response("readyok")
        except EngineError as e:
            self.stop()
            raise EngineUnreachable(f"Engine {self.config.name} failed UCI handshake: {e}") from e

        logger.debug(f"UCI engine {self.config.name} initialized")

    def _send_command(self, command: str) -> None:
        """Send a command to the engine."""
        if self._child is None:
            raise EngineError("Engine not running")

        logger.trace(f"UCI send: {command}")
        try:
            self._child.sendline(command)
        except OSError as e:
            raise EngineError(f"Failed to write to engine: {e}") from e

    def _set_option(self, name: str, value: str) -> None:
        self._send_command(f"setoption name {name} value {value}")

    def _read_line(self) -> str:
        """Read one line of engine output.

        A timeout leaves the engine in an unknown state, so it is stopped
        and later requests fail with EngineError.
        """
        if self._child is None:
            raise EngineError("Engine not running")

        try:
            self._child.expect(r"\r?\n", timeout=self.timeout)
        except pexpect.TIMEOUT as e:
            self.stop()
            raise EngineError(f"Timeout waiting for engine {self.config.name}") from e
        except pexpect.EOF as e:
            self.stop()
            raise EngineError("Engine process terminated unexpectedly") from e
        except UnicodeDecodeError as e:
            self.stop()
            raise EngineError(f"Undecodable output from engine {self.config.name}") from e

        line = (self._child.before or "").strip()
        logger.trace(f"UCI recv: {line}")
        return line

    def _wait_for_response(self, expected: str) -> None:
        """Read lines until one equals ``expected``."""
        while self._read_line() != expected:
            pass

    def _go(self, board: chess.Board, go_parts: list[str]) -> SearchResult:
        """Send the position and a go command, then collect the result."""
        self._send_command(f"position fen {board.fen()}")
        self._send_command(" ".join(["go", *go_parts]))

        score = 0
        depth = 0
        while True:
            line = self._read_line()
            if line.startswith("info"):
                info_score, info_depth = parse_info(line)
                if info_score is not None:
                    score = info_score
                if info_depth is not None:
                    depth = info_depth
                continue

            match = _BESTMOVE_RE.match(line)
            if match:
                result = SearchResult(best_move=match.group(1), score=score, depth=depth)
                self.last_result = result
                return result

    def evaluate(self, board: chess.Board, depth: int) -> int:
        """Score the position with a depth-bounded, untimed analysis.

        Args:
            board: Position to analyse.
            depth: Search depth.

        Returns:
            The last reported centipawn score, or 0 if none was reported.
        """
        result = self._go(board, ["depth", str(depth)])
        logger.debug(f"{self.name} eval: {result.score} cp at depth {result.depth}")
        return result.score

    def search(
        self,
        board: chess.Board,
        *,
        depth: int | None = None,
        move_time: int | None = None,
        search_moves: list[str] | None = None,
    ) -> chess.Move:
        """Select the best move for the given position.

        Unset arguments fall back to the engine configuration; zero or
        empty values are left out of the go command.

        Args:
            board: Current chess position.
            depth: Maximum search depth.
            move_time: Time budget in milliseconds.
            search_moves: Restrict the search to these UCI moves.

        Returns:
            The selected move, legal in ``board``.

        Raises:
            EngineError: If the engine returns no move, an unparsable move,
                or a move that is illegal in ``board``.
        """
        depth = self.config.depth if depth is None else depth
        move_time = self.config.move_time if move_time is None else move_time
        if search_moves is None:
            search_moves = self.config.search_move_list

        go_parts: list[str] = []
        if depth:
            go_parts += ["depth", str(depth)]
        if move_time:
            go_parts += ["movetime", str(move_time)]
        if search_moves:
            go_parts += ["searchmoves", *search_moves]

        result = self._go(board, go_parts)
        return self._decode_move(board, result.best_move)

    def _decode_move(self, board: chess.Board, token: str) -> chess.Move:
        """Decode a bestmove token against the position."""
        if token in ("(none)", "0000"):
            raise EngineError(f"{self.name} returned no move")
        try:
            return board.parse_uci(token)
        except chess.IllegalMoveError as e:
            raise EngineError(f"{self.name} returned illegal move '{token}'") from e
        except ValueError as e:
            raise EngineError(f"{self.name} returned unparsable move '{token}'") from e

    def stop(self) -> None:
        """Terminate the engine subprocess and release its pipes."""
        if self._child is None:
            return

        child, self._child = self._child, None
        logger.debug(f"Stopping UCI engine {self.config.name}")
        try:
            if child.isalive():
                child.sendline("quit")
        except OSError as e:
            logger.debug(f"Could not send quit to {self.config.name}: {e}")
        try:
            child.close(force=True)
        except pexpect.ExceptionPexpect as e:
            logger.warning(f"Failed to terminate engine {self.config.name}: {e}")

    @property
    def running(self) -> bool:
        return self._child is not None

    def __enter__(self) -> "UCIEngine":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.stop()

    def __del__(self) -> None:
        """Destructor - ensure process is cleaned up."""
        if getattr(self, "_child", None) is not None:
            self.stop()

    @property
    def name(self) -> str:
        """Return the engine name."""
        return self.config.name

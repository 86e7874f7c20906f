"""Pytest configuration and shared fixtures."""

import stat
import sys
from collections.abc import Callable
from pathlib import Path

import chess
import pytest

from uchess.core.configs import AppConfig, EngineConfig
from uchess.engine import EngineError, EngineRoster
from uchess.game import GameController, GameSession


class ScriptedEngine:
    """In-process engine that replays scripted moves.

    Without a script it plays the alphabetically first legal UCI move.
    """

    def __init__(
        self,
        name: str = "scripted",
        moves: list[str] | None = None,
        score: int = 0,
        fail: bool = False,
        check_legal: bool = True,
    ) -> None:
        self._name = name
        self.moves = list(moves or [])
        self.score = score
        self.fail = fail
        self.check_legal = check_legal
        self.calls: list[tuple] = []
        self.stopped = False

    @property
    def name(self) -> str:
        return self._name

    def evaluate(self, board: chess.Board, depth: int) -> int:
        self.calls.append(("evaluate", board.fen(), depth))
        if self.fail:
            raise EngineError("scripted evaluation failure")
        return self.score

    def search(
        self,
        board: chess.Board,
        *,
        depth: int | None = None,
        move_time: int | None = None,
        search_moves: list[str] | None = None,
    ) -> chess.Move:
        self.calls.append(("search", board.fen(), depth, move_time, search_moves))
        if self.fail:
            raise EngineError("scripted search failure")
        if self.moves:
            token = self.moves.pop(0)
        else:
            token = sorted(move.uci() for move in board.legal_moves)[0]
        try:
            move = chess.Move.from_uci(token)
        except ValueError as e:
            raise EngineError(f"undecodable move {token}") from e
        if self.check_legal and move not in board.legal_moves:
            raise EngineError(f"illegal move {token}")
        return move

    def stop(self) -> None:
        self.stopped = True


def engine_config(name: str = "scripted", **kwargs) -> EngineConfig:
    return EngineConfig(name=name, path="/nonexistent/engine", depth=3, move_time=50, **kwargs)


@pytest.fixture
def make_controller(tmp_path: Path) -> Callable[..., GameController]:
    """Build a controller around scripted engines."""

    def _make(
        white_piece: str = "human",
        black_piece: str = "cpu",
        white: ScriptedEngine | None = None,
        black: ScriptedEngine | None = None,
        hint: ScriptedEngine | None = None,
        session: GameSession | None = None,
        hint_config: EngineConfig | None = None,
    ) -> GameController:
        config = AppConfig(
            uci_white="scripted",
            uci_black="scripted",
            uci_hint="scripted",
            engines=[engine_config()],
            white_piece=white_piece,
            black_piece=black_piece,
            white_name="Alice",
            black_name="Bot",
            eval_depth=7,
            save_dir=str(tmp_path),
        )
        roster = EngineRoster(
            white=white if white_piece == "cpu" else None,
            black=black if black_piece == "cpu" else None,
            hint=hint or ScriptedEngine("hint"),
            white_config=engine_config(),
            black_config=engine_config(),
            hint_config=hint_config or engine_config(),
        )
        return GameController(config, roster, session=session)

    return _make


FAKE_UCI_SCRIPT = '''#!{python}
"""Minimal UCI engine used by the test suite."""
import sys
from pathlib import Path

import chess

MODE = {mode!r}
log = open(Path(__file__).with_suffix(".log"), "w")
board = chess.Board()


def send(line):
    sys.stdout.write(line + "\\n")
    sys.stdout.flush()


def send_raw(data):
    sys.stdout.flush()
    sys.stdout.buffer.write(data + b"\\n")
    sys.stdout.buffer.flush()


while True:
    raw = sys.stdin.readline()
    if not raw:
        break
    line = raw.strip()
    log.write(line + "\\n")
    log.flush()
    if line == "uci":
        if MODE == "crash":
            sys.exit(1)
        send("id name Fake")
        if MODE == "latin1-id":
            send_raw(b"id author St\\xe5le")
        send("uciok")
    elif line == "isready":
        send("readyok")
    elif line.startswith("position fen "):
        board = chess.Board(line[len("position fen "):])
    elif line.startswith("go"):
        if MODE == "die":
            sys.exit(1)
        if MODE != "silent":
            send("info depth 1 score cp 12")
            send("info depth 2 multipv 1 score cp 34 pv e2e4")
            send("info depth 2 multipv 2 score cp -50 pv d2d4")
        if MODE == "mate":
            send("info depth 3 score mate -2")
        if MODE == "latin1-info":
            send_raw(b"info string caf\\xe9")
        parts = line.split()
        moves = sorted(m.uci() for m in board.legal_moves)
        if "searchmoves" in parts:
            moves = parts[parts.index("searchmoves") + 1:]
        if MODE == "none" or not moves:
            send("bestmove (none)")
        elif MODE == "garbage":
            send("bestmove zz99")
        elif MODE == "illegal":
            send("bestmove e2e5")
        elif MODE == "castle-kxr":
            send("bestmove e1h1")
        else:
            send("bestmove " + moves[0] + " ponder a7a6")
    elif line == "quit":
        break
'''


@pytest.fixture
def fake_uci(tmp_path: Path) -> Callable[..., EngineConfig]:
    """Write an executable fake UCI engine and return its config."""

    def _make(mode: str = "normal", **kwargs) -> EngineConfig:
        script = tmp_path / f"fake_engine_{mode}"
        script.write_text(FAKE_UCI_SCRIPT.format(python=sys.executable, mode=mode))
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        defaults = {"name": f"fake-{mode}", "path": str(script), "depth": 2, "move_time": 0}
        defaults.update(kwargs)
        return EngineConfig(**defaults)

    return _make


def engine_log(config: EngineConfig) -> list[str]:
    """Commands the fake engine received."""
    return Path(config.path).with_suffix(".log").read_text().splitlines()



"""Engine processes and the roles they play."""

from uchess.engine.base import Engine, EngineError, EngineUnreachable, SearchResult
from uchess.engine.roster import EngineRoster, start_engines
from uchess.engine.uci_engine import MATE_SCORE, UCIEngine

__all__ = [
    "MATE_SCORE",
    "Engine",
    "EngineError",
    "EngineRoster",
    "EngineUnreachable",
    "SearchResult",
    "UCIEngine",
    "start_engines",
]

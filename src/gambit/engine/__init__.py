"""Chess engine package: minimax search and difficulty policy.

The Qt worker lives in :mod:`gambit.engine.qt_bridge` and is imported
from there.
"""

from gambit.engine.difficulty import Difficulty, search_depth
from gambit.engine.minimax import MinimaxEngine, choose_move
from gambit.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult

__all__ = [
    "CancelCheck",
    "Difficulty",
    "IEngine",
    "MinimaxEngine",
    "SearchLimits",
    "SearchResult",
    "choose_move",
    "search_depth",
]

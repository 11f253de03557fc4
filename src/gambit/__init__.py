"""gambit: chess rules engine and minimax move search.

The four entry points a game front-end needs::

    from gambit import apply_move, choose_move, create_initial_state, legal_moves
"""

from gambit.core.move_generator import all_legal_moves, legal_moves
from gambit.core.transition import apply_move, create_initial_state
from gambit.engine.minimax import choose_move

__version__ = "0.1.0"

__all__ = [
    "all_legal_moves",
    "apply_move",
    "choose_move",
    "create_initial_state",
    "legal_moves",
]

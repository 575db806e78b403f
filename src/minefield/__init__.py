"""
Minefield game module.

Provides the board model (bomb placement, flood-fill reveal, game state)
and a Gymnasium environment that plays it.
"""
from .cell import Bomb, Cell, Empty, BOMB
from .board import (
    Board,
    BoardConfig,
    GameState,
    Shuffle,
    random_shuffle,
    seeded_shuffle,
    generator_shuffle,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
)
from .environment import MinesweeperEnv

__all__ = [
    "Bomb",
    "Cell",
    "Empty",
    "BOMB",
    "Board",
    "BoardConfig",
    "GameState",
    "Shuffle",
    "random_shuffle",
    "seeded_shuffle",
    "generator_shuffle",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "MinesweeperEnv",
]

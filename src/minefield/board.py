"""
Board module for Minefield.

Implements the square game board: bomb placement, adjacency counts,
flood-fill revealing and the derived game state.
"""
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple

import numpy as np

from .cell import BOMB, HIDDEN_MARKER, HIDDEN_OBSERVATION, Bomb, Cell, Empty


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


ADJACENT_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (delta_x, delta_y)
    for delta_y in (-1, 0, 1)
    for delta_x in (-1, 0, 1)
    if (delta_x, delta_y) != (0, 0)
)


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minefield board.

    Attributes:
        dimension: Number of rows and columns of the square grid.
        num_bombs: Total bombs to place.
    """

    dimension: int = 8
    num_bombs: int = 8

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.dimension < 1:
            raise ValueError("Board dimension must be positive")
        if self.num_bombs < 0:
            raise ValueError("Number of bombs cannot be negative")
        max_bombs = self.dimension * self.dimension
        if self.num_bombs > max_bombs:
            raise ValueError(f"Too many bombs (max {max_bombs})")

    @property
    def num_cells(self) -> int:
        return self.dimension * self.dimension


# Preset difficulty levels
BEGINNER = BoardConfig(8, 8)
INTERMEDIATE = BoardConfig(16, 40)
EXPERT = BoardConfig(24, 99)


# ============================================================================
# Shuffle Sources
# ============================================================================

# Takes the provisional bomb markers and returns a permutation of them.
Shuffle = Callable[[List[bool]], List[bool]]


def random_shuffle(markers: List[bool]) -> List[bool]:
    """Uniform permutation drawn from the module-level random source."""
    return random.sample(markers, len(markers))


def seeded_shuffle(seed: Optional[int] = None) -> Shuffle:
    """Create a shuffle backed by its own ``random.Random`` instance."""
    rng = random.Random(seed)

    def shuffle(markers: List[bool]) -> List[bool]:
        return rng.sample(markers, len(markers))

    return shuffle


def generator_shuffle(rng: np.random.Generator) -> Shuffle:
    """Create a shuffle that draws from a numpy ``Generator``."""
    def shuffle(markers: List[bool]) -> List[bool]:
        return [markers[index] for index in rng.permutation(len(markers))]

    return shuffle


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minefield game board.

    Holds the cell contents, fixed at construction, and which cells have
    been revealed. The game state is derived from both on every query.
    Once the state is terminal the caller is expected to stop revealing;
    the board itself does not refuse.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    shuffle: Optional[Shuffle] = field(default=None, repr=False)
    _contents: List[Cell] = field(init=False, default_factory=list, repr=False)
    _visibility: List[bool] = field(
        init=False, default_factory=list, repr=False
    )

    def __post_init__(self) -> None:
        """Generate the grid after dataclass creation."""
        if self.shuffle is None:
            self.shuffle = random_shuffle
        self._generate()

    @classmethod
    def create(
        cls,
        dimension: int,
        num_bombs: int,
        shuffle: Optional[Shuffle] = None,
    ) -> "Board":
        """
        Build a board of ``dimension`` x ``dimension`` cells.

        Raises:
            ValueError: If the dimension is not positive or the bomb count
                is negative or larger than the number of cells.
        """
        return cls(BoardConfig(dimension, num_bombs), shuffle)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _generate(self) -> None:
        """Place bombs and compute adjacency counts for every cell."""
        num_cells = self.config.num_cells
        markers = [index < self.config.num_bombs for index in range(num_cells)]
        layout = list(self.shuffle(markers))
        if len(layout) != num_cells or sum(layout) != self.config.num_bombs:
            raise ValueError("Shuffle must return a permutation of its input")

        self._contents = [
            BOMB if is_bomb else Empty(self._count_adjacent_bombs(layout, index))
            for index, is_bomb in enumerate(layout)
        ]
        self._visibility = [False] * num_cells

    def _count_adjacent_bombs(self, layout: List[bool], index: int) -> int:
        """Count bombs around ``index`` in a shuffled marker layout."""
        x, y = self._position(index)
        return sum(
            1 for neighbor_x, neighbor_y in self._get_neighbors(x, y)
            if layout[self._index(neighbor_x, neighbor_y)]
        )

    # ========================================================================
    # Position Utilities (Low-level)
    # ========================================================================

    def _index(self, x: int, y: int) -> int:
        return x + y * self.config.dimension

    def _position(self, index: int) -> Tuple[int, int]:
        return index % self.config.dimension, index // self.config.dimension

    def _is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        dimension = self.config.dimension
        return 0 <= x < dimension and 0 <= y < dimension

    def _get_neighbors(self, x: int, y: int) -> List[Tuple[int, int]]:
        """In-bounds positions around (x, y)."""
        return [
            (x + delta_x, y + delta_y)
            for delta_x, delta_y in ADJACENT_OFFSETS
            if self._is_valid_position(x + delta_x, y + delta_y)
        ]

    def _checked_index(self, x: int, y: int) -> int:
        if not self._is_valid_position(x, y):
            dimension = self.config.dimension
            raise IndexError(
                f"Position ({x}, {y}) is outside the "
                f"{dimension}x{dimension} board"
            )
        return self._index(x, y)

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, x: int, y: int) -> None:
        """
        Reveal the cell at (x, y).

        A cell with no adjacent bombs also reveals its neighbours, so a
        whole zero region is uncovered together with its numbered border.
        Positions off the board and cells already visible are ignored.

        Args:
            x: Column index to reveal.
            y: Row index to reveal.
        """
        pending = [(x, y)]
        while pending:
            x, y = pending.pop()
            if not self._is_valid_position(x, y):
                continue
            index = self._index(x, y)
            if self._visibility[index]:
                continue
            self._visibility[index] = True

            cell = self._contents[index]
            if isinstance(cell, Empty) and cell.adjacent_bombs == 0:
                pending.extend(
                    (x + delta_x, y + delta_y)
                    for delta_x, delta_y in ADJACENT_OFFSETS
                )

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def dimension(self) -> int:
        return self.config.dimension

    @property
    def num_bombs(self) -> int:
        return self.config.num_bombs

    @property
    def game_state(self) -> GameState:
        """
        Current game state, recomputed from the grid.

        A visible bomb anywhere means the game is lost, even if every
        empty cell is visible as well.
        """
        won = True
        for cell, visible in zip(self._contents, self._visibility):
            if isinstance(cell, Bomb):
                if visible:
                    return GameState.LOST
            elif not visible:
                won = False
        return GameState.WON if won else GameState.PLAYING

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self.game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self.game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self.game_state == GameState.LOST

    @property
    def revealed_count(self) -> int:
        return sum(self._visibility)

    def cell_at(self, x: int, y: int) -> Cell:
        """Get cell content at position, visible or not."""
        return self._contents[self._checked_index(x, y)]

    def is_visible(self, x: int, y: int) -> bool:
        return self._visibility[self._checked_index(x, y)]

    def description_for(self, x: int, y: int) -> str:
        """
        Display string for the cell at (x, y).

        Returns:
            The hidden marker until the cell is revealed, then the bomb
            marker, a blank for no adjacent bombs, or the adjacent count.

        Raises:
            IndexError: If (x, y) is off the board.
        """
        index = self._checked_index(x, y)
        if not self._visibility[index]:
            return HIDDEN_MARKER
        return self._contents[index].describe()

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D array indexed [y, x] where:
                -1 = hidden
                0-8 = revealed with adjacent count
                9 = revealed bomb
        """
        dimension = self.config.dimension
        obs = np.full((dimension, dimension), HIDDEN_OBSERVATION, dtype=np.int8)
        for index, (cell, visible) in enumerate(
            zip(self._contents, self._visibility)
        ):
            if visible:
                x, y = self._position(index)
                obs[y, x] = cell.to_observation()
        return obs

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can still be revealed.

        Returns:
            List of (x, y) positions of hidden cells.
        """
        return [
            self._position(index)
            for index, visible in enumerate(self._visibility)
            if not visible
        ]

    def render(self) -> str:
        """Render the board as rows of cell descriptions."""
        dimension = self.config.dimension
        return "\n".join(
            " ".join(self.description_for(x, y) for x in range(dimension))
            for y in range(dimension)
        )

"""
Cell module for Minefield.

A cell's content is either a bomb or an empty square that knows how many
bombs surround it. The two variants are separate frozen dataclasses joined
in the ``Cell`` alias, so a bomb can never carry a count.
"""
from dataclasses import dataclass
from typing import Union


# ============================================================================
# Constants
# ============================================================================

HIDDEN_MARKER = "?"
BOMB_MARKER = "💣"
BLANK_MARKER = " "

# Observation value of a visible bomb; hidden cells observe as -1
BOMB_OBSERVATION = 9
HIDDEN_OBSERVATION = -1


# ============================================================================
# Cell Variants
# ============================================================================

@dataclass(frozen=True)
class Bomb:
    """A cell holding a bomb."""

    def describe(self) -> str:
        """Display string once the cell is visible."""
        return BOMB_MARKER

    def to_observation(self) -> int:
        return BOMB_OBSERVATION


@dataclass(frozen=True)
class Empty:
    """
    A cell without a bomb.

    Attributes:
        adjacent_bombs: Count of bombs in the 8 neighbouring cells (0-8).
    """

    adjacent_bombs: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.adjacent_bombs <= 8:
            raise ValueError(
                f"Adjacent bomb count must be 0-8, got {self.adjacent_bombs}"
            )

    def describe(self) -> str:
        """Display string once the cell is visible."""
        if self.adjacent_bombs == 0:
            return BLANK_MARKER
        return str(self.adjacent_bombs)

    def to_observation(self) -> int:
        return self.adjacent_bombs


Cell = Union[Bomb, Empty]

BOMB = Bomb()

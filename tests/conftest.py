"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import List

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardConfig, Shuffle


# ============================================================================
# Shuffle Stubs
# ============================================================================

def fixed_bombs(*indices: int) -> Shuffle:
    """Shuffle stub that puts the bombs at the given flat indices."""
    def shuffle(markers: List[bool]) -> List[bool]:
        return [index in indices for index in range(len(markers))]

    return shuffle


def identity(markers: List[bool]) -> List[bool]:
    """Shuffle stub that keeps the bombs at the lowest indices."""
    return list(markers)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 8x8 board with 8 bombs."""
    return Board()


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no bombs for cascade testing."""
    return Board.create(3, 0)


@pytest.fixture
def full_board() -> Board:
    """Create a board where every cell is a bomb."""
    return Board.create(2, 4)


@pytest.fixture
def corner_bomb_board() -> Board:
    """Create a 5x5 board with its only bomb at (0, 0)."""
    return Board.create(5, 1, identity)


@pytest.fixture
def edge_bomb_board() -> Board:
    """
    Create a 3x3 board with its only bomb at (2, 0).

    Layout (B = bomb):
        0 1 B
        0 1 1
        0 0 0
    """
    return Board.create(3, 1, fixed_bombs(2))


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(8, 8)


@pytest.fixture
def place_bombs():
    """Factory for shuffle stubs with bombs at fixed flat indices."""
    return fixed_bombs

"""Conway's Game of Life on a fixed-size, hard-edged grid."""

__version__ = "0.1.0"

from .core.world import World, ALIVE, DEAD
from .core.game import GameOfLife
from .core.patterns import Pattern, PatternLibrary

__all__ = ["World", "ALIVE", "DEAD", "GameOfLife", "Pattern", "PatternLibrary"]

"""Core cellular automata logic."""

from .world import World, ALIVE, DEAD, make_random_source, next_generation
from .game import GameOfLife
from .patterns import Pattern, PatternLibrary

__all__ = ["World", "ALIVE", "DEAD", "make_random_source", "next_generation", "GameOfLife", "Pattern", "PatternLibrary"]

"""Core cellular automaton logic."""

from .cell import Cell
from .universe import Universe
from .simulation import Simulation
from .patterns import Pattern, PatternLibrary

__all__ = ["Cell", "Universe", "Simulation", "Pattern", "PatternLibrary"]

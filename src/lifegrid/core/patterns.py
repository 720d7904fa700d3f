"""Seed patterns and pattern management."""

from typing import Dict, List, Tuple, Optional, Any
import json
from pathlib import Path

from .universe import Universe


class Pattern:
    """A named set of live cells used to seed a universe.

    An empty pattern seeds every cell of the universe.
    """

    def __init__(
        self,
        name: str,
        cells: List[Tuple[int, int]],
        description: str = "",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (x, y) coordinates for living cells
            description: Optional description
            metadata: Optional metadata dictionary
        """
        self.name = name
        self.cells = cells
        self.description = description
        self.metadata = metadata or {}

    def apply_to_universe(self, universe: Universe, offset_x: int = 0, offset_y: int = 0) -> None:
        """Seed a universe with this pattern.

        Args:
            universe: Target universe
            offset_x: Horizontal offset
            offset_y: Vertical offset

        Raises:
            IndexError: If a shifted cell falls outside the universe
        """
        universe.populate([(x + offset_x, y + offset_y) for x, y in self.cells])

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        xs, ys = zip(*self.cells)
        return (min(xs), min(ys), max(xs), max(ys))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size as (width, height)."""
        min_x, min_y, max_x, max_y = self.get_bounding_box()
        return (max_x - min_x + 1, max_y - min_y + 1)

    def normalize(self) -> "Pattern":
        """Return a new pattern with coordinates shifted to start at (0, 0)."""
        if not self.cells:
            return Pattern(self.name, [], self.description, self.metadata.copy())

        min_x, min_y, _, _ = self.get_bounding_box()
        normalized_cells = [(x - min_x, y - min_y) for x, y in self.cells]

        return Pattern(self.name, normalized_cells, self.description, self.metadata.copy())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "cells": self.cells,
            "description": self.description,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pattern":
        """Create pattern from dictionary.

        Args:
            data: Dictionary with pattern data

        Returns:
            New Pattern instance

        Raises:
            ValueError: If a cell entry is not an (x, y) pair
        """
        cells = []
        for cell in data["cells"]:
            if len(cell) != 2:
                raise ValueError(f"Pattern cell {cell!r} is not an (x, y) pair")
            cells.append((int(cell[0]), int(cell[1])))

        return cls(
            name=data["name"],
            cells=cells,
            description=data.get("description", ""),
            metadata=data.get("metadata", {}),
        )

    @classmethod
    def from_universe(cls, universe: Universe, name: str, description: str = "") -> "Pattern":
        """Capture the live cells of a universe as a pattern.

        Args:
            universe: Source universe
            name: Pattern name
            description: Optional description

        Returns:
            New Pattern instance
        """
        cells = sorted(universe.alive_cells())
        metadata = {"source_grid_size": universe.shape, "population": len(cells)}

        return cls(name, cells, description, metadata)


class PatternLibrary:
    """Manages a collection of seed patterns."""

    def __init__(self, storage_dir: Optional[str] = None) -> None:
        """Initialize pattern library.

        Args:
            storage_dir: Directory for storing patterns (defaults to 'patterns').
                It is only created when a pattern is saved.
        """
        self.storage_dir = Path(storage_dir or "patterns")
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        # Seeds
        self.add_pattern(Pattern("Everything", [], "Every cell starts alive"))

        self.add_pattern(
            Pattern(
                "Open Square",
                [(2, 2), (2, 3), (2, 4), (2, 5), (3, 2), (3, 3), (4, 2), (5, 3)],
                "Alternate eight-cell seed, a broken ring with one stray cell at tick 2",
            )
        )

        self.add_pattern(
            Pattern(
                "Sprawl",
                [(2, 2), (2, 3), (2, 4), (3, 2), (3, 3), (3, 5), (4, 2), (5, 2)],
                "Eight-cell seed used by default",
            )
        )

        # Still life
        self.add_pattern(Pattern("Block", [(0, 0), (0, 1), (1, 0), (1, 1)], "2x2 still life block"))

        # Oscillators
        self.add_pattern(
            Pattern("Diagonal Pair", [(0, 0), (1, 1)], "Period-2 oscillator flipping between diagonals")
        )

        # Dying
        self.add_pattern(Pattern("Row", [(0, 0), (1, 0), (2, 0)], "Three in a row, gone after two ticks"))

    def add_pattern(self, pattern: Pattern) -> None:
        """Add a pattern to the library, replacing any pattern of the same name."""
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name.

        Args:
            name: Pattern name

        Returns:
            Pattern instance or None if not found
        """
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        return list(self._patterns.keys())

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get patterns organized by category.

        Returns:
            Dictionary mapping categories to pattern name lists
        """
        categories = {
            "Seeds": ["Everything", "Open Square", "Sprawl"],
            "Still Life": ["Block"],
            "Oscillators": ["Diagonal Pair"],
            "Dying": ["Row"],
            "Custom": [],
        }

        all_builtin = set()
        for cat_patterns in categories.values():
            all_builtin.update(cat_patterns)

        for name in self._patterns:
            if name not in all_builtin:
                categories["Custom"].append(name)

        return {cat: patterns for cat, patterns in categories.items() if patterns}

    def save_pattern(self, pattern: Pattern, filename: Optional[str] = None) -> Path:
        """Save a pattern to disk.

        Args:
            pattern: Pattern to save
            filename: Optional filename (defaults to pattern name)

        Returns:
            Path of the written file
        """
        if filename is None:
            filename = f"{pattern.name.replace(' ', '_').lower()}.json"

        self.storage_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.storage_dir / filename
        with open(filepath, "w") as f:
            json.dump(pattern.to_dict(), f, indent=2)
        return filepath

    def load_pattern(self, filename: str) -> Pattern:
        """Load a pattern from disk and add it to the library.

        Args:
            filename: Filename to load from

        Returns:
            Loaded Pattern instance

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file format is invalid
        """
        filepath = self.storage_dir / filename

        with open(filepath, "r") as f:
            data = json.load(f)

        pattern = Pattern.from_dict(data)
        self.add_pattern(pattern)
        return pattern

    def load_all_patterns(self) -> None:
        """Load all patterns from the storage directory."""
        if not self.storage_dir.is_dir():
            return

        for filepath in sorted(self.storage_dir.glob("*.json")):
            try:
                self.load_pattern(filepath.name)
            except (ValueError, KeyError, TypeError) as e:
                print(f"Warning: Failed to load pattern from {filepath.name}: {e}")

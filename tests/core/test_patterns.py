"""Tests for the Pattern and PatternLibrary classes."""

import json
from io import StringIO
from unittest.mock import patch

import pytest
from lifegrid.core.universe import Universe
from lifegrid.core.patterns import Pattern, PatternLibrary


class TestPattern:
    """Test cases for the Pattern class."""

    def test_initialization(self):
        """Test pattern initialization."""
        cells = [(0, 0), (1, 1)]
        pattern = Pattern("Diagonal Pair", cells, "Period-2 oscillator")

        assert pattern.name == "Diagonal Pair"
        assert pattern.cells == cells
        assert pattern.description == "Period-2 oscillator"
        assert pattern.metadata == {}

    def test_apply_to_universe(self):
        universe = Universe(10, 10)
        Pattern("Row", [(0, 0), (1, 0), (2, 0)]).apply_to_universe(universe)

        assert universe.alive_cells() == {(0, 0), (1, 0), (2, 0)}

    def test_apply_to_universe_with_offset(self):
        """Test applying pattern with offset."""
        universe = Universe(10, 10)
        Pattern("Row", [(0, 0), (1, 0), (2, 0)]).apply_to_universe(universe, offset_x=5, offset_y=3)

        assert universe.alive_cells() == {(5, 3), (6, 3), (7, 3)}

    def test_apply_to_universe_out_of_bounds(self):
        """Cells that do not fit raise instead of being skipped."""
        universe = Universe(3, 3)
        pattern = Pattern("Test", [(0, 0), (1, 0), (2, 0), (3, 0)])

        with pytest.raises(IndexError):
            pattern.apply_to_universe(universe)
        assert universe.population == 0

    def test_apply_empty_pattern_fills_universe(self):
        universe = Universe(4, 4)
        Pattern("Everything", []).apply_to_universe(universe, offset_x=2, offset_y=2)
        assert universe.population == 16

    def test_get_bounding_box(self):
        assert Pattern("Empty", []).get_bounding_box() == (0, 0, 0, 0)
        assert Pattern("Single", [(5, 3)]).get_bounding_box() == (5, 3, 5, 3)
        assert Pattern("Multi", [(1, 2), (3, 1), (0, 4), (2, 0)]).get_bounding_box() == (0, 0, 3, 4)

    def test_get_size(self):
        assert Pattern("Single", [(5, 3)]).get_size() == (1, 1)
        assert Pattern("Rectangle", [(0, 0), (1, 0), (2, 0), (0, 1), (2, 1)]).get_size() == (3, 2)

    def test_normalize(self):
        """Test pattern normalization."""
        pattern = Pattern("Offset", [(5, 3), (6, 4)], "desc", {"period": 2})
        normalized = pattern.normalize()

        assert normalized.cells == [(0, 0), (1, 1)]
        assert normalized.name == "Offset"
        assert normalized.metadata == {"period": 2}
        assert normalized.metadata is not pattern.metadata

        assert Pattern("Empty", []).normalize().cells == []

    def test_dict_conversion(self):
        """Test dictionary serialization."""
        pattern = Pattern("Test", [(0, 0), (1, 0)], "Description", {"type": "test"})
        data = json.loads(json.dumps(pattern.to_dict()))

        restored = Pattern.from_dict(data)

        assert restored.name == "Test"
        assert restored.cells == [(0, 0), (1, 0)]
        assert restored.description == "Description"
        assert restored.metadata == {"type": "test"}

    def test_from_dict_minimal(self):
        pattern = Pattern.from_dict({"name": "Minimal", "cells": [[1, 1]]})

        assert pattern.cells == [(1, 1)]
        assert pattern.description == ""
        assert pattern.metadata == {}

    def test_from_dict_invalid_cell(self):
        with pytest.raises(ValueError):
            Pattern.from_dict({"name": "Bad", "cells": [[1, 2, 3]]})

    def test_from_universe(self):
        """Test capturing a universe as a pattern."""
        universe = Universe(5, 5)
        universe.populate([(3, 1), (1, 1), (2, 1)])

        pattern = Pattern.from_universe(universe, "Captured", "Test pattern")

        assert pattern.name == "Captured"
        assert pattern.description == "Test pattern"
        assert pattern.cells == [(1, 1), (2, 1), (3, 1)]
        assert pattern.metadata["source_grid_size"] == (5, 5)
        assert pattern.metadata["population"] == 3


class TestPatternLibrary:
    """Test cases for the PatternLibrary class."""

    def test_builtin_patterns(self, tmp_path):
        library = PatternLibrary(str(tmp_path))
        patterns = library.list_patterns()

        for name in ["Everything", "Open Square", "Sprawl", "Block", "Diagonal Pair", "Row"]:
            assert name in patterns

        assert library.get_pattern("Everything").cells == []
        assert len(library.get_pattern("Sprawl").cells) == 8
        assert len(library.get_pattern("Open Square").cells) == 8

    def test_storage_dir_created_lazily(self, tmp_path):
        storage = tmp_path / "patterns"
        library = PatternLibrary(str(storage))
        assert not storage.exists()

        library.save_pattern(Pattern("Dot", [(0, 0)]))
        assert storage.is_dir()

    def test_get_missing_pattern(self, tmp_path):
        assert PatternLibrary(str(tmp_path)).get_pattern("Glider") is None

    def test_default_seeds_fit_default_universe(self, tmp_path):
        """The seeds taken from the classic driver fit a 20x20 universe."""
        library = PatternLibrary(str(tmp_path))
        for name in ["Open Square", "Sprawl"]:
            universe = Universe(20, 20)
            library.get_pattern(name).apply_to_universe(universe)
            assert universe.population == 8

    def test_open_square_evolution(self, tmp_path):
        """The alternate seed leaves a ring broken at (4, 3) plus a stray cell."""
        universe = Universe(20, 20)
        PatternLibrary(str(tmp_path)).get_pattern("Open Square").apply_to_universe(universe)

        universe.tick()
        assert universe.alive_cells() == {(2, 2), (2, 3), (2, 4), (3, 2), (3, 3), (3, 4), (4, 3), (5, 2)}

        universe.tick()
        assert universe.alive_cells() == {(2, 2), (2, 3), (2, 4), (3, 2), (3, 4), (4, 2), (4, 4), (5, 3)}

        universe.tick()
        assert universe.alive_cells() == {
            (2, 2), (2, 3), (2, 4), (3, 2), (3, 3), (3, 4), (4, 3), (5, 2), (5, 4),
        }

    def test_categories(self, tmp_path):
        """Test custom patterns land in their own category."""
        library = PatternLibrary(str(tmp_path))
        categories = library.get_patterns_by_category()
        assert "Custom" not in categories
        assert categories["Seeds"] == ["Everything", "Open Square", "Sprawl"]

        library.add_pattern(Pattern("Mine", [(0, 0)]))
        assert library.get_patterns_by_category()["Custom"] == ["Mine"]

    def test_save_and_load(self, tmp_path):
        """Test pattern files survive a round trip through disk."""
        library = PatternLibrary(str(tmp_path))
        path = library.save_pattern(Pattern("Two Dots", [(0, 0), (2, 0)], "spaced"))
        assert path == tmp_path / "two_dots.json"

        other = PatternLibrary(str(tmp_path))
        loaded = other.load_pattern("two_dots.json")

        assert loaded.cells == [(0, 0), (2, 0)]
        assert other.get_pattern("Two Dots") is loaded

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            PatternLibrary(str(tmp_path)).load_pattern("nothing.json")

    @patch("sys.stdout", new_callable=StringIO)
    def test_load_all_patterns_skips_bad_files(self, mock_stdout, tmp_path):
        """Malformed files are reported and skipped."""
        (tmp_path / "good.json").write_text(json.dumps({"name": "Good", "cells": [[1, 1]]}))
        (tmp_path / "broken.json").write_text("{not json")
        (tmp_path / "missing.json").write_text(json.dumps({"cells": []}))

        library = PatternLibrary(str(tmp_path))
        library.load_all_patterns()

        assert library.get_pattern("Good").cells == [(1, 1)]
        output = mock_stdout.getvalue()
        assert "broken.json" in output
        assert "missing.json" in output

    def test_load_all_patterns_without_directory(self, tmp_path):
        library = PatternLibrary(str(tmp_path / "absent"))
        library.load_all_patterns()
        assert "Sprawl" in library.list_patterns()

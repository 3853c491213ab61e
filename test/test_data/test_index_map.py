"""Test the map from input indexes to output indexes."""

import pytest

from mcselect.data import IndexMap


class TestIndexMap:
    """Test the basic map operations."""

    def test_default(self):
        """Test that a new map is large and empty."""
        index_map = IndexMap("map")
        assert index_map.name == "map"
        assert index_map.size == 99999
        assert len(index_map) == 0
        assert index_map.get(0) is None
        assert index_map.mapped() == {}

    def test_set_get(self):
        """Test mapping and fetching indexes."""
        index_map = IndexMap("map", 10)
        index_map.set(3, 0)
        index_map[7] = 1

        assert index_map.get(3) == 0
        assert index_map[7] == 1
        assert 3 in index_map
        assert 4 not in index_map
        assert len(index_map) == 2
        assert index_map.mapped() == {3: 0, 7: 1}

    def test_absent(self):
        """Test that unmapped or out-of-range indexes are absent."""
        index_map = IndexMap("map", 10)
        assert index_map.get(-1) is None
        assert index_map.get(10) is None
        assert index_map.get(1000) is None
        with pytest.raises(KeyError):
            index_map[2]

    def test_negative(self):
        """Test that negative indexes cannot be mapped."""
        with pytest.raises(IndexError):
            IndexMap("map").set(-1, 0)

    def test_reserve(self):
        """Test that the map grows to twice the count when too small."""
        index_map = IndexMap("map", 10)
        index_map.reserve(9)
        assert index_map.size == 10

        index_map.reserve(10)
        assert index_map.size == 20

        index_map.reserve(15)
        assert index_map.size == 20

    def test_grow_on_set(self):
        """Test that setting beyond the size grows the map."""
        index_map = IndexMap("map", 0)
        index_map.set(4, 2)
        assert index_map.size == 10
        assert index_map[4] == 2

    def test_resize_keeps_entries(self):
        """Test that resizing preserves the entries which fit."""
        index_map = IndexMap("map", 10)
        index_map.set(2, 0)
        index_map.set(8, 1)

        index_map.resize(30)
        assert index_map.mapped() == {2: 0, 8: 1}

        index_map.resize(5)
        assert index_map.mapped() == {2: 0}

    def test_clear(self):
        """Test that clearing unmaps everything but keeps the storage."""
        index_map = IndexMap("map", 10)
        index_map.reserve(50)
        index_map.set(5, 0)
        index_map.clear()

        assert len(index_map) == 0
        assert index_map.size == 100

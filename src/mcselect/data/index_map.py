"""Module with a class object which maps input indexes onto output indexes."""

import numpy as np

from mcselect.utils.globals import DEFAULT_MAP_SIZE, INVAL_IDX

__all__ = ["IndexMap"]


class IndexMap:
    """Named, growable array of integer indexes.

    Entry `i` of the map holds the position of element `i` of an input
    collection in an output collection, or `-1` if the element is not
    present in the output.

    Attributes
    ----------
    name : str
        Name under which the map is registered
    """

    def __init__(self, name, size=DEFAULT_MAP_SIZE):
        """Initialize an empty map.

        Parameters
        ----------
        name : str
            Name under which the map is registered
        size : int, default 99999
            Initial number of entries in the map
        """
        self.name = name
        self._array = np.full(size, INVAL_IDX, dtype=np.int64)

    @property
    def size(self):
        """Number of entries the map can currently hold."""
        return len(self._array)

    def resize(self, size):
        """Change the number of entries the map can hold.

        Existing entries within the new size are preserved, new entries
        are unmapped.

        Parameters
        ----------
        size : int
            New number of entries
        """
        array = np.full(size, INVAL_IDX, dtype=np.int64)
        keep = min(size, self.size)
        array[:keep] = self._array[:keep]
        self._array = array

    def reserve(self, count):
        """Make sure the map can hold `count` input elements.

        The map is grown to twice the requested count whenever it is not
        strictly larger than it, to amortize the cost of growing.

        Parameters
        ----------
        count : int
            Number of input elements
        """
        if self.size <= count:
            self.resize(2 * count)

    def clear(self):
        """Unmap every entry, keeping the current storage."""
        self._array.fill(INVAL_IDX)

    def set(self, index, value):
        """Map an input index onto an output index.

        Parameters
        ----------
        index : int
            Index of the element in the input collection
        value : int
            Index of the element in the output collection
        """
        if index < 0:
            raise IndexError(f"Cannot map a negative index: {index}")
        if index >= self.size:
            self.reserve(index + 1)
        self._array[index] = value

    def get(self, index):
        """Fetch the output index of an input element.

        Parameters
        ----------
        index : int
            Index of the element in the input collection

        Returns
        -------
        int
            Index of the element in the output collection, `None` if the
            element is not mapped
        """
        if index < 0 or index >= self.size or self._array[index] == INVAL_IDX:
            return None

        return int(self._array[index])

    def mapped(self):
        """Dictionary of all the mapped entries.

        Returns
        -------
        Dict[int, int]
            Dictionary which maps input indexes onto output indexes
        """
        index = np.where(self._array != INVAL_IDX)[0]
        return dict(zip(index.tolist(), self._array[index].tolist()))

    def __getitem__(self, index):
        value = self.get(index)
        if value is None:
            raise KeyError(f"Index {index} is not mapped in {self.name}")

        return value

    def __setitem__(self, index, value):
        self.set(index, value)

    def __contains__(self, index):
        return self.get(index) is not None

    def __len__(self):
        return int(np.count_nonzero(self._array != INVAL_IDX))

    def __repr__(self):
        return f"IndexMap(name={self.name!r}, size={self.size}, mapped={len(self)})"

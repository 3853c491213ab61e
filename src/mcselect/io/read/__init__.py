"""Event readers."""

from .hdf5 import HDF5Reader

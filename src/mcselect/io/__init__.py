"""Input/output tools.

- `HDF5Reader`: reads truth or flat MC events from HDF5 files
- `HDF5Writer`: writes truth or flat MC events to HDF5 files
- `CSVWriter`: writes the selected particles to a CSV table
"""

from .factories import reader_factory, writer_factory
from .read import HDF5Reader
from .write import CSVWriter, HDF5Writer

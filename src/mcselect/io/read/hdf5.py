"""Contains a reader class dedicated to loading events from HDF5 files."""

import h5py
import numpy as np

from mcselect.event import EventFormat
from mcselect.io.schema import CLASSIFICATION_KEYS, PRODUCT_CLASSES, from_array
from mcselect.utils.logger import logger

from .base import ReaderBase

__all__ = ["HDF5Reader"]


class HDF5Reader(ReaderBase):
    """Class which reads MC truth events stored in HDF5 files.

    The files must be structured as follows:
      - An `info` group with a `format` attribute (`truth` or `flat`)
      - An `events` dataset with one `(offset, count, num_primaries)` row per
        event, which points at a range of rows in the product dataset
      - A `tracks` (truth) or `mcparticles` (flat) structured dataset
      - Optionally, for truth files, `physical_primary`,
        `secondary_from_weak_decay` and `secondary_from_material` datasets
        aligned with `tracks`

    Typical configuration should look like:

    .. code-block:: yaml

        io:
          reader:
            name: hdf5
            file_keys: events.h5
    """

    name = "hdf5"

    def __init__(
        self,
        file_keys,
        limit_num_files=None,
        max_print_files=10,
        n_entry=None,
        n_skip=None,
        entry_list=None,
    ):
        """Initalize the HDF5 file reader.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Path or list of paths to the HDF5 files to be read
        limit_num_files : int, optional
            Integer limiting number of files to be loaded
        max_print_files : int, default 10
            Maximum number of loaded file names to be printed
        n_entry : int, optional
            Maximum number of entries to load
        n_skip : int, optional
            Number of entries to skip at the beginning
        entry_list : list, optional
            List of integer entry IDs to add to the index
        """
        # Process the list of files
        self.process_file_paths(file_keys, limit_num_files, max_print_files)

        # Loop over the input files, build a map from index to file ID
        self.format = None
        self.num_entries = 0
        self.file_index = []
        self.file_offsets = np.empty(len(self.file_paths), dtype=np.int64)
        for i, path in enumerate(self.file_paths):
            with h5py.File(path, "r") as in_file:
                # Check that there are events in the file
                assert "events" in in_file, "File does not contain an event table"

                # All the files must store the same format
                fmt = EventFormat.parse(in_file["info"].attrs["format"])
                assert self.format is None or fmt is self.format, (
                    f"File {path} stores {fmt.value} events, while the "
                    f"previous files store {self.format.value} events."
                )
                self.format = fmt

                # Update the total number of entries
                num_entries = len(in_file["events"])
                self.file_index.append(np.full(num_entries, i, dtype=np.int64))
                self.file_offsets[i] = self.num_entries
                self.num_entries += num_entries

        # Dump the number of entries to load
        logger.info("Total number of entries in the file(s): %d\n", self.num_entries)

        # Concatenate the file indexes into one
        self.file_index = np.concatenate(self.file_index)

        # Process the entry list
        self.process_entry_list(n_entry, n_skip, entry_list)

    def get(self, idx):
        """Returns a specific entry in the file.

        Parameters
        ----------
        idx : int
            Integer entry ID to access

        Returns
        -------
        data : dict
            Ditionary of data products corresponding to one event
        """
        # Get the appropriate entry index
        assert idx < len(self.entry_index)
        file_idx = self.get_file_index(idx)
        entry_idx = self.get_file_entry_index(idx)

        # Use the event table to find out what needs to be loaded
        key, obj_class = PRODUCT_CLASSES[self.format.value]
        data = {"file_index": file_idx, "file_entry_index": entry_idx}
        with h5py.File(self.file_paths[file_idx], "r") as in_file:
            event = in_file["events"][entry_idx]
            start = int(event["offset"])
            stop = start + int(event["count"])

            data[key] = from_array(in_file[key][start:stop], obj_class)
            data["num_primaries"] = int(event["num_primaries"])
            for k in CLASSIFICATION_KEYS:
                if k in in_file:
                    data[k] = in_file[k][start:stop].astype(bool)

        # Use the global index, not the one read from file
        data["index"] = int(self.entry_index[idx])

        return data

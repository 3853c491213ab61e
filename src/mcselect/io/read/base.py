"""Contains the data reader base class.

Data readers are used to extract specific entries from files and store their
data products into dictionaries to be used downstream.
"""

import glob
import os

import numpy as np

from mcselect.utils.logger import logger

__all__ = ["ReaderBase"]


class ReaderBase:
    """Parent reader class which provides common functions between all readers.

    This class provides these basic functions:
    1. Method to parse the requested file list or file list file into a list of
       paths to existing files (throws if nothing is found)
    2. Method to produce a list of entries in the file(s) as selected by the
       provided parameters, checks that they exist (throws if they do not)
    3. Essential `__len__`, `__getitem__` and `__iter__` methods. Must define
       the `get` function in the inheriting class for them to work.

    Attributes
    ----------
    name : str
        Name of the reader, as requested in the configuration
    num_entries : int
        Total number of entries in the files provided
    entry_index : np.ndarray
        List of global indexes to cycle through
    file_paths : List[str]
        List of files to read data from
    file_offsets : np.ndarray
        Offsets between the global index and each individual file start index
    file_index : np.ndarray
        Index of the file each global entry lives in
    """

    name = ""
    num_entries = None
    entry_index = None
    file_paths = None
    file_offsets = None
    file_index = None

    def __len__(self):
        """Returns the number of entries to be read.

        Returns
        -------
        int
            Number of entries in the index
        """
        return len(self.entry_index)

    def __getitem__(self, idx):
        """Returns a specific entry in the file.

        Parameters
        ----------
        idx : int
            Integer entry ID to access

        Returns
        -------
        dict
            One entry-worth of data from the loaded files
        """
        return self.get(idx)

    def __iter__(self):
        for idx in range(len(self)):
            yield self.get(idx)

    def get(self, idx):
        """Placeholder to be defined by the daughter class."""
        raise NotImplementedError

    def process_file_paths(self, file_keys, limit_num_files=None, max_print_files=10):
        """Process list of files.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Path (or glob pattern) or list of paths to the files to be read. A
            single `.txt` path is interpreted as a file containing a file list
        limit_num_files : int, optional
            Integer limiting number of files to be loaded
        max_print_files : int, default 10
            Maximum number of loaded file names to be printed
        """
        assert file_keys is not None, "No input `file_keys` provided, abort."
        assert (
            limit_num_files is None or limit_num_files > 0
        ), "If `limit_num_files` is provided, it must be larger than 0."

        # A text file contains a list of file paths
        if isinstance(file_keys, str) and os.path.splitext(file_keys)[-1] == ".txt":
            assert os.path.isfile(file_keys), (
                "If the `file_keys` are specified as a single string, "
                "it must be the path to a text file with a file list."
            )
            with open(file_keys, "r", encoding="utf-8") as f:
                file_keys = f.read().splitlines()

        # Convert the file keys to a list of file paths with glob
        self.file_paths = []
        if isinstance(file_keys, str):
            file_keys = [file_keys]
        for file_key in file_keys:
            file_paths = glob.glob(file_key)
            assert file_paths, f"File key {file_key} yielded no compatible path."
            for path in sorted(file_paths):
                if limit_num_files and len(self.file_paths) >= limit_num_files:
                    break
                self.file_paths.append(path)

        # Print out the list of loaded files
        num_files = len(self.file_paths)
        file_list = " - " + "\n - ".join(self.file_paths[:max_print_files])
        file_list += "\n ... \n" if num_files > max_print_files else "\n"
        logger.info("Will load %d file(s):\n%s", num_files, file_list)

    def process_entry_list(self, n_entry=None, n_skip=None, entry_list=None):
        """Create a list of entries that can be accessed by :meth:`__getitem__`.

        Parameters
        ----------
        n_entry : int, optional
            Maximum number of entries to load
        n_skip : int, optional
            Number of entries to skip at the beginning
        entry_list : list, optional
            List of integer entry IDs to add to the index
        """
        assert entry_list is None or (n_entry is None and n_skip is None), (
            "Cannot specify `n_entry` or `n_skip` along with an `entry_list`."
        )

        if entry_list is not None:
            entry_index = np.asarray(entry_list, dtype=np.int64)
            missing = entry_index[(entry_index < 0) | (entry_index >= self.num_entries)]
            assert not len(missing), (
                f"Entries {missing.tolist()} do not exist in the dataset of "
                f"{self.num_entries} entries."
            )

        else:
            n_skip = n_skip or 0
            assert n_skip >= 0, "Number of entries to skip must be positive."
            entry_index = np.arange(n_skip, self.num_entries, dtype=np.int64)
            if n_entry is not None:
                assert n_entry > 0, "Number of entries to load must be positive."
                entry_index = entry_index[:n_entry]

        assert len(entry_index), "Must at least have one entry to load."
        self.entry_index = entry_index

    def get_file_index(self, idx):
        """Returns the index of the file which contains an entry.

        Parameters
        ----------
        idx : int
            Index in the entry list

        Returns
        -------
        int
            Index of the file in the file list
        """
        return int(self.file_index[self.entry_index[idx]])

    def get_file_entry_index(self, idx):
        """Returns the index of an entry within its own file.

        Parameters
        ----------
        idx : int
            Index in the entry list

        Returns
        -------
        int
            Index of the entry in its file
        """
        file_idx = self.get_file_index(idx)
        return int(self.entry_index[idx] - self.file_offsets[file_idx])

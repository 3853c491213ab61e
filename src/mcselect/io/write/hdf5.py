"""Module to write MC truth events to HDF5 files."""

import os

import h5py
import numpy as np

from mcselect.event import EventFormat
from mcselect.io.schema import (
    CLASSIFICATION_KEYS,
    PRODUCT_CLASSES,
    class_dtype,
    to_array,
)
from mcselect.utils.globals import DEFAULT_OUTPUT_NAME
from mcselect.version import __version__

__all__ = ["HDF5Writer"]

# Data type of the event table
EVENT_DTYPE = np.dtype(
    [("offset", np.int64), ("count", np.int64), ("num_primaries", np.int64)]
)


class HDF5Writer:
    """Writes MC truth events to an HDF5 file readable by :class:`HDF5Reader`.

    When used as the writer of the driver, the selected particles of each
    event are stored as a flat MC particle collection, so that the output
    can be fed back as the input of another selection.

    Typical configuration should look like:

    .. code-block:: yaml

        io:
          ...
          writer:
            name: hdf5
            file_name: selected.h5
    """

    name = "hdf5"

    def __init__(
        self,
        file_name="output.h5",
        fmt="flat",
        key=DEFAULT_OUTPUT_NAME,
        store_classification=False,
        overwrite=False,
    ):
        """Initialize the basics of the output file.

        Parameters
        ----------
        file_name : str, default 'output.h5'
            Name of the output HDF5 file
        fmt : str, default 'flat'
            Format of the events to store (`truth` or `flat`)
        key : str, default 'MCParticlesSelected'
            Data product stored for each event when called by the driver
        store_classification : bool, default False
            If True, store the classification arrays of the truth tracks. If
            False, the reader derives them from the track content
        overwrite : bool, default False
            If True, overwrite the output file if it already exists
        """
        # Check that output file does not already exist, if requested
        if not overwrite and os.path.isfile(file_name):
            raise FileExistsError(f"File with name {file_name} already exists.")

        self.file_name = file_name
        self.format = EventFormat.parse(fmt)
        self.key = key
        self.store_classification = (
            store_classification and self.format is EventFormat.TRUTH
        )
        self.product_key, self.obj_class = PRODUCT_CLASSES[self.format.value]

        # Initialize the file structure with empty resizable datasets
        with h5py.File(self.file_name, "w") as out_file:
            info = out_file.create_group("info")
            info.attrs["format"] = self.format.value
            info.attrs["version"] = __version__

            out_file.create_dataset("events", (0,), maxshape=(None,), dtype=EVENT_DTYPE)
            out_file.create_dataset(
                self.product_key,
                (0,),
                maxshape=(None,),
                dtype=class_dtype(self.obj_class),
            )
            if self.store_classification:
                for k in CLASSIFICATION_KEYS:
                    out_file.create_dataset(k, (0,), maxshape=(None,), dtype=np.uint8)

    def __call__(self, data):
        """Store the selected particles of one event.

        Parameters
        ----------
        data : dict
            Dictionary of data products of the event
        """
        assert self.format is EventFormat.FLAT, (
            "The driver can only store selected particles as flat events."
        )
        self.append({self.product_key: data[self.key]})

    def write(self, events):
        """Store a list of events.

        Parameters
        ----------
        events : List[dict]
            List of event dictionaries (see :meth:`append`)
        """
        for event in events:
            self.append(event)

    def append(self, event):
        """Append one event to the file.

        Parameters
        ----------
        event : dict
            Truth events provide `tracks`, `num_primaries` and optionally the
            track classification arrays. Flat events provide `mcparticles`.
        """
        objects = list(event[self.product_key])
        array = to_array(objects, self.obj_class)
        num_primaries = event.get("num_primaries", 0)
        assert 0 <= num_primaries <= len(objects), (
            f"The number of primaries ({num_primaries}) must be in "
            f"[0, {len(objects)}]."
        )

        with h5py.File(self.file_name, "a") as out_file:
            # Append the products
            dataset = out_file[self.product_key]
            offset = len(dataset)
            dataset.resize((offset + len(array),))
            if len(array):
                dataset[offset:] = array

            # Append the classification, if it is stored
            if self.store_classification:
                for k in CLASSIFICATION_KEYS:
                    values = event[k]
                    assert len(values) == len(array), (
                        f"The `{k}` array must have one value per track."
                    )
                    out_file[k].resize((offset + len(array),))
                    if len(array):
                        out_file[k][offset:] = np.asarray(values, dtype=np.uint8)

            # Append the event row
            events = out_file["events"]
            num_events = len(events)
            events.resize((num_events + 1,))
            events[num_events] = (offset, len(array), num_primaries)

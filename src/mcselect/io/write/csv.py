"""Module to write the selected particles to CSV."""

import os

from mcselect.utils.globals import DEFAULT_OUTPUT_NAME, MAP_SUFFIX

__all__ = ["CSVWriter"]


class CSVWriter:
    """Writes the selected particles to a CSV file.

    Each selected particle is stored as one row, along with the index of the
    event it belongs to, its position in the source collection (read from
    the index map of the selection) and its position in the selected
    collection.

    Typical configuration should look like:

    .. code-block:: yaml

        io:
          ...
          writer:
            name: csv
            file_name: selected.csv
    """

    name = "csv"

    # Particle attributes stored in each row
    particle_keys = (
        "label",
        "pdg_code",
        "charge",
        "eta",
        "pt",
        "flags",
        "generator_index",
        "status_code",
        "mc_process_code",
    )

    def __init__(
        self,
        file_name="output.csv",
        key=DEFAULT_OUTPUT_NAME,
        overwrite=False,
        append=False,
        accept_missing=False,
    ):
        """Initialize the basics of the output file.

        Parameters
        ----------
        file_name : str, default 'output.csv'
            Name of the output CSV file
        key : str, default 'MCParticlesSelected'
            Name of the selected particle collection to store. The index map
            of the selection is read from `key + '_Map'`
        overwrite : bool, default False
            If True, overwrite the output file if it already exists
        append : bool, default False
            If True, add more rows to an existing CSV file
        accept_missing : bool, default False
            Tolerate missing keys
        """
        # Check that output file does not already exist, if requested
        if not overwrite and not append and os.path.isfile(file_name):
            raise FileExistsError(f"File with name {file_name} already exists.")

        # Store persistent attributes
        self.file_name = file_name
        self.key = key
        self.map_key = key + MAP_SUFFIX
        self.append_file = append
        self.accept_missing = accept_missing
        self.result_keys = None
        if self.append_file:
            if not os.path.isfile(file_name):
                raise FileNotFoundError(
                    f"File not found at path: {file_name}. When using "
                    "`append=True` in CSVWriter, the file must exist at "
                    "the prescribed path before data is written to it."
                )

            with open(self.file_name, "r", encoding="utf-8") as out_file:
                self.result_keys = out_file.readline().strip().split(",")

    def __call__(self, data):
        """Store the selected particles of one event.

        Parameters
        ----------
        data : dict
            Dictionary of data products of the event
        """
        # Invert the index map to find where each particle came from
        mapped = data[self.map_key].mapped()
        sources = {out: src for src, out in mapped.items()}

        for output_index, part in enumerate(data[self.key]):
            row = {"index": data["index"]}
            for attr in self.particle_keys:
                row[attr] = getattr(part, attr)
            row["source_index"] = sources[output_index]
            row["output_index"] = output_index

            self.append(row)

    def create(self, result_blob):
        """Initialize the header of the CSV file, record the keys to be stored.

        Parameters
        ----------
        result_blob : dict
            Dictionary of values to store in one row
        """
        # Save the list of keys to store
        self.result_keys = list(result_blob.keys())

        # Create a header and write it to file
        with open(self.file_name, "w", encoding="utf-8") as out_file:
            header_str = ",".join(self.result_keys)
            out_file.write(header_str + "\n")

    def append(self, result_blob):
        """Append one row to the CSV file.

        Parameters
        ----------
        result_blob : dict
            Dictionary of values to store in one row
        """
        if self.result_keys is None:
            # If this function has never been called, initialiaze the CSV file
            self.create(result_blob)

        elif list(result_blob.keys()) != self.result_keys:
            # If the keys differ, check the discrepancies
            missing = self.array_diff(self.result_keys, result_blob.keys())
            excess = self.array_diff(result_blob.keys(), self.result_keys)
            if len(excess):
                raise AssertionError(
                    "There are keys in this entry which were not "
                    "present when the CSV file was initialized. "
                    f"New keys: {list(excess)}"
                )

            if not self.accept_missing:
                raise AssertionError(
                    "There are keys missing in this entry which were "
                    "present when the CSV file was initialized. "
                    f"Missing keys: {list(missing)}"
                )

            new_result_blob = {k: -1 for k in self.result_keys}
            new_result_blob.update(result_blob)
            result_blob = new_result_blob

        # Append file
        with open(self.file_name, "a", encoding="utf-8") as out_file:
            result_str = ",".join([str(result_blob[k]) for k in self.result_keys])
            out_file.write(result_str + "\n")

    @staticmethod
    def array_diff(array_x, array_y):
        """Compare the content of two arrays.

        This functions returns the elements of the first array that
        do not appear in the second array.

        Parameters
        ----------
        array_x : List[str]
            First array of strings
        array_y : List[str]
            Second array of strings

        Returns
        -------
        Set[str]
            Set of keys that appear in `array_x` but not in `array_y`.
        """
        return set(array_x).difference(set(array_y))

"""Driver class.

Takes care of everything in one centralized place:
- Event loading
- Event-level object registry (persistent across entries)
- Task execution
- Writing output to file
"""

import yaml

from .data import MCParticle, ObjectList
from .errors import FatalError
from .event import Event, EventFormat, TruthEvent
from .io import reader_factory, writer_factory
from .io.schema import CLASSIFICATION_KEYS
from .task import TaskManager
from .utils.globals import STD_PARTICLE_NAME
from .utils.logger import logger
from .utils.stopwatch import StopwatchManager
from .version import __version__

__all__ = ["Driver"]


class Driver:
    """Central driver.

    Processes the global configuration and runs the appropriate modules:
      1. Load an entry
      2. Refresh the event and the truth record
      3. Run the tasks
      4. Write to file

    It takes a configuration dictionary of the form:

    .. code-block:: yaml

        base:
          <Base driver configuration>
        io:
          reader:
            <Reader configuration>
          writer:
            <Writer configuration (optional)>
        tasks:
          <Tasks, keyed by name>
    """

    def __init__(self, cfg):
        """Initializes the class attributes.

        Parameters
        ----------
        cfg : dict
            Global configuration dictionary
        """
        self.watch = StopwatchManager()
        self.watch.initialize(["iteration", "read", "tasks", "write"])

        base, io, tasks = self.process_config(**cfg)

        # Initialize the input/output
        self.reader = reader_factory(io["reader"])
        self.writer = None
        if io.get("writer") is not None:
            self.writer = writer_factory(io["writer"])

        # Initialize the tasks
        self.tasks = TaskManager(tasks)

        # The event lives for the whole run, it is created on the first entry
        self.event = None
        self.num_processed = 0

    def process_config(self, io, base=None, tasks=None):
        """Reads the configuration and dumps it to the logger.

        Parameters
        ----------
        io : dict
            I/O configuration dictionary
        base : dict, optional
            Base driver configuration dictionary
        tasks : dict, optional
            Task configuration dictionary

        Returns
        -------
        base : dict
            Base driver configuration dictionary
        io : dict
            I/O configuration dictionary
        tasks : dict
            Task configuration dictionary
        """
        base = base or {}
        tasks = tasks or {}

        # Set the verbosity of the logger
        verbosity = base.get("verbosity", "info")
        logger.setLevel(verbosity.upper())

        # Dump the configuration
        assert "reader" in io, "Must specify a `reader` in the `io` block."
        cfg = {"base": base, "io": io, "tasks": tasks}
        logger.info("Release version: %s\n", __version__)
        logger.info("$CONFIG:\n%s", yaml.dump(cfg, default_flow_style=None))

        return base, io, tasks

    def __len__(self):
        """Number of entries to process."""
        return len(self.reader)

    def run(self):
        """Loop over all the entries to process.

        Raises
        ------
        FatalError
            If a task cannot be set up. The run stops at the faulty entry.
        """
        for entry in range(len(self)):
            try:
                self.process(entry)

            except FatalError as err:
                logger.critical(
                    "Fatal error at entry %d, stopping the run: %s", entry, err
                )
                raise

        self.log_summary()

    def process(self, entry):
        """Process one entry.

        Parameters
        ----------
        entry : int
            Index of the entry in the reader

        Returns
        -------
        dict
            Dictionary of data products of the entry after all the tasks
        """
        self.watch.start("iteration")
        try:
            # Load the entry and build its truth record
            self.watch.start("read")
            entry_data = self.reader[entry]
            data = self.load_event(entry_data)
            self.watch.stop("read")

            # Run the tasks
            self.watch.start("tasks")
            self.tasks(data)
            self.watch.stop("tasks")

            # Write the output
            self.watch.start("write")
            if self.writer is not None:
                self.writer(data)
            self.watch.stop("write")

        finally:
            # A failed entry must not leave timers running
            for key in self.watch.keys():
                if self.watch.running(key):
                    self.watch.stop(key)

        self.num_processed += 1
        logger.debug(
            "Processed entry %d in %.3f s.",
            data["index"],
            self.watch.time("iteration").wall,
        )

        return data

    def load_event(self, entry_data):
        """Loads the products of an entry into the event, builds the
        truth record.

        Parameters
        ----------
        entry_data : dict
            Dictionary of data products read from file

        Returns
        -------
        dict
            Dictionary with the entry `index`, the `event` and the `mc_event`
        """
        index = entry_data["index"]
        fmt = self.reader.format
        if fmt is EventFormat.FLAT:
            products = {
                STD_PARTICLE_NAME: ObjectList(entry_data[STD_PARTICLE_NAME], MCParticle)
            }
        else:
            products = {}

        if self.event is None:
            self.event = Event(fmt, products, index)
        else:
            self.event.load(products, index)

        if fmt is EventFormat.FLAT:
            mc_event = TruthEvent.from_particles(
                self.event.find_object(STD_PARTICLE_NAME)
            )
        else:
            classification = {
                k: entry_data[k] for k in CLASSIFICATION_KEYS if k in entry_data
            }
            mc_event = TruthEvent(
                entry_data["tracks"], entry_data["num_primaries"], **classification
            )

        return {"index": index, "event": self.event, "mc_event": mc_event}

    def log_summary(self):
        """Dumps the execution time of each task to the logger."""
        logger.info("Processed %d entries.", self.num_processed)
        if self.num_processed == 0:
            return

        for key in self.tasks.watch.keys():
            wall = self.tasks.watch.time_sum(key).wall
            logger.info(
                "  - %s: %.3f s (%.3f ms/entry)",
                key,
                wall,
                1e3 * wall / self.num_processed,
            )

        total = self.watch.time_sum("iteration").wall
        logger.info(
            "Total: %.3f s (%.3f ms/entry)", total, 1e3 * total / self.num_processed
        )

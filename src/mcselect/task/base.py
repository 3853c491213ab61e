"""Contains base class of all event tasks."""

from abc import ABC, abstractmethod

__all__ = ["TaskBase"]


class TaskBase(ABC):
    """Base class of all event tasks.

    A task is executed once per event by the :class:`TaskManager`. It is
    given the data products it declares it needs and returns a (possibly
    empty) dictionary of new data products.

    Attributes
    ----------
    name : str
        Name of the task as defined in the configuration file
    aliases : Tuple[str]
        Alternative acceptable names for a task
    """

    # Name of the task (as specified in the configuration)
    name = None

    # Alternative allowed names of the task
    aliases = ()

    # Set of (key, required) pairs which define the data the task needs
    _keys = ()

    # Upstream tasks which must run before this one
    _upstream = ()

    @property
    def keys(self):
        """Dictionary of (key, necessity) pairs which determine which data keys
        are needed/optional for the task to run.

        Returns
        -------
        Dict[str, bool]
            Dictionary of (key, necessity) pairs to be used
        """
        return dict(self._keys)

    def __call__(self, data):
        """Calls the task on one event.

        Parameters
        ----------
        data : dict
            Dictionary of data products

        Returns
        -------
        dict
            Update to the input dictionary
        """
        # Fetch the input dictionary
        data_filter = {}
        for key, req in self._keys:
            # If this key is needed, check that it exists
            assert not req or key in data, (
                f"Task `{self.name}` is missing an essential input to be "
                f"used: `{key}`."
            )

            # Append
            if key in data:
                data_filter[key] = data[key]

        # Run the task
        return self.process(data_filter)

    @abstractmethod
    def process(self, data):
        """Place-holder method to be defined in each task.

        Parameters
        ----------
        data : dict
            Dictionary of data products
        """
        raise NotImplementedError

"""Typed exceptions raised when a task cannot be set up.

Any of these errors terminates the processing of the run: the driver logs
them and stops iterating over events. Malformed elements found while
processing an event are not errors, they are simply skipped.
"""

__all__ = [
    "FatalError",
    "SetupError",
    "RegistryError",
    "MissingInputError",
    "InputTypeError",
]


class FatalError(Exception):
    """Base exception for all errors which abort the run."""


class SetupError(FatalError):
    """Raised when the event or the truth source is not provided to a task."""


class RegistryError(FatalError):
    """Raised when an object is published under a name already in use."""

    def __init__(self, name):
        """Initialize with the name of the conflicting object.

        Parameters
        ----------
        name : str
            Name of the object which is already registered
        """
        self.name = name
        super().__init__(f"The output array {name} is already present in the event!")


class MissingInputError(FatalError):
    """Raised when a required input collection is not found in the event."""


class InputTypeError(FatalError):
    """Raised when an input collection does not hold the expected class."""

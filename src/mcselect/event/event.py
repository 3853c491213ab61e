"""Module with the event object handed to the tasks.

The event owns a registry of named objects. Input data products are loaded
into it for every entry, while the objects published by the tasks persist
for the whole run so that consumers can keep a reference to them.
"""

from enum import Enum

from mcselect.data import ObjectList
from mcselect.errors import RegistryError

__all__ = ["EventFormat", "Event"]


class EventFormat(Enum):
    """Enumerates the formats in which the truth information can come."""

    TRUTH = "truth"
    FLAT = "flat"

    @classmethod
    def parse(cls, value):
        """Parses a format from its name.

        Parameters
        ----------
        value : Union[str, bytes, EventFormat]
            Name of the format

        Returns
        -------
        EventFormat
            Format enumerator
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bytes):
            value = value.decode()

        try:
            return cls(value.lower())

        except ValueError as err:
            raise ValueError(
                f"Event format not recognized: {value}. Must be one of "
                f"{[f.value for f in cls]}."
            ) from err


class Event:
    """Event-level registry of named objects.

    Attributes
    ----------
    format : EventFormat
        Format of the truth information provided with the events
    index : int
        Index of the entry currently loaded
    """

    def __init__(self, fmt, products=None, index=-1):
        """Initialize the event.

        Parameters
        ----------
        fmt : Union[str, EventFormat]
            Format of the truth information provided with the events
        products : Dict[str, object], optional
            Input data products of the first entry
        index : int, default -1
            Index of the entry
        """
        self.format = EventFormat.parse(fmt)
        self._published = {}
        self._products = {}
        self.load(products or {}, index)

    def load(self, products, index=-1):
        """Replace the input data products with those of a new entry.

        Objects published by the tasks are left untouched. Input lists which
        were already loaded are refilled in place, so that references to
        them remain valid from one entry to the next.

        Parameters
        ----------
        products : Dict[str, object]
            Input data products of the entry
        index : int, default -1
            Index of the entry
        """
        new_products = {}
        for name, product in products.items():
            if name in self._published:
                raise RegistryError(name)

            current = self._products.get(name)
            if isinstance(current, ObjectList) and isinstance(product, list):
                current[:] = product
                product = current
            new_products[name] = product

        self._products = new_products
        self.index = index

    def find_object(self, name):
        """Fetches an object from the registry.

        Parameters
        ----------
        name : str
            Name of the object

        Returns
        -------
        object
            Registered object, `None` if there is no object with that name
        """
        if name in self._published:
            return self._published[name]

        return self._products.get(name)

    def add_object(self, obj):
        """Publishes an object in the registry under its `name` attribute.

        Parameters
        ----------
        obj : object
            Object to register, must have a `name` attribute

        Raises
        ------
        RegistryError
            If there is already an object registered under that name
        """
        name = obj.name
        if self.find_object(name) is not None:
            raise RegistryError(name)

        self._published[name] = obj

    def keys(self):
        """Names of all the objects in the registry.

        Returns
        -------
        List[str]
            Names of the input products followed by the published objects
        """
        return list(self._products) + list(self._published)

    def __contains__(self, name):
        return self.find_object(name) is not None

    def __repr__(self):
        return (
            f"Event(format={self.format.value!r}, index={self.index}, "
            f"objects={self.keys()})"
        )

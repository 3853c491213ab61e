"""Module with class objects which represent object lists."""

__all__ = ["ObjectList", "NamedObjectList"]


class ObjectList(list):
    """List with a default object used to type it when it is empty.

    Attributes
    ----------
    default : object
        Default object class to use to type the list, if it is empty
    """

    def __init__(self, object_list, default):
        """Initialize the list and the default value.

        Parameters
        ----------
        object_list : List[object]
            Object list
        default : object
            Default object class to use to type the list, if it is empty
        """
        # Initialize the underlying list
        super().__init__(object_list)

        # Store the default object class
        self.default = default

    @property
    def element_class(self):
        """Class of the objects stored in the list.

        Returns
        -------
        type
            Class of the objects in the list
        """
        return self.default if isinstance(self.default, type) else type(self.default)


class NamedObjectList(ObjectList):
    """Object list which can be published in an event under its name.

    Attributes
    ----------
    name : str
        Name under which the list is registered
    """

    def __init__(self, name, default, object_list=()):
        """Initialize the named list.

        Parameters
        ----------
        name : str
            Name under which the list is registered
        default : object
            Default object class to use to type the list, if it is empty
        object_list : List[object], optional
            Initial content of the list
        """
        super().__init__(object_list, default)
        self.name = name

    def __repr__(self):
        return f"{self.__class__.__name__}(name={self.name!r}, size={len(self)})"

"""Contains functions needed to instantiate a class from a dictionary.

This allows to generically convert a YAML block into an instantiated task,
reader or writer with all the appropriate checks that the class exists and is
provided with appropriate arguments.
"""

from copy import deepcopy

from .logger import logger

__all__ = ["module_dict", "instantiate"]


def module_dict(module):
    """Converts a module into a dictionary which maps class names onto classes.

    Parameters
    ----------
    module : module
        Module from which to fetch the classes

    Returns
    -------
    dict
        Dictionary which maps acceptable class names to classes themselves
    """
    # Loop over the public classes of the module
    mapping = {}
    cls_names = getattr(module, "__all__", dir(module))
    for cls_name in cls_names:
        if cls_name[0] == "_":
            continue

        # Only consider classes which belong to the module of interest
        cls = getattr(module, cls_name)
        if not hasattr(cls, "__module__") or module.__name__ not in cls.__module__:
            continue

        # Store the class name and its configuration name
        mapping[cls_name] = cls
        if getattr(cls, "name", None):
            mapping[cls.name] = cls

        # Aliases are allowed but should be avoided
        for alias in getattr(cls, "aliases", ()):
            mapping[alias] = cls

    return mapping


def instantiate(mapping, cfg, **kwargs):
    """Instantiates a class based on a configuration dictionary and a
    dictionary of possible classes to chose from.

    Supports the following YAML structure (parsed as a dictionary):

    .. code-block:: yaml

        block:
          name: class_name
          kwarg_1: value_1
          kwarg_2: value_2

    Parameters
    ----------
    mapping : dict
        Dictionary which maps a class name onto a class
    cfg : Union[str, dict]
        Configuration dictionary, or simply the name of the class
    **kwargs : dict, optional
        Additional parameters to pass to the class

    Returns
    -------
    object
        Instantiated object
    """
    # A string is a class name with no parameters
    if isinstance(cfg, str):
        cfg = {"name": cfg}

    # Get the name of the class, check that it exists
    config = deepcopy(cfg)
    assert "name" in config, "Could not find the name of the class under `name`"

    class_name = config.pop("name")
    if class_name not in mapping:
        raise ValueError(
            f"Could not find '{class_name}' in the dictionary which maps "
            f"names to classes. Available names: {list(mapping.keys())}"
        )

    # Merge the top-level parameters with the additional keyword arguments
    for k in config:
        assert k not in kwargs, (
            f"The keyword argument {k} is provided twice. Ambiguous."
        )
    kwargs.update(config)

    # Intialize
    cls = mapping[class_name]
    try:
        return cls(**kwargs)

    except Exception as err:
        logger.error(
            "Failed to instantiate %s with these arguments:\n  - kwargs: %s",
            cls.__name__,
            kwargs,
        )

        raise err

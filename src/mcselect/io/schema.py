"""Conversion between data classes and HDF5 structured arrays."""

from dataclasses import fields

import numpy as np

from mcselect.data import MCParticle, MCTrack

__all__ = [
    "PRODUCT_CLASSES",
    "CLASSIFICATION_KEYS",
    "class_dtype",
    "to_array",
    "from_array",
]

# Class of the objects stored in each product, for each event format
PRODUCT_CLASSES = {"truth": ("tracks", MCTrack), "flat": ("mcparticles", MCParticle)}

# Optional per-track classification datasets of truth files
CLASSIFICATION_KEYS = (
    "physical_primary",
    "secondary_from_weak_decay",
    "secondary_from_material",
)


def class_dtype(obj_class):
    """Builds the structured data type used to store a data class.

    Parameters
    ----------
    obj_class : type
        Data class to store

    Returns
    -------
    np.dtype
        Structured data type with one field per attribute
    """
    fixed = dict(obj_class._fixed_length_attrs)
    dtype = []
    for field in fields(obj_class):
        if field.name in fixed:
            size, sub_dtype = fixed[field.name]
            dtype.append((field.name, sub_dtype, (size,)))
        elif field.type in (float, "float"):
            dtype.append((field.name, np.float64))
        else:
            dtype.append((field.name, np.int64))

    return np.dtype(dtype)


def to_array(objects, obj_class):
    """Converts a list of data class objects into a structured array.

    Parameters
    ----------
    objects : List[object]
        List of data class objects
    obj_class : type
        Class of the objects

    Returns
    -------
    np.ndarray
        Structured array with one row per object
    """
    dtype = class_dtype(obj_class)
    array = np.empty(len(objects), dtype=dtype)
    for i, obj in enumerate(objects):
        array[i] = tuple(getattr(obj, name) for name in dtype.names)

    return array


def from_array(array, obj_class):
    """Rebuilds a list of data class objects from a structured array.

    Parameters
    ----------
    array : np.ndarray
        Structured array with one row per object
    obj_class : type
        Class of the objects

    Returns
    -------
    List[object]
        List of data class objects
    """
    names = array.dtype.names
    objects = []
    for row in array:
        obj_dict = {}
        for name in names:
            value = row[name]
            obj_dict[name] = value.item() if np.ndim(value) == 0 else np.array(value)
        objects.append(obj_class(**obj_dict))

    return objects

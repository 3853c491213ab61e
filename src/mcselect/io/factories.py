"""Functions that instantiate IO tools classes from configuration blocks."""

from mcselect.utils.factory import instantiate, module_dict

from . import read, write

__all__ = ["reader_factory", "writer_factory"]


def reader_factory(reader_cfg):
    """Instantiates a reader based on a configuration.

    Parameters
    ----------
    reader_cfg : dict
        Reader configuration dictionary

    Returns
    -------
    object
        Reader object
    """
    return instantiate(module_dict(read), reader_cfg)


def writer_factory(writer_cfg):
    """Instantiates a writer based on a configuration.

    Parameters
    ----------
    writer_cfg : dict
        Writer configuration dictionary

    Returns
    -------
    object
        Writer object
    """
    return instantiate(module_dict(write), writer_cfg)

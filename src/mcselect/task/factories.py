"""Construct a task class from its name."""

from mcselect.utils.factory import instantiate, module_dict

__all__ = ["task_dict", "task_factory"]


def task_dict():
    """Builds a dictionary of available tasks.

    The task modules are imported here, as they depend on this package.

    Returns
    -------
    dict
        Dictionary which maps task names onto task classes
    """
    from mcselect import select

    tasks = {}
    for module in [select]:
        tasks.update(**module_dict(module))

    return tasks


def task_factory(name, cfg):
    """Instantiates a task from a configuration dictionary.

    Parameters
    ----------
    name : str
        Name of the task. Used as the class name unless the configuration
        specifies one under `name`
    cfg : dict
        Task configuration

    Returns
    -------
    TaskBase
         Initialized task object
    """
    cfg = dict(cfg or {})
    cfg.setdefault("name", name)

    return instantiate(task_dict(), cfg)

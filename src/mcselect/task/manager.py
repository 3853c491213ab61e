"""Manages the operation of the event tasks."""

from collections import OrderedDict
from copy import deepcopy

from mcselect.utils.stopwatch import StopwatchManager

from .factories import task_factory

__all__ = ["TaskManager"]


class TaskManager:
    """Manager in charge of handling the event tasks.

    It loads all the task objects once and feeds them each event.
    """

    def __init__(self, cfg):
        """Initialize the task manager.

        Parameters
        ----------
        cfg : dict
            Task configurations, keyed by task name
        """
        # Fetch the priority of each task (higher runs first, default -1)
        cfg = deepcopy(cfg)
        priorities = {}
        for key, block in cfg.items():
            block = block or {}
            priorities[key] = block.pop("priority", -1)
            cfg[key] = block

        # Add the tasks in decreasing order of priority (stable sort)
        self.watch = StopwatchManager()
        self.modules = OrderedDict()
        for key in sorted(cfg, key=lambda k: -priorities[k]):
            self.watch.initialize(key)
            self.modules[key] = task_factory(key, cfg[key])

            # Check that the upstream tasks are scheduled before this one
            for task in self.modules[key]._upstream:
                assert task in self.modules and task != key, (
                    f"Task `{key}` is missing an essential upstream task: "
                    f"`{task}`."
                )

    def __call__(self, data):
        """Pass one event through the tasks.

        The products returned by each task are added to the data dictionary
        in place, so that they are visible to the next tasks.

        Parameters
        ----------
        data : dict
            Dictionary of data products
        """
        for key, module in self.modules.items():
            self.watch.start(key)
            try:
                result = module(data)
            finally:
                self.watch.stop(key)

            if result is not None:
                data.update(result)

"""Timers used to profile the tasks executed on each event."""

import time
from dataclasses import dataclass

__all__ = ["Time", "StopwatchManager"]


@dataclass
class Time:
    """Wall and CPU time pair.

    Attributes
    ----------
    wall : float
         Wall time in seconds
    cpu : float
         CPU time in seconds
    """

    wall: float = 0.0
    cpu: float = 0.0

    def __add__(self, other):
        return Time(self.wall + other.wall, self.cpu + other.cpu)

    def __sub__(self, other):
        return Time(self.wall - other.wall, self.cpu - other.cpu)

    @classmethod
    def current(cls):
        """Returns the current wall and CPU times.

        Returns
        -------
        Time
           Current time
        """
        return cls(time.time(), time.process_time())


class StopwatchManager:
    """Keeps one timer per named process.

    Each timer records the duration of its last start/stop cycle and the sum
    of all of them.
    """

    def __init__(self):
        """Initalize the private timer dictionaries."""
        self._start = {}
        self._last = {}
        self._total = {}

    def keys(self):
        """List of initialized timer names."""
        return self._total.keys()

    def initialize(self, key):
        """Initialize (or reset) one or more timers.

        Parameters
        ----------
        key : Union[str, List[str]]
            Key or list of keys to initialize a timer for
        """
        keys = [key] if isinstance(key, str) else key
        for k in keys:
            self._start[k] = None
            self._last[k] = Time()
            self._total[k] = Time()

    def start(self, key):
        """Starts the timer of a process.

        Parameters
        ----------
        key : str
            Key for which to start the clock
        """
        if key not in self._start:
            raise KeyError(f"No stopwatch initialized under the name: {key}")
        if self._start[key] is not None:
            raise ValueError("Cannot restart a watch that has not been stopped.")

        self._start[key] = Time.current()

    def stop(self, key):
        """Stops the timer of a process.

        Parameters
        ----------
        key : str
            Key for which to stop the clock
        """
        if key not in self._start:
            raise KeyError(f"No stopwatch initialized under the name: {key}")
        if self._start[key] is None:
            raise ValueError("Cannot stop a watch that has not been started.")

        self._last[key] = Time.current() - self._start[key]
        self._total[key] = self._total[key] + self._last[key]
        self._start[key] = None

    def running(self, key):
        """Whether the timer of a process is currently started."""
        return self._start.get(key) is not None

    def time(self, key):
        """Time of the last start/stop cycle of a process."""
        return self._last[key]

    def time_sum(self, key):
        """Sum of the times of all the start/stop cycles of a process."""
        return self._total[key]

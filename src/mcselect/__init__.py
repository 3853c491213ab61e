"""Top-level module of the MC truth particle selection source code."""

# Import main workflow entry point
from .driver import Driver
from .version import __version__

# Import the selection task
from .select import MCTrackSelector

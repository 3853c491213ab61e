"""Monte-Carlo truth particle selection.

- `MCTrackSelector`: task which selects the MC particles of each event
- `ParticleCuts`: particle-level cuts shared by the selection strategies
- `TruthTrackConverter`, `FlatParticleCopier`: the two ways of filling the
  selected particle collection, depending on the format of the events
"""

from .cuts import ParticleCuts
from .selector import MCTrackSelector
from .strategy import FlatParticleCopier, TruthTrackConverter

__all__ = ["MCTrackSelector"]

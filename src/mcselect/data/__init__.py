"""Data structures exchanged between the tasks.

- `MCTrack`: simulation truth track, as stored in a truth event
- `MCParticle`: normalized MC particle (flat collections, selected particles)
- `MCParticleFlag`: bits of the MC particle classification bitfield
- `ObjectList`, `NamedObjectList`: typed (and named) lists of objects
- `IndexMap`: growable map from input indexes to output indexes
"""

from .index_map import IndexMap
from .list import NamedObjectList, ObjectList
from .particle import MCParticle, MCParticleFlag
from .track import MCTrack

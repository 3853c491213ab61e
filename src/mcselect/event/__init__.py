"""Event-level objects provided by the host to the tasks.

- `Event`: registry of named objects, tagged with the format of its content
- `EventFormat`: formats in which the truth information can come
- `TruthEvent`: simulation truth stack of one event
"""

from .event import Event, EventFormat
from .truth import TruthEvent

"""Event task framework.

- `TaskBase`: base class of all the tasks executed on each event
- `TaskManager`: builds the configured tasks and runs them on each event
- `task_factory`: instantiates a task from its configuration block
"""

from .base import TaskBase
from .factories import task_factory
from .manager import TaskManager

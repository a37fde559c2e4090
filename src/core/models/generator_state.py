"""Generator state enumeration for tracking sample production."""
from enum import Enum


class GeneratorState(Enum):
    """Enumeration of all possible generator states."""
    RUNNING = "running"
    STOPPED = "stopped"

"""
Reading data model.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Reading:
    """
    Data class representing a single temperature sample.
    """
    timestamp: int  # epoch millis
    value: float

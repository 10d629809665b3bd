"""Time operations"""

from .delay import delay
from .measure import DEFAULT_POLICY, MeasurePolicy, measure

__all__ = (
    "delay",
    "measure",
    "MeasurePolicy",
    "DEFAULT_POLICY",
)

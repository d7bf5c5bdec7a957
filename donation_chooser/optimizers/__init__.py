"""Share selection strategy implementations."""

from .base import SelectionStrategy
from .bounded import BoundedKnapsackStrategy
from .expanded import ExpandedKnapsackStrategy
from .milp import MilpStrategy

__all__ = [
    "SelectionStrategy",
    "BoundedKnapsackStrategy",
    "ExpandedKnapsackStrategy",
    "MilpStrategy",
]

"""Configuration for the donation chooser."""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional

StrategyName = Literal["expanded", "bounded", "milp"]

DEFAULT_DONATION = "1000.00"
DEFAULT_MAX_TABLE_CELLS = 50_000_000


class Objective(Enum):
    """What the donation should maximize."""

    MAXIMIZE_GAINS = "maximize-gains"
    MAXIMIZE_LOSSES = "maximize-losses"

    @property
    def sign(self) -> int:
        return -1 if self is Objective.MAXIMIZE_LOSSES else 1


@dataclass(frozen=True)
class DonationConfig:
    """Options for a single donation calculation."""

    objective: Objective = Objective.MAXIMIZE_GAINS
    strategy: StrategyName = "expanded"
    quote_decimals: bool = False
    max_table_cells: Optional[int] = DEFAULT_MAX_TABLE_CELLS

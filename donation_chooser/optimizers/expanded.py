"""Per-share 0/1 knapsack strategy."""

from typing import Sequence

from ..expansion import expand_lots, recombine_lots
from ..knapsack import solve_01
from .base import SelectionStrategy


class ExpandedKnapsackStrategy(SelectionStrategy):
    """Expand every lot into single shares and solve a 0/1 knapsack over them.

    The table has one row per share, so memory grows with the total share
    count times the donation budget.
    """

    def choose_shares(
        self,
        capacity: int,
        prices: Sequence[int],
        values: Sequence[int],
        shares: Sequence[int],
    ) -> list[tuple[int, int]]:
        items = expand_lots(shares, prices, values)
        chosen = solve_01(
            capacity,
            [item.weight for item in items],
            [item.value for item in items],
            max_cells=self.max_table_cells,
        )
        return recombine_lots([items[k] for k in chosen])

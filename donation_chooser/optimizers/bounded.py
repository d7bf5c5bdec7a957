"""Per-lot bounded knapsack strategy."""

from typing import Sequence

from ..knapsack import solve_bounded
from .base import SelectionStrategy


class BoundedKnapsackStrategy(SelectionStrategy):
    """Solve a bounded knapsack with one table row per lot.

    Chooses the same shares as ExpandedKnapsackStrategy while keeping the
    table as small as the number of lots.
    """

    def choose_shares(
        self,
        capacity: int,
        prices: Sequence[int],
        values: Sequence[int],
        shares: Sequence[int],
    ) -> list[tuple[int, int]]:
        counts = solve_bounded(
            capacity, prices, values, shares, max_cells=self.max_table_cells
        )
        return self._pairs_from_counts(counts)
